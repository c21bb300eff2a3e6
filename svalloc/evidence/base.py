from ..bam import read as _read
from ..breakpoint import BreakpointSummary
from ..constants import EVIDENCE_TYPE


class DirectedEvidence:
    """
    base class for the closed set of evidence variants. Each variant sets :attr:`evidence_type` to one
    of :attr:`~svalloc.constants.EVIDENCE_TYPE` and implements the same fixed set of accessors

    Evidence objects are views over an alignment record, they do not copy or own the read
    """
    evidence_type = None

    def __init__(self, location):
        """
        Args:
            location (BreakendSummary): the breakend (or breakpoint) supported by this evidence
        """
        self.location = location

    def evidence_id(self):
        """
        Returns:
            str: identifier unique to this piece of evidence
        """
        raise NotImplementedError('abstract method')

    def is_breakpoint(self):
        return isinstance(self.location, BreakpointSummary)

    def is_read_pair(self):
        return EVIDENCE_TYPE.is_read_pair(self.evidence_type)

    def breakend_sequence(self):
        """the bases supporting the breakend which are not part of the local (reference) alignment"""
        raise NotImplementedError('abstract method')

    def breakend_quality(self):
        raise NotImplementedError('abstract method')

    def underlying_read(self):
        """
        Returns:
            pysam.AlignedSegment: the locally aligned read this evidence is derived from (None for calls)
        """
        raise NotImplementedError('abstract method')

    def score(self):
        """
        phred scaled support contributed by this evidence
        """
        return self.local_mapq()

    def local_mapq(self):
        return self.underlying_read().mapping_quality

    def local_base_length(self):
        return _read.aligned_base_count(self.underlying_read())

    def local_base_count(self):
        return self.local_base_length()

    def local_max_base_qual(self):
        return _read.max_reference_base_quality(self.underlying_read())

    def local_total_base_qual(self):
        return _read.total_reference_base_quality(self.underlying_read())

    def meets_evidence_criteria(self, params):
        raise NotImplementedError('abstract method')

    def allocation_identity(self):
        """
        keys used by the allocation cache to make sure a read (or read pair) only supports a single call

        Returns:
            :class:`tuple` of :class:`str`: the read (pair) identifier and the alignment identifier. None when the
            evidence is not derived from a read
        """
        read = self.underlying_read()
        if read is None:
            return None
        if self.is_read_pair():
            return read.query_name, _read.read_pair_alignment_id(read)
        return '{}#{}'.format(read.query_name, _read.segment_index(read)), _read.alignment_id(read)

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.evidence_id(), repr(self.location))
