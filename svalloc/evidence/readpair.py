from .base import DirectedEvidence
from .constants import DEFAULTS
from ..bam import read as _read
from ..breakpoint import BreakendSummary, BreakpointSummary
from ..constants import DIRECTION, EVIDENCE_TYPE
from ..error import InvalidEvidenceError


def read_pair_breakend(read, max_fragment_size):
    """
    the region where the breakpoint supported by a read (from a non-reference read pair) could be

    Args:
        read (pysam.AlignedSegment): the mapped read of the pair
        max_fragment_size (int): largest expected fragment size

    Returns:
        BreakendSummary: Forward if the read is on the positive strand, Backward otherwise

    Example:
        >>> read_pair_breakend(read, 1000)  # read mapped to 1:101-200 on the positive strand
        BreakendSummary(1:200-1100f)
    """
    start = _read.alignment_start(read)
    end = _read.alignment_end(read)
    if not read.is_reverse:
        return BreakendSummary(read.reference_name, DIRECTION.FORWARD, end, max(end, start + max_fragment_size - 1))
    low = max(1, end - max_fragment_size + 1)
    return BreakendSummary(read.reference_name, DIRECTION.BACKWARD, min(low, start), start)


class NonReferenceReadPair(DirectedEvidence):
    """
    a read pair where the locally mapped read supports a breakend because its mate is not aligned
    where expected
    """

    def __init__(self, local, remote, location):
        self.local = local
        self.remote = remote
        DirectedEvidence.__init__(self, location)

    @classmethod
    def _check_local(cls, local):
        if local is None:
            raise InvalidEvidenceError('read is None')
        if local.is_unmapped:
            raise InvalidEvidenceError('read {} is unmapped'.format(local.query_name))
        if not local.is_paired:
            raise InvalidEvidenceError('read {} is not paired'.format(local.query_name))

    def evidence_id(self):
        return '{}{}'.format(self.local.query_name, _read.read_number_suffix(self.local))

    def underlying_read(self):
        return self.local

    def local_read(self):
        return self.local

    def non_reference_read(self):
        return self.remote

    def breakend_quality(self):
        return None

    def meets_evidence_criteria(self, params=None):
        params = DEFAULTS if params is None else params
        return self.local.mapping_quality >= params.min_read_mapq

    def __str__(self):
        return '{} {} {}'.format(self.__class__.__name__, repr(self.location), self.local.query_name)


class UnmappedMateReadPair(NonReferenceReadPair):
    """
    a mapped read whose mate did not map. The mate sequence is the putative breakend sequence
    """
    evidence_type = EVIDENCE_TYPE.UNMAPPED_MATE

    def __init__(self, local, remote, params=None):
        """
        Args:
            local (pysam.AlignedSegment): the mapped read
            remote (pysam.AlignedSegment): the unmapped mate
            params (SvallocNamespace): evidence settings, see :attr:`~svalloc.evidence.constants.DEFAULTS`
        """
        params = DEFAULTS if params is None else params
        self._check_local(local)
        NonReferenceReadPair.__init__(self, local, remote, read_pair_breakend(local, params.max_fragment_size))

    def breakend_sequence(self):
        return self.remote.query_sequence if self.remote is not None else ''


class DiscordantReadPair(NonReferenceReadPair):
    """
    both reads of the pair are mapped but with an unexpected orientation, fragment size or contig
    """
    evidence_type = EVIDENCE_TYPE.DISCORDANT_PAIR

    def __init__(self, local, remote, params=None):
        """
        Args:
            local (pysam.AlignedSegment): the read whose breakend this evidence describes
            remote (pysam.AlignedSegment): the mapped mate
            params (SvallocNamespace): evidence settings, see :attr:`~svalloc.evidence.constants.DEFAULTS`

        Raises:
            InvalidEvidenceError: either read is unmapped or the local read is not paired
        """
        params = DEFAULTS if params is None else params
        self._check_local(local)
        if remote is None or remote.is_unmapped:
            raise InvalidEvidenceError('mate of read {} is not mapped'.format(local.query_name))
        location = BreakpointSummary(
            read_pair_breakend(local, params.max_fragment_size),
            read_pair_breakend(remote, params.max_fragment_size)
        )
        NonReferenceReadPair.__init__(self, local, remote, location)

    def breakend_sequence(self):
        return ''

    def remote_mapq(self):
        return self.remote.mapping_quality

    def score(self):
        return min(self.local_mapq(), self.remote_mapq())

    def meets_evidence_criteria(self, params=None):
        params = DEFAULTS if params is None else params
        return NonReferenceReadPair.meets_evidence_criteria(self, params) and self.remote_mapq() >= params.min_read_mapq
