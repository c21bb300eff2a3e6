import numpy as np

from .base import DirectedEvidence
from .constants import DEFAULTS
from ..bam import cigar as _cigar
from ..bam import read as _read
from ..breakpoint import BreakendSummary, BreakpointSummary
from ..constants import DIRECTION, DNA_BASES, EVIDENCE_TYPE, PAIR_ORIENTATION, SAM_TAG, complement
from ..error import InvalidEvidenceError, MissingTagError, UnsupportedConfigurationError


def _check_fr_orientation(params):
    if params.pair_orientation not in [None, PAIR_ORIENTATION.FR]:
        raise UnsupportedConfigurationError(
            'handling of orientations other than illumina (FR) read pair orientation is not implemented',
            params.pair_orientation)


def matches_adapter_sequence(adapter, read_seq, read_start_offset, read_direction, complement_adapter):
    """
    compare the read bases, starting at some offset and moving in the given direction, to the adapter

    ambiguous read bases match any adapter base. Reaching the end of the read before the end of the adapter
    is still a match

    Args:
        adapter (str): the adapter sequence
        read_seq (str): the read sequence
        read_start_offset (int): 0-based index of the read base compared to the first adapter base
        read_direction (int): 1 to move forward through the read, -1 to move backwards
        complement_adapter (bool): compare to the complement of the adapter bases

    Example:
        >>> matches_adapter_sequence('AGATCG', 'TTTTAGATC', 4, 1, False)
        True
    """
    if complement_adapter:
        adapter = complement(adapter)
    i = 0
    while i < len(adapter):
        pos = read_start_offset + i * read_direction
        if pos < 0 or pos >= len(read_seq):
            break
        read_base = read_seq[pos].upper()
        if read_base in DNA_BASES and read_base != adapter[i].upper():
            return False
        i += 1
    return True


class SoftClipEvidence(DirectedEvidence):
    """
    a read which is soft clipped at the breakend
    """
    evidence_type = EVIDENCE_TYPE.SOFT_CLIP

    @classmethod
    def create(cls, direction, read, realigned=None, params=None):
        """
        Args:
            direction (DIRECTION): the side of the read which is soft clipped
            read (pysam.AlignedSegment): the soft clipped read
            realigned (pysam.AlignedSegment): optional alignment of the soft clipped bases
            params (SvallocNamespace): evidence settings, see :attr:`~svalloc.evidence.constants.DEFAULTS`

        Returns:
            SoftClipEvidence: the soft clip (or realigned soft clip when the realignment is unique)

        Raises:
            InvalidEvidenceError: the read is not mapped, has no sequence or is not soft clipped on the given side
        """
        params = DEFAULTS if params is None else params
        if read is None:
            raise InvalidEvidenceError('read is None')
        try:
            direction = DIRECTION.enforce(direction)
        except KeyError:
            raise InvalidEvidenceError('invalid breakend direction', direction)
        if read.is_unmapped:
            raise InvalidEvidenceError('read {} is unmapped'.format(read.query_name))
        if not read.query_sequence:
            raise InvalidEvidenceError('read {} is missing sequence information'.format(read.query_name))
        if _read.softclip_length(read, direction) == 0:
            raise InvalidEvidenceError('read {} is not {} soft clipped'.format(read.query_name, DIRECTION.reverse(direction)))
        if realigned is not None and not realigned.is_unmapped and realigned.mapping_quality >= params.realignment_min_mapq:
            return RealignedSoftClipEvidence(direction, read, realigned)
        return SoftClipEvidence(direction, read)

    def __init__(self, direction, read):
        self.read = read
        pos = _read.alignment_end(read) if direction == DIRECTION.FORWARD else _read.alignment_start(read)
        DirectedEvidence.__init__(self, BreakendSummary(read.reference_name, direction, pos))

    @property
    def direction(self):
        return self.location.direction

    @classmethod
    def soft_clip_evidence_id(cls, direction, read):
        return '{}{}{}'.format(direction, read.query_name, _read.read_number_suffix(read))

    def evidence_id(self):
        return self.soft_clip_evidence_id(self.direction, self.read)

    def underlying_read(self):
        return self.read

    def soft_clip_length(self):
        return _read.softclip_length(self.read, self.direction)

    def breakend_sequence(self):
        return _read.softclip_bases(self.read, self.direction)

    def breakend_quality(self):
        return _read.softclip_qualities(self.read, self.direction)

    def mapping_quality(self):
        return self.read.mapping_quality

    def aligned_percent_identity(self):
        """
        0-100 scaled percentage identity of the aligned read bases, computed from the edit distance (NM) tag

        Raises:
            UnsupportedConfigurationError: the read only has the MD tag
            MissingTagError: the read has neither tag
        """
        if self.read.has_tag(SAM_TAG.EDIT_DISTANCE):
            nm = self.read.get_tag(SAM_TAG.EDIT_DISTANCE)
            aligned = _read.aligned_base_count(self.read)
            matches = aligned - nm + _cigar.inserted_bases(self.read.cigartuples) + _cigar.deleted_bases(self.read.cigartuples)
            return 100.0 * matches / aligned
        if self.read.has_tag(SAM_TAG.MISMATCH_STRING) and self.read.get_tag(SAM_TAG.MISMATCH_STRING):
            raise UnsupportedConfigurationError(
                'calculation of percent identity from reads with an MD tag but no NM tag is not implemented',
                self.read.query_name)
        raise MissingTagError('read is missing the NM tag', self.read.query_name)

    def average_clip_quality(self):
        qual = self.breakend_quality()
        if not qual:
            return 0
        return float(np.mean(qual))

    def meets_evidence_criteria(self, params=None):
        """
        Determines whether this evidence provides support for a putative structural variant

        Args:
            params (SvallocNamespace): evidence settings, see :attr:`~svalloc.evidence.constants.DEFAULTS`
        """
        params = DEFAULTS if params is None else params
        # checks stop at the first failure so rejected reads never reach the tag or orientation checks
        return (
            self.mapping_quality() >= params.min_read_mapq
            and self.soft_clip_length() >= params.min_clip_length
            and self.aligned_percent_identity() >= params.min_anchor_identity
            and not self.is_dovetailing(params)
            and not self.is_adapter_soft_clip(params)
        )

    def is_adapter_soft_clip(self, params=None):
        """
        Determine whether this soft clip is caused by read-through into adapter sequence
        """
        params = DEFAULTS if params is None else params
        if not params.adapter_sequences:
            return False
        _check_fr_orientation(params)
        # the 5' end of the read cannot read through into the adapter
        if self.direction == DIRECTION.FORWARD and self.read.is_reverse:
            return False
        if self.direction == DIRECTION.BACKWARD and not self.read.is_reverse:
            return False
        for adapter in params.adapter_sequences:
            if self._matches_adapter_fr(adapter, params.max_adapter_mapped_bases):
                return True
        return False

    def _matches_adapter_fr(self, adapter, max_adapter_mapped_bases):
        seq = self.read.query_sequence
        clip = self.soft_clip_length()
        for i in range(0, max_adapter_mapped_bases + 1):
            if self.direction == DIRECTION.FORWARD:
                offset = len(seq) - clip - i
                if offset >= 0 and matches_adapter_sequence(adapter, seq, offset, 1, False):
                    return True
            else:
                offset = clip + i - 1
                if offset < len(seq) and matches_adapter_sequence(adapter, seq, offset, -1, True):
                    return True
        return False

    def is_dovetailing(self, params=None):
        """
        Dovetailing reads do not support structural variants, they are caused by a fragment size less than
        the read length

        ::

               =======>
            <=======
        """
        params = DEFAULTS if params is None else params
        if not self.read.is_paired or self.read.mate_is_unmapped:
            return False
        _check_fr_orientation(params)
        # dovetails happen on the 3' end of the read for FR
        return all([
            self.read.next_reference_id == self.read.reference_id,
            abs(self.read.reference_start - self.read.next_reference_start) <= params.dovetail_error_margin,
            (self.direction == DIRECTION.FORWARD and not self.read.is_reverse)
            or (self.direction == DIRECTION.BACKWARD and self.read.is_reverse),
        ])

    def __str__(self):
        return 'SoftClip len={} {} {}'.format(self.soft_clip_length(), repr(self.location), self.read.query_name)


class RealignedSoftClipEvidence(SoftClipEvidence):
    """
    a soft clip where the clipped bases have been realigned to the reference giving the remote breakend
    """
    evidence_type = EVIDENCE_TYPE.REALIGNED_SOFT_CLIP

    def __init__(self, direction, read, realigned):
        SoftClipEvidence.__init__(self, direction, read)
        self.realigned = realigned
        # the clipped bases continue on from the realignment start, or lead into the realignment end
        if (direction == DIRECTION.FORWARD) != realigned.is_reverse:
            remote = BreakendSummary(realigned.reference_name, DIRECTION.BACKWARD, _read.alignment_start(realigned))
        else:
            remote = BreakendSummary(realigned.reference_name, DIRECTION.FORWARD, _read.alignment_end(realigned))
        self.location = BreakpointSummary(self.location, remote)

    def evidence_id(self):
        return 'R' + SoftClipEvidence.evidence_id(self)

    def remote_mapq(self):
        return self.realigned.mapping_quality

    def score(self):
        return min(self.local_mapq(), self.remote_mapq())

    def meets_evidence_criteria(self, params=None):
        params = DEFAULTS if params is None else params
        return self.remote_mapq() >= params.realignment_min_mapq and SoftClipEvidence.meets_evidence_criteria(self, params)
