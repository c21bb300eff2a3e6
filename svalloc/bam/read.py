"""
helpers for reading the evidence related properties of pysam aligned segments

Positions returned by these functions are 1-based and inclusive
"""
from . import cigar as _cigar
from ..constants import DIRECTION, SAM_TAG, STRAND


def alignment_start(read):
    """the 1-based position of the first aligned reference base"""
    return read.reference_start + 1


def alignment_end(read):
    """the 1-based position of the last aligned reference base"""
    return read.reference_end


def read_length(read):
    """number of bases in the read sequence (soft clipped bases included, hard clipped bases excluded)"""
    return len(read.query_sequence) if read.query_sequence else 0


def start_softclip_length(read):
    return _cigar.start_softclip_length(read.cigartuples)


def end_softclip_length(read):
    return _cigar.end_softclip_length(read.cigartuples)


def softclip_length(read, direction):
    """
    the soft clipped bases on the side of the read corresponding to the breakend direction

    Args:
        read (pysam.AlignedSegment): the read
        direction (DIRECTION): forward for the end of the alignment, backward for the start
    """
    if DIRECTION.enforce(direction) == DIRECTION.FORWARD:
        return end_softclip_length(read)
    return start_softclip_length(read)


def softclip_bases(read, direction):
    length = softclip_length(read, direction)
    if not length:
        return ''
    if direction == DIRECTION.FORWARD:
        return read.query_sequence[-length:]
    return read.query_sequence[:length]


def softclip_qualities(read, direction):
    """
    Returns:
        :class:`list` of :class:`int`: the base qualities of the soft clipped bases or None if the read has no qualities
    """
    if read.query_qualities is None:
        return None
    length = softclip_length(read, direction)
    qual = list(read.query_qualities)
    if not length:
        return []
    if direction == DIRECTION.FORWARD:
        return qual[-length:]
    return qual[:length]


def aligned_base_count(read):
    """number of read bases between the start and end soft clipping"""
    return read_length(read) - start_softclip_length(read) - end_softclip_length(read)


def _reference_qualities(read):
    if read.query_qualities is None:
        return []
    qual = list(read.query_qualities)
    return qual[start_softclip_length(read):len(qual) - end_softclip_length(read)]


def max_reference_base_quality(read):
    return max(_reference_qualities(read), default=0)


def total_reference_base_quality(read):
    return sum(_reference_qualities(read))


def segment_index(read):
    """
    the index of the read within its template. Uses the FI tag when given, otherwise the read number
    """
    if read.has_tag(SAM_TAG.SEGMENT_INDEX):
        return read.get_tag(SAM_TAG.SEGMENT_INDEX)
    if read.is_paired and read.is_read2:
        return 1
    return 0


def read_number_suffix(read):
    """
    Example:
        '/1' for the first read of a pair, '/2' for the second and '' for unpaired reads
    """
    if not read.is_paired:
        return ''
    return '/1' if read.is_read1 else '/2'


def strand(read):
    return STRAND.NEG if read.is_reverse else STRAND.POS


def alignment_id(read):
    """
    string identifying where (and how) a read is aligned
    """
    return '{}:{}{}[{}]{}'.format(
        read.reference_name,
        alignment_start(read),
        strand(read),
        read.query_name,
        _cigar.convert_cigar_to_string(read.cigartuples)
    )


def read_pair_alignment_id(read):
    """
    string identifying where both the read and its mate are aligned
    """
    mate = '*'
    if read.is_paired and not read.mate_is_unmapped:
        mate = '{}:{}{}'.format(
            read.next_reference_name,
            read.next_reference_start + 1,
            STRAND.NEG if read.mate_is_reverse else STRAND.POS
        )
    return '{}/{}'.format(alignment_id(read), mate)


def read_key(read):
    """
    identity of the underlying read. Two evidence objects built over the same alignment record give the same key
    """
    return (read.query_name, read.query_sequence, read.reference_id, read.reference_start, read.flag)


def set_read_sequence(read, sequence):
    """
    replace the bases of a read while keeping its base qualities (pysam clears the qualities when the sequence is set)
    """
    qual = read.query_qualities
    read.query_sequence = sequence
    if qual is not None:
        read.query_qualities = qual
