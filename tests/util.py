import pysam

from svalloc.bam import cigar as _cigar
from svalloc.constants import SvallocNamespace
from svalloc.linear import LinearGenomicCoordinate

REFERENCE_NAMES = ['1', '2', '3']
REFERENCE_LENGTHS = [100000, 50000, 20000]

HEADER = pysam.AlignmentHeader.from_dict({
    'HD': {'VN': '1.0', 'SO': 'coordinate'},
    'SQ': [{'SN': name, 'LN': length} for name, length in zip(REFERENCE_NAMES, REFERENCE_LENGTHS)]
})


def resolve_settings(defaults, **kwargs):
    """
    snapshot a defaults namespace (environment overrides included) and override any values given as keyword
    arguments

    Raises:
        TypeError: a keyword argument is not a member of the defaults namespace
    """
    result = SvallocNamespace()
    for attr in defaults.keys():
        result.add(attr, defaults[attr])
    for attr, value in kwargs.items():
        if attr not in defaults.keys():
            raise TypeError('unrecognized keyword argument', attr)
        result[attr] = value
    return result


def build_linear(buffer=0):
    return LinearGenomicCoordinate(REFERENCE_NAMES, REFERENCE_LENGTHS, buffer=buffer)


def build_read(
    query_name='read1',
    query_sequence=None,
    reference_name='1',
    reference_start=100,
    cigar='10M',
    is_reverse=False,
    mapping_quality=60,
    edit_distance=0,
    query_qualities=None,
    is_unmapped=False,
    tags=None
):
    """
    build a real pysam read

    Args:
        reference_start (int): 1-based position of the first aligned base
        cigar (str): the cigar string
        edit_distance (int): value of the NM tag. The tag is not set when this is None
    """
    read = pysam.AlignedSegment(HEADER)
    cigar = _cigar.convert_string_to_cigar(cigar) if cigar else []
    read_length = sum([f for v, f in cigar if v in _cigar.QUERY_ALIGNED_STATES])
    if query_sequence is None:
        query_sequence = 'A' * read_length
    read.query_name = query_name
    read.query_sequence = query_sequence
    if query_qualities is None:
        query_qualities = [30] * len(query_sequence)
    if query_qualities is not False:
        read.query_qualities = pysam.qualitystring_to_array(''.join([chr(q + 33) for q in query_qualities]))
    read.flag = 0
    if is_unmapped:
        read.is_unmapped = True
        read.reference_id = -1
        read.reference_start = -1
        read.mapping_quality = 0
    else:
        read.reference_id = HEADER.get_tid(reference_name)
        read.reference_start = reference_start - 1
        read.cigartuples = cigar
        read.mapping_quality = mapping_quality
        read.is_reverse = is_reverse
    if edit_distance is not None and not is_unmapped:
        read.set_tag('NM', edit_distance)
    for tag, value in (tags or {}).items():
        read.set_tag(tag, value)
    read.next_reference_id = -1
    read.next_reference_start = -1
    return read


def build_read_pair(read1, read2):
    """
    link two reads as the first and second read of a pair
    """
    for read, mate, first in [(read1, read2, True), (read2, read1, False)]:
        read.is_paired = True
        read.is_read1 = first
        read.is_read2 = not first
        read.mate_is_unmapped = mate.is_unmapped
        if mate.is_unmapped:
            read.next_reference_id = read.reference_id
            read.next_reference_start = read.reference_start
        else:
            read.next_reference_id = mate.reference_id
            read.next_reference_start = mate.reference_start
            read.mate_is_reverse = mate.is_reverse
    read2.query_name = read1.query_name
    return read1, read2
