"""
holds methods related to processing cigar tuples. Cigar tuples are generally
an iterable list of tuples where the first element in each tuple is the
CIGAR value (i.e. 1 for an insertion), and the second value is the frequency
"""
import re

from ..constants import CIGAR

ALIGNED_STATES = {CIGAR.M, CIGAR.X, CIGAR.EQ}
REFERENCE_ALIGNED_STATES = ALIGNED_STATES | {CIGAR.D, CIGAR.N}
QUERY_ALIGNED_STATES = ALIGNED_STATES | {CIGAR.I, CIGAR.S}
CLIPPING_STATE = {CIGAR.S, CIGAR.H}


def start_softclip_length(cigar):
    """
    number of soft clipped bases at the start of the alignment. Hard clipping is skipped over

    Example:
        >>> start_softclip_length([(CIGAR.H, 2), (CIGAR.S, 5), (CIGAR.M, 10)])
        5
    """
    for state, freq in cigar or []:
        if state == CIGAR.S:
            return freq
        elif state != CIGAR.H:
            return 0
    return 0


def end_softclip_length(cigar):
    """
    number of soft clipped bases at the end of the alignment. Hard clipping is skipped over
    """
    return start_softclip_length(list(reversed(cigar or [])))


def inserted_bases(cigar):
    return sum([f for v, f in cigar or [] if v == CIGAR.I])


def deleted_bases(cigar):
    return sum([f for v, f in cigar or [] if v == CIGAR.D])


def convert_string_to_cigar(string):
    """
    Given a cigar string, converts it to the appropriate cigar tuple

    Example:
        >>> convert_string_to_cigar('8M2I1D9X')
        [(CIGAR.M, 8), (CIGAR.I, 2), (CIGAR.D, 1), (CIGAR.X, 9)]
    """
    patt = r'(\d+(\D))'
    cigar = [m[0] for m in re.findall(patt, string)]
    cigar = [(CIGAR[match[-1]] if match[-1] != '=' else CIGAR.EQ, int(match[:-1])) for match in cigar]
    return cigar


def convert_cigar_to_string(cigar):
    return ''.join(['{}{}'.format(f, CIGAR.reverse(s) if s != CIGAR.EQ else '=') for s, f in cigar or []])
