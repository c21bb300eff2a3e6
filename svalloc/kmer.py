"""
2-bit packed nucleotide encoding and kmer helpers

Bases are encoded as ``A=0, C=1, G=2, T=3`` with the first base of a kmer held in the most significant
bits, so a kmer of size k is a non-negative integer below ``4 ** k``. Ambiguous bases are encoded as ``A``.
"""
import numpy as np

from .constants import complement as _complement
from .error import InvalidKmerSizeError

MAX_KMER_SIZE = 31
""":class:`int`: largest kmer which fits a signed 64-bit key with room for the neighbour XOR patterns"""

_ENCODE = {'A': 0, 'C': 1, 'G': 2, 'T': 3, 'a': 0, 'c': 1, 'g': 2, 't': 3}
_DECODE = 'ACGT'


def check_kmer_size(k):
    if k < 1 or k > MAX_KMER_SIZE:
        raise InvalidKmerSizeError('kmer size must be between 1 and {}'.format(MAX_KMER_SIZE), k)
    return k


def encode_base(base):
    return _ENCODE.get(base, 0)


def encode_kmer(seq):
    """
    Example:
        >>> encode_kmer('ACGT')
        27
    """
    kmer = 0
    for base in seq:
        kmer = (kmer << 2) | encode_base(base)
    return kmer


def decode_kmer(kmer, k):
    """
    Example:
        >>> decode_kmer(27, 4)
        'ACGT'
    """
    result = []
    for i in range(k - 1, -1, -1):
        result.append(_DECODE[(kmer >> (2 * i)) & 3])
    return ''.join(result)


def neighbouring_states(k, kmer=0):
    """
    all kmers at hamming distance 1 from the input kmer

    Since a substitution is an XOR of the 2-bit base, calling with ``kmer=0`` gives the XOR patterns which
    can be applied to any kmer to find its neighbours

    Returns:
        :class:`list` of :class:`int`: the 3 * k neighbouring kmers
    """
    result = []
    for pos in range(0, k):
        for diff in range(1, 4):
            result.append(kmer ^ (diff << (2 * pos)))
    return result


def bases_matching(k, first, second):
    """
    number of bases which are the same over the lowest (last) k bases of the two kmers

    Example:
        >>> bases_matching(4, encode_kmer('ACGT'), encode_kmer('ACTT'))
        3
    """
    count = 0
    for i in range(0, k):
        if (first >> (2 * i)) & 3 == (second >> (2 * i)) & 3:
            count += 1
    return count


def bases_different(k, first, second):
    """
    number of bases which differ over the lowest (last) k bases of the two kmers
    """
    return k - bases_matching(k, first, second)


class PackedSequence:
    """
    2-bit encoded view of a read sequence which allows kmers to be read and overwritten in place
    """

    def __init__(self, seq, reverse=False, complement=False):
        """
        Args:
            seq (str): the sequence
            reverse (bool): store the sequence in reverse order
            complement (bool): store the complement of each base
        """
        seq = '' if seq is None else str(seq)
        codes = np.array([encode_base(b) for b in seq], dtype=np.uint8)
        original = list(seq)
        if complement:
            codes = 3 - codes
            original = list(_complement(seq))
        if reverse:
            codes = codes[::-1].copy()
            original = original[::-1]
        self.codes = codes
        self.original = original
        self.encoded = codes.copy()

    def __len__(self):
        return len(self.codes)

    def get_kmer(self, offset, k):
        kmer = 0
        for code in self.codes[offset:offset + k]:
            kmer = (kmer << 2) | int(code)
        return kmer

    def set_kmer(self, kmer, offset, k):
        for i in range(0, k):
            self.codes[offset + i] = (kmer >> (2 * (k - i - 1))) & 3

    def changed_positions(self):
        return [int(i) for i in np.nonzero(self.codes != self.encoded)[0]]

    def to_string(self):
        """
        decode the sequence. Bases which were never rewritten keep their original character
        """
        result = list(self.original)
        for i in self.changed_positions():
            result[i] = _DECODE[int(self.codes[i])]
        return ''.join(result)
