import unittest

from svalloc.error import InvalidKmerSizeError
from svalloc.kmer import (
    PackedSequence,
    bases_different,
    bases_matching,
    check_kmer_size,
    decode_kmer,
    encode_kmer,
    neighbouring_states,
)


class TestEncoding(unittest.TestCase):

    def test_encode_kmer(self):
        self.assertEqual(0, encode_kmer('AAAA'))
        self.assertEqual(27, encode_kmer('ACGT'))
        self.assertEqual(255, encode_kmer('TTTT'))

    def test_encode_ambiguous(self):
        self.assertEqual(encode_kmer('AAAA'), encode_kmer('NANA'))

    def test_lowercase(self):
        self.assertEqual(encode_kmer('ACGT'), encode_kmer('acgt'))

    def test_decode_kmer(self):
        self.assertEqual('ACGT', decode_kmer(27, 4))
        self.assertEqual('AAACGT', decode_kmer(27, 6))

    def test_check_kmer_size(self):
        self.assertEqual(31, check_kmer_size(31))
        with self.assertRaises(InvalidKmerSizeError):
            check_kmer_size(32)
        with self.assertRaises(InvalidKmerSizeError):
            check_kmer_size(0)


class TestNeighbours(unittest.TestCase):

    def test_neighbouring_states(self):
        states = neighbouring_states(3, encode_kmer('ACG'))
        self.assertEqual(9, len(states))
        self.assertEqual(9, len(set(states)))
        for state in states:
            self.assertEqual(1, bases_different(3, encode_kmer('ACG'), state))

    def test_xor_patterns(self):
        kmer = encode_kmer('GATTACA')
        patterns = neighbouring_states(7)
        self.assertEqual(
            sorted(neighbouring_states(7, kmer)),
            sorted([kmer ^ p for p in patterns])
        )

    def test_bases_matching(self):
        self.assertEqual(3, bases_matching(4, encode_kmer('ACGT'), encode_kmer('ACTT')))
        self.assertEqual(2, bases_matching(2, encode_kmer('ACGT'), encode_kmer('TTGT')))
        self.assertEqual(4, bases_different(4, encode_kmer('AAAA'), encode_kmer('CCCC')))


class TestPackedSequence(unittest.TestCase):

    def test_get_kmer(self):
        packed = PackedSequence('AACGTT')
        self.assertEqual(6, len(packed))
        self.assertEqual(encode_kmer('ACGT'), packed.get_kmer(1, 4))

    def test_set_kmer(self):
        packed = PackedSequence('AACGTT')
        packed.set_kmer(encode_kmer('GGG'), 2, 3)
        self.assertEqual('AAGGGT', packed.to_string())
        self.assertEqual([2, 4], packed.changed_positions())

    def test_reverse_complement(self):
        packed = PackedSequence('AACG', reverse=True, complement=True)
        self.assertEqual('CGTT', packed.to_string())
        self.assertEqual(encode_kmer('CGTT'), packed.get_kmer(0, 4))

    def test_ambiguous_bases_preserved(self):
        packed = PackedSequence('NACGT')
        self.assertEqual('NACGT', packed.to_string())
        packed.set_kmer(encode_kmer('AT'), 2, 2)
        self.assertEqual('NAATT', packed.to_string())

    def test_ambiguous_bases_rewritten(self):
        packed = PackedSequence('NACGT')
        packed.set_kmer(encode_kmer('CA'), 0, 2)
        self.assertEqual('CACGT', packed.to_string())

    def test_empty(self):
        packed = PackedSequence(None)
        self.assertEqual(0, len(packed))
        self.assertEqual('', packed.to_string())
