import unittest

from svalloc.breakpoint import BreakendSummary, BreakpointSummary
from svalloc.constants import DIRECTION
from svalloc.linear import LinearGenomicCoordinate


class TestBreakendSummary(unittest.TestCase):

    def test_invalid_direction(self):
        with self.assertRaises(KeyError):
            BreakendSummary('1', 'x', 10)

    def test_invalid_interval(self):
        with self.assertRaises(AttributeError):
            BreakendSummary('1', DIRECTION.FORWARD, 10, 5)

    def test_overlaps(self):
        first = BreakendSummary('1', DIRECTION.FORWARD, 1, 10)
        self.assertTrue(first.overlaps(BreakendSummary('1', DIRECTION.FORWARD, 10, 12)))
        self.assertFalse(first.overlaps(BreakendSummary('1', DIRECTION.BACKWARD, 10, 12)))
        self.assertFalse(first.overlaps(BreakendSummary('2', DIRECTION.FORWARD, 10, 12)))
        self.assertFalse(first.overlaps(BreakendSummary('1', DIRECTION.FORWARD, 11, 12)))

    def test_with_margin(self):
        bend = BreakendSummary('1', DIRECTION.FORWARD, 5)
        self.assertEqual(BreakendSummary('1', DIRECTION.FORWARD, 1, 15), bend.with_margin(10))
        self.assertEqual(BreakendSummary('1', DIRECTION.FORWARD, 1, 12), bend.with_margin(10, {'1': 12}))
        self.assertEqual(BreakendSummary('1', DIRECTION.FORWARD, 5), bend)

    def test_eq(self):
        self.assertEqual(BreakendSummary('1', 'f', 1, 2), BreakendSummary('1', 'f', 1, 2))
        self.assertNotEqual(BreakendSummary('1', 'f', 1, 2), BreakendSummary('1', 'b', 1, 2))
        local = BreakendSummary('1', 'f', 1, 2)
        self.assertNotEqual(local, BreakpointSummary(local, BreakendSummary('2', 'b', 5)))

    def test_to_dict(self):
        row = BreakendSummary('1', 'f', 1, 2).to_dict()
        self.assertEqual({'chr': '1', 'start': 1, 'end': 2, 'direction': 'f', 'type': 'BreakendSummary'}, row)


class TestBreakpointSummary(unittest.TestCase):

    def setUp(self):
        self.bpp = BreakpointSummary(BreakendSummary('2', 'f', 10), BreakendSummary('1', 'b', 50))

    def test_local(self):
        self.assertEqual(BreakendSummary('2', 'f', 10), self.bpp.local)
        self.assertEqual(BreakendSummary('1', 'b', 50), self.bpp.remote)

    def test_low_high(self):
        self.assertEqual('1', self.bpp.low.chr)
        self.assertEqual('2', self.bpp.high.chr)
        other = self.bpp.remote_breakpoint()
        self.assertEqual(self.bpp.low, other.low)
        self.assertEqual(self.bpp.high, other.high)

    def test_remote_breakpoint(self):
        other = self.bpp.remote_breakpoint()
        self.assertEqual('1', other.chr)
        self.assertEqual(BreakendSummary('2', 'f', 10), other.remote)
        self.assertNotEqual(self.bpp, other)
        self.assertEqual(self.bpp, other.remote_breakpoint())

    def test_overlaps_breakpoint(self):
        self.assertTrue(self.bpp.overlaps(BreakpointSummary(
            BreakendSummary('2', 'f', 5, 15), BreakendSummary('1', 'b', 40, 50))))
        self.assertFalse(self.bpp.overlaps(BreakpointSummary(
            BreakendSummary('2', 'f', 5, 15), BreakendSummary('1', 'b', 60, 70))))

    def test_overlaps_breakend(self):
        self.assertTrue(self.bpp.overlaps(BreakendSummary('2', 'f', 5, 15)))
        self.assertTrue(BreakendSummary('2', 'f', 5, 15).overlaps(self.bpp))

    def test_with_margin(self):
        widened = self.bpp.with_margin(20)
        self.assertEqual(BreakendSummary('2', 'f', 1, 30), widened.local)
        self.assertEqual(BreakendSummary('1', 'b', 30, 70), widened.remote)

    def test_ordered_by_linear_position(self):
        linear = LinearGenomicCoordinate(['2', '1'], [100, 100])
        low, high = self.bpp.ordered(key=linear.breakend_key)
        self.assertEqual('2', low.chr)
        self.assertEqual('1', high.chr)


class TestLinearGenomicCoordinate(unittest.TestCase):

    def setUp(self):
        self.linear = LinearGenomicCoordinate(['1', '2', '3'], [100, 50, 20])

    def test_get_linear_coordinate(self):
        self.assertEqual(1, self.linear.get_linear_coordinate('1', 1))
        self.assertEqual(101, self.linear.get_linear_coordinate('2', 1))
        self.assertEqual(151, self.linear.get_linear_coordinate('3', 1))

    def test_buffer(self):
        linear = LinearGenomicCoordinate(['1', '2'], [100, 50], buffer=10)
        self.assertEqual(111, linear.get_linear_coordinate('2', 1))

    def test_unknown_contig(self):
        with self.assertRaises(KeyError):
            self.linear.get_linear_coordinate('X', 1)

    def test_start_end(self):
        bend = BreakendSummary('2', 'f', 5, 10)
        self.assertEqual(105, self.linear.get_start_linear_coordinate(bend))
        self.assertEqual(110, self.linear.get_end_linear_coordinate(bend))

    def test_contig_length(self):
        self.assertEqual(50, self.linear.contig_length('2'))

    def test_mismatched_lengths(self):
        with self.assertRaises(AttributeError):
            LinearGenomicCoordinate(['1', '2'], [100])

    def test_breakend_key(self):
        forward = self.linear.breakend_key(BreakendSummary('1', 'f', 10))
        backward = self.linear.breakend_key(BreakendSummary('1', 'b', 10))
        later = self.linear.breakend_key(BreakendSummary('2', 'f', 1))
        self.assertLess(forward, backward)
        self.assertLess(backward, later)

    def test_from_alignment_file(self):
        class Handle:
            references = ('1', '2')
            lengths = (10, 20)
        linear = LinearGenomicCoordinate.from_alignment_file(Handle())
        self.assertEqual(11, linear.get_linear_coordinate('2', 1))
