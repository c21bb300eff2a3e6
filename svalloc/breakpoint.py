from .constants import DIRECTION
from .interval import Interval


class BreakendSummary(Interval):
    """
    class for storing the location of one side of a structural variant
    coordinates are given as 1-indexed
    """
    @property
    def key(self):
        return (self.chr, self.start, self.end, DIRECTION.ordinal(self.direction))

    def __init__(self, chr, direction, start, end=None):
        """
        Args:
            chr (str): the chromosome
            direction (DIRECTION): which side of the reference is retained at the break
            start (int): the genomic position of the breakend
            end (int): if the breakend is uncertain (a range) then specify the end of the range here

        Examples:
            >>> BreakendSummary('1', DIRECTION.FORWARD, 1, 2)
            >>> BreakendSummary('1', DIRECTION.BACKWARD, 10)
        """
        Interval.__init__(self, start, end)
        self.chr = str(chr)
        self.direction = DIRECTION.enforce(direction)

    @property
    def local(self):
        return self

    def __repr__(self):
        return 'BreakendSummary({0}:{1}{2}{3})'.format(
            self.chr,
            self.start,
            '-' + str(self.end) if self.end != self.start else '',
            self.direction
        )

    def __eq__(self, other):
        if not hasattr(other, 'key') or isinstance(other, BreakpointSummary) != isinstance(self, BreakpointSummary):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def overlaps(self, other):
        """
        True if the other breakend is on the same chromosome, has the same direction and the
        position intervals overlap

        Example:
            >>> BreakendSummary('1', 'f', 1, 10).overlaps(BreakendSummary('1', 'f', 10, 12))
            True
            >>> BreakendSummary('1', 'f', 1, 10).overlaps(BreakendSummary('1', 'b', 10, 12))
            False
        """
        if self.chr != other.chr or self.direction != other.direction:
            return False
        return Interval.overlaps(self, other)

    def _widen(self, margin, contig_lengths=None):
        high = None
        if contig_lengths is not None:
            high = contig_lengths.get(self.chr, None)
        itvl = self.widen(margin, low=1, high=high)
        return BreakendSummary(self.chr, self.direction, itvl.start, itvl.end)

    def with_margin(self, margin, contig_lengths=None):
        """
        Args:
            margin (int): number of positions to expand the breakend interval by on either side
            contig_lengths (dict): optional mapping of chromosome to length used to bound the interval

        Returns:
            BreakendSummary: the expanded breakend
        """
        return self._widen(margin, contig_lengths)

    def to_dict(self):
        return {
            'chr': self.chr,
            'start': self.start,
            'end': self.end,
            'direction': self.direction,
            'type': self.__class__.__name__
        }


class BreakpointSummary(BreakendSummary):
    """
    a breakend paired with its remote (mate) breakend
    """

    @property
    def key(self):
        return BreakendSummary.key.fget(self) + self.remote.key

    def __init__(self, local, remote):
        """
        Args:
            local (BreakendSummary): the breakend being described
            remote (BreakendSummary): the partner breakend at the other side of the junction
        """
        BreakendSummary.__init__(self, local.chr, local.direction, local.start, local.end)
        self.remote = BreakendSummary(remote.chr, remote.direction, remote.start, remote.end)

    @property
    def local(self):
        return BreakendSummary(self.chr, self.direction, self.start, self.end)

    def __repr__(self):
        return 'BreakpointSummary({}, {})'.format(repr(self.local), repr(self.remote))

    def overlaps(self, other):
        """
        when both are breakpoints then both sides must overlap, otherwise only the local breakend is compared
        """
        if not BreakendSummary.overlaps(self, other):
            return False
        if isinstance(other, BreakpointSummary):
            return self.remote.overlaps(other.remote)
        return True

    def remote_breakpoint(self):
        """
        Returns:
            BreakpointSummary: the same breakpoint viewed from the remote breakend
        """
        return BreakpointSummary(self.remote, self.local)

    def ordered(self, key=None):
        """
        canonical ordering of the two breakends so that both sides of an event give the same result

        Args:
            key (callable): sort key for a breakend. Defaults to the breakend key

        Returns:
            :class:`tuple` of :class:`BreakendSummary`: the low and the high breakend
        """
        if key is None:
            key = lambda x: x.key  # noqa
        local = self.local
        if key(self.remote) < key(local):
            return self.remote, local
        return local, self.remote

    @property
    def low(self):
        return self.ordered()[0]

    @property
    def high(self):
        return self.ordered()[1]

    def with_margin(self, margin, contig_lengths=None):
        return BreakpointSummary(
            self.local._widen(margin, contig_lengths),
            self.remote._widen(margin, contig_lengths)
        )

    def to_dict(self):
        row = BreakendSummary.to_dict(self)
        row.update({
            'remote_chr': self.remote.chr,
            'remote_start': self.remote.start,
            'remote_end': self.remote.end,
            'remote_direction': self.remote.direction
        })
        return row
