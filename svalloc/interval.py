class Interval:
    """
    closed integer interval. Breakend positions are uncertain within an interval of this type
    """

    def __init__(self, start, end=None):
        """
        Args:
            start (int): the first position (inclusive)
            end (int): the last position (inclusive). Defaults to the start

        Raises:
            AttributeError: the start is after the end
        """
        self.start = int(start)
        self.end = self.start if end is None else int(end)
        if self.start > self.end:
            raise AttributeError('interval start > end is not allowed', self.start, self.end)

    def overlaps(self, other):
        """
        Example:
            >>> Interval(1, 10).overlaps(Interval(10, 11))
            True
            >>> Interval(1, 4).overlaps(Interval(5, 7))
            False
        """
        return self.start <= other.end and other.start <= self.end

    def __len__(self):
        return self.end - self.start + 1

    def __contains__(self, pos):
        return self.start <= pos <= self.end

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return False
        return (self.start, self.end) == (other.start, other.end)

    def __hash__(self):
        return hash((self.start, self.end))

    def widen(self, margin, low=None, high=None):
        """
        expand the interval by a margin on both sides. Both ends are kept within the bounds so the result
        is never inverted

        Args:
            margin (int): number of positions to add to each side
            low (int): lowest allowed position
            high (int): highest allowed position

        Example:
            >>> Interval(5, 10).widen(10, low=1)
            Interval(1, 20)
        """
        start = self.start - margin
        end = self.end + margin
        if low is not None:
            start, end = max(low, start), max(low, end)
        if high is not None:
            start, end = min(high, start), min(high, end)
        return Interval(start, end)

