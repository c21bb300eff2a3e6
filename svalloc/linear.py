"""
conversion of (chromosome, position) pairs to a single integer axis so that breakends on different
chromosomes can be ordered and windowed with simple arithmetic
"""
from .constants import DIRECTION


class LinearGenomicCoordinate:
    """
    concatenates the reference contigs, in reference order, into a single linear coordinate space
    """

    def __init__(self, references, lengths, buffer=0):
        """
        Args:
            references (:class:`list` of :class:`str`): the contig names in sort order
            lengths (:class:`list` of :class:`int`): the length of each contig
            buffer (int): number of empty positions to place between adjacent contigs

        Example:
            >>> linear = LinearGenomicCoordinate(['1', '2'], [100, 50])
            >>> linear.get_linear_coordinate('2', 1)
            101
        """
        if len(references) != len(lengths):
            raise AttributeError('must give a length for each reference', len(references), len(lengths))
        self.references = list(references)
        self.lengths = dict(zip(self.references, [int(l) for l in lengths]))
        self.buffer = buffer
        self.offsets = {}
        offset = 0
        for ref in self.references:
            if ref in self.offsets:
                raise AttributeError('duplicate reference name', ref)
            self.offsets[ref] = offset
            offset += self.lengths[ref] + buffer

    @classmethod
    def from_alignment_file(cls, fh, buffer=0):
        """
        build from anything exposing pysam style references and lengths (AlignmentFile, FastaFile, VariantFile header)
        """
        return cls(fh.references, fh.lengths, buffer=buffer)

    def contig_length(self, chr):
        return self.lengths[chr]

    def get_linear_coordinate(self, chr, pos):
        """
        Raises:
            KeyError: the chromosome is not part of the reference
        """
        try:
            return self.offsets[chr] + pos
        except KeyError:
            raise KeyError('reference name not found in the linear coordinate space', chr)

    def get_start_linear_coordinate(self, breakend):
        return self.get_linear_coordinate(breakend.chr, breakend.start)

    def get_end_linear_coordinate(self, breakend):
        return self.get_linear_coordinate(breakend.chr, breakend.end)

    def breakend_key(self, breakend):
        """
        ordering of breakends along the linear axis: start, then end, then direction
        """
        return (
            self.get_start_linear_coordinate(breakend),
            self.get_end_linear_coordinate(breakend),
            DIRECTION.ordinal(breakend.direction)
        )
