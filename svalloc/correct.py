"""
kmer frequency based correction of sequencing errors in the reads supporting a breakend

Correction happens in two phases. All reads are first counted (:class:`KmerCounter`) and the counts are then
frozen into a :class:`CollapseLookup` which maps each rare kmer to a much more common neighbouring kmer.
Each read is then rewritten using the lookup.
"""
import logging

from .bam import read as _read
from .constants import DIRECTION
from .constants import reverse_complement as _reverse_complement
from .kmer import PackedSequence, bases_different, bases_matching, check_kmer_size, neighbouring_states
from .util import DEVNULL, WeakSvallocNamespace

DEFAULTS = WeakSvallocNamespace()
"""
- :term:`error_correction_kmer_size`
- :term:`error_correction_collapse_multiple`
- :term:`max_base_corrections`
"""
DEFAULTS.add(
    'error_correction_kmer_size', 25,
    defn='size of the kmers counted when correcting read errors. Must be at most 31')
DEFAULTS.add(
    'error_correction_collapse_multiple', 8.0,
    defn='a kmer is replaced by a neighbouring kmer when the neighbour is seen at least this many times more often')
DEFAULTS.add(
    'max_base_corrections', 2,
    defn='maximum number of corrections made to a single read')


class CollapseLookup:
    """
    immutable mapping of a rare kmer to the neighbouring kmer it should be corrected to
    """

    def __init__(self, mapping, kmer_count=0):
        self._mapping = dict(mapping)
        self.kmer_count = kmer_count

    def get(self, kmer, default=None):
        return self._mapping.get(kmer, default)

    def __contains__(self, kmer):
        return kmer in self._mapping

    def __len__(self):
        return len(self._mapping)

    def items(self):
        return self._mapping.items()


class KmerCounter:
    """
    counts the kmers of a set of sequences
    """

    def __init__(self, k):
        self.k = check_kmer_size(k)
        self.counts = {}
        self.max_count = 0
        self._neighbour_xor = neighbouring_states(k)

    def count(self, packed):
        """
        Args:
            packed (PackedSequence): the sequence to count the kmers of
        """
        for i in range(0, len(packed) - self.k + 1):
            kmer = packed.get_kmer(i, self.k)
            count = self.counts.get(kmer, 0) + 1
            self.counts[kmer] = count
            if count > self.max_count:
                self.max_count = count

    def __getitem__(self, kmer):
        return self.counts.get(kmer, 0)

    def __len__(self):
        return len(self.counts)

    def best_neighbour(self, kmer):
        """
        the hamming distance 1 neighbour with the highest count. The first neighbour seen wins ties

        Returns:
            int: the neighbouring kmer, or the input kmer when no neighbour has been counted
        """
        best_kmer = kmer
        best_count = 0
        for xor in self._neighbour_xor:
            neighbour = kmer ^ xor
            count = self.counts.get(neighbour, 0)
            if count > best_count:
                best_kmer = neighbour
                best_count = count
        return best_kmer

    def collapse_lookup(self, collapse_multiple):
        """
        Args:
            collapse_multiple (float): how many times more frequent the neighbour must be

        Returns:
            CollapseLookup: the rare kmers and what they should be corrected to
        """
        max_collapse_count = int(self.max_count // collapse_multiple)
        mapping = {}
        for kmer, count in self.counts.items():
            if count > max_collapse_count:
                continue
            neighbour = self.best_neighbour(kmer)
            if count * collapse_multiple <= self.counts.get(neighbour, 0):
                mapping[kmer] = neighbour
        return CollapseLookup(mapping, kmer_count=len(self.counts))


class ReadErrorCorrector:
    """
    corrects the reads of a local region using the kmer counts of those same reads

    Example:
        >>> ec = ReadErrorCorrector(25, 8)
        >>> for read in reads:
        ...     ec.count_kmers(read)
        >>> changes = [ec.error_correct(read) for read in reads]
    """

    def __init__(self, k, collapse_multiple, max_base_corrections=DEFAULTS.max_base_corrections, log=DEVNULL):
        """
        Raises:
            InvalidKmerSizeError: k is not in the range 1-31
        """
        self.counter = KmerCounter(k)
        self.k = k
        self.collapse_multiple = collapse_multiple
        self.max_base_corrections = max_base_corrections
        self.log = log
        self._lookup = None

    def count_kmers(self, read, reverse_complement=False):
        packed = PackedSequence(read.query_sequence, reverse_complement, reverse_complement)
        self.counter.count(packed)
        self._lookup = None

    @property
    def collapse_lookup(self):
        if self._lookup is None:
            self._lookup = self.counter.collapse_lookup(self.collapse_multiple)
            self.log('collapsed {} of {} kmers'.format(len(self._lookup), self._lookup.kmer_count), level=logging.DEBUG)
        return self._lookup

    def error_correct(self, read, reverse_complement=False):
        """
        correct the read sequence in place

        Args:
            read (pysam.AlignedSegment): the read to correct
            reverse_complement (bool): the read was counted as its reverse complement

        Returns:
            int: the number of corrections made
        """
        if _read.read_length(read) < self.k:
            return 0
        packed = PackedSequence(read.query_sequence, reverse_complement, reverse_complement)
        changes = self.correct_sequence(packed)
        if changes > 0:
            seq = packed.to_string()
            if reverse_complement:
                seq = _reverse_complement(seq)
            _read.set_read_sequence(read, seq)
        return changes

    def correct_sequence(self, packed):
        """
        apply the correction rules to a packed sequence until none apply or the correction limit is reached
        """
        lookup = self.collapse_lookup
        changes = 0
        while (
            self._correct_flanking_kmers(packed, lookup)
            or self._correct_start(packed, lookup)
            or self._correct_end(packed, lookup)
        ):
            changes += 1
            if changes >= self.max_base_corrections:
                break
        return changes

    def _correct_flanking_kmers(self, packed, lookup):
        k = self.k
        for i in range(1, len(packed) - k):
            left = lookup.get(packed.get_kmer(i - 1, k))
            if left is None:
                continue
            right = lookup.get(packed.get_kmer(i + 1, k))
            if right is None:
                continue
            # both kmers must agree on the base change being made
            if bases_matching(k - 2, left, right >> 4) == k - 2:
                packed.set_kmer(left, i - 1, k)
                return True
        return False

    def _correct_start(self, packed, lookup):
        kmer = packed.get_kmer(0, self.k)
        transform = lookup.get(kmer)
        # only the first two bases are not covered by the flanking kmer rule
        if transform is not None and bases_different(self.k - 2, kmer, transform) == 0:
            packed.set_kmer(transform, 0, self.k)
            return True
        return False

    def _correct_end(self, packed, lookup):
        offset = len(packed) - self.k
        kmer = packed.get_kmer(offset, self.k)
        transform = lookup.get(kmer)
        if transform is not None and (kmer & 15) != (transform & 15):
            packed.set_kmer(transform, offset, self.k)
            return True
        return False


def error_correct(evidence, k=None, collapse_multiple=None, max_base_corrections=None, log=DEVNULL):
    """
    correct the reads underlying a set of evidence. Each read is counted and corrected once, even when it
    supports more than one piece of evidence. The non-reference mates of read pairs are reverse complemented
    where required so that all the reads are on the strand of the breakend

    Args:
        evidence (:class:`list` of :class:`DirectedEvidence`): the evidence
        k (int): kmer size
        collapse_multiple (float): see :term:`error_correction_collapse_multiple`
        max_base_corrections (int): see :term:`max_base_corrections`
        log (Log): logging function

    Returns:
        int: the total number of corrections made
    """
    k = DEFAULTS.error_correction_kmer_size if k is None else k
    collapse_multiple = DEFAULTS.error_correction_collapse_multiple if collapse_multiple is None else collapse_multiple
    max_base_corrections = DEFAULTS.max_base_corrections if max_base_corrections is None else max_base_corrections
    corrector = ReadErrorCorrector(k, collapse_multiple, max_base_corrections=max_base_corrections, log=log)

    reads = {}
    rc_reads = {}
    for ev in evidence:
        read = ev.underlying_read()
        if read is not None:
            reads.setdefault(_read.read_key(read), read)
        if not hasattr(ev, 'non_reference_read'):
            continue
        mate = ev.non_reference_read()
        if mate is None or not mate.query_sequence:
            continue
        if (ev.location.direction == DIRECTION.FORWARD) != mate.is_reverse:
            rc_reads.setdefault(_read.read_key(mate), mate)
        else:
            reads.setdefault(_read.read_key(mate), mate)

    for read in reads.values():
        corrector.count_kmers(read, False)
    for read in rc_reads.values():
        corrector.count_kmers(read, True)
    total = 0
    for read in reads.values():
        total += corrector.error_correct(read, False)
    for read in rc_reads.values():
        total += corrector.error_correct(read, True)
    log('corrected {} bases in {} reads'.format(total, len(reads) + len(rc_reads)), level=logging.DEBUG)
    return total
