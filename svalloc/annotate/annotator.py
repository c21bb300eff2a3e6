"""
assignment of position sorted evidence to position sorted calls

Calls and evidence are both consumed in a single pass. Only the calls which could still receive evidence are
held in memory: those within :term:`max_call_window_size` of the call about to be emitted.
"""
import collections
import logging

from .constants import DEFAULTS
from ..breakpoint import BreakpointSummary
from ..call import CallBuilder
from ..evidence import CallEvidence, NonReferenceReadPair, RemoteEvidence
from ..util import DEVNULL, PeekingIterator


def java_string_hash(string):
    """
    the 32-bit string hash used by java (``s[0]*31^(n-1) + ... + s[n-1]`` over the UTF-16 code units). Unlike the
    builtin :func:`hash` this does not change between runs

    Example:
        >>> java_string_hash('a')
        97
        >>> java_string_hash('ab')
        3105
    """
    encoded = str(string).encode('utf-16-be')
    result = 0
    for i in range(0, len(encoded), 2):
        result = (31 * result + ((encoded[i] << 8) | encoded[i + 1])) & 0xFFFFFFFF
    if result >= 0x80000000:
        result -= 0x100000000
    return result


def bit_count(value):
    """number of set bits in the 32-bit two's complement representation of an integer"""
    return bin(value & 0xFFFFFFFF).count('1')


def allocate_to_high_breakend(evidence):
    """
    decide which of a pair of mate calls gets the evidence when it overlaps both. Both sides of the same read
    pair, and the local and remote views of the same evidence, are sent to opposite calls

    Returns:
        bool: True if the evidence should go to the mate of the best call
    """
    flip = False
    if isinstance(evidence, NonReferenceReadPair):
        local = evidence.local_read()
        identifier = local.query_name
        flip = bool(local.is_read2)
    elif isinstance(evidence, RemoteEvidence):
        identifier = evidence.as_local().evidence_id()
        flip = True
    elif isinstance(evidence, CallEvidence):
        identifier = evidence.event_id if evidence.event_id else evidence.evidence_id()
    else:
        identifier = evidence.evidence_id()
    allocate = (bit_count(java_string_hash(identifier)) & 1) == 1
    return allocate != flip


class ActiveVariant:
    """
    a call which is buffered while it can still receive evidence
    """

    def __init__(self, call, linear, dump=None):
        self.id = call.id if call.id else None
        self.mate_id = call.mate_id if self.id else None
        self.event_id = call.event_id
        self.score = call.qual
        self.location = call.location
        self.start_location = linear.get_start_linear_coordinate(self.location)
        self.builder = CallBuilder(call)
        self.dump = dump
        self.evidence_dump = [] if dump is not None else None
        self.local_key = linear.breakend_key(self.location)
        self.position_key = self.local_key
        if isinstance(self.location, BreakpointSummary):
            low, high = self.location.ordered(key=linear.breakend_key)
            self.position_key = linear.breakend_key(low) + linear.breakend_key(high)

    def attribute_evidence(self, evidence):
        if self.evidence_dump is not None:
            self.evidence_dump.append(evidence)
        self.builder.add_evidence(evidence)

    def call_variant(self):
        call = self.builder.make()
        if self.dump is not None:
            for evidence in self.evidence_dump:
                self.dump.write_evidence(evidence, call)
        return call

    def __repr__(self):
        return 'ActiveVariant({} {} {})'.format(repr(self.location), self.score, self.id)


def _cmp(first, second):
    return (first > second) - (first < second)


def compare_active_variants(first, second):
    """
    orders buffered calls by score and then position. Lower positions sort higher and the position of breakpoint
    calls is taken from the low then high breakend so that both calls of an event compare the same way

    Returns:
        int: positive if the first call is the better call for evidence overlapping both
    """
    result = _cmp(first.score, second.score)
    if result:
        return result
    if isinstance(first.location, BreakpointSummary) and isinstance(second.location, BreakpointSummary):
        result = _cmp(second.position_key, first.position_key)
    else:
        result = _cmp(second.local_key, first.local_key)
    if result:
        return result
    result = _cmp(first.event_id or '', second.event_id or '')
    if result:
        return result
    return _cmp(first.id or '', second.id or '')


class SequentialEvidenceAnnotator:
    """
    iterator of calls annotated with their supporting evidence

    Example:
        >>> annotator = SequentialEvidenceAnnotator(linear, calls, evidence)
        >>> for call in annotator:
        ...     print(call.id, call.data['total_support'])
    """

    def __init__(
        self, linear, calls, evidence,
        max_call_window_size=DEFAULTS.max_call_window_size,
        assign_evidence_to_single_breakpoint=DEFAULTS.assign_evidence_to_single_breakpoint,
        breakend_margin=DEFAULTS.breakend_margin,
        dump=None,
        sanity_check=DEFAULTS.sanity_check_iterators,
        log=DEVNULL
    ):
        """
        Args:
            linear (LinearGenomicCoordinate): the linear coordinate space both inputs are sorted by
            calls (iterable of BreakpointCall): calls sorted by linear start position
            evidence (iterable of DirectedEvidence): evidence sorted by linear start position
            max_call_window_size (int): see :term:`max_call_window_size`
            assign_evidence_to_single_breakpoint (bool): see :term:`assign_evidence_to_single_breakpoint`
            breakend_margin (int): see :term:`breakend_margin`
            dump (EvidenceDump): optional sink for the assignment of each evidence
            sanity_check (bool): see :term:`sanity_check_iterators`
            log (Log): logging function
        """
        self.linear = linear
        self.max_call_range = max_call_window_size
        self.assign_evidence_to_single_breakpoint = assign_evidence_to_single_breakpoint
        self.breakend_margin = breakend_margin
        self.dump = dump
        self.sanity_check = sanity_check
        self.log = log
        self.call_iter = iter(calls)
        self.evidence_iter = PeekingIterator(evidence)
        self.variant_buffer = collections.deque()
        self.buffered_variant_id = {}
        self.unsupported_count = 0
        self.tracked_buffer_context = None
        self._done = False

    def _next_call(self):
        try:
            return next(self.call_iter)
        except StopIteration:
            return None

    def _buffer(self, call):
        variant = ActiveVariant(call, self.linear, self.dump)
        self.variant_buffer.append(variant)
        if variant.id:
            self.buffered_variant_id[variant.id] = variant

    def __iter__(self):
        return self

    def __next__(self):
        if self._done:
            raise StopIteration()
        if not self.variant_buffer:
            call = self._next_call()
            if call is None:
                self._finish()
                raise StopIteration()
            self._buffer(call)
        variant = self.variant_buffer[0]
        self._buffer_variants_before(variant.start_location + 2 * (self.max_call_range + 1))
        self._process_evidence_before(variant.start_location + self.max_call_range + 1)
        variant = self.variant_buffer.popleft()
        if variant.id:
            self.buffered_variant_id.pop(variant.id, None)
        return variant.call_variant()

    def _finish(self):
        self._done = True
        if not self.sanity_check:
            return
        leftover = 0
        while self.evidence_iter.has_next():
            self.assign_evidence(next(self.evidence_iter))
            leftover += 1
        if leftover:
            self.log('sanity check: {} evidence remaining after the last call'.format(leftover), level=logging.WARNING)

    def _buffer_variants_before(self, position):
        while not self.variant_buffer or self.variant_buffer[-1].start_location <= position:
            call = self._next_call()
            if call is None:
                return
            self._buffer(call)

    def _process_evidence_before(self, position):
        while self.evidence_iter.has_next():
            location = self.evidence_iter.peek().location
            if self.linear.get_start_linear_coordinate(location) - self.breakend_margin > position:
                break
            self.assign_evidence(next(self.evidence_iter))

    def assign_evidence(self, evidence):
        """
        assign evidence to the overlapping buffered call(s). Evidence which overlaps no call is written to the
        dump (when given) and dropped

        Returns:
            bool: True if the evidence was assigned to at least one call
        """
        location = evidence.location.with_margin(self.breakend_margin, self.linear.lengths)
        end_location = self.linear.get_end_linear_coordinate(location)
        called = False
        if self.assign_evidence_to_single_breakpoint:
            best = None
            for variant in self.variant_buffer:
                if variant.start_location > end_location:
                    break
                if variant.location.overlaps(location):
                    if best is None or compare_active_variants(variant, best) > 0:
                        best = variant
            if best is not None:
                mate = self.buffered_variant_id.get(best.mate_id) if best.mate_id else None
                if mate is not None and mate.location.overlaps(location) and allocate_to_high_breakend(evidence):
                    mate.attribute_evidence(evidence)
                else:
                    best.attribute_evidence(evidence)
                called = True
        else:
            for variant in self.variant_buffer:
                if variant.start_location > end_location:
                    break
                if variant.location.overlaps(location):
                    variant.attribute_evidence(evidence)
                    called = True
        if not called:
            self.unsupported_count += 1
            if self.dump is not None:
                self.dump.write_evidence(evidence, None)
        return called

    def set_tracked_buffer_context(self, context):
        self.tracked_buffer_context = context

    def tracked_buffer_sizes(self):
        """
        Returns:
            :class:`list` of :class:`tuple` of :class:`str` and :class:`int`: the name and current size of each buffer
        """
        prefix = self.tracked_buffer_context + '.' if self.tracked_buffer_context else ''
        return [
            (prefix + 'annotate.variantBuffer', len(self.variant_buffer)),
            (prefix + 'annotate.bufferedVariantId', len(self.buffered_variant_id))
        ]
