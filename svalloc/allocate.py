"""
greedy allocation of evidence to the single best call it supports

A read may be aligned more than once and a single piece of evidence may overlap more than one call. The cache
keeps, for every read, read pair and piece of evidence, the highest scoring event seen so that each can then
be allocated to only that event.
"""
import hashlib
import logging

from .call import BreakpointCall, CallBuilder
from .util import DEVNULL, WeakSvallocNamespace

DEFAULTS = WeakSvallocNamespace()
"""
- :term:`unique_read_pair_alignment`
- :term:`unique_read_alignment`
- :term:`unique_evidence_allocation`
"""
DEFAULTS.add(
    'unique_read_pair_alignment', True,
    defn='only allocate read pair evidence from the best alignment of each read pair')
DEFAULTS.add(
    'unique_read_alignment', True,
    defn='only allocate single read evidence from the best alignment of each read')
DEFAULTS.add(
    'unique_evidence_allocation', True,
    defn='allocate each piece of evidence to at most one event')


class Hash128bit:
    """
    128-bit fingerprint of a string. Only used for equality and hashing

    Example:
        >>> Hash128bit('read1') == Hash128bit('read1')
        True
    """
    __slots__ = ['value']

    def __init__(self, value):
        value = '' if value is None else str(value)
        self.value = int(hashlib.md5(value.encode('utf-8')).hexdigest(), 16)

    def __eq__(self, other):
        return isinstance(other, Hash128bit) and self.value == other.value

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return 'Hash128bit({:032x})'.format(self.value)


class Node:
    """the best event seen for a key"""
    __slots__ = ['event', 'score', 'alignment']

    def __init__(self, event, score, alignment):
        self.event = event
        self.score = score
        self.alignment = alignment

    def __repr__(self):
        return 'Node(event={}, score={}, alignment={})'.format(self.event, self.score, self.alignment)


class GreedyAllocationCache:

    @staticmethod
    def put(lookup, key, alignment, event, score):
        """
        record the event for a key when it scores higher than the current best. The first event seen wins ties

        Args:
            lookup (dict): the cache. Nothing is recorded when this is None
            key (Hash128bit): the read, read pair or evidence
            alignment (Hash128bit): the alignment of the read (pair) supporting the event
            event (Hash128bit): the event
            score (float): the event score
        """
        if lookup is None:
            return
        node = lookup.get(key)
        if node is None:
            lookup[key] = Node(event, score, alignment)
        elif node.score < score:
            node.event = event
            node.score = score
            node.alignment = alignment

    @staticmethod
    def is_best_alignment(lookup, key, alignment):
        """
        Returns:
            bool: True if the alignment is the alignment of the best event for this key, or the constraint is not
            in use (lookup is None)
        """
        if lookup is None:
            return True
        node = lookup.get(key)
        if node is None:
            return False
        return node.alignment == alignment


def _event_key(event):
    if isinstance(event, Hash128bit):
        return event
    if isinstance(event, BreakpointCall):
        event = event.event_id if event.event_id is not None else event.id
    return Hash128bit(event)


class GreedyVariantAllocationCache(GreedyAllocationCache):
    """
    tracks the best event for every read pair, read and piece of evidence. Each of the three uniqueness
    constraints can be turned off independently

    Example:
        >>> cache = GreedyVariantAllocationCache()
        >>> cache.add_breakpoint('event1', 10, evidence)
        >>> cache.add_breakpoint('event2', 20, evidence)
        >>> cache.is_best_breakpoint('event1', evidence)
        False
    """

    def __init__(self, unique_read_pair_alignment=None, unique_read_alignment=None, unique_evidence_allocation=None):
        if unique_read_pair_alignment is None:
            unique_read_pair_alignment = DEFAULTS.unique_read_pair_alignment
        if unique_read_alignment is None:
            unique_read_alignment = DEFAULTS.unique_read_alignment
        if unique_evidence_allocation is None:
            unique_evidence_allocation = DEFAULTS.unique_evidence_allocation
        self.best_read_pair_alignment = {} if unique_read_pair_alignment else None
        self.best_read_alignment = {} if unique_read_alignment else None
        self.best_event_for_evidence = {} if unique_evidence_allocation else None

    def _alignment_lookup(self, evidence):
        identity = evidence.allocation_identity()
        if identity is None:
            return None, None, None
        key, alignment = identity
        lookup = self.best_read_pair_alignment if evidence.is_read_pair() else self.best_read_alignment
        return lookup, Hash128bit(key), Hash128bit(alignment)

    def add_breakpoint(self, event, score, evidence):
        """
        Args:
            event (str|BreakpointCall): the event (or a call of the event) the evidence supports
            score (float): the event score
            evidence (DirectedEvidence): the supporting evidence
        """
        event = _event_key(event)
        self.put(self.best_event_for_evidence, Hash128bit(evidence.evidence_id()), None, event, score)
        lookup, key, alignment = self._alignment_lookup(evidence)
        if key is not None:
            self.put(lookup, key, alignment, event, score)

    def add_call(self, call, evidence=None):
        """
        add all the evidence for a call using the call event and quality
        """
        for ev in call.evidence if evidence is None else evidence:
            self.add_breakpoint(call, call.qual, ev)

    def is_best_breakpoint(self, event, evidence):
        """
        Returns:
            bool: True if the event is the best event for this evidence under all the constraints in use
        """
        event = _event_key(event)
        if self.best_event_for_evidence is not None:
            node = self.best_event_for_evidence.get(Hash128bit(evidence.evidence_id()))
            if node is None or node.event != event:
                return False
        lookup, key, alignment = self._alignment_lookup(evidence)
        if key is None:
            return True
        return self.is_best_alignment(lookup, key, alignment)

    def __len__(self):
        return sum([
            len(lookup) for lookup in [self.best_read_pair_alignment, self.best_read_alignment, self.best_event_for_evidence]
            if lookup is not None
        ])


def allocate_evidence(calls, cache=None, log=DEVNULL):
    """
    remove evidence from each call which better supports another call

    The first pass records every call for every piece of its evidence, the second rebuilds each call keeping only
    the evidence for which it is the best call

    Args:
        calls (:class:`list` of :class:`BreakpointCall`): calls with their evidence attached
        cache (GreedyVariantAllocationCache): the cache to use. A new one is created when not given
        log (Log): logging function

    Returns:
        :class:`list` of :class:`BreakpointCall`: the calls in input order with the reduced evidence
    """
    calls = list(calls)
    if cache is None:
        cache = GreedyVariantAllocationCache()
    for call in calls:
        cache.add_call(call)
    result = []
    removed = 0
    for call in calls:
        builder = CallBuilder(BreakpointCall(
            call.id, call.location, qual=call.qual, mate_id=call.mate_id, event_id=call.event_id, data=call.data))
        for evidence in call.evidence:
            if cache.is_best_breakpoint(call, evidence):
                builder.add_evidence(evidence)
            else:
                removed += 1
        result.append(builder.make())
    log('allocated evidence for', len(result), 'calls. removed', removed, 'evidence from calls which were not the best',
        level=logging.DEBUG)
    return result
