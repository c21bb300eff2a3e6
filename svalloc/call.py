"""
breakpoint calls and the builder used to attach supporting evidence to them
"""
from .breakpoint import BreakpointSummary
from .constants import EVIDENCE_TYPE


class BreakpointCall:
    """
    a called breakend or breakpoint. Both breakends of a breakpoint are separate calls linked through
    :attr:`mate_id` and sharing the same :attr:`event_id`
    """

    def __init__(self, id, location, qual=0, mate_id=None, event_id=None, data=None, evidence=None):
        """
        Args:
            id (str): unique identifier of the call
            location (BreakendSummary): the called breakend (BreakpointSummary when the partner is known)
            qual (float): the call score
            mate_id (str): the id of the call at the partner breakend
            event_id (str): identifier shared by all calls of the same event
            data (dict): any other call attributes
            evidence (:class:`list` of :class:`DirectedEvidence`): evidence supporting the call

        Raises:
            ValueError: negative call quality
        """
        if qual is None or qual < 0:
            raise ValueError('call quality must be a non-negative number', id, qual)
        self.id = id
        self.location = location
        self.qual = qual
        self.mate_id = mate_id
        self.event_id = event_id
        self.data = dict() if data is None else dict(data)
        self.evidence = tuple() if evidence is None else tuple(evidence)

    @property
    def chr(self):
        return self.location.chr

    @property
    def start(self):
        return self.location.start

    @property
    def end(self):
        return self.location.end

    def is_breakpoint(self):
        return isinstance(self.location, BreakpointSummary)

    def evidence_ids(self):
        return [e.evidence_id() for e in self.evidence]

    def __repr__(self):
        return 'BreakpointCall({}, {}, qual={}, evidence={})'.format(
            self.id, repr(self.location), self.qual, len(self.evidence))


class CallBuilder:
    """
    accumulates the evidence assigned to a call and produces the annotated call
    """

    def __init__(self, call):
        self.call = call
        self.evidence = []

    def add_evidence(self, evidence):
        self.evidence.append(evidence)
        return self

    def __len__(self):
        return len(self.evidence)

    def make(self):
        """
        Returns:
            BreakpointCall: a copy of the original call with the collected evidence attached and the support
            summary added to its data (``evidence_ids``, ``support``, ``total_support``, ``evidence_score``)
        """
        support = {}
        for evidence_type in EVIDENCE_TYPE.values():
            if isinstance(evidence_type, str):
                support[evidence_type] = 0
        score = 0
        for evidence in self.evidence:
            support[evidence.evidence_type] += 1
            score += evidence.score()
        data = dict(self.call.data)
        data.update({
            'evidence_ids': [e.evidence_id() for e in self.evidence],
            'support': support,
            'total_support': len(self.evidence),
            'evidence_score': score
        })
        return BreakpointCall(
            self.call.id,
            self.call.location,
            qual=self.call.qual,
            mate_id=self.call.mate_id,
            event_id=self.call.event_id,
            data=data,
            evidence=self.evidence
        )
