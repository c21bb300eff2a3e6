from .base import DirectedEvidence
from ..constants import EVIDENCE_TYPE
from ..error import InvalidEvidenceError


class RemoteEvidence(DirectedEvidence):
    """
    breakpoint evidence viewed from its remote breakend
    """
    evidence_type = EVIDENCE_TYPE.REMOTE

    def __init__(self, evidence):
        """
        Args:
            evidence (DirectedEvidence): the (local) breakpoint evidence

        Raises:
            InvalidEvidenceError: the evidence only supports a single breakend
        """
        if not evidence.is_breakpoint():
            raise InvalidEvidenceError('only breakpoint evidence has a remote breakend', evidence.evidence_id())
        self.evidence = evidence
        DirectedEvidence.__init__(self, evidence.location.remote_breakpoint())

    def as_local(self):
        return self.evidence

    def evidence_id(self):
        return 'R' + self.evidence.evidence_id()

    def is_read_pair(self):
        return self.evidence.is_read_pair()

    def underlying_read(self):
        return self.evidence.underlying_read()

    def breakend_sequence(self):
        return self.evidence.breakend_sequence()

    def breakend_quality(self):
        return self.evidence.breakend_quality()

    def score(self):
        return self.evidence.score()

    def meets_evidence_criteria(self, params=None):
        return self.evidence.meets_evidence_criteria(params)
