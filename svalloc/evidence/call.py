from .base import DirectedEvidence
from ..constants import EVIDENCE_TYPE


class CallEvidence(DirectedEvidence):
    """
    a breakpoint call (for example an assembly) used as evidence for another call
    """
    evidence_type = EVIDENCE_TYPE.CALL

    def __init__(self, call):
        self.call = call
        DirectedEvidence.__init__(self, call.location)

    @property
    def event_id(self):
        return self.call.event_id

    def evidence_id(self):
        return self.call.id

    def underlying_read(self):
        return None

    def breakend_sequence(self):
        return self.call.data.get('breakend_sequence', '')

    def breakend_quality(self):
        return self.call.data.get('breakend_quality', None)

    def score(self):
        return self.call.qual

    def local_mapq(self):
        return self.call.data.get('local_mapq', 0)

    def local_base_length(self):
        return self.call.data.get('local_base_length', 0)

    def local_max_base_qual(self):
        return self.call.data.get('local_max_base_qual', 0)

    def local_total_base_qual(self):
        return self.call.data.get('local_total_base_qual', 0)

    def meets_evidence_criteria(self, params=None):
        return True
