"""
diagnostic output of the call each piece of evidence was assigned to
"""
from ..util import LOG

COLUMNS = [
    'evidence_id',
    'evidence_type',
    'chr',
    'start',
    'end',
    'direction',
    'remote_chr',
    'remote_start',
    'remote_end',
    'remote_direction',
    'score',
    'call_id',
    'call_event_id',
    'call_qual',
]


def evidence_row(evidence, call=None):
    """
    Returns:
        dict: the row describing an evidence and the call it supports (None if it supports no call)
    """
    row = {c: None for c in COLUMNS}
    row.update(evidence.location.to_dict())
    row.pop('type', None)
    row.update({
        'evidence_id': evidence.evidence_id(),
        'evidence_type': evidence.evidence_type,
        'score': evidence.score()
    })
    if call is not None:
        row.update({'call_id': call.id, 'call_event_id': call.event_id, 'call_qual': call.qual})
    return row


class EvidenceDump:
    """
    streaming tab-delimited writer. Rows are written as they are given so evidence can be dropped once written

    Example:
        >>> with EvidenceDump('evidence.tab') as dump:
        ...     dump.write_evidence(evidence, call)
    """

    def __init__(self, output, log=LOG):
        """
        Args:
            output (str|file): the filename or an open file-like object to write to
        """
        if isinstance(output, str):
            log('writing:', output)
            self.fh = open(output, 'w')
            self._owns_fh = True
        else:
            self.fh = output
            self._owns_fh = False
        self.rows_written = 0
        self.fh.write('#' + '\t'.join(COLUMNS) + '\n')

    def write_evidence(self, evidence, call=None):
        row = evidence_row(evidence, call)
        self.fh.write('\t'.join([str(row[c]) for c in COLUMNS]) + '\n')
        self.rows_written += 1

    def close(self):
        if self._owns_fh:
            self.fh.close()
        else:
            self.fh.flush()

    def __enter__(self):
        return self

    def __exit__(self, *pos):
        self.close()
