from ..util import WeakSvallocNamespace

DEFAULTS = WeakSvallocNamespace()
"""
- :term:`assign_evidence_to_single_breakpoint`
- :term:`breakend_margin`
- :term:`max_call_window_size`
- :term:`sanity_check_iterators`
"""
DEFAULTS.add(
    'max_call_window_size', 2000,
    defn='maximum width of a call breakend. Sets how far ahead of the current call calls and evidence are buffered')
DEFAULTS.add(
    'breakend_margin', 10,
    defn='number of bases either side of an evidence breakend which may still overlap a call')
DEFAULTS.add(
    'assign_evidence_to_single_breakpoint', True,
    defn='assign each piece of evidence to only the best call it overlaps rather than to all overlapping calls')
DEFAULTS.add(
    'sanity_check_iterators', False,
    defn='consume (and report) all remaining evidence once there are no calls left')
