"""
streaming annotation of calls with the evidence which supports them
"""
from .annotator import (
    ActiveVariant,
    SequentialEvidenceAnnotator,
    allocate_to_high_breakend,
    compare_active_variants,
    java_string_hash,
)
from .dump import EvidenceDump
