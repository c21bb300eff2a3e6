from ..constants import PAIR_ORIENTATION, float_percentage
from ..util import WeakSvallocNamespace

DEFAULTS = WeakSvallocNamespace()
"""
- :term:`adapter_sequences`
- :term:`dovetail_error_margin`
- :term:`max_adapter_mapped_bases`
- :term:`max_fragment_size`
- :term:`min_anchor_identity`
- :term:`min_clip_length`
- :term:`min_read_mapq`
- :term:`pair_orientation`
- :term:`realignment_min_mapq`
"""
DEFAULTS.add(
    'min_read_mapq', 5,
    defn='minimum mapping quality of the anchoring read for the evidence to be used')
DEFAULTS.add(
    'min_clip_length', 1,
    defn='minimum number of soft clipped bases for a soft clip to be used as evidence')
DEFAULTS.add(
    'min_anchor_identity', 95.0, cast_type=float_percentage,
    defn='minimum percent identity (0-100) of the aligned portion of a soft clipped read to the reference')
DEFAULTS.add(
    'adapter_sequences', ['AGATCGGAAGAGC', 'CTGTCTCTTATA', 'TGGAATTCTCGG'], cast_type=str, listable=True,
    defn='adapter sequences (Illumina universal, Nextera, Illumina small RNA by default). Soft clips which are '
    'explained by read-through into one of these are not used as evidence')
DEFAULTS.add(
    'max_adapter_mapped_bases', 6,
    defn='number of aligned bases adjacent to the soft clip which may also be part of the adapter match')
DEFAULTS.add(
    'dovetail_error_margin', 2,
    defn='maximum distance between the alignment start of a read and its mate for the pair to be considered dovetailed')
DEFAULTS.add(
    'pair_orientation', PAIR_ORIENTATION.FR, cast_type=PAIR_ORIENTATION, nullable=True,
    defn='expected orientation of properly paired reads. Only FR (or unset) is supported by the dovetail and '
    'adapter filters')
DEFAULTS.add(
    'max_fragment_size', 1000,
    defn='maximum expected fragment size. Sets how far from a read pair the breakend may be')
DEFAULTS.add(
    'realignment_min_mapq', 5,
    defn='minimum mapping quality of a realigned soft clip for its realignment position to be trusted')
