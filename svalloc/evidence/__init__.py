"""
the directed evidence model: reads (and calls) which support a breakend or breakpoint
"""
from .base import DirectedEvidence
from .call import CallEvidence
from .readpair import DiscordantReadPair, NonReferenceReadPair, UnmappedMateReadPair, read_pair_breakend
from .remote import RemoteEvidence
from .softclip import RealignedSoftClipEvidence, SoftClipEvidence
