"""
Transformer - Shadertoy identifier and sampling-call rewriting.
"""

from .identifier_rewriter import IdentifierRewriter
from .rewrite_rules import Channel, KnownSampler
from .sampling_rewriter import SamplingCallRewriter

__all__ = [
    'Channel',
    'IdentifierRewriter',
    'KnownSampler',
    'SamplingCallRewriter',
]
