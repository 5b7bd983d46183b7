"""
Preprocessor - source normalization that runs before any rewriting.
"""

from .normalizer import (
    FallbackRequirements,
    NormalizedSource,
    Normalizer,
    SignatureRecord,
)

__all__ = [
    'FallbackRequirements',
    'NormalizedSource',
    'Normalizer',
    'SignatureRecord',
]
