"""
Code generation - NotITG preamble, entry point and final cleanup.
"""

from .declarations import DeclarationsAssembler
from .entry_point import EntryPointState, EntryPointSynthesizer, finalize

__all__ = [
    'DeclarationsAssembler',
    'EntryPointState',
    'EntryPointSynthesizer',
    'finalize',
]
