"""
Shadertoy GLSL to NotITG GLSL converter.
"""

from .converter import ConverterOptions, ShadertoyConverter, convert
from .errors import AmbiguousSamplingCallError, ConversionError

__all__ = [
    'AmbiguousSamplingCallError',
    'ConversionError',
    'ConverterOptions',
    'ShadertoyConverter',
    'convert',
]
