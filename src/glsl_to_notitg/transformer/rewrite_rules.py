"""
Rewrite tables for the Shadertoy -> NotITG transformation.

All Shadertoy built-in names and their NotITG replacements live here, so the
rewriters stay table-driven:

- Channel: the four indexed Shadertoy texture inputs (iChannel0..iChannel3)
- KnownSampler: the NotITG samplers the sampling rewriter knows how to bind
- IDENTIFIER_RULES: ordered whole-word substitutions for built-in uniforms
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


# Fallback constant names. Must not collide with any Shadertoy input name,
# otherwise a later rule would match the output of an earlier one.
TIME_DELTA_FALLBACK = 'iTimeDeltaFallback'
DATE_FALLBACK = 'iDateFallback'

SAMPLE_RATE_LITERAL = '44100.0'

# Sampling call names
SOURCE_SAMPLE_CALL = 'texture'
TARGET_SAMPLE_CALL = 'texture2D'
REMAP_HELPER = 'img2tex'


class Channel(Enum):
    """Shadertoy channel inputs and the NotITG sampler each one becomes."""
    CHANNEL0 = 0
    CHANNEL1 = 1
    CHANNEL2 = 2
    CHANNEL3 = 3

    @property
    def source_name(self) -> str:
        return f'iChannel{self.value}'

    @property
    def sampler_name(self) -> str:
        return f'sampler{self.value}'


class KnownSampler(Enum):
    """
    Samplers whose sampling calls get a bound rewrite.

    The value is the sampler identifier; `remapped` tells whether the UV
    argument is wrapped in img2tex().
    """
    SAMPLER0 = 'sampler0'
    SAMPLER1 = 'sampler1'
    SAMPLER2 = 'sampler2'
    SAMPLER3 = 'sampler3'
    # NotITG's noise texture, already sized in NotITG texture space
    RANDOM = 'samplerRandom'

    @property
    def remapped(self) -> bool:
        return self is not KnownSampler.RANDOM


@dataclass(frozen=True)
class IdentifierRule:
    """
    One whole-word substitution.

    Attributes:
        pattern: Regex matched against the buffer (already word-bounded)
        replacement: Replacement text
        requires: Name of the FallbackRequirements flag that must be set
            for the rule to apply, or None for unconditional rules
    """
    pattern: str
    replacement: str
    requires: str = None


# Order matters: component access on iResolution before the bare name.
IDENTIFIER_RULES: Tuple[IdentifierRule, ...] = (
    IdentifierRule(r'\biTime\b', 'time'),
    # .x, .y, .xy, .yx ...: swizzles that only touch the 2D viewport size
    IdentifierRule(r'\biResolution\.([xy]{1,4})\b', r'imageSize.\1'),
    IdentifierRule(r'\biResolution\b', 'vec3(imageSize, 1.0)'),
    IdentifierRule(r'\biTimeDelta\b', TIME_DELTA_FALLBACK, requires='time_delta'),
    IdentifierRule(r'\biFrame\b', 'frame'),
    # iMouse keeps its name, it is declared as a uniform in the preamble
    IdentifierRule(r'\biMouse\b', 'iMouse'),
    IdentifierRule(r'\biDate\b', DATE_FALLBACK, requires='date'),
    IdentifierRule(r'\biSampleRate\b', SAMPLE_RATE_LITERAL),
) + tuple(
    IdentifierRule(rf'\b{channel.source_name}\b', channel.sampler_name)
    for channel in Channel
)
