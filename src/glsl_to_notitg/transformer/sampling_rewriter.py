"""
Sampling Call Rewriter.

Converts Shadertoy texture() calls to NotITG texture2D() calls:

1. Bound calls on a channel sampler get the UV remapped:
   texture(sampler0, uv) -> texture2D(sampler0, img2tex(uv))
2. Bound calls on samplerRandom are renamed only:
   texture(samplerRandom, uv) -> texture2D(samplerRandom, uv)
3. Any other texture( call is renamed only (the sampler binding is unknown):
   texture(mySampler, uv) -> texture2D(mySampler, uv)

Bound rewrites run first so the remap-aware form wins over the generic one.

The UV argument is captured up to the first ')', which is not a parser:
texture(sampler0, fract(uv)) captures "fract(uv" and leaves the trailing ')'.
A guard pass reports such calls, either as a warning (best effort) or as an
AmbiguousSamplingCallError in strict mode.

Usage:
    rewriter = SamplingCallRewriter(strict=False)
    source = rewriter.rewrite(source)
"""

import logging
import re
from typing import List, Tuple

from ..errors import AmbiguousSamplingCallError
from .rewrite_rules import (
    REMAP_HELPER,
    SOURCE_SAMPLE_CALL,
    TARGET_SAMPLE_CALL,
    KnownSampler,
)

logger = logging.getLogger(__name__)

GENERIC_CALL_PATTERN = re.compile(r'\b' + SOURCE_SAMPLE_CALL + r'\s*\(')


def bound_call_pattern(sampler: KnownSampler):
    """Pattern for texture(<sampler>, <uv>), group 1 is the raw UV argument."""
    return re.compile(
        r'\b' + SOURCE_SAMPLE_CALL + r'\s*\(\s*' + re.escape(sampler.value) +
        r'\s*,\s*([^\)]+)\)'
    )


def source_location(source: str, offset: int) -> Tuple[int, int]:
    """Convert a character offset into a 0-based (line, column) pair."""
    line = source.count('\n', 0, offset)
    column = offset - (source.rfind('\n', 0, offset) + 1)
    return line, column


class SamplingCallRewriter:
    """
    Rewrites texture() calls on the known samplers, then every other texture() call.
    """

    def __init__(self, strict: bool = False):
        """
        Initialize the rewriter.

        Args:
            strict: Raise AmbiguousSamplingCallError instead of warning when a
                bound call's UV argument contains a nested call
        """
        self.strict = strict
        self.patterns = [(sampler, bound_call_pattern(sampler)) for sampler in KnownSampler]

    def rewrite(self, source: str) -> str:
        """
        Rewrite all sampling calls.

        Args:
            source: Source after identifier rewriting (iChannelN already samplerN)

        Returns:
            Source using texture2D() throughout

        Raises:
            AmbiguousSamplingCallError: strict mode and a nested call was found
        """
        self.check_ambiguous_calls(source)
        source = self.rewrite_bound_calls(source)
        return self.rewrite_generic_calls(source)

    def find_ambiguous_calls(self, source: str) -> List[Tuple[KnownSampler, Tuple[int, int], str]]:
        """
        Find bound calls whose capture stops inside a nested call.

        Returns:
            (sampler, (line, column), captured argument) for each such call
        """
        ambiguous = []
        for sampler, pattern in self.patterns:
            for match in pattern.finditer(source):
                argument = match.group(1)
                if argument.count('(') > argument.count(')'):
                    ambiguous.append(
                        (sampler, source_location(source, match.start()), argument.strip())
                    )
        return ambiguous

    def check_ambiguous_calls(self, source: str) -> None:
        for sampler, location, argument in self.find_ambiguous_calls(source):
            if self.strict:
                raise AmbiguousSamplingCallError(
                    f"Cannot find the end of the UV argument of texture({sampler.value}, ...)",
                    location,
                )
            line, column = location
            logger.warning(
                "texture(%s, %s...) at line %d, column %d has a nested call in its "
                "UV argument; the rewrite may be incomplete",
                sampler.value, argument, line + 1, column + 1,
            )

    def rewrite_bound_calls(self, source: str) -> str:
        """texture(samplerN, uv) -> texture2D(samplerN, img2tex(uv)), samplerRandom unmapped."""
        for sampler, pattern in self.patterns:

            def replace_call(match, sampler=sampler):
                uv = match.group(1).strip()
                if sampler.remapped:
                    return f'{TARGET_SAMPLE_CALL}({sampler.value}, {REMAP_HELPER}({uv}))'
                return f'{TARGET_SAMPLE_CALL}({sampler.value}, {uv})'

            source, count = pattern.subn(replace_call, source)
            if count:
                logger.debug("Rewrote %d texture() calls on %s", count, sampler.value)

        return source

    def rewrite_generic_calls(self, source: str) -> str:
        """texture( -> texture2D( for calls not bound to a known sampler."""
        source, count = GENERIC_CALL_PATTERN.subn(TARGET_SAMPLE_CALL + '(', source)
        if count:
            logger.debug("Renamed %d unbound texture() calls", count)
        return source
