"""
Identifier Rewriter.

Replaces Shadertoy built-in uniforms with their NotITG equivalents:

1. iTime -> time
2. iResolution.x / iResolution.y -> imageSize.x / imageSize.y
3. iResolution -> vec3(imageSize, 1.0)
4. iTimeDelta -> iTimeDeltaFallback (only if present in the original)
5. iFrame -> frame
6. iMouse -> iMouse (declared later)
7. iDate -> iDateFallback (only if present in the original)
8. iSampleRate -> 44100.0
9. iChannel0..3 -> sampler0..3

All substitutions are whole-word, so `timeline` or `iTimeScale` are left alone.

Usage:
    rewriter = IdentifierRewriter()
    source = rewriter.rewrite(source, requirements)
"""

import logging
import re
from typing import Iterable

from ..preprocessor import FallbackRequirements
from .rewrite_rules import IDENTIFIER_RULES, IdentifierRule

logger = logging.getLogger(__name__)


class IdentifierRewriter:
    """
    Applies an ordered table of whole-word substitutions to a source buffer.
    """

    def __init__(self, rules: Iterable[IdentifierRule] = IDENTIFIER_RULES):
        """
        Initialize the rewriter.

        Args:
            rules: Ordered substitution table (defaults to the Shadertoy table)
        """
        self.rules = [(rule, re.compile(rule.pattern)) for rule in rules]

    def rewrite(self, source: str, requirements: FallbackRequirements) -> str:
        """
        Rewrite Shadertoy identifiers.

        Args:
            source: Normalized source code
            requirements: Flags computed from the original source; gated rules
                are skipped when their flag is not set

        Returns:
            Source with every matching identifier replaced
        """
        for rule, pattern in self.rules:
            if rule.requires and not getattr(requirements, rule.requires):
                continue

            source, count = pattern.subn(rule.replacement, source)
            if count:
                logger.debug("%s -> %s (%d)", rule.pattern, rule.replacement, count)

        return source
