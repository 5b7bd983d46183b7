"""
Source Normalizer.

First stage of the Shadertoy -> NotITG pipeline. It inspects the raw shader
text before any rewrite touches it.

This module handles:
1. Byte-order mark removal: a single leading U+FEFF is dropped
2. mainImage detection: void mainImage(out vec4 c, in vec2 p) -> SignatureRecord('c', 'p')
3. Fallback requirements: which Shadertoy built-ins without a NotITG binding
   (iTimeDelta, iDate, iChannelResolution, iChannelTime) occur in the original

Design:
- String-based processing (no parsing)
- Read-only: the buffer is returned unchanged apart from the BOM
- Everything that depends on the *original* text is captured here, into
  immutable records, because later stages rename or remove those identifiers

Usage:
    normalizer = Normalizer()
    normalized = normalizer.normalize(raw_source)
    normalized.signature      # SignatureRecord or None
    normalized.requirements   # FallbackRequirements
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

BYTE_ORDER_MARK = '\ufeff'

# void mainImage( out vec4 fragColor, in vec2 fragCoord )
# Group 1: output color parameter name
# Group 2: input coordinate parameter name
MAIN_IMAGE_PATTERN = re.compile(
    r'void\s+mainImage\s*\(\s*(?:out\s+)?vec4\s+([a-zA-Z0-9_]+)\s*,'
    r'\s*(?:in\s+)?vec2\s+([a-zA-Z0-9_]+)\s*\)'
)

TIME_DELTA_PATTERN = re.compile(r'\biTimeDelta\b')
DATE_PATTERN = re.compile(r'\biDate\b')
CHANNEL_ARRAYS_PATTERN = re.compile(r'\biChannelResolution\b|\biChannelTime\b')


@dataclass(frozen=True)
class SignatureRecord:
    """
    Parameter names of a detected mainImage definition.

    Only used to document the synthesized main(); the call itself is
    positional.

    Attributes:
        color_name: Name of the vec4 output color parameter
        coord_name: Name of the vec2 input coordinate parameter
    """
    color_name: str
    coord_name: str


@dataclass(frozen=True)
class FallbackRequirements:
    """
    Which fallbacks the declarations preamble must carry.

    Computed once from the original buffer, before any rewrite.

    Attributes:
        time_delta: iTimeDelta occurs in the original source
        date: iDate occurs in the original source
        channel_arrays: iChannelResolution or iChannelTime occurs in the
            original source (no NotITG equivalent, advisory only)
    """
    time_delta: bool = False
    date: bool = False
    channel_arrays: bool = False

    @classmethod
    def from_source(cls, source: str) -> 'FallbackRequirements':
        """Scan an unmodified source buffer for fallback-triggering identifiers."""
        return cls(
            time_delta=TIME_DELTA_PATTERN.search(source) is not None,
            date=DATE_PATTERN.search(source) is not None,
            channel_arrays=CHANNEL_ARRAYS_PATTERN.search(source) is not None,
        )


@dataclass(frozen=True)
class NormalizedSource:
    """
    Result of the normalization stage.

    Attributes:
        source: Source text with the leading BOM removed
        signature: Detected mainImage parameters, or None for plain fragment code
        requirements: Fallback flags computed from the original text
    """
    source: str
    signature: Optional[SignatureRecord]
    requirements: FallbackRequirements

    @property
    def has_main_image(self) -> bool:
        return self.signature is not None


class Normalizer:
    """
    Strips the byte-order mark and records what the original source contains.

    Never raises: a missing mainImage is a valid state (plain fragment code).
    """

    def normalize(self, source: str) -> NormalizedSource:
        """
        Normalize raw shader text.

        Args:
            source: Raw Shadertoy source

        Returns:
            NormalizedSource with the BOM-free text, signature and fallback flags
        """
        source = self.strip_bom(source)
        signature = self.detect_signature(source)
        requirements = FallbackRequirements.from_source(source)

        if signature:
            logger.debug(
                "Found mainImage(%s, %s)", signature.color_name, signature.coord_name
            )
        else:
            logger.debug("No mainImage signature found")
        logger.debug("Fallback requirements: %s", requirements)

        return NormalizedSource(source, signature, requirements)

    @staticmethod
    def strip_bom(source: str) -> str:
        """Remove a single leading byte-order mark."""
        if source.startswith(BYTE_ORDER_MARK):
            return source[len(BYTE_ORDER_MARK):]
        return source

    @staticmethod
    def detect_signature(source: str) -> Optional[SignatureRecord]:
        """Return the mainImage parameter names, or None if there is no mainImage."""
        match = MAIN_IMAGE_PATTERN.search(source)
        if not match:
            return None
        return SignatureRecord(color_name=match.group(1), coord_name=match.group(2))
