"""
Declarations Assembler.

Builds the NotITG preamble and places it in the rewritten source.

The preamble contains, in order:
1. #version <token>, only for a non-default version when the source has none
2. precision mediump float;
3. NotITG uniforms: imageSize, time, frame, iMouse, sampler0..3,
   samplerRandom, textureSize
4. Fallback constants (iTimeDeltaFallback, iDateFallback), only when the
   original source used iTimeDelta / iDate
5. The img2tex() UV remap helper

Placement:
- After the first #version line, wherever it is in the buffer
- Otherwise at the very top

If the original source used iChannelResolution or iChannelTime an advisory
comment becomes the first line of the output; those arrays are not translated.

Usage:
    assembler = DeclarationsAssembler(version='100')
    source = assembler.assemble(source, requirements)
"""

import logging
import re
from typing import List

from ..preprocessor import FallbackRequirements
from ..transformer.rewrite_rules import (
    DATE_FALLBACK,
    REMAP_HELPER,
    TIME_DELTA_FALLBACK,
    Channel,
    KnownSampler,
)

logger = logging.getLogger(__name__)

DEFAULT_VERSION = '100'

VERSION_DIRECTIVE_PATTERN = re.compile(r'^[ \t]*#version\b[^\n]*(?:\n|$)', re.MULTILINE)

CHANNEL_ARRAYS_NOTE = (
    "// NOTE: shader uses iChannelResolution or iChannelTime arrays; "
    "those arrays are not representable as simple uniforms in NotITG."
)


class DeclarationsAssembler:
    """
    Generates the uniform/helper preamble for NotITG.

    Configuration:
        version: Target GLSL version token ('100' emits no #version line)
        precision: Default float precision qualifier
        indent_size: Number of spaces per indentation level in img2tex()
    """

    def __init__(self, version: str = DEFAULT_VERSION, precision: str = 'mediump',
                 indent_size: int = 4):
        """
        Initialize the assembler.

        Args:
            version: Target GLSL version token
            precision: Float precision qualifier (lowp, mediump, highp)
            indent_size: Number of spaces per indentation level
        """
        self.version = version
        self.precision = precision
        self.indent_size = indent_size

    def indent(self, level: int = 1) -> str:
        return ' ' * (level * self.indent_size)

    def assemble(self, source: str, requirements: FallbackRequirements) -> str:
        """
        Insert the preamble into the rewritten source.

        Args:
            source: Source after all rewrites
            requirements: Flags computed from the original source

        Returns:
            Source with the preamble (and advisory note, if any) in place
        """
        has_version = has_version_directive(source)
        preamble = self.build_preamble(requirements, has_version)

        source = insert_preamble(source, preamble)

        if requirements.channel_arrays:
            logger.warning(
                "iChannelResolution/iChannelTime are not supported, leaving them untranslated"
            )
            source = CHANNEL_ARRAYS_NOTE + '\n' + source

        return source

    def build_preamble(self, requirements: FallbackRequirements,
                       has_version: bool = False) -> str:
        """
        Generate the preamble text.

        Args:
            requirements: Flags deciding which fallback constants are emitted
            has_version: The source already carries a #version directive

        Returns:
            Preamble text, ending with a blank line
        """
        lines = []

        if not has_version and self.version and self.version != DEFAULT_VERSION:
            lines.append(f'#version {self.version}')

        lines.append(f'precision {self.precision} float;')
        lines.append('')

        lines.extend(self.build_uniforms())
        lines.append('')

        lines.extend(self.build_fallbacks(requirements))
        lines.append('')

        lines.extend(self.build_remap_helper())
        lines.append('')

        return '\n'.join(lines) + '\n'

    def build_uniforms(self) -> List[str]:
        """NotITG uniforms (always emitted)."""
        lines = [
            '// NotITG auto-inserted uniforms and fallbacks (generated)',
            'uniform vec2 imageSize; // viewport size (x = width, y = height)',
            'uniform float time; // seconds',
            'uniform float frame; // current frame (optional)',
            'uniform vec4 iMouse; // optional mouse vec4',
        ]
        for channel in Channel:
            lines.append(f'uniform sampler2D {channel.sampler_name};')
        lines.append(
            f'uniform sampler2D {KnownSampler.RANDOM.value}; '
            '// built-in random/noise sampler in NotITG (if available)'
        )
        lines.append(
            'uniform vec2 textureSize; '
            f'// size of the source texture used for {REMAP_HELPER} transformations (set by mod)'
        )
        return lines

    def build_fallbacks(self, requirements: FallbackRequirements) -> List[str]:
        """Constants for Shadertoy built-ins NotITG does not provide."""
        lines = []
        if requirements.time_delta:
            lines.append(
                "// iTimeDelta fallback (NotITG usually doesn't provide). "
                "Try setting a real value if needed."
            )
            lines.append(f'const float {TIME_DELTA_FALLBACK} = 0.0;')
        if requirements.date:
            lines.append('// iDate fallback (not generally available)')
            lines.append(f'const vec4 {DATE_FALLBACK} = vec4(0.0);')
        return lines

    def build_remap_helper(self) -> List[str]:
        """img2tex(): Shadertoy UVs -> NotITG texture coordinates."""
        return [
            '// Converts normalized UVs (0..1) suitable for Shadertoy to texture coords used in NotITG.',
            '// It uses textureSize (source texture logical size) and imageSize (viewport size).',
            f'vec2 {REMAP_HELPER}(vec2 v) {{',
            f'{self.indent()}// Avoid divide-by-zero in degenerate cases',
            f'{self.indent()}vec2 ts = max(textureSize, vec2(1.0, 1.0));',
            f'{self.indent()}vec2 im = max(imageSize, vec2(1.0, 1.0));',
            f'{self.indent()}return v / ts * im;',
            '}',
        ]


def has_version_directive(source: str) -> bool:
    return VERSION_DIRECTIVE_PATTERN.search(source) is not None


def insert_preamble(source: str, preamble: str) -> str:
    """
    Place the preamble after the first #version line, or at the top.

    Args:
        source: Rewritten source
        preamble: Text produced by DeclarationsAssembler.build_preamble

    Returns:
        Source with the preamble inserted exactly once
    """
    match = VERSION_DIRECTIVE_PATTERN.search(source)
    if not match:
        return preamble + source

    directive = match.group(0)
    if not directive.endswith('\n'):
        # #version is the last line of a file without trailing newline
        directive += '\n'

    return source[:match.start()] + directive + preamble + source[match.end():]
