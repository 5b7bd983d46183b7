"""
Entry-Point Synthesizer and Finalizer.

NotITG runs void main(); Shadertoy runs void mainImage(out vec4, in vec2).
The synthesizer picks one of four outcomes:

    mainImage | main | result
    ----------+------+------------------------------------------------------
    yes       | no   | append main() calling mainImage(gl_FragColor, gl_FragCoord.xy)
    yes       | yes  | append an advisory comment, nothing else changes
    no        | yes  | unchanged
    no        | no   | append main() writing vec4(0.0)

The finalizer collapses runs of blank lines afterwards.
"""

import logging
import re
from enum import Enum
from typing import Optional

from ..preprocessor import SignatureRecord

logger = logging.getLogger(__name__)

MAIN_PATTERN = re.compile(r'\bvoid\s+main\s*\(')
BLANK_LINES_PATTERN = re.compile(r'\n{3,}')

EXISTING_MAIN_NOTE = (
    "// NOTE: original shader already defines main(); "
    "make sure it calls mainImage(...) or adapt as needed."
)


class EntryPointState(Enum):
    """Which of mainImage() / main() the source defines."""
    NO_MAIN_IMAGE = 'no-main-image'
    MAIN_IMAGE_ONLY = 'main-image-only'
    MAIN_IMAGE_AND_MAIN = 'main-image-and-main'
    MAIN_ONLY = 'main-only'

    @classmethod
    def detect(cls, source: str, has_main_image: bool) -> 'EntryPointState':
        has_main = MAIN_PATTERN.search(source) is not None
        if has_main_image:
            return cls.MAIN_IMAGE_AND_MAIN if has_main else cls.MAIN_IMAGE_ONLY
        return cls.MAIN_ONLY if has_main else cls.NO_MAIN_IMAGE


class EntryPointSynthesizer:
    """
    Makes sure the output has exactly one NotITG entry point.

    Usage:
        synthesizer = EntryPointSynthesizer()
        source = synthesizer.synthesize(source, normalized.signature)
    """

    def __init__(self, indent_size: int = 4):
        self.indent_size = indent_size

    def indent(self) -> str:
        return ' ' * self.indent_size

    def synthesize(self, source: str, signature: Optional[SignatureRecord]) -> str:
        """
        Append the entry point the source needs.

        Args:
            source: Source with the preamble already inserted
            signature: mainImage parameters from the normalizer, None if absent

        Returns:
            Source with an entry point (or an advisory note) appended
        """
        state = EntryPointState.detect(source, signature is not None)
        logger.debug("Entry point state: %s", state.value)

        if state is EntryPointState.MAIN_IMAGE_ONLY:
            return source + '\n' + self.build_wrapper(signature)

        if state is EntryPointState.MAIN_IMAGE_AND_MAIN:
            logger.warning("Shader defines both main() and mainImage(), main() left as is")
            return source + '\n' + EXISTING_MAIN_NOTE + '\n'

        if state is EntryPointState.NO_MAIN_IMAGE:
            return source + '\n' + self.build_empty_main()

        return source

    def build_wrapper(self, signature: SignatureRecord) -> str:
        """
        main() calling mainImage() positionally.

        The recorded parameter names only go into the comment.
        """
        return '\n'.join([
            '',
            'void main() {',
            f'{self.indent()}// Call original Shadertoy-style entrypoint',
            f'{self.indent()}// mainImage(out vec4 {signature.color_name}, in vec2 {signature.coord_name})',
            f'{self.indent()}mainImage(gl_FragColor, gl_FragCoord.xy);',
            '}',
            '',
        ])

    def build_empty_main(self) -> str:
        return 'void main() { gl_FragColor = vec4(0.0); }\n'


def finalize(source: str) -> str:
    """Collapse three or more consecutive newlines to a single blank line."""
    return BLANK_LINES_PATTERN.sub('\n\n', source)
