"""
Shadertoy -> NotITG converter.

Runs the whole pipeline over one source buffer:

    raw source
      -> Normalizer              (BOM, mainImage signature, fallback flags)
      -> IdentifierRewriter      (iTime, iResolution, iChannelN, ...)
      -> SamplingCallRewriter    (texture -> texture2D, img2tex remap)
      -> DeclarationsAssembler   (uniforms, fallbacks, img2tex helper)
      -> EntryPointSynthesizer   (main() wrapper)
      -> finalize                (blank line cleanup)
      -> NotITG source

Data only flows forward. Fallback flags are taken from the original text
before the first rewrite and passed read-only to the assembler.

Usage:
    converter = ShadertoyConverter(ConverterOptions(version='100'))
    notitg_source = converter.convert(shadertoy_source)

    # or
    notitg_source = convert(shadertoy_source, version='200')
"""

import logging
from dataclasses import dataclass

from .codegen import DeclarationsAssembler, EntryPointSynthesizer, finalize
from .codegen.declarations import DEFAULT_VERSION
from .preprocessor import Normalizer
from .transformer import IdentifierRewriter, SamplingCallRewriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConverterOptions:
    """
    Conversion settings.

    Attributes:
        version: Target GLSL version token; only a non-default value emits #version
        strict: Fail on texture() calls the single-argument capture cannot delimit
        precision: Default float precision written to the preamble
    """
    version: str = DEFAULT_VERSION
    strict: bool = False
    precision: str = 'mediump'


class ShadertoyConverter:
    """
    Converts Shadertoy GLSL to NotITG GLSL.

    Stateless between calls; one instance can convert any number of sources.
    """

    def __init__(self, options: ConverterOptions = None):
        """
        Initialize the pipeline stages.

        Args:
            options: Conversion settings (defaults to ConverterOptions())
        """
        self.options = options or ConverterOptions()
        self.normalizer = Normalizer()
        self.identifier_rewriter = IdentifierRewriter()
        self.sampling_rewriter = SamplingCallRewriter(strict=self.options.strict)
        self.declarations = DeclarationsAssembler(
            version=self.options.version, precision=self.options.precision
        )
        self.entry_point = EntryPointSynthesizer()

    def convert(self, source: str) -> str:
        """
        Convert one shader.

        Args:
            source: Shadertoy source code

        Returns:
            NotITG source code

        Raises:
            AmbiguousSamplingCallError: strict mode only
        """
        normalized = self.normalizer.normalize(source)

        code = self.identifier_rewriter.rewrite(normalized.source, normalized.requirements)
        code = self.sampling_rewriter.rewrite(code)
        code = self.declarations.assemble(code, normalized.requirements)
        code = self.entry_point.synthesize(code, normalized.signature)

        return finalize(code)


def convert(source: str, version: str = DEFAULT_VERSION, strict: bool = False) -> str:
    """Convert Shadertoy source with the given options."""
    options = ConverterOptions(version=version, strict=strict)
    return ShadertoyConverter(options).convert(source)
