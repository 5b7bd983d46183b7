"""Command line entry point: shadertoy2itg INPUT [--version=200]."""

import logging
from pathlib import Path

import click

from .converter import ConverterOptions, ShadertoyConverter
from .codegen.declarations import DEFAULT_VERSION
from .errors import ConversionError

package_logger = logging.getLogger('glsl_to_notitg')


class ClickEchoHandler(logging.Handler):
    """Sends log records to click's stderr, keeping stdout for the shader."""

    def emit(self, record):
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool) -> None:
    if not any(isinstance(h, ClickEchoHandler) for h in package_logger.handlers):
        handler = ClickEchoHandler()
        handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.command()
@click.argument('input_path', metavar='INPUT', type=click.Path(path_type=Path))
@click.option('--version', 'version', default=DEFAULT_VERSION, show_default=True,
              help='Target GLSL version; anything but 100 adds a #version line')
@click.option('--strict', is_flag=True,
              help='Fail on texture() calls with nested calls in the UV argument')
@click.option('--output', '-o', type=click.File('w', encoding='utf-8'), default='-',
              help='Output file (default: stdout)')
@click.option('--verbose', '-v', is_flag=True, help='Log every pipeline step to stderr')
def main(input_path, version, strict, output, verbose):
    """Convert a Shadertoy GLSL shader to NotITG GLSL.

    Example:
        shadertoy2itg shader.glsl > shader.frag
        shadertoy2itg shader.glsl --version=200 -o shader.frag
    """
    configure_logging(verbose)

    try:
        source = input_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise click.FileError(str(input_path), hint=str(e))

    converter = ShadertoyConverter(ConverterOptions(version=version, strict=strict))
    try:
        result = converter.convert(source)
    except ConversionError as e:
        raise click.ClickException(str(e))

    output.write(result)
