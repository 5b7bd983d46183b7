"""
End-to-end tests for ShadertoyConverter.

Test coverage:
- Full Shadertoy shader conversion
- Entry point outcomes through the whole pipeline
- Fallback constants computed from the original source
- Version handling
- Strict mode
"""

import pytest
from glsl_to_notitg import (
    AmbiguousSamplingCallError,
    ConverterOptions,
    ShadertoyConverter,
    convert,
)

SHADERTOY_EXAMPLE = "void mainImage(out vec4 c, in vec2 p){ c = texture(iChannel0, p/iResolution.xy);}"


@pytest.fixture
def converter():
    """Fixture for ShadertoyConverter with default options."""
    return ShadertoyConverter()


# ============================================================================
# End-to-end
# ============================================================================

def test_minimal_shadertoy_shader(converter):
    """Test the canonical one-line shader."""
    result = converter.convert(SHADERTOY_EXAMPLE)
    assert 'uniform vec2 imageSize;' in result
    assert 'uniform sampler2D sampler0;' in result
    assert 'vec2 img2tex(vec2 v)' in result
    assert 'c = texture2D(sampler0, img2tex(p/imageSize.xy));' in result
    assert 'mainImage(gl_FragColor, gl_FragCoord.xy);' in result
    assert result.count('void main()') == 1
    assert 'iChannel0' not in result
    assert 'iResolution' not in result


def test_full_shader():
    """Test a typical shader using time, mouse and two channels."""
    source = """// Plasma
void mainImage( out vec4 fragColor, in vec2 fragCoord )
{
    vec2 uv = fragCoord / iResolution.xy;
    float t = iTime + float(iFrame) * 0.01;
    vec4 base = texture(iChannel1, uv);
    vec4 noise = texture(samplerRandom, uv * 4.0);
    vec2 m = iMouse.xy / iResolution.y;
    fragColor = mix(base, noise, 0.5 + 0.5 * sin(t + m.x));
}
"""
    result = convert(source)
    assert 'vec2 uv = fragCoord / imageSize.xy;' in result
    assert 'float t = time + float(frame) * 0.01;' in result
    assert 'vec4 base = texture2D(sampler1, img2tex(uv));' in result
    assert 'vec4 noise = texture2D(samplerRandom, uv * 4.0);' in result
    assert 'vec2 m = iMouse.xy / imageSize.y;' in result
    assert '// mainImage(out vec4 fragColor, in vec2 fragCoord)' in result
    assert result.index('vec2 img2tex(') < result.index('// Plasma') < result.index('void main()')


def test_bom_removed(converter):
    """Test the output never carries a BOM."""
    result = converter.convert('\ufeff' + SHADERTOY_EXAMPLE)
    assert '\ufeff' not in result


def test_no_triple_newlines(converter):
    """Test the finalizer ran."""
    result = converter.convert("float a;\n\n\n\n\nfloat b;\n")
    assert '\n\n\n' not in result


def test_user_sampler_renamed_only(converter):
    """Test texture() on a user sampler is renamed without remap."""
    source = "uniform sampler2D tex;\nvoid main() { gl_FragColor = texture(tex, vec2(0.5)); }\n"
    result = converter.convert(source)
    assert 'gl_FragColor = texture2D(tex, vec2(0.5));' in result


# ============================================================================
# Entry point outcomes
# ============================================================================

def test_neither_entry_point(converter):
    """Test exactly one no-op main() for plain helper code."""
    result = converter.convert("float f(float x) { return x * 2.0; }\n")
    assert result.count('void main(') == 1
    assert 'void main() { gl_FragColor = vec4(0.0); }' in result


def test_main_only_no_duplicate(converter):
    """Test an existing main() is not duplicated."""
    source = "void main() { gl_FragColor = vec4(time); }\n"
    result = converter.convert(source)
    assert result.count('void main(') == 1
    assert result.endswith(source)


def test_both_entry_points(converter):
    """Test both present: the rewritten source plus one note."""
    source = (
        "void mainImage(out vec4 c, in vec2 p) { c = vec4(iTime); }\n"
        "void main() { mainImage(gl_FragColor, gl_FragCoord.xy); }\n"
    )
    result = converter.convert(source)
    assert result.count('void main(') == 1
    assert result.count('// NOTE: original shader already defines main()') == 1
    assert result.endswith(
        "void mainImage(out vec4 c, in vec2 p) { c = vec4(time); }\n"
        "void main() { mainImage(gl_FragColor, gl_FragCoord.xy); }\n"
        "\n// NOTE: original shader already defines main(); "
        "make sure it calls mainImage(...) or adapt as needed.\n"
    )


# ============================================================================
# Fallbacks
# ============================================================================

def test_time_delta_fallback_declared_once(converter):
    """Test iTimeDelta yields exactly one fallback constant."""
    source = "void mainImage(out vec4 c, in vec2 p) { c = vec4(iTimeDelta); }"
    result = converter.convert(source)
    assert result.count('const float iTimeDeltaFallback = 0.0;') == 1
    assert 'c = vec4(iTimeDeltaFallback);' in result


def test_time_delta_only_in_comment(converter):
    """Test the constant is emitted even if the only use is in a comment."""
    result = converter.convert("// uses iTimeDelta\nfloat x;\n")
    assert result.count('const float iTimeDeltaFallback = 0.0;') == 1


def test_no_fallbacks_when_unused(converter):
    """Test no fallback constants for shaders that do not need them."""
    result = converter.convert(SHADERTOY_EXAMPLE)
    assert 'Fallback =' not in result


def test_date_fallback(converter):
    """Test iDate yields its fallback constant."""
    result = converter.convert("float s = iDate.w;")
    assert 'const vec4 iDateFallback = vec4(0.0);' in result
    assert 'float s = iDateFallback.w;' in result


def test_channel_resolution_note(converter):
    """Test channel arrays produce the advisory note first."""
    result = converter.convert("vec3 r = iChannelResolution[0];")
    assert result.startswith('// NOTE: shader uses iChannelResolution or iChannelTime arrays')
    assert 'vec3 r = iChannelResolution[0];' in result


# ============================================================================
# Options
# ============================================================================

def test_version_200():
    """Test a non-default version adds #version at the top."""
    result = convert(SHADERTOY_EXAMPLE, version='200')
    assert result.startswith('#version 200\n')


def test_existing_version_kept():
    """Test the preamble goes after an existing #version."""
    result = convert("#version 110\n" + SHADERTOY_EXAMPLE, version='200')
    assert result.startswith('#version 110\nprecision mediump float;')
    assert result.count('#version') == 1


def test_strict_rejects_nested_call():
    """Test strict mode raises on nested UV calls."""
    converter = ShadertoyConverter(ConverterOptions(strict=True))
    with pytest.raises(AmbiguousSamplingCallError):
        converter.convert("void mainImage(out vec4 c, in vec2 p) { c = texture(iChannel2, fract(p)); }")


def test_strict_accepts_flat_calls():
    """Test strict mode converts ordinary shaders."""
    converter = ShadertoyConverter(ConverterOptions(strict=True))
    assert 'texture2D(sampler0, img2tex(p/imageSize.xy))' in converter.convert(SHADERTOY_EXAMPLE)


def test_converter_reusable(converter):
    """Test one converter handles several sources independently."""
    first = converter.convert("float dt = iTimeDelta;")
    second = converter.convert("float t = iTime;")
    assert 'iTimeDeltaFallback' in first
    assert 'iTimeDeltaFallback' not in second
