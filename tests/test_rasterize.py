import pytest

from favicon_map.errors import InvalidParameterError, VectorParseError
from favicon_map.rasterize import rasterize_svg

from conftest import requires_cairo, svg_doc


@requires_cairo
def test_square_document_renders_at_target_size():
    out = rasterize_svg(svg_doc(32, fill="rgb(255,0,0)"), 32)
    assert out.shape == (32, 32, 4)
    assert tuple(out[16, 16]) == (255, 0, 0, 255)


@requires_cairo
@pytest.mark.parametrize("declared", [100, 1000, 10000])
def test_declared_size_is_ignored(declared):
    out = rasterize_svg(svg_doc(declared), 32)
    assert out.shape == (32, 32, 4)
    # content is scaled, not cropped: the far corner is painted too
    assert tuple(out[30, 30]) == (0, 0, 255, 255)


@requires_cairo
def test_transparent_fill_keeps_partial_alpha():
    out = rasterize_svg(svg_doc(100, extra_style="fill-opacity:0.5;"), 16)
    assert 0 < int(out[8, 8, 3]) < 255


@requires_cairo
@pytest.mark.parametrize(
    "markup",
    [
        b"<svg><invalid></svg>",
        b'<svg width="100" height="100" xmlns="http://www.w3.org/2000/svg">'
        b'<rect width="100" height="100"',
    ],
)
def test_malformed_markup_raises(markup):
    with pytest.raises(VectorParseError):
        rasterize_svg(markup, 32)


@pytest.mark.parametrize("markup", [b"", b"   \n", b"not an svg at all"])
def test_empty_or_foreign_input_raises(markup):
    with pytest.raises(VectorParseError, match="failed to parse SVG"):
        rasterize_svg(markup, 32)


def test_target_size_must_be_positive():
    with pytest.raises(InvalidParameterError):
        rasterize_svg(svg_doc(32), 0)
