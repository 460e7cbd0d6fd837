import pytest
from PIL import Image

from favicon_map.cli import main
from favicon_map.ico import ICO_MAGIC, read_ico_directory

from conftest import RED, png_bytes, requires_cairo, solid, svg_doc


def run_cli(argv):
    with pytest.raises(SystemExit) as excinfo:
        main([str(a) for a in argv])
    return excinfo.value.code


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "input.png"
    path.write_bytes(png_bytes(solid(100, 150, RED)))
    return path


def test_png_to_ico(tmp_path, png_file, capsys):
    out = tmp_path / "output.ico"
    assert run_cli([png_file, out]) == 0
    data = out.read_bytes()
    assert data[:4] == ICO_MAGIC
    assert "Output saved to" in capsys.readouterr().out


def test_default_output_name(tmp_path, png_file, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert run_cli([png_file]) == 0
    assert (tmp_path / "favicon.ico").exists()


def test_size_and_colour_options(tmp_path, png_file):
    out = tmp_path / "icon.ico"
    argv = [png_file, out, "--size", "16", "--colors", "4", "--method", "octree"]
    assert run_cli(argv) == 0
    entry = read_ico_directory(out.read_bytes())[0]
    assert (entry.width, entry.height) == (16, 16)


def test_output_must_use_ico_suffix(tmp_path, png_file, capsys):
    out = tmp_path / "output.jpg"
    assert run_cli([png_file, out, "--verbose"]) == 1
    err = capsys.readouterr().err
    assert f"[error] the output file has to use the '.ico' suffix: {out}" in err
    assert not out.exists()


def test_missing_input(tmp_path, capsys):
    out = tmp_path / "output.ico"
    assert run_cli([tmp_path / "non_existent.png", out]) == 2
    assert "not found" in capsys.readouterr().err
    assert not out.exists()


def test_undecodable_input(tmp_path, capsys):
    src = tmp_path / "broken.png"
    src.write_bytes(b"not an image")
    out = tmp_path / "output.ico"
    assert run_cli([src, out]) == 1
    assert "[error]" in capsys.readouterr().err
    assert not out.exists()


def test_oversized_input_is_a_conversion_error(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    src = tmp_path / "huge.png"
    src.write_bytes(png_bytes(solid(20, 20, RED)))
    out = tmp_path / "output.ico"
    assert run_cli([src, out]) == 1
    assert "exceeds limit" in capsys.readouterr().err
    assert not out.exists()


def test_invalid_colour_count(tmp_path, png_file, capsys):
    out = tmp_path / "output.ico"
    assert run_cli([png_file, out, "--colours", "0"]) == 1
    assert "max_colors" in capsys.readouterr().err


def test_write_error(tmp_path, png_file, capsys):
    out = tmp_path / "nonexistent" / "output.ico"
    assert run_cli([png_file, out]) == 1
    assert "cannot save" in capsys.readouterr().err
    assert not out.exists()


def test_verbose_report(tmp_path, png_file, capsys):
    assert run_cli([png_file, tmp_path / "output.ico", "-v"]) == 0
    out = capsys.readouterr().out
    assert "Converting" in out
    assert "Original: 100x150" in out
    assert "Icon: 32x32" in out


@requires_cairo
def test_corrupted_svg(tmp_path, capsys):
    src = tmp_path / "broken.svg"
    src.write_bytes(
        b'<svg width="100" height="100" xmlns="http://www.w3.org/2000/svg"><rect'
    )
    out = tmp_path / "output.ico"
    assert run_cli([src, out]) == 1
    assert "failed to parse SVG" in capsys.readouterr().err


@requires_cairo
def test_svg_to_ico(tmp_path):
    src = tmp_path / "logo.svg"
    src.write_bytes(svg_doc(100))
    out = tmp_path / "output.ico"
    assert run_cli([src, out]) == 0
    assert read_ico_directory(out.read_bytes())[0].bit_count == 24
