import numpy as np
import pytest

from favicon_map.errors import InvalidParameterError
from favicon_map.quantize import NeuQuant, PillowPalette, build_palette, quantize_colours
from favicon_map.utils import count_distinct_colours

from conftest import BLUE, RED, solid

METHODS = ["neuquant", "median_cut", "octree"]


def noisy_image(width=48, height=40, seed=7):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


def test_uniform_image_keeps_one_colour_and_dimensions():
    out = quantize_colours(solid(100, 100, BLUE), 16)
    assert out.shape == (100, 100, 3)
    assert count_distinct_colours(out) == 1
    assert tuple(out[0, 0]) == BLUE


@pytest.mark.parametrize("method", METHODS)
@pytest.mark.parametrize("k", [2, 8, 16])
def test_distinct_colours_are_bounded(method, k):
    out = quantize_colours(noisy_image(), k, method)
    assert out.shape == (40, 48, 3)
    assert 1 <= count_distinct_colours(out) <= k


@pytest.mark.parametrize("method", ["neuquant", "median_cut"])
def test_single_colour_palette(method):
    out = quantize_colours(noisy_image(), 1, method)
    assert count_distinct_colours(out) == 1


@pytest.mark.parametrize("method", METHODS)
def test_output_colours_come_from_the_palette(method):
    src = noisy_image(16, 16)
    rgba = np.concatenate([src, np.full((16, 16, 1), 255, np.uint8)], axis=2)
    model = build_palette(rgba.reshape(-1, 4), 8, method)
    palette = {tuple(int(c) for c in row) for row in model.palette_rgb}
    out = quantize_colours(src, 8, method)
    used = {tuple(int(c) for c in row) for row in out.reshape(-1, 3)}
    assert used <= palette


@pytest.mark.parametrize("method", METHODS)
def test_zero_colours_is_rejected(method):
    with pytest.raises(InvalidParameterError):
        quantize_colours(solid(10, 10, RED), 0, method)


def test_zero_colours_is_a_value_error():
    with pytest.raises(ValueError):
        quantize_colours(solid(10, 10, RED), 0)


def test_unknown_method_is_rejected():
    with pytest.raises(InvalidParameterError):
        quantize_colours(solid(4, 4, RED), 4, "kmeans")


def test_more_colours_than_pixels():
    out = quantize_colours(solid(2, 2, RED, channels=4), 1000)
    assert out.shape == (2, 2, 3)
    assert count_distinct_colours(out) == 1


def test_pillow_methods_cap_palette_size():
    with pytest.raises(InvalidParameterError):
        quantize_colours(solid(2, 2, RED), 1000, "median_cut")


def test_rgba_and_greyscale_inputs_give_rgb_output():
    rgba = solid(5, 3, (10, 20, 30, 0), channels=4)
    assert quantize_colours(rgba, 4).shape == (3, 5, 3)
    grey = np.full((3, 5), 90, dtype=np.uint8)
    out = quantize_colours(grey, 4)
    assert out.shape == (3, 5, 3)
    assert count_distinct_colours(out) == 1


def test_zero_area_input_returns_empty_rgb():
    out = quantize_colours(np.zeros((0, 5, 4), dtype=np.uint8), 16)
    assert out.shape == (0, 5, 3)


def test_quantize_is_deterministic():
    src = noisy_image(20, 20, seed=3)
    a = quantize_colours(src, 8)
    b = quantize_colours(src, 8)
    assert np.array_equal(a, b)


def test_median_cut_keeps_two_colour_image_exact():
    src = solid(8, 8, RED)
    src[4:] = BLUE
    out = quantize_colours(src, 2, "median_cut")
    assert np.array_equal(out, src)


def test_neuquant_palette_size_and_index_of():
    pixels = np.zeros((64, 4), dtype=np.uint8)
    pixels[:, 2] = 255
    pixels[:, 3] = 255
    nq = NeuQuant(pixels, 16)
    assert nq.palette_rgb.shape == (16, 3)
    idx = nq.index_of(np.array([0, 0, 255, 255], dtype=np.uint8))
    assert tuple(nq.palette_rgb[idx]) == BLUE


def test_neuquant_rejects_empty_samples():
    with pytest.raises(InvalidParameterError):
        NeuQuant(np.zeros((0, 4), dtype=np.uint8), 4)


def test_pillow_palette_drops_unused_entries():
    pixels = np.array([[255, 0, 0, 255]] * 10, dtype=np.uint8)
    model = PillowPalette(pixels, 16, method="median_cut")
    assert model.palette_rgb.shape[0] == 1
    assert tuple(model.palette_rgb[0]) == RED
