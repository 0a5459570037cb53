"""
End-to-end properties of the transform.

Run with: pytest tests/test_pipeline.py -v
"""
import numpy as np
import pytest

import frst.pipeline as pipeline
from frst import (transform, try_transform, Mode, TransformParameters, InvalidParameterError,
                  TransformResult)


ALL_MODES = [Mode.BRIGHT, Mode.DARK, Mode.BOTH]


def peak_location(score):
    return np.unravel_index(np.argmax(score), score.shape)


# ============================================================
# Shape, purity, degenerate input
# ============================================================

@pytest.mark.parametrize("shape", [(21, 21), (15, 40), (33, 8), (1, 1), (2, 3)])
@pytest.mark.parametrize("mode", ALL_MODES)
def test_output_matches_input_shape(shape, mode):
    rng = np.random.default_rng(1)
    image = rng.integers(0, 256, size=shape).astype(np.uint8)
    out = transform(image, radius=4, alpha=2, std_factor=0.25, mode=mode)
    assert out.shape == shape
    assert out.dtype == np.float64


@pytest.mark.parametrize("value", [0, 128, 255])
@pytest.mark.parametrize("shape", [(1, 1), (5, 9), (32, 32)])
@pytest.mark.parametrize("mode", ALL_MODES)
def test_constant_image_gives_all_zero(value, shape, mode):
    image = np.full(shape, value, dtype=np.uint8)
    out = transform(image, radius=3, alpha=2, std_factor=0.1, mode=mode)
    assert out.shape == shape
    assert not out.any()


def test_repeated_calls_are_bit_identical(random_image):
    first = transform(random_image, 5, 3.0, 0.2, Mode.BOTH)
    second = transform(random_image, 5, 3.0, 0.2, Mode.BOTH)
    assert np.array_equal(first, second)


def test_input_is_not_modified(random_image):
    original = random_image.copy()
    transform(random_image, 5, 2.0, 0.1, "both")
    assert np.array_equal(random_image, original)


def test_workers_do_not_change_the_result(random_image):
    serial = transform(random_image, 6, 2.0, 0.1, Mode.BOTH)
    banded = transform(random_image, 6, 2.0, 0.1, Mode.BOTH, workers=3)
    np.testing.assert_allclose(banded, serial, rtol=1e-9, atol=1e-12)


# ============================================================
# Polarity and geometry
# ============================================================

def test_bright_disk_peaks_at_center_in_bright_mode(make_disk):
    image = make_disk(shape=(21, 21), center=(10, 10), radius=6)
    score = transform(image, radius=6, alpha=2, std_factor=0.1, mode=Mode.BRIGHT)
    row, col = peak_location(score)
    assert abs(row - 10) <= 1 and abs(col - 10) <= 1


def test_dark_disk_peaks_at_center_in_dark_mode(make_disk):
    image = make_disk(shape=(21, 21), center=(10, 10), radius=6, foreground=0, background=255)
    score = transform(image, radius=6, alpha=2, std_factor=0.1, mode=Mode.DARK)
    row, col = peak_location(score)
    assert abs(row - 10) <= 1 and abs(col - 10) <= 1


def test_dark_mode_on_inverted_image_mirrors_bright_mode(make_disk):
    bright = make_disk(shape=(25, 25), center=(12, 11), radius=7)
    dark = 255 - bright
    np.testing.assert_array_equal(
        transform(bright, 7, 2, 0.1, Mode.BRIGHT),
        transform(dark, 7, 2, 0.1, Mode.DARK),
    )


def test_bright_disk_votes_away_from_center_in_dark_mode(make_disk):
    # backward votes land about two radii out, far from the disk interior
    image = make_disk(shape=(21, 21), center=(10, 10), radius=6)
    score = transform(image, radius=6, alpha=2, std_factor=0.1, mode=Mode.DARK)
    assert score[10, 10] == 0.0
    row, col = peak_location(score)
    assert max(abs(row - 10), abs(col - 10)) > 3


def test_off_center_disk_keeps_row_and_column_axes(make_disk):
    image = make_disk(shape=(31, 41), center=(9, 27), radius=5)
    score = transform(image, radius=5, alpha=2, std_factor=0.1, mode=Mode.BRIGHT)
    row, col = peak_location(score)
    assert abs(row - 9) <= 1 and abs(col - 27) <= 1


def test_both_mode_is_not_the_sum_of_bright_and_dark(make_disk):
    image = np.full((40, 40), 128, dtype=np.uint8)
    rows, cols = np.mgrid[0:40, 0:40]
    image[(rows - 12) ** 2 + (cols - 12) ** 2 <= 25] = 255
    image[(rows - 28) ** 2 + (cols - 27) ** 2 <= 16] = 0

    bright = transform(image, 5, 2, 0.1, Mode.BRIGHT)
    dark = transform(image, 5, 2, 0.1, Mode.DARK)
    both = transform(image, 5, 2, 0.1, Mode.BOTH)

    assert bright.any() and dark.any() and both.any()
    # normalization denominators are shared when both polarities vote together
    assert not np.allclose(both, bright + dark)


def test_higher_alpha_suppresses_diffuse_response(make_disk):
    image = make_disk(shape=(31, 31), center=(15, 15), radius=6)
    soft = transform(image, 6, 1.0, 0.1, Mode.BRIGHT)
    strict = transform(image, 6, 8.0, 0.1, Mode.BRIGHT)
    # relative to the peak, off-peak responses shrink as alpha grows
    assert (strict / strict.max()).mean() < (soft / soft.max()).mean()


# ============================================================
# Parameters and errors
# ============================================================

@pytest.mark.parametrize("mode, expected", [
    (Mode.BRIGHT, Mode.BRIGHT), ("dark", Mode.DARK), (" Both ", Mode.BOTH),
    ("BRIGHT", Mode.BRIGHT), (1, Mode.BRIGHT), (2, Mode.DARK), (np.int64(3), Mode.BOTH),
])
def test_mode_parsing(mode, expected):
    assert Mode.parse(mode) is expected


def test_mode_polarity_flags():
    assert (Mode.BRIGHT.bright, Mode.BRIGHT.dark) == (True, False)
    assert (Mode.DARK.bright, Mode.DARK.dark) == (False, True)
    assert (Mode.BOTH.bright, Mode.BOTH.dark) == (True, True)


@pytest.mark.parametrize("mode", ["sideways", "", 0, 4, -1, None, True, 2.0])
def test_invalid_mode_raises_before_accumulating(mode, monkeypatch, random_image):
    def fail(*args, **kwargs):
        raise AssertionError("votes must not be accumulated for an invalid mode")

    monkeypatch.setattr(pipeline, "accumulate_votes", fail)
    with pytest.raises(InvalidParameterError):
        transform(random_image, radius=5, alpha=2, std_factor=0.1, mode=mode)


@pytest.mark.parametrize("kwargs", [
    dict(radius=0), dict(radius=-3), dict(radius=2.5), dict(radius=True),
    dict(alpha=0.5), dict(alpha=float("nan")), dict(std_factor=0.0), dict(std_factor=-1.0),
])
def test_invalid_parameters(kwargs):
    params = dict(radius=5, alpha=2.0, std_factor=0.1, mode=Mode.DARK)
    params.update(kwargs)
    with pytest.raises(InvalidParameterError):
        TransformParameters(**params)


def test_color_image_is_rejected():
    with pytest.raises(InvalidParameterError):
        transform(np.zeros((10, 10, 3), dtype=np.uint8), 3)


def test_invalid_parameter_is_a_value_error():
    with pytest.raises(ValueError):
        transform(np.zeros((5, 5), dtype=np.uint8), 3, mode="diagonal")


def test_try_transform_success(random_image):
    result = try_transform(random_image, 4, mode="bright")
    assert isinstance(result, TransformResult)
    assert result.ok
    assert result.error is None
    assert np.array_equal(result.unwrap(), transform(random_image, 4, mode="bright"))


def test_try_transform_failure(random_image):
    result = try_transform(random_image, 4, mode="sideways")
    assert not result.ok
    assert result.value is None
    assert isinstance(result.error, InvalidParameterError)
    with pytest.raises(InvalidParameterError):
        result.unwrap()


def test_parameters_to_dict():
    params = TransformParameters(radius=12, alpha=2, std_factor=0.1, mode="dark")
    assert params.to_dict() == {"radius": 12, "alpha": 2.0, "std_factor": 0.1, "mode": "dark"}
