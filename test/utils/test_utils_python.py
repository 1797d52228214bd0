# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
import warnings

import numpy as np
import pytest

import noise_gate.dsp.types as types
import noise_gate.dsp.utils as utils
import noise_gate.dsp.signal_gen as gen


@pytest.mark.parametrize(
    "fmt, equilibrium, full_scale",
    [
        (types.int8, 0, 127),
        (types.int16, 0, 32767),
        (types.int32, 0, 2**31 - 1),
        (types.uint8, 128, 127),
        (types.uint16, 32768, 32767),
        (types.float32, 0.0, 1.0),
    ],
)
def test_format_constants(fmt, equilibrium, full_scale):
    assert fmt.equilibrium == equilibrium
    assert fmt.full_scale == full_scale
    assert fmt.to_signed(equilibrium) == 0


def test_to_signed():
    assert types.uint8.to_signed(np.uint8(0)) == -128
    assert types.uint8.to_signed(255) == 127
    assert types.int16.to_signed(np.int16(-32768)) == -32768
    assert abs(types.int16.to_signed(np.int16(-32768))) == 32768
    assert types.to_signed(np.int16(-32768)) == -32768
    assert isinstance(types.to_signed(np.int16(5)), int)
    assert types.to_signed(-7) == -7
    assert types.to_signed(np.uint8(0)) == -128


def test_threshold_to_signed():
    assert types.int16.threshold_to_signed(100.5) == 100.5
    assert types.uint8.threshold_to_signed(148.5) == 20.5
    assert types.int16.threshold_to_signed(np.int16(100)) == 100
    assert types.float32.threshold_to_signed(0.25) == 0.25


def test_frame_format():
    assert types.frame_format(np.zeros(2, dtype=np.uint16)) is types.uint16
    assert types.frame_format((np.uint8(1), np.uint8(2))) is types.uint8
    assert types.frame_format([1, 2]) is None
    assert types.frame_format([0.5]) is None


def test_to_signed_array():
    x = np.array([-32768, 0, 32767], dtype=np.int16)
    np.testing.assert_array_equal(np.abs(types.int16.to_signed_array(x)), [32768, 0, 32767])

    u = np.array([0, 128, 255], dtype=np.uint8)
    np.testing.assert_array_equal(types.uint8.to_signed_array(u), [-128, 0, 127])

    big = np.array([np.iinfo(np.int64).min], dtype=np.int64)
    assert np.abs(types.int64.to_signed_array(big))[0] == 2**63


@pytest.mark.parametrize("dtype", ["int16", np.int16, np.dtype("uint8"), "float32"])
def test_format_for(dtype):
    assert types.format_for(dtype).dtype == np.dtype(dtype)


@pytest.mark.parametrize("dtype", ["float16", "complex64", "not a type", object])
def test_format_for_unsupported(dtype):
    with pytest.raises(TypeError):
        types.format_for(dtype)


@pytest.mark.parametrize(
    "t, fs, expected",
    [(0.25, 44100, 11025), (0.25, 48000, 12000), (0.0, 48000, 0), (1 / 3, 16000, 5333), (2, 8000, 16000)],
)
def test_seconds_to_samples(t, fs, expected):
    n = utils.seconds_to_samples(t, fs)
    assert n == expected
    assert isinstance(n, int)


@pytest.mark.parametrize(
    "threshold_db, fmt, expected",
    [
        (0, types.int16, 32767),
        (-20, types.int16, 3277),
        (0, types.uint8, 255),
        (-20, types.uint8, 141),
        (-20, types.float32, 0.1),
    ],
)
def test_threshold_from_db(threshold_db, fmt, expected):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        threshold = utils.threshold_from_db(threshold_db, fmt)
    assert threshold == pytest.approx(expected, abs=1e-6)
    assert isinstance(threshold, float) == fmt.is_float


def test_threshold_from_db_saturates():
    with pytest.warns(utils.SaturationWarning):
        threshold = utils.threshold_from_db(6, types.int16)
    assert threshold == 32767


def test_db():
    assert utils.db(1.0) == pytest.approx(0)
    assert utils.db(-0.1) == pytest.approx(-20)
    assert utils.db2gain(-20) == pytest.approx(0.1)


def test_mean_level():
    frames = np.array([[100, -300], [-100, 300]], dtype=np.int16)
    assert utils.mean_level(frames) == 200
    assert utils.mean_level(np.array([], dtype=np.int16)) == 0.0

    u = np.array([28, 228], dtype=np.uint8)
    assert utils.mean_level(u) == 100


def test_bursts():
    fs = 8000
    x = gen.bursts(fs, [(0.1, 0.0), (0.2, 0.5), (0.1, 0.0)])
    assert len(x) == 3200
    assert np.all(x[:800] == 0)
    assert np.max(np.abs(x[800:2400])) == pytest.approx(0.5, rel=1e-3)


@pytest.mark.parametrize("fmt", [types.int16, types.uint8, types.float32])
def test_to_format(fmt):
    x = gen.to_format(np.array([-2.0, -1.0, 0.0, 1.0]), fmt)
    assert x.dtype == fmt.dtype
    np.testing.assert_array_equal(
        fmt.to_signed_array(x), [-fmt.full_scale, -fmt.full_scale, 0, fmt.full_scale]
    )


def test_square():
    x = gen.square(1000, 0.01, 100, 0.5)
    assert len(x) == 10
    assert set(np.abs(x)) == {0.5}
