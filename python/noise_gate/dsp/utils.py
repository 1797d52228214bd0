# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Utility functions used by the noise gate and its tools."""

import warnings

import numpy as np

from noise_gate.dsp import types

FLT_MIN = np.finfo(float).tiny


class SaturationWarning(Warning):
    """A warning for when a value has been saturated to prevent overflow."""

    pass


def db(input):
    """Convert an amplitude to decibels (20*log10(abs(x)))."""
    out = 20 * np.log10(np.abs(input) + FLT_MIN)
    return out


def db2gain(input):
    """Convert from decibels to amplitude (10^(x/20))."""
    out = 10 ** (input / 20)
    return out


def seconds_to_samples(t: float, fs: int) -> int:
    """Convert a time in seconds to a whole number of samples at fs,
    rounding to the nearest sample.
    """
    return int(round(fs * t))


def threshold_from_db(threshold_db: float, fmt: types.sample_format) -> int | float:
    """
    Calculate the raw sample value of a threshold given in decibels
    relative to full scale.

    The returned value is in the native encoding of fmt, so unsigned
    formats are offset by their equilibrium. Integer formats are rounded
    to the nearest integer. A threshold above full scale saturates to
    full scale.

    Parameters
    ----------
    threshold_db : float
        Threshold in dBFS.
    fmt : sample_format
        Format of the samples the threshold is compared against.

    Returns
    -------
    int | float
        The threshold as a raw sample value.
    """
    magnitude = db2gain(threshold_db) * fmt.full_scale

    if magnitude > fmt.full_scale:
        warnings.warn(
            "Threshold %.2f dB above full scale, saturating to 0 dB" % threshold_db,
            SaturationWarning,
        )
        magnitude = fmt.full_scale

    if fmt.is_float:
        return float(magnitude) + fmt.equilibrium
    return int(round(magnitude)) + fmt.equilibrium


def mean_level(frames, fmt=None) -> float:
    """
    Mean signed magnitude of all the samples in a block of frames.

    Parameters
    ----------
    frames : np.ndarray
        Frames of shape (n_frames, n_chans), or a 1-D mono signal.
    fmt : sample_format, optional
        Format of the samples, by default looked up from the dtype of
        frames.

    Returns
    -------
    float
        The mean magnitude, in the signed domain of fmt. 0 for an empty
        block.
    """
    frames = np.asarray(frames)
    if frames.size == 0:
        return 0.0
    if fmt is None:
        fmt = types.format_for(frames.dtype)
    return float(np.mean(np.abs(fmt.to_signed_array(frames))))
