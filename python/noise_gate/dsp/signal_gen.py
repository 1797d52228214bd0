# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Signal generators for exercising the noise gate."""

import numpy as np
import scipy.signal as spsig

from noise_gate.dsp import types


# These functions return float signals scaled between -1 and 1, which can
# be subsequently converted to a sample format with to_format.


def sin(fs: int, length: float, freq: float, amplitude: float) -> np.ndarray:
    """
    Generate a sinusoidal signal.

    Parameters
    ----------
    fs : int
        The sampling frequency in Hz.
    length : float
        The duration of the signal in seconds.
    freq : float
        The frequency of the sinusoid in Hz.
    amplitude : float
        The amplitude of the sinusoid.

    Returns
    -------
    np.ndarray
        The generated sinusoidal signal.
    """
    t = np.arange(int(fs * length)) / fs
    return amplitude * np.sin(2 * np.pi * freq * t)


def square(fs: int, length: float, freq: float, amplitude: float) -> np.ndarray:
    """
    Generate a square wave signal.

    Parameters
    ----------
    fs : int
        The sampling frequency in Hz.
    length : float
        The duration of the signal in seconds.
    freq : float
        The frequency of the square wave in Hz.
    amplitude : float
        The amplitude of the square wave.

    Returns
    -------
    np.ndarray
        The generated square wave.
    """
    t = np.arange(int(fs * length)) / fs
    return amplitude * spsig.square(2 * np.pi * freq * t)


def white_noise(fs: int, length: float, amplitude: float) -> np.ndarray:
    """Generate uniformly distributed white noise, bounded to
    +/- amplitude.
    """
    return amplitude * (2 * np.random.rand(int(fs * length)) - 1)


def bursts(fs: int, segments, freq: float = 1000, noise_floor: float = 0.0) -> np.ndarray:
    """
    Generate a signal made of sine bursts separated by gaps.

    Parameters
    ----------
    fs : int
        The sampling frequency in Hz.
    segments : list[tuple[float, float]]
        (length in seconds, amplitude) of each segment in turn. An
        amplitude of 0 makes a gap.
    freq : float, optional
        The frequency of the bursts in Hz, by default 1000.
    noise_floor : float, optional
        Amplitude of white noise added over the whole signal, by default
        0.

    Returns
    -------
    np.ndarray
        The generated signal.
    """
    signal = np.concatenate(
        [sin(fs, length, freq, amplitude) for length, amplitude in segments]
    )
    if noise_floor > 0:
        signal += noise_floor * (2 * np.random.rand(len(signal)) - 1)
    return signal


def to_format(signal: np.ndarray, fmt: types.sample_format) -> np.ndarray:
    """
    Convert a float signal scaled between -1 and 1 to a sample format,
    clipping anything out of range.

    Parameters
    ----------
    signal : np.ndarray
        The float signal.
    fmt : sample_format
        The format to convert to.

    Returns
    -------
    np.ndarray
        The signal as raw samples of fmt.
    """
    signal = np.clip(signal, -1, 1)
    if fmt.is_float:
        return signal.astype(fmt.dtype)
    return (np.round(signal * fmt.full_scale) + fmt.equilibrium).astype(fmt.dtype)
