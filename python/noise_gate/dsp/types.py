# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Sample formats, and their conversion to a signed numeric domain."""

import numpy as np


class sample_format:
    """
    Describes how a sample encoding maps onto a signed domain where
    silence is zero.

    Parameters
    ----------
    name : str
        Name of the format, e.g. "int16".
    dtype : np.dtype
        numpy type of the raw samples.

    Attributes
    ----------
    name : str
    dtype : np.dtype
    equilibrium : int | float
        The raw sample value representing silence. This is 0 for signed
        integers and floats, and half the range for unsigned integers.
    full_scale : int | float
        The largest signed magnitude a sample can have.
    """

    def __init__(self, name, dtype):
        self.name = name
        self.dtype = np.dtype(dtype)

        if self.dtype.kind == "f":
            self.equilibrium = 0.0
            self.full_scale = 1.0
            self._signed_dtype = np.float64
        elif self.dtype.kind in "iu":
            bits = self.dtype.itemsize * 8
            self.equilibrium = 2 ** (bits - 1) if self.dtype.kind == "u" else 0
            self.full_scale = 2 ** (bits - 1) - 1
            # wide enough that abs() of the most negative value can't
            # overflow, 64 bit samples fall back to Python ints
            self._signed_dtype = object if bits == 64 else np.int64
        else:
            raise TypeError(f"sample type {self.dtype} not supported")

    @property
    def is_float(self):
        return self.dtype.kind == "f"

    def to_signed(self, sample):
        """Convert a single raw sample to a Python int or float, relative
        to equilibrium.
        """
        if self.is_float:
            return float(sample) - self.equilibrium
        return int(sample) - self.equilibrium

    def threshold_to_signed(self, threshold):
        """Convert a threshold to the signed domain. Unlike to_signed, a
        fractional threshold on an integer format is kept as it is.
        """
        if isinstance(threshold, np.generic):
            threshold = threshold.item()
        return threshold - self.equilibrium

    def to_signed_array(self, samples) -> np.ndarray:
        """Convert an array of raw samples to int64 or float64, relative to
        equilibrium.
        """
        return np.asarray(samples).astype(self._signed_dtype) - self.equilibrium

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"sample_format({self.name!r})"


int8 = sample_format("int8", np.int8)
int16 = sample_format("int16", np.int16)
int32 = sample_format("int32", np.int32)
int64 = sample_format("int64", np.int64)
uint8 = sample_format("uint8", np.uint8)
uint16 = sample_format("uint16", np.uint16)
uint32 = sample_format("uint32", np.uint32)
uint64 = sample_format("uint64", np.uint64)
float32 = sample_format("float32", np.float32)
float64 = sample_format("float64", np.float64)

FORMATS = {
    f.name: f
    for f in (int8, int16, int32, int64, uint8, uint16, uint32, uint64, float32, float64)
}


def format_for(dtype) -> sample_format:
    """Look up the sample format of a numpy dtype (or dtype name)."""
    try:
        return FORMATS[np.dtype(dtype).name]
    except (KeyError, TypeError):
        raise TypeError(f"sample type {dtype} not supported") from None


def to_signed(sample, fmt=None):
    """
    Convert a raw sample to the signed domain of fmt.

    With no format, numpy scalars use the format of their dtype, and
    anything else is taken to already be signed around 0. The result is a
    Python number, so negation can't overflow.
    """
    if fmt is not None:
        return fmt.to_signed(sample)
    if isinstance(sample, np.generic):
        return format_for(sample.dtype).to_signed(sample)
    return sample


def frame_format(frame):
    """
    Work out the sample format of a frame from its numpy dtype.

    Returns None for a frame of plain Python numbers, which are taken to
    already be signed around 0.
    """
    if isinstance(frame, np.ndarray):
        return format_for(frame.dtype)
    if any(isinstance(sample, np.generic) for sample in frame):
        return format_for(np.asarray(frame).dtype)
    return None
