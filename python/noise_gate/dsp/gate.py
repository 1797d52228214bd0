# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""The noise gate DSP block.

A noise gate that splits a stream of audio based on volume, passing
spans of signal through to a sink and skipping periods of silence.
See https://en.wikipedia.org/wiki/Noise_gate.
"""

from dataclasses import dataclass

import numpy as np

from noise_gate.dsp import types


@dataclass(frozen=True)
class Open:
    """The gate is passing frames through to the sink."""


@dataclass(frozen=True)
class Closing:
    """The signal has dropped below the threshold, the gate keeps passing
    frames through for remaining_samples more silent frames.
    """

    remaining_samples: int


@dataclass(frozen=True)
class Closed:
    """The gate is skipping silence."""


def below_threshold(frame, threshold, fmt=None) -> bool:
    """
    Check if every channel of a frame is quieter than the threshold.

    Magnitudes are compared in the signed domain of fmt, so a single
    channel at or above the threshold makes the frame signal rather than
    silence.

    Parameters
    ----------
    frame : Sequence
        One sample per channel.
    threshold : int | float
        Threshold as a raw sample value.
    fmt : sample_format, optional
        Format of the samples. If None, a frame of numpy samples uses the
        format of its dtype, and plain numbers are taken to already be
        signed around 0.

    Returns
    -------
    bool
        True if the frame is silence.
    """
    if fmt is None:
        fmt = types.frame_format(frame)
    if fmt is None:
        limit = abs(types.to_signed(threshold))
        return all(abs(sample) < limit for sample in frame)

    limit = abs(fmt.threshold_to_signed(threshold))
    return all(abs(fmt.to_signed(sample)) < limit for sample in frame)


def below_threshold_array(frames, threshold, fmt=None) -> np.ndarray:
    """
    Vectorised below_threshold, for a block of frames.

    Parameters
    ----------
    frames : np.ndarray
        Frames of shape (n_frames, n_chans).
    threshold : int | float
        Threshold as a raw sample value.
    fmt : sample_format, optional
        Format of the samples, by default looked up from the dtype of
        frames.

    Returns
    -------
    np.ndarray
        Boolean array of length n_frames, True where the frame is
        silence.
    """
    if fmt is None:
        fmt = types.format_for(frames.dtype)
    limit = abs(fmt.threshold_to_signed(threshold))
    return np.all(np.abs(fmt.to_signed_array(frames)) < limit, axis=1)


def transition(state, silent: bool, release_time: int):
    """Work out the next state of the gate, given whether the current
    frame is silence.
    """
    if isinstance(state, Open):
        if silent:
            return Closing(max(release_time, 0))
        return Open()

    if isinstance(state, Closing):
        if not silent:
            # signal interrupts the release, the countdown restarts on
            # the next silence
            return Open()
        if state.remaining_samples <= 0:
            return Closed()
        return Closing(state.remaining_samples - 1)

    if isinstance(state, Closed):
        if silent:
            return Closed()
        return Open()

    raise TypeError(f"unknown gate state {state!r}")


def next_state(state, frame, open_threshold, release_time: int, fmt=None):
    """Work out the next state of the gate after processing one frame."""
    return transition(state, below_threshold(frame, open_threshold, fmt), release_time)


class noise_gate:
    """
    A noise gate which splits a stream of audio based on volume,
    skipping periods of silence.

    The gate opens as soon as any channel of a frame reaches the
    threshold. Once the signal drops below the threshold the gate keeps
    passing frames through for release_time more frames before closing.
    Each span of frames passed through while the gate is open is a
    transmission, which ends with a call to the sink's
    end_of_transmission.

    The gate starts off closed. State is carried between calls to
    process_frames, so a long stream can be processed in blocks.

    Parameters
    ----------
    open_threshold : int | float
        The volume level at which the gate will open (begin recording),
        as a raw sample value.
    release_time : int
        The number of silent frames the gate takes to go from open to
        fully closed. Negative values are treated as 0.
    fmt : sample_format, optional
        Format of the samples. If None, numpy input (arrays, rows or
        scalars) uses the format of its dtype, and plain numbers are
        taken to already be signed around 0.

    Attributes
    ----------
    open_threshold : int | float
    release_time : int
    fmt : sample_format | None
    """

    def __init__(self, open_threshold, release_time: int, fmt=None):
        self.open_threshold = open_threshold
        self.release_time = release_time
        self.fmt = fmt
        self._state = Closed()

    @property
    def state(self):
        """The current state of the gate, one of Open, Closing or
        Closed.
        """
        return self._state

    def is_open(self) -> bool:
        """Is the gate currently passing frames through to the sink?"""
        return isinstance(self._state, (Open, Closing))

    def is_closed(self) -> bool:
        """Is the gate currently ignoring silence?"""
        return not self.is_open()

    def process_frames(self, frames, sink):
        """
        Process a batch of frames, passing spans of signal through to a
        sink.

        Frames are forwarded to sink.record unmodified while the gate is
        open, including the release tail. When the gate closes,
        sink.end_of_transmission is called once. If the frames run out
        while the gate is open, end_of_transmission is not called; it is
        up to the caller to finalise the sink at the end of the stream.

        Parameters
        ----------
        frames : Iterable | np.ndarray
            Frames to process in order. Any iterable of per-channel
            sequences is consumed lazily. A 2-D ndarray is taken as
            (n_frames, n_chans), and a 1-D ndarray as a mono signal.
        sink : sink
            Consumer of the recorded frames.
        """
        if isinstance(frames, np.ndarray):
            if frames.ndim == 1:
                frames = frames[:, np.newaxis]
            silence = below_threshold_array(frames, self.open_threshold, self.fmt)
            decisions = zip(frames, silence.tolist())
        else:
            decisions = (
                (frame, below_threshold(frame, self.open_threshold, self.fmt))
                for frame in frames
            )

        for frame, silent in decisions:
            previously_open = self.is_open()

            self._state = transition(self._state, silent, self.release_time)

            if self.is_open():
                sink.record(frame)
            elif previously_open:
                # the gate was previously open and has just closed
                sink.end_of_transmission()
