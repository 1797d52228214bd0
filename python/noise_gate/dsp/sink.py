# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Consumers of the frames passed through by a noise gate."""

import numpy as np
from docstring_inheritance import NumpyDocstringInheritanceInitMeta


class sink(metaclass=NumpyDocstringInheritanceInitMeta):
    """
    Generic consumer of frames, all sinks should inherit from this class
    and implement its methods.

    By using the metaclass NumpyDocstringInheritanceInitMeta, method
    documentation is inherited by the child classes.

    The noise gate calls record for every frame it passes through, and
    end_of_transmission once each time it closes. Neither method returns
    anything, and the gate never reads the sink.
    """

    def record(self, frame):
        """
        Add a frame to the current recording, starting a new recording
        if necessary.

        Parameters
        ----------
        frame : Sequence
            One sample per channel.
        """
        raise NotImplementedError

    def end_of_transmission(self):
        """Reached the end of a transmission, do any necessary cleanup
        (e.g. flush to disk).
        """
        raise NotImplementedError


class counter(sink):
    """
    A sink which counts what it is given.

    Attributes
    ----------
    samples : int
        Number of frames recorded.
    chunks : int
        Number of completed transmissions.
    """

    def __init__(self):
        self.samples = 0
        self.chunks = 0

    def record(self, frame):
        self.samples += 1

    def end_of_transmission(self):
        self.chunks += 1


class collector(sink):
    """
    A sink which keeps every transmission in memory.

    Frames of the transmission in progress are buffered, and stacked into
    a numpy array of shape (n_frames, n_chans) when it ends.

    Attributes
    ----------
    transmissions : list[np.ndarray]
        The completed transmissions, in order.
    """

    def __init__(self):
        self.transmissions = []
        self._current = []

    @property
    def is_recording(self) -> bool:
        """True if a transmission has been started and not yet ended."""
        return len(self._current) > 0

    def record(self, frame):
        # copy, ndarray rows are views of the caller's buffer
        self._current.append(np.array(frame))

    def end_of_transmission(self):
        if not self._current:
            return
        self.transmissions.append(np.stack(self._current))
        self._current = []

    def flush(self):
        """End the transmission in progress, if there is one. Call this
        once the stream has run out, as the gate does not close a
        transmission at the end of its input.
        """
        self.end_of_transmission()


class callback_sink(sink):
    """
    A sink which hands frames to a pair of callables.

    Parameters
    ----------
    record : Callable
        Called with each recorded frame.
    end_of_transmission : Callable, optional
        Called with no arguments at the end of each transmission.
    """

    def __init__(self, record, end_of_transmission=None):
        self._record = record
        self._end_of_transmission = end_of_transmission

    def record(self, frame):
        self._record(frame)

    def end_of_transmission(self):
        if self._end_of_transmission is not None:
            self._end_of_transmission()
