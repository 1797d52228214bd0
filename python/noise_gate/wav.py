# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Reading WAV files, and a sink that writes each transmission to its
own WAV file.
"""

import logging
from pathlib import Path

import numpy as np
import soundfile as sf

from noise_gate.dsp.sink import sink

logger = logging.getLogger(__name__)

_SF_ERRORS = (sf.SoundFileError, OSError)


class WavIOError(OSError):
    """A WAV file could not be read or written.

    Attributes
    ----------
    path : Path
        The file the error happened on.
    """

    def __init__(self, path, reason):
        super().__init__(f"{reason}: {path}")
        self.path = Path(path)


def info(path):
    """Get the header of a WAV file (sample rate, channels, subtype...)."""
    try:
        return sf.info(str(path))
    except _SF_ERRORS as e:
        raise WavIOError(path, "could not open") from e


def read_frames(path, dtype="int16"):
    """
    Read a whole WAV file into memory.

    Parameters
    ----------
    path : str | Path
        The file to read.
    dtype : str, optional
        Sample type to read as, by default "int16".

    Returns
    -------
    tuple[np.ndarray, int]
        The frames, with shape (n_frames, n_chans), and the sample rate.
    """
    try:
        frames, fs = sf.read(str(path), dtype=dtype, always_2d=True)
    except _SF_ERRORS as e:
        raise WavIOError(path, "could not read") from e
    return frames, fs


def read_blocks(path, blocksize, dtype="int16"):
    """
    Read a WAV file a block at a time.

    The header is read straight away, so a missing or unreadable file is
    reported before any blocks are requested.

    Parameters
    ----------
    path : str | Path
        The file to read.
    blocksize : int
        Number of frames in each block; the last block may be shorter.
    dtype : str, optional
        Sample type to read as, by default "int16".

    Returns
    -------
    tuple[Iterator[np.ndarray], int]
        An iterator over blocks of shape (n_frames, n_chans), and the
        sample rate.
    """
    fs = info(path).samplerate
    return _blocks(path, blocksize, dtype), fs


def _blocks(path, blocksize, dtype):
    try:
        for block in sf.blocks(str(path), blocksize=blocksize, dtype=dtype, always_2d=True):
            yield block
    except _SF_ERRORS as e:
        raise WavIOError(path, "could not read") from e


class clip_writer(sink):
    """
    A sink which writes each transmission to a new WAV file.

    Files are named ``<prefix><n>.wav`` in output_dir, numbered from 0.
    A file is created on the first frame of a transmission and closed at
    its end, so each file lives for exactly one transmission. Frames are
    buffered and written a block at a time.

    The gate does not end a transmission that is still going when the
    input runs out, so call close (or use the writer as a context
    manager) once the stream is finished.

    Parameters
    ----------
    output_dir : str | Path
        Directory to write the clips to, which must exist.
    prefix : str
        Prefix of each clip's file name.
    fs : int
        Sample rate of the clips.
    n_chans : int
        Number of channels in each frame.
    subtype : str, optional
        soundfile subtype of the clips, e.g. "PCM_16". Defaults to the
        soundfile default for WAV.
    dtype : str, optional
        Sample type frames are written as, by default "int16".
    buffer_frames : int, optional
        Number of frames buffered before writing, by default 4096.

    Attributes
    ----------
    clip_number : int
        Number of clips started so far.
    paths : list[Path]
        The clips that have been finished, in order.
    """

    def __init__(
        self, output_dir, prefix, fs, n_chans, subtype=None, dtype="int16", buffer_frames=4096
    ):
        self.output_dir = Path(output_dir)
        self.prefix = prefix
        self.fs = fs
        self.n_chans = n_chans
        self.subtype = subtype
        self.dtype = np.dtype(dtype)
        self.buffer_frames = buffer_frames

        self.clip_number = 0
        self.paths = []
        self._file = None
        self._path = None
        self._pending = []

    @property
    def is_recording(self) -> bool:
        """True while a clip is open."""
        return self._file is not None

    def _open(self):
        path = self.output_dir / f"{self.prefix}{self.clip_number}.wav"
        self.clip_number += 1
        try:
            self._file = sf.SoundFile(
                str(path),
                "w",
                samplerate=self.fs,
                channels=self.n_chans,
                subtype=self.subtype,
                format="WAV",
            )
        except _SF_ERRORS as e:
            raise WavIOError(path, "could not create clip") from e
        self._path = path
        logger.debug("started clip %s", path)

    def _write_pending(self):
        if not self._pending:
            return
        block = np.asarray(self._pending, dtype=self.dtype).reshape(-1, self.n_chans)
        self._pending = []
        try:
            self._file.write(block)
        except _SF_ERRORS as e:
            raise WavIOError(self._path, "could not write clip") from e

    def record(self, frame):
        if self._file is None:
            # lazily start a new clip, so a clip is only created once
            # there is something to put in it
            self._open()

        # copy, ndarray rows are views of the caller's buffer
        self._pending.append(np.array(frame, dtype=self.dtype))
        if len(self._pending) >= self.buffer_frames:
            self._write_pending()

    def end_of_transmission(self):
        if self._file is None:
            return

        path = self._path
        try:
            self._write_pending()
            try:
                self._file.close()
            except _SF_ERRORS as e:
                raise WavIOError(path, "could not finalise clip") from e
        finally:
            self._file = None
            self._path = None
            self._pending = []

        self.paths.append(path)
        logger.info("wrote %s", path)

    def close(self):
        """Finish the clip in progress, if there is one."""
        self.end_of_transmission()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self.close()
            return

        # already unwinding, a failure to finalise must not replace the
        # error that got us here
        try:
            self.close()
        except WavIOError as e:
            logger.error("%s", e)
