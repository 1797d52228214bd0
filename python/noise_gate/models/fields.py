# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Shared pydantic fields."""

from functools import partial
from pathlib import Path

from pydantic import Field

DEFAULT_RELEASE_T = partial(
    Field,
    default=0.25,
    ge=0,
    description="Time in seconds the gate stays open after the signal drops below the threshold.",
)
DEFAULT_THRESHOLD = partial(
    Field,
    default=None,
    description="Level at which the gate opens, as a raw sample value.",
)
DEFAULT_THRESHOLD_DB = partial(
    Field,
    default=None,
    le=0,
    description="Level at which the gate opens, in dB relative to full scale.",
)
DEFAULT_PREFIX = partial(
    Field, default="clip_", description="Prefix of the file name of each clip."
)
DEFAULT_OUTPUT_DIR = partial(
    Field, default=Path("."), description="Directory the clips are written to."
)
