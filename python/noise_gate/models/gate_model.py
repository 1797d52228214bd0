# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Models for the noise gate and the WAV splitter."""

from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from noise_gate.models.fields import (
    DEFAULT_RELEASE_T,
    DEFAULT_THRESHOLD,
    DEFAULT_THRESHOLD_DB,
    DEFAULT_PREFIX,
    DEFAULT_OUTPUT_DIR,
)


class NoiseGateParameters(BaseModel, extra="ignore"):
    """Parameters for the noise gate.

    Exactly one way of setting the threshold must be chosen.

    Attributes
    ----------
        threshold: Level at which the gate opens, as a raw sample value
        threshold_db: Level at which the gate opens (dBFS)
        auto_threshold: Use the mean level of the input as the threshold
        release_t: Time for the gate to close after the signal drops below threshold (seconds)
    """

    threshold: Optional[Union[int, float]] = DEFAULT_THRESHOLD()
    threshold_db: Optional[float] = DEFAULT_THRESHOLD_DB()
    auto_threshold: bool = Field(
        default=False,
        description="Use the mean level of the input as the threshold.",
    )
    release_t: float = DEFAULT_RELEASE_T()

    @model_validator(mode="after")
    def _one_threshold(self):
        n_set = sum(
            [self.threshold is not None, self.threshold_db is not None, self.auto_threshold]
        )
        if n_set != 1:
            raise ValueError(
                "exactly one of threshold, threshold_db or auto_threshold must be set"
            )
        return self


class SplitterConfig(BaseModel, extra="ignore"):
    """Configuration of a run of the WAV splitter."""

    input_file: Path = Field(..., description="The WAV file to read.")
    output_dir: Path = DEFAULT_OUTPUT_DIR()
    prefix: str = DEFAULT_PREFIX()
    dtype: Literal["int16", "int32", "float32", "float64"] = Field(
        default="int16",
        description="Sample type the input is read as, and the threshold is given in.",
    )
    blocksize: Optional[int] = Field(
        default=None,
        gt=0,
        description="Number of frames read at a time. Read the whole file at once if not set.",
    )
    parameters: NoiseGateParameters

    @classmethod
    def from_json_file(cls, path):
        """Load a configuration from a JSON file."""
        return cls.model_validate_json(Path(path).read_text())
