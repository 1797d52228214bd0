# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Test the noise gate configuration models."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from noise_gate.models.gate_model import NoiseGateParameters, SplitterConfig


@pytest.mark.parametrize(
    "parameters",
    [
        {"threshold": 100},
        {"threshold": 0.25},
        {"threshold_db": -40},
        {"auto_threshold": True},
        {"threshold": 100, "auto_threshold": False, "release_t": 0},
    ],
)
def test_valid_parameters(parameters):
    p = NoiseGateParameters(**parameters)
    assert p.release_t == parameters.get("release_t", 0.25)


@pytest.mark.parametrize(
    "parameters",
    [
        {},
        {"threshold": 100, "threshold_db": -40},
        {"threshold": 100, "auto_threshold": True},
        {"threshold_db": 3},
        {"threshold": 100, "release_t": -0.1},
    ],
)
def test_invalid_parameters(parameters):
    with pytest.raises(ValidationError):
        NoiseGateParameters(**parameters)


def test_threshold_keeps_int():
    assert isinstance(NoiseGateParameters(threshold=100).threshold, int)


def test_splitter_defaults():
    config = SplitterConfig(input_file="in.wav", parameters={"threshold": 100})
    assert config.input_file == Path("in.wav")
    assert config.output_dir == Path(".")
    assert config.prefix == "clip_"
    assert config.dtype == "int16"
    assert config.blocksize is None


@pytest.mark.parametrize("field, value", [("dtype", "uint8"), ("blocksize", 0)])
def test_splitter_invalid(field, value):
    with pytest.raises(ValidationError):
        SplitterConfig(input_file="in.wav", parameters={"threshold": 100}, **{field: value})


def test_from_json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "input_file": "speech.wav",
                "output_dir": "clips",
                "blocksize": 1024,
                "unknown": "ignored",
                "parameters": {"threshold_db": -30, "release_t": 0.5},
            }
        )
    )
    config = SplitterConfig.from_json_file(path)
    assert config.output_dir == Path("clips")
    assert config.blocksize == 1024
    assert config.parameters.threshold_db == -30
    assert config.parameters.release_t == 0.5
