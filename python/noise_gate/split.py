# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""Split a WAV file into clips, one per span of signal, skipping silence."""

import argparse
import json
import logging
import sys
from pathlib import Path

import soundfile as sf

from noise_gate import wav
from noise_gate.dsp import types, utils
from noise_gate.dsp.gate import noise_gate
from noise_gate.models.gate_model import SplitterConfig

logger = logging.getLogger(__name__)


def setup_logger(name="noise_gate", level=logging.INFO):
    """Log to stdout, for use from the command line."""
    log = logging.getLogger(name)
    log.setLevel(level)
    if log.handlers:  # avoid dupes
        return log
    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
    log.addHandler(h)
    return log


def _number(value):
    try:
        return int(value)
    except ValueError:
        return float(value)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="noise-gate-split",
        description="Split a WAV file into clips, one per span of signal above a threshold.",
    )
    parser.add_argument("input_file", nargs="?", type=Path, help="The WAV file to read")

    threshold = parser.add_mutually_exclusive_group()
    threshold.add_argument(
        "-t", "--threshold", type=_number, help="The noise threshold, as a raw sample value"
    )
    threshold.add_argument(
        "--threshold-db", type=float, help="The noise threshold in dB relative to full scale"
    )
    threshold.add_argument(
        "--auto-threshold",
        action="store_true",
        default=None,
        help="Use the mean level of the input as the noise threshold",
    )

    parser.add_argument(
        "-r", "--release-time", type=float, help="The release time in seconds (default 0.25)"
    )
    parser.add_argument(
        "-o", "--output-dir", type=Path, help="Where to write the split files (default .)"
    )
    parser.add_argument(
        "-p", "--prefix", help="A prefix to insert before each clip (default clip_)"
    )
    parser.add_argument(
        "--dtype",
        choices=["int16", "int32", "float32", "float64"],
        help="Sample type to read the input as, and to give the threshold in (default int16)",
    )
    parser.add_argument(
        "--blocksize", type=int, help="Process the input this many frames at a time"
    )
    parser.add_argument(
        "-c", "--config", type=Path, help="JSON file of settings, overridden by the options above"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each clip as it starts")
    return parser.parse_args(argv)


def config_from_args(args) -> SplitterConfig:
    """Merge the command line options over the config file (if any) and
    validate the result.
    """
    config = {}
    if args.config is not None:
        config = json.loads(args.config.read_text())
        if not isinstance(config, dict):
            raise ValueError(f"expected a JSON object in {args.config}")

    parameters = dict(config.get("parameters", {}))
    cli_thresholds = {
        "threshold": args.threshold,
        "threshold_db": args.threshold_db,
        "auto_threshold": args.auto_threshold,
    }
    if any(v is not None for v in cli_thresholds.values()):
        # a threshold on the command line replaces the one in the file
        for key in cli_thresholds:
            parameters.pop(key, None)
        parameters.update({k: v for k, v in cli_thresholds.items() if v is not None})
    if args.release_time is not None:
        parameters["release_t"] = args.release_time
    config["parameters"] = parameters

    overrides = {
        "input_file": args.input_file,
        "output_dir": args.output_dir,
        "prefix": args.prefix,
        "dtype": args.dtype,
        "blocksize": args.blocksize,
    }
    config.update({k: v for k, v in overrides.items() if v is not None})

    return SplitterConfig.model_validate(config)


def _read(config: SplitterConfig):
    if config.blocksize is None:
        frames, fs = wav.read_frames(config.input_file, config.dtype)
        return [frames], fs
    return wav.read_blocks(config.input_file, config.blocksize, config.dtype)


def resolve_threshold(config: SplitterConfig, fmt: types.sample_format):
    """Work out the raw sample value of the threshold from whichever
    setting was given.
    """
    parameters = config.parameters
    if parameters.threshold is not None:
        return parameters.threshold
    if parameters.threshold_db is not None:
        return utils.threshold_from_db(parameters.threshold_db, fmt)

    # auto threshold, this needs a pass over the whole input first
    blocks, _ = _read(config)
    total = 0.0
    count = 0
    for block in blocks:
        total += utils.mean_level(block, fmt) * block.size
        count += block.size
    level = total / count if count else 0.0
    logger.info("mean level of %s is %.1f dBFS", config.input_file, utils.db(level / fmt.full_scale))
    return level if fmt.is_float else int(round(level))


def split(config: SplitterConfig) -> list[Path]:
    """
    Split the input file of config into clips.

    Parameters
    ----------
    config : SplitterConfig
        What to split, and how.

    Returns
    -------
    list[Path]
        The clips written, in order.
    """
    fmt = types.FORMATS[config.dtype]
    header = wav.info(config.input_file)
    subtype = header.subtype if sf.check_format("WAV", header.subtype) else None

    threshold = resolve_threshold(config, fmt)
    blocks, fs = _read(config)
    release_time = utils.seconds_to_samples(config.parameters.release_t, fs)

    try:
        config.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise wav.WavIOError(config.output_dir, "could not create output directory") from e

    logger.debug("threshold %s, release time %d samples", threshold, release_time)
    gate = noise_gate(threshold, release_time, fmt)

    # the writer is closed at the end of the input whatever state the gate
    # is in, so a trailing transmission is still finalised
    with wav.clip_writer(
        config.output_dir,
        config.prefix,
        fs,
        header.channels,
        subtype=subtype,
        dtype=config.dtype,
    ) as writer:
        for block in blocks:
            gate.process_frames(block, writer)

    return writer.paths


def main(argv=None):
    args = parse_args(argv)
    setup_logger(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = config_from_args(args)
        paths = split(config)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    logger.info("split %s into %d clips", config.input_file, len(paths))
    return 0


if __name__ == "__main__":
    sys.exit(main())
