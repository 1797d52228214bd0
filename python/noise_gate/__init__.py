# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""
A noise gate for splitting an audio stream into transmissions.

Spans of signal above a threshold are passed through to a sink, periods
of silence are skipped.
"""

from importlib import metadata as _metadata

__version__ = _metadata.version("noise_gate")
