# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
"""This sub-package contains the noise gate and the sinks it drives."""

from noise_gate.dsp.gate import (
    noise_gate as noise_gate,
    Open as Open,
    Closing as Closing,
    Closed as Closed,
    below_threshold as below_threshold,
    below_threshold_array as below_threshold_array,
    next_state as next_state,
    transition as transition,
)

from noise_gate.dsp.sink import (
    sink as sink,
    counter as counter,
    collector as collector,
    callback_sink as callback_sink,
)
