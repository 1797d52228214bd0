# Copyright 2026 XMOS LIMITED.
# This Software is subject to the terms of the XMOS Public Licence: Version 1.
import pytest

from noise_gate.dsp.sink import sink


class event_log(sink):
    """Sink that logs every call it gets, in order."""

    def __init__(self):
        self.events = []

    def record(self, frame):
        self.events.append(("record", tuple(int(s) for s in frame)))

    def end_of_transmission(self):
        self.events.append(("eot",))

    @property
    def recorded(self):
        return [e[1] for e in self.events if e[0] == "record"]

    @property
    def n_eot(self):
        return sum(1 for e in self.events if e[0] == "eot")


@pytest.fixture
def make_event_log():
    return event_log
