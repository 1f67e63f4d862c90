"""Pytest fixtures with synthetic test data.

These fixtures create in-memory documents for precise, deterministic testing
without relying on external files.
"""

import pytest
from builders import document, note, track

from chartfix.config import FixerConfig
from chartfix.document import Document
from chartfix.events import EndOfTrack, Tempo, Text, TimeSignature, Unsupported
from chartfix.messages import MessageLog
from chartfix.names import TrackName


@pytest.fixture
def log() -> MessageLog:
    """Empty message log."""
    return MessageLog()


@pytest.fixture
def config() -> FixerConfig:
    """Default fixer configuration (480 ticks per quarter note)."""
    return FixerConfig()


@pytest.fixture
def practice_sections() -> list[str]:
    return ["[prc_verse]", "[prc_chorus]"]


@pytest.fixture
def exported_chart() -> Document:
    """A typical sequencer export at 96 ticks per quarter note.

    * An untitled conductor track with the tempo and a 4/4 signature.
    * PART DRUMS split over two tracks, with a controller event on the first.
    * A BEAT track alternating down-beats and up-beats for 5 bars (0..1536).
    * A name-encoded marker track: ``[prc_verse]`` then ``[coda]``.
    * A ``timesig`` track asking for 3/4 at bar 2.
    """
    conductor = track(
        None,
        Tempo(time=0, microseconds_per_quarter=500000),
        TimeSignature(time=0, numerator=4, denominator_exponent=2),
        EndOfTrack(time=0),
    )
    drums = track(
        TrackName.DRUMS,
        Unsupported(time=0, message_type="control_change", data={"control": 7, "value": 100}),
        note(768, 96, velocity=110, duration=24),
        note(768, 60, velocity=80, duration=24),
    )
    beats = [note(t, 12 if (t // 96) % 4 == 0 else 13, duration=24) for t in range(0, 1537, 96)]
    beat = track(TrackName.BEAT, *beats)

    markers = track(
        None,
        Text.track_name("[prc_verse]", 0),
        note(768, 60),
        Text.track_name("[coda]", 1000),
        note(1200, 60),
        EndOfTrack(time=1210),
    )
    timesig = track(
        TrackName.INPUT_TIMESIG,
        note(384, 3, velocity=100),
        note(384, 4, velocity=50),
    )
    more_drums = track(TrackName.DRUMS, note(1152, 100, velocity=90, duration=24))

    return document(conductor, drums, beat, markers, timesig, more_drums, ticks_per_quarter=96)
