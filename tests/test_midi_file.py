"""Tests for reading and writing MIDI files."""

from pathlib import Path

import mido
import pytest
from builders import document, note, track

from chartfix.document import Document
from chartfix.dump import dump_document
from chartfix.events import (
    EndOfTrack,
    NoteOn,
    Tempo,
    Text,
    TimeSignature,
    Unsupported,
)
from chartfix.exceptions import ParseError
from chartfix.midi_file import load_document, save_document
from chartfix.names import TrackName


def _write_midi(path: Path, *messages: mido.Message, ticks_per_beat: int = 480) -> Path:
    mid = mido.MidiFile(type=1, ticks_per_beat=ticks_per_beat)
    mid.tracks.append(mido.MidiTrack(messages))
    mid.save(str(path))
    return path


@pytest.fixture
def small_document() -> Document:
    conductor = track(
        None,
        Tempo(time=0, microseconds_per_quarter=500000),
        TimeSignature(time=0, numerator=6, denominator_exponent=3),
        EndOfTrack(time=0),
    )
    drums = track(
        TrackName.DRUMS,
        Unsupported(time=0, message_type="control_change", data={"control": 7, "value": 100}),
        note(0, 36, velocity=100, duration=48),
        Text.marker("[mix 0 drums0]", 0),
        NoteOn.with_duration(96, 38, 90, 0, channel=9),
    )
    return document(conductor, drums, ticks_per_quarter=96)


class TestRoundTrip:
    """Saving and loading keeps every supported event."""

    def test_round_trip(self, small_document: Document, tmp_path: Path) -> None:
        path = save_document(small_document, tmp_path / "song.mid")

        loaded = load_document(path)

        assert loaded.format == 1
        assert loaded.ticks_per_quarter == 96
        assert dump_document(loaded) == dump_document(small_document)

    def test_meta_events(self, small_document: Document, tmp_path: Path) -> None:
        loaded = load_document(save_document(small_document, tmp_path / "song.mid"))

        conductor = loaded.tracks[0]
        assert conductor.name is None
        assert conductor.of_type(Tempo)[0].microseconds_per_quarter == 500000
        signature = conductor.of_type(TimeSignature)[0]
        assert (signature.numerator, signature.denominator) == (6, 8)

    def test_notes_are_paired(self, small_document: Document, tmp_path: Path) -> None:
        loaded = load_document(save_document(small_document, tmp_path / "song.mid"))

        drums = loaded.get_track(TrackName.DRUMS)
        kick, snare = drums.notes()
        assert (kick.number, kick.time, kick.off.time, kick.velocity) == (36, 0, 48, 100)
        assert (snare.channel, snare.duration) == (9, 0)
        assert drums.index_of(snare.off) > drums.index_of(snare)
        assert drums.of_type(Unsupported)[0].data == {"control": 7, "value": 100}

    def test_single_track_type_zero(self, tmp_path: Path) -> None:
        doc = Document(format=0, ticks_per_quarter=480, tracks=[track("A"), track("B")])

        save_document(doc, tmp_path / "song.mid")

        assert mido.MidiFile(str(tmp_path / "song.mid")).type == 1


class TestLoadDocument:
    """Reading files written by other tools."""

    def test_absolute_times(self, tmp_path: Path) -> None:
        path = _write_midi(
            tmp_path / "in.mid",
            mido.MetaMessage("track_name", name="BEAT", time=0),
            mido.Message("note_on", note=12, velocity=100, time=0),
            mido.Message("note_off", note=12, velocity=0, time=120),
            mido.Message("note_on", note=13, velocity=100, time=360),
            mido.Message("note_on", note=13, velocity=0, time=120),
        )

        beat = load_document(path).tracks[0]

        assert beat.name == "BEAT"
        assert [(n.time, n.off.time) for n in beat.notes()] == [(0, 120), (480, 600)]

    def test_overlapping_notes_pair_in_order(self, tmp_path: Path) -> None:
        path = _write_midi(
            tmp_path / "in.mid",
            mido.Message("note_on", note=60, velocity=100, time=0),
            mido.Message("note_on", note=60, velocity=90, time=10),
            mido.Message("note_off", note=60, time=10),
            mido.Message("note_off", note=60, time=10),
        )

        notes = load_document(path).tracks[0].notes()

        assert [(n.velocity, n.off.time) for n in notes] == [(100, 20), (90, 30)]

    def test_dangling_note_is_closed(self, tmp_path: Path) -> None:
        path = _write_midi(
            tmp_path / "in.mid",
            mido.Message("note_on", note=60, velocity=100, time=0),
            mido.Message("note_on", note=62, velocity=100, time=10),
            mido.Message("note_off", note=62, time=20),
        )

        loaded = load_document(path).tracks[0]
        dangling = loaded.notes()[0]

        assert dangling.off.time == 30
        assert loaded.index_of(dangling.off) < loaded.index_of(loaded.end_marker())

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "missing.mid")

    def test_invalid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.mid"
        path.write_bytes(b"definitely not a midi file")

        with pytest.raises(ParseError) as exc_info:
            load_document(path)

        assert exc_info.value.code == "E_MIDI_PARSE"


class TestDump:
    """Text listing of a document."""

    def test_dump(self) -> None:
        doc = document(track(None, note(0, 60)), track(TrackName.BEAT))

        lines = dump_document(doc).splitlines()

        assert lines[0] == "Format: 1, ticks per quarter note: 480, tracks: 2"
        assert lines[1] == "Unnamed Track: 0"
        assert lines[2] == "0 NoteOn Ch: 0 C4 Vel:100 Len: 10 (NoteNumber: 60)"
        assert lines[3] == "10 NoteOff Ch: 0 C4 Vel:0 (NoteNumber: 60)"
        assert lines[4] == "BEAT"
        assert lines[5] == "0 SequenceTrackName BEAT"
        assert lines[6] == "0 EndTrack"
