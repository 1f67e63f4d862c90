"""Read and write Standard MIDI Files using mido."""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path

import mido

from .document import Document, Track
from .events import (
    BaseEvent,
    EndOfTrack,
    NoteOff,
    NoteOn,
    Tempo,
    Text,
    TimeSignature,
    Unsupported,
)
from .exceptions import ParseError

logger = logging.getLogger(__name__)

UNSUPPORTED_TYPES = frozenset(
    {"control_change", "program_change", "pitchwheel", "aftertouch", "polytouch"}
)


def load_document(path: str | Path) -> Document:
    """
    Parse a MIDI file into a document with absolute event times.

    Args:
        path: Path to .mid or .midi file

    Returns:
        The parsed document

    Raises:
        FileNotFoundError: If file doesn't exist
        ParseError: If file is not valid MIDI
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"MIDI file not found: {path}")

    try:
        mid = mido.MidiFile(str(path))
    except Exception as e:
        raise ParseError(f"Failed to parse MIDI: {e}", "midi") from e

    tracks = [_read_track(midi_track, index) for index, midi_track in enumerate(mid.tracks)]
    return Document(format=mid.type, ticks_per_quarter=mid.ticks_per_beat, tracks=tracks)


def _read_track(midi_track: mido.MidiTrack, track_index: int) -> Track:
    track = Track()
    abs_ticks = 0

    # Outstanding notes per (channel, note), oldest first
    active: dict[tuple[int, int], list[NoteOn]] = {}
    dropped: Counter[str] = Counter()

    for msg in midi_track:
        abs_ticks += msg.time

        if msg.type == "note_on" and msg.velocity > 0:
            note = NoteOn(
                time=abs_ticks,
                channel=msg.channel,
                number=msg.note,
                velocity=msg.velocity,
                off=NoteOff(time=abs_ticks, channel=msg.channel, number=msg.note),
            )
            active.setdefault((msg.channel, msg.note), []).append(note)
            track.add(note)

        elif msg.type == "note_off" or (msg.type == "note_on" and msg.velocity == 0):
            pending = active.get((msg.channel, msg.note))
            if not pending:
                dropped["unmatched note_off"] += 1
                continue
            note = pending.pop(0)
            note.off.time = abs_ticks
            note.off.velocity = msg.velocity if msg.type == "note_off" else 0
            track.add(note.off)

        elif msg.type in UNSUPPORTED_TYPES:
            data = {k: v for k, v in msg.dict().items() if k not in ("type", "time", "channel")}
            track.add(
                Unsupported(time=abs_ticks, message_type=msg.type, channel=msg.channel, data=data)
            )

        else:
            event = _meta_to_event(msg, abs_ticks)
            if event is None:
                dropped[msg.type] += 1
            else:
                track.add(event)

    dangling = [note for pending in active.values() for note in pending]
    if dangling:
        logger.warning(
            "Track %d: closing %d note(s) without a note off at tick %d",
            track_index,
            len(dangling),
            abs_ticks,
        )
        end = track.end_marker()
        for note in dangling:
            note.off.time = abs_ticks
            if end is None:
                track.add(note.off)
            else:
                track.events.insert(track.index_of(end), note.off)

    for kind, count in sorted(dropped.items()):
        logger.info("Track %d: dropped %d %s message(s)", track_index, count, kind)

    return track


def _meta_to_event(msg: mido.MetaMessage, time: int) -> BaseEvent | None:
    if msg.type == "track_name":
        return Text.track_name(msg.name, time)
    if msg.type == "text":
        return Text.marker(msg.text, time)
    if msg.type == "time_signature":
        return TimeSignature(
            time=time,
            numerator=msg.numerator,
            denominator_exponent=msg.denominator.bit_length() - 1,
            clocks_per_click=msg.clocks_per_click,
            thirty_seconds_per_quarter=msg.notated_32nd_notes_per_beat,
        )
    if msg.type == "set_tempo":
        return Tempo(time=time, microseconds_per_quarter=msg.tempo)
    if msg.type == "end_of_track":
        return EndOfTrack(time=time)
    return None


def save_document(document: Document, path: str | Path) -> Path:
    """Write a document as a Standard MIDI File."""
    path = Path(path)

    midi_type = document.format
    if midi_type == 0 and len(document.tracks) > 1:
        logger.debug("Writing %d tracks as a type 1 file", len(document.tracks))
        midi_type = 1

    mid = mido.MidiFile(type=midi_type, ticks_per_beat=document.ticks_per_quarter)
    for track in document.tracks:
        mid.tracks.append(_write_track(track))

    mid.save(str(path))
    return path


def _write_track(track: Track) -> mido.MidiTrack:
    # Zero length notes must keep their off-event after the note
    zero_length = {id(note.off) for note in track.notes() if note.off.time == note.time}

    def order(event: BaseEvent) -> tuple[int, int]:
        if isinstance(event, Text) and event.is_name:
            rank = 0
        elif isinstance(event, NoteOff) and id(event) not in zero_length:
            rank = 1
        elif isinstance(event, EndOfTrack):
            rank = 3
        else:
            rank = 2
        return (event.time, rank)

    midi_track = mido.MidiTrack()
    previous = 0
    for event in sorted(track.events, key=order):
        midi_track.append(_event_to_message(event, event.time - previous))
        previous = event.time
    return midi_track


def _event_to_message(event: BaseEvent, delta: int) -> mido.Message | mido.MetaMessage:
    if isinstance(event, NoteOn):
        return mido.Message(
            "note_on",
            channel=event.channel,
            note=event.number,
            velocity=event.velocity,
            time=delta,
        )
    if isinstance(event, NoteOff):
        return mido.Message(
            "note_off",
            channel=event.channel,
            note=event.number,
            velocity=event.velocity,
            time=delta,
        )
    if isinstance(event, Text):
        if event.is_name:
            return mido.MetaMessage("track_name", name=event.content, time=delta)
        return mido.MetaMessage("text", text=event.content, time=delta)
    if isinstance(event, TimeSignature):
        return mido.MetaMessage(
            "time_signature",
            numerator=event.numerator,
            denominator=event.denominator,
            clocks_per_click=event.clocks_per_click,
            notated_32nd_notes_per_beat=event.thirty_seconds_per_quarter,
            time=delta,
        )
    if isinstance(event, Tempo):
        return mido.MetaMessage("set_tempo", tempo=event.microseconds_per_quarter, time=delta)
    if isinstance(event, EndOfTrack):
        return mido.MetaMessage("end_of_track", time=delta)
    if isinstance(event, Unsupported):
        return mido.Message(event.message_type, channel=event.channel, time=delta, **event.data)
    raise TypeError(f"Cannot write event: {event!r}")
