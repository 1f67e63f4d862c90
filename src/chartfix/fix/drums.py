"""Defaults the drum part needs before the game accepts it."""

from __future__ import annotations

from ..config import FixerConfig
from ..document import Document, Track
from ..events import DrumMixMarker, NoteOn, Text
from ..messages import MessageLog
from ..names import TrackName

DIFFICULTIES = range(4)


def add_drum_mix_events(document: Document, log: MessageLog) -> None:
    """Add a default ``[mix D drums0]`` marker for every difficulty that lacks one."""
    drum_track = document.get_track(TrackName.DRUMS)

    existing: dict[int, DrumMixMarker] = {}
    for text in drum_track.texts():
        if text.time != 0:
            continue
        marker = DrumMixMarker.parse(text)
        if marker is not None:
            existing.setdefault(marker.difficulty, marker)

    for difficulty in DIFFICULTIES:
        if difficulty in existing:
            continue

        event = DrumMixMarker.default_for(difficulty)
        drum_track.events.insert(_mix_insert_position(drum_track, difficulty), event)
        log.info(f"Adding {event.content} to {TrackName.DRUMS}")


def _mix_insert_position(track: Track, difficulty: int) -> int:
    """Index after the track name and any lower-difficulty mix marker at tick 0."""
    position = 0
    for index, event in enumerate(track.events):
        if not isinstance(event, Text) or event.time != 0:
            continue
        if event.is_name:
            position = max(position, index + 1)
            continue
        marker = DrumMixMarker.parse(event)
        if marker is not None and marker.difficulty < difficulty:
            position = max(position, index + 1)
    return position


def add_default_difficulty_events_drums(
    document: Document,
    log: MessageLog,
    config: FixerConfig | None = None,
) -> None:
    """Make sure every difficulty band has at least one note."""
    config = config or FixerConfig()
    drum_track = document.get_track(TrackName.DRUMS)
    notes = drum_track.notes()

    time = config.count_in_ticks(document.ticks_per_quarter)
    duration = config.drum_note_length(document.ticks_per_quarter)
    for band in config.difficulty_bands:
        if any(band.contains(n.number) for n in notes):
            log.info(f"{TrackName.DRUMS} already has at least one '{band.name}' note.")
            continue

        note = NoteOn.with_duration(
            time=time,
            number=band.low,
            velocity=config.default_velocity,
            duration=duration,
            channel=config.drum_channel,
        )
        drum_track.add_note(note)
        log.info(f"Adding default '{band.name}' note at {document.location(time)}")

    drum_track.update_end()


def cap_drum_track_durations(document: Document) -> None:
    """Shorten every drum note to a single tick."""
    drum_track = document.get_track(TrackName.DRUMS)
    for note in drum_track.notes():
        note.off.time = note.time + 1
    drum_track.update_end()
