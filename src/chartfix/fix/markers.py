"""Check the BEAT track and derive the start/end markers on the EVENTS track."""

from __future__ import annotations

from ..config import FixerConfig
from ..document import Document
from ..events import Text
from ..exceptions import InvalidBeatTrackError, MissingMarkerError
from ..messages import MessageLog
from ..names import EventName, TrackName


def validate_beat_track(
    document: Document,
    log: MessageLog,
    config: FixerConfig | None = None,
) -> None:
    """Every BEAT note must be a down-beat or an up-beat."""
    config = config or FixerConfig()
    beat_track = document.get_track(TrackName.BEAT)

    allowed = {config.down_beat, config.up_beat}
    invalid = [n for n in beat_track.notes() if n.number not in allowed]
    for note in invalid:
        log.error(
            f"Invalid note: {note.note_name} ({note.number}) at {document.location(note.time)}"
        )

    if invalid:
        raise InvalidBeatTrackError("Invalid beats detected.")


def convert_last_beat_to_end(document: Document, log: MessageLog) -> None:
    """Turn the last BEAT note into the ``[end]`` marker unless one already exists."""
    beat_track = document.get_track(TrackName.BEAT)

    notes = beat_track.notes()
    if not notes:
        raise InvalidBeatTrackError(f"No notes were found on the {TrackName.BEAT} track")
    # Latest tick wins; among equal ticks the one furthest down the track
    last_beat = max(reversed(notes), key=lambda n: n.time)

    events_track = document.find_track(TrackName.EVENTS)
    if events_track is None:
        events_track = document.add_named_track(TrackName.EVENTS)
    else:
        existing = events_track.find_first_text(EventName.END)
        if existing is not None:
            log.info(
                f"{EventName.END} event already exists at {document.location(existing.time)}, "
                "left last beat in place."
            )
            return

    beat_track.remove_note(last_beat)
    beat_track.update_end()

    events_track.add(Text.marker(EventName.END, last_beat.time))
    events_track.update_end()
    log.info(f"Last beat converted to {EventName.END} at {document.location(last_beat.time)}")


def add_music_start_event(
    document: Document,
    log: MessageLog,
    config: FixerConfig | None = None,
) -> None:
    config = config or FixerConfig()
    time = config.count_in_ticks(document.ticks_per_quarter)
    add_event_if_absent(document, log, EventName.MUSIC_START, time)


def add_music_end_event(document: Document, log: MessageLog) -> None:
    """Place ``[music_end]`` on the ``[end]`` marker."""
    events_track = document.get_track(TrackName.EVENTS)
    end = events_track.find_first_text(EventName.END)
    if end is None:
        raise MissingMarkerError(
            f"'{EventName.END}' is required on the {TrackName.EVENTS} track to place "
            f"'{EventName.MUSIC_END}'"
        )

    add_event_if_absent(document, log, EventName.MUSIC_END, end.time)


def add_event_if_absent(document: Document, log: MessageLog, name: str, time: int) -> None:
    events_track = document.get_track(TrackName.EVENTS)
    existing = events_track.find_first_text(name)
    if existing is not None:
        log.info(f"{name} event already exists at {document.location(existing.time)}")
        return

    log.info(f"Adding {name} event at {document.location(time)}")
    events_track.add(Text.marker(name, time))
    events_track.update_end()
