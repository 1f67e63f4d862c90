"""Final clean up passes run after the structural stages."""

from __future__ import annotations

from ..document import Document, Track
from ..events import NoteOn, Unsupported
from ..exceptions import TrackNotFoundError
from ..names import TrackName


def normalise_velocities(document: Document, velocity: int) -> None:
    """Give every note the same velocity; off-events get velocity 0."""
    for track in document.tracks:
        for note in track.notes():
            note.velocity = velocity
            note.off.velocity = 0


def duplicate_key(note: NoteOn) -> tuple[int, int, int, int, int]:
    return (note.time, note.channel, note.number, note.velocity, note.off.time)


def remove_duplicate_notes(document: Document) -> None:
    """Drop repeated notes (with their off-events), keeping the first of each."""
    for track in document.tracks:
        seen: set[tuple[int, int, int, int, int]] = set()
        duplicates: list[NoteOn] = []
        for note in track.notes():
            key = duplicate_key(note)
            if key in seen:
                duplicates.append(note)
            else:
                seen.add(key)

        for note in duplicates:
            track.remove_note(note)


def remove_unsupported_events(document: Document) -> None:
    for track in document.tracks:
        track.events[:] = [e for e in track.events if not isinstance(e, Unsupported)]


def reorder_tracks(document: Document) -> None:
    """Move the TEMPO MAP to the front; it must be the first track of a type 1 file."""
    index = document.find_track_index(TrackName.TEMPO_MAP)
    if index is None:
        raise TrackNotFoundError(TrackName.TEMPO_MAP)
    document.tracks.insert(0, document.remove_track(index))


def remove_empty_tracks(document: Document) -> None:
    empty = [i for i, track in enumerate(document.tracks) if track.is_empty()]
    document.remove_tracks(empty)


def add_venue_track(document: Document) -> Track:
    existing = document.find_track(TrackName.VENUE)
    if existing is not None:
        return existing
    return document.add_named_track(TrackName.VENUE)
