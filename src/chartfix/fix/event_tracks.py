"""Build the single EVENTS track from the legacy event conventions.

Two conventions are accepted:

* An ``EVENTS`` track that already holds plain text markers (and optionally
  the sample drum notes).
* Tracks whose *names* are markers, e.g. a track named ``[music_start]``; the
  time of each marker is taken from the note that follows the name event.
  Several markers can share one track by renaming it over time.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from ..config import FixerConfig
from ..document import Document
from ..events import BaseEvent, NoteOn, Text
from ..exceptions import MixedEventConventionError
from ..messages import MessageLog
from ..names import SPECIAL_EVENT_NAMES, TrackName


class NameRange(NamedTuple):
    """Half-open tick range ``[start, end)`` covered by one track name."""

    name: str
    start: int
    end: float


def name_ranges(name_events: list[Text]) -> list[NameRange]:
    """Ranges between consecutive name events; the last one is open ended."""
    ranges: list[NameRange] = []
    for current, following in zip(name_events, name_events[1:]):
        ranges.append(NameRange(current.content, current.time, following.time))
    if name_events:
        last = name_events[-1]
        ranges.append(NameRange(last.content, last.time, float("inf")))
    return ranges


def process_event_tracks(
    document: Document,
    practice_sections: Iterable[str],
    log: MessageLog,
    config: FixerConfig | None = None,
) -> None:
    """Replace every marker track with one canonical EVENTS track."""
    config = config or FixerConfig()
    valid_names = set(SPECIAL_EVENT_NAMES) | set(practice_sections)

    tracks_to_remove: set[int] = set()
    existing_texts: list[Text] = []
    existing_notes: list[BaseEvent] = []
    converted: list[Text] = []

    for index, track in enumerate(document.tracks):
        names = sorted(track.name_events(), key=lambda e: e.time)
        if not names:
            continue

        requiring_conversion = [e for e in names if e.content in valid_names]
        if any(e.content == TrackName.EVENTS for e in names):
            if requiring_conversion:
                raise MixedEventConventionError(
                    f"You cannot have '{TrackName.EVENTS}' and '[event]' events on the same track"
                )

            existing_notes.extend(_sample_notes(track.notes(), index, log, config))
            existing_texts.extend(e for e in track.texts() if e.content in valid_names)
            tracks_to_remove.add(index)

        for name_range in name_ranges(requiring_conversion):
            tracks_to_remove.add(index)
            notes = [
                n for n in track.notes()
                if name_range.start <= n.time < name_range.end
            ]

            if not notes:
                log.warning(f"Cannot convert '{name_range.name}' to an EVENT as it has no notes.")
                continue

            if len(notes) > 1:
                log.warning(
                    f"Cannot have more than one note for '{name_range.name}'; "
                    "only the first will be converted to an EVENT."
                )

            first = min(notes, key=lambda n: n.time)
            event = Text.marker(name_range.name, first.time)
            log.info(f"{name_range.name} event converted at {document.location(event.time)}")
            converted.append(event)

    document.remove_tracks(tracks_to_remove)

    unique_texts = _unique_by_content(existing_texts + converted, log)
    document.add_named_track(TrackName.EVENTS, [*unique_texts, *existing_notes])


def _sample_notes(
    notes: list[NoteOn],
    track_index: int,
    log: MessageLog,
    config: FixerConfig,
) -> list[BaseEvent]:
    """Keep the sample drum notes of the EVENTS track, dropping any other note."""
    kept: list[BaseEvent] = []
    ignored = 0
    for note in notes:
        if note.number in config.sample_notes:
            kept.extend((note, note.off))
        else:
            ignored += 1

    if ignored:
        log.warning(f"Ignoring {ignored} note(s) on track {TrackName.EVENTS} (#{track_index})")
    return kept


def _unique_by_content(texts: list[Text], log: MessageLog) -> list[Text]:
    groups: dict[str, list[Text]] = {}
    for text in texts:
        groups.setdefault(text.content, []).append(text)

    duplicates = [f"'{content}'" for content, group in groups.items() if len(group) > 1]
    if duplicates:
        log.warning(f"Duplicate events {', '.join(duplicates)}; using first of each.")

    return [min(group, key=lambda e: e.time) for group in groups.values()]
