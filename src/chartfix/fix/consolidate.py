"""Merge tracks that share a name."""

from __future__ import annotations

from collections import Counter

from ..document import Document
from ..events import BaseEvent, EndOfTrack, Text
from ..exceptions import MultipleTrackNamesError


def track_names(document: Document) -> list[str]:
    """Name of every track ("" for untitled), rejecting tracks with several names."""
    names: list[str] = []
    for track in document.tracks:
        name_events = track.name_events()
        if len(name_events) > 1:
            detail = ", ".join(f"'{e.content}'" for e in name_events)
            raise MultipleTrackNamesError(f"Multiple names {detail} on the same track.")
        names.append(name_events[0].content if name_events else "")
    return names


def consolidate_tracks(document: Document) -> None:
    """Replace every group of same-named tracks by one track holding all their events.

    Events are stably sorted by time; events sharing a tick keep the order
    they were collected in, which visits the tracks from last to first.
    """
    counts = Counter(track_names(document))

    for name, count in counts.items():
        if count < 2:
            continue

        collected: list[BaseEvent] = []
        for index in range(len(document.tracks) - 1, -1, -1):
            track = document.tracks[index]
            if (track.name or "") != name:
                continue

            collected.extend(
                e for e in track.events
                if not isinstance(e, EndOfTrack) and not (isinstance(e, Text) and e.is_name)
            )
            document.remove_track(index)

        collected.sort(key=lambda e: e.time)
        document.add_named_track(name, collected)
