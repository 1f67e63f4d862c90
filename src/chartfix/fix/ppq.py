"""Retime a whole document to a new resolution."""

from __future__ import annotations

from ..document import Document
from ..events import NoteOn


def rescale_time(time: int, old_ppq: int, new_ppq: int) -> int:
    """Scale an absolute tick, truncating toward zero."""
    return time * new_ppq // old_ppq


def update_ppq(document: Document, new_ppq: int) -> Document:
    """Return a copy of ``document`` at ``new_ppq`` ticks per quarter note.

    The input document is left untouched. Off-events are shifted exactly once,
    whether or not they also appear on the track next to their note.
    """
    if new_ppq <= 0:
        raise ValueError(f"Ticks per quarter note must be positive, got {new_ppq}")

    copied = document.clone()
    old_ppq = document.ticks_per_quarter

    shifted: set[int] = set()
    for track in copied.tracks:
        for event in track.events:
            if id(event) not in shifted:
                shifted.add(id(event))
                event.time = rescale_time(event.time, old_ppq, new_ppq)

            # The off-event may live on the note only
            if isinstance(event, NoteOn) and id(event.off) not in shifted:
                shifted.add(id(event.off))
                event.off.time = rescale_time(event.off.time, old_ppq, new_ppq)

    return Document(
        format=copied.format,
        ticks_per_quarter=new_ppq,
        tracks=copied.tracks,
    )
