"""Plain text listing of a document, for comparing files before and after a fix."""

from __future__ import annotations

from .document import Document
from .events import NoteOff, NoteOn


def dump_document(document: Document) -> str:
    lines = [
        f"Format: {document.format}, ticks per quarter note: {document.ticks_per_quarter}, "
        f"tracks: {len(document.tracks)}"
    ]
    for index, track in enumerate(document.tracks):
        lines.append(track.name or f"Unnamed Track: {index}")
        for event in sorted(track.events, key=lambda e: e.time):
            line = event.describe()
            if isinstance(event, (NoteOn, NoteOff)):
                line += f" (NoteNumber: {event.number})"
            lines.append(line)
    return "\n".join(lines) + "\n"
