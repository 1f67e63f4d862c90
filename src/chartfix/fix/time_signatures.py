"""Collect tempo and time signature events into the TEMPO MAP track.

Sequencers that cannot write time signature changes encode them on a note
track named ``timesig``: at each change two notes are placed on the same
tick, the louder one's number being the numerator and the quieter one's
number the denominator.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from ..config import FixerConfig
from ..document import Document
from ..events import BaseEvent, Tempo, TimeSignature
from ..exceptions import ConflictingTimeEventsError, InvalidTimeSignatureError
from ..messages import MessageLog
from ..names import TrackName

T = TypeVar("T", bound=BaseEvent)

DENOMINATOR_EXPONENTS: dict[int, int] = {2: 1, 4: 2, 8: 3, 16: 4, 32: 5}


def denominator_exponent(note_number: int) -> int | None:
    """Power of two encoded by a denominator note, or None if it is not allowed."""
    return DENOMINATOR_EXPONENTS.get(note_number)


def consolidate_time_tracks(document: Document, log: MessageLog) -> None:
    """Move every tempo and time signature into a new TEMPO MAP track.

    Exact duplicates are merged. Different values on the same tick are
    reported as errors and abort the fix once all of them are logged.
    """
    signatures: list[TimeSignature] = []
    tempos: list[Tempo] = []
    for index in range(len(document.tracks) - 1, -1, -1):
        track = document.tracks[index]
        track_signatures = track.of_type(TimeSignature)
        track_tempos = track.of_type(Tempo)

        _add_unique(signatures, track_signatures)
        _add_unique(tempos, track_tempos)
        for event in [*track_signatures, *track_tempos]:
            track.remove(event)

        if (track_signatures or track_tempos) and track.is_empty():
            document.remove_track(index)

    signature_groups = _group_by_time(signatures)
    tempo_groups = _group_by_time(tempos)

    has_conflict = False
    for time, group in signature_groups.items():
        if len(group) > 1:
            details = ", ".join(f"[{e.details}]" for e in group)
            log.error(f"Conflicting signatures {details} at {document.location(time)}")
            has_conflict = True

    for time, group in tempo_groups.items():
        if len(group) > 1:
            details = ", ".join(f"[{e.microseconds_per_quarter}]" for e in group)
            log.error(f"Conflicting tempos {details} at {document.location(time)}")
            has_conflict = True

    if has_conflict:
        raise ConflictingTimeEventsError("Conflicting time signature/tempo events")

    events: list[BaseEvent] = []
    events.extend(group[0] for _, group in sorted(signature_groups.items()))
    events.extend(group[0] for _, group in sorted(tempo_groups.items()))
    document.add_named_track(TrackName.TEMPO_MAP, events)


def process_time_signatures(
    document: Document,
    log: MessageLog,
    config: FixerConfig | None = None,
) -> None:
    """Consolidate the time events, then decode the time signature input track."""
    config = config or FixerConfig()

    consolidate_time_tracks(document, log)

    input_index = document.find_track_index(config.timesig_track)
    if input_index is None:
        log.info(f"No '{config.timesig_track}' track")
        return

    tempo_map = document.get_track(TrackName.TEMPO_MAP)
    input_notes = document.tracks[input_index].notes()

    error = False
    for time, group in sorted(_group_by_time(input_notes).items()):
        # Louder note is the numerator (top), quieter note the denominator (bottom)
        ordered = sorted(group, key=lambda n: n.velocity, reverse=True)
        detail = ", ".join(
            f"<{n.note_name} ({n.number}), Velocity: {n.velocity}>" for n in ordered
        )

        if len(ordered) != 2:
            error = True
            log.error(
                f"Incorrect number of time signature notes at {document.location(time)}: {detail}"
            )
            continue

        numerator_note, denominator_note = ordered
        if numerator_note.velocity == denominator_note.velocity:
            error = True
            log.error(
                f"Multiple notes with the same velocity at {document.location(time)}: {detail}"
            )
            continue

        if numerator_note.number < 1:
            error = True
            log.error(
                f"Invalid numerator note '{numerator_note.number}' at {document.location(time)}"
            )
            continue

        exponent = denominator_exponent(denominator_note.number)
        if exponent is None:
            error = True
            log.error(
                f"Invalid denominator note '{denominator_note.number}' at {document.location(time)}"
            )
            continue

        signature = TimeSignature(
            time=time,
            numerator=numerator_note.number,
            denominator_exponent=exponent,
            clocks_per_click=config.clocks_per_click,
            thirty_seconds_per_quarter=config.thirty_seconds_per_quarter,
        )
        for existing in tempo_map.of_type(TimeSignature):
            if existing.time == time:
                tempo_map.remove(existing)
        tempo_map.add(signature)
        log.info(f"Time signature {signature.signature} added at {document.location(time)}")

    if error:
        raise InvalidTimeSignatureError("Invalid time signature input")

    document.remove_track(input_index)
    tempo_map.update_end()


def _add_unique(target: list[T], candidates: Sequence[T]) -> None:
    for candidate in candidates:
        if not any(candidate.structurally_equal(existing) for existing in target):
            target.append(candidate)


def _group_by_time(events: Sequence[T]) -> dict[int, list[T]]:
    groups: dict[int, list[T]] = {}
    for event in events:
        groups.setdefault(event.time, []).append(event)
    return groups
