"""Run every fixer stage, in order, over one document."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ..config import FixerConfig
from ..document import Document
from ..messages import MessageLog
from ..midi_file import load_document, save_document
from ..practice import load_practice_sections
from .cleanup import (
    add_venue_track,
    normalise_velocities,
    remove_duplicate_notes,
    remove_empty_tracks,
    remove_unsupported_events,
    reorder_tracks,
)
from .consolidate import consolidate_tracks
from .drums import (
    add_default_difficulty_events_drums,
    add_drum_mix_events,
    cap_drum_track_durations,
)
from .event_tracks import process_event_tracks
from .markers import (
    add_music_end_event,
    add_music_start_event,
    convert_last_beat_to_end,
    validate_beat_track,
)
from .ppq import update_ppq
from .time_signatures import process_time_signatures

logger = logging.getLogger(__name__)


def fix_document(
    document: Document,
    practice_sections: Iterable[str],
    log: MessageLog | None = None,
    config: FixerConfig | None = None,
) -> Document:
    """Return the fixed document.

    The input is rescaled into a new document first; every later stage edits
    that copy in place. Any ChartFixError aborts the fix.
    """
    config = config or FixerConfig()
    log = log if log is not None else MessageLog()

    document = update_ppq(document, config.ticks_per_quarter)

    process_event_tracks(document, practice_sections, log, config)

    # After the event tracks, which handle more cases while tracks are still split
    consolidate_tracks(document)

    process_time_signatures(document, log, config)

    add_drum_mix_events(document, log)
    add_default_difficulty_events_drums(document, log, config)

    convert_last_beat_to_end(document, log)
    validate_beat_track(document, log, config)
    add_music_end_event(document, log)
    add_music_start_event(document, log, config)

    normalise_velocities(document, config.default_velocity)
    if config.cap_drum_durations:
        cap_drum_track_durations(document)
    remove_duplicate_notes(document)
    # Late, in case an earlier stage still needed these events
    remove_unsupported_events(document)
    reorder_tracks(document)
    remove_empty_tracks(document)
    add_venue_track(document)

    logger.debug("Fixed document has %d tracks", len(document.tracks))
    return document


def fix_file(
    midi_path: str | Path,
    out_path: str | Path,
    practice_sections: Iterable[str] | None = None,
    log: MessageLog | None = None,
    config: FixerConfig | None = None,
) -> Path:
    """Fix a MIDI file and write the result; nothing is written if the fix fails."""
    if practice_sections is None:
        practice_sections = load_practice_sections()

    document = load_document(midi_path)
    fixed = fix_document(document, practice_sections, log, config)

    out_path = Path(out_path)
    save_document(fixed, out_path)
    return out_path
