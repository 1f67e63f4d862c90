"""Fixer stages and the pipeline that runs them."""

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
from .pipeline import fix_document, fix_file
from .ppq import update_ppq
from .time_signatures import consolidate_time_tracks, process_time_signatures

__all__ = [
    "add_default_difficulty_events_drums",
    "add_drum_mix_events",
    "add_music_end_event",
    "add_music_start_event",
    "add_venue_track",
    "cap_drum_track_durations",
    "consolidate_time_tracks",
    "consolidate_tracks",
    "convert_last_beat_to_end",
    "fix_document",
    "fix_file",
    "normalise_velocities",
    "process_event_tracks",
    "process_time_signatures",
    "remove_duplicate_notes",
    "remove_empty_tracks",
    "remove_unsupported_events",
    "reorder_tracks",
    "update_ppq",
    "validate_beat_track",
]
