"""Repair sequencer MIDI exports into rhythm game drum charts."""

from .config import DifficultyBand, FixerConfig
from .document import Document, EventLocation, Track
from .fix import fix_document, fix_file
from .messages import Message, MessageLog
from .midi_file import load_document, save_document
from .practice import load_practice_sections, parse_practice_sections

__all__ = [
    "DifficultyBand",
    "Document",
    "EventLocation",
    "FixerConfig",
    "Message",
    "MessageLog",
    "Track",
    "fix_document",
    "fix_file",
    "load_document",
    "load_practice_sections",
    "parse_practice_sections",
    "save_document",
]
