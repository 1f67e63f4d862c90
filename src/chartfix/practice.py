"""Load the list of practice section markers."""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import PracticeSectionsError

logger = logging.getLogger(__name__)

DEFAULT_PRACTICE_SECTIONS = Path(__file__).parent / "data" / "practice_sections.txt"


def parse_practice_sections(text: str) -> list[str]:
    """
    Parse practice section definitions.

    Each non-empty, non-comment line starts with a bracketed tag, optionally
    followed by a display name, e.g. ``[prc_k9] "K section 9"``.

    Raises:
        PracticeSectionsError: If a line does not start with a ``[tag]``
    """
    sections: list[str] = []
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip() or line.startswith("#"):
            continue

        tag = line.split(" ", 1)[0]
        if not (tag.startswith("[") and tag.endswith("]")):
            raise PracticeSectionsError(f"line {number} is invalid: '{line}'")
        sections.append(tag)

    return sections


def load_practice_sections(path: str | Path | None = None) -> list[str]:
    """Read practice sections from ``path``, or the bundled list if it cannot be read."""
    if path is not None:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot read practice sections from %s (%s); using defaults", path, e)
        else:
            sections = parse_practice_sections(text)
            logger.info("Loaded %d practice sections from %s", len(sections), path)
            return sections

    sections = parse_practice_sections(DEFAULT_PRACTICE_SECTIONS.read_text(encoding="utf-8"))
    logger.info("Using %d default practice sections", len(sections))
    return sections
