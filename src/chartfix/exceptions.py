"""Custom exceptions for chartfix."""


class ChartFixError(Exception):
    """Base exception for chartfix."""

    code: str = "E_UNKNOWN"


class StructuralError(ChartFixError):
    """The document breaks a structural rule and cannot be fixed."""

    code = "E_STRUCTURE"


class MultipleTrackNamesError(StructuralError):
    """A single track carries more than one name."""

    code = "E_MULTIPLE_NAMES"


class MixedEventConventionError(StructuralError):
    """The EVENTS track also uses name-encoded event markers."""

    code = "E_MIXED_EVENTS"


class ConflictingTimeEventsError(StructuralError):
    """Different tempos or time signatures share the same tick."""

    code = "E_TIME_CONFLICT"


class InvalidTimeSignatureError(StructuralError):
    """The time signature input track is not encoded correctly."""

    code = "E_TIMESIG_INPUT"


class InvalidBeatTrackError(StructuralError):
    """The BEAT track holds invalid or no notes."""

    code = "E_BEAT_TRACK"


class TrackNotFoundError(ChartFixError):
    """A required track is missing."""

    code = "E_TRACK_NOT_FOUND"

    def __init__(self, track_name: str) -> None:
        super().__init__(f"A track named '{track_name}' is required, but cannot be found.")
        self.track_name = track_name


class MissingMarkerError(ChartFixError):
    """A required marker is missing from the EVENTS track."""

    code = "E_MISSING_MARKER"


class ParseError(ChartFixError):
    """Failed to parse input file."""

    def __init__(self, message: str, file_type: str = "unknown") -> None:
        super().__init__(message)
        self.code = f"E_{file_type.upper()}_PARSE"


class PracticeSectionsError(ChartFixError):
    """The practice section list is malformed."""

    code = "E_PRACTICE_SECTIONS"


class ValidationError(ChartFixError):
    """Output failed schema validation."""

    code = "E_VALIDATION"


class ConfigError(ChartFixError):
    """Fixer options are out of range."""

    code = "E_CONFIG"
