"""Pydantic models for the MIDI events the fixer works with.

Every event carries an absolute ``time`` in ticks. The variants form a closed
set discriminated by ``kind`` so tracks can be validated and serialised as a
plain list of events.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Union

import mido
from music21 import pitch
from pydantic import BaseModel, ConfigDict, Field


def note_name(number: int) -> str:
    """Human readable name for a MIDI note number, e.g. 60 -> 'C4'."""
    return pitch.Pitch(midi=number).nameWithOctave


class BaseEvent(BaseModel):
    """Fields shared by all events."""

    time: int = Field(..., ge=0, description="Absolute time in ticks")

    def structurally_equal(self, other: object) -> bool:
        """Same variant with the same values (identity is ignored)."""
        if type(self) is not type(other):
            return False
        return self._structure() == other._structure()  # type: ignore[attr-defined]

    def _structure(self) -> tuple[Any, ...]:
        return (self.time,)

    def describe(self) -> str:
        return f"{self.time} {type(self).__name__}"


class NoteOff(BaseEvent):
    """Release of a note; always owned by a NoteOn."""

    kind: Literal["note_off"] = "note_off"
    channel: int = Field(default=0, ge=0, le=15)
    number: int = Field(..., ge=0, le=127)
    velocity: int = Field(default=0, ge=0, le=127)

    def _structure(self) -> tuple[Any, ...]:
        return (self.time, self.channel, self.number, self.velocity)

    def describe(self) -> str:
        return f"{self.time} NoteOff Ch: {self.channel} {note_name(self.number)} Vel:{self.velocity}"


class NoteOn(BaseEvent):
    """Start of a note together with the NoteOff that ends it."""

    kind: Literal["note_on"] = "note_on"
    channel: int = Field(default=0, ge=0, le=15)
    number: int = Field(..., ge=0, le=127)
    velocity: int = Field(..., ge=1, le=127)
    off: NoteOff

    @classmethod
    def with_duration(
        cls,
        time: int,
        number: int,
        velocity: int,
        duration: int,
        channel: int = 0,
    ) -> NoteOn:
        off = NoteOff(time=time + duration, channel=channel, number=number)
        return cls(time=time, channel=channel, number=number, velocity=velocity, off=off)

    @property
    def duration(self) -> int:
        return self.off.time - self.time

    @property
    def note_name(self) -> str:
        return note_name(self.number)

    def _structure(self) -> tuple[Any, ...]:
        return (
            self.time,
            self.channel,
            self.number,
            self.velocity,
            self.off.time,
            self.off.velocity,
        )

    def describe(self) -> str:
        return (
            f"{self.time} NoteOn Ch: {self.channel} {self.note_name} "
            f"Vel:{self.velocity} Len: {self.duration}"
        )


class Text(BaseEvent):
    """Track name or plain text event."""

    kind: Literal["text"] = "text"
    text_type: Literal["name", "plain"] = "plain"
    content: str

    @classmethod
    def track_name(cls, name: str, time: int = 0) -> Text:
        return cls(time=time, text_type="name", content=name)

    @classmethod
    def marker(cls, content: str, time: int) -> Text:
        return cls(time=time, text_type="plain", content=content)

    @property
    def is_name(self) -> bool:
        return self.text_type == "name"

    def _structure(self) -> tuple[Any, ...]:
        return (self.time, self.text_type, self.content)

    def describe(self) -> str:
        label = "SequenceTrackName" if self.is_name else "TextEvent"
        return f"{self.time} {label} {self.content}"


class TimeSignature(BaseEvent):
    """Time signature meta event; the denominator is stored as a power of two."""

    kind: Literal["time_signature"] = "time_signature"
    numerator: int = Field(..., ge=1)
    denominator_exponent: int = Field(..., ge=0)
    clocks_per_click: int = Field(default=24, ge=0)
    thirty_seconds_per_quarter: int = Field(default=8, ge=0)

    @property
    def denominator(self) -> int:
        return 2**self.denominator_exponent

    @property
    def signature(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    def _structure(self) -> tuple[Any, ...]:
        return (
            self.time,
            self.numerator,
            self.denominator_exponent,
            self.clocks_per_click,
            self.thirty_seconds_per_quarter,
        )

    @property
    def details(self) -> str:
        return (
            f"{self.signature} TicksInClick:{self.clocks_per_click} "
            f"32ndsInQuarterNote:{self.thirty_seconds_per_quarter}"
        )

    def describe(self) -> str:
        return f"{self.time} TimeSignature {self.details}"


class Tempo(BaseEvent):
    """Set tempo meta event."""

    kind: Literal["tempo"] = "tempo"
    microseconds_per_quarter: int = Field(..., gt=0)

    @property
    def bpm(self) -> float:
        return mido.tempo2bpm(self.microseconds_per_quarter)

    def _structure(self) -> tuple[Any, ...]:
        return (self.time, self.microseconds_per_quarter)

    def describe(self) -> str:
        return f"{self.time} SetTempo {self.bpm:g}bpm ({self.microseconds_per_quarter})"


class EndOfTrack(BaseEvent):
    """End of track marker."""

    kind: Literal["end_of_track"] = "end_of_track"

    def describe(self) -> str:
        return f"{self.time} EndTrack"


class Unsupported(BaseEvent):
    """Channel event the chart format does not accept (controllers, patches, bends)."""

    kind: Literal["unsupported"] = "unsupported"
    message_type: str
    channel: int = Field(default=0, ge=0, le=15)
    data: dict[str, int] = Field(default_factory=dict)

    def _structure(self) -> tuple[Any, ...]:
        return (self.time, self.message_type, self.channel, tuple(sorted(self.data.items())))

    def describe(self) -> str:
        details = " ".join(f"{key}={value}" for key, value in sorted(self.data.items()))
        return f"{self.time} {self.message_type} Ch: {self.channel} {details}".rstrip()


Event = Annotated[
    Union[NoteOn, NoteOff, Text, TimeSignature, Tempo, EndOfTrack, Unsupported],
    Field(discriminator="kind"),
]


_MIX_PATTERN = re.compile(r"^\[mix (?P<difficulty>[0-3]) (?P<configuration>.*)\]$")

DRUM_MIX_CONFIGURATIONS = frozenset(
    f"drums{mix}{suffix}" for mix in range(5) for suffix in ("", "d", "dnoflip")
)


class DrumMixMarker(BaseModel):
    """Parsed view of a ``[mix D config]`` text event."""

    model_config = ConfigDict(frozen=True)

    difficulty: int = Field(..., ge=0, le=3)
    configuration: str
    time: int = Field(..., ge=0)

    @classmethod
    def parse(cls, event: Text) -> DrumMixMarker | None:
        """Return the marker for a plain text event, or None if it is not one."""
        if event.text_type != "plain":
            return None

        match = _MIX_PATTERN.match(event.content)
        if match is None:
            return None

        configuration = match.group("configuration")
        if configuration not in DRUM_MIX_CONFIGURATIONS:
            return None

        return cls(
            difficulty=int(match.group("difficulty")),
            configuration=configuration,
            time=event.time,
        )

    @staticmethod
    def default_for(difficulty: int) -> Text:
        if difficulty < 0 or difficulty > 3:
            raise ValueError("Difficulty must be between 0 and 3 inclusive.")
        return Text.marker(f"[mix {difficulty} drums0]", 0)
