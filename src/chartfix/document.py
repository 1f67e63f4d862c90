"""In-memory MIDI document: an ordered list of tracks of absolute-time events."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .events import BaseEvent, EndOfTrack, Event, NoteOn, Text
from .exceptions import TrackNotFoundError

E = TypeVar("E", bound=BaseEvent)


class EventLocation(BaseModel):
    """Bar/beat position of a tick, counted from 1 assuming 4/4 throughout."""

    model_config = ConfigDict(frozen=True)

    time: int
    bar: int
    beat: int
    ticks: int

    @classmethod
    def at(cls, time: int, ticks_per_quarter: int) -> EventLocation:
        quarter_notes = time // ticks_per_quarter
        return cls(
            time=time,
            bar=quarter_notes // 4 + 1,
            beat=quarter_notes % 4 + 1,
            ticks=time % ticks_per_quarter,
        )

    def __str__(self) -> str:
        return f"[{self.bar}:{self.beat} in 4/4 ({self.time} ticks)]"


class Track(BaseModel):
    """Ordered, mutable sequence of events.

    Events are compared by identity when removed, so two structurally equal
    notes on the same track are never confused with each other.
    """

    events: list[Event] = Field(default_factory=list)

    @classmethod
    def of(cls, *events: BaseEvent) -> Track:
        track = cls()
        track.events.extend(events)  # type: ignore[arg-type]
        return track

    @classmethod
    def named(cls, name: str, events: Iterable[BaseEvent] = ()) -> Track:
        """Track starting with a name event and ending with an end marker.

        An end marker already present in ``events`` is kept as is, otherwise
        one is added at the latest event time.
        """
        track = cls.of(Text.track_name(name), *events)
        if track.end_marker() is None:
            track.events.append(EndOfTrack(time=track.latest_time()))
        return track

    def __len__(self) -> int:
        return len(self.events)

    def of_type(self, event_type: type[E]) -> list[E]:
        return [e for e in self.events if isinstance(e, event_type)]

    def notes(self) -> list[NoteOn]:
        return self.of_type(NoteOn)

    def name_events(self) -> list[Text]:
        return [e for e in self.of_type(Text) if e.is_name]

    def texts(self) -> list[Text]:
        return [e for e in self.of_type(Text) if not e.is_name]

    @property
    def name(self) -> str | None:
        names = self.name_events()
        return names[0].content if names else None

    def find_first_text(self, content: str) -> Text | None:
        matches = [e for e in self.texts() if e.content == content]
        if not matches:
            return None
        return min(matches, key=lambda e: e.time)

    def end_marker(self) -> EndOfTrack | None:
        for event in self.events:
            if isinstance(event, EndOfTrack):
                return event
        return None

    def latest_time(self) -> int:
        """Latest tick of any event other than the end marker, counting note ends."""
        times = [e.time for e in self.events if not isinstance(e, EndOfTrack)]
        times.extend(note.off.time for note in self.notes())
        return max(times, default=0)

    def add(self, event: BaseEvent) -> None:
        self.events.append(event)  # type: ignore[arg-type]

    def add_note(self, note: NoteOn) -> None:
        self.events.append(note)
        self.events.append(note.off)

    def index_of(self, event: BaseEvent) -> int:
        for index, candidate in enumerate(self.events):
            if candidate is event:
                return index
        raise ValueError(f"Event not on track: {event.describe()}")

    def remove(self, event: BaseEvent) -> bool:
        """Remove this exact event object; returns False if it is not present."""
        try:
            del self.events[self.index_of(event)]
        except ValueError:
            return False
        return True

    def remove_note(self, note: NoteOn) -> None:
        self.remove(note)
        self.remove(note.off)

    def update_end(self, time: int | None = None) -> EndOfTrack:
        """Move the end marker to ``time`` (default: latest event) and to the last position."""
        end = self.end_marker()
        if time is None:
            time = self.latest_time()

        if end is None:
            end = EndOfTrack(time=time)
        else:
            self.remove(end)
            end.time = time

        self.events.append(end)
        return end

    def is_empty(self) -> bool:
        """True if only a name and/or an end marker remain."""
        return all(
            isinstance(e, EndOfTrack) or (isinstance(e, Text) and e.is_name)
            for e in self.events
        )


class Document(BaseModel):
    """A whole MIDI file. Resolution and format are fixed at construction."""

    model_config = ConfigDict(frozen=True)

    format: int = Field(default=1, ge=0, le=2)
    ticks_per_quarter: int = Field(..., gt=0)
    tracks: list[Track] = Field(default_factory=list)

    def find_track_index(self, name: str) -> int | None:
        for index, track in enumerate(self.tracks):
            if track.name == name:
                return index
        return None

    def find_track(self, name: str) -> Track | None:
        index = self.find_track_index(name)
        return None if index is None else self.tracks[index]

    def get_track(self, name: str) -> Track:
        track = self.find_track(name)
        if track is None:
            raise TrackNotFoundError(name)
        return track

    def add_track(self, track: Track) -> Track:
        self.tracks.append(track)
        return track

    def add_named_track(self, name: str, events: Iterable[BaseEvent] = ()) -> Track:
        return self.add_track(Track.named(name, events))

    def remove_track(self, index: int) -> Track:
        return self.tracks.pop(index)

    def remove_tracks(self, indices: Iterable[int]) -> None:
        # Highest first so the remaining indices stay valid
        for index in sorted(set(indices), reverse=True):
            self.tracks.pop(index)

    def clone(self) -> Document:
        """Deep copy; a note and its off-event stay paired in the copy."""
        return self.model_copy(deep=True)

    def location(self, time: int) -> EventLocation:
        return EventLocation.at(time, self.ticks_per_quarter)
