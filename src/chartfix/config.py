"""Tuning values for the fixer pipeline."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .names import TrackName


class DifficultyBand(BaseModel):
    """Inclusive note range reserved for one drum difficulty."""

    model_config = ConfigDict(frozen=True)

    name: str
    low: int = Field(..., ge=0, le=127)
    high: int = Field(..., ge=0, le=127)

    @model_validator(mode="after")
    def _check_range(self) -> DifficultyBand:
        if self.high < self.low:
            raise ValueError(f"Band '{self.name}' ends before it starts")
        return self

    def contains(self, number: int) -> bool:
        return self.low <= number <= self.high


def _default_bands() -> tuple[DifficultyBand, ...]:
    return (
        DifficultyBand(name="Easy", low=60, high=64),
        DifficultyBand(name="Medium", low=72, high=76),
        DifficultyBand(name="Hard", low=84, high=88),
        DifficultyBand(name="Expert", low=96, high=100),
    )


class FixerConfig(BaseModel):
    """Values the pipeline stages are parameterised with."""

    model_config = ConfigDict(frozen=True)

    ticks_per_quarter: int = Field(default=480, gt=0, description="Target resolution")
    default_velocity: int = Field(default=96, ge=1, le=127)
    clocks_per_click: int = Field(default=24, ge=0)
    thirty_seconds_per_quarter: int = Field(default=8, ge=0)
    count_in_bars: int = Field(default=2, ge=0, description="4/4 bars before the music starts")
    drum_channel: int = Field(default=0, ge=0, le=15)
    difficulty_bands: tuple[DifficultyBand, ...] = Field(default_factory=_default_bands)
    down_beat: int = Field(default=12, ge=0, le=127)
    up_beat: int = Field(default=13, ge=0, le=127)
    sample_notes: frozenset[int] = frozenset({24, 25, 26})
    timesig_track: str = TrackName.INPUT_TIMESIG
    cap_drum_durations: bool = True

    def count_in_ticks(self, ticks_per_quarter: int) -> int:
        return self.count_in_bars * 4 * ticks_per_quarter

    def drum_note_length(self, ticks_per_quarter: int) -> int:
        # Drum notes should be 16th notes at most
        return ticks_per_quarter // 4
