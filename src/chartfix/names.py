"""Track and event names used by the chart format."""

from __future__ import annotations


class TrackName:
    """Names of the tracks the fixer reads or writes."""

    DRUMS = "PART DRUMS"
    VENUE = "VENUE"
    BEAT = "BEAT"
    EVENTS = "EVENTS"
    TEMPO_MAP = "TEMPO MAP"
    # Note track holding the encoded time signature input
    INPUT_TIMESIG = "timesig"


class EventName:
    """Special markers placed on the EVENTS track."""

    CROWD_REALTIME = "[crowd_realtime]"
    CROWD_INTENSE = "[crowd_intense]"
    CROWD_NORMAL = "[crowd_normal]"
    CROWD_MELLOW = "[crowd_mellow]"

    CROWD_CLAP = "[crowd_clap]"
    CROWD_NOCLAP = "[crowd_noclap]"

    MUSIC_START = "[music_start]"
    MUSIC_END = "[music_end]"
    END = "[end]"
    CODA = "[coda]"


SPECIAL_EVENT_NAMES: tuple[str, ...] = (
    EventName.CROWD_REALTIME,
    EventName.CROWD_INTENSE,
    EventName.CROWD_NORMAL,
    EventName.CROWD_MELLOW,
    EventName.CROWD_CLAP,
    EventName.CROWD_NOCLAP,
    EventName.MUSIC_START,
    EventName.MUSIC_END,
    EventName.END,
    EventName.CODA,
)
