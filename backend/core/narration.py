"""
Voice narration for full-voice mode.

Builds the phrases spoken on segment entry, during the numeric countdown, at
the start of the preparation lead-in and on completion. Phrases come from a
per-language catalog; durations are spelled out in natural language
("1 minute and 15 seconds").
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from domain.models import AudioMode, Segment

DEFAULT_LANGUAGE = "en"
VOICE_COUNTDOWN_SECONDS = 3


def _english_seconds(n: int) -> str:
    return f"{n} seconds"


def _english_minutes(n: int) -> str:
    return "1 minute" if n == 1 else f"{n} minutes"


def _polish_plural(n: int, one: str, few: str, many: str) -> str:
    if n == 1:
        return one
    if n % 10 in (2, 3, 4) and n % 100 not in (12, 13, 14):
        return few
    return many


def _polish_seconds(n: int) -> str:
    return f"{n} {_polish_plural(n, 'sekunda', 'sekundy', 'sekund')}"


def _polish_minutes(n: int) -> str:
    return f"{n} {_polish_plural(n, 'minuta', 'minuty', 'minut')}"


@dataclass(frozen=True)
class PhraseCatalog:
    """Language-specific words and templates."""

    seconds: Callable[[int], str]
    minutes: Callable[[int], str]
    conjunction: str
    rest: str
    get_ready: str
    completed: str


CATALOGS: Dict[str, PhraseCatalog] = {
    "en": PhraseCatalog(
        seconds=_english_seconds,
        minutes=_english_minutes,
        conjunction="and",
        rest="Rest",
        get_ready="Get ready. Next: {name}",
        completed="Workout completed! Great job!",
    ),
    "pl": PhraseCatalog(
        seconds=_polish_seconds,
        minutes=_polish_minutes,
        conjunction="i",
        rest="Odpoczynek",
        get_ready="Przygotuj się. Następnie: {name}",
        completed="Trening ukończony! Świetna robota!",
    ),
}


def get_catalog(language: str) -> PhraseCatalog:
    """Catalog for `language` ("en", "pl", "en-US"...), English when unknown."""
    code = (language or DEFAULT_LANGUAGE).split("-")[0].split("_")[0].lower()
    return CATALOGS.get(code, CATALOGS[DEFAULT_LANGUAGE])


def format_natural_duration(seconds: int, language: str = DEFAULT_LANGUAGE) -> str:
    """
    Spell out a duration.

    Examples:
        >>> format_natural_duration(45)
        '45 seconds'
        >>> format_natural_duration(60)
        '1 minute'
        >>> format_natural_duration(75)
        '1 minute and 15 seconds'
        >>> format_natural_duration(120)
        '2 minutes'
    """
    catalog = get_catalog(language)
    minutes, secs = divmod(max(int(seconds), 0), 60)
    if minutes == 0:
        return catalog.seconds(secs)
    if secs == 0:
        return catalog.minutes(minutes)
    return f"{catalog.minutes(minutes)} {catalog.conjunction} {catalog.seconds(secs)}"


@dataclass(frozen=True)
class AnnouncementNarrator:
    """
    Decides what is spoken. Silent unless the mode is full voice.

    The once-per-segment guard is the `announced` flag of PlaybackState; the
    scheduler asks for the entry announcement only while it is unset.
    """

    language: str = DEFAULT_LANGUAGE
    countdown_seconds: int = VOICE_COUNTDOWN_SECONDS

    @property
    def catalog(self) -> PhraseCatalog:
        return get_catalog(self.language)

    def entry_announcement(self, mode: AudioMode, segment: Segment) -> Optional[str]:
        """`<name>, <duration>[, <notes>]` for exercises, `Rest, <duration>` for rests."""
        if mode != AudioMode.FULL_VOICE:
            return None
        duration = format_natural_duration(segment.duration_seconds, self.language)
        if segment.is_rest:
            return f"{self.catalog.rest}, {duration}"
        parts = [segment.display_name, duration]
        if segment.notes:
            parts.append(segment.notes)
        return ", ".join(parts)

    def preparation_announcement(self, mode: AudioMode, segment: Segment) -> Optional[str]:
        if mode != AudioMode.FULL_VOICE:
            return None
        return self.catalog.get_ready.format(name=segment.display_name)

    def countdown(self, mode: AudioMode, seconds_remaining: int) -> Optional[str]:
        """Numeric countdown ("3", "2", "1") at the end of every phase."""
        if mode != AudioMode.FULL_VOICE:
            return None
        if 0 < seconds_remaining <= self.countdown_seconds:
            return str(seconds_remaining)
        return None

    def completion_announcement(self, mode: AudioMode) -> Optional[str]:
        if mode != AudioMode.FULL_VOICE:
            return None
        return self.catalog.completed
