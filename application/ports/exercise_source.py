"""
Exercise Source Interface (Port).

The engine never fetches plans itself; the hosting page supplies a source that
returns the ordered exercises of a training day or challenge day.
"""
from typing import List, Protocol

from domain.models import Exercise


class ExerciseSource(Protocol):
    """Returns the exercises of a session in display order."""

    def __call__(self, session_id: str) -> List[Exercise]:
        ...
