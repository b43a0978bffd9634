"""
Interval timer presets.

The generic training timer offers named interval presets. Each preset is
expanded into a plain exercise list so it runs on the same segment plan and
playback engine as challenge days.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from application.exceptions import UnknownPresetError
from domain.models import Exercise


class IntervalPreset(BaseModel):
    """
    Named interval configuration.

    A preset runs `sets` blocks of `rounds` work intervals. Work intervals are
    separated by `rest_seconds`; blocks by `rest_between_sets_seconds`.
    """

    name: str
    work_seconds: int = Field(..., gt=0)
    rest_seconds: int = Field(..., gt=0)
    rounds: int = Field(..., ge=1)
    sets: int = Field(default=1, ge=1)
    rest_between_sets_seconds: int = Field(default=60, gt=0)

    @property
    def total_duration_seconds(self) -> int:
        work = self.work_seconds * self.rounds * self.sets
        rests = (self.rounds - 1) * self.sets * self.rest_seconds
        block_rests = (self.sets - 1) * self.rest_between_sets_seconds
        return work + rests + block_rests

    def to_exercises(self, exercise_name: Optional[str] = None) -> List[Exercise]:
        """
        Expand the preset into one single-set exercise per work interval.

        Args:
            exercise_name: Name announced for every interval; defaults to
                "Round N" (and "Set S, Round N" for multi-set presets)

        Returns:
            Exercises in playback order
        """
        exercises: List[Exercise] = []
        for set_number in range(1, self.sets + 1):
            for round_number in range(1, self.rounds + 1):
                if exercise_name:
                    name = exercise_name
                elif self.sets > 1:
                    name = f"Set {set_number}, Round {round_number}"
                else:
                    name = f"Round {round_number}"
                is_block_end = round_number == self.rounds
                exercises.append(
                    Exercise(
                        name=name,
                        sets=1,
                        hold_time_seconds=self.work_seconds,
                        rest_time_seconds=(
                            self.rest_between_sets_seconds if is_block_end else self.rest_seconds
                        ),
                    )
                )
        return exercises

    model_config = {"frozen": True}


DEFAULT_PRESETS: Dict[str, IntervalPreset] = {
    preset.name.lower(): preset
    for preset in (
        IntervalPreset(name="Tabata", work_seconds=20, rest_seconds=10, rounds=8),
        IntervalPreset(name="HIIT Classic", work_seconds=40, rest_seconds=20, rounds=10),
        IntervalPreset(
            name="Circuit",
            work_seconds=30,
            rest_seconds=15,
            rounds=12,
            sets=3,
            rest_between_sets_seconds=90,
        ),
    )
}


def list_presets() -> List[IntervalPreset]:
    return list(DEFAULT_PRESETS.values())


def get_preset(name: str) -> IntervalPreset:
    """
    Look up a preset by case-insensitive name.

    Raises:
        UnknownPresetError: If no preset has that name
    """
    preset = DEFAULT_PRESETS.get(name.strip().lower())
    if preset is None:
        raise UnknownPresetError(name)
    return preset
