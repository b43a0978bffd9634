"""
Timer presets router.

This router contains endpoints for:
- GET /timer/presets - List interval presets
- GET /timer/presets/{name} - Get one preset with its expanded segment plan
"""

from typing import List

from fastapi import APIRouter, HTTPException

from api.schemas.timer import PresetResponse
from application.exceptions import UnknownPresetError
from backend.core.plan_builder import build_plan, describe_plan
from backend.core.presets import IntervalPreset, get_preset, list_presets

router = APIRouter(
    prefix="/timer/presets",
    tags=["Timer Presets"],
)


def _preset_to_response(preset: IntervalPreset) -> PresetResponse:
    return PresetResponse(
        **preset.model_dump(),
        total_duration_seconds=preset.total_duration_seconds,
    )


@router.get("", response_model=List[PresetResponse])
def list_presets_endpoint():
    """
    List the built-in interval presets.

    Returns:
        Presets with their timing and total duration
    """
    return [_preset_to_response(preset) for preset in list_presets()]


@router.get("/{name}")
def get_preset_endpoint(name: str):
    """
    Get one preset by case-insensitive name.

    Args:
        name: Preset name, e.g. "tabata"

    Returns:
        The preset and the segments it expands to
    """
    try:
        preset = get_preset(name)
    except UnknownPresetError as e:
        raise HTTPException(status_code=404, detail=str(e))

    plan = build_plan(preset.to_exercises())
    return {
        "preset": _preset_to_response(preset).model_dump(),
        "segments": describe_plan(plan),
        "total_segments": len(plan),
    }
