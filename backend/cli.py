import argparse
import asyncio
import dataclasses
import json
import logging
import os
import sys
from typing import Any, List, Optional, TextIO

import yaml

from application.exceptions import InvalidPlanError, TimerEngineError
from backend.core.plan_builder import build_plan, coerce_exercises, describe_plan
from backend.core.presets import get_preset
from backend.core.progress import format_clock, segment_position
from backend.services.timer_engine import TimerContext, TimerEngine, TimerEngineConfig
from backend.settings import get_settings
from domain.models import AudioMode, Exercise, PlaybackState, PlaybackStatus
from infrastructure import (
    AsyncioClock,
    ConsoleNarratorPort,
    TerminalBellAudioPort,
    YamlPreferenceRepository,
)

logger = logging.getLogger(__name__)


def load_exercise_file(path: str) -> List[Exercise]:
    """
    Read an exercise list from a YAML or JSON file.

    The file holds either a list of exercises, a mapping with an
    "exercises" list, or a mapping with a "preset" name (and optional
    "exercise_name").

    Raises:
        InvalidPlanError: If the file is not one of those shapes
    """
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith(".json"):
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if isinstance(data, dict):
        if "preset" in data:
            return get_preset(str(data["preset"])).to_exercises(data.get("exercise_name"))
        data = data.get("exercises")
    if not isinstance(data, list):
        raise InvalidPlanError(f"{path}: expected a list of exercises")
    return coerce_exercises(data)


# =============================================================================
# plan
# =============================================================================


def print_plan(exercises: List[Exercise], stream: TextIO) -> None:
    plan = build_plan(exercises)
    if plan.is_rest_day:
        stream.write("Rest day: no exercises\n")
        return
    for row in describe_plan(plan):
        label = row["name"] if row["kind"] == "exercise" else f"  {row['name']}"
        stream.write(
            f"{row['position'] + 1:>3}. {label:<32} set {row['set']:<3} "
            f"{format_clock(row['duration_seconds']):>6}\n"
        )
    stream.write(f"Total: {len(plan)} segments, {format_clock(plan.total_duration_seconds)}\n")


# =============================================================================
# run
# =============================================================================


def _render(state: PlaybackState, engine: TimerEngine, stream: TextIO) -> None:
    segment = engine.scheduler.current_segment
    name = segment.display_name if segment else "-"
    if state.status == PlaybackStatus.PREPARING:
        clock = f"get ready {state.preparation_seconds_remaining}"
    else:
        clock = format_clock(state.time_remaining_seconds)
    stream.write(
        f"\r[{state.status.value:<9}] {segment_position(state, engine.plan):>7} "
        f"{name:<28} {clock:<12} {engine.progress():5.1f}%"
    )
    stream.flush()


async def run_session(
    exercises: List[Exercise],
    *,
    context: TimerContext,
    language: Optional[str],
    audio_mode: Optional[AudioMode],
    preparation_seconds: Optional[int],
    stream: TextIO,
) -> PlaybackState:
    """Play a session on the event loop until it completes or is cancelled."""
    settings = get_settings()
    config = TimerEngineConfig.from_settings(settings, context, language=language)
    if preparation_seconds is not None:
        config = dataclasses.replace(config, preparation_seconds=preparation_seconds)

    finished = asyncio.Event()
    engine = TimerEngine(
        config,
        AsyncioClock(),
        preferences=YamlPreferenceRepository(os.path.expanduser(settings.preferences_file)),
        audio_port=TerminalBellAudioPort(stream),
        narrator_port=ConsoleNarratorPort(stream),
        on_completed=finished.set,
    )
    if audio_mode is not None:
        engine.set_audio_mode(audio_mode)
    engine.scheduler.add_listener(lambda state: _render(state, engine, stream))

    engine.load_exercises(exercises)
    if engine.plan.is_rest_day:
        stream.write("Rest day: nothing to play\n")
        return engine.state

    engine.start()
    try:
        await finished.wait()
    finally:
        state = engine.state
        engine.teardown()
        stream.write("\n")
    return state


# =============================================================================
# Entry point
# =============================================================================


def _positive_int(value: str) -> int:
    try:
        seconds = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if seconds < 1:
        raise argparse.ArgumentTypeError("must be at least 1 second")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plan and play timed exercise sessions")
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan_parser = subparsers.add_parser("plan", help="Print the segment plan of an exercise file")
    plan_parser.add_argument("input", help="YAML or JSON exercise file")

    run_parser = subparsers.add_parser("run", help="Play an exercise file in the terminal")
    run_parser.add_argument("input", help="YAML or JSON exercise file")
    run_parser.add_argument(
        "--context",
        choices=[c.value for c in TimerContext],
        default=TimerContext.TRAINING.value,
        help="Timer context (selects the stored audio mode)",
    )
    run_parser.add_argument("--language", help="Narration language (en, pl)")
    run_parser.add_argument(
        "--audio-mode",
        choices=[m.value for m in AudioMode],
        help="Audio mode for this and later sessions",
    )
    run_parser.add_argument(
        "--preparation",
        type=_positive_int,
        help="Preparation countdown in seconds",
    )
    return parser


def main(argv: Optional[List[str]] = None, stream: Optional[Any] = None) -> int:
    args = build_parser().parse_args(argv)
    stream = stream or sys.stdout

    try:
        exercises = load_exercise_file(args.input)

        if args.command == "plan":
            print_plan(exercises, stream)
            return 0

        state = asyncio.run(
            run_session(
                exercises,
                context=TimerContext(args.context),
                language=args.language,
                audio_mode=AudioMode(args.audio_mode) if args.audio_mode else None,
                preparation_seconds=args.preparation,
                stream=stream,
            )
        )
        stream.write(f"Session {state.status.value}\n")
        return 0

    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot read {args.input}: {e.strerror or e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: {args.input} is not UTF-8 text: {e}", file=sys.stderr)
        return 1
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"Error: Invalid exercise file: {e}", file=sys.stderr)
        return 1
    except TimerEngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nStopped", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
