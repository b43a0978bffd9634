"""
YAML file implementation of PreferenceRepository.

Stores all preferences of a device in one YAML mapping:

    preferences:
      challenge_timer_audio_mode: full_voice
      training_timer_audio_mode: silent
"""
import logging
import os
import pathlib
import tempfile
from typing import Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)


class YamlPreferenceRepository:
    """
    File-backed PreferenceRepository.

    Writes go to a temp file in the same directory followed by os.replace(),
    so the file is always either the old or the new version.
    """

    def __init__(self, path: Union[str, pathlib.Path]):
        self._path = pathlib.Path(path)

    @property
    def path(self) -> pathlib.Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed preferences file {self._path}")
            return {}
        preferences = data.get("preferences") or {}
        if not isinstance(preferences, dict):
            logger.warning(f"Ignoring malformed preferences section in {self._path}")
            return {}
        return {str(k): str(v) for k, v in preferences.items()}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        preferences = self._load()
        preferences[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)

        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=str(self._path.parent),
            suffix=".yaml",
            delete=False,
            encoding="utf-8",
        ) as tmp_file:
            yaml.safe_dump({"preferences": preferences}, tmp_file, sort_keys=True)
            tmp_path = tmp_file.name

        try:
            os.replace(tmp_path, str(self._path))
        except OSError:
            os.unlink(tmp_path)
            raise
