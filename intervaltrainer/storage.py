from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from .models import Settings


logger = logging.getLogger(__name__)

ENV_HOME = "INTERVALTRAINER_HOME"


def _data_path() -> Path:
	override = os.environ.get(ENV_HOME)
	dir_ = Path(override) if override else Path.home() / ".intervaltrainer"
	dir_.mkdir(parents=True, exist_ok=True)
	return dir_ / "data.json"


def _load_raw() -> Dict[str, Any]:
	p = _data_path()
	if not p.exists():
		return {}
	try:
		data = json.loads(p.read_text())
	except (OSError, ValueError) as e:
		logger.warning("Ignoring unreadable settings file %s: %s", p, e)
		return {}
	return data if isinstance(data, dict) else {}


def _save_raw(data: Dict[str, Any]) -> None:
	p = _data_path()
	p.write_text(json.dumps(data, indent=2))


def load_settings() -> Settings:
	raw = _load_raw()
	obj = raw.get("settings", {})
	if not isinstance(obj, dict):
		return Settings()
	try:
		return Settings.model_validate(obj)
	except ValidationError as e:
		logger.warning("Invalid stored settings, using defaults: %s", e)
		return Settings()


def save_settings(s: Settings) -> None:
	raw = _load_raw()
	raw["settings"] = s.model_dump()
	_save_raw(raw)
