"""Terminal drill: hear an interval on the sound card, type its name or size."""

from __future__ import annotations

import argparse
import logging
import random
from typing import Callable, List, Optional

from pydantic import ValidationError

from .models import Settings
from .session import TrainerSession
from .storage import load_settings
from .theory import INTERVALS, parse_interval


def _prompt() -> str:
	names = ", ".join(f"{iv.half_steps}={iv.name}" for iv in INTERVALS)
	return f"[{names}] r=replay q=quit > "


def run(session: TrainerSession, read: Callable[[str], str] = input, write: Callable[[str], None] = print) -> None:
	session.initialize()
	prompt = _prompt()
	while True:
		try:
			line = read(prompt).strip()
		except EOFError:
			break
		if line in ("q", "quit"):
			break
		if line in ("r", ""):
			session.replay()
			continue
		try:
			half_steps = parse_interval(line)
		except KeyError:
			write(f"Unknown interval: {line}")
			continue
		record = session.on_answer_submitted(half_steps)
		if record.correct:
			write(f"Correct! {session.score_text}")
		else:
			write("Wrong, listen again.")
		if session.last_playback_ok is False:
			write("(audio unavailable, press r to retry)")
	write(session.score_text)


def main(argv: Optional[List[str]] = None) -> None:
	parser = argparse.ArgumentParser(description="Interval ear-training drill")
	parser.add_argument("--seed", type=int, help="Seed for reproducible exercises")
	parser.add_argument("--volume", type=float, help="Output volume 0..1 (overrides saved settings)")
	parser.add_argument("--verbose", "-v", action="store_true", help="Log each drawn interval")
	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

	settings = load_settings()
	if args.volume is not None:
		try:
			settings = Settings.model_validate({**settings.model_dump(), "volume": args.volume})
		except ValidationError:
			parser.error(f"--volume must be between 0 and 1, got {args.volume}")
	run(TrainerSession(settings, rng=random.Random(args.seed)))


if __name__ == "__main__":
	main()
