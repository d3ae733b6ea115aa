from __future__ import annotations

import logging
import random
from typing import Any, List, Optional, Protocol

from .models import AnswerRecord, Exercise, Score
from .theory import as_interval, interval_ids, interval_name


logger = logging.getLogger(__name__)


class RandomSource(Protocol):
	"""The part of `random.Random` the trainer draws from."""

	def randrange(self, stop: int) -> int: ...

	def randint(self, a: int, b: int) -> int: ...


class IntervalBag:
	"""Interval ids drawn without replacement, refilled with fresh cycles when empty."""

	def __init__(self, cycles: int = 3, rng: Optional[RandomSource] = None) -> None:
		if cycles < 1:
			raise ValueError("cycles must be at least 1")
		self.cycles = cycles
		self.rng: RandomSource = rng if rng is not None else random.Random()
		self.items: List[int] = []

	def __len__(self) -> int:
		return len(self.items)

	def refill(self) -> None:
		for _ in range(self.cycles):
			self.items.extend(interval_ids())

	def draw(self) -> int:
		if not self.items:
			self.refill()
		idx = self.rng.randrange(len(self.items))
		return self.items.pop(idx)


class IntervalSampler:
	def __init__(
		self,
		rng: Optional[RandomSource] = None,
		cycles: int = 3,
		root_min: int = -24,
		root_max: int = 0,
	) -> None:
		self.rng: RandomSource = rng if rng is not None else random.Random()
		self.bag = IntervalBag(cycles, self.rng)
		self.root_min = root_min
		self.root_max = root_max
		self.current: Optional[Exercise] = None

	def draw_next(self) -> Exercise:
		interval = self.bag.draw()
		# Only the interval is deduplicated; roots may repeat freely
		root = self.rng.randint(self.root_min, self.root_max)
		self.current = Exercise(root_note=root, interval=interval)
		logger.debug("new interval: %s (root %d)", interval_name(interval), root)
		logger.debug("intervals left (without current): %d", len(self.bag))
		return self.current


class ScoreTracker:
	def __init__(self, score: Optional[Score] = None) -> None:
		self.score = score if score is not None else Score()

	def record_new_exercise(self) -> None:
		self.score.total += 1

	def evaluate(self, exercise: Exercise, chosen: Any) -> AnswerRecord:
		logger.debug("answer received: %s", interval_name(chosen))
		first_try = exercise.first_try
		# Anything outside the table simply cannot match
		value = as_interval(chosen)
		is_correct = value is not None and value == exercise.interval
		if is_correct:
			logger.debug("answer is correct")
			if first_try:
				self.score.correct += 1
		else:
			logger.debug("answer is wrong")
			exercise.first_try = False
		return AnswerRecord(
			interval=exercise.interval,
			chosen=value,
			correct=is_correct,
			first_try=first_try,
		)
