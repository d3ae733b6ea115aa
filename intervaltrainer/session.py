from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
import numpy.typing as npt

from .audio import compose
from .models import AnswerRecord, Exercise, Feedback, Score, Settings
from .playback import AudioSink, PlaybackController, SoundDeviceSink
from .theory import interval_name
from .trainer import IntervalSampler, RandomSource, ScoreTracker


logger = logging.getLogger(__name__)


class TrainerSession:
	"""One running exercise loop: draw, play, evaluate the answer, repeat.

	Every collaborator with side effects (audio sink, random source) is
	injected so the loop can run without a sound card.
	"""

	def __init__(
		self,
		settings: Optional[Settings] = None,
		sink: Optional[AudioSink] = None,
		rng: Optional[RandomSource] = None,
	) -> None:
		self.settings = settings if settings is not None else Settings()
		s = self.settings
		self.sampler = IntervalSampler(rng, cycles=s.bag_cycles, root_min=s.root_min, root_max=s.root_max)
		self.tracker = ScoreTracker()
		self.player = PlaybackController(sink if sink is not None else SoundDeviceSink(), s.sample_rate)
		self.buffer: Optional[npt.NDArray[np.float32]] = None
		self.feedback: Optional[Feedback] = None
		self.last_playback_ok: Optional[bool] = None

	@property
	def exercise(self) -> Optional[Exercise]:
		return self.sampler.current

	@property
	def score(self) -> Score:
		return self.tracker.score

	@property
	def score_text(self) -> str:
		return self.score.text

	@property
	def initialized(self) -> bool:
		return self.exercise is not None

	def initialize(self) -> None:
		if self.initialized:
			return
		self._new_exercise()
		self.replay()

	def _new_exercise(self) -> Exercise:
		ex = self.sampler.draw_next()
		self.tracker.record_new_exercise()
		s = self.settings
		self.buffer = compose(
			ex.root_note,
			ex.interval,
			sample_rate=s.sample_rate,
			root_dur=s.root_duration,
			interval_dur=s.interval_duration,
			volume=s.volume,
		)
		return ex

	def replay(self) -> bool:
		"""Play the current exercise's buffer again, as composed when it was drawn."""
		if self.exercise is None or self.buffer is None:
			raise RuntimeError("session not initialized")
		logger.debug("playing interval: %s", interval_name(self.exercise.interval))
		self.last_playback_ok = self.player.play(self.buffer)
		return self.last_playback_ok

	def on_answer_submitted(self, half_steps: Any) -> AnswerRecord:
		ex = self.exercise
		if ex is None:
			raise RuntimeError("session not initialized")
		record = self.tracker.evaluate(ex, half_steps)
		if record.correct:
			self.feedback = "correct"
			self._new_exercise()
		else:
			self.feedback = "incorrect"
		self.replay()
		return record
