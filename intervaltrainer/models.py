from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


Feedback = Literal["correct", "incorrect"]


class Settings(BaseModel):
	sample_rate: int = Field(default=44100, ge=8000, le=192000)
	root_duration: float = Field(default=1.5, gt=0.0)
	interval_duration: float = Field(default=5.0, gt=0.0)
	# Six summed harmonics plus the cubic term can exceed 1.0; keep headroom
	volume: float = Field(default=0.25, ge=0.0, le=1.0)
	bag_cycles: int = Field(default=3, ge=1, le=20)
	root_min: int = Field(default=-24)
	root_max: int = Field(default=0)

	@model_validator(mode="after")
	def _check_root_range(self) -> "Settings":
		if self.root_min > self.root_max:
			raise ValueError(f"root_min ({self.root_min}) must not exceed root_max ({self.root_max})")
		return self


class Interval(BaseModel):
	model_config = ConfigDict(frozen=True)

	half_steps: int = Field(ge=0, le=12)
	name: str


class Exercise(BaseModel):
	root_note: int
	interval: int = Field(ge=0, le=12)
	first_try: bool = True


class Score(BaseModel):
	total: int = Field(default=0, ge=0)
	correct: int = Field(default=0, ge=0)

	@property
	def answered(self) -> int:
		# total already counts the exercise currently being asked
		return max(0, self.total - 1)

	@property
	def text(self) -> str:
		return f"Score: {self.correct}/{self.answered}"


class AnswerRecord(BaseModel):
	interval: int
	chosen: Optional[int]
	correct: bool
	first_try: bool
