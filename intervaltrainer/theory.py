import numbers
from typing import Any, Dict, List, Optional

from .models import Interval


A4_FREQ = 440.0

INTERVAL_NAMES = [
	"Unison",
	"Minor Second",
	"Second",
	"Minor Third",
	"Third",
	"Fourth",
	"Tritone",
	"Fifth",
	"Minor Sixth",
	"Sixth",
	"Minor Seventh",
	"Seventh",
	"Octave",
]

# Indexed by half steps: INTERVALS[7].name == "Fifth"
INTERVALS: List[Interval] = [Interval(half_steps=i, name=n) for i, n in enumerate(INTERVAL_NAMES)]

NAME_TO_HALF_STEPS: Dict[str, int] = {iv.name.lower(): iv.half_steps for iv in INTERVALS}


def frequency_of(note_offset: int) -> float:
	"""Frequency in Hz of a note `note_offset` semitones away from A4 (equal temperament)."""
	return float(A4_FREQ * (2.0 ** (note_offset / 12.0)))


def interval_ids() -> List[int]:
	return [iv.half_steps for iv in INTERVALS]


def as_interval(half_steps: Any) -> Optional[int]:
	"""`half_steps` as a plain int when it is an integer inside the table, else None.

	Any integral type counts (numpy ints included); bools and floats do not.
	"""
	if isinstance(half_steps, bool) or not isinstance(half_steps, numbers.Integral):
		return None
	value = int(half_steps)
	if 0 <= value < len(INTERVALS):
		return value
	return None


def is_valid_interval(half_steps: Any) -> bool:
	return as_interval(half_steps) is not None


def interval_name(half_steps: Any) -> str:
	value = as_interval(half_steps)
	if value is not None:
		return INTERVALS[value].name
	return f"<{half_steps!r}>"


def parse_interval(text: str) -> int:
	"""Half steps for an interval given as a number ("7") or a name ("fifth").

	Raises:
		KeyError: if the text names no known interval.
	"""
	s = text.strip()
	try:
		return int(s)
	except ValueError:
		pass
	return NAME_TO_HALF_STEPS[s.lower()]
