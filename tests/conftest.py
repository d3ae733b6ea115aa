from typing import List, Tuple

import numpy as np
import pytest


class FakeHandle:
	def __init__(self, log: List[Tuple[str, int]], n: int) -> None:
		self.log = log
		self.n = n
		self.stopped = False

	def stop(self) -> None:
		self.stopped = True
		self.log.append(("stop", self.n))


class FakeSink:
	def __init__(self) -> None:
		self.log: List[Tuple[str, int]] = []
		self.buffers: List[np.ndarray] = []
		self.handles: List[FakeHandle] = []

	def start(self, buffer, sample_rate):
		n = len(self.handles)
		self.buffers.append(buffer)
		self.log.append(("start", n))
		h = FakeHandle(self.log, n)
		self.handles.append(h)
		return h


class ScriptedRandom:
	"""Returns queued values, falling back to the lowest choice when empty."""

	def __init__(self, ranges=(), ints=()) -> None:
		self.ranges = list(ranges)
		self.ints = list(ints)

	def randrange(self, stop: int) -> int:
		v = self.ranges.pop(0) if self.ranges else 0
		assert 0 <= v < stop
		return v

	def randint(self, a: int, b: int) -> int:
		v = self.ints.pop(0) if self.ints else a
		assert a <= v <= b
		return v


@pytest.fixture
def sink() -> FakeSink:
	return FakeSink()
