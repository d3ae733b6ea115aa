from __future__ import annotations

import logging
from types import ModuleType
from typing import Optional, Protocol

import numpy as np
import numpy.typing as npt

from .audio import SR


logger = logging.getLogger(__name__)


class PlaybackUnavailable(RuntimeError):
	"""The audio output cannot play right now (no device, blocked, driver error)."""


class PlaybackHandle(Protocol):
	def stop(self) -> None: ...


class AudioSink(Protocol):
	def start(self, buffer: npt.NDArray[np.float32], sample_rate: int) -> PlaybackHandle: ...


def _sounddevice() -> ModuleType:
	try:
		import sounddevice
	except OSError as e:
		# Raised by sounddevice itself when the PortAudio library is missing
		raise PlaybackUnavailable(f"PortAudio library not found: {e}") from e
	return sounddevice


class SoundDeviceHandle:
	def __init__(self, sd: ModuleType) -> None:
		self._sd = sd
		self.stopped = False

	def stop(self) -> None:
		if self.stopped:
			return
		self.stopped = True
		self._sd.stop()


class SoundDeviceSink:
	"""Plays buffers on the default output device via sounddevice."""

	def start(self, buffer: npt.NDArray[np.float32], sample_rate: int) -> SoundDeviceHandle:
		sd = _sounddevice()
		try:
			# Non-blocking: returns as soon as the stream is running
			sd.play(buffer, sample_rate)
		except sd.PortAudioError as e:
			raise PlaybackUnavailable(str(e)) from e
		return SoundDeviceHandle(sd)


class PlaybackController:
	"""Owns the one audible output; starting a buffer stops the previous one first."""

	def __init__(self, sink: AudioSink, sample_rate: int = SR) -> None:
		self.sink = sink
		self.sample_rate = sample_rate
		self.active: Optional[PlaybackHandle] = None
		self.last_error: Optional[PlaybackUnavailable] = None

	def stop(self) -> None:
		if self.active is not None:
			self.active.stop()
			self.active = None

	def play(self, buffer: npt.NDArray[np.float32]) -> bool:
		self.stop()
		try:
			self.active = self.sink.start(buffer, self.sample_rate)
		except PlaybackUnavailable as e:
			logger.warning("Playback unavailable: %s", e)
			self.last_error = e
			return False
		self.last_error = None
		return True
