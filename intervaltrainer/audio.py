SR = 44100
ROOT_DURATION = 1.5
# The interval tone rings longer so it can be compared against the root
INTERVAL_DURATION = 5.0
VOLUME = 0.25
N_HARMONICS = 6

import io
from typing import Union, cast
import numpy as np
import numpy.typing as npt
import soundfile as sf

from .theory import frequency_of


SampleIndex = Union[int, float, npt.NDArray[np.floating], npt.NDArray[np.integer]]


def tone_sample(sample_index: SampleIndex, frequency: float, sample_rate: float = SR) -> Union[float, npt.NDArray[np.float64]]:
	"""Piano-like waveform value at `sample_index`.

	Six harmonics under a shared exponential decay, a cubic term for
	richness and a short strike at the onset. The result is unscaled;
	volume is applied by the caller.

	The harmonic sum peaks at 4/3 (Im of 2z/(2-z) at cos(wn) = 0.8), and
	s + s**3 lifts that to about 3.7, so the true range is near [-3.7, 3.7]
	rather than [-2, 2]. The default volume of 0.25 keeps output below 1.

	Args:
		sample_index: Sample position (a scalar or an array of positions)
		frequency: Fundamental frequency in Hz
		sample_rate: Samples per second of the output
	"""
	n = np.asarray(sample_index, dtype=np.float64)
	w = 2.0 * np.pi * (frequency / sample_rate)
	# Higher pitches fade sooner, as on a struck string
	decay = np.exp(-0.001 * w * n)
	x = np.zeros_like(n)
	for k in range(1, N_HARMONICS + 1):
		x = x + np.sin(k * w * n) * decay / (2.0 ** (k - 1))
	x = x + x * x * x
	x = x * (1.0 + 16.0 * n * np.exp(-6.0 * n))
	if x.ndim == 0:
		return float(x)
	return x


def n_samples(sample_rate: float, seconds: float) -> int:
	return int(round(sample_rate * seconds))


def tone(freq: float, dur: float, sample_rate: int = SR, volume: float = VOLUME) -> npt.NDArray[np.float32]:
	"""Render one tone of `dur` seconds, its envelope starting at sample 0."""
	idx = np.arange(n_samples(sample_rate, dur), dtype=np.float64)
	x = cast(npt.NDArray[np.float64], tone_sample(idx, freq, sample_rate))
	return (x * volume).astype(np.float32)


def compose(
	root_note: int,
	interval: int,
	sample_rate: int = SR,
	root_dur: float = ROOT_DURATION,
	interval_dur: float = INTERVAL_DURATION,
	volume: float = VOLUME,
) -> npt.NDArray[np.float32]:
	"""Root tone followed directly by the interval tone, in one buffer.

	No gap or overlap: the interval tone starts on the sample after the
	root tone's last one.
	"""
	first = tone(frequency_of(root_note), root_dur, sample_rate, volume)
	second = tone(frequency_of(root_note + interval), interval_dur, sample_rate, volume)
	return np.concatenate([first, second])


def wav_bytes(x: npt.NDArray[np.float32], sample_rate: int = SR) -> bytes:
	buf = io.BytesIO()
	sf.write(buf, x, sample_rate, format="WAV")
	return buf.getvalue()
