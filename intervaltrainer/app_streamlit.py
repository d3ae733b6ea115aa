import streamlit as st
from typing import Any, Optional, Tuple

import numpy as np
import numpy.typing as npt

from intervaltrainer.audio import wav_bytes
from intervaltrainer.models import Settings
from intervaltrainer.playback import PlaybackUnavailable
from intervaltrainer.session import TrainerSession
from intervaltrainer.storage import load_settings, save_settings
from intervaltrainer.theory import INTERVALS


st.set_page_config(page_title="Interval Trainer", page_icon=None, layout="centered")


@st.cache_data(show_spinner=False, max_entries=8)
def _cached_wav_bytes(buffer: npt.NDArray[np.float32], sample_rate: int) -> bytes:
	return wav_bytes(buffer, sample_rate)


class StreamlitHandle:
	def __init__(self, sink: "StreamlitSink") -> None:
		self.sink = sink

	def stop(self) -> None:
		self.sink.clear()


class StreamlitSink:
	"""Hands buffers to the browser through an autoplaying audio element.

	The page is rebuilt on every interaction, so the placeholder is
	re-bound at the top of each run.
	"""

	def __init__(self) -> None:
		self.player: Optional[Any] = None
		self.started = False

	def bind(self, player: Any) -> None:
		self.player = player
		self.started = False

	def clear(self) -> None:
		if self.player is not None:
			self.player.empty()

	def start(self, buffer: npt.NDArray[np.float32], sample_rate: int) -> StreamlitHandle:
		if self.player is None:
			raise PlaybackUnavailable("no audio element on the page")
		self.player.empty()
		self.player.audio(_cached_wav_bytes(buffer, sample_rate), format="audio/wav", autoplay=True)
		self.started = True
		return StreamlitHandle(self)


def get_state() -> Any:
	if "settings" not in st.session_state:
		st.session_state.settings = load_settings()
	if "sink" not in st.session_state:
		st.session_state.sink = StreamlitSink()
	if "trainer" not in st.session_state:
		st.session_state.trainer = TrainerSession(st.session_state.settings, sink=st.session_state.sink)
	return st.session_state


def sidebar_controls(s: Settings) -> Settings:
	st.sidebar.header("Settings")
	volume = st.sidebar.slider("Volume", min_value=0.0, max_value=1.0, value=s.volume, step=0.05)
	root_dur = st.sidebar.slider("Root tone (s)", min_value=0.5, max_value=5.0, value=s.root_duration, step=0.25)
	interval_dur = st.sidebar.slider("Interval tone (s)", min_value=0.5, max_value=10.0, value=s.interval_duration, step=0.25)
	root_range: Tuple[int, int] = st.sidebar.slider(
		"Root notes (semitones from A4)", min_value=-36, max_value=12, value=(s.root_min, s.root_max)
	)
	new_s = s.model_copy(update={
		"volume": volume,
		"root_duration": root_dur,
		"interval_duration": interval_dur,
		"root_min": root_range[0],
		"root_max": root_range[1],
	})
	if new_s != s:
		save_settings(new_s)
	return new_s


def main() -> None:
	state = get_state()
	s = sidebar_controls(state.settings)
	if s != state.settings:
		# New tone parameters start a fresh round
		state.settings = s
		state.trainer = TrainerSession(s, sink=state.sink)

	st.title("Interval Trainer")

	player = st.empty()
	state.sink.bind(player)
	trainer: TrainerSession = state.trainer
	trainer.initialize()

	status = st.empty()
	if st.button("Play again", use_container_width=True, type="primary" if trainer.feedback == "incorrect" else "secondary"):
		trainer.replay()

	st.subheader("Choose the interval")
	btn_cols = st.columns(2)
	clicked = None
	for iv in INTERVALS:
		with btn_cols[iv.half_steps % 2]:
			if st.button(iv.name, key=f"iv-{iv.half_steps}", use_container_width=True):
				clicked = iv.half_steps

	if clicked is not None:
		trainer.on_answer_submitted(clicked)

	# Keep the current interval on the page when nothing was played this run
	if not state.sink.started and trainer.buffer is not None:
		player.audio(_cached_wav_bytes(trainer.buffer, s.sample_rate), format="audio/wav", autoplay=False)

	if trainer.last_playback_ok is False:
		status.warning("Audio could not be played. Press Play again to retry.")
	elif trainer.feedback == "correct":
		status.success("Correct! Here is the next one.")
	elif trainer.feedback == "incorrect":
		status.error("Not quite. Listen again.")

	st.markdown("---")
	st.write(trainer.score_text)
	if st.button("Start over"):
		state.trainer = TrainerSession(s, sink=state.sink)
		st.rerun()


if __name__ == "__main__":
	main()
