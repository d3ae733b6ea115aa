import pytest

from conftest import ScriptedRandom

from intervaltrainer.console import main, run
from intervaltrainer.models import Settings
from intervaltrainer.session import TrainerSession
from intervaltrainer.storage import ENV_HOME


def test_console_drill(sink):
	session = TrainerSession(
		Settings(sample_rate=8000, root_duration=0.05, interval_duration=0.05),
		sink=sink,
		rng=ScriptedRandom(ranges=[7, 0], ints=[-5, -10]),
	)
	answers = iter(["third", "r", "ninth", "fifth", "q"])
	out = []
	run(session, read=lambda prompt: next(answers), write=out.append)
	assert out == ["Wrong, listen again.", "Unknown interval: ninth", "Correct! Score: 0/1", "Score: 0/1"]
	# initial play, replay after the miss, explicit replay, new exercise
	assert len(sink.buffers) == 4


def test_console_stops_on_eof(sink):
	session = TrainerSession(Settings(sample_rate=8000, root_duration=0.05, interval_duration=0.05), sink=sink)

	def read(prompt):
		raise EOFError

	out = []
	run(session, read=read, write=out.append)
	assert out == ["Score: 0/0"]


def test_console_garbled_numbers_are_unknown(sink):
	session = TrainerSession(
		Settings(sample_rate=8000, root_duration=0.05, interval_duration=0.05),
		sink=sink,
		rng=ScriptedRandom(ranges=[7], ints=[-5]),
	)
	answers = iter(["--5", "²", "q"])
	out = []
	run(session, read=lambda prompt: next(answers), write=out.append)
	assert out == ["Unknown interval: --5", "Unknown interval: ²", "Score: 0/0"]
	assert session.exercise.first_try


def test_main_rejects_out_of_range_volume(tmp_path, monkeypatch, capsys):
	monkeypatch.setenv(ENV_HOME, str(tmp_path))
	with pytest.raises(SystemExit) as exc:
		main(["--volume", "7"])
	assert exc.value.code == 2
	assert "--volume must be between 0 and 1" in capsys.readouterr().err
