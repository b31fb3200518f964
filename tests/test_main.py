"""Tests for the capsremap command line."""

import pytest

import capsremap
import capsremap.daemon
from capsremap.remap import NonZeroExit, RemapPayload

from conftest import RecordingApplier


@pytest.fixture
def applied(monkeypatch):
	applier = RecordingApplier()
	monkeypatch.setattr(capsremap, 'HIDUtil', lambda: applier)
	return applier


class TestMain:
	def test_help(self, capsys):
		assert capsremap.main(['help']) == 0
		assert 'Usage: capsremap' in capsys.readouterr().out

	def test_unknown_command(self, capsys):
		assert capsremap.main(['frobnicate']) == 1
		assert 'Usage: capsremap' in capsys.readouterr().err

	def test_apply(self, applied):
		assert capsremap.main(['apply']) == 0
		assert applied.calls == [RemapPayload.APPLY]

	def test_clear(self, applied):
		assert capsremap.main(['clear']) == 0
		assert applied.calls == [RemapPayload.CLEAR]

	def test_apply_failure(self, monkeypatch, caplog):
		applier = RecordingApplier(failures={0: NonZeroExit(1)})
		monkeypatch.setattr(capsremap, 'HIDUtil', lambda: applier)
		assert capsremap.main(['clear']) == 1
		assert 'Failed to apply clear' in caplog.text

	@pytest.mark.parametrize('args', [[], ['run']])
	def test_run_is_default(self, monkeypatch, args):
		calls = []
		monkeypatch.setattr(capsremap.daemon, 'run', lambda: calls.append('run'))
		assert capsremap.main(args) == 0
		assert calls == ['run']

	def test_user_error(self, monkeypatch, caplog):
		def run():
			raise capsremap.UserError('no notifications here')

		monkeypatch.setattr(capsremap.daemon, 'run', run)
		assert capsremap.main([]) == 1
		assert 'Fatal error: no notifications here' in caplog.text
