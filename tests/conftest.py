"""Shared pytest fixtures and fakes for capsremap tests."""

import subprocess
import threading
import time

import pytest

from capsremap.listener import NotificationSource, ObserverRegistration
from capsremap.remap import Applier


class RecordingApplier(Applier):
	"""Applier which records payloads instead of running hidutil.

	``failures`` maps a call index to the exception raised by that call;
	``delays`` maps a call index to seconds to sleep before returning.
	"""

	def __init__(self, failures=None, delays=None):
		self.calls = []
		self.completed = []
		self.threads = []
		self.failures = failures or {}
		self.delays = delays or {}
		self.lock = threading.Lock()

	def apply(self, payload):
		with self.lock:
			index = len(self.calls)
			self.calls.append(payload)
		self.threads.append(threading.current_thread())
		if index in self.delays:
			time.sleep(self.delays[index])
		self.completed.append(payload)
		if index in self.failures:
			raise self.failures[index]


class FakeSource(NotificationSource):
	"""Notification source which delivers a scripted list of names.

	Like the system notification center, notifications are only delivered
	to callbacks subscribed to that exact name.  With ``block=True``,
	``run()`` keeps running after the script until ``stop()`` is called.
	"""

	def __init__(self, names=(), block=False, on_run=None):
		self.script = list(names)
		self.block = block
		self.on_run = on_run
		self.observers = {}
		self.running = threading.Event()
		self.stopped = threading.Event()

	def subscribe(self, name, callback):
		self.observers.setdefault(name, []).append(callback)
		return ObserverRegistration(name, callback)

	def post(self, name):
		for callback in self.observers.get(name, []):
			callback(name)

	def run(self):
		if self.on_run is not None:
			self.on_run()
		self.running.set()
		for name in self.script:
			self.post(name)
		if self.block:
			self.stopped.wait()

	def stop(self):
		self.stopped.set()


class FakeDevice:
	"""Stands in for subprocess.run; remembers the last property set."""

	def __init__(self):
		self.invocations = []
		self.user_key_mapping = None

	def __call__(self, args, **kwargs):
		self.invocations.append((args, kwargs))
		self.user_key_mapping = args[-1]
		return subprocess.CompletedProcess(args, 0, stdout=b'')


@pytest.fixture
def applier():
	return RecordingApplier()


@pytest.fixture
def device():
	return FakeDevice()


@pytest.fixture
def make_script(tmp_path):
	"""Write an executable shell script standing in for hidutil."""

	def make(body, name='hidutil'):
		path = tmp_path / name
		path.write_text('#!/bin/sh\n' + body + '\n')
		path.chmod(0o755)
		return str(path)

	return make
