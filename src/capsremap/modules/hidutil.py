# capsremap.modules.hidutil - applies payloads with hidutil
# Runs hidutil(1) to set the UserKeyMapping property, and waits for it
# to finish before returning.

import subprocess

from capsremap.logging import log
from capsremap.remap import Applier, LaunchFailed, NonZeroExit, TimedOut

# Where hidutil is installed on every macOS release that has it.
HIDUTIL_PATH = '/usr/bin/hidutil'

# How long to wait for hidutil to exit.  It normally takes a few
# milliseconds; a hung hidutil would otherwise stall all later events.
DEFAULT_TIMEOUT = 10

class HIDUtil(Applier):
	name = 'hidutil'

	def __init__(self, executable=HIDUTIL_PATH, timeout=DEFAULT_TIMEOUT, run=subprocess.run):
		self.log = log.getChild('modules.' + self.name)

		# Parameters:

		# Path of the hidutil executable.
		self.executable = executable

		# Seconds to wait for each invocation to exit.
		self.timeout = timeout

		# Process runner, with the signature of subprocess.run.
		self.run = run

	def get_args(self, payload):
		return [self.executable, 'property', '--set', payload.serialize()]

	def apply(self, payload):
		args = self.get_args(payload)
		self.log.debug('Running %r', args)
		try:
			result = self.run(
				args,
				stdout=subprocess.PIPE,
				stderr=subprocess.STDOUT,
				timeout=self.timeout,
			)
		except subprocess.TimeoutExpired as e:
			raise TimedOut(self.timeout) from e
		except OSError as e:
			raise LaunchFailed('failed to run %r: %s' % (self.executable, e)) from e

		if result.returncode != 0:
			if result.stdout:
				self.log.error('hidutil output: %s', result.stdout.decode(errors='replace').strip())
			raise NonZeroExit(result.returncode, result.stdout or b'')

		self.log.trace('hidutil output: %r', result.stdout)
		self.log.info('Applied %s.', payload)
