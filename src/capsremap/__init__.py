# capsremap.__init__ - core definitions and entry point
# Keeps Caps Lock remapped while the macOS session is unlocked, and
# restores the default mapping while it is locked.

import sys

# -----------------------------------------------------------------------------
# Exceptions

# Represents an expected failure mode, which is unlikely to be due to
# a bug in capsremap.  In this case, we do not need to print an exception
# stack trace; just print the error message and quit.
class UserError(Exception):
	pass

# -----------------------------------------------------------------------------
# Import capsremap modules
# Placed after the declarations above, so that they can be used by the
# imported modules.

import capsremap.daemon
import capsremap.listener
from capsremap.logging import log
from capsremap.modules.hidutil import HIDUtil
from capsremap.remap import ApplierError, RemapPayload

# -----------------------------------------------------------------------------
# Entry point

help_text = '''
Usage: capsremap [COMMAND]

Commands:
  run          Run the agent in the foreground (default).
  apply        Apply the remap once and exit.
  clear        Clear the remap once and exit.
  help         Print this message.
'''

def main(args=None):
	if args is None:
		args = sys.argv[1:]
	command = args[0] if args else 'run'

	try:
		match command:
			case 'help':
				sys.stdout.write(help_text)

			case 'run':
				capsremap.daemon.run()

			case 'apply' | 'clear':
				payload = RemapPayload[command.upper()]
				try:
					HIDUtil().apply(payload)
				except ApplierError as e:
					log.critical('Failed to apply %s: %s', payload, e)
					return 1

			case _:
				log.critical('Unknown command: %r', command)
				sys.stderr.write(help_text)
				return 1

		return 0

	except UserError as e:
		log.critical('Fatal error: %s', e)
		return 1
