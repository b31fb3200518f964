# capsremap.remap - the key remapping and the applier interface
# Describes the two device states we switch between, and what can go
# wrong when switching.

import enum

# -----------------------------------------------------------------------------
# HID usages
# Keyboard/Keypad page (0x07) usages, in the numbering hidutil expects
# (page << 32 | usage).

KEYBOARD_PAGE = 0x7

def keyboard_usage(usage_id):
	return KEYBOARD_PAGE << 32 | usage_id

CAPS_LOCK = keyboard_usage(0x39)
DELETE = keyboard_usage(0x2a)

# -----------------------------------------------------------------------------
# Payloads

class RemapPayload(enum.Enum):
	# Each value is a tuple of (source usage, destination usage) pairs.
	APPLY = ((CAPS_LOCK, DELETE),)
	CLEAR = ()

	# Render the value of hidutil's UserKeyMapping property.
	# hidutil accepts (and the mapping is conventionally written with)
	# hexadecimal literals, which are not valid JSON, so this is not
	# produced with the json module.
	def serialize(self):
		mappings = ','.join(
			'{"HIDKeyboardModifierMappingSrc":0x%x,"HIDKeyboardModifierMappingDst":0x%x}' % (src, dst)
			for (src, dst) in self.value
		)
		return '{"UserKeyMapping":[%s]}' % (mappings,)

	def __str__(self):
		return self.name.lower()

# -----------------------------------------------------------------------------
# Errors

# Base class for failures to bring the device into the requested
# state.  These are never fatal to the daemon.
class ApplierError(Exception):
	pass

# The utility could not be started at all.  The device state is
# unchanged.
class LaunchFailed(ApplierError):
	pass

# The utility ran, but reported failure.  The device state may be
# partially applied.
class NonZeroExit(ApplierError):
	def __init__(self, code, output=b''):
		super().__init__('exited with status %d' % (code,))
		self.code = code
		self.output = output

# The utility did not exit in time and was killed.
class TimedOut(ApplierError):
	def __init__(self, timeout):
		super().__init__('did not exit within %s seconds' % (timeout,))
		self.timeout = timeout

# -----------------------------------------------------------------------------
# Applier interface

class Applier:
	# Synchronously bring the device into the state described by
	# payload.  Return only once the change has been applied, or
	# raise an ApplierError.
	def apply(self, payload):
		raise NotImplementedError()
