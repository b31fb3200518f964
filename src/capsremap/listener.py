# capsremap.listener - session event listener
# Turns session lock / unlock notifications into remap state changes.

import enum

import capsremap
import capsremap.daemon
from capsremap.logging import log
from capsremap.remap import ApplierError, RemapPayload

# -----------------------------------------------------------------------------
# Session events

class SessionEvent(enum.Enum):
	ACTIVATED = 'activated'
	DEACTIVATED = 'deactivated'

# The payload which brings the device into the state wanted after an
# event.
PAYLOADS = {
	SessionEvent.ACTIVATED: RemapPayload.APPLY,
	SessionEvent.DEACTIVATED: RemapPayload.CLEAR,
}

# Notifications meaning the session became usable by the user.
ACTIVATION_NAMES = frozenset([
	'com.apple.screenIsUnlocked',
	'com.apple.sessionDidBecomeActive',
])

# Notifications meaning the session is no longer in front of the user.
DEACTIVATION_NAMES = frozenset([
	'com.apple.screenIsLocked',
	'com.apple.sessionDidResignActive',
])

# -----------------------------------------------------------------------------
# Notification sources

# A live subscription of a handler to a notification name.
# Kept for the lifetime of the listener.
class ObserverRegistration:
	def __init__(self, name, callback, token=None):
		self.name = name
		self.callback = callback
		# Source-specific handle of the subscription, if any.
		self.token = token

	def __repr__(self):
		return 'ObserverRegistration(%r)' % (self.name,)

# Base class for things which deliver named notifications.
class NotificationSource:
	# Arrange for callback(name) to be called whenever the named
	# notification is delivered.  Returns an ObserverRegistration;
	# raises capsremap.UserError if the subscription cannot be made.
	def subscribe(self, name, callback):
		raise NotImplementedError()

	# Deliver notifications until stop() is called.
	# stop() may be called from any thread.
	def run(self):
		raise NotImplementedError()

	def stop(self):
		raise NotImplementedError()

# -----------------------------------------------------------------------------
# Listener

class SessionListener:
	def __init__(self, applier, source, event_loop=None,
				 activation_names=ACTIVATION_NAMES,
				 deactivation_names=DEACTIVATION_NAMES):
		self.log = log.getChild('listener')

		self.applier = applier
		self.source = source
		if event_loop is None:
			event_loop = capsremap.daemon.EventLoop()
		self.event_loop = event_loop

		# Which event each subscribed notification name stands for.
		self.events = {}
		for name in sorted(activation_names):
			self.events[name] = SessionEvent.ACTIVATED
		for name in sorted(deactivation_names):
			if name in self.events:
				raise capsremap.UserError('Notification %r is both an activation and a deactivation' % (name,))
			self.events[name] = SessionEvent.DEACTIVATED

		# Live subscriptions.  Never removed.
		self.registrations = []

	def start(self):
		'''Subscribe, synchronize the device, and process notifications
		until the source is stopped.'''

		for name in self.events:
			registration = self.source.subscribe(name, self.handle_notification)
			self.registrations.append(registration)
			self.log.debug('Subscribed to %r.', name)

		# We do not know whether the session is actually unlocked at
		# this point; assume it is, as we are normally started at login.
		self.log.info('Applying remap at startup (assuming an active session).')
		self.apply(RemapPayload.APPLY)

		# A crashed event loop would leave notifications queueing up
		# forever; stop listening instead, and let the error end us.
		self.event_loop.on_error = self.source.stop
		self.event_loop.start()
		try:
			self.source.run()
		finally:
			self.log.debug('Notification source stopped, draining queued events.')
			self.event_loop.stop()
			self.event_loop.join()

		if self.event_loop.error is not None:
			raise self.event_loop.error

	# Runs in the thread delivering notifications.
	def handle_notification(self, name):
		event = self.events.get(name)
		if event is None:
			self.log.debug('Ignoring unknown notification %r.', name)
			return
		self.log.debug('Received %r (%s).', name, event.value)
		self.event_loop.call(self.handle_event, event)

	# Runs in the event loop thread:
	def handle_event(self, event):
		self.apply(PAYLOADS[event])

	def apply(self, payload):
		try:
			self.applier.apply(payload)
		except ApplierError as e:
			self.log.error('Failed to apply %s: %s', payload, e)
