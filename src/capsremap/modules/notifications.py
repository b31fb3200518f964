# capsremap.modules.notifications - macOS distributed notifications
# Subscribes to system-wide notifications (such as the screen being
# locked or unlocked) and runs the main thread's run loop, which is
# where they are delivered.

from Foundation import NSDistributedNotificationCenter, NSOperationQueue
from PyObjCTools import AppHelper

import capsremap
from capsremap.listener import NotificationSource, ObserverRegistration
from capsremap.logging import log

class DistributedNotificationSource(NotificationSource):
	name = 'notifications'

	def __init__(self):
		self.log = log.getChild('modules.' + self.name)
		self.center = NSDistributedNotificationCenter.defaultCenter()

	# Must be called from the main thread.
	def subscribe(self, name, callback):
		def block(notification):
			callback(str(notification.name()))

		token = self.center.addObserverForName_object_queue_usingBlock_(
			name,
			None,
			NSOperationQueue.mainQueue(),
			block,
		)
		if token is None:
			raise capsremap.UserError('Failed to subscribe to notification %r' % (name,))

		# Hold on to the block too; the registration keeps it alive
		# for as long as the observer exists.
		return ObserverRegistration(name, block, token)

	# Runs the main run loop.  Returns only after stop().
	def run(self):
		self.log.debug('Running the main run loop.')
		AppHelper.runConsoleEventLoop(installInterrupt=False)
		self.log.debug('Main run loop stopped.')

	# Safe to call from any thread; the run loop is stopped from the
	# main thread.
	def stop(self):
		AppHelper.callAfter(AppHelper.stopEventLoop)
