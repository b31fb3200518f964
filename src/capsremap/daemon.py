# capsremap.daemon - Daemon event queue and lifecycle

import queue
import signal
import threading

import capsremap
import capsremap.listener
from capsremap.logging import log

class EventLoop:
	queue = None

	stopping = False

	# Thread that the event loop is running in, once started.
	thread = None

	# Exception which ended the event loop thread, if any.
	error = None

	# Called (from the event loop thread) if a task raised.
	on_error = None

	def __init__(self):
		self.queue = queue.Queue()

	def call(self, func, *args, **kwargs):
		'''Enqueue a function and call it from the event loop.'''
		task = (func, args, kwargs)
		self.queue.put(task)

	def run(self):
		log.debug('Starting event loop.')
		while not self.stopping or not self.queue.empty():
			task = self.queue.get()
			(func, args, kwargs) = task
			log.trace('Calling %r with %r / %r', func, args, kwargs)
			func(*args, **kwargs)
		log.debug('Event loop exited.')

	def start(self):
		'''Run the event loop in its own thread.'''
		assert self.thread is None
		self.thread = threading.Thread(target=self.thread_func, name='capsremap-events', daemon=True)
		self.thread.start()

	def thread_func(self):
		try:
			self.run()
		except Exception as e:
			log.critical('Unhandled error in event loop:', exc_info=True)
			self.error = e
			if self.on_error is not None:
				self.on_error()

	def _stop(self):
		self.stopping = True

	def stop(self):
		'''Ask the event loop to exit once the tasks queued so far are done.'''
		self.call(self._stop)

	def join(self, timeout=None):
		if self.thread is not None:
			self.thread.join(timeout)


# The notification source of the running daemon, if any.
_source = None

def signal_stop(signalnum, _frame):
	log.info('Got signal %r - requesting quit.', signal.strsignal(signalnum))
	if _source is not None:
		_source.stop()


def get_source():
	'''Create the notification source for this platform.'''
	try:
		from capsremap.modules import notifications
	except ImportError as e:
		raise capsremap.UserError('Cannot receive session notifications (%s). '
								  'capsremap requires macOS and PyObjC.' % (e,))
	return notifications.DistributedNotificationSource()


# Daemon entry point.
def run(applier=None, source=None):
	'''Runs the daemon in the foreground, until a SIGINT or SIGTERM.'''
	if applier is None:
		from capsremap.modules.hidutil import HIDUtil
		applier = HIDUtil()
	if source is None:
		source = get_source()

	global _source
	_source = source

	# Stop gracefully when receiving a SIGINT/SIGTERM.
	signal.signal(signal.SIGINT, signal_stop)
	signal.signal(signal.SIGTERM, signal_stop)

	try:
		listener = capsremap.listener.SessionListener(applier, source)
		listener.start()
	finally:
		_source = None

	log.debug('Daemon is exiting.')
