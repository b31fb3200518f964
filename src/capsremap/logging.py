# capsremap.logging - logging implementation

import logging
import os

# Define a severity level for very chatty diagnostics
TRACE = logging.DEBUG - 5

logging.addLevelName(TRACE, 'TRACE')

# Define a class which implements the severity level as a method
class Logger(logging.getLoggerClass()):
	def trace(self, *args, **kwargs):
		self.log(TRACE, *args, **kwargs)

logging.setLoggerClass(Logger)

# Verbosity, relative to INFO.  Negative values make the log quieter.
LEVELS = [
	logging.CRITICAL,
	logging.ERROR,
	logging.WARNING,
	logging.INFO,
	logging.DEBUG,
	TRACE,
]

def get_level(verbose):
	index = 3 + int(verbose)
	return LEVELS[max(0, min(index, len(LEVELS) - 1))]

logging.basicConfig(
	format=os.getenv('CAPSREMAP_LOG_FORMAT', '%(asctime)s %(name)s: %(message)s'),
	level=get_level(os.getenv('CAPSREMAP_VERBOSE', '0')),
)
log = logging.getLogger('capsremap')
