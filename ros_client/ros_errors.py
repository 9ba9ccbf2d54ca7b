#!/usr/bin/env python3
"""RouterOS API errors"""

import enum

class ErrorKind(enum.Enum):
	"""RouterOS API errors"""

	CONNECTION_FAILURE = 'connection failure'
	CONNECTION_LOST = 'connection lost'
	PROTOCOL = 'protocol error'
	TRAP = 'trap'
	FATAL = 'fatal'
	AUTHENTICATION = 'authentication failure'
	USAGE = 'usage error'

class RouterOSError(Exception):
	"""
	Base of every failure the client reports.

	Callers that prefer branching over catching individual classes can
	switch on ``error.kind``.
	"""

	kind = None

	def __init__(self, message):
		"""RouterOS API errors"""
		super().__init__(message)
		self.message = message

	def __str__(self):
		"""RouterOS API errors"""
		return str(self.message)

class ConnectionFailure(RouterOSError):
	"""socket could not be opened - state stays disconnected"""

	kind = ErrorKind.CONNECTION_FAILURE

class ConnectionLost(RouterOSError):
	"""a read or write failed mid operation - the connection is dropped"""

	kind = ErrorKind.CONNECTION_LOST

class ReadTimeout(ConnectionLost):
	"""a read deadline expired - the stream position is unknown so the connection is dropped"""

class ProtocolError(ConnectionLost):
	"""the byte stream no longer frames as sentences - the connection is dropped"""

	kind = ErrorKind.PROTOCOL

class ProtocolTrap(RouterOSError):
	"""one or more !trap replies - the connection is still usable"""

	kind = ErrorKind.TRAP

	def __init__(self, traps):
		"""RouterOS API errors"""
		self.traps = list(traps)
		self.messages = [t.get('message', '') for t in self.traps]
		super().__init__('; '.join('Trap: %s' % (m) for m in self.messages))

class ProtocolFatal(RouterOSError):
	"""a !fatal reply - the router has closed the session"""

	kind = ErrorKind.FATAL

class AuthenticationFailure(RouterOSError):
	"""login did not end in !done - still connected, not authenticated"""

	kind = ErrorKind.AUTHENTICATION

class UsageError(RouterOSError):
	"""RouterOS API errors"""

	kind = ErrorKind.USAGE

class AlreadyConnected(UsageError):
	"""RouterOS API errors"""
