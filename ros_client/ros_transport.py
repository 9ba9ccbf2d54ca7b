#!/usr/bin/env python3
"""RouterOS API socket"""

import socket
import time

from .ros_errors import ConnectionFailure, ConnectionLost, ReadTimeout

class Connect(object):
	"""RouterOS API socket"""

	fd = None
	connect_timeout = 10 # this is about the socket connect timeout and not data timeout

	def __init__(self, host, port, connect_timeout=None, read_timeout=None, logger=None):
		"""RouterOS API socket"""
		self.host = host
		self.port = port
		if connect_timeout is not None:
			self.connect_timeout = connect_timeout
		self.read_timeout = read_timeout
		self.logger = logger
		self._sockaddr = None
		self._deadline = None
		self.fd = self._connect()

	def _debug_(self, msg):
		"""RouterOS API socket"""
		if self.logger:
			self.logger.debug(msg)

	def close(self):
		"""RouterOS API socket"""
		if self.fd is None:
			return
		try:
			self.fd.close()
		except OSError:
			pass
		self.fd = None

	def closed(self):
		"""RouterOS API socket"""
		return self.fd is None

	def set_deadline(self, seconds):
		"""bound every read from now on to ``seconds`` in total - None restores the read timeout"""
		if seconds is None:
			self._deadline = None
			if self.fd is not None:
				self.fd.settimeout(self.read_timeout)
		else:
			self._deadline = time.monotonic() + seconds

	def read(self, n):
		"""
		Read exactly ``n`` bytes, or fewer if the peer closed the stream.
		"""
		if self.fd is None:
			raise ConnectionLost('Not connected')
		chunks = []
		left = n
		while left > 0:
			if self._deadline is not None:
				remaining = self._deadline - time.monotonic()
				if remaining <= 0:
					raise ReadTimeout('Timed out waiting for the router')
				self.fd.settimeout(remaining)
			try:
				b = self.fd.recv(min(left, 64*1024))
			except socket.timeout:
				raise ReadTimeout('Timed out waiting for the router')
			except OSError as e:
				raise ConnectionLost('recv: %s' % (e))
			if not b:
				# END OF FILE
				break
			chunks.append(b)
			left -= len(b)
		return b''.join(chunks)

	def send(self, packet):
		"""RouterOS API socket"""
		if self.fd is None:
			raise ConnectionLost('Not connected')
		try:
			self.fd.sendall(packet)
		except BrokenPipeError as e:
			# remote end closed connection
			raise ConnectionLost('send: Broken Pipe %s' % (e))
		except OSError as e:
			raise ConnectionLost('send: Error %s' % (e))

	def name(self):
		"""RouterOS API socket"""

		if self._sockaddr:
			return '%s.%s' % (self._sockaddr[0], self._sockaddr[1])
		raise ValueError

	def _connect(self):
		"""RouterOS API socket"""
		try:
			ginfo = socket.getaddrinfo(self.host, self.port, 0, socket.SOCK_STREAM, socket.SOL_TCP)
		except socket.gaierror as e:
			raise ConnectionFailure('socket: %s.%s: %s' % (self.host, self.port, e.strerror))

		error = 'no address'
		for gthis in ginfo:
			afamily, socktype, proto, canonname, sockaddr = gthis
			fd = socket.socket(afamily, socktype, proto)
			try:
				fd.settimeout(self.connect_timeout)
				fd.connect(sockaddr)
			except socket.timeout:
				fd.close()
				error = 'socket: %s.%s: connection timeout' % (sockaddr[0], sockaddr[1])
				self._debug_(error)
				continue
			except OSError as e:
				fd.close()
				error = 'socket: %s.%s: %s' % (sockaddr[0], sockaddr[1], e.strerror)
				self._debug_(error)
				continue
			fd.settimeout(self.read_timeout)
			self._sockaddr = sockaddr
			return fd

		self._sockaddr = None
		raise ConnectionFailure('Failed to connect to router. %s' % (error))
