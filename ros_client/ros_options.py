#!/usr/bin/env python3
"""RouterOS API client options"""

import codecs
from collections import namedtuple

from .ros_errors import UsageError

DEFAULT_HOST = '192.168.88.1'
DEFAULT_PORT = 8728		# api - clear text; api-ssl is 8729 and not handled here
DEFAULT_USERNAME = 'admin'
DEFAULT_PASSWORD = None	# None - don't log in on connect
DEFAULT_CONNECT_TIMEOUT = 10	# socket connect only, not data

_fields = (
	'host',
	'port',
	'username',
	'password',
	'connect_on_demand',
	'debug',
	'connect_timeout',
	'read_timeout',
	'encoding',
)

def split_host_port(host, port=None):
	"""RouterOS API client options"""

	if host and host.count(':') == 1:
		host, p = host.split(':', 1)
		port = p
	if port is None:
		return host, None
	try:
		port = int(port)
	except (TypeError, ValueError):
		raise UsageError('Invalid port "%s" provided' % (port))
	if port < 1 or port > 65535:
		raise UsageError('Invalid port "%s" provided' % (port))
	return host, port

class Options(namedtuple('Options', _fields)):
	"""
	Connection settings, fixed once built.

	``host`` may carry the port as ``host:port``. Use ``replace()`` to
	derive a changed copy and ``from_dict()`` to build from untrusted keys.
	"""

	__slots__ = ()

	def __new__(cls,
			host=DEFAULT_HOST,
			port=None,
			username=DEFAULT_USERNAME,
			password=DEFAULT_PASSWORD,
			connect_on_demand=False,
			debug=0,
			connect_timeout=DEFAULT_CONNECT_TIMEOUT,
			read_timeout=None,
			encoding='utf-8'):
		"""RouterOS API client options"""

		if not host:
			raise UsageError('host must not be empty')
		host, port = split_host_port(host, port)
		if port is None:
			port = DEFAULT_PORT
		if username is None:
			username = ''
		for name, t in (('connect_timeout', connect_timeout), ('read_timeout', read_timeout)):
			if t is not None and t < 0:
				raise UsageError('%s must not be negative' % (name))
		try:
			codecs.lookup(encoding)
		except LookupError:
			raise UsageError('unknown encoding "%s"' % (encoding))
		return super().__new__(cls, host, port, username, password,
					bool(connect_on_demand), int(debug), connect_timeout, read_timeout, encoding)

	@classmethod
	def from_dict(cls, d):
		"""RouterOS API client options"""

		unknown = sorted(set(d) - set(cls._fields))
		if unknown:
			raise UsageError('unknown option(s): %s' % (', '.join(unknown)))
		return cls(**d)

	def replace(self, **kwargs):
		"""RouterOS API client options"""

		d = self._asdict()
		d.update(kwargs)
		return self.from_dict(d)

	def __repr__(self):
		"""RouterOS API client options"""

		d = self._asdict()
		if d['password']:
			d['password'] = '********'
		return 'Options(%s)' % (', '.join('%s=%r' % (k, v) for k, v in d.items()))
