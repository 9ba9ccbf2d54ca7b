#!/usr/bin/env python3
"""RouterOS API client"""

import sys
import getopt
import json
import enum

from .ros_errors import (RouterOSError, ConnectionFailure, ConnectionLost, ProtocolTrap,
			ProtocolFatal, AuthenticationFailure, UsageError, AlreadyConnected)
from .ros_options import Options
from .ros_logging import rosapilogger
from .ros_transport import Connect
from .ros_sentence import SentenceReader, command_words, encode_sentence
from .ros_protocol import ReplyAggregator, login_response
from . import __version__

#
# api protocol - port 8728 - clear text
# api-ssl      - port 8729 - tls - not handled here
#

# words whose value must never reach the debug trace
_SECRET_WORDS = (b'=password=', b'=response=')

class State(enum.Enum):
	"""RouterOS API client"""

	DISCONNECTED = 0
	CONNECTING = 1
	CONNECTED = 2
	AUTHENTICATED = 3

class RouterOS(object):
	"""
	One API session with one router.

	The protocol is half duplex: every ``send()`` is answered by one
	``read()`` before the next ``send()``. One instance must not be shared
	between threads without outside locking.

	    with RouterOS(host='192.168.88.1', password='') as api:
	        api.connect()
	        for row in api.query('/interface/print'):
	            print(row['name'])
	"""

	def __init__(self, options=None, **kwargs):
		"""RouterOS API client"""

		if options is None:
			options = Options.from_dict(kwargs)
		elif kwargs:
			options = options.replace(**kwargs)
		self._options = options
		self._state = State.DISCONNECTED
		self._conn = None
		self._reader = None
		self.logger = None
		self._set_logger(options.debug)

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_value, tb):
		self.close()
		return False

	def __repr__(self):
		return '<RouterOS %s:%d %s>' % (self.host, self.port, self._state.name.lower())

	def _set_logger(self, debug):
		"""RouterOS API client"""

		if debug > 0:
			self.logger = rosapilogger(debug).getLogger()
		else:
			self.logger = None

	def _debug_(self, msg):
		"""RouterOS API client"""

		if self.logger:
			self.logger.debug(msg)

	# Getters and setters

	@property
	def options(self):
		return self._options

	@property
	def state(self):
		return self._state

	@property
	def connected(self):
		return self._state in (State.CONNECTED, State.AUTHENTICATED)

	@property
	def authenticated(self):
		return self._state == State.AUTHENTICATED

	@property
	def host(self):
		return self._options.host

	@property
	def port(self):
		return self._options.port

	@property
	def username(self):
		return self._options.username

	@property
	def password(self):
		return self._options.password

	@property
	def debug(self):
		return self._options.debug

	@debug.setter
	def debug(self, debug):
		self._options = self._options.replace(debug=int(debug))
		self._set_logger(self._options.debug)
		if self._reader:
			self._reader.set_logger(self.logger, self._options.debug)
		if self._conn:
			self._conn.logger = self.logger

	# Connection state machine

	def connect(self, host=None, username=None, password=None, connect_on_demand=None, timeout=None):
		"""
		Connect to a router and log in when a password is known.

		``host`` may be ``host:port``. With ``connect_on_demand`` only the
		target is recorded and the socket is opened by the first ``send()``.
		``timeout`` overrides the socket connect timeout for this call.
		"""

		if self.connected:
			raise AlreadyConnected('Already connected, cannot call connect()')

		changes = {}
		if host is not None:
			changes['host'] = host
		if username is not None:
			changes['username'] = username
		if password is not None:
			changes['password'] = password
		if connect_on_demand is not None:
			changes['connect_on_demand'] = connect_on_demand
		if changes:
			self._options = self._options.replace(**changes)

		if self._options.connect_on_demand:
			if timeout is not None:
				# kept for the socket opened by the first send()
				self._options = self._options.replace(connect_timeout=timeout)
			self._debug_('Connect on demand: %s:%d' % (self.host, self.port))
			return True

		self._open(timeout)
		if self._has_credentials():
			self.login()
		return True

	def _has_credentials(self):
		"""RouterOS API client"""

		return self._options.username != '' and self._options.password is not None

	def _open(self, timeout=None):
		"""RouterOS API client"""

		if timeout is None:
			timeout = self._options.connect_timeout
		self._state = State.CONNECTING
		self._debug_('Connecting to %s:%d...' % (self.host, self.port))
		try:
			self._conn = Connect(self.host, self.port,
					connect_timeout=timeout,
					read_timeout=self._options.read_timeout,
					logger=self.logger)
		except ConnectionFailure:
			self._state = State.DISCONNECTED
			self._conn = None
			raise
		self._reader = SentenceReader(self._conn.read, self.logger, self._options.debug)
		self._state = State.CONNECTED
		self._debug_('Connected to router %s' % (self._conn.name()))

	def _ensure_connected(self):
		"""open the socket (and log in) for a connect-on-demand session"""

		if self.connected:
			return
		self._open()
		if self._has_credentials():
			self.login()

	def _drop(self):
		"""RouterOS API client"""

		if self._conn:
			self._conn.close()
		self._conn = None
		self._reader = None
		self._state = State.DISCONNECTED

	def disconnect(self):
		"""
		Send /quit and wait for the router to hang up.

		The router answers /quit by closing the session, so a failed read is
		the expected outcome and counts as success. A well formed reply means
		the router is still there - returns False and leaves the state alone.
		"""

		if not self.connected:
			return True

		try:
			self.send('/quit')
			self.read()
		except RouterOSError as e:
			self._debug_('Disconnected: %s' % (e))
			self._drop()
			return True

		return False

	def close(self):
		"""RouterOS API client"""

		try:
			if self.connected:
				self.disconnect()
		finally:
			self._drop()

	# Authentication

	def login(self, username=None, password=None):
		"""
		Challenge-response login.

		A bare /login returns the challenge in ``!done =ret=``; the second
		/login proves knowledge of the password without sending it.
		"""

		changes = {}
		if username is not None:
			changes['username'] = username
		if password is not None:
			changes['password'] = password
		if changes:
			self._options = self._options.replace(**changes)

		if self.authenticated:
			return True

		if not self.connected:
			self._open()

		self._debug_('Starting login sequence')

		self.send('/login')
		try:
			resp = self.read()
		except ProtocolTrap as e:
			raise AuthenticationFailure('Login failed. %s' % (e.message))
		challenge = (resp.done or {}).get('ret')
		if not challenge:
			raise AuthenticationFailure('Login failed, no challenge in /login reply')

		self.send('/login', {
			'name': self._options.username,
			'response': login_response(self._options.password, challenge),
		})
		# read() only returns once !done has arrived
		try:
			self.read()
		except ProtocolTrap as e:
			raise AuthenticationFailure('Login failed. %s' % (e.message))

		self._state = State.AUTHENTICATED
		self._debug_('Logged in as %s' % (self._options.username))
		return True

	# Commands

	def _trace_word(self, w):
		"""RouterOS API client"""

		for prefix in _SECRET_WORDS:
			if w.startswith(prefix):
				return prefix.decode('ascii') + '********'
		return w.decode(self._options.encoding, 'replace')

	def send(self, commands, args=None):
		"""
		Send one sentence: a command word (or list of words) plus
		``args`` encoded as ``=name=value`` words.
		"""

		try:
			words = command_words(commands, args, self._options.encoding)
			packet = encode_sentence(words)
		except ValueError as e:
			raise UsageError(str(e))

		self._ensure_connected()

		if self.logger:
			for w in words:
				self._debug_('>>> %d %s' % (len(w), self._trace_word(w)))
		try:
			self._conn.send(packet)
		except ConnectionLost as e:
			self._drop()
			raise ConnectionLost('Failed to send command - connection terminated. %s' % (e))

	def read(self, timeout=None):
		"""
		Read the reply to the last ``send()``.

		Blocks until !done or !fatal unless ``timeout`` (seconds, for the
		whole reply) is given. Raises ProtocolTrap for !trap replies and
		ProtocolFatal for !fatal, which also drops the connection.
		"""

		if not self.connected:
			raise ConnectionLost('Not connected')

		aggregator = ReplyAggregator(self._options.encoding, self.logger)
		if timeout is not None:
			self._conn.set_deadline(timeout)
		try:
			while not aggregator.feed(self._reader.read_sentence()):
				pass
		except (ProtocolFatal, ConnectionLost):
			self._drop()
			raise
		finally:
			if timeout is not None and self._conn:
				self._conn.set_deadline(None)
		return aggregator.response

	def query(self, commands, args=None, timeout=None):
		"""RouterOS API client"""

		self.send(commands, args)
		return self.read(timeout)

	def get_router_identity(self):
		"""the router's identity (name) - None if it has none"""

		for row in self.query('/system/identity/print'):
			name = row.get('name', '').strip()
			if name:
				return name
		return None

def print_response(response, fd=None):
	"""RouterOS API client"""

	if fd is None:
		fd = sys.stdout

	for row in response.data:
		fd.write('!re\n')
		for name, v in row.items():
			fd.write('=%s=%s\n' % (name, v))
	for reply, attrs in response.replies.items():
		fd.write('%s\n' % (reply))
		for name, v in attrs.items():
			fd.write('=%s=%s\n' % (name, v))
	fd.write('!done\n')
	for name, v in (response.done or {}).items():
		fd.write('=%s=%s\n' % (name, v))

def split_command(words):
	"""
	Split command line words into sentence words and attributes.

	``key=value`` (including ``.proplist=...``) becomes an attribute; words
	starting with ``=`` or ``?`` and words without ``=`` are sent verbatim.
	"""

	commands = []
	args = {}
	for w in words:
		if w[:1] in ('=', '?') or '=' not in w:
			commands.append(w)
		else:
			k, v = w.split('=', 1)
			args[k] = v
	return commands, args

def ros_client(host=None, port=None, username=None, password=None, command=None, timeout=None, as_json=False, debug=0):
	"""RouterOS API client"""

	fields = {'debug': debug}
	if host:
		fields['host'] = host
	if port:
		fields['port'] = port
	if username is not None:
		fields['username'] = username
	options = Options.from_dict(fields)

	commands, args = split_command(command)

	with RouterOS(options) as api:
		api.connect(timeout=timeout)
		api.login(password=password if password is not None else '')
		response = api.query(commands, args, timeout=timeout)

	if as_json:
		sys.stdout.write(json.dumps(response.to_dict(), indent=2) + '\n')
	else:
		print_response(response)
	sys.stdout.flush()

def doit(args=None):
	"""RouterOS API client"""

	debug = 0
	host = None
	port = None
	username = None
	password = None
	timeout = None
	as_json = False

	usage = (
					'usage: ros_client '
					+ '[-H|--help] '
					+ '[-V|--version] '
					+ '[-v|--verbose] '
					+ '[-h HOSTNAME[:PORT]|--host=HOSTNAME[:PORT]] '
					+ '[-p PORTNUMBER|--port=PORTNUMBER] '
					+ '[-u USERNAME|--user=USERNAME] '
					+ '[-P PASSWORD|--password=PASSWORD] '
					+ '[-t SECONDS|--timeout=SECONDS] '
					+ '[-j|--json] '
					+ 'command [name=value ...]'
		)

	try:
		opts, args = getopt.getopt(args, 'HVvh:p:u:P:t:j', [
						'help',
						'version',
						'verbose',
						'host=', 'port=',
						'user=',
						'password=',
						'timeout=',
						'json'
						])
	except getopt.GetoptError:
		sys.exit(usage)

	for opt, arg in opts:
		if opt in ('-H', '--help'):
			sys.exit(usage)
		if opt in ('-V', '--version'):
			sys.exit('%s: version: %s' % (sys.argv[0], __version__))
		elif opt in ('-v', '--verbose'):
			debug += 1
		elif opt in ('-h', '--host'):
			host = arg
		elif opt in ('-p', '--port'):
			try:
				port = int(arg)
			except ValueError:
				sys.exit(usage)
		elif opt in ('-u', '--user'):
			username = arg
		elif opt in ('-P', '--password'):
			password = arg
		elif opt in ('-t', '--timeout'):
			try:
				timeout = float(arg)
			except ValueError:
				sys.exit(usage)
		elif opt in ('-j', '--json'):
			as_json = True

	if not args:
		sys.exit(usage)

	try:
		ros_client(host=host, port=port, username=username, password=password,
				command=args, timeout=timeout, as_json=as_json, debug=debug)
	except KeyboardInterrupt:
		# no need to print anything - just exit!
		sys.exit(1)
	except RouterOSError as e:
		sys.stderr.write('%s: %s\n' % (e.kind.value, e))
		sys.stderr.flush()
		sys.exit(1)
	sys.exit(0)

def main(args=None):
	"""RouterOS API client"""

	if args is None:
		args = sys.argv[1:]
	doit(args)

if __name__ == '__main__':
	main()
