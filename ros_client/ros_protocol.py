#!/usr/bin/env python3
"""RouterOS API replies"""

import hashlib
import binascii

from .ros_sentence import parse_attribute
from .ros_errors import ProtocolTrap, ProtocolFatal, AuthenticationFailure

REPLY_RE = '!re'
REPLY_DONE = '!done'
REPLY_TRAP = '!trap'
REPLY_FATAL = '!fatal'

def login_response(password, challenge):
	"""
	Answer to a /login challenge.

	    '00' + md5( 0x00 + password + unhex(challenge) )
	"""

	if password is None:
		password = ''
	if isinstance(password, str):
		password = password.encode('utf-8')
	try:
		nonce = binascii.unhexlify(challenge)
	except (binascii.Error, TypeError, ValueError):
		raise AuthenticationFailure('Login failed, bad challenge %r' % (challenge))
	return '00' + hashlib.md5(b'\x00' + password + nonce).hexdigest()

class Response(object):
	"""RouterOS API replies"""

	def __init__(self):
		"""RouterOS API replies"""
		self.data = []		# one dict per !re, in arrival order
		self.done = None	# !done attributes once seen
		self.replies = {}	# any other reply type, keyed by its tag

	def __iter__(self):
		return iter(self.data)

	def __len__(self):
		return len(self.data)

	def __getitem__(self, i):
		return self.data[i]

	def __repr__(self):
		return 'Response(data=%r, done=%r)' % (self.data, self.done)

	def to_dict(self):
		"""RouterOS API replies"""
		d = {REPLY_RE: self.data, REPLY_DONE: self.done}
		d.update(self.replies)
		return d

class ReplyAggregator(object):
	"""
	Collects the sentences answering one command.

	Feed sentences in arrival order; ``feed()`` returns True once the reply
	is complete and ``response`` holds the result. A pending trap is raised
	when !done arrives, a !fatal is raised at once.
	"""

	def __init__(self, encoding='utf-8', logger=None):
		"""RouterOS API replies"""
		self.encoding = encoding
		self.logger = logger
		self.response = Response()
		self._traps = []

	def _debug_(self, msg):
		"""RouterOS API replies"""

		if self.logger:
			self.logger.debug(msg)

	def decode(self, words):
		"""split a sentence into its tag and attributes - last duplicate wins"""

		words = [w.decode(self.encoding, 'replace') for w in words]
		attrs = {}
		for w in words[1:]:
			k, v = parse_attribute(w)
			attrs[k] = v
		return words[0], attrs

	def feed(self, words):
		"""RouterOS API replies"""

		reply, attrs = self.decode(words)

		if reply == REPLY_RE:
			self.response.data.append(attrs)
			return False

		if reply == REPLY_TRAP:
			self._debug_('Trap: %s' % (attrs.get('message', '')))
			self._traps.append(attrs)
			return False

		if reply == REPLY_FATAL:
			if len(attrs) > 0:
				message = list(attrs)[0]
			else:
				message = 'Unknown Error'
			self._debug_('Fatal: %s' % (message))
			raise ProtocolFatal(message)

		if reply == REPLY_DONE:
			self.response.done = attrs
			if self._traps:
				raise ProtocolTrap(self._traps)
			return True

		# newer reply types (!empty ...) are kept but don't end the read
		self._debug_('Reply: %s - unknown reply type' % (reply))
		self.response.replies[reply] = attrs
		return False
