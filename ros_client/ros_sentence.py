#!/usr/bin/env python3
"""RouterOS API sentence framing"""

from .ros_length import encode_length, decode_length
from .ros_errors import ConnectionLost, ProtocolError

# consecutive empty sentences tolerated before a reply starts
MAX_EMPTY_SENTENCES = 16

def encode_word(word):
	"""RouterOS API sentence framing"""

	if len(word) == 0:
		# a zero length is the sentence terminator - it can't be a word
		raise ValueError('cannot frame a zero-length word')
	return encode_length(len(word)) + bytes(word)

def encode_sentence(words):
	"""RouterOS API sentence framing"""

	return b''.join([encode_word(w) for w in words]) + encode_length(0)

def command_words(commands, args=None, encoding='utf-8'):
	"""
	Flatten a command (or a list of command words) plus a mapping of
	attributes into the words of one sentence.

	>>> command_words('/interface/print', {'.proplist': 'name'})
	[b'/interface/print', b'=.proplist=name']
	"""

	if isinstance(commands, (str, bytes)):
		commands = [commands]
	words = [_to_bytes(c, encoding) for c in commands]
	if args:
		for attr, value in args.items():
			words.append(b'=' + _to_bytes(attr, encoding) + b'=' + _to_bytes(value, encoding))
	return words

def _to_bytes(value, encoding):
	"""RouterOS API sentence framing"""

	if isinstance(value, bytes):
		return value
	return str(value).encode(encoding)

def parse_attribute(word):
	"""RouterOS API sentence framing"""

	if word.startswith('='):
		p = word.find('=', 1)
		if p > 0:
			return word[1:p], word[p + 1:]
		return word[1:], ''
	p = word.find('=')
	if p > 0:
		# API attribute such as .tag=3
		return word[:p], word[p + 1:]
	return word, ''

def read_words(read):
	"""Read one sentence - a bare terminator gives an empty list"""

	words = []
	while True:
		try:
			n = decode_length(read)
		except ValueError as e:
			raise ProtocolError(str(e))
		if n is None:
			raise ConnectionLost('Failed to read length - connection terminated')
		if n == 0:
			return words
		w = read(n)
		if len(w) < n:
			raise ConnectionLost('Connection to router was lost')
		words.append(w)

class SentenceReader(object):
	"""RouterOS API sentence framing"""

	def __init__(self, read, logger=None, debug=0, max_empty=MAX_EMPTY_SENTENCES):
		"""RouterOS API sentence framing"""

		self._read = read
		self.logger = logger
		self._debug_level = debug
		self.max_empty = max_empty

	def _debug_(self, msg):
		"""RouterOS API sentence framing"""

		if self.logger:
			self.logger.debug(msg)

	def set_logger(self, logger, debug):
		"""RouterOS API sentence framing"""

		self.logger = logger
		self._debug_level = debug

	def _traced_read(self, n):
		"""RouterOS API sentence framing"""

		b = self._read(n)
		if self._debug_level > 1:
			self._debug_('<<< [%s]' % (b.hex()))
		return b

	def read_sentence(self):
		"""
		Read the next non-empty sentence.

		An empty sentence is a zero-length word where the reply tag should
		be. A few are skipped as noise, a long run of them means the stream
		is out of step and is reported as a protocol error.
		"""

		read = self._traced_read if self._debug_level > 1 else self._read
		empty = 0
		while True:
			words = read_words(read)
			if words:
				break
			empty += 1
			if empty > self.max_empty:
				raise ProtocolError('%d empty sentences in a row' % (empty))
		if self.logger:
			for w in words:
				self._debug_('<<< %s' % (w.decode('utf-8', 'replace')))
		return words
