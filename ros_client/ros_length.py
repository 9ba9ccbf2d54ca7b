#!/usr/bin/env python3
"""RouterOS API word length encoding"""

MAX_LENGTH = 0xFFFFFFFF

def length_size(n):
	"""RouterOS API word length encoding"""

	if n < 0 or n > MAX_LENGTH:
		raise ValueError('length out of range: %r' % (n))
	if n <= 0x7F:
		return 1
	if n <= 0x3FFF:
		return 2
	if n <= 0x1FFFFF:
		return 3
	if n <= 0xFFFFFFF:
		return 4
	return 5

def encode_length(n):
	"""
	    size      first byte     value bits
	   .-------------------------------------------.
	   |  1     |  0xxxxxxx    |  7                |
	   |  2     |  10xxxxxx    |  14               |
	   |  3     |  110xxxxx    |  21               |
	   |  4     |  1110xxxx    |  28               |
	   |  5     |  11110000    |  32 (next 4 bytes)|
	   `-------------------------------------------'
	   all multi-byte values are big-endian
	"""

	size = length_size(n)
	if size == 1:
		return bytes([n])
	if size == 2:
		n |= 0x8000
	elif size == 3:
		n |= 0xC00000
	elif size == 4:
		n |= 0xE0000000
	else:
		return b'\xf0' + n.to_bytes(4, 'big')
	return n.to_bytes(size, 'big')

def decode_length(read):
	"""
	Decode one length prefix from ``read``.

	``read(n)`` behaves like a file read: fewer than ``n`` bytes means the
	stream ended. Returns None in that case.
	"""

	b = read(1)
	if len(b) < 1:
		return None
	first = b[0]

	if first & 0x80 == 0x00:
		return first
	if first & 0xC0 == 0x80:
		extra = 1
		n = first & ~0xC0
	elif first & 0xE0 == 0xC0:
		extra = 2
		n = first & ~0xE0
	elif first & 0xF0 == 0xE0:
		extra = 3
		n = first & ~0xF0
	elif first & 0xF8 == 0xF0:
		extra = 4
		n = 0
	else:
		# 0xF8 and above are control bytes, never lengths
		raise ValueError('reserved length byte 0x%02x' % (first))

	rest = read(extra)
	if len(rest) < extra:
		return None
	for c in rest:
		n = (n << 8) + c
	return n
