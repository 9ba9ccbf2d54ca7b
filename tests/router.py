"""In-memory stand-in for a router socket"""

import io
import socket
import unittest
import unittest.mock

from ros_client.ros_sentence import encode_sentence, read_words

ROUTER_ADDR = ('192.0.2.1', 8728)


def sentence(*words):
    return encode_sentence([w.encode("utf-8") for w in words])


def login_replies(challenge="0102"):
    return sentence("!done", "=ret=" + challenge) + sentence("!done")


def decode_stream(data):
    stream = io.BytesIO(bytes(data))
    sentences = []
    while stream.tell() < len(data):
        sentences.append([w.decode("utf-8") for w in read_words(stream.read)])
    return sentences


class FakeSocket(object):
    def __init__(self, incoming=b""):
        self.incoming = bytearray(incoming)
        self.sent = bytearray()
        self.closed = False
        self.timeout = None
        self.timeouts = []
        self.connected_to = None
        self.connect_error = None
        self.send_error = None
        self.recv_error = None

    def feed(self, data):
        self.incoming += data

    def settimeout(self, t):
        self.timeout = t
        self.timeouts.append(t)

    def connect(self, addr):
        if self.connect_error:
            raise self.connect_error
        self.connected_to = addr

    def recv(self, n):
        if self.recv_error:
            raise self.recv_error
        if self.closed:
            raise OSError(9, "Bad file descriptor")
        b = bytes(self.incoming[:n])
        del self.incoming[:n]
        return b

    def sendall(self, data):
        if self.send_error:
            raise self.send_error
        self.sent += data

    def close(self):
        self.closed = True


class RouterTestCase(unittest.TestCase):
    """ Patches name resolution and socket creation with a FakeSocket """

    def setUp(self):
        self.sock = FakeSocket()
        addrinfo = [(socket.AF_INET, socket.SOCK_STREAM, socket.SOL_TCP, "", ROUTER_ADDR)]
        getaddrinfo_patch = unittest.mock.patch("socket.getaddrinfo", return_value=addrinfo)
        socket_patch = unittest.mock.patch("socket.socket", return_value=self.sock)
        self.getaddrinfo_mock = getaddrinfo_patch.start()
        self.socket_mock = socket_patch.start()
        self.addCleanup(getaddrinfo_patch.stop)
        self.addCleanup(socket_patch.stop)

    def sent(self):
        return decode_stream(self.sock.sent)
