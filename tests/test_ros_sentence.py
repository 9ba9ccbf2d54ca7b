import io
import logging
import unittest

from ros_client.ros_errors import ConnectionLost, ProtocolError
from ros_client.ros_length import encode_length
from ros_client.ros_sentence import (
    SentenceReader,
    command_words,
    encode_sentence,
    encode_word,
    parse_attribute,
    read_words,
)


def decode(data):
    return read_words(io.BytesIO(data).read)


class SentenceCodecTestCase(unittest.TestCase):
    def test_sentence_wire_format(self):
        self.assertEqual(
            encode_sentence([b"/login", b"=name=admin"]),
            b"\x06/login\x0b=name=admin\x00",
        )

    def test_framing_round_trip(self):
        cases = [
            [],
            [b"/system/identity/print"],
            [b"!re", b"=name=ether1", b"=comment=a=b=c", b"=", b"x" * 200],
        ]
        for words in cases:
            with self.subTest(words=words):
                self.assertEqual(decode(encode_sentence(words)), words)

    def test_consecutive_sentences_are_kept_apart(self):
        stream = io.BytesIO(encode_sentence([b"!re", b"=a=1"]) + encode_sentence([b"!done"]))
        self.assertEqual(read_words(stream.read), [b"!re", b"=a=1"])
        self.assertEqual(read_words(stream.read), [b"!done"])

    def test_zero_length_word_cannot_be_framed(self):
        with self.assertRaises(ValueError):
            encode_word(b"")
        with self.assertRaises(ValueError):
            encode_sentence([b"/quit", b""])

    def test_command_words(self):
        self.assertEqual(
            command_words("/interface/print", {".proplist": "name,type", "count-only": ""}),
            [b"/interface/print", b"=.proplist=name,type", b"=count-only="],
        )
        self.assertEqual(
            command_words(["/ip/address/print", "?interface=ether1"]),
            [b"/ip/address/print", b"?interface=ether1"],
        )
        self.assertEqual(command_words("/ping", {"count": 3}), [b"/ping", b"=count=3"])

    def test_parse_attribute(self):
        self.assertEqual(parse_attribute("=name=ether1"), ("name", "ether1"))
        self.assertEqual(parse_attribute("=comment=a=b"), ("comment", "a=b"))
        self.assertEqual(parse_attribute("=disabled="), ("disabled", ""))
        self.assertEqual(parse_attribute(".tag=7"), (".tag", "7"))
        self.assertEqual(parse_attribute("session terminated on request"), ("session terminated on request", ""))

    def test_end_of_stream_is_an_error_not_an_empty_sentence(self):
        with self.assertRaises(ConnectionLost) as cm:
            decode(b"")
        self.assertIn("Failed to read length", str(cm.exception))

        with self.assertRaises(ConnectionLost):
            decode(encode_length(3) + b"!r")

        # words read but the terminator never came
        with self.assertRaises(ConnectionLost):
            decode(encode_word(b"!done"))

    def test_reserved_length_byte_is_a_protocol_error(self):
        with self.assertRaises(ProtocolError):
            decode(b"\xff")


class SentenceReaderTestCase(unittest.TestCase):
    def test_empty_sentences_before_a_reply_are_skipped(self):
        data = encode_length(0) * 3 + encode_sentence([b"!done"])
        reader = SentenceReader(io.BytesIO(data).read)
        self.assertEqual(reader.read_sentence(), [b"!done"])

    def test_run_of_empty_sentences_is_bounded(self):
        data = encode_length(0) * 5 + encode_sentence([b"!done"])
        reader = SentenceReader(io.BytesIO(data).read, max_empty=4)
        with self.assertRaises(ProtocolError):
            reader.read_sentence()

    def test_received_words_are_traced(self):
        logger = logging.getLogger("tests.sentence")
        data = encode_sentence([b"!re", b"=name=x"])
        reader = SentenceReader(io.BytesIO(data).read, logger=logger, debug=2)
        with self.assertLogs("tests.sentence", level=logging.DEBUG) as log:
            reader.read_sentence()
        self.assertIn("<<< !re", "\n".join(log.output))
        self.assertIn("<<< =name=x", "\n".join(log.output))
        # level 2 also shows the raw length prefixes
        self.assertIn("<<< [03]", "\n".join(log.output))
