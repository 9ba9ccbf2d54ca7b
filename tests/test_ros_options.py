import unittest

from ros_client.ros_errors import UsageError
from ros_client.ros_options import Options


class OptionsTestCase(unittest.TestCase):
    def test_defaults(self):
        o = Options()
        self.assertEqual(o.host, "192.168.88.1")
        self.assertEqual(o.port, 8728)
        self.assertEqual(o.username, "admin")
        self.assertIsNone(o.password)
        self.assertFalse(o.connect_on_demand)
        self.assertEqual(o.debug, 0)
        self.assertIsNone(o.read_timeout)

    def test_host_may_carry_the_port(self):
        o = Options(host="router.example:8729")
        self.assertEqual(o.host, "router.example")
        self.assertEqual(o.port, 8729)

    def test_invalid_values_are_rejected(self):
        for kwargs in (
            {"port": 0},
            {"port": 65536},
            {"host": "router:http"},
            {"host": ""},
            {"connect_timeout": -1},
            {"read_timeout": -0.5},
            {"encoding": "no-such-codec"},
        ):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(UsageError):
                    Options(**kwargs)

    def test_unknown_fields_are_rejected(self):
        with self.assertRaises(UsageError) as cm:
            Options.from_dict({"host": "r", "hostname": "r", "pasword": "x"})
        self.assertIn("hostname", str(cm.exception))
        self.assertIn("pasword", str(cm.exception))

    def test_options_are_immutable(self):
        o = Options()
        with self.assertRaises(AttributeError):
            o.host = "10.0.0.1"

    def test_replace_validates(self):
        o = Options(host="a", port=1000)
        self.assertEqual(o.replace(username="bob").port, 1000)
        self.assertEqual(o.replace(host="b:2000").port, 2000)
        self.assertEqual(o.replace(host="b").port, 1000)
        with self.assertRaises(UsageError):
            o.replace(port=-5)
        with self.assertRaises(UsageError):
            o.replace(colour="blue")

    def test_repr_masks_password(self):
        self.assertNotIn("hunter2", repr(Options(password="hunter2")))
