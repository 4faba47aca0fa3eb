import unittest

from tsncf.application.base import ApplicationKind
from tsncf.application.sr import SRApplication, SRType
from tsncf.application.tt import TTApplication, ExplicitPath, DEFAULT_TT_INTERVAL_US
from tsncf.topology.base import EndSystem


class TestSRApplication(unittest.TestCase):
    """测试流预留应用。"""

    def setUp(self):
        self.src = EndSystem("ES1")
        self.dst = EndSystem("ES2")

    def test_class_defaults(self):
        app = SRApplication("video", 256, 1, self.src, [self.dst], modes=["normal"])
        self.assertIs(app.kind, ApplicationKind.STREAM_RESERVATION)
        self.assertEqual(app.interval, 125.0)
        self.assertEqual(app.deadline, 2000.0)
        self.assertAlmostEqual(app.alloc_mbps, 16.384)

        class_b = SRApplication("audio", 256, 1, self.src, [self.dst], modes=["normal"], sr_type=SRType.CLASS_B)
        self.assertEqual(class_b.interval, 250.0)
        self.assertEqual(class_b.deadline, 50000.0)

    def test_explicit_interval_and_deadline(self):
        app = SRApplication("bulk", 1500, 2, self.src, [self.dst], modes=["a", "b"], interval=1000, deadline=500)
        self.assertEqual(app.alloc_mbps, 24.0)
        self.assertEqual(app.deadline, 500.0)
        self.assertEqual(app.modes, frozenset({"a", "b"}))

    def test_modes_required(self):
        with self.assertRaises(ValueError):
            SRApplication("video", 256, 1, self.src, [self.dst], modes=[])

    def test_modes_string_rejected(self):
        with self.assertRaises(ValueError):
            SRApplication("video", 256, 1, self.src, [self.dst], modes="normal")

    def test_destinations_required(self):
        with self.assertRaises(ValueError):
            SRApplication("video", 256, 1, self.src, [], modes=["normal"])

    def test_invalid_sizes_rejected(self):
        with self.assertRaises(ValueError):
            SRApplication("video", 0, 1, self.src, [self.dst], modes=["normal"])
        with self.assertRaises(ValueError):
            SRApplication("video", 256, 0, self.src, [self.dst], modes=["normal"])
        with self.assertRaises(ValueError):
            SRApplication("video", 256, 1, self.src, [self.dst], modes=["normal"], deadline=-1)

    def test_sr_type_from_name(self):
        self.assertIs(SRType.from_name("A"), SRType.CLASS_A)
        self.assertIs(SRType.from_name("class_b"), SRType.CLASS_B)
        with self.assertRaises(ValueError):
            SRType.from_name("C")


class TestTTApplication(unittest.TestCase):
    """测试时间触发应用。"""

    def test_tt_defaults(self):
        src, dst = EndSystem("ES1"), EndSystem("ES2")
        app = TTApplication("ctrl", 64, 1, src, [dst], explicit_path=ExplicitPath(["ES1", "SW1", "ES2"]))
        self.assertIs(app.kind, ApplicationKind.TIME_TRIGGERED)
        self.assertEqual(app.interval, DEFAULT_TT_INTERVAL_US)
        self.assertEqual(app.deadline, 0.0)
        self.assertEqual(app.explicit_path.node_names, ["ES1", "SW1", "ES2"])
        self.assertIn("ES1 -> SW1 -> ES2", repr(app))

    def test_explicit_path_needs_two_nodes(self):
        with self.assertRaises(ValueError):
            ExplicitPath(["ES1"])


if __name__ == "__main__":
    unittest.main()
