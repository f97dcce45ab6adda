"""
Unit tests for the audio linker and the audio file index.
"""

import unittest
import tempfile
import shutil
from pathlib import Path

from columbus_log_converter.models import (
    WayPoint, Position, TrackPoint, PlainWaypoint, AudioWaypoint,
)
from columbus_log_converter.processors.audio_linker import (
    AudioLinker, AudioIndex, LinkStatus, vox_number, vox_file_name, AUDIO_COMMENT,
)
from columbus_log_converter.utils.error_handling import MissingResourceError


def make_waypoint(kind=None):
    return WayPoint(position=Position(48.8563, 9.0897), kind=kind or AudioWaypoint())


class TestVoxNumbers(unittest.TestCase):
    """Test sequence numbers of vox file names."""

    def test_number_without_extension(self):
        self.assertEqual(vox_number("VOX01524"), 1524)

    def test_number_with_extension(self):
        self.assertEqual(vox_number("vox01524.wav"), 1524)

    def test_non_numeric_suffix(self):
        self.assertEqual(vox_number("memo.wav"), -1)

    def test_none(self):
        self.assertEqual(vox_number(None), -1)

    def test_file_name(self):
        self.assertEqual(vox_file_name(101), "vox00101.wav")
        self.assertEqual(vox_file_name(7, ".WAV"), "vox00007.WAV")


class TestAudioIndex(unittest.TestCase):
    """Test the audio file index."""

    def test_empty_index_has_no_range(self):
        index = AudioIndex()
        self.assertIsNone(index.number_range)
        self.assertEqual(len(index), 0)

    def test_range_tracks_min_and_max(self):
        index = AudioIndex()
        for number in (104, 100, 102):
            index.observe_number(number)
        self.assertEqual(index.first_number, 100)
        self.assertEqual(index.last_number, 104)
        self.assertEqual(list(index.number_range), [100, 101, 102, 103])

    def test_invalid_numbers_do_not_widen_range(self):
        index = AudioIndex()
        index.observe_number(5)
        index.observe_number(-1)
        self.assertEqual(index.first_number, 5)

    def test_lookup_ignores_case(self):
        index = AudioIndex()
        index.register("VOX00010.wav", 3)
        self.assertIn("vox00010.wav", index)
        self.assertEqual(index.position_of("Vox00010.WAV"), 3)


class TestAudioLinker(unittest.TestCase):
    """Test linking of audio references."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.index = AudioIndex()
        self.linker = AudioLinker(self.temp_dir, self.index)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _touch(self, name):
        path = Path(self.temp_dir) / name
        path.write_bytes(b"RIFF")
        return path

    def test_link_mixed_case_file(self):
        audio_file = self._touch("VOX01524.wav")

        outcome = self.linker.link(make_waypoint(), "vox01524", position=2)

        self.assertEqual(outcome.status, LinkStatus.LINKED)
        self.assertIsInstance(outcome.waypoint.kind, AudioWaypoint)
        self.assertEqual(outcome.sequence_number, 1524)
        link = outcome.waypoint.links[0]
        self.assertEqual(link.uri, audio_file.resolve().as_uri())
        self.assertEqual(link.text, "vox01524.wav")
        self.assertEqual(link.mime_type, "audio/wav")
        self.assertEqual(outcome.waypoint.comment, AUDIO_COMMENT)
        self.assertEqual(outcome.waypoint.description, "vox01524.wav")
        self.assertEqual(self.index.position_of("vox01524.wav"), 2)
        self.assertEqual((self.index.first_number, self.index.last_number), (1524, 1524))

    def test_link_upper_case_file(self):
        self._touch("VOX01524.WAV")
        outcome = self.linker.link(make_waypoint(), "vox01524", position=0)
        self.assertTrue(outcome.linked)

    def test_plain_marker_upgraded_to_audio(self):
        self._touch("vox00001.wav")
        outcome = self.linker.link(make_waypoint(PlainWaypoint()), "vox00001", position=0)
        self.assertIsInstance(outcome.waypoint.kind, AudioWaypoint)

    def test_missing_file(self):
        outcome = self.linker.link(make_waypoint(TrackPoint()), "vox01524", position=5)

        self.assertEqual(outcome.status, LinkStatus.MISSING)
        self.assertIsInstance(outcome.waypoint.kind, PlainWaypoint)
        self.assertEqual(outcome.waypoint.comment, "Missing audio file: vox01524.wav")
        self.assertIsInstance(outcome.error, MissingResourceError)
        self.assertNotIn("vox01524.wav", self.index)
        self.assertIsNone(self.index.number_range)

    def test_non_numeric_name_is_linked(self):
        self._touch("memo.wav")
        outcome = self.linker.link(make_waypoint(), "memo", position=1)
        self.assertTrue(outcome.linked)
        self.assertEqual(outcome.sequence_number, -1)
        self.assertIn("memo.wav", self.index)
        self.assertIsNone(self.index.number_range)

    def test_attach_link_keeps_existing_links(self):
        first = self._touch("vox00001.wav")
        second = self._touch("vox00002.wav")

        wpt = self.linker.attach_link(make_waypoint(TrackPoint()), "vox00001.wav", first, 1)
        wpt = self.linker.attach_link(wpt, "*vox00002.wav*", second, 2)

        self.assertEqual([link.text for link in wpt.links], ["vox00001.wav", "*vox00002.wav*"])
        self.assertEqual(wpt.description, "*vox00002.wav*")


if __name__ == '__main__':
    unittest.main()
