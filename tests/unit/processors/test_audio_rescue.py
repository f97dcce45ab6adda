"""
Unit tests for the lost audio rescue pass.
"""

import unittest
import tempfile
import shutil
from pathlib import Path

from columbus_log_converter.models import (
    WayPoint, Position, TrackPoint, PlainWaypoint, AudioWaypoint,
)
from columbus_log_converter.processors.audio_linker import AudioLinker, AudioIndex
from columbus_log_converter.processors.audio_rescue import (
    LostAudioRescuer, SUCCESSOR_OFFSET,
)


class TestLostAudioRescuer(unittest.TestCase):
    """Test re-attachment of unreferenced recordings."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.points = [
            WayPoint(position=Position(48.0 + i / 1000.0, 9.0), kind=TrackPoint())
            for i in range(20)
        ]
        self.index = AudioIndex()
        self.linker = AudioLinker(self.temp_dir, self.index)
        self.rescuer = LostAudioRescuer(self.linker)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _touch(self, *numbers):
        for number in numbers:
            (Path(self.temp_dir) / f"vox{number:05d}.wav").write_bytes(b"RIFF")

    def _index(self, number, position):
        self.index.register(f"vox{number:05d}.wav", position)
        self.index.observe_number(number)
        self.points[position] = WayPoint(
            position=self.points[position].position, kind=AudioWaypoint())

    def _standard_layout(self):
        # 100, 102 and 105 are referenced; 101, 103 and 104 are lost
        self._touch(100, 101, 102, 103, 104, 105)
        self._index(100, 1)
        self._index(102, 4)
        self._index(105, 15)

    def test_successor_offset_is_five_records(self):
        self.assertEqual(SUCCESSOR_OFFSET, 5)

    def test_three_lost_recordings_rescued(self):
        self._standard_layout()

        result = self.rescuer.process(self.points, self.index)

        self.assertEqual(result.rescued_count, 3)
        attached = [(a.file_name, a.position) for a in result.attachments]
        self.assertEqual(attached, [
            # successor 102 at position 4: 4 - 5 < 0, first point
            ("vox00101.wav", 0),
            # no referenced successor: last point
            ("vox00103.wav", 19),
            # successor 105 at position 15: 15 - 5
            ("vox00104.wav", 10),
        ])

    def test_successor_with_margin(self):
        self._touch(7, 8)
        self._index(8, 12)
        self.index.observe_number(7)

        result = self.rescuer.process(self.points, self.index)

        self.assertEqual([a.position for a in result.attachments], [12 - 5])

    def test_rescued_point_carries_link(self):
        self._standard_layout()

        result = self.rescuer.process(self.points, self.index)

        rescued = result.points[10]
        self.assertIsInstance(rescued.kind, AudioWaypoint)
        self.assertEqual(rescued.links[0].text, "*vox00104.wav*")
        self.assertEqual(rescued.links[0].sequence_number, 104)
        self.assertEqual(rescued.comment, "Audio recording")
        self.assertEqual(rescued.position, self.points[10].position)

    def test_inputs_are_not_modified(self):
        self._standard_layout()
        before = list(self.points)

        self.rescuer.process(self.points, self.index)

        self.assertEqual(self.points, before)
        self.assertIsInstance(self.points[10].kind, TrackPoint)
        self.assertNotIn("vox00104.wav", self.index)

    def test_lost_file_not_on_disk_is_skipped(self):
        self._touch(100, 101, 102, 104, 105)
        self._index(100, 1)
        self._index(102, 4)
        self._index(105, 15)

        result = self.rescuer.process(self.points, self.index)

        self.assertEqual([a.file_name for a in result.attachments],
                         ["vox00101.wav", "vox00104.wav"])

    def test_last_number_is_not_searched(self):
        self._touch(1, 2)
        self._index(1, 3)
        self.index.observe_number(2)

        result = self.rescuer.process(self.points, self.index)

        self.assertEqual(result.rescued_count, 0)

    def test_empty_index(self):
        self._touch(1, 2, 3)
        result = self.rescuer.process(self.points, self.index)
        self.assertEqual(result.rescued_count, 0)
        self.assertEqual(result.points, self.points)

    def test_empty_point_sequence(self):
        self._touch(1, 2)
        self.index.observe_number(1)
        self.index.observe_number(2)
        result = self.rescuer.process([], self.index)
        self.assertEqual(result.rescued_count, 0)

    def test_fallback_and_clamped_positions(self):
        self._touch(1, 2, 3, 4)
        self._index(1, 0)
        self._index(4, 2)

        result = self.rescuer.process(self.points, self.index)

        self.assertEqual([a.position for a in result.attachments], [19, 0])
        self.assertEqual(result.rescued_positions, [19, 0])
        self.assertEqual(len(result.points[19].links), 1)

    def test_links_accumulate_on_same_point(self):
        # Neither 2 nor 3 has a referenced successor
        self._touch(1, 2, 3)
        self._index(1, 0)
        self.index.observe_number(4)

        result = self.rescuer.process(self.points, self.index)

        self.assertEqual(result.rescued_count, 2)
        self.assertEqual(result.rescued_positions, [19])
        self.assertEqual([link.text for link in result.points[19].links],
                         ["*vox00002.wav*", "*vox00003.wav*"])


if __name__ == '__main__':
    unittest.main()
