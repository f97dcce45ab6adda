"""
Rescue of audio recordings that no record refers to.

The logger can write a recording without a matching CSV reference, e.g.
when logging stops right as recording starts. Recordings whose number lies
inside the observed vox range but which are missing from the AudioIndex
are attached to the waypoint written shortly before the next referenced
recording.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import logging

from .base import BaseProcessor
from .audio_linker import AudioIndex, AudioLinker, vox_file_name
from ..models import WayPoint


# Records the logger writes between the end of a recording and the
# reference to the next one.
SUCCESSOR_OFFSET = 5


@dataclass
class RescueAttachment:
    file_name: str
    position: int


@dataclass
class RescueResult:
    """Output of the rescue pass."""

    points: List[WayPoint]
    attachments: List[RescueAttachment] = field(default_factory=list)

    @property
    def rescued_count(self) -> int:
        return len(self.attachments)

    @property
    def rescued_positions(self) -> List[int]:
        """Positions that received a recording, first attachment order, no repeats."""
        positions = []
        for attachment in self.attachments:
            if attachment.position not in positions:
                positions.append(attachment.position)
        return positions


class LostAudioRescuer(BaseProcessor):
    """Re-attaches unreferenced vox files to the most plausible waypoint."""

    def __init__(self, linker: AudioLinker, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.linker = linker
        self.logger = logging.getLogger(__name__)

    def process(self, points: Sequence[WayPoint], audio_index: AudioIndex) -> RescueResult:
        """
        Search the vox range for recordings without a referencing record.

        Neither ``points`` nor ``audio_index`` is modified.

        Args:
            points: All converted points in file order
            audio_index: Audio files linked during the main pass

        Returns:
            RescueResult with the updated point sequence and the attachments made
        """
        result = RescueResult(points=list(points))
        numbers = audio_index.number_range
        if numbers is None or not self.validate_input(points):
            return result

        for number in numbers:
            vox_file = vox_file_name(number, self.linker.extension)
            next_vox_file = vox_file_name(number + 1, self.linker.extension)
            if vox_file in audio_index:
                continue

            audio_file = self.linker.resolve(vox_file)
            if audio_file is None:
                continue
            self.logger.info(f"Found lost vox file {vox_file}")

            position = self._nearest_position(result.points, audio_index, next_vox_file)
            rescued = self.linker.attach_link(
                result.points[position], f"*{vox_file}*", audio_file, number)
            result.points[position] = rescued
            result.attachments.append(RescueAttachment(vox_file, position))
            self.logger.info(
                f"Linked file {vox_file} to position {rescued.position.to_display_string()}")

        return result

    def _nearest_position(self, points: Sequence[WayPoint], audio_index: AudioIndex,
                          next_vox_file: str) -> int:
        """Attach right before the next referenced recording, else to the last point."""
        next_position = audio_index.position_of(next_vox_file)
        if next_position is None:
            return len(points) - 1

        position = next_position - SUCCESSOR_OFFSET
        if position >= 0:
            return position
        return 0
