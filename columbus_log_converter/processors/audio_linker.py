"""
Audio linking for voice-tagged waypoints.

Resolves the audio reference of a record against the directory of the
CSV file and attaches a link to the waypoint. All audio files seen during
a conversion are kept in an AudioIndex together with the range of their
sequence numbers.
"""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Dict, Optional
import logging

from ..models import WayPoint, AudioLink, AudioWaypoint, PlainWaypoint
from ..utils.error_handling import MissingResourceError
from ..utils.io_utils import FileHandler


VOX_PREFIX_LENGTH = 3
VOX_NUMBER_WIDTH = 5
AUDIO_COMMENT = "Audio recording"


def vox_number(file_name: Optional[str]) -> int:
    """
    Extract the sequence number of a vox file name.

    ``"VOX01524"`` and ``"vox01524.wav"`` both yield 1524.

    Args:
        file_name: The vox file name, with or without extension

    Returns:
        The number of the vox file, or -1 if the name has no numeric part
    """
    if file_name is None:
        return -1

    stem = Path(file_name).stem
    try:
        return int(stem[VOX_PREFIX_LENGTH:])
    except ValueError:
        return -1


def vox_file_name(number: int, extension: str = ".wav") -> str:
    """Name the logger gives to the recording with the given number."""
    return f"vox{number:0{VOX_NUMBER_WIDTH}d}{extension}"


class AudioIndex:
    """Audio file names mapped to the position of their owning waypoint."""

    def __init__(self):
        self._positions: Dict[str, int] = {}
        self.first_number: Optional[int] = None
        self.last_number: Optional[int] = None

    def __contains__(self, file_name: str) -> bool:
        return file_name.lower() in self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def position_of(self, file_name: str) -> Optional[int]:
        return self._positions.get(file_name.lower())

    def register(self, file_name: str, position: int):
        self._positions[file_name.lower()] = position

    def observe_number(self, number: int):
        """Widen the observed sequence number range."""
        if number < 0:
            return
        if self.first_number is None or number < self.first_number:
            self.first_number = number
        if self.last_number is None or number > self.last_number:
            self.last_number = number

    @property
    def number_range(self) -> Optional[range]:
        """Numbers from the first observed up to, excluding, the last."""
        if self.first_number is None:
            return None
        return range(self.first_number, self.last_number)


class LinkStatus(Enum):
    LINKED = "linked"
    MISSING = "missing"


@dataclass
class LinkOutcome:
    """Result of linking one audio reference."""

    status: LinkStatus
    waypoint: WayPoint
    file_name: str
    sequence_number: int = -1
    error: Optional[MissingResourceError] = None

    @property
    def linked(self) -> bool:
        return self.status is LinkStatus.LINKED


class AudioLinker:
    """Links audio recordings to waypoints and maintains the AudioIndex."""

    def __init__(self, directory: str, audio_index: Optional[AudioIndex] = None,
                 extension: str = ".wav", file_handler: Optional[FileHandler] = None):
        """
        Initialize the audio linker.

        Args:
            directory: Directory containing the CSV file and its recordings
            audio_index: Index shared with the rest of the conversion
            extension: Extension appended to audio references
            file_handler: File handler used for existence checks
        """
        self.directory = str(directory)
        self.audio_index = audio_index if audio_index is not None else AudioIndex()
        self.extension = extension
        self.file_handler = file_handler or FileHandler()
        self.logger = logging.getLogger(__name__)

    def resolve(self, file_name: str) -> Optional[Path]:
        """Find ``file_name`` in the working directory, tolerating case differences."""
        return self.file_handler.find_case_variant(self.directory, file_name)

    def link(self, waypoint: WayPoint, audio_base: str, position: int) -> LinkOutcome:
        """
        Link the recording ``audio_base`` to a waypoint.

        Args:
            waypoint: Waypoint built from the record
            audio_base: Audio reference column without extension
            position: Position of the waypoint in the full point sequence

        Returns:
            LinkOutcome carrying the waypoint reclassified as audio or plain
        """
        file_name = audio_base + self.extension
        audio_file = self.resolve(file_name)

        if audio_file is None:
            error = MissingResourceError(file_name, self.directory)
            self.logger.warning(f"File {file_name} not found in {self.directory}")
            demoted = replace(waypoint, kind=PlainWaypoint(), comment=str(error))
            return LinkOutcome(LinkStatus.MISSING, demoted, file_name, error=error)

        number = vox_number(file_name)
        self.audio_index.observe_number(number)
        linked = self.attach_link(waypoint, file_name, audio_file, number)
        self.audio_index.register(file_name, position)
        self.logger.debug(f"Linked {audio_file} to point #{position}")

        return LinkOutcome(LinkStatus.LINKED, linked, file_name, sequence_number=number)

    def attach_link(self, waypoint: WayPoint, text: str, audio_file: Path,
                    number: int = -1) -> WayPoint:
        """
        Add a link to an audio file to a waypoint.

        Links already present on the waypoint are kept.

        Args:
            waypoint: Waypoint to add the link to
            text: Display text of the link
            audio_file: Existing audio file
            number: Sequence number of the recording

        Returns:
            Copy of the waypoint classified as AudioWaypoint
        """
        link = AudioLink(uri=audio_file.resolve().as_uri(), text=text,
                         sequence_number=number)
        return replace(
            waypoint,
            kind=AudioWaypoint(links=waypoint.links + (link,)),
            comment=AUDIO_COMMENT,
            description=text,
        )
