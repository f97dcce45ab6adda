"""
Parser for the native CSV written by Columbus V-900 GPS/audio loggers.

The logger writes one record per line in one of two fixed layouts.

Simple mode (10 fields)::

    INDEX,TAG,DATE,TIME,LATITUDE N/S,LONGITUDE E/W,HEIGHT,SPEED,HEADING,VOX
    1,T,090430,194134,48.856330N,009.089779E,318,20,0,

Extended mode (15 fields)::

    INDEX,TAG,DATE,TIME,LATITUDE N/S,LONGITUDE E/W,HEIGHT,SPEED,HEADING,
    FIX MODE,VALID,PDOP,HDOP,VDOP,VOX
    1,T,090508,191448,48.856928N,009.091153E,330,3,0,3D,SPS ,1.4,1.2,0.8,

The VOX column is padded with blanks when there is no recording, which is
why it survives tokenizing as an empty field.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union
import logging
import math

from .base import BaseLogParser
from ..config import ConversionConfig
from ..models import (
    WayPoint, Position, GpsQuality, RecordType,
    TrackPoint, PlainWaypoint, AudioWaypoint, PointKind,
)
from ..processors.audio_linker import AudioLinker, LinkOutcome
from ..utils.error_handling import FormatError, FieldConversionError, FieldErrorHandler


SEPARATOR = ","
SIMPLE_FIELD_COUNT = 10
EXTENDED_FIELD_COUNT = 15

# Lines to read before deciding on Columbus file yes/no
MAX_SCAN_LINES = 20
MIN_SCAN_LINES = 10

TIMESTAMP_FORMAT = "%y%m%d/%H%M%S"

DATE_ERRORS = "date_conversion_errors"
DOP_ERRORS = "dop_conversion_errors"

RECORD_MARKERS = {marker.value for marker in RecordType}


def tokenize_record(line: Optional[str]) -> List[str]:
    """
    Split a line into its comma separated fields.

    Empty pieces between consecutive separators are dropped; the remaining
    pieces are trimmed.

    Args:
        line: One line of the CSV file

    Returns:
        Trimmed fields of the line, empty for an empty line
    """
    if not line:
        return []
    return [piece.strip() for piece in line.split(SEPARATOR) if piece]


def is_columbus_file(file_path: Union[str, Path, None], encoding: str = "utf-8") -> bool:
    """
    Check the first lines of a file for Columbus record markers.

    Once more than MIN_SCAN_LINES records qualified, scanning continues
    past MAX_SCAN_LINES.

    Args:
        file_path: The file to check

    Returns:
        True if more than MIN_SCAN_LINES records carry a Columbus marker
    """
    if file_path is None:
        return False

    line = 0
    columbus_lines = 0
    with open(file_path, 'r', encoding=encoding, errors='replace') as f:
        for raw_line in f:
            if not (line < MAX_SCAN_LINES or columbus_lines > MIN_SCAN_LINES):
                break
            fields = tokenize_record(raw_line.rstrip("\r\n"))
            line += 1
            # Skip header and lines without data
            if not fields or line <= 1:
                continue
            if len(fields) > 1 and fields[1] in RECORD_MARKERS:
                columbus_lines += 1

    return columbus_lines > MIN_SCAN_LINES


def parse_coordinate(text: str, positive: str, negative: str) -> float:
    """
    Convert a coordinate like ``48.856330N`` to signed decimal degrees.

    Args:
        text: Decimal value followed by a hemisphere letter
        positive: Hemisphere letter of positive values ('N' or 'E')
        negative: Hemisphere letter of negative values ('S' or 'W')

    Raises:
        ValueError: If the hemisphere letter or the number is malformed
    """
    hemisphere = text[-1:].upper()
    if hemisphere not in (positive, negative):
        raise ValueError(f"Invalid hemisphere in coordinate {text!r}")

    value = float(text[:-1])
    if hemisphere == negative:
        value = -value
    return value


@dataclass
class ParsedRecord:
    """A converted record before it is routed into track or waypoints."""

    waypoint: WayPoint
    marker: str
    link_outcome: Optional[LinkOutcome] = None

    @property
    def effective_marker(self) -> str:
        return self.waypoint.kind.marker.value


class ColumbusCsvParser(BaseLogParser):
    """Parser for Columbus V-900 CSV records."""

    def __init__(self, config: Optional[ConversionConfig] = None,
                 error_handler: Optional[FieldErrorHandler] = None):
        super().__init__(config or ConversionConfig())
        self._supported_extensions = {'.csv'}
        self.error_handler = error_handler or FieldErrorHandler()
        self.logger = logging.getLogger(__name__)

    def can_parse(self, file_path: str) -> bool:
        if not self.validate_file(file_path):
            return False
        return is_columbus_file(file_path, self.config.encoding)

    def parse_record(self, fields: List[str], linker: Optional[AudioLinker] = None,
                     position: int = 0) -> ParsedRecord:
        """
        Build a waypoint from the fields of one record.

        Args:
            fields: Tokenized record, header excluded
            linker: Audio linker of the current conversion; without one,
                audio references are ignored
            position: Position the waypoint will take in the point sequence

        Returns:
            ParsedRecord with the waypoint and its original marker

        Raises:
            FormatError: On a wrong field count or a malformed coordinate
        """
        if len(fields) not in (SIMPLE_FIELD_COUNT, EXTENDED_FIELD_COUNT):
            raise FormatError(f"Invalid number of tokens: {len(fields)}")
        is_extended = len(fields) == EXTENDED_FIELD_COUNT

        try:
            position_value = Position(
                latitude=parse_coordinate(fields[4], 'N', 'S'),
                longitude=parse_coordinate(fields[5], 'E', 'W'),
            )
        except ValueError as e:
            raise FormatError(f"Invalid coordinate: {e}") from e

        marker = fields[1]
        waypoint = WayPoint(position=position_value, kind=self._kind_for_marker(marker),
                            elevation=fields[6])

        waypoint, outcome = self._link_audio(waypoint, marker, fields[-1], linker, position)

        with self.error_handler.tolerate("timestamp", DATE_ERRORS):
            waypoint = replace(waypoint, timestamp=self._parse_timestamp(fields[2], fields[3]))

        if is_extended and not self.config.ignore_dop_fields:
            waypoint = replace(waypoint, quality=self._parse_quality(fields))

        self.logger.debug(f"Parsed record {fields[0]} as {type(waypoint.kind).__name__}")
        return ParsedRecord(waypoint=waypoint, marker=marker, link_outcome=outcome)

    def _kind_for_marker(self, marker: str) -> PointKind:
        if marker == RecordType.TRACK.value:
            return TrackPoint()
        if marker == RecordType.VOICE.value:
            return AudioWaypoint()
        if marker != RecordType.WAYPOINT.value:
            self.logger.debug(f"Unknown record marker {marker!r}, treating as waypoint")
        return PlainWaypoint()

    def _link_audio(self, waypoint: WayPoint, marker: str, audio_base: str,
                    linker: Optional[AudioLinker], position: int):
        if audio_base and linker is not None:
            outcome = linker.link(waypoint, audio_base, position)
            if outcome.linked and marker != RecordType.VOICE.value:
                self.logger.info(f"Rescued unlinked audio file {outcome.file_name}")
            return outcome.waypoint, outcome

        # A voice marker without a reference keeps its provisional kind
        return waypoint, None

    def _parse_timestamp(self, date_text: str, time_text: str) -> datetime:
        text = f"{date_text}/{time_text}"
        try:
            parsed = datetime.strptime(text, TIMESTAMP_FORMAT)
        except ValueError as e:
            raise FieldConversionError("timestamp", text, str(e)) from e
        return parsed.replace(tzinfo=timezone.utc)

    def _parse_quality(self, fields: List[str]) -> GpsQuality:
        dops = {}
        for name, index in (("pdop", 11), ("hdop", 12), ("vdop", 13)):
            with self.error_handler.tolerate(name, DOP_ERRORS):
                dops[name] = self._parse_dop(name, fields[index])
        return GpsQuality(fix_mode=fields[9].lower(), **dops)

    @staticmethod
    def _parse_dop(name: str, text: str) -> float:
        try:
            value = float(text)
        except ValueError as e:
            raise FieldConversionError(name, text, str(e)) from e
        if math.isnan(value):
            raise FieldConversionError(name, text, "not a number")
        return value
