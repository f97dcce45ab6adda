"""
Conversion driver for Columbus V-900 CSV track logs.

Reads a track log in a single sequential pass, converts every record,
then runs the lost-audio rescue pass and assembles the ConversionResult.
"""

from typing import List, Optional, Protocol
from pathlib import Path
import logging

from .config import ConversionConfig
from .models import (
    ConversionResult, ConversionStatistics, RecordType, Track, WayPoint,
)
from .parsers import ColumbusCsvParser, tokenize_record, is_columbus_file
from .parsers.columbus_parser import DATE_ERRORS, DOP_ERRORS, ParsedRecord
from .processors import AudioIndex, AudioLinker, LostAudioRescuer
from .utils.error_handling import FieldErrorHandler, FormatError


logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Receives the messages meant for the user."""

    def info(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...


class LoggingNotifier:
    """Routes user messages to the converter's logger."""

    def info(self, message: str) -> None:
        logger.info(message)

    def warning(self, message: str) -> None:
        logger.warning(message)


class ColumbusConverter:
    """Converts Columbus CSV files into a track and a waypoint collection."""

    def __init__(self, config: Optional[ConversionConfig] = None,
                 notifier: Optional[Notifier] = None):
        """
        Initialize the converter.

        Args:
            config: Conversion configuration. If None, uses default config.
            notifier: Receiver of summary and warning messages. If None,
                messages go to the log.
        """
        self.config = config or ConversionConfig()
        self.notifier = notifier or LoggingNotifier()
        self.logger = logging.getLogger(__name__)

    def is_recognized(self, file_path: str) -> bool:
        """Probe whether a file looks like a Columbus CSV file."""
        return is_columbus_file(file_path, self.config.encoding)

    def convert(self, file_path: str) -> ConversionResult:
        """
        Convert a Columbus CSV file.

        Each call works on its own AudioIndex, counters and buffers.

        Args:
            file_path: Path to the CSV file

        Returns:
            ConversionResult holding track, waypoints and statistics

        Raises:
            FormatError: If a record has the wrong shape; no partial result
                is returned
        """
        if not file_path:
            raise ValueError("File name must not be null or empty")

        path = Path(file_path)
        self.logger.info(f"Converting Columbus track file: {path}")

        error_handler = FieldErrorHandler()
        parser = ColumbusCsvParser(self.config, error_handler)
        audio_index = AudioIndex()
        linker = AudioLinker(str(path.absolute().parent), audio_index,
                             extension=self.config.audio_extension)

        stats = ConversionStatistics()
        points: List[WayPoint] = []
        track_positions: List[int] = []
        waypoint_positions: List[int] = []

        with open(path, 'r', encoding=self.config.encoding, errors='replace') as f:
            for line_number, line in enumerate(f, 1):
                fields = tokenize_record(line.rstrip("\r\n"))
                # Skip header and lines without data
                if line_number <= 1 or not fields or not line.strip():
                    continue

                try:
                    record = parser.parse_record(fields, linker, position=len(points))
                except (FormatError, ValueError, IndexError) as e:
                    self.logger.error(f"Aborting conversion of {path} at line {line_number}: {e}")
                    raise FormatError(str(e), line_number) from e

                self._account(record, stats, error_handler)
                if record.effective_marker == RecordType.TRACK.value:
                    track_positions.append(len(points))
                else:
                    waypoint_positions.append(len(points))
                points.append(record.waypoint)

        stats.date_conversion_errors = error_handler.count(DATE_ERRORS)
        stats.dop_conversion_errors = error_handler.count(DOP_ERRORS)

        rescue = LostAudioRescuer(linker).process(points, audio_index)
        stats.rescued_audio += rescue.rescued_count

        waypoints = [rescue.points[p] for p in waypoint_positions]
        known = set(waypoint_positions)
        for position in rescue.rescued_positions:
            if position not in known:
                waypoints.append(rescue.points[position])
                known.add(position)

        result = ConversionResult(
            track=Track(points=[points[p] for p in track_positions]),
            waypoints=waypoints,
            statistics=stats,
            description=f"Converted by columbus-log-converter from track file '{path.name}'",
            source_file=path,
        )

        self._report(stats)
        self.logger.info(f"Finished {path.name}: {len(result.track)} track points, "
                         f"{len(result.waypoints)} waypoints")
        return result

    def _account(self, record: ParsedRecord, stats: ConversionStatistics,
                 error_handler: FieldErrorHandler):
        """Update the counters for one converted record."""
        outcome = record.link_outcome
        if outcome is not None and not outcome.linked:
            error_handler.record(outcome.error)
            if self.config.warn_on_missing_audio:
                self.notifier.warning(str(outcome.error))

        effective = record.effective_marker
        if effective == RecordType.TRACK.value:
            stats.track_points += 1
            return

        stats.waypoints += 1
        voice = RecordType.VOICE.value
        if outcome is not None and not outcome.linked:
            stats.missing_audio += 1
        elif record.marker != voice and effective == voice:
            stats.rescued_audio += 1
        elif effective == voice:
            stats.audio_waypoints += 1

    def _report(self, stats: ConversionStatistics):
        warning = stats.conversion_warning()
        if self.config.warn_on_conversion_errors and warning:
            self.notifier.warning(warning)
        if self.config.show_summary:
            self.notifier.info(stats.summary_message())

