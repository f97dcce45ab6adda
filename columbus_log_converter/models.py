"""
Data model for converted Columbus track logs.

A conversion produces one Track of track points, a collection of
waypoints (plain or audio-tagged) and the counters describing how the
import went.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd


AUDIO_WAV_LINK = "audio/wav"


class RecordType(str, Enum):
    """Record markers written by the logger in the second CSV column."""

    TRACK = "T"
    VOICE = "V"
    WAYPOINT = "C"


@dataclass(frozen=True)
class Position:
    """Latitude/longitude in signed decimal degrees."""

    latitude: float
    longitude: float

    def to_display_string(self) -> str:
        return f"{self.latitude:.6f}, {self.longitude:.6f}"


@dataclass(frozen=True)
class GpsQuality:
    """Fix mode and dilution of precision values from extended records."""

    fix_mode: Optional[str] = None
    pdop: Optional[float] = None
    hdop: Optional[float] = None
    vdop: Optional[float] = None


@dataclass(frozen=True)
class AudioLink:
    """Link from a waypoint to an audio recording on disk."""

    uri: str
    text: str
    sequence_number: int = -1
    mime_type: str = AUDIO_WAV_LINK


@dataclass(frozen=True)
class TrackPoint:
    marker = RecordType.TRACK


@dataclass(frozen=True)
class PlainWaypoint:
    marker = RecordType.WAYPOINT


@dataclass(frozen=True)
class AudioWaypoint:
    links: Tuple[AudioLink, ...] = ()

    marker = RecordType.VOICE


PointKind = Union[TrackPoint, PlainWaypoint, AudioWaypoint]


@dataclass(frozen=True)
class WayPoint:
    """A single converted record."""

    position: Position
    kind: PointKind
    timestamp: Optional[datetime] = None
    elevation: str = ""
    quality: Optional[GpsQuality] = None
    comment: Optional[str] = None
    description: Optional[str] = None

    @property
    def links(self) -> Tuple[AudioLink, ...]:
        if isinstance(self.kind, AudioWaypoint):
            return self.kind.links
        return ()

    def to_row(self) -> Dict[str, Any]:
        """Flatten the waypoint into a row of the standardized columns."""
        quality = self.quality or GpsQuality()
        links = self.links
        return {
            'timestamp': self.timestamp,
            'gps_lat': self.position.latitude,
            'gps_lon': self.position.longitude,
            'gps_alt': self.elevation,
            'point_type': type(self.kind).__name__,
            'fix_mode': quality.fix_mode,
            'pdop': np.nan if quality.pdop is None else quality.pdop,
            'hdop': np.nan if quality.hdop is None else quality.hdop,
            'vdop': np.nan if quality.vdop is None else quality.vdop,
            'comment': self.comment,
            'description': self.description,
            'audio_file': ";".join(link.text for link in links) or None,
            'audio_link': ";".join(link.uri for link in links) or None,
        }


FRAME_COLUMNS = [
    'timestamp', 'gps_lat', 'gps_lon', 'gps_alt', 'point_type',
    'fix_mode', 'pdop', 'hdop', 'vdop', 'comment', 'description',
    'audio_file', 'audio_link'
]


def _to_frame(points: List[WayPoint]) -> pd.DataFrame:
    df = pd.DataFrame([p.to_row() for p in points], columns=FRAME_COLUMNS)
    df['timestamp'] = pd.to_datetime(df['timestamp'], utc=True)
    for col in ('gps_lat', 'gps_lon', 'pdop', 'hdop', 'vdop'):
        df[col] = df[col].astype(np.float64)
    return df


@dataclass
class Track:
    """Ordered track points in file order."""

    points: List[WayPoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


@dataclass
class ConversionStatistics:
    """Counters describing a conversion run."""

    track_points: int = 0
    waypoints: int = 0
    audio_waypoints: int = 0
    missing_audio: int = 0
    rescued_audio: int = 0
    date_conversion_errors: int = 0
    dop_conversion_errors: int = 0

    def summary_message(self) -> str:
        message = (f"Imported {self.track_points} track points and "
                   f"{self.waypoints} way points ({self.audio_waypoints} with audio, "
                   f"{self.rescued_audio} rescued).")
        if self.missing_audio > 0:
            message += (f"\nNote: {self.missing_audio} audio files could not be found, "
                        f"please check marker comments!")
        return message

    def conversion_warning(self) -> Optional[str]:
        if self.date_conversion_errors == 0 and self.dop_conversion_errors == 0:
            return None
        return (f"{self.date_conversion_errors} date conversion faults and "
                f"{self.dop_conversion_errors} DOP conversion errors")


@dataclass
class ConversionResult:
    """Everything produced by converting one Columbus CSV file."""

    track: Track
    waypoints: List[WayPoint]
    statistics: ConversionStatistics
    description: str = ""
    source_file: Optional[Path] = None

    def track_frame(self) -> pd.DataFrame:
        """Track points as a DataFrame with standardized columns."""
        return _to_frame(self.track.points)

    def waypoint_frame(self) -> pd.DataFrame:
        """Waypoints as a DataFrame with standardized columns."""
        return _to_frame(self.waypoints)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_file': str(self.source_file) if self.source_file else None,
            'description': self.description,
            'track_point_count': len(self.track),
            'waypoint_count': len(self.waypoints),
            'statistics': dict(self.statistics.__dict__),
        }
