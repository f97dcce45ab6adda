"""
Visualization utilities for converted track logs.

Plots the track together with plain and audio-tagged waypoints.
"""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
from typing import Optional, Dict, Any
from pathlib import Path
import logging

from ..models import ConversionResult


logger = logging.getLogger(__name__)


class TrackVisualizer:
    """Creates overview plots of converted Columbus track logs."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize track visualizer.

        Args:
            config: Configuration dictionary with visualization parameters
        """
        self.config = config or {}

        # Set up matplotlib style
        plt.style.use('default')
        sns.set_palette("husl")

        # Default figure parameters
        self.default_figsize = (12, 10)
        self.default_dpi = self.config.get('dpi', 150)

    def plot_conversion(self, result: ConversionResult,
                        output_path: Optional[str] = None) -> str:
        """
        Plot track and waypoints of a conversion.

        Args:
            result: Converted track log
            output_path: Path to save the visualization

        Returns:
            Path to saved visualization file
        """
        logger.info("Creating track visualization")

        track = result.track_frame()
        waypoints = result.waypoint_frame()

        fig, ax = plt.subplots(figsize=self.default_figsize)

        if not track.empty:
            ax.plot(track['gps_lon'], track['gps_lat'],
                    'b-', alpha=0.7, linewidth=1, label='Track')
            ax.plot(track['gps_lon'].iloc[0], track['gps_lat'].iloc[0],
                    'go', markersize=8, label='Start')
            ax.plot(track['gps_lon'].iloc[-1], track['gps_lat'].iloc[-1],
                    'ro', markersize=8, label='End')

        if not waypoints.empty:
            audio = waypoints[waypoints['point_type'] == 'AudioWaypoint']
            plain = waypoints[waypoints['point_type'] != 'AudioWaypoint']
            if not plain.empty:
                ax.scatter(plain['gps_lon'], plain['gps_lat'],
                           marker='s', s=40, label='Waypoint')
            if not audio.empty:
                ax.scatter(audio['gps_lon'], audio['gps_lat'],
                           marker='*', s=120, label='Audio waypoint')

        if track.empty and waypoints.empty:
            ax.text(0.5, 0.5, 'No points converted',
                    ha='center', va='center', transform=ax.transAxes)

        ax.set_xlabel('Longitude (deg)')
        ax.set_ylabel('Latitude (deg)')
        ax.set_title(result.description or 'Columbus track')
        ax.grid(True, alpha=0.3)
        if not (track.empty and waypoints.empty):
            ax.legend()

        if output_path is None:
            output_path = "track_visualization.png"

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(output_path, dpi=self.default_dpi, bbox_inches='tight')
        plt.close(fig)

        logger.info(f"Saved track visualization to {output_path}")
        return str(output_path)
