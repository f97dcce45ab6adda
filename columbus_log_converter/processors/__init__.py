"""
Processing components for converted track logs.

This module contains processors for:
- Audio linking and the audio file index
- Rescue of recordings without a CSV reference
"""

from .audio_linker import AudioIndex, AudioLinker, LinkOutcome, LinkStatus
from .audio_rescue import LostAudioRescuer, RescueResult

__all__ = [
    "AudioIndex",
    "AudioLinker",
    "LinkOutcome",
    "LinkStatus",
    "LostAudioRescuer",
    "RescueResult"
]
