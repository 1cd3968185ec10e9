"""
Match Module - Pairing and the in-memory gameplay host.

A match is EPHEMERAL:
- Created when the first participant joins
- Ready once a second participant takes the open slot
- Over when one fleet has been fully hit
- Dropped from memory when ended
"""

from .instance import MatchInstance, MatchStatus
from .manager import MatchManager, MatchRecord, Fleet, ShotOutcome

__all__ = [
    "MatchInstance",
    "MatchStatus",
    "MatchManager",
    "MatchRecord",
    "Fleet",
    "ShotOutcome",
]
