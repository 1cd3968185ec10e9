"""
Broadside - Rules engine for two-player grid naval combat.

The engine is the authority on:
- Ship placement validation (schema and geometry)
- Match pairing and opponent resolution
- Shot resolution and loss detection

Transport, persistence and rendering belong to the host.
"""

__version__ = "0.1.0"
