"""
Conquest - Territorial Board Game Engine

A deterministic, synchronous engine for a two-player game on a 5x5 grid.
The engine provides:
- Board and tile state
- Move validation (first move anywhere, then only on your own tiles)
- Expansion cascades when a tile reaches 4 points
- Win and draw detection
"""

__version__ = "0.1.0"
