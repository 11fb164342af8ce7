"""
Megawatt - Power Plant Game Rules Engine

A deterministic, event-sourced engine for a turn-based economic board game
where players auction power plants, buy commodities, build and sell power.
The engine provides:
- A seeded, replayable event log
- Per-phase legal command generation and validation
- The plant auction protocol
- The commodity market refill algorithm
"""

__version__ = "0.1.0"
