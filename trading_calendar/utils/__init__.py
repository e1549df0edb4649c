"""
Utility functions module.

Common utility functions for time handling shared across the engine.

Time Semantics:
- Instants are always timezone-aware; naive datetimes are rejected
- The wall clock is reached only through an injectable Clock
- Durations between instants are computed in UTC so DST shifts are counted
"""
