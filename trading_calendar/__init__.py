"""
Trading Calendar - NYSE Session Boundary Engine

Determines whether the US equity market is open, resolves the latest and
next trading sessions, and computes lookback window boundaries while
accounting for weekends, a fixed holiday table and early-close days.
"""

__version__ = "0.1.0"
__author__ = "Trading Calendar Team"
