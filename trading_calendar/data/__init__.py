"""
Static calendar data module.
"""
from .holidays import COVERAGE_END, COVERAGE_START, NYSE_EARLY_CLOSES, NYSE_HOLIDAYS, is_covered

__all__ = ["COVERAGE_START", "COVERAGE_END", "NYSE_HOLIDAYS", "NYSE_EARLY_CLOSES", "is_covered"]
