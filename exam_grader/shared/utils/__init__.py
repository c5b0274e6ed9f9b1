"""
Shared Utilities

Contains:
    - round_half_up: school-style rounding used for percentages and marks
"""

from .numbers import round_half_up

__all__ = ["round_half_up"]
