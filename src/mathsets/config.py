"""
Configuration & Constants
=========================
This module serves as the central registry for the lab's tunable constants.

Why is this file needed?
------------------------
Timing and range limits are shared by the controller, the control panel and
the tests; they live here instead of being repeated.

Exports:
    BASE_INTERVAL_MS (int): Tick interval at speed 1x.
    MIN_ROWS, MAX_ROWS, DEFAULT_ROWS (int): Row count slider range.
    MIN_SPEED, MAX_SPEED, SPEED_STEP, DEFAULT_SPEED (float): Speed slider range.
"""

# Animation timing
BASE_INTERVAL_MS: int = 600

# Row count
MIN_ROWS: int = 2
MAX_ROWS: int = 10
DEFAULT_ROWS: int = 6

# Playback speed multiplier
MIN_SPEED: float = 0.5
MAX_SPEED: float = 3.0
SPEED_STEP: float = 0.5
DEFAULT_SPEED: float = 1.0
