"""Utility helpers (logging, geometry).

Shared utilities for the project.

Submodules:
    logging          – get_logger() and structured logging setup.
    math             – geometry helpers (calculate_angle, distance, midpoint).
    colors           – hex palette to OpenCV BGR conversion.
"""
