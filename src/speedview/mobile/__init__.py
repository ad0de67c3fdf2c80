"""
SpeedView Mobile - Cross-platform Kivy UI for the GPS speedometer.

This module provides a Kivy-based user interface that works on:
- Desktop (Windows, macOS, Linux) with gpsd or a replay file
- Android, through the platform location service

Features:
- Speed gauge with selectable unit and signal-strength bars
- Map tab with current position and location info overlay
"""

from .app import SpeedViewApp

__all__ = ["SpeedViewApp"]
