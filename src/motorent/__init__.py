"""Motorent - back-office core for a motorcycle rental business."""

__version__ = "0.1.0"
