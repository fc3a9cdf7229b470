"""Hex Stack: a real-time hex-grid tile matching puzzle built on an ECS core."""

__version__ = "0.1.0"
