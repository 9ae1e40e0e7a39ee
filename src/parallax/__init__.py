"""Parallax: simulation core for ground-based astronomical observation."""

__version__ = "0.1.0"
