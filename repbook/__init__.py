"""Repbook - commission and payment tracking for independent sales reps."""

__version__ = "1.0.0"
