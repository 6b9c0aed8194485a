"""Tone Trainer - lesson management and pronunciation practice backend."""

__version__ = "0.1.0"
