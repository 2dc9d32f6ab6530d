"""AI-assisted resume generation pipeline."""

__version__ = "0.1.0"
