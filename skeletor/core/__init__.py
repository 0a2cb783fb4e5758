"""Core runtime pieces: logging, settings, template resolution."""
