"""Enumeration engine: settings, level maps and the generation loop."""
