"""Chalkboard: turn a photograph into a black-and-white edge mask."""

__version__ = "0.1.0"
