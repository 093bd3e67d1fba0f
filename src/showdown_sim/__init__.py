"""Showdown Simulator - Monte Carlo Texas Hold'em showdown statistics."""

__version__ = "0.1.0"
