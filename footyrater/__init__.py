"""Footy Rater - watchability ratings for finished football matches."""

__version__ = "1.0.0"
