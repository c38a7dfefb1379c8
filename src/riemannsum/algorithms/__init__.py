"""Algorithms built on the curve model."""
