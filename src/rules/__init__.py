"""Segment rule filtering engine.

This package validates user-supplied field patterns and evaluates
combinations of them against segment quality metadata.
"""
