"""
Stock Check — deterministic ranking, scoring and validation engine.

Turns a tradable-instrument universe plus user-supplied end-of-day prices
into a schema-locked ranked result set and a presentation ordering.
"""

__version__ = "1.0.0"
