"""
Employee search service built on query by example.
"""

__version__ = "0.1.0"
