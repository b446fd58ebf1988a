"""
Island trip planning system.

This package groups user-selected points of interest into day plans across
an island group, inserts the ferry and departure days a trip needs, picks a
default transport mode per day and prices the result.
"""

__version__ = "0.1.0"
