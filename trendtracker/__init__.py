"""
India Trend Tracker.

Aggregates trending news, videos, searches, social trends and forum posts
for an Indian audience, finds themes shared across sources and ranks the
lot by viral potential.
"""

__version__ = "2.0.0"
