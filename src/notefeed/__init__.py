"""
NoteFeed Backend - note publishing with access-scoped feeds

Users organize notes into domains, tag them, and follow each other to
receive subscriber-only notes next to the public feed.
"""

__version__ = "1.0.0"
