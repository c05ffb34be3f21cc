# ABOUTME: novelnoted, a CLI-first personal reading tracker.
# ABOUTME: Library, wishlist, metadata search, and live-synced reading statistics.

__version__ = "0.1.0"
