"""ZIPPED proxy - fetches third-party pages and relays them with scripts stripped."""

__version__ = "1.0.0"
