"""Asset Tracker — commodity price scraping and portfolio price sync service."""

__version__ = "0.1.0"
