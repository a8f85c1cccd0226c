"""Asset Tracker — HTTP API"""

from asset_tracker.api.app import create_app

__all__ = ["create_app"]
