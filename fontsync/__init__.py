"""
fontsync: keep the system font store in step with a synced font folder.
"""

__version__ = "0.3.0"
