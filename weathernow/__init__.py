"""State-synchronization core for a current/forecast weather dashboard."""

__version__ = "0.1.0"
