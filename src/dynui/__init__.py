"""
dynui
Data-driven dashboards from a closed palette of twelve component kinds.
"""

__version__ = "0.1.0"
