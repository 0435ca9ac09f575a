"""
taskcal - Sync recurring tasks into the device calendar.
"""

__version__ = "0.1.0"
