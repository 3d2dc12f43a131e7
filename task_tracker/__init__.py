"""
Task Tracker
Personal task tracking API with categories, due dates and completion streaks
"""

__version__ = "0.1.0"
