"""
API routes for the Task Tracker
"""
from . import tasks, categories, stats, maintenance

__all__ = ["tasks", "categories", "stats", "maintenance"]
