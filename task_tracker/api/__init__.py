"""
API module for the Task Tracker
FastAPI routers and request dependencies
"""
