"""Services module"""
from .tracker_service import TrackerService

__all__ = ["TrackerService"]
