"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .scheduling import AvailabilityClientProtocol, DaySlotsResult, SchedulingService, WeekSummaryResult

__all__ = ["AvailabilityClientProtocol", "DaySlotsResult", "SchedulingService", "WeekSummaryResult"]
