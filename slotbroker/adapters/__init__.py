"""
Adapters layer - External integrations (Calendly API, caller-id lookup).
"""

from .calendly_client import CalendlyClient
from .mock_calendly_client import MockCalendlyClient
from .timezone_lookup import is_valid_phone_number, lookup_timezone

__all__ = ["CalendlyClient", "MockCalendlyClient", "is_valid_phone_number", "lookup_timezone"]
