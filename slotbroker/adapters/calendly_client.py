"""
Calendly API client for fetching availability and event types.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import pendulum
import requests
from pendulum import DateTime

from ..domain.exceptions import ConfigurationError, ProviderQueryError
from ..domain.models import DateRange, EventType, RawInterval

logger = logging.getLogger(__name__)


class CalendlyClient:
    """
    Client for Calendly API v2 availability operations.

    Uses /event_type_available_times for open start times and
    /event_types for the bookable templates of the token owner.
    """

    DEFAULT_BASE_URL = "https://api.calendly.com"

    def __init__(self, api_token: str, base_url: str = DEFAULT_BASE_URL, timeout: float = 30.0):
        """
        Initialize the Calendly client.

        Args:
            api_token: Calendly personal access token

        Raises:
            ConfigurationError: If no token is given
        """
        if not api_token:
            raise ConfigurationError("Calendly API token is required")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        }

    @classmethod
    def from_config(cls, config) -> "CalendlyClient":
        """Create a client from a ``CalendlyConfig``."""
        return cls(
            api_token=config.require_token(),
            base_url=config.base_url,
            timeout=config.timeout_seconds,
        )

    def get_available_times(self, event_type: str, date_range: DateRange) -> List[RawInterval]:
        """
        Get open start times for an event type inside a window.

        Args:
            event_type: Calendly event type URI
            date_range: Window to query

        Returns:
            List of RawInterval objects in provider order

        Raises:
            ProviderQueryError: If the API call fails
        """
        start = _to_utc_iso(date_range.start_time)
        end = _to_utc_iso(date_range.end_time)

        logger.info("Fetching availability for event type %s", event_type)
        logger.info("Time range: %s to %s", start, end)

        data = self._get(
            "/event_type_available_times",
            params={"event_type": event_type, "start_time": start, "end_time": end},
            action="fetch availability",
        )

        intervals = self._parse_available_times(data)
        logger.info("Received %d available time slots", len(intervals))
        return intervals

    def get_current_user(self) -> str:
        """
        Discover the URI of the user owning the API token.

        Returns:
            User URI, e.g. ``https://api.calendly.com/users/<uuid>``
        """
        data = self._get("/users/me", action="discover Calendly user")
        try:
            user_uri = data["resource"]["uri"]
        except (KeyError, TypeError) as e:
            raise ProviderQueryError(
                "Failed to discover Calendly user", detail=f"unexpected response: {e}"
            ) from e

        logger.info("Discovered Calendly user %s", user_uri.rsplit("/", 1)[-1])
        return user_uri

    def get_event_types(self, user_uri: Optional[str] = None) -> List[EventType]:
        """List the event types of a user (the token owner by default)."""
        user = user_uri or self.get_current_user()
        data = self._get("/event_types", params={"user": user}, action="fetch event types")

        return [
            EventType(
                uri=item.get("uri", ""),
                name=item.get("name", ""),
                duration=int(item.get("duration") or 0),
                description=item.get("description_plain") or "",
                scheduling_url=item.get("scheduling_url", ""),
            )
            for item in data.get("collection", [])
        ]

    def test_connection(self) -> Dict[str, Any]:
        """
        Test the connection and authentication by fetching the user resource.

        Raises:
            ProviderQueryError: If connection test fails
        """
        data = self._get("/users/me", action="test connection")
        return data.get("resource", {})

    def _get(self, path: str, params: Optional[Dict[str, str]] = None, action: str = "query") -> Dict[str, Any]:
        url = f"{self.base_url}{path}"

        try:
            response = requests.get(url, headers=self.headers, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Calendly request failed: %s", e)
            raise ProviderQueryError(f"Failed to {action}", detail=str(e)) from e

        if not response.ok:
            detail = _error_detail(response)
            logger.error("Calendly returned HTTP %s: %s", response.status_code, detail)
            raise ProviderQueryError(
                f"Failed to {action}", status_code=response.status_code, detail=detail
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderQueryError(
                f"Failed to {action}", status_code=response.status_code, detail="invalid JSON body"
            ) from e

    def _parse_available_times(self, response_data: Dict[str, Any]) -> List[RawInterval]:
        """
        Parse the available times response into our domain model.

        Response format:
        {
            "collection": [
                {
                    "status": "available",
                    "invitees_remaining": 1,
                    "start_time": "2026-10-19T13:00:00.000000Z",
                    "scheduling_url": "https://calendly.com/..."
                }
            ]
        }
        """
        intervals: List[RawInterval] = []

        for item in response_data.get("collection", []):
            try:
                start = _parse_datetime(item["start_time"])
                end = _parse_datetime(item["end_time"]) if item.get("end_time") else None
            except (KeyError, ValueError) as e:
                logger.warning("Could not parse availability item: %s", e)
                continue

            intervals.append(
                RawInterval(
                    start_time=start,
                    end_time=end,
                    scheduling_url=item.get("scheduling_url", ""),
                )
            )

        return intervals


def _to_utc_iso(dt: DateTime) -> str:
    return dt.in_timezone("UTC").to_iso8601_string()


def _parse_datetime(datetime_str: str) -> DateTime:
    """Parse an ISO 8601 string into a pendulum DateTime."""
    dt = pendulum.parse(datetime_str)

    if isinstance(dt, DateTime):
        return dt

    raise ValueError(f"Could not parse datetime: {datetime_str}")


def _error_detail(response: requests.Response) -> str:
    """Pull the most useful message out of a Calendly error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or ""

    if isinstance(body, dict):
        return body.get("message") or body.get("title") or str(body)
    return str(body)
