"""
Caller-id to timezone lookup using the phonenumbers library.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import phonenumbers

logger = logging.getLogger(__name__)


# Primary zone per calling region. Extend as new markets are served.
COUNTRY_TIMEZONE_MAP: Dict[str, str] = {
    "US": "America/New_York",
    "GB": "Europe/London",
    "CA": "America/Toronto",
    "AU": "Australia/Sydney",
    "NZ": "Pacific/Auckland",
    "IN": "Asia/Kolkata",
    "JP": "Asia/Tokyo",
    "CN": "Asia/Shanghai",
    "DE": "Europe/Berlin",
    "FR": "Europe/Paris",
    "ES": "Europe/Madrid",
    "IT": "Europe/Rome",
}


def lookup_timezone(phone_number: Optional[str]) -> Optional[str]:
    """
    Map an international phone number to the primary zone of its region.

    Returns None when the number is missing, cannot be parsed, or belongs to
    a region without a known zone.
    """
    if not phone_number:
        return None

    try:
        # Region None: only numbers carrying a +<country code> prefix parse.
        parsed = phonenumbers.parse(phone_number, None)
    except phonenumbers.NumberParseException as e:
        logger.debug("Could not parse caller id for timezone detection: %s", e)
        return None

    region = phonenumbers.region_code_for_number(parsed)
    if not region:
        return None

    return COUNTRY_TIMEZONE_MAP.get(region)


def is_valid_phone_number(phone_number: Optional[str]) -> bool:
    """Check that a phone number is a possible, valid international number."""
    if not phone_number:
        return False

    try:
        parsed = phonenumbers.parse(phone_number, None)
    except phonenumbers.NumberParseException:
        return False

    return phonenumbers.is_possible_number(parsed) and phonenumbers.is_valid_number(parsed)
