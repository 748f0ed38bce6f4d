"""
Lenient field types for response models.

Some servers send timestamps that strict ISO-8601 parsing rejects:

    2019-04-24T14:50:17.101Z           plain ISO-8601
    2024-10-30T09:05:10.881+0100       offset without colon
    Sat, 21 Sep 2024 21:56:30 +0100    RFC 2822

``LenientDatetime`` accepts all of these and maps anything else to None.
"""
import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator

_OFFSET_WITHOUT_COLON = re.compile(r"([+-]\d{2})(\d{2})$")


def parse_lenient_datetime(value: Any) -> Optional[datetime]:
    """Parse ``value`` into a datetime, or return None."""
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    iso = text[:-1] + "+00:00" if text.endswith("Z") else _OFFSET_WITHOUT_COLON.sub(r"\1:\2", text)
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError):
        return None


LenientDatetime = Annotated[Optional[datetime], BeforeValidator(parse_lenient_datetime)]
