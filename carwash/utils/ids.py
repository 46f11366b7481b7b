# carwash/utils/ids.py
from typing import Optional, Union
from uuid import UUID


def parse_uuid(value: Union[str, UUID, None]) -> Optional[UUID]:
    """Parse an ID coming from a request body; None when it is not a UUID"""
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None
