"""
Shared Pydantic types for schema validation.

EntityId: identifiers are UUID strings (String(36) columns). Malformed ids are
rejected at the edge with a 422 before any database access.
PhotoUrl: an absolute http(s) URL as returned by the photo store.
"""

from typing import Annotated
from pydantic import StringConstraints

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
PHOTO_URL_PATTERN = r"^https?://[^\s/$.?#][^\s]*$"

EntityId = Annotated[str, StringConstraints(pattern=UUID_PATTERN)]

PhotoUrl = Annotated[str, StringConstraints(pattern=PHOTO_URL_PATTERN)]
