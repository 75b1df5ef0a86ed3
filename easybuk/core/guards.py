"""
Ownership and id guards shared by every owner-scoped resource.

Notifications answer 404/403 separately; provider services hide foreign
rows behind a 404 so callers cannot probe other providers' catalogues.
"""
from __future__ import annotations

import uuid
from typing import TypeVar

from fastapi import HTTPException

T = TypeVar("T")


def ensure_owned(
    resource: T | None,
    actor_id: uuid.UUID,
    *,
    not_found: type[HTTPException],
    forbidden: type[HTTPException] | None = None,
    owner_attr: str = "user_id",
) -> T:
    """
    Return ``resource`` if ``actor_id`` owns it, otherwise raise.

    When ``forbidden`` is None a foreign resource raises ``not_found``.
    """
    if resource is None:
        raise not_found()
    if getattr(resource, owner_attr) != actor_id:
        if forbidden is None:
            raise not_found()
        raise forbidden()
    return resource


def parse_resource_id(raw: str, *, not_found: type[HTTPException]) -> uuid.UUID:
    """Path ids that are not UUIDs name no row, so they are a 404, not a 400."""
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise not_found() from None
