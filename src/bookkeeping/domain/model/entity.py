"""Base building block: identity that exists immediately in the domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID, uuid4


def new_id() -> UUID:
    return uuid4()


@dataclass(eq=False, kw_only=True)
class Entity:
    """Entity with an internal identity assigned at construction."""

    id: UUID = field(default_factory=new_id)
