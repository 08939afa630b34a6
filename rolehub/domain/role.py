from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Role:
    """A named permission/group label.

    ``name`` is always the normalized form produced by ``RoleNamePolicy``.
    ``id`` stays ``None`` until the role is first persisted. Two roles with
    the same ``id`` and ``name`` compare equal whatever their ``created_at``.
    """

    name: str
    created_at: datetime = field(compare=False)
    id: int | None = None

    @classmethod
    def create(cls, name: str, *, now: datetime) -> Role:
        return cls(name=name, created_at=now)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def with_name(self, name: str) -> Role:
        """Return a copy carrying ``name``; id and created_at are kept."""
        return replace(self, name=name)

    def with_id(self, role_id: int) -> Role:
        if self.id is not None and self.id != role_id:
            raise ValueError(f"Role already has id {self.id}")
        return replace(self, id=role_id)
