"""Boundaries the role lifecycle service depends on."""

from typing import Protocol

from rolehub.domain.role import Role


class RolePort(Protocol):
    """Persistence contract for roles.

    ``save`` assigns an id on the first save of a role. Implementations
    report a violated uniqueness constraint with ``DuplicateResourceError``.
    """

    def save(self, role: Role) -> Role: ...

    def find_by_id(self, role_id: int) -> Role | None: ...

    def find_by_name(self, name: str) -> Role | None: ...

    def find_all(self) -> list[Role]: ...

    def find_by_name_containing(self, pattern: str) -> list[Role]: ...

    def exists_by_name(self, name: str) -> bool: ...

    def delete_by_id(self, role_id: int) -> bool: ...

    def count(self) -> int: ...


class NotificationPort(Protocol):
    """Fire-and-forget side channel for role lifecycle events."""

    def notify_role_created(self, role: Role) -> None: ...

    def notify_role_updated(self, role: Role) -> None: ...

    def notify_role_deleted(self, role_id: int) -> None: ...
