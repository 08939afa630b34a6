"""Role lifecycle service: naming rules, uniqueness, system-role protection and notifications."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from rolehub.domain.ports import NotificationPort, RolePort
from rolehub.domain.role import Role
from rolehub.domain.role_name import RoleNamePolicy
from rolehub.errors import (
    DomainError,
    DomainValidationError,
    DuplicateResourceError,
    ForbiddenError,
    NotFoundError,
    PersistenceError,
)
from rolehub.services.notification import NotificationDispatcher

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RoleLifecycleService:
    """
    Orchestrates role create/update/delete/query over the injected ports.

    The service holds no mutable state of its own and is safe to share
    between concurrent requests. Uniqueness is checked before saving, but the
    store's unique constraint has the final word: a ``DuplicateResourceError``
    raised by ``RolePort.save`` is passed through unchanged. Any other
    repository failure, on reads as well as writes, surfaces as
    ``PersistenceError``.
    """

    def __init__(
        self,
        repository: RolePort,
        notifier: NotificationPort,
        dispatcher: NotificationDispatcher,
        policy: RoleNamePolicy | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.repository = repository
        self.notifier = notifier
        self.dispatcher = dispatcher
        self.policy = policy or RoleNamePolicy()
        self.clock = clock

    # ---- commands ---------------------------------------------------------

    def create(self, raw_name: str) -> Role:
        """
        Create a role with a normalized, unique name.

        Raises:
            DomainValidationError: If the name is blank, too long or reserved
            DuplicateResourceError: If a role with the normalized name exists
            PersistenceError: If the role could not be saved
        """
        name = self._validated_name(raw_name)

        if self._store(self.repository.exists_by_name, name):
            raise DuplicateResourceError(f"Role with name '{name}' already exists")

        role = Role.create(name, now=self.clock())
        saved = self._store(self.repository.save, role)
        logger.info("Created role id=%s name=%s", saved.id, saved.name)

        self.dispatcher.submit("role created", self.notifier.notify_role_created, saved)
        return saved

    def update(self, role_id: int, raw_name: str) -> Role:
        """
        Rename an existing role.

        The system-role check runs before the new name is looked at, so a
        system role is refused whatever name is supplied.

        Raises:
            DomainValidationError: If the id is not positive or the name is invalid
            NotFoundError: If the role doesn't exist
            ForbiddenError: If the role is a system role
            DuplicateResourceError: If another role already holds the new name
            PersistenceError: If the role could not be saved
        """
        existing = self._get_existing(role_id)
        if self.policy.is_system_role(existing.name):
            raise ForbiddenError(f"Cannot update system role: {existing.name}")

        name = self._validated_name(raw_name)

        holder = self._store(self.repository.find_by_name, name)
        if holder is not None and holder.id != existing.id:
            raise DuplicateResourceError(f"Role with name '{name}' already exists")

        saved = self._store(self.repository.save, existing.with_name(name))
        logger.info("Updated role id=%s name=%s", saved.id, saved.name)

        self.dispatcher.submit("role updated", self.notifier.notify_role_updated, saved)
        return saved

    def delete(self, role_id: int) -> None:
        """
        Delete a role permanently.

        Raises:
            DomainValidationError: If the id is not positive
            NotFoundError: If the role doesn't exist or was removed concurrently
            ForbiddenError: If the role is a system role
            PersistenceError: If the delete failed
        """
        existing = self._get_existing(role_id)
        if self.policy.is_system_role(existing.name):
            raise ForbiddenError(f"Cannot delete system role: {existing.name}")

        if not self._store(self.repository.delete_by_id, role_id):
            raise NotFoundError(f"Role with id {role_id} could not be deleted")
        logger.info("Deleted role id=%s name=%s", role_id, existing.name)

        self.dispatcher.submit("role deleted", self.notifier.notify_role_deleted, role_id)

    # ---- queries ----------------------------------------------------------

    def get_by_id(self, role_id: int) -> Role:
        return self._get_existing(role_id)

    def get_by_name(self, raw_name: str) -> Role:
        name = self._normalized_lookup(raw_name, "Role name")
        role = self._store(self.repository.find_by_name, name)
        if role is None:
            raise NotFoundError(f"Role with name '{name}' not found")
        return role

    def exists(self, raw_name: str) -> bool:
        name = self._normalized_lookup(raw_name, "Role name")
        return self._store(self.repository.exists_by_name, name)

    def list_roles(self) -> list[Role]:
        return list(self._store(self.repository.find_all))

    def search_by_name(self, pattern: str) -> list[Role]:
        """Case-insensitive substring search. No match gives an empty list."""
        pattern = self._normalized_lookup(pattern, "Search pattern")
        return list(self._store(self.repository.find_by_name_containing, pattern))

    def count(self) -> int:
        return self._store(self.repository.count)

    # ---- helpers ----------------------------------------------------------

    def _validated_name(self, raw_name: str) -> str:
        name, violation = self.policy.normalize_and_validate(raw_name)
        if violation is not None:
            raise DomainValidationError(self.policy.describe(name, violation))
        return name

    def _normalized_lookup(self, raw: str, label: str) -> str:
        value = self.policy.normalize(raw) if isinstance(raw, str) else ""
        if not value:
            raise DomainValidationError(f"{label} cannot be blank")
        return value

    def _get_existing(self, role_id: int) -> Role:
        if isinstance(role_id, bool) or not isinstance(role_id, int) or role_id < 1:
            raise DomainValidationError("Role id must be a positive integer")
        role = self._store(self.repository.find_by_id, role_id)
        if role is None:
            raise NotFoundError(f"Role with id {role_id} not found")
        return role

    @staticmethod
    def _store(operation, *args):
        """Call a repository method; errors outside the domain taxonomy become PersistenceError."""
        try:
            return operation(*args)
        except DomainError:
            raise
        except Exception as e:
            raise PersistenceError("Role storage failed") from e
