from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rolehub.core.config import Settings


class NameViolation(str, Enum):
    """Reason a raw role name was rejected."""

    BLANK = "blank"
    TOO_LONG = "too_long"
    RESERVED_NAME = "reserved_name"


@dataclass(frozen=True, slots=True)
class RoleNamePolicy:
    """Defines what a valid role name is and which names are system roles.

    Semantics (intentionally centralized):
    - Normalizing trims the name, collapses internal whitespace runs into a
      single space and upper-cases it.
    - A name is valid if its normalized form is non-empty, at most
      ``max_length`` characters, not one of ``reserved_names`` and not
      starting with one of ``reserved_prefixes``.
    - A system role is one whose name is reserved, protected or starts with
      a reserved prefix. Protected names (e.g. ``ADMIN``) can be created but
      never changed or removed.

    Matching is exact or by prefix, never by substring: ``ECOSYSTEM_OPS`` is
    an ordinary role.
    """

    max_length: int = 100
    reserved_names: frozenset[str] = frozenset({"SYSTEM", "ROOT"})
    protected_names: frozenset[str] = frozenset({"ADMIN"})
    reserved_prefixes: tuple[str, ...] = ("SYSTEM_", "SYS_", "INTERNAL_")

    @classmethod
    def from_settings(cls, settings: Settings) -> RoleNamePolicy:
        return cls(
            max_length=settings.role_name_max_length,
            reserved_names=frozenset(
                name.upper() for name in settings.split_csv(settings.reserved_role_names)
            ),
            protected_names=frozenset(
                name.upper() for name in settings.split_csv(settings.protected_role_names)
            ),
            reserved_prefixes=tuple(
                prefix.upper()
                for prefix in settings.split_csv(settings.reserved_role_prefixes)
            ),
        )

    @staticmethod
    def normalize(raw: str) -> str:
        return " ".join(raw.split()).upper()

    def normalize_and_validate(self, raw: str | None) -> tuple[str, NameViolation | None]:
        """
        Normalize a raw role name and check it against the policy.

        Returns: (normalized_name, violation). ``violation`` is None when the
        name is acceptable.
        """
        if not isinstance(raw, str):
            return "", NameViolation.BLANK

        normalized = self.normalize(raw)
        if not normalized:
            return normalized, NameViolation.BLANK

        if len(normalized) > self.max_length:
            return normalized, NameViolation.TOO_LONG

        if self.is_reserved(normalized):
            return normalized, NameViolation.RESERVED_NAME

        return normalized, None

    def describe(self, normalized: str, violation: NameViolation) -> str:
        """Human-readable message for a violation."""
        if violation is NameViolation.BLANK:
            return "Role name cannot be blank"
        if violation is NameViolation.TOO_LONG:
            return f"Role name cannot exceed {self.max_length} characters"
        return f"Role name '{normalized}' is reserved"

    def is_reserved(self, normalized: str) -> bool:
        return normalized in self.reserved_names or normalized.startswith(
            self.reserved_prefixes
        )

    def is_system_role(self, normalized: str) -> bool:
        return normalized in self.protected_names or self.is_reserved(normalized)
