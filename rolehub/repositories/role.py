import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rolehub.db.models.role import Role as RoleModel
from rolehub.domain.role import Role
from rolehub.errors import DuplicateResourceError, NotFoundError, PersistenceError

logger = logging.getLogger(__name__)


def _to_domain(model: RoleModel) -> Role:
    return Role(id=model.id, name=model.name, created_at=model.created_at)


class SqlAlchemyRoleRepository:
    """Role persistence over a SQLAlchemy session. Pure data access - no business logic.

    Every database failure leaves this class as a domain error: a violated
    unique name as ``DuplicateResourceError``, anything else as
    ``PersistenceError``.
    """

    def __init__(self, db: Session):
        self.db = db

    def save(self, role: Role) -> Role:
        """
        Insert a new role or rename an existing one.

        Raises:
            DuplicateResourceError: If the unique constraint on name is violated
            NotFoundError: If the role to update was removed concurrently
            PersistenceError: On any other database failure
        """
        if not role.is_persisted:
            db_role = RoleModel(name=role.name, created_at=role.created_at)
            self.db.add(db_role)
        else:
            db_role = self._get_model(role.id)
            if db_role is None:
                raise NotFoundError(f"Role with id {role.id} not found")
            db_role.name = role.name

        self._commit(role.name)
        self._query(lambda: self.db.refresh(db_role))
        return _to_domain(db_role)

    def find_by_id(self, role_id: int) -> Role | None:
        db_role = self._get_model(role_id)
        return _to_domain(db_role) if db_role else None

    def find_by_name(self, name: str) -> Role | None:
        db_role = self._query(
            lambda: self.db.query(RoleModel).filter(RoleModel.name == name).first()
        )
        return _to_domain(db_role) if db_role else None

    def find_all(self) -> list[Role]:
        roles = self._query(lambda: self.db.query(RoleModel).order_by(RoleModel.id).all())
        return [_to_domain(r) for r in roles]

    def find_by_name_containing(self, pattern: str) -> list[Role]:
        """Case-insensitive substring match; LIKE wildcards in pattern are matched literally."""
        roles = self._query(
            lambda: self.db.query(RoleModel)
            .filter(func.upper(RoleModel.name).contains(pattern.upper(), autoescape=True))
            .order_by(RoleModel.id)
            .all()
        )
        return [_to_domain(r) for r in roles]

    def exists_by_name(self, name: str) -> bool:
        return self._query(
            lambda: self.db.query(RoleModel.id).filter(RoleModel.name == name).first()
            is not None
        )

    def delete_by_id(self, role_id: int) -> bool:
        deleted = self._query(
            lambda: self.db.query(RoleModel).filter(RoleModel.id == role_id).delete()
        )
        self._commit()
        return deleted > 0

    def count(self) -> int:
        return self._query(lambda: self.db.query(RoleModel).count())

    def _get_model(self, role_id: int) -> RoleModel | None:
        return self._query(
            lambda: self.db.query(RoleModel).filter(RoleModel.id == role_id).first()
        )

    def _query(self, run):
        try:
            return run()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("Failed to access role storage") from e

    def _commit(self, name: str | None = None) -> None:
        """Commit the session. ``name`` is the role name being written, if any."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if name is None:
                raise PersistenceError("Role changes violate a database constraint") from e
            logger.warning("Unique constraint violated for role name %s: %s", name, e.orig)
            raise DuplicateResourceError(f"Role with name '{name}' already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("Failed to persist role changes") from e
