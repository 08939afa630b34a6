from fastapi import Depends, Request
from sqlalchemy.orm import Session

from rolehub.core.config import settings
from rolehub.db import SessionLocal
from rolehub.domain.role_name import RoleNamePolicy
from rolehub.repositories.role import SqlAlchemyRoleRepository
from rolehub.services.role import RoleLifecycleService

role_name_policy = RoleNamePolicy.from_settings(settings)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_role_service(
    request: Request,
    db: Session = Depends(get_db),
) -> RoleLifecycleService:
    """Build the role service for one request; notifier and dispatcher live on app.state."""
    return RoleLifecycleService(
        repository=SqlAlchemyRoleRepository(db),
        notifier=request.app.state.notifier,
        dispatcher=request.app.state.notification_dispatcher,
        policy=role_name_policy,
    )
