from sqlalchemy import Column, DateTime, Integer, String

from rolehub.db.base import Base

ROLE_NAME_COLUMN_LENGTH = 100


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(ROLE_NAME_COLUMN_LENGTH), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
