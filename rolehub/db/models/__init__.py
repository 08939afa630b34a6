from rolehub.db.models.role import Role

__all__ = ["Role"]
