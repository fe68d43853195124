from app.models.user import ROLES, UserProfile

__all__ = ["ROLES", "UserProfile"]
