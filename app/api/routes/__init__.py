from . import auth, department, employee

__all__ = ["auth", "department", "employee"]
