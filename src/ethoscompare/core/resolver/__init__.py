"""Profile resolution."""

from .profile_resolver import ProfileResolver, select_candidate

__all__ = ["ProfileResolver", "select_candidate"]
