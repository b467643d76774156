"""
API dependencies for dependency injection
"""

from typing import Optional
from uuid import UUID
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from domain.models import get_db_session, Profile
from repositories import ProfileRepository
from app.exceptions import UnauthorizedError


def get_current_coach(
    x_coach_id: Optional[str] = Header(default=None, alias="X-Coach-Id"),
    db: Session = Depends(get_db_session),
) -> Profile:
    """
    Resolve the calling coach from the X-Coach-Id header.

    Usage:
        @router.get("/example")
        def example(coach: Profile = Depends(get_current_coach)):
            ...

    Raises:
        UnauthorizedError: header missing, malformed, or not a coach profile
    """
    if not x_coach_id:
        raise UnauthorizedError("Missing X-Coach-Id header")
    try:
        coach_id = UUID(x_coach_id)
    except ValueError:
        raise UnauthorizedError("Invalid X-Coach-Id header")

    coach = ProfileRepository(db).get_coach(coach_id)
    if not coach:
        raise UnauthorizedError("Unknown coach")
    return coach
