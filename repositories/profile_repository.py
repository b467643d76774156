"""
Profile Repository - Data access layer for coaches and athletes
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository, LIKE_ESCAPE, contains_pattern
from domain.models import Profile
from domain.enums import Role
from app.exceptions import ConflictError


class ProfileRepository(BaseRepository[Profile]):
    """Repository for profile data access"""

    def __init__(self, db: Session):
        super().__init__(db, Profile)

    def get_by_email(self, email: str) -> Optional[Profile]:
        """Get profile by (lower-cased) email"""
        return (
            self.db.query(Profile)
            .filter(Profile.email == email.strip().lower())
            .first()
        )

    def get_coach(self, coach_id: UUID) -> Optional[Profile]:
        return (
            self.db.query(Profile)
            .filter(Profile.id == coach_id, Profile.role == Role.COACH)
            .first()
        )

    def list_athletes(self, coach_id: UUID, search: Optional[str] = None) -> List[Profile]:
        """Athletes of a coach, newest first, optionally filtered by text"""
        query = self.db.query(Profile).filter(
            Profile.coach_id == coach_id, Profile.role != Role.COACH
        )
        if search and search.strip():
            pattern = contains_pattern(search.strip())
            query = query.filter(
                or_(
                    Profile.email.ilike(pattern, escape=LIKE_ESCAPE),
                    Profile.username.ilike(pattern, escape=LIKE_ESCAPE),
                    Profile.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                    Profile.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return query.order_by(Profile.created_at.desc(), Profile.email).all()

    def get_athlete(self, coach_id: UUID, athlete_id: UUID) -> Optional[Profile]:
        return (
            self.db.query(Profile)
            .filter(
                Profile.id == athlete_id,
                Profile.coach_id == coach_id,
                Profile.role != Role.COACH,
            )
            .first()
        )

    def create_profile(self, profile: Profile) -> Profile:
        """Insert a profile; a taken email is reported as a conflict"""
        try:
            self.db.add(profile)
            self.db.commit()
            self.db.refresh(profile)
            return profile
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Profile with email {profile.email} already exists")
