from typing import List, Optional
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import Profile
from domain.enums import Role, InvitationStatus
from domain.schemas.profile_schemas import AthleteInviteRequest, AthleteUpdateRequest
from repositories import ProfileRepository
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError

logger = logging.getLogger("coachdesk.athletes")


class AthleteService:
    """Business logic for the coach's athlete roster"""

    @staticmethod
    def list_athletes(
        db: Session, coach_id: UUID, search: Optional[str] = None
    ) -> List[Profile]:
        athletes = ProfileRepository(db).list_athletes(coach_id, search)
        logger.info(
            f"athletes_listed coach_id={coach_id} count={len(athletes)} search={search!r}"
        )
        return athletes

    @staticmethod
    def get_athlete(db: Session, coach_id: UUID, athlete_id: UUID) -> Profile:
        athlete = ProfileRepository(db).get_athlete(coach_id, athlete_id)
        if not athlete:
            logger.warning(f"athlete_not_found coach_id={coach_id} athlete_id={athlete_id}")
            raise NotFoundError(f"Athlete not found: {athlete_id}")
        return athlete

    @staticmethod
    def invite_athlete(
        db: Session, coach_id: UUID, payload: AthleteInviteRequest
    ) -> Profile:
        """
        Add an athlete by email.

        The profile is created without a user_id and stays pending until the
        athlete signs up.

        Raises:
            ConflictError: if a profile already uses the email
        """
        repo = ProfileRepository(db)
        email = payload.email.strip().lower()
        if repo.get_by_email(email):
            raise ConflictError(f"Profile with email {email} already exists")

        profile = Profile(
            email=email,
            username=payload.username,
            first_name=payload.first_name,
            last_name=payload.last_name,
            gender=payload.gender,
            role=Role.ATHLETE,
            coach_id=coach_id,
            user_id=None,
            onboarding_complete=False,
            invitation_status=InvitationStatus.PENDING,
            invited_at=datetime.now(timezone.utc),
        )
        profile = repo.create_profile(profile)
        logger.info(f"athlete_invited coach_id={coach_id} athlete_id={profile.id}")
        return profile

    @staticmethod
    def update_athlete(
        db: Session, coach_id: UUID, athlete_id: UUID, payload: AthleteUpdateRequest
    ) -> Profile:
        """Partial update; fields not sent are left untouched"""
        athlete = AthleteService.get_athlete(db, coach_id, athlete_id)
        changes = payload.model_dump(exclude_unset=True)
        if "role" in changes and changes["role"] is None:
            raise ServiceValidationError("Role cannot be empty")

        for key, value in changes.items():
            setattr(athlete, key, value)

        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"athlete_update_failed athlete_id={athlete_id} error={str(e)}")
            raise ServiceValidationError("Database integrity error during athlete update")
        db.refresh(athlete)

        logger.info(
            f"athlete_updated athlete_id={athlete_id} fields={sorted(changes.keys())}"
        )
        return athlete

    @staticmethod
    def delete_athlete(db: Session, coach_id: UUID, athlete_id: UUID) -> bool:
        athlete = AthleteService.get_athlete(db, coach_id, athlete_id)
        db.delete(athlete)
        db.commit()
        logger.info(f"athlete_deleted coach_id={coach_id} athlete_id={athlete_id}")
        return True
