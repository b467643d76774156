from typing import Dict, List, Optional
from uuid import UUID, uuid4
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import ExerciseInstance, ExerciseSet, ProgramTemplate, Workout
from domain.enums import ExerciseGroupType
from domain.schemas.program_schemas import (
    ExerciseInstanceInput,
    GroupedWorkoutResponse,
    ProgramArrangementResponse,
    ProgramTemplateCreate,
    ProgramTemplateUpdate,
    WorkoutSave,
)
from domain.mappers import ProgramMapper
from repositories import (
    ExerciseInstanceRepository,
    ProgramTemplateRepository,
    WorkoutRepository,
)
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("coachdesk.programs")

# group type -> (min members, max members); None means unbounded
GROUP_SIZES = {
    ExerciseGroupType.SUPERSET: (2, 2),
    ExerciseGroupType.BI_SET: (2, 2),
    ExerciseGroupType.TRI_SET: (3, 3),
    ExerciseGroupType.GIANT_SET: (4, None),
}


def _commit(db: Session, action: str):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"{action}_failed error={str(e)}")
        raise ServiceValidationError(f"Database integrity error during {action}")


def _clone_sets(exercise: ExerciseInstance) -> List[ExerciseSet]:
    return [
        ExerciseSet(
            set_order=s.set_order,
            type=s.type,
            reps=s.reps,
            weight=s.weight,
            rest_seconds=s.rest_seconds,
            duration=s.duration,
        )
        for s in exercise.sets_data
    ]


def _clone_exercises(
    exercises: List[ExerciseInstance], group_map: Dict[UUID, UUID]
) -> List[ExerciseInstance]:
    """Copy exercises with their sets; group ids are replaced through `group_map`"""
    copies = []
    for e in exercises:
        group_id = None
        if e.group_id is not None:
            group_id = group_map.setdefault(e.group_id, uuid4())
        copies.append(
            ExerciseInstance(
                exercise_db_id=e.exercise_db_id,
                exercise_name=e.exercise_name,
                sets=e.sets,
                reps=e.reps,
                rest_period_seconds=e.rest_period_seconds,
                tempo=e.tempo,
                notes=e.notes,
                order_in_workout=e.order_in_workout,
                set_type=e.set_type,
                each_side=e.each_side,
                group_id=group_id,
                group_type=e.group_type,
                group_order=e.group_order,
                sets_data=_clone_sets(e),
            )
        )
    return copies


def _build_exercises(exercises: List[ExerciseInstanceInput]) -> List[ExerciseInstance]:
    built = []
    for e in exercises:
        data = e.model_dump(exclude={"sets_data"})
        if data["group_id"] is None:
            data["group_type"] = ExerciseGroupType.NONE
            data["group_order"] = 0
        built.append(
            ExerciseInstance(
                **data,
                sets_data=[ExerciseSet(**s.model_dump()) for s in e.sets_data],
            )
        )
    return built


class ProgramService:
    """Business logic for the program builder"""

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    @staticmethod
    def list_templates(
        db: Session, coach_id: UUID, search: Optional[str] = None
    ) -> List[ProgramTemplate]:
        return ProgramTemplateRepository(db).list_latest_by_coach(coach_id, search)

    @staticmethod
    def get_template(db: Session, coach_id: UUID, template_id: UUID) -> ProgramTemplate:
        template = ProgramTemplateRepository(db).get_for_coach(template_id, coach_id)
        if not template:
            logger.warning(f"template_not_found template_id={template_id} coach_id={coach_id}")
            raise NotFoundError(f"Program template not found: {template_id}")
        return template

    @staticmethod
    def create_template(
        db: Session, coach_id: UUID, payload: ProgramTemplateCreate
    ) -> ProgramTemplate:
        if payload.weeks <= 0:
            raise ServiceValidationError("Weeks must be greater than 0")
        template = ProgramTemplate(
            coach_id=coach_id,
            **payload.model_dump(),
            version=1,
            parent_template_id=None,
            is_latest_version=True,
        )
        db.add(template)
        _commit(db, "template_create")
        db.refresh(template)
        logger.info(f"template_created template_id={template.id} coach_id={coach_id}")
        return template

    @staticmethod
    def update_template(
        db: Session, coach_id: UUID, template_id: UUID, payload: ProgramTemplateUpdate
    ) -> ProgramTemplate:
        template = ProgramService.get_template(db, coach_id, template_id)
        changes = payload.model_dump(exclude_unset=True)
        for key in ("name", "weeks", "is_public"):
            if key in changes and changes[key] is None:
                raise ServiceValidationError(f"{key} cannot be empty")
        for key, value in changes.items():
            setattr(template, key, value)
        _commit(db, "template_update")
        db.refresh(template)
        logger.info(f"template_updated template_id={template_id}")
        return template

    @staticmethod
    def delete_template(db: Session, coach_id: UUID, template_id: UUID) -> bool:
        """
        Delete a template with its workouts, exercises and sets.

        The rest of its version family stays consistent: when the root goes
        the lowest remaining version becomes the new root, and when the latest
        version goes the highest remaining one takes over.
        """
        repo = ProgramTemplateRepository(db)
        template = ProgramService.get_template(db, coach_id, template_id)
        remaining = [t for t in repo.get_family(template.family_root_id) if t.id != template.id]

        if remaining:
            if template.parent_template_id is None:
                new_root = remaining[0]
                new_root.parent_template_id = None
                for t in remaining[1:]:
                    t.parent_template_id = new_root.id
            if template.is_latest_version:
                remaining[-1].is_latest_version = True

        db.delete(template)
        _commit(db, "template_delete")
        logger.info(
            f"template_deleted template_id={template_id} family_remaining={len(remaining)}"
        )
        return True

    # ------------------------------------------------------------------
    # Versioning
    # ------------------------------------------------------------------

    @staticmethod
    def create_new_version(db: Session, coach_id: UUID, template_id: UUID) -> ProgramTemplate:
        """
        Copy a template with all workouts, exercises and sets into a new version.

        The copy points at the family root, gets the family's highest version
        + 1 and becomes the only latest version of the family.
        """
        repo = ProgramTemplateRepository(db)
        source = ProgramService.get_template(db, coach_id, template_id)
        root_id = source.family_root_id
        family = repo.get_family(root_id)
        next_version = repo.max_version(root_id) + 1

        for t in family:
            t.is_latest_version = False

        group_map: Dict[UUID, UUID] = {}
        copy = ProgramTemplate(
            coach_id=source.coach_id,
            name=source.name,
            phase=source.phase,
            weeks=source.weeks,
            description=source.description,
            fitness_level=source.fitness_level,
            is_public=source.is_public,
            version=next_version,
            parent_template_id=root_id,
            is_latest_version=True,
            workouts=[
                Workout(
                    name=w.name,
                    day_of_week=w.day_of_week,
                    week_number=w.week_number,
                    order_in_program=w.order_in_program,
                    description=w.description,
                    exercise_instances=_clone_exercises(w.exercise_instances, group_map),
                )
                for w in source.workouts
            ],
        )
        db.add(copy)
        _commit(db, "template_version_create")
        db.refresh(copy)
        logger.info(
            f"template_version_created source_id={template_id} new_id={copy.id} "
            f"root_id={root_id} version={next_version} workouts={len(copy.workouts)}"
        )
        return copy

    @staticmethod
    def get_version_history(
        db: Session, coach_id: UUID, template_id: UUID
    ) -> List[ProgramTemplate]:
        template = ProgramService.get_template(db, coach_id, template_id)
        return ProgramTemplateRepository(db).get_family(template.family_root_id)

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    @staticmethod
    def get_workout(db: Session, coach_id: UUID, workout_id: UUID) -> Workout:
        workout = WorkoutRepository(db).get_by_id(workout_id)
        if not workout or workout.template is None or workout.template.coach_id != coach_id:
            raise NotFoundError(f"Workout not found: {workout_id}")
        return workout

    @staticmethod
    def create_workout(
        db: Session, coach_id: UUID, template_id: UUID, payload: WorkoutSave
    ) -> Workout:
        ProgramService.get_template(db, coach_id, template_id)
        data = payload.model_dump(exclude={"exercises"})
        if data["order_in_program"] is None:
            data["order_in_program"] = WorkoutRepository(db).next_order(template_id)

        workout = Workout(
            program_template_id=template_id,
            **data,
            exercise_instances=_build_exercises(payload.exercises),
        )
        db.add(workout)
        _commit(db, "workout_create")
        db.refresh(workout)
        logger.info(
            f"workout_created workout_id={workout.id} template_id={template_id} "
            f"exercises={len(payload.exercises)}"
        )
        return workout

    @staticmethod
    def update_workout(
        db: Session, coach_id: UUID, workout_id: UUID, payload: WorkoutSave
    ) -> Workout:
        """Save a workout; previous exercises and sets are replaced by the payload's"""
        workout = ProgramService.get_workout(db, coach_id, workout_id)
        workout.name = payload.name
        workout.day_of_week = payload.day_of_week
        workout.week_number = payload.week_number
        workout.description = payload.description
        if payload.order_in_program is not None:
            workout.order_in_program = payload.order_in_program

        workout.exercise_instances.clear()
        db.flush()
        workout.exercise_instances.extend(_build_exercises(payload.exercises))
        _commit(db, "workout_update")
        db.refresh(workout)
        logger.info(
            f"workout_updated workout_id={workout_id} exercises={len(payload.exercises)}"
        )
        return workout

    @staticmethod
    def delete_workout(db: Session, coach_id: UUID, workout_id: UUID) -> bool:
        workout = ProgramService.get_workout(db, coach_id, workout_id)
        db.delete(workout)
        db.commit()
        logger.info(f"workout_deleted workout_id={workout_id}")
        return True

    @staticmethod
    def duplicate_workout(
        db: Session, coach_id: UUID, workout_id: UUID, target_day: int
    ) -> Workout:
        """Copy a workout onto another day; the copy gets its own group ids"""
        if target_day is None or not 1 <= target_day <= 7:
            raise ServiceValidationError("Target day must be between 1 and 7")
        source = ProgramService.get_workout(db, coach_id, workout_id)
        copy = Workout(
            program_template_id=source.program_template_id,
            name=f"{source.name} (Copy)",
            day_of_week=target_day,
            week_number=source.week_number,
            order_in_program=source.order_in_program,
            description=source.description,
            exercise_instances=_clone_exercises(source.exercise_instances, {}),
        )
        db.add(copy)
        _commit(db, "workout_duplicate")
        db.refresh(copy)
        logger.info(
            f"workout_duplicated source_id={workout_id} new_id={copy.id} day={target_day}"
        )
        return copy

    @staticmethod
    def get_arrangement(
        db: Session, coach_id: UUID, template_id: UUID
    ) -> ProgramArrangementResponse:
        ProgramService.get_template(db, coach_id, template_id)
        workouts = WorkoutRepository(db).list_by_template(template_id)
        return ProgramMapper.to_arrangement(template_id, workouts)

    # ------------------------------------------------------------------
    # Exercise grouping
    # ------------------------------------------------------------------

    @staticmethod
    def group_exercises(
        db: Session,
        coach_id: UUID,
        workout_id: UUID,
        exercise_ids: List[UUID],
        group_type: ExerciseGroupType,
    ) -> List[ExerciseInstance]:
        """
        Put exercises of one workout under a new group id.

        group_order follows the order of `exercise_ids`.

        Raises:
            ServiceValidationError: wrong member count for the group type, or
                exercises outside the workout
        """
        ProgramService.get_workout(db, coach_id, workout_id)
        if group_type not in GROUP_SIZES:
            raise ServiceValidationError(f"Cannot group exercises as {group_type}")
        if len(set(exercise_ids)) != len(exercise_ids):
            raise ServiceValidationError("Exercise ids must be unique")

        low, high = GROUP_SIZES[group_type]
        count = len(exercise_ids)
        if count < low or (high is not None and count > high):
            expected = f"{low}" if low == high else f"at least {low}"
            raise ServiceValidationError(
                f"{group_type.value} needs {expected} exercises, got {count}"
            )

        found = {
            e.id: e
            for e in ExerciseInstanceRepository(db).get_many_in_workout(workout_id, exercise_ids)
        }
        missing = [str(i) for i in exercise_ids if i not in found]
        if missing:
            raise ServiceValidationError(
                "Exercises do not belong to this workout", details={"exercise_ids": missing}
            )

        group_id = uuid4()
        for order, eid in enumerate(exercise_ids):
            exercise = found[eid]
            exercise.group_id = group_id
            exercise.group_type = group_type
            exercise.group_order = order
        _commit(db, "exercise_group")
        logger.info(
            f"exercises_grouped workout_id={workout_id} group_id={group_id} "
            f"type={group_type.value} count={count}"
        )
        return ExerciseInstanceRepository(db).list_by_group(workout_id, group_id)

    @staticmethod
    def ungroup_exercises(
        db: Session, coach_id: UUID, workout_id: UUID, group_id: UUID
    ) -> List[ExerciseInstance]:
        ProgramService.get_workout(db, coach_id, workout_id)
        members = ExerciseInstanceRepository(db).list_by_group(workout_id, group_id)
        if not members:
            raise NotFoundError(f"Exercise group not found: {group_id}")
        for exercise in members:
            exercise.group_id = None
            exercise.group_type = ExerciseGroupType.NONE
            exercise.group_order = 0
        _commit(db, "exercise_ungroup")
        logger.info(f"exercises_ungrouped workout_id={workout_id} group_id={group_id}")
        return members

    @staticmethod
    def get_grouped_workout(
        db: Session, coach_id: UUID, workout_id: UUID
    ) -> GroupedWorkoutResponse:
        workout = ProgramService.get_workout(db, coach_id, workout_id)
        return ProgramMapper.to_grouped(workout)
