"""
Program domain mappers.
Builds the weekly arrangement and the grouped exercise view of workouts.
"""

from collections import OrderedDict
from typing import Iterable, List
from domain.enums import DAYS_OF_WEEK, ExerciseGroupType
from domain.models import ExerciseInstance, Workout
from domain.schemas.program_schemas import (
    DaySchedule,
    ExerciseInstanceResponse,
    GroupedWorkoutResponse,
    ProgramArrangementResponse,
    WorkoutBlock,
    WorkoutSummaryResponse,
)


def _program_order(workout: Workout):
    order = workout.order_in_program
    return (order is None, order or 0, workout.name)


class ProgramMapper:
    """Mapper for program builder views."""

    @staticmethod
    def to_arrangement(template_id, workouts: Iterable[Workout]) -> ProgramArrangementResponse:
        """
        Group workouts by day of week.

        Every day 1..7 is present, possibly empty. Workouts without a day go
        to `unscheduled`. Each list is ordered by order_in_program.
        """
        by_day = {day: [] for day in DAYS_OF_WEEK}
        unscheduled: List[Workout] = []
        for workout in workouts:
            if workout.day_of_week in by_day:
                by_day[workout.day_of_week].append(workout)
            else:
                unscheduled.append(workout)

        return ProgramArrangementResponse(
            program_template_id=template_id,
            days=[
                DaySchedule(
                    day_of_week=day,
                    day_name=DAYS_OF_WEEK[day],
                    workouts=[
                        WorkoutSummaryResponse.model_validate(w)
                        for w in sorted(by_day[day], key=_program_order)
                    ],
                )
                for day in sorted(by_day)
            ],
            unscheduled=[
                WorkoutSummaryResponse.model_validate(w)
                for w in sorted(unscheduled, key=_program_order)
            ],
        )

    @staticmethod
    def to_grouped(workout: Workout) -> GroupedWorkoutResponse:
        """
        Exercises in order_in_workout order. Members of a group collapse into
        one block at the position of the group's first member and are ordered
        by group_order. A group with a single member is shown as a plain exercise.
        """
        exercises: List[ExerciseInstance] = sorted(
            workout.exercise_instances, key=lambda e: e.order_in_workout or 0
        )
        groups = OrderedDict()
        for exercise in exercises:
            key = exercise.group_id if exercise.group_id else exercise.id
            groups.setdefault(key, []).append(exercise)

        blocks = []
        for members in groups.values():
            if len(members) > 1 and members[0].group_id is not None:
                members = sorted(members, key=lambda e: e.group_order or 0)
                blocks.append(
                    WorkoutBlock(
                        group_id=members[0].group_id,
                        group_type=members[0].group_type,
                        exercises=[
                            ExerciseInstanceResponse.model_validate(m) for m in members
                        ],
                    )
                )
            else:
                blocks.append(
                    WorkoutBlock(
                        group_type=ExerciseGroupType.NONE,
                        exercises=[ExerciseInstanceResponse.model_validate(members[0])],
                    )
                )
        return GroupedWorkoutResponse(workout_id=workout.id, blocks=blocks)
