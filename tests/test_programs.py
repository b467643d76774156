"""
Tests for the program builder: template versioning, workouts and their
weekly arrangement, exercise groups and the grouped workout view.
"""

import pytest
import uuid

from services.program_service import ProgramService
from domain.enums import ExerciseGroupType, SetType
from domain.schemas.program_schemas import (
    ExerciseInstanceInput,
    ExerciseSetInput,
    ProgramTemplateCreate,
    ProgramTemplateUpdate,
    WorkoutSave,
)
from app.exceptions import NotFoundError, ServiceValidationError
from test_fixtures import make_coach, make_template, make_workout
from test_helpers import error_code


def exercise_ids(workout):
    return {e.exercise_name: e.id for e in workout.exercise_instances}


# =============================================================================
# TEMPLATES AND VERSIONS
# =============================================================================


def test_create_template_starts_family(db_session, coach):
    template = ProgramService.create_template(
        db_session, coach.id, ProgramTemplateCreate(name="  Strength Base ", weeks=6)
    )

    assert template.name == "Strength Base"
    assert template.version == 1
    assert template.parent_template_id is None
    assert template.is_latest_version is True


def test_new_versions_point_at_root(db_session, coach):
    root = make_template(db_session, coach)
    make_workout(db_session, root, "Upper A", exercises=("Bench Press", "Row"))

    v2 = ProgramService.create_new_version(db_session, coach.id, root.id)
    v3 = ProgramService.create_new_version(db_session, coach.id, v2.id)

    assert (v2.version, v3.version) == (2, 3)
    assert v2.parent_template_id == root.id
    assert v3.parent_template_id == root.id

    history = ProgramService.get_version_history(db_session, coach.id, v2.id)
    assert [t.version for t in history] == [1, 2, 3]
    assert [t.is_latest_version for t in history] == [False, False, True]

    listed = ProgramService.list_templates(db_session, coach.id)
    assert [t.id for t in listed] == [v3.id]


def test_new_version_copies_workouts_deeply(db_session, coach):
    root = make_template(db_session, coach)
    workout = make_workout(db_session, root, "Upper A", exercises=("Bench Press", "Row"))

    copy = ProgramService.create_new_version(db_session, coach.id, root.id)

    copied = copy.workouts[0]
    assert copied.id != workout.id
    assert [e.exercise_name for e in copied.exercise_instances] == ["Bench Press", "Row"]
    sets = copied.exercise_instances[0].sets_data
    assert [(s.set_order, s.type) for s in sets] == [(0, SetType.WARM_UP), (1, SetType.REGULAR)]

    # the original is untouched
    db_session.refresh(workout)
    assert len(workout.exercise_instances) == 2


def test_new_version_gets_fresh_group_ids(db_session, coach):
    root = make_template(db_session, coach)
    workout = make_workout(db_session, root, exercises=("Curl", "Pushdown", "Plank"))
    ids = exercise_ids(workout)
    ProgramService.group_exercises(
        db_session, coach.id, workout.id, [ids["Curl"], ids["Pushdown"]], ExerciseGroupType.SUPERSET
    )
    db_session.refresh(workout)
    original_group = workout.exercise_instances[0].group_id

    copy = ProgramService.create_new_version(db_session, coach.id, root.id)

    curl, pushdown, plank = copy.workouts[0].exercise_instances
    assert curl.group_id is not None
    assert curl.group_id == pushdown.group_id
    assert curl.group_id != original_group
    assert plank.group_id is None


def test_delete_root_promotes_next_version(db_session, coach):
    root = make_template(db_session, coach)
    v2 = ProgramService.create_new_version(db_session, coach.id, root.id)
    v3 = ProgramService.create_new_version(db_session, coach.id, v2.id)

    ProgramService.delete_template(db_session, coach.id, root.id)

    db_session.refresh(v2)
    db_session.refresh(v3)
    assert v2.parent_template_id is None
    assert v3.parent_template_id == v2.id
    history = ProgramService.get_version_history(db_session, coach.id, v3.id)
    assert [t.version for t in history] == [2, 3]


def test_delete_latest_version_hands_over_flag(db_session, coach):
    root = make_template(db_session, coach)
    v2 = ProgramService.create_new_version(db_session, coach.id, root.id)

    ProgramService.delete_template(db_session, coach.id, v2.id)

    db_session.refresh(root)
    assert root.is_latest_version is True
    assert [t.id for t in ProgramService.list_templates(db_session, coach.id)] == [root.id]


def test_update_template_rejects_null_name(db_session, coach):
    template = make_template(db_session, coach)

    updated = ProgramService.update_template(
        db_session, coach.id, template.id, ProgramTemplateUpdate(phase="Intensification", weeks=4)
    )
    assert (updated.phase, updated.weeks) == ("Intensification", 4)

    with pytest.raises(ServiceValidationError):
        ProgramService.update_template(
            db_session, coach.id, template.id, ProgramTemplateUpdate(name=None)
        )


def test_template_of_other_coach_is_hidden(db_session, coach):
    template = make_template(db_session, coach)
    other = make_coach(db_session, "marco")

    with pytest.raises(NotFoundError):
        ProgramService.get_template(db_session, other.id, template.id)
    with pytest.raises(NotFoundError):
        ProgramService.create_new_version(db_session, other.id, template.id)


# =============================================================================
# WORKOUTS
# =============================================================================


def test_create_workout_appends_order(db_session, coach):
    template = make_template(db_session, coach)
    make_workout(db_session, template, "Upper A", order=0)

    workout = ProgramService.create_workout(
        db_session,
        coach.id,
        template.id,
        WorkoutSave(
            name="Lower A",
            day_of_week=2,
            exercises=[ExerciseInstanceInput(exercise_name="Squat", sets="3", reps="5")],
        ),
    )

    assert workout.order_in_program == 1
    assert [e.exercise_name for e in workout.exercise_instances] == ["Squat"]


def test_save_workout_replaces_exercises(db_session, coach):
    template = make_template(db_session, coach)
    workout = make_workout(db_session, template, "Upper A", exercises=("Bench Press", "Row"))

    saved = ProgramService.update_workout(
        db_session,
        coach.id,
        workout.id,
        WorkoutSave(
            name="Upper A (heavy)",
            day_of_week=3,
            exercises=[
                ExerciseInstanceInput(
                    exercise_name="Incline Press",
                    sets_data=[
                        ExerciseSetInput(set_order=i, reps="5", weight="80") for i in range(3)
                    ],
                )
            ],
        ),
    )

    assert saved.name == "Upper A (heavy)"
    assert saved.day_of_week == 3
    assert saved.order_in_program == 0
    assert [e.exercise_name for e in saved.exercise_instances] == ["Incline Press"]
    assert len(saved.exercise_instances[0].sets_data) == 3


def test_save_drops_group_fields_without_group_id(db_session, coach):
    template = make_template(db_session, coach)
    workout = make_workout(db_session, template)

    saved = ProgramService.update_workout(
        db_session,
        coach.id,
        workout.id,
        WorkoutSave(
            name="Upper A",
            exercises=[
                ExerciseInstanceInput(
                    exercise_name="Dips", group_type=ExerciseGroupType.SUPERSET, group_order=3
                )
            ],
        ),
    )

    dips = saved.exercise_instances[0]
    assert dips.group_type == ExerciseGroupType.NONE
    assert dips.group_order == 0


def test_duplicate_workout_to_other_day(db_session, coach):
    template = make_template(db_session, coach)
    workout = make_workout(db_session, template, "Upper A", day_of_week=1, exercises=("A", "B"))
    ids = exercise_ids(workout)
    ProgramService.group_exercises(
        db_session, coach.id, workout.id, [ids["A"], ids["B"]], ExerciseGroupType.BI_SET
    )

    copy = ProgramService.duplicate_workout(db_session, coach.id, workout.id, target_day=5)

    assert copy.name == "Upper A (Copy)"
    assert copy.day_of_week == 5
    a, b = copy.exercise_instances
    assert a.group_id == b.group_id
    assert a.group_id not in {e.group_id for e in workout.exercise_instances}
    assert a.group_type == ExerciseGroupType.BI_SET


def test_duplicate_workout_rejects_bad_day(db_session, coach):
    template = make_template(db_session, coach)
    workout = make_workout(db_session, template)
    with pytest.raises(ServiceValidationError):
        ProgramService.duplicate_workout(db_session, coach.id, workout.id, target_day=0)


def test_arrangement_lists_every_day(db_session, coach):
    template = make_template(db_session, coach)
    make_workout(db_session, template, "Upper B", day_of_week=1, order=1)
    make_workout(db_session, template, "Upper A", day_of_week=1, order=0)
    make_workout(db_session, template, "Lower", day_of_week=4, order=2)
    make_workout(db_session, template, "Mobility", day_of_week=None, order=3)

    arrangement = ProgramService.get_arrangement(db_session, coach.id, template.id)

    assert [d.day_name for d in arrangement.days] == [
        "MONDAY",
        "TUESDAY",
        "WEDNESDAY",
        "THURSDAY",
        "FRIDAY",
        "SATURDAY",
        "SUNDAY",
    ]
    assert [w.name for w in arrangement.days[0].workouts] == ["Upper A", "Upper B"]
    assert [w.name for w in arrangement.days[3].workouts] == ["Lower"]
    assert arrangement.days[6].workouts == []
    assert [w.name for w in arrangement.unscheduled] == ["Mobility"]


def test_workout_of_other_coach_is_hidden(db_session, coach):
    workout = make_workout(db_session, make_template(db_session, coach))
    other = make_coach(db_session, "marco")
    with pytest.raises(NotFoundError):
        ProgramService.get_workout(db_session, other.id, workout.id)


# =============================================================================
# EXERCISE GROUPS
# =============================================================================


@pytest.fixture
def circuit(db_session, coach):
    template = make_template(db_session, coach)
    return make_workout(
        db_session,
        template,
        "Conditioning",
        exercises=("Row Erg", "Burpee", "Kettlebell Swing", "Box Jump", "Sled Push"),
    )


@pytest.mark.parametrize(
    "group_type, count",
    [
        (ExerciseGroupType.SUPERSET, 3),
        (ExerciseGroupType.BI_SET, 3),
        (ExerciseGroupType.TRI_SET, 2),
        (ExerciseGroupType.TRI_SET, 4),
        (ExerciseGroupType.GIANT_SET, 3),
    ],
)
def test_group_size_rules(db_session, coach, circuit, group_type, count):
    ids = [e.id for e in circuit.exercise_instances][:count]
    with pytest.raises(ServiceValidationError):
        ProgramService.group_exercises(db_session, coach.id, circuit.id, ids, group_type)


def test_giant_set_takes_four_or_more(db_session, coach, circuit):
    ids = [e.id for e in circuit.exercise_instances]

    members = ProgramService.group_exercises(
        db_session, coach.id, circuit.id, ids, ExerciseGroupType.GIANT_SET
    )

    assert len(members) == 5
    assert len({m.group_id for m in members}) == 1
    assert [m.group_order for m in members] == [0, 1, 2, 3, 4]


def test_group_rejects_exercise_from_other_workout(db_session, coach, circuit):
    other = make_workout(db_session, circuit.template, "Other", exercises=("Lunge",))
    stray = other.exercise_instances[0].id

    with pytest.raises(ServiceValidationError) as exc:
        ProgramService.group_exercises(
            db_session,
            coach.id,
            circuit.id,
            [circuit.exercise_instances[0].id, stray],
            ExerciseGroupType.SUPERSET,
        )
    assert exc.value.details == {"exercise_ids": [str(stray)]}


def test_grouped_view_collapses_groups(db_session, coach, circuit):
    ids = exercise_ids(circuit)
    # group order follows the request, not the workout order
    ProgramService.group_exercises(
        db_session,
        coach.id,
        circuit.id,
        [ids["Box Jump"], ids["Burpee"]],
        ExerciseGroupType.SUPERSET,
    )

    view = ProgramService.get_grouped_workout(db_session, coach.id, circuit.id)

    shape = [
        (b.group_type, [e.exercise_name for e in b.exercises]) for b in view.blocks
    ]
    assert shape == [
        (ExerciseGroupType.NONE, ["Row Erg"]),
        (ExerciseGroupType.SUPERSET, ["Box Jump", "Burpee"]),
        (ExerciseGroupType.NONE, ["Kettlebell Swing"]),
        (ExerciseGroupType.NONE, ["Sled Push"]),
    ]


def test_single_member_group_shows_as_plain(db_session, coach):
    workout = make_workout(db_session, make_template(db_session, coach))
    lonely_group = uuid.uuid4()
    ProgramService.update_workout(
        db_session,
        coach.id,
        workout.id,
        WorkoutSave(
            name="Upper A",
            exercises=[
                ExerciseInstanceInput(
                    exercise_name="Pull-up",
                    order_in_workout=0,
                    group_id=lonely_group,
                    group_type=ExerciseGroupType.SUPERSET,
                ),
                ExerciseInstanceInput(exercise_name="Face Pull", order_in_workout=1),
            ],
        ),
    )

    view = ProgramService.get_grouped_workout(db_session, coach.id, workout.id)

    assert [b.group_type for b in view.blocks] == [ExerciseGroupType.NONE] * 2
    assert view.blocks[0].group_id is None


def test_ungroup(db_session, coach, circuit):
    ids = [e.id for e in circuit.exercise_instances][:3]
    members = ProgramService.group_exercises(
        db_session, coach.id, circuit.id, ids, ExerciseGroupType.TRI_SET
    )
    group_id = members[0].group_id

    released = ProgramService.ungroup_exercises(db_session, coach.id, circuit.id, group_id)

    assert len(released) == 3
    assert all(e.group_id is None and e.group_type == ExerciseGroupType.NONE for e in released)
    with pytest.raises(NotFoundError):
        ProgramService.ungroup_exercises(db_session, coach.id, circuit.id, group_id)


# =============================================================================
# HTTP API
# =============================================================================


def test_api_program_builder_flow(client, headers):
    r = client.post("/programs", json={"name": "Powerbuilding", "weeks": 12}, headers=headers)
    assert r.status_code == 201
    template_id = r.json()["id"]

    r = client.post(
        f"/programs/{template_id}/workouts",
        json={
            "name": "Day 1",
            "day_of_week": 1,
            "exercises": [
                {
                    "exercise_name": "Deadlift",
                    "sets_data": [{"set_order": 0, "type": "warm_up", "reps": "5", "weight": "60"}],
                }
            ],
        },
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["exercise_instances"][0]["sets_data"][0]["type"] == "warm_up"

    r = client.post(f"/programs/{template_id}/versions", headers=headers)
    assert r.status_code == 201
    v2 = r.json()
    assert v2["version"] == 2
    assert v2["parent_template_id"] == template_id
    assert v2["workouts"][0]["name"] == "Day 1"

    r = client.get("/programs", headers=headers)
    assert [t["id"] for t in r.json()] == [v2["id"]]

    r = client.get(f"/programs/{v2['id']}/arrangement", headers=headers)
    assert len(r.json()["days"]) == 7
    assert r.json()["days"][0]["workouts"][0]["name"] == "Day 1"


def test_api_rejects_invalid_program_input(client, headers, db_session, coach):
    assert client.post("/programs", json={"name": "X", "weeks": 0}, headers=headers).status_code == 422

    workout = make_workout(db_session, make_template(db_session, coach), exercises=("A", "B"))
    r = client.post(f"/workouts/{workout.id}/duplicate", json={"target_day": 8}, headers=headers)
    assert r.status_code == 422

    ids = [str(e.id) for e in workout.exercise_instances]
    r = client.post(
        f"/workouts/{workout.id}/groups",
        json={"exercise_ids": ids, "group_type": "none"},
        headers=headers,
    )
    assert r.status_code == 422


def test_api_grouping(client, headers, db_session, coach):
    workout = make_workout(db_session, make_template(db_session, coach), exercises=("A", "B", "C"))
    ids = [str(e.id) for e in workout.exercise_instances]

    r = client.post(
        f"/workouts/{workout.id}/groups",
        json={"exercise_ids": ids[:2], "group_type": "tri_set"},
        headers=headers,
    )
    assert r.status_code == 400
    assert error_code(r) == "SERVICE_VALIDATION_ERROR"

    r = client.post(
        f"/workouts/{workout.id}/groups",
        json={"exercise_ids": ids, "group_type": "tri_set"},
        headers=headers,
    )
    assert r.status_code == 201
    group_id = r.json()[0]["group_id"]

    r = client.get(f"/workouts/{workout.id}/grouped", headers=headers)
    assert len(r.json()["blocks"]) == 1
    assert r.json()["blocks"][0]["group_type"] == "tri_set"

    r = client.delete(f"/workouts/{workout.id}/groups/{group_id}", headers=headers)
    assert r.status_code == 200
    assert all(e["group_id"] is None for e in r.json())
