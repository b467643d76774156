"""
Tests for the BMR / TDEE calculator and nutrition plans created from its
targets.
"""

import pytest

from domain.enums import Gender, NutritionGoal
from domain.nutrition_calculator import calculate_bmr, calculate_energy_targets
from domain.schemas.nutrition_schemas import EnergyTargetsRequest, PlanFromEnergyTargetsRequest
from services.energy_target_service import EnergyTargetService
from app.exceptions import NotFoundError, ServiceValidationError
from test_fixtures import make_athlete, make_coach
from test_helpers import error_code


# =============================================================================
# CALCULATOR
# =============================================================================


def test_bmr_mifflin_st_jeor():
    assert calculate_bmr(80, 180, 30, Gender.MALE) == pytest.approx(1780)
    assert calculate_bmr(60, 165, 25, Gender.FEMALE) == pytest.approx(1345.25)


def test_cutting_targets():
    targets = calculate_energy_targets(80, 180, 30, Gender.MALE, 1.55, NutritionGoal.CUTTING)

    assert targets.tdee == pytest.approx(2759)
    assert targets.calorie_target == pytest.approx(2207.2)
    assert targets.protein_grams == pytest.approx(192)
    assert targets.fat_grams == pytest.approx(32)
    # 2207.2 - 192 * 4 - 32 * 9 = 1151.2 kcal left for carbs
    assert targets.carb_grams == pytest.approx(287.8)
    assert targets.carbs_per_kg == pytest.approx(3.5975)


@pytest.mark.parametrize(
    "goal, calories, protein, fat, carbs",
    [
        (NutritionGoal.MAINTENANCE, 2136, 144, 56, 264),
        (NutritionGoal.BULKING, 2349.6, 160, 80, 247.4),
    ],
)
def test_goal_adjusts_calories_and_macros(goal, calories, protein, fat, carbs):
    targets = calculate_energy_targets(80, 180, 30, Gender.MALE, 1.2, goal)

    assert targets.calorie_target == pytest.approx(calories)
    assert targets.protein_grams == pytest.approx(protein)
    assert targets.fat_grams == pytest.approx(fat)
    assert targets.carb_grams == pytest.approx(carbs)


def test_carbs_never_negative():
    # 360 g protein and 60 g fat already exceed the 1453 kcal target
    targets = calculate_energy_targets(150, 100, 90, Gender.FEMALE, 1.2, NutritionGoal.CUTTING)

    assert targets.calorie_target == pytest.approx(1453.44)
    assert targets.carb_grams == 0
    assert targets.carbs_per_kg == 0


# =============================================================================
# SERVICE
# =============================================================================


def test_calculate_fills_measurements_from_athlete(db_session, coach):
    athlete = make_athlete(
        db_session, coach, weight_kg=60, height_cm=165, age=25, gender=Gender.FEMALE
    )

    result = EnergyTargetService.calculate(
        db_session, coach.id, EnergyTargetsRequest(athlete_id=athlete.id)
    )
    assert result.bmr == pytest.approx(1345.25)
    assert result.tdee == pytest.approx(1614.3)
    assert result.protein_grams == pytest.approx(108)
    assert result.fat_grams == pytest.approx(42)

    # request values win over the profile
    heavier = EnergyTargetService.calculate(
        db_session, coach.id, EnergyTargetsRequest(athlete_id=athlete.id, weight_kg=70)
    )
    assert heavier.bmr == pytest.approx(1445.25)


def test_calculate_reports_missing_measurements(db_session, coach):
    athlete = make_athlete(db_session, coach, weight_kg=72.5, age=None, height_cm=None)

    with pytest.raises(ServiceValidationError) as exc:
        EnergyTargetService.calculate(
            db_session, coach.id, EnergyTargetsRequest(athlete_id=athlete.id, gender=Gender.MALE)
        )
    assert exc.value.details == {"missing": ["height_cm", "age"]}


def test_calculate_for_athlete_of_other_coach_is_not_found(db_session, coach):
    athlete = make_athlete(db_session, make_coach(db_session, "marco"), weight_kg=70)

    with pytest.raises(NotFoundError):
        EnergyTargetService.calculate(
            db_session, coach.id, EnergyTargetsRequest(athlete_id=athlete.id)
        )


def test_create_plan_from_targets(db_session, coach):
    athlete = make_athlete(
        db_session,
        coach,
        username="sarahm",
        weight_kg=80,
        height_cm=180,
        age=30,
        gender=Gender.MALE,
    )

    plan = EnergyTargetService.create_plan(
        db_session,
        coach.id,
        PlanFromEnergyTargetsRequest(
            athlete_id=athlete.id, activity_factor=1.55, goal=NutritionGoal.CUTTING
        ),
    )

    assert plan.coach_id == coach.id
    assert plan.name == "New Meal Plan"
    assert plan.total_calories == 2207
    assert plan.protein_grams == 192
    assert plan.carbohydrate_grams == 288
    assert plan.fat_grams == 32
    assert plan.description == (
        "Created from BMR calculator. Goal: Cutting. BMR: 1780 kcal/day. "
        "TDEE: 2759 kcal/day. Athlete: sarahm."
    )


# =============================================================================
# HTTP API
# =============================================================================


def test_api_energy_targets(client, headers):
    r = client.post(
        "/nutrition-plans/energy-targets",
        json={"weight_kg": 80, "height_cm": 180, "age": 30, "gender": "male", "goal": "bulking"},
        headers=headers,
    )

    assert r.status_code == 200
    body = r.json()
    assert body["athlete_id"] is None
    assert body["calorie_target"] == pytest.approx(2349.6)
    assert body["carb_grams"] == pytest.approx(247.4)


def test_api_energy_targets_validation(client, headers):
    r = client.post(
        "/nutrition-plans/energy-targets",
        json={"weight_kg": 80, "height_cm": 180, "age": 30, "gender": "male", "activity_factor": 3},
        headers=headers,
    )
    assert r.status_code == 422

    r = client.post("/nutrition-plans/energy-targets", json={"weight_kg": 80}, headers=headers)
    assert r.status_code == 400
    assert error_code(r) == "SERVICE_VALIDATION_ERROR"
    assert r.json()["error"]["details"] == {"missing": ["height_cm", "age", "gender"]}


def test_api_create_plan_from_energy_targets(client, headers):
    r = client.post(
        "/nutrition-plans/from-energy-targets",
        json={
            "name": "Spring Cut",
            "weight_kg": 80,
            "height_cm": 180,
            "age": 30,
            "gender": "male",
            "activity_factor": 1.55,
            "goal": "cutting",
        },
        headers=headers,
    )

    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "Spring Cut"
    assert body["total_calories"] == 2207
    assert body["carbohydrate_grams"] == 288

    r = client.get(f"/nutrition-plans/{body['id']}", headers=headers)
    assert r.status_code == 200
    assert r.json()["meals"] == []
