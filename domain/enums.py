"""
Domain enums for CoachDesk.
Contains all enumeration types used across the domain models.
"""

import enum


class Role(str, enum.Enum):
    """Profile roles"""

    ATHLETE = "athlete"
    COACH = "coach"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class NutritionGoal(str, enum.Enum):
    """Body composition goal used to set calorie and macro targets"""

    MAINTENANCE = "maintenance"
    BULKING = "bulking"
    CUTTING = "cutting"


class InvitationStatus(str, enum.Enum):
    """Lifecycle of an athlete invitation sent by a coach"""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"


class FoodSource(str, enum.Enum):
    """Where a food item record came from"""

    AUSNUT = "ausnut"
    USDA = "usda"
    OPEN_FOOD_FACTS = "open_food_facts"
    CUSTOM = "custom"


class SetType(str, enum.Enum):
    """Type of an individual exercise set"""

    REGULAR = "regular"
    WARM_UP = "warm_up"
    DROP_SET = "drop_set"
    FAILURE = "failure"


class ExerciseGroupType(str, enum.Enum):
    """How exercises sharing a group_id are performed"""

    NONE = "none"
    SUPERSET = "superset"
    BI_SET = "bi_set"
    TRI_SET = "tri_set"
    GIANT_SET = "giant_set"


DAY_TYPES = (
    "Training Day",
    "Rest Day",
    "Low Carb Day",
    "High Carb Day",
    "Moderate Carb Day",
    "Refeed Day",
    "Deload Day",
    "Competition Day",
    "Travel Day",
    "Custom Day",
)

DAYS_OF_WEEK = {
    1: "MONDAY",
    2: "TUESDAY",
    3: "WEDNESDAY",
    4: "THURSDAY",
    5: "FRIDAY",
    6: "SATURDAY",
    7: "SUNDAY",
}
