"""BMR, TDEE and protein targets."""

from datetime import date

from deficit_tracker.domain.errors import MissingProfileDataError
from deficit_tracker.domain.profile import ActivityLevel, ProfileSnapshot, Sex
from deficit_tracker.services.rounding import round_int

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

ACTIVITY_DESCRIPTIONS: dict[ActivityLevel, str] = {
    ActivityLevel.SEDENTARY: "Little or no exercise, desk job",
    ActivityLevel.LIGHT: "Light exercise 1-3 days/week",
    ActivityLevel.MODERATE: "Moderate exercise 3-5 days/week",
    ActivityLevel.ACTIVE: "Hard exercise 6-7 days/week",
    ActivityLevel.VERY_ACTIVE: "Very hard exercise or physical job",
}

_SEX_OFFSETS = {Sex.MALE: 5, Sex.FEMALE: -161}
_NEUTRAL_OFFSET = -78


def bmr(weight_kg: float, height_cm: float, age_years: int, sex: Sex | None) -> int:
    """Return the Mifflin-St Jeor basal metabolic rate in kcal/day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    return round_int(base + _SEX_OFFSETS.get(sex, _NEUTRAL_OFFSET))


def tdee(bmr_kcal: float, activity_level: ActivityLevel) -> int:
    """Scale BMR by the activity multiplier."""
    return round_int(bmr_kcal * ACTIVITY_MULTIPLIERS[activity_level])


def age_on(date_of_birth: date, today: date) -> int:
    """Return whole years of age on ``today``."""
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def maintenance_calories(profile: ProfileSnapshot, today: date) -> int:
    """Return TDEE for a profile, requiring every BMR input."""
    missing = [
        name
        for name, value in (
            ("height_cm", profile.height_cm),
            ("date_of_birth", profile.date_of_birth),
            ("sex", profile.sex),
            ("activity_level", profile.activity_level),
        )
        if value is None
    ]
    if missing:
        raise MissingProfileDataError(missing)
    base = bmr(
        profile.effective_weight_kg,
        profile.height_cm,
        age_on(profile.date_of_birth, today),
        profile.sex,
    )
    return tdee(base, profile.activity_level)


def protein_goal(weight_kg: float, is_active: bool = False) -> int:
    """Return a daily protein target in grams."""
    multiplier = 2.0 if is_active else 1.6
    return round_int(weight_kg * multiplier)
