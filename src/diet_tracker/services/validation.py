"""Input validation applied before anything reaches the store."""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from diet_tracker.domain.models import ActivityLevel, Gender, UserProfile
from diet_tracker.errors import ValidationError

MAX_LOGGED_WEIGHT_KG = 500

_PROFILE_MESSAGES = {
    "age": ("Invalid Age", "Please enter a valid age between 10 and 120"),
    "height": (
        "Invalid Height",
        "Please enter a valid height between 100 and 250 cm",
    ),
    "weight": ("Invalid Weight", "Please enter a valid weight between 30 and 300 kg"),
}
_INVALID_PROFILE = ("Invalid Profile", "Please check your profile details")
_INVALID_CALORIES = ("Invalid Input", "Please enter a valid number of calories")
_INVALID_WEIGHT = ("Invalid Input", "Please enter a valid weight between 1-500 kg")
_INVALID_TARGET = ("Invalid Target", "Please enter a valid calorie target")
_MISSING_PATTERN_NAME = ("Error", "Please enter a pattern name")


def _reject_bool(value: object) -> object:
    if isinstance(value, bool):
        raise ValueError("expected a number, not a boolean")
    return value


_NOT_BOOL = BeforeValidator(_reject_bool)

_positive_calories = TypeAdapter(Annotated[int, Field(gt=0), _NOT_BOOL])
_logged_weight = TypeAdapter(
    Annotated[
        float,
        Field(gt=0, le=MAX_LOGGED_WEIGHT_KG, allow_inf_nan=False),
        _NOT_BOOL,
    ]
)


class ProfileForm(BaseModel):
    """Profile values as entered on the settings screen."""

    age: int = Field(ge=10, le=120)
    height: float = Field(ge=100, le=250, allow_inf_nan=False)
    weight: float = Field(ge=30, le=300, allow_inf_nan=False)
    gender: Gender
    activity_level: ActivityLevel

    def to_profile(self) -> UserProfile:
        return UserProfile(
            age=self.age,
            height=self.height,
            weight=self.weight,
            gender=self.gender,
            activity_level=self.activity_level,
        )


def validate_profile(
    *,
    age: object,
    height: object,
    weight: object,
    gender: object,
    activity_level: object,
) -> UserProfile:
    """Return a profile, raising ValidationError on the first bad field."""
    try:
        form = ProfileForm(
            age=age,
            height=height,
            weight=weight,
            gender=gender,
            activity_level=activity_level,
        )
    except PydanticValidationError as exc:
        field_name = str(exc.errors()[0]["loc"][0])
        raise ValidationError(
            *_PROFILE_MESSAGES.get(field_name, _INVALID_PROFILE)
        ) from exc
    return form.to_profile()


def validate_calorie_amount(value: object) -> int:
    """Return a positive calorie amount."""
    try:
        return _positive_calories.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError(*_INVALID_CALORIES) from exc


def validate_target(value: object) -> int:
    """Return a positive daily calorie target."""
    try:
        return _positive_calories.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError(*_INVALID_TARGET) from exc


def validate_weight_input(value: object) -> float:
    """Return a logged weight in (0, 500] kg."""
    try:
        return _logged_weight.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError(*_INVALID_WEIGHT) from exc


def validate_pattern_name(name: str | None) -> str:
    """Return the pattern name, rejecting blank names."""
    if name is None or not name.strip():
        raise ValidationError(*_MISSING_PATTERN_NAME)
    return name
