"""Form payloads for room and reservation edits, validated field by field."""

from datetime import date
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_snake

from Hotels.errors import ValidationError
from Hotels.structure import AVAILABLE, RoomStatus
from utils import validate_stay_dates

FormT = TypeVar("FormT", bound=BaseModel)

# Fallback message per field when pydantic reports a type or constraint error.
FIELD_MESSAGES = {
    "number": "Invalid room number (positive integer)",
    "type": "Please select a room type",
    "price": "Invalid price (positive number)",
    "status": "Invalid status",
    "client_name": "Invalid name (min. 2 characters)",
    "room_number": "Please select a room",
    "check_in": "Check-in date is required",
    "check_out": "Check-out date is required",
}

# Dates that were supplied but do not parse, e.g. "2025-02-30".
INVALID_DATE_MESSAGES = {
    "check_in": "Invalid check-in date",
    "check_out": "Invalid check-out date",
}


class RoomForm(BaseModel):
    """Room fields submitted by the add/edit form."""

    number: int = Field(ge=1)
    type: str
    price: float = Field(gt=0, allow_inf_nan=False)
    status: RoomStatus = AVAILABLE

    @field_validator("type")
    @classmethod
    def type_in_categories(cls, value: str, info: ValidationInfo) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError(FIELD_MESSAGES["type"])
        allowed = (info.context or {}).get("room_types")
        if allowed and cleaned not in allowed:
            raise ValueError(f"Unknown room type '{cleaned}'")
        return cleaned


class ReservationForm(BaseModel):
    """Reservation fields submitted by the add/edit form."""

    client_name: str
    room_number: int = Field(ge=1)
    check_in: date
    check_out: date

    @field_validator("client_name")
    @classmethod
    def client_name_length(cls, value: str) -> str:
        cleaned = value.strip()
        if len(cleaned) < 2:
            raise ValueError(FIELD_MESSAGES["client_name"])
        return cleaned

    @field_validator("room_number")
    @classmethod
    def room_selectable(cls, value: int, info: ValidationInfo) -> int:
        context = info.context or {}
        known = context.get("room_numbers")
        if known is not None and value not in known:
            raise ValueError(f"Room #{value} does not exist")
        selectable = context.get("selectable")
        if selectable is not None and value not in selectable:
            raise ValueError(f"Room #{value} is not available")
        return value

    @field_validator("check_out")
    @classmethod
    def check_out_after_check_in(cls, value: date, info: ValidationInfo) -> date:
        # check_in is absent from info.data when it failed its own validation
        check_in = info.data.get("check_in")
        if check_in is not None:
            validate_stay_dates(check_in, value)
        return value


def _is_filled(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def _field_errors(exc: PydanticValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__all__"
        if field in errors:
            continue
        if error["type"] == "value_error":
            errors[field] = error["msg"].removeprefix("Value error, ")
        elif error["type"].startswith("date") and _is_filled(error.get("input")):
            errors[field] = INVALID_DATE_MESSAGES[field]
        else:
            errors[field] = FIELD_MESSAGES.get(field, error["msg"])
    return errors


def parse_form(
    form_type: type[FormT],
    data: Mapping[str, Any] | BaseModel,
    context: dict[str, Any] | None = None,
) -> FormT:
    """
    Validate raw form data, collecting every failing field.

    Args:
        form_type: RoomForm or ReservationForm.
        data: Raw field values (snake_case or camelCase keys) or an already built form.
        context: Validation context, e.g. the allowed room types.

    Returns:
        The validated form.

    Raises:
        ValidationError: With one message per invalid field.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return form_type.model_validate(
            {to_snake(str(key)): value for key, value in data.items()},
            context=context,
        )
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(exc)) from exc
