from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from utils import uid, nights, validate_stay_dates

class Reservation(BaseModel):

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id : str = Field(default_factory=uid, frozen=True)
    client_name : str
    room_number : int
    check_in : date
    check_out : date
    total : float = 0

    @model_validator(mode="after")
    def validate_dates(self):
        # enforce chronological consistency
        try:
            validate_stay_dates(self.check_in, self.check_out)
        except ValueError as e:
            raise ValueError(f"Reservation {self.id} has invalid dates: {e}")
        if self.total < 0:
            raise ValueError("Reservation total must not be negative.")
        return self

    @property
    def nights(self) -> int:
        return nights(self.check_in, self.check_out)

    def is_active(self, today: Optional[date] = None) -> bool:
        ''' A reservation stays active through its check-out day. '''
        return self.check_out >= (today or date.today())

    def covers(self, day: date) -> bool:
        ''' Whether the guest sleeps in the room on the night of `day`. '''
        return self.check_in <= day < self.check_out

    def to_dict(self) -> dict[str, str | int | float]:
        """
        Serialize the reservation into a dictionary.

        Returns:
            dict[str, str | int | float]: Mapping with camelCase keys and ISO dates.
        """
        return self.model_dump(mode="json", by_alias=True)


class PriceQuote(BaseModel):

    nights : int = Field(description="Number of nights in the stay")
    nightly_rate : float
    total : float
