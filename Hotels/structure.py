'''
Structure class implementation for Hotels module.
'''
from typing import Literal
from pydantic import BaseModel, ConfigDict, model_validator, Field
from utils import uid

RoomStatus = Literal['available', 'occupied']
AVAILABLE : RoomStatus = 'available'
OCCUPIED : RoomStatus = 'occupied'

class Room(BaseModel):

    model_config = ConfigDict(validate_assignment=True)

    id : str = Field(default_factory=uid, frozen=True)
    number : int
    type : str
    price : float
    status : RoomStatus = AVAILABLE

    @model_validator(mode="after")
    def validate_structure(self):
        # enforce positive number and price
        if self.number < 1:
            raise ValueError("Room number must be a positive integer.")
        if self.price <= 0:
            raise ValueError("Room price must be positive.")
        if not self.type.strip():
            raise ValueError("Room type must not be empty.")
        return self

    @property
    def is_available(self) -> bool:
        return self.status == AVAILABLE

    def to_dict(self) -> dict[str, str | int | float]:
        """
        Serialize the room into a dictionary.

        Returns:
            dict[str, str | int | float]: Mapping matching the persisted room record.
        """
        return {
            "id": self.id,
            "number": self.number,
            "type": self.type,
            "price": self.price,
            "status": self.status,
        }
