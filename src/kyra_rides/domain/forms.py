# kyra_rides/domain/forms.py
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kyra_rides.domain.entities.geography import Coord, Place
from kyra_rides.domain.entities.trip import Payer, Weekday

_MOBILE_RE = re.compile(r"^[6-9]\d{9}$")


def normalize_phone(raw: str) -> str:
    """Keep the last ten digits: '+91 98765-43210' -> '9876543210'."""
    return re.sub(r"\D", "", raw)[-10:]


class PlaceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    address: str = Field(min_length=1)
    place_id: str = Field(min_length=1)
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    def to_place(self) -> Place:
        return Place(address=self.address, place_id=self.place_id, coord=Coord(self.lat, self.lng))


class BookingRequest(BaseModel):
    """Rider-submitted subscription form.

    ``pickup_time`` stays a string here; it is parsed (and rejected with
    InvalidTimeFormat) by the orchestrator before pricing.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)
    name: str = Field(min_length=2, max_length=100)
    phone: str
    pickup: PlaceModel
    drop: PlaceModel
    pickup_time: str
    selected_days: list[Weekday]

    @field_validator("phone")
    @classmethod
    def _indian_mobile(cls, v: str) -> str:
        digits = normalize_phone(v)
        if not _MOBILE_RE.match(digits):
            raise ValueError("enter a valid 10-digit Indian mobile number")
        return digits

    def payer(self) -> Payer:
        return Payer(name=self.name, phone=self.phone)
