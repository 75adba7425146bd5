import math
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from globaledge.core.enums import ServiceType, ServiceLevel, FreightMode


def coerce_amount(value) -> float:
    """Live form input: anything that is not a finite, non-negative number counts as 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


class Route(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    origin: str = Field("", alias="from")
    destination: str = Field("", alias="to")

    @field_validator("origin", "destination", mode="before")
    @classmethod
    def _text(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)


class ParcelDetails(BaseModel):
    weight_kg: float = 0.0
    length_cm: float = 0.0
    width_cm: float = 0.0
    height_cm: float = 0.0
    level: ServiceLevel = ServiceLevel.STANDARD

    @field_validator("weight_kg", "length_cm", "width_cm", "height_cm", mode="before")
    @classmethod
    def _amount(cls, v):
        return coerce_amount(v)


class FreightDetails(BaseModel):
    mode: FreightMode = FreightMode.ROAD
    pallets: int = 1
    weight_kg_per_pallet: float = 0.0
    length_cm: float = 0.0
    width_cm: float = 0.0
    height_cm: float = 0.0

    @field_validator("weight_kg_per_pallet", "length_cm", "width_cm", "height_cm", mode="before")
    @classmethod
    def _amount(cls, v):
        return coerce_amount(v)

    @field_validator("pallets", mode="before")
    @classmethod
    def _pallets(cls, v):
        # a blank or zero pallet count still ships one pallet
        return max(1, int(coerce_amount(v)))


class QuoteRequest(BaseModel):
    service_type: ServiceType = ServiceType.PARCEL
    route: Route = Field(default_factory=Route)
    parcel: Optional[ParcelDetails] = None
    freight: Optional[FreightDetails] = None

    @model_validator(mode="after")
    def _one_service_block(self):
        if self.service_type == ServiceType.PARCEL:
            if self.parcel is None:
                self.parcel = ParcelDetails()
            self.freight = None
        else:
            if self.freight is None:
                self.freight = FreightDetails()
            self.parcel = None
        return self


class QuoteBreakdown(BaseModel):
    actual_weight_kg: float
    volumetric_weight_kg: float
    same_country: bool
    subtotal: float
    fuel_surcharge: float
    security_fee: float


class Quote(BaseModel):
    currency: str = "EUR"
    total_price: float
    eta_text: str
    billable_weight_kg: float
    breakdown: QuoteBreakdown


class QuoteResponse(BaseModel):
    available: bool
    quote: Optional[Quote] = None
