from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from globaledge.core.enums import DraftStatus, PaymentMethod, ServiceType
from globaledge.schemas.quote import QuoteRequest, Route, coerce_amount


class Contact(BaseModel):
    shipper_name: str = ""
    shipper_email: str = ""
    shipper_phone: str = ""
    recipient_name: str = ""
    recipient_phone: str = ""


class DraftCreate(BaseModel):
    shipment: QuoteRequest
    recipient_email: str = ""
    recipient_address: str = ""
    contact: Contact = Field(default_factory=Contact)
    contents: str = ""
    declared_value: float = 0.0
    incoterm: str = "DAP"

    @field_validator("declared_value", mode="before")
    @classmethod
    def _value(cls, v):
        return coerce_amount(v)


class DraftUpdate(BaseModel):
    recipient_email: Optional[str] = None
    recipient_address: Optional[str] = None
    contact: Optional[Contact] = None
    contents: Optional[str] = None


class Draft(BaseModel):
    draft_id: str
    status: DraftStatus = DraftStatus.DRAFT
    shipment: QuoteRequest
    recipient_email: str
    recipient_address: str
    contact: Contact
    contents: str = ""
    declared_value: float = 0.0
    incoterm: Optional[str] = None
    price: float
    currency: str
    eta_text: str
    billable_weight_kg: float
    created_at: datetime
    updated_at: Optional[datetime] = None


class BookingRequest(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.CARD
    insure: bool = False


class BillingTotals(BaseModel):
    base: float
    fuel: float
    security: float
    insurance: float
    tax: float
    subtotal: float
    cod_fee: float
    total: float
    currency: str


class Receipt(BaseModel):
    receipt_id: str
    tracking_number: str
    draft_id: str
    service_type: ServiceType
    service: str
    route: Route
    eta_text: str
    billable_weight_kg: float
    totals: BillingTotals
    payment_method: PaymentMethod
    contact: Contact
    recipient_email: str
    recipient_address: str
    booked_at: datetime
