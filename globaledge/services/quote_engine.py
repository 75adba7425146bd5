"""Parcel and freight rate quotes.

Pure functions only: the booking form calls ``compute_quote`` on every
change, so incomplete input yields ``None`` instead of an error.
"""
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional

from globaledge.schemas.quote import (
    QuoteRequest, Quote, QuoteBreakdown, ParcelDetails, FreightDetails,
)
from globaledge.core.enums import ServiceType, ServiceLevel, FreightMode

CURRENCY = "EUR"
TWO_DEC = Decimal("0.01")
# enough digits to quantize any finite float to cents
ROUNDING_PRECISION = 400

PARCEL_DIVISOR = 5000.0
PARCEL_BASE = {True: 8.0, False: 18.0}      # keyed by same_country
PARCEL_PER_KG = {True: 2.8, False: 5.2}
PARCEL_FUEL_RATE = 0.12
PARCEL_SECURITY_FEE = 3.0
PARCEL_FLOOR = 9.0

SPEED_MULTIPLIER = {
    ServiceLevel.STANDARD: 1.0,
    ServiceLevel.EXPRESS: 1.25,
    ServiceLevel.PRIORITY: 1.55,
}
PARCEL_ETA = {
    ServiceLevel.STANDARD: "2–5 business days",
    ServiceLevel.EXPRESS: "24–72 hours",
    ServiceLevel.PRIORITY: "12–48 hours",
}

FREIGHT_DIVISOR = {FreightMode.AIR: 6000.0, FreightMode.SEA: 5000.0, FreightMode.ROAD: 5000.0}
FREIGHT_BASE = {FreightMode.AIR: 150.0, FreightMode.SEA: 90.0, FreightMode.ROAD: 120.0}
FREIGHT_PER_KG = {FreightMode.AIR: 2.2, FreightMode.SEA: 1.0, FreightMode.ROAD: 1.4}
FREIGHT_FUEL_RATE = {FreightMode.AIR: 0.18, FreightMode.SEA: 0.08, FreightMode.ROAD: 0.08}
FREIGHT_SECURITY_FEE = {FreightMode.AIR: 12.0, FreightMode.SEA: 6.0, FreightMode.ROAD: 6.0}
FREIGHT_DOMESTIC_DISCOUNT = 0.85
FREIGHT_FLOOR = 25.0
FREIGHT_ETA = {
    FreightMode.AIR: "2–7 days door-to-door",
    FreightMode.SEA: "12–35 days port-to-door",
    FreightMode.ROAD: "2–10 days door-to-door",
}


def round2(value: float) -> float:
    """Round half-up to cents. Non-finite values round to 0."""
    if not math.isfinite(value):
        return 0.0
    with localcontext() as ctx:
        ctx.prec = ROUNDING_PRECISION
        return float(Decimal(repr(value)).quantize(TWO_DEC, rounding=ROUND_HALF_UP))


def tail_country(place: str) -> str:
    return place.strip().split(",")[-1].strip().casefold()


def is_same_country(origin: str, destination: str) -> bool:
    # Crude on purpose: "Lagos, Nigeria" and "Abuja, nigeria " match.
    return tail_country(origin) == tail_country(destination)


def volumetric_weight(length: float, width: float, height: float, divisor: float) -> float:
    if not (length and width and height):
        return 0.0
    return (length * width * height) / divisor


def _parcel_weights(parcel: ParcelDetails):
    actual = parcel.weight_kg
    volumetric = volumetric_weight(
        parcel.length_cm, parcel.width_cm, parcel.height_cm, PARCEL_DIVISOR
    )
    return actual, volumetric


def _freight_weights(freight: FreightDetails):
    actual = freight.weight_kg_per_pallet * freight.pallets
    per_pallet = volumetric_weight(
        freight.length_cm, freight.width_cm, freight.height_cm, FREIGHT_DIVISOR[freight.mode]
    )
    # every pallet is assumed to share the declared dimensions
    volumetric = per_pallet * freight.pallets
    return actual, volumetric


def _billable_weight(actual: float, volumetric: float):
    """Round volumetric weight and pick the billable figure.

    Returns None when nothing is billable or the weights overflow a float.
    """
    if not (math.isfinite(actual) and math.isfinite(volumetric)):
        return None
    volumetric = round2(volumetric)
    billable = max(actual, volumetric)
    if billable <= 0:
        return None
    return volumetric, billable


def _build_quote(total, floor, eta, actual, volumetric, billable, same_country,
                 subtotal, fuel, security) -> Optional[Quote]:
    if not math.isfinite(total):
        return None
    return Quote(
        currency=CURRENCY,
        total_price=round2(max(floor, total)),
        eta_text=eta,
        billable_weight_kg=billable,
        breakdown=QuoteBreakdown(
            actual_weight_kg=actual,
            volumetric_weight_kg=volumetric,
            same_country=same_country,
            subtotal=round2(subtotal),
            fuel_surcharge=round2(fuel),
            security_fee=round2(security),
        ),
    )


def quote_parcel(origin: str, destination: str, parcel: ParcelDetails) -> Optional[Quote]:
    actual, volumetric = _parcel_weights(parcel)
    weights = _billable_weight(actual, volumetric)
    if weights is None:
        return None
    volumetric, billable = weights

    same_country = is_same_country(origin, destination)
    subtotal = (PARCEL_BASE[same_country] + billable * PARCEL_PER_KG[same_country]) \
        * SPEED_MULTIPLIER[parcel.level]
    fuel = subtotal * PARCEL_FUEL_RATE
    security = PARCEL_SECURITY_FEE

    return _build_quote(
        subtotal + fuel + security, PARCEL_FLOOR, PARCEL_ETA[parcel.level],
        actual, volumetric, billable, same_country, subtotal, fuel, security,
    )


def quote_freight(origin: str, destination: str, freight: FreightDetails) -> Optional[Quote]:
    actual, volumetric = _freight_weights(freight)
    weights = _billable_weight(actual, volumetric)
    if weights is None:
        return None
    volumetric, billable = weights

    mode = freight.mode
    same_country = is_same_country(origin, destination)
    discount = FREIGHT_DOMESTIC_DISCOUNT if same_country else 1.0
    subtotal = (FREIGHT_BASE[mode] + billable * FREIGHT_PER_KG[mode]) * discount
    fuel = subtotal * FREIGHT_FUEL_RATE[mode]
    security = FREIGHT_SECURITY_FEE[mode]

    return _build_quote(
        subtotal + fuel + security, FREIGHT_FLOOR, FREIGHT_ETA[mode],
        actual, volumetric, billable, same_country, subtotal, fuel, security,
    )


def compute_quote(req: QuoteRequest) -> Optional[Quote]:
    """Price a request, or return None while the route or weight is still missing."""
    origin = req.route.origin
    destination = req.route.destination
    if not origin.strip() or not destination.strip():
        return None

    if req.service_type == ServiceType.FREIGHT:
        return quote_freight(origin, destination, req.freight)
    return quote_parcel(origin, destination, req.parcel)
