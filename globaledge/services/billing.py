from globaledge.schemas.draft import BillingTotals
from globaledge.core.enums import PaymentMethod
from globaledge.services.quote_engine import round2, CURRENCY

FUEL_RATE = 0.12
SECURITY_RATE = 0.015
INSURANCE_RATE = 0.01
INSURANCE_MIN = 1.5
COD_FEE_RATE = 0.2


def compute_billing_totals(base_price: float, payment_method: PaymentMethod, insure: bool = False) -> BillingTotals:
    """Checkout totals on top of a quoted price.

    Cash on delivery adds a 20% service fee on the subtotal; insurance is 1%
    of the base with a 1.50 minimum.
    """
    base = max(0.0, base_price)
    fuel = base * FUEL_RATE
    security = base * SECURITY_RATE
    insurance = max(INSURANCE_MIN, base * INSURANCE_RATE) if insure else 0.0
    tax = 0.0
    subtotal = round2(base + fuel + security + insurance + tax)

    cod_fee = round2(subtotal * COD_FEE_RATE) if payment_method == PaymentMethod.COD else 0.0

    return BillingTotals(
        base=round2(base),
        fuel=round2(fuel),
        security=round2(security),
        insurance=round2(insurance),
        tax=round2(tax),
        subtotal=subtotal,
        cod_fee=cod_fee,
        total=round2(subtotal + cod_fee),
        currency=CURRENCY,
    )
