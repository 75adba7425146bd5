import pytest
from globaledge.services.billing import compute_billing_totals
from globaledge.core.enums import PaymentMethod


@pytest.mark.pricing
class TestBillingTotals:

    def test_card_without_insurance(self):
        totals = compute_billing_totals(100.0, PaymentMethod.CARD)

        assert totals.fuel == 12.0
        assert totals.security == 1.5
        assert totals.insurance == 0.0
        assert totals.tax == 0.0
        assert totals.subtotal == 113.5
        assert totals.cod_fee == 0.0
        assert totals.total == 113.5
        assert totals.currency == "EUR"

    def test_cash_on_delivery_fee(self):
        totals = compute_billing_totals(100.0, PaymentMethod.COD)

        # 20% of the 113.50 subtotal
        assert totals.cod_fee == 22.7
        assert totals.total == 136.2

    def test_insurance_minimum(self):
        totals = compute_billing_totals(100.0, PaymentMethod.CARD, insure=True)
        assert totals.insurance == 1.5
        assert totals.subtotal == 115.0

    def test_insurance_percentage(self):
        totals = compute_billing_totals(500.0, PaymentMethod.CARD, insure=True)
        assert totals.insurance == 5.0
        assert totals.subtotal == 572.5

    def test_quoted_price_rounding(self):
        totals = compute_billing_totals(71.88, PaymentMethod.CARD)
        # 71.88 + 8.6256 + 1.0782
        assert totals.subtotal == 81.58
        assert totals.fuel == 8.63
        assert totals.security == 1.08
