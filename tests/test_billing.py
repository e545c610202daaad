from datetime import date
from decimal import Decimal

from models.tagihan import TagihanStatus
from services.sewa_service import add_months, billing_months, generate_monthly_bills


def test_add_months_clamps_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2026, 1, 31), 2) == date(2026, 3, 31)


def test_add_months_rolls_over_year():
    assert add_months(date(2026, 11, 10), 3) == date(2027, 2, 10)


def test_open_ended_lease_gets_one_bill():
    bills = generate_monthly_bills(date(2026, 3, 20), None, Decimal("1000000"))
    assert len(bills) == 1
    assert bills[0]["billing_month"] == 3
    assert bills[0]["billing_year"] == 2026


def test_same_day_lease_gets_one_bill():
    assert billing_months(date(2026, 3, 20), date(2026, 3, 20)) == [date(2026, 3, 20)]


def test_month_is_billed_only_when_its_anniversary_is_inside_the_lease():
    months = billing_months(date(2026, 1, 15), date(2026, 3, 14))
    assert [(d.year, d.month) for d in months] == [(2026, 1), (2026, 2)]

    months = billing_months(date(2026, 1, 15), date(2026, 3, 15))
    assert [(d.year, d.month) for d in months] == [(2026, 1), (2026, 2), (2026, 3)]


def test_end_of_month_start_is_billed_every_month():
    months = billing_months(date(2026, 1, 31), date(2026, 4, 30))
    assert [(d.month, d.day) for d in months] == [(1, 31), (2, 28), (3, 31), (4, 30)]


def test_bills_span_year_boundary():
    bills = generate_monthly_bills(date(2026, 11, 10), date(2027, 2, 10), Decimal("750000"))
    assert [(b["billing_year"], b["billing_month"]) for b in bills] == [
        (2026, 11), (2026, 12), (2027, 1), (2027, 2),
    ]


def test_bill_payload_fields():
    bills = generate_monthly_bills(date(2026, 5, 17), date(2026, 7, 17), Decimal("1250000"))
    assert len(bills) == 3
    for bill in bills:
        assert bill["amount"] == Decimal("1250000")
        assert bill["due_date"].day == 1
        assert bill["due_date"].month == bill["billing_month"]
        assert bill["status"] == TagihanStatus.UNPAID
