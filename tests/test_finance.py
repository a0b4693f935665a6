from datetime import date

import pytest

from app.domain.appointments.service import AppointmentService
from app.domain.appointments.status import AppointmentStatus
from app.domain.finance.service import FinanceService, month_bounds, project_month_income


def test_month_bounds_handles_leap_years():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2023, 2) == (date(2023, 2, 1), date(2023, 2, 28))
    assert month_bounds(2024, 12) == (date(2024, 12, 1), date(2024, 12, 31))


def test_projection_extrapolates_current_month():
    # 300 over 10 days → 30/day, 21 days left in July
    assert project_month_income(300.0, 2024, 7, today=date(2024, 7, 10)) == 630


def test_projection_rounds_half_up():
    # 5 / 2 days = 2.5/day, 29 days left → 72.5
    assert project_month_income(5.0, 2024, 7, today=date(2024, 7, 2)) == 73


def test_projection_is_zero_outside_current_month():
    assert project_month_income(300.0, 2024, 6, today=date(2024, 7, 10)) == 0
    assert project_month_income(300.0, 2024, 8, today=date(2024, 7, 10)) == 0


def test_projection_is_zero_on_last_day():
    assert project_month_income(300.0, 2024, 7, today=date(2024, 7, 31)) == 0


def test_finished_appointment_counts_toward_its_month(db, make_appointment):
    appointment = make_appointment(status="pending", price=80.0, date=date(2024, 7, 10))
    AppointmentService(db).set_status(appointment.id, AppointmentStatus.CONFIRMED)
    AppointmentService(db).set_status(appointment.id, AppointmentStatus.FINISHED)

    summary = FinanceService(db).get_summary(7, 2024, today=date(2024, 8, 1))

    assert summary.real == 80.0
    assert summary.count == 1
    assert summary.projection == 0
    assert summary.totalYear == 80.0


def test_only_finished_appointments_in_range_are_counted(db, make_appointment):
    make_appointment(status="finished", price=80.0, date=date(2024, 7, 1))
    make_appointment(status="finished", price=250.0, date=date(2024, 7, 31))
    make_appointment(status="confirmed", price=55.0, date=date(2024, 7, 15))
    make_appointment(status="canceled", price=35.0, date=date(2024, 7, 15))
    make_appointment(status="finished", price=150.0, date=date(2024, 6, 30))
    make_appointment(status="finished", price=99.0, date=date(2023, 7, 10))

    summary = FinanceService(db).get_summary(7, 2024, today=date(2024, 8, 1))

    assert summary.real == 330.0
    assert summary.count == 2
    assert summary.totalYear == 480.0


def test_total_year_is_at_least_every_month(db, make_appointment):
    for month, price in [(1, 80.0), (3, 55.0), (3, 35.0), (11, 250.0)]:
        make_appointment(status="finished", price=price, date=date(2024, month, 5))
    service = FinanceService(db)

    summaries = [service.get_summary(m, 2024, today=date(2025, 1, 1)) for m in range(1, 13)]

    assert sum(s.real for s in summaries) == summaries[0].totalYear == 420.0
    assert all(s.totalYear >= s.real for s in summaries)


def test_erasing_a_pending_appointment_keeps_past_income(db, make_appointment):
    make_appointment(status="finished", price=80.0, date=date(2024, 7, 10))
    pending = make_appointment(status="pending", price=55.0, date=date(2024, 7, 12))
    service = FinanceService(db)
    before = service.get_summary(7, 2024, today=date(2024, 8, 1))

    AppointmentService(db).soft_delete(pending.id)

    after = service.get_summary(7, 2024, today=date(2024, 8, 1))
    assert after == before


def test_erasing_a_finished_appointment_removes_it_from_totals(db, make_appointment):
    finished = make_appointment(status="finished", price=80.0, date=date(2024, 7, 10))

    AppointmentService(db).soft_delete(finished.id)

    summary = FinanceService(db).get_summary(7, 2024, today=date(2024, 8, 1))
    assert summary.real == 0.0
    assert summary.count == 0


def test_finance_route(client, make_appointment):
    make_appointment(status="finished", price=80.0, date=date(2024, 7, 10))

    response = client.get("/finance", params={"month": 7, "year": 2024})

    assert response.status_code == 200
    body = response.json()
    assert body["real"] == 80.0
    assert body["count"] == 1
    assert body["totalYear"] == 80.0
    assert set(body) == {"real", "projection", "count", "totalYear"}


@pytest.mark.parametrize(
    "params", [{}, {"month": 7}, {"year": 2024}, {"month": 13, "year": 2024}, {"month": 0, "year": 2024}]
)
def test_finance_route_requires_valid_month_and_year(client, params):
    assert client.get("/finance", params=params).status_code == 400
