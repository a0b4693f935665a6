"""
Finance service - Income rollups from finished appointments

Totals always reflect the current status of each appointment: moving a
finished appointment to another status removes it from every period.
"""

import calendar
import logging
import math
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ..appointments.repository import AppointmentRepository
from .schemas import FinanceSummary

logger = logging.getLogger(__name__)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def project_month_income(real_income: float, year: int, month: int, today: date) -> int:
    """
    Linear projection of the income still to come this month:
    (month-to-date income / days elapsed) * days remaining.

    Only the current month is projected; complete and future months give 0.
    """
    if (today.year, today.month) != (year, month):
        return 0

    days_in_month = calendar.monthrange(year, month)[1]
    remaining_days = days_in_month - today.day
    if remaining_days <= 0:
        return 0

    projection = (real_income / today.day) * remaining_days
    # Half-up rounding to whole currency units
    return int(math.floor(projection + 0.5))


class FinanceService:
    """Service layer for the finance dashboard"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()

    def get_summary(self, month: int, year: int, today: Optional[date] = None) -> FinanceSummary:
        today = today or date.today()

        month_start, month_end = month_bounds(year, month)
        real_income, count = self.repo.get_completed_totals(self.db, month_start, month_end)

        total_year, _ = self.repo.get_completed_totals(self.db, date(year, 1, 1), date(year, 12, 31))

        projection = project_month_income(real_income, year, month, today)

        logger.info(
            f"📊 Finance {year}-{month:02d}: real={real_income:.2f} count={count} "
            f"projection={projection} totalYear={total_year:.2f}"
        )
        return FinanceSummary(
            real=real_income, projection=projection, count=count, totalYear=total_year
        )
