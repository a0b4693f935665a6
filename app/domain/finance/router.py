"""Finance router - Monthly and yearly income"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import FinanceSummary
from .service import FinanceService

router = APIRouter(prefix="/finance", tags=["Finance"])


def get_finance_service(db: Session = Depends(get_db)) -> FinanceService:
    """Dependency injection for FinanceService"""
    return FinanceService(db)


@router.get("", response_model=FinanceSummary)
async def get_finance(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1, le=9999),
    service: FinanceService = Depends(get_finance_service),
):
    """Income from finished appointments for a month, its projection and the year total"""
    return service.get_summary(month, year)
