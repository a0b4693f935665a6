from pydantic import BaseModel


class FinanceSummary(BaseModel):
    real: float
    projection: int
    count: int
    totalYear: float
