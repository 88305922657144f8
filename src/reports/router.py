from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from src.database import get_db
from src.reports.schemas import FeeMode, MonthlyReport
from src.reports.report_service import ReportService

router = APIRouter()

def _build_report(
    db: Session,
    year: int,
    month: int,
    today: Optional[date],
    mode: Optional[FeeMode]
) -> MonthlyReport:
    try:
        return ReportService(db).generate_monthly_report(year, month, today=today, mode=mode)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

@router.get("/monthly", response_model=MonthlyReport)
def get_monthly_report(
    year: int = Query(..., ge=1900, le=9999, description="Reporting year"),
    month: int = Query(..., ge=1, le=12, description="Reporting month"),
    today: Optional[date] = Query(None, description="Accrual cut-off, defaults to today"),
    mode: Optional[FeeMode] = Query(None, description="accrued or projected"),
    db: Session = Depends(get_db)
):
    """Monthly movement, revenue and occupancy report"""
    return _build_report(db, year, month, today, mode)

@router.get("/monthly/tenants.csv")
def export_tenant_report(
    year: int = Query(..., ge=1900, le=9999, description="Reporting year"),
    month: int = Query(..., ge=1, le=12, description="Reporting month"),
    today: Optional[date] = Query(None, description="Accrual cut-off, defaults to today"),
    mode: Optional[FeeMode] = Query(None, description="accrued or projected"),
    db: Session = Depends(get_db)
):
    """Tenant detail rows of the monthly report as CSV"""

    report = _build_report(db, year, month, today, mode)
    content = ReportService(db).export_tenants_csv(report)

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="Tenant_Report_{year}_{month}.csv"'}
    )
