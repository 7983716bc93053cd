# backend/routes/dashboard.py
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from database import get_db
from models.users import Role
from repositories.dashboard_repository import SqlDashboardRepository
from schemas.dashboard import (
    AgeCount, AttendedCount, FacultyCount, FacultyInterest, SourceCount, StatusCount,
)
from services.dashboard_service import DashboardService
from utils.tokenJWT import role_required

# Every dashboard endpoint is read-only and limited to staff
router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(role_required(Role.STAFF, Role.ADMIN))],
)


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(SqlDashboardRepository(db))


@router.get("/faculties", response_model=List[FacultyInterest])
def faculty_interest(service: DashboardService = Depends(get_dashboard_service)):
    return service.faculty_interest()


@router.get("/sources", response_model=List[SourceCount])
def source_counts(service: DashboardService = Depends(get_dashboard_service)):
    return service.source_counts()


@router.get("/ages", response_model=List[AgeCount])
def age_counts(service: DashboardService = Depends(get_dashboard_service)):
    return service.age_counts()


@router.get("/faculty-today", response_model=List[FacultyCount])
def faculty_today(service: DashboardService = Depends(get_dashboard_service)):
    return service.faculty_today()


@router.get("/status", response_model=List[StatusCount])
def status_counts(service: DashboardService = Depends(get_dashboard_service)):
    return service.status_counts()


@router.get("/attended", response_model=List[AttendedCount])
def attended_counts(service: DashboardService = Depends(get_dashboard_service)):
    return service.attended_counts()


# Student list as a gzip-compressed CSV download
@router.get("/export")
def export_students(
    faculty: Optional[str] = Query(None, description="Only students interested in this faculty"),
    service: DashboardService = Depends(get_dashboard_service),
):
    # Faculty names are Thai, headers are latin-1: ASCII fallback plus an RFC 5987 name
    disposition = "attachment; filename=students_export.csv.gz"
    if faculty:
        disposition += f"; filename*=UTF-8''{quote(f'students_{faculty}.csv.gz')}"
    return Response(
        content=service.export_students_csv(faculty),
        media_type="application/gzip",
        headers={"Content-Disposition": disposition},
    )
