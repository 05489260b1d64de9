from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from swdsms.services.errors import ValidationError
from swdsms.services.report_service import ReportService

router = APIRouter(prefix="/api/reports", tags=["reports"])


class ReportPayload(BaseModel):
    name: Optional[str] = None
    grade: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None


def _get_report_service(request: Request) -> ReportService:
    svc = getattr(getattr(request.app, "state", None), "report_service", None)
    if not svc:
        raise RuntimeError("ReportService not configured")
    return svc


@router.post("")
def create_report(payload: ReportPayload, request: Request):
    svc = _get_report_service(request)
    try:
        report = svc.create_report(
            payload.type,
            payload.description,
            payload.date,
            name=payload.name,
            grade=payload.grade,
        )
    except ValidationError as exc:
        return JSONResponse({"error": exc.message}, status_code=400)
    return {"success": True, "report": report.public()}


@router.get("")
def list_reports(request: Request):
    svc = _get_report_service(request)
    return [report.public() for report in svc.list_reports()]
