"""
Vendors Router - Panel Evaluation Engine
panel_eval/routers/vendors.py

Endpoints:
  POST /api/v1/vendors                          - register vendor (admin)
  GET  /api/v1/vendors                          - list vendors
  GET  /api/v1/vendors/{vendor_id}              - vendor details
  GET  /api/v1/vendors/{vendor_id}/summary      - aggregated scores
  GET  /api/v1/vendors/{vendor_id}/report       - report data
  GET  /api/v1/vendors/{vendor_id}/report/print - report data for printing
  POST /api/v1/vendors/{vendor_id}/decision     - accept / reject
  GET  /api/v1/reports/export                   - report data for every vendor
"""

from typing import List

from fastapi import APIRouter, Depends, status

from panel_eval.core.dependencies import (
    get_current_actor,
    get_decision_service,
    get_report_service,
    get_vendor_service,
)
from panel_eval.models.actor import Actor
from panel_eval.models.summary import VendorReport, VendorSummary
from panel_eval.models.vendor import DecisionRequest, DecisionResponse, Vendor, VendorCreate
from panel_eval.services.decision_service import DecisionService
from panel_eval.services.report_service import ReportService
from panel_eval.services.vendor_service import VendorService

router = APIRouter(tags=["Vendors"])


@router.post(
    "/vendors",
    response_model=Vendor,
    status_code=status.HTTP_201_CREATED,
    summary="Register a vendor",
)
def register_vendor(
    payload: VendorCreate,
    actor: Actor = Depends(get_current_actor),
    service: VendorService = Depends(get_vendor_service),
):
    return service.register(actor, payload)


@router.get("/vendors", response_model=List[Vendor], summary="List vendors")
def list_vendors(
    actor: Actor = Depends(get_current_actor),
    service: VendorService = Depends(get_vendor_service),
):
    return service.list(actor)


@router.get("/vendors/{vendor_id}", response_model=Vendor, summary="Get vendor")
def get_vendor(
    vendor_id: str,
    actor: Actor = Depends(get_current_actor),
    service: VendorService = Depends(get_vendor_service),
):
    return service.get(actor, vendor_id)


@router.get(
    "/vendors/{vendor_id}/summary",
    response_model=VendorSummary,
    summary="Aggregated evaluation summary",
)
def get_summary(
    vendor_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ReportService = Depends(get_report_service),
):
    return service.summary(actor, vendor_id)


@router.get("/vendors/{vendor_id}/report", response_model=VendorReport, summary="Vendor report data")
def get_report(
    vendor_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ReportService = Depends(get_report_service),
):
    return service.report(actor, vendor_id)


@router.get(
    "/vendors/{vendor_id}/report/print",
    response_model=VendorReport,
    summary="Vendor report data for printing",
)
def get_print_report(
    vendor_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ReportService = Depends(get_report_service),
):
    return service.print_report(actor, vendor_id)


@router.post(
    "/vendors/{vendor_id}/decision",
    response_model=DecisionResponse,
    summary="Accept or reject a vendor",
)
def decide(
    vendor_id: str,
    payload: DecisionRequest,
    actor: Actor = Depends(get_current_actor),
    service: DecisionService = Depends(get_decision_service),
):
    vendor = service.decide(actor, vendor_id, payload.decision)
    return DecisionResponse(
        vendor_id=vendor.id,
        final_decision=vendor.final_decision,
        decided_by=vendor.decided_by,
        decided_at=vendor.decided_at,
    )


@router.get(
    "/reports/export",
    response_model=List[VendorReport],
    summary="Report data for every vendor",
)
def export_reports(
    actor: Actor = Depends(get_current_actor),
    service: ReportService = Depends(get_report_service),
):
    return service.export_reports(actor)
