import logging
from typing import List
from fastapi import HTTPException, UploadFile, status
from api.reports.reports_schema import Report, ReportCreate, ProfilePrefill, ReportSubmitted
from api.reports.reports_service import list_reports, submit_report, get_profile_prefill
from helpers.backend_client import BackendClient, BackendAPIError
from helpers.error_helper import backend_http_exception

logger = logging.getLogger(__name__)


def list_reports_controller(client: BackendClient, current_user: dict) -> List[Report]:
    try:
        return list_reports(client, current_user["token"])
    except BackendAPIError as e:
        raise backend_http_exception(e, "REPORTS_UNAVAILABLE")
    except ValueError as e:
        logger.error("Unreadable report list for user %s: %s", current_user["id"], e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "MALFORMED_REPORTS", "message": "Failed to load reports."},
        )


def create_report_controller(
    report_data: ReportCreate,
    photo: UploadFile,
    client: BackendClient,
    current_user: dict,
) -> ReportSubmitted:
    """
    Forward a geotagged photo report upstream. Photo and coordinates are
    mandatory; everything else is passed through as entered.
    """
    content = photo.file.read() if photo else b""
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "MISSING_INFO", "message": "Please take a photo and get your location."},
        )
    try:
        created = submit_report(
            client,
            current_user["token"],
            report_data,
            content,
            filename=photo.filename or "photo.jpg",
            content_type=photo.content_type or "image/jpeg",
        )
    except BackendAPIError as e:
        raise backend_http_exception(e, "REPORT_REJECTED")
    return ReportSubmitted(
        message="Report submitted!",
        report=created if isinstance(created, dict) else None,
    )


def get_prefill_controller(client: BackendClient, current_user: dict) -> ProfilePrefill:
    try:
        return get_profile_prefill(client, current_user["token"], current_user["id"])
    except BackendAPIError as e:
        raise backend_http_exception(e, "PROFILE_UNAVAILABLE")
