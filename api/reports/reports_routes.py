from typing import List
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from middlewares.auth_middleware import auth_middleware
from api.reports.reports_controller import (
    list_reports_controller,
    create_report_controller,
    get_prefill_controller,
)
from api.reports.reports_schema import Report, ReportCreate, ProfilePrefill, ReportSubmitted
from helpers.backend_client import BackendClient
from utils.deps import get_backend_client

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("", response_model=List[Report], summary="List reports visible to the current user")
def get_reports(
    client: BackendClient = Depends(get_backend_client),
    current_user: dict = Depends(auth_middleware),
):
    return list_reports_controller(client, current_user)


@router.post(
    "",
    response_model=ReportSubmitted,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a geotagged photo report"
)
def post_report(
    latitude: float = Form(..., ge=-90, le=90),
    longitude: float = Form(..., ge=-180, le=180),
    photo: UploadFile = File(...),
    first_name: str = Form(""),
    middle_name: str = Form(""),
    last_name: str = Form(""),
    contact_number: str = Form(""),
    description: str = Form(""),
    landmark: str = Form(""),
    location: str = Form(""),
    user_location: str = Form(""),
    client: BackendClient = Depends(get_backend_client),
    current_user: dict = Depends(auth_middleware),
):
    try:
        payload = ReportCreate(
            first_name=first_name,
            middle_name=middle_name,
            last_name=last_name,
            contact_number=contact_number,
            description=description,
            landmark=landmark,
            location=location,
            user_location=user_location,
            latitude=latitude,
            longitude=longitude,
        )
    except ValidationError as e:
        # form fields arrive as separate params; report them as a 422 like the rest
        raise RequestValidationError(e.errors(include_url=False))
    return create_report_controller(payload, photo, client, current_user)


@router.get("/prefill", response_model=ProfilePrefill, summary="Registered details to pre-fill the report form")
def get_report_prefill(
    client: BackendClient = Depends(get_backend_client),
    current_user: dict = Depends(auth_middleware),
):
    return get_prefill_controller(client, current_user)
