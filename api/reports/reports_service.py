import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from api.reports.reports_schema import (
    Report,
    ReportCreate,
    ReportOwnership,
    ProfilePrefill,
    local_contact_number,
)
from config.settings import settings
from helpers.backend_client import BackendClient, BackendAPIError

logger = logging.getLogger(__name__)

_report_list = TypeAdapter(List[Report])


def parse_reports(payload: Any) -> List[Report]:
    """
    Validate the upstream `GET /reports` body. Raises ValueError when the body
    is not a list of report objects.
    """
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of reports, got {type(payload).__name__}")
    try:
        return _report_list.validate_python(payload)
    except ValidationError as e:
        raise ValueError(f"Malformed report payload: {e.error_count()} error(s)") from e


def list_reports(client: BackendClient, token: str) -> List[Report]:
    """All reports visible to the token's request scope."""
    return parse_reports(client.list_reports(token))


def count_resolved(reports: Iterable[ReportOwnership], user_id: str) -> int:
    """Resolved reports owned by `user_id`."""
    user_id = str(user_id)
    return sum(1 for r in reports if r.is_resolved and r.owner_id == user_id)


def tally_resolved(payload: Any, user_id: str) -> int:
    """
    Count resolved reports owned by `user_id` straight from the raw body.
    Only owner and status are read; items without a usable owner or status
    are skipped rather than failing the whole tally.
    """
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of reports, got {type(payload).__name__}")
    refs = []
    skipped = 0
    for item in payload:
        try:
            refs.append(ReportOwnership.model_validate(item))
        except ValidationError:
            skipped += 1
    if skipped:
        logger.warning("Skipped %d unreadable report(s) while tallying for user %s", skipped, user_id)
    return count_resolved(refs, user_id)


def count_resolved_reports(client: BackendClient, token: str, user_id: str) -> int:
    """
    Tally of the user's resolved reports.

    Gamification is decorative, so any fetch or parse failure is logged and
    counted as 0 instead of being raised.
    """
    try:
        payload = client.list_reports(token)
    except BackendAPIError as e:
        logger.warning("Resolved tally fetch failed for user %s: %s", user_id, e)
        return 0
    try:
        total = tally_resolved(payload, user_id)
    except ValueError as e:
        logger.error("Resolved tally parse failed for user %s: %s", user_id, e)
        return 0
    logger.debug("User %s has %d resolved report(s) of %d visible", user_id, total, len(payload))
    return total


# ─── Report submission ────────────────────────────────────────────────────────

def format_contact_number(raw: Optional[str], country_code: Optional[str] = None) -> str:
    """International form sent upstream, e.g. `9171234567` -> `+639171234567`."""
    local = local_contact_number(raw, country_code)
    if not local:
        return ""
    return f"{country_code or settings.CONTACT_COUNTRY_CODE}{local}"


def format_display_number(local: str) -> str:
    """`9171234567` -> `917 123 4567`"""
    if len(local) > 6:
        return f"{local[:3]} {local[3:6]} {local[6:]}"
    if len(local) > 3:
        return f"{local[:3]} {local[3:]}"
    return local


def build_report_fields(data: ReportCreate) -> Dict[str, str]:
    """Multipart form fields expected by `POST /reports`."""
    return {
        "firstName": data.first_name,
        "middleName": data.middle_name,
        "lastName": data.last_name,
        "contact": format_contact_number(data.contact_number),
        "description": data.description,
        "landmark": data.landmark,
        "location": data.location,
        "userLocation": data.user_location or "",
        "latitude": str(data.latitude),
        "longitude": str(data.longitude),
    }


def submit_report(
    client: BackendClient,
    token: str,
    data: ReportCreate,
    photo: bytes,
    filename: str = "photo.jpg",
    content_type: str = "image/jpeg",
) -> Any:
    if not photo:
        raise ValueError("A photo is required")
    fields = build_report_fields(data)
    logger.info("Submitting report at (%s, %s)", fields["latitude"], fields["longitude"])
    return client.create_report(token, fields, (filename, photo, content_type))


# ─── Form prefill ─────────────────────────────────────────────────────────────

def get_profile_prefill(client: BackendClient, token: str, user_id: str) -> ProfilePrefill:
    """Registered name, area and contact used to pre-fill the report form."""
    user = client.get_user(token, user_id) or {}
    contact = str(user.get("contactNumber") or "")
    local = ""
    if contact.startswith("0") and len(contact) == 11:
        local = contact[1:]
    return ProfilePrefill(
        first_name=user.get("firstName") or "",
        middle_name=user.get("middleInitial") or "",
        last_name=user.get("lastName") or "",
        location=user.get("location") or "",
        contact_number=local,
        display_contact_number=format_display_number(local),
    )
