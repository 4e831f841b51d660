import pytest
from pydantic import ValidationError

from api.reports.reports_schema import Report, ReportCreate
from api.reports.reports_service import (
    build_report_fields,
    count_resolved,
    count_resolved_reports,
    format_contact_number,
    format_display_number,
    get_profile_prefill,
    parse_reports,
    submit_report,
)
from conftest import report, resolved_reports
from helpers.backend_client import BackendAPIError


def test_owner_accepts_string_and_embedded_forms():
    plain = Report.model_validate(report("a", "u1"))
    embedded = Report.model_validate(report("b", "u1", embedded=True))
    numeric = Report.model_validate({"_id": 5, "user": 42, "status": "Resolved"})
    assert plain.owner_id == "u1"
    assert embedded.owner_id == "u1"
    assert numeric.owner_id == "42"
    assert numeric.id == "5"


def test_count_only_resolved_reports_of_current_user():
    payload = [
        report("1", "me", "Resolved"),
        report("2", "me", "Resolved", embedded=True),
        report("3", "me", "Pending"),
        report("4", "me", "On Going", embedded=True),
        report("5", "other", "Resolved"),
        report("6", "other", "Resolved", embedded=True),
        report("7", "me", "Pending Confirmation"),
        {"_id": "8", "status": "Resolved"},
    ]
    assert count_resolved(parse_reports(payload), "me") == 2


def test_tally_fetch(backend, token):
    backend.list_reports.return_value = [report("1", "me"), report("2", "me", embedded=True)]
    assert count_resolved_reports(backend, token, "me") == 2
    backend.list_reports.assert_called_once_with(token)


def test_tally_is_zero_on_fetch_failure(backend, token):
    backend.list_reports.side_effect = BackendAPIError(500, "boom")
    assert count_resolved_reports(backend, token, "me") == 0


def test_tally_is_zero_on_network_failure(backend, token):
    backend.list_reports.side_effect = BackendAPIError(None, "unreachable")
    assert count_resolved_reports(backend, token, "me") == 0


@pytest.mark.parametrize("payload", [{"reports": []}, None, [{"status": "Resolved"}], ["x"]])
def test_tally_is_zero_on_malformed_payload(backend, token, payload):
    backend.list_reports.return_value = payload
    assert count_resolved_reports(backend, token, "me") == 0


@pytest.mark.parametrize("odd", [
    {"_id": "x", "user": "someone-else", "status": "Pending", "contact": 9171234567},
    {"_id": "y", "user": "someone-else", "status": "Resolved", "date": ""},
    {"_id": "z", "user": "someone-else", "status": None},
    {"_id": "w", "user": {"name": "no id"}, "status": "Resolved"},
    "not-a-report",
])
def test_tally_survives_one_odd_report(backend, token, odd):
    backend.list_reports.return_value = resolved_reports(12, owner="me") + [odd]
    assert count_resolved_reports(backend, token, "me") == 12


def test_tally_ignores_display_fields_of_own_reports(backend, token):
    own = report("1", "me")
    own.update(contact=9171234567, date="", latitude="somewhere")
    backend.list_reports.return_value = [own, report("2", "me", embedded=True)]
    assert count_resolved_reports(backend, token, "me") == 2


def test_parse_reports_rejects_non_list():
    with pytest.raises(ValueError):
        parse_reports({"data": []})


@pytest.mark.parametrize("raw,expected", [
    ("9171234567", "+639171234567"),
    ("09171234567", "+639171234567"),
    ("917 123 4567", "+639171234567"),
    ("+63 917 123 4567", "+639171234567"),
    ("", ""),
])
def test_format_contact_number(raw, expected):
    assert format_contact_number(raw, "+63") == expected


@pytest.mark.parametrize("local,expected", [
    ("917", "917"),
    ("91712", "917 12"),
    ("9171234567", "917 123 4567"),
])
def test_format_display_number(local, expected):
    assert format_display_number(local) == expected


def test_build_report_fields():
    data = ReportCreate(
        first_name=" Juan ",
        last_name="Dela Cruz",
        contact_number="09171234567",
        description="Pile of plastic",
        location="Bulaon, San Fernando, Philippines",
        user_location="Bulaon",
        latitude=15.06,
        longitude=120.65,
    )
    fields = build_report_fields(data)
    assert fields["firstName"] == "Juan"
    assert fields["middleName"] == ""
    assert fields["contact"] == "+639171234567"
    assert fields["userLocation"] == "Bulaon"
    assert fields["latitude"] == "15.06"
    assert fields["longitude"] == "120.65"


def test_submit_report_sends_photo(backend, token):
    backend.create_report.return_value = {"_id": "new"}
    data = ReportCreate(latitude=1.0, longitude=2.0)
    assert submit_report(backend, token, data, b"jpeg-bytes") == {"_id": "new"}
    args = backend.create_report.call_args.args
    assert args[0] == token
    assert args[2] == ("photo.jpg", b"jpeg-bytes", "image/jpeg")


def test_submit_report_requires_photo(backend, token):
    with pytest.raises(ValueError):
        submit_report(backend, token, ReportCreate(latitude=1.0, longitude=2.0), b"")
    backend.create_report.assert_not_called()


def test_profile_prefill(backend, token):
    backend.get_user.return_value = {
        "firstName": "Maria",
        "middleInitial": "L",
        "lastName": "Santos",
        "location": "Del Carmen",
        "contactNumber": "09181234567",
    }
    prefill = get_profile_prefill(backend, token, "u1")
    assert prefill.first_name == "Maria"
    assert prefill.middle_name == "L"
    assert prefill.location == "Del Carmen"
    assert prefill.contact_number == "9181234567"
    assert prefill.display_contact_number == "918 123 4567"
    backend.get_user.assert_called_once_with(token, "u1")


def test_profile_prefill_tolerates_missing_user(backend, token):
    backend.get_user.return_value = None
    prefill = get_profile_prefill(backend, token, "u1")
    assert prefill.first_name == ""
    assert prefill.contact_number == ""


def test_profile_prefill_numeric_contact(backend, token):
    backend.get_user.return_value = {"firstName": "Ana", "contactNumber": 9171234567}
    prefill = get_profile_prefill(backend, token, "u1")
    assert prefill.first_name == "Ana"
    assert prefill.contact_number == ""


@pytest.mark.parametrize("contact", ["917123456", "091712345678", "+63 917 123 45678", "12345678901234"])
def test_report_rejects_contact_without_ten_local_digits(contact):
    with pytest.raises(ValidationError):
        ReportCreate(latitude=1.0, longitude=2.0, contact_number=contact)


@pytest.mark.parametrize("contact", ["", "9171234567", "09171234567", "+63 917 123 4567"])
def test_report_accepts_local_contact_forms(contact):
    assert ReportCreate(latitude=1.0, longitude=2.0, contact_number=contact).contact_number == contact.strip()
