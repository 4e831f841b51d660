#!/usr/bin/env python3
"""
Command line companion for the EcoCheck backend: log in, list reports and
check badge / challenge progress with the same services the API uses.

    python scripts/check_progress.py login --email me@example.com --password ...
    python scripts/check_progress.py progress
    python scripts/check_progress.py reports
    python scripts/check_progress.py logout
"""
import argparse
import getpass
import logging
import sys
from pathlib import Path

# If the package imports fail when the script is executed directly (python <path>),
_pkg_root = Path(__file__).resolve().parents[1]
if str(_pkg_root) not in sys.path:
    sys.path.insert(0, str(_pkg_root))

from fastapi import HTTPException
from api.progress.progress_schema import RefreshOutcome
from api.progress.progress_service import ProgressSession
from api.reports.reports_service import list_reports
from api.user.user_schema import LoginRequest
from api.user.user_service import login_user
from config.settings import settings
from helpers.backend_client import BackendClient, BackendAPIError
from helpers.token_helper import store_token, get_token, remove_token
from utils.cache_utils import get_store


def _bar(ratio: float, width: int = 20) -> str:
    filled = int(round(ratio * width))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def cmd_login(args, client, store) -> int:
    password = args.password or getpass.getpass("Password: ")
    try:
        token = login_user(client, LoginRequest(email=args.email, password=password))
    except HTTPException as e:
        detail = e.detail if isinstance(e.detail, dict) else {"message": str(e.detail)}
        print(f"❌ Login failed: {detail.get('message')}")
        return 1
    store_token(store, token)
    print("✅ Login successful!")
    return 0


def cmd_logout(args, client, store) -> int:
    remove_token(store)
    print("👋 Logged out.")
    return 0


def cmd_progress(args, client, store) -> int:
    session = ProgressSession(client, store)
    token = get_token(store)
    cached = session.cached(token)
    if cached.badge:
        print(f"🏅 Last badge: {cached.badge.name}")
    view = session.refresh(token)
    if view.outcome == RefreshOutcome.identity_unavailable:
        print("⚠️ Not logged in; run `login` first.")
        return 1
    print(f"♻️  Resolved reports: {view.resolved_count}")
    print(f"🎯 Challenge: {_bar(view.progress_ratio)} {view.cycle_progress}/{view.cycle_goal}")
    print(f"🏅 Badge: {view.badge.name if view.badge else 'none yet'}")
    if view.milestone_reached:
        print(f"🎉 Milestone reached! {view.completed_cycles} challenge(s) completed.")
    return 0


def cmd_reports(args, client, store) -> int:
    token = get_token(store)
    if not token:
        print("⚠️ Not logged in; run `login` first.")
        return 1
    try:
        reports = list_reports(client, token)
    except (BackendAPIError, ValueError) as e:
        print(f"🚨 Failed to load reports: {e}")
        return 1
    if not reports:
        print("No reports submitted yet.")
    for r in reports:
        print(f"{r.id}  {r.status:<20}  {r.location or r.description or ''}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="EcoCheck reports and badge progress")
    parser.add_argument("--backend", default=None, help=f"backend API URL (default: {settings.BACKEND_API_URL})")
    parser.add_argument("--verbose", action="store_true", help="print debug info")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="log in and remember the token")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="prompted when omitted")
    login.set_defaults(func=cmd_login)

    sub.add_parser("logout", help="forget the stored token").set_defaults(func=cmd_logout)
    sub.add_parser("progress", help="refresh badge and challenge progress").set_defaults(func=cmd_progress)
    sub.add_parser("reports", help="list your reports").set_defaults(func=cmd_reports)
    return parser


def main(argv=None, client=None, store=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    client = client or BackendClient(base_url=args.backend)
    store = store or get_store()
    return args.func(args, client, store)


if __name__ == "__main__":
    sys.exit(main())
