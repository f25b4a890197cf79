"""Command line entry for the chore calendar."""

import argparse
import json
import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

import httpx
import uvicorn

from chore_calendar.client.api_client import ApiClient, ApiError
from chore_calendar.client.board import BoardError, ChoreBoard
from chore_calendar.utils.calendar_utils import DAY_NAMES, parse_iso_date

logger = logging.getLogger(__name__)

CELL_WIDTH = 14


def state_dir() -> Path:
    return Path(os.getenv("CHORE_CALENDAR_HOME", Path.home() / ".chore_calendar"))


def _session_file() -> Path:
    return state_dir() / "session.json"


def save_session(board: ChoreBoard) -> None:
    path = _session_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({
        "familyId": board.family_id,
        "adminId": board.logged_in_admin_id,
        "personId": board.viewing_person_id,
    }))


def restore_session(board: ChoreBoard) -> None:
    path = _session_file()
    if not path.exists() or not board.api.get_token():
        raise BoardError("Not logged in; run login-admin, login-member or create-family first")
    data = json.loads(path.read_text())
    board.family_id = data.get("familyId")
    board.logged_in_admin_id = data.get("adminId")
    board.viewing_person_id = data.get("personId")


def clear_session() -> None:
    path = _session_file()
    if path.exists():
        path.unlink()


def _parse_date(value: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def _parse_month(value: str) -> date:
    return _parse_date(f"{value}-01")


def _cell(text: str) -> str:
    if len(text) > CELL_WIDTH:
        text = text[: CELL_WIDTH - 1] + "~"
    return text.ljust(CELL_WIDTH)


def render_week(board: ChoreBoard) -> str:
    snapshot = board.snapshot
    lines = [f"{snapshot.name}: week of {board.current_week_key} to {board.current_week_end.isoformat()}"]
    header = [_cell("Person")] + [
        _cell(f"{DAY_NAMES[i]} {d.strftime('%m/%d')}") for i, d in enumerate(board.current_week_dates)
    ]
    lines.append(" ".join(header).rstrip())

    rows = board.weekly_rows()
    if not rows:
        lines.append("Add at least one person to assign chores.")
    for row in rows:
        # A day can hold several chores; stack them over extra lines
        depth = max([len(day) for day in row.days] + [1])
        for level in range(depth):
            label = row.person["name"] if level == 0 else ""
            cells = [_cell(label)]
            for day in row.days:
                cells.append(_cell(day[level]["label"] if level < len(day) else ("-" if level == 0 else "")))
            lines.append(" ".join(cells).rstrip())
    return "\n".join(lines)


def render_month(board: ChoreBoard) -> str:
    lines = [f"{board.snapshot.name}: {board.current_month.strftime('%B %Y')}"]
    lines.append(" ".join(_cell(name) for name in DAY_NAMES).rstrip())
    for row in board.month_cells():
        dates, people = [], []
        for cell in row:
            marker = "*" if cell.in_current_week else " "
            day = f"{cell.day.day:2d}{marker}" if cell.in_month else f"({cell.day.day})"
            dates.append(_cell(day))
            people.append(_cell(",".join(p["name"] for p in cell.people)))
        lines.append(" ".join(dates).rstrip())
        lines.append(" ".join(people).rstrip())
    lines.append("* current week; only the current week's assignments are loaded")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chore-calendar", description="Family chore calendar")
    parser.add_argument("--api-url", default=None, help="API base URL (default: $CHORE_CALENDAR_API_URL)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")

    create = subparsers.add_parser("create-family", help="Create a family and log in as its admin")
    create.add_argument("name")
    create.add_argument("admin_email")
    create.add_argument("admin_password")

    login_admin = subparsers.add_parser("login-admin", help="Log in as a family admin")
    login_admin.add_argument("email")
    login_admin.add_argument("password")

    login_member = subparsers.add_parser("login-member", help="Log in as a family member (read only)")
    login_member.add_argument("email")

    subparsers.add_parser("logout", help="Forget the saved session")

    week = subparsers.add_parser("week", help="Show the weekly chore grid")
    week.add_argument("--date", type=_parse_date, default=None, help="Any day of the week, YYYY-MM-DD")

    month = subparsers.add_parser("month", help="Show who has chores on each day of a month")
    month.add_argument("--month", type=_parse_month, default=None, help="YYYY-MM")
    return parser


def run_server(host: str, port: int, reload: bool = False) -> None:
    uvicorn.run("main:app", host=host, port=port, reload=reload)


def run_command(args: argparse.Namespace, api: ApiClient) -> str:
    board = ChoreBoard(api)

    if args.command == "create-family":
        snapshot = board.create_family(args.name, args.admin_email, args.admin_password)
        save_session(board)
        return f"Created {snapshot.name} ({snapshot.id}) with chores: " + ", ".join(
            c["label"] for c in snapshot.chores
        )

    if args.command == "login-admin":
        snapshot = board.login_admin(args.email, args.password)
        save_session(board)
        return f"Logged in as admin of {snapshot.name}"

    if args.command == "login-member":
        snapshot = board.login_member(args.email)
        save_session(board)
        person = snapshot.person(board.viewing_person_id)
        return f"Logged in as {person['name'] if person else args.email} ({snapshot.name})"

    if args.command == "logout":
        board.logout()
        clear_session()
        return "Logged out"

    restore_session(board)
    if args.command == "week":
        if args.date:
            board.set_week(args.date)
        board.load_family()
        return render_week(board)

    if args.command == "month":
        if args.month:
            board.set_week(args.month)
            board.set_month(args.month)
        board.load_family()
        return render_month(board)

    raise BoardError(f"Unknown command {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s - %(message)s")

    if args.command == "serve":
        run_server(args.host, args.port, args.reload)
        return 0

    with ApiClient(base_url=args.api_url, token_file=state_dir() / "token") as api:
        try:
            print(run_command(args, api))
        except (ApiError, BoardError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except httpx.HTTPError as e:
            logger.debug("Request failed", exc_info=True)
            print(f"Could not reach {api.base_url}", file=sys.stderr)
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
