from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from wage_engine.core.audit import DatabaseAuditSink
from wage_engine.core.config import settings
from wage_engine.core.errors import WageEngineError
from wage_engine.core.identity import Caller, Role
from wage_engine.core.logging import configure_logging
from wage_engine.db import session as db
from wage_engine.domains.wages.approval import approve_calculation
from wage_engine.domains.wages.calculator import WageCalculator
from wage_engine.domains.wages.documents import render_slip
from wage_engine.domains.wages.slip import load_slip_view
from wage_engine.domains.wages.templates import build_template_registry, list_template_options, resolve_template
from wage_engine.seed.seed_data import seed


def _caller(args: argparse.Namespace) -> Caller:
    return Caller(
        id=args.actor,
        role=Role(args.role),
        organization_id=args.organization,
        worker_id=getattr(args, "worker", None),
    )


def init_db(_: argparse.Namespace) -> None:
    db.Base.metadata.create_all(bind=db.engine)
    print(f"Created tables on {db.engine.url.render_as_string(hide_password=True)}")


def seed_demo(args: argparse.Namespace) -> None:
    with db.session_scope() as session:
        seed(session, year=args.year, month=args.month)
    print(f"Seeded demo organizations, workers and attendance for {args.year}-{args.month:02d}")


def calculate(args: argparse.Namespace) -> None:
    with db.session_scope() as session:
        run = WageCalculator(session, DatabaseAuditSink(session)).calculate_monthly(
            args.organization, args.year, args.month, actor_id=args.actor
        )
        items = [item.to_dict() for item in run.items]
    print(json.dumps({"count": len(items), "items": items}, indent=2, ensure_ascii=False))


def approve(args: argparse.Namespace) -> None:
    with db.session_scope() as session:
        calculation = approve_calculation(session, args.id, _caller(args), DatabaseAuditSink(session))
        print(json.dumps(calculation.to_dict(), indent=2, ensure_ascii=False))


def render(args: argparse.Namespace) -> None:
    registry = build_template_registry()
    template = resolve_template(registry, args.template or settings.municipality_template)
    with db.session_scope() as session:
        view = load_slip_view(session, args.id, _caller(args))
    document = render_slip(view, template, args.format)

    if args.output:
        output_path = Path(args.output)
        if output_path.is_dir():
            output_path = output_path / document.filename
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(document.content)
        print(f"Slip exported to {output_path}")
    else:
        sys.stdout.buffer.write(document.content)


def templates(_: argparse.Namespace) -> None:
    registry = build_template_registry()
    current = resolve_template(registry, settings.municipality_template)
    print(json.dumps({"current": current.option(), "available": list_template_options(registry)}, indent=2))


def _add_identity(cmd: argparse.ArgumentParser, worker: bool = False) -> None:
    cmd.add_argument("--organization", required=True)
    cmd.add_argument("--actor", required=True, help="Id recorded as the acting user")
    cmd.add_argument("--role", choices=[role.value for role in Role], default=Role.ADMIN.value)
    if worker:
        cmd.add_argument("--worker", help="Worker id when acting with the user role")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wage settlement utility")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_cmd = subparsers.add_parser("init-db", help="Create database tables")
    init_cmd.set_defaults(func=init_db)

    seed_cmd = subparsers.add_parser("seed", help="Load demo data")
    seed_cmd.add_argument("--year", type=int, default=2026)
    seed_cmd.add_argument("--month", type=int, default=2)
    seed_cmd.set_defaults(func=seed_demo)

    calc_cmd = subparsers.add_parser("calculate", help="Run the monthly wage calculation")
    _add_identity(calc_cmd)
    calc_cmd.add_argument("--year", type=int, required=True)
    calc_cmd.add_argument("--month", type=int, required=True)
    calc_cmd.set_defaults(func=calculate)

    approve_cmd = subparsers.add_parser("approve", help="Approve a wage calculation")
    approve_cmd.add_argument("--id", required=True)
    _add_identity(approve_cmd)
    approve_cmd.set_defaults(func=approve)

    render_cmd = subparsers.add_parser("render", help="Render a wage slip")
    render_cmd.add_argument("--id", required=True)
    _add_identity(render_cmd, worker=True)
    render_cmd.add_argument("--format", choices=["json", "csv", "pdf"], default="json")
    render_cmd.add_argument("--template", help="Municipality template code")
    render_cmd.add_argument("--output", help="Output file or directory")
    render_cmd.set_defaults(func=render)

    templates_cmd = subparsers.add_parser("templates", help="List municipality templates")
    templates_cmd.set_defaults(func=templates)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(settings.log_level)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except WageEngineError as exc:
        print(f"error: {exc.code}: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
