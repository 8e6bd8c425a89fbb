import json
from datetime import date

import pytest

from helpers import TestingSessionLocal, add_calculation, add_interval, add_rate, engine, utc
from wage_engine import cli
from wage_engine.db import session as db_session
from wage_engine.models import Worker


@pytest.fixture(autouse=True)
def use_test_database(monkeypatch):
    monkeypatch.setattr(db_session, "SessionLocal", TestingSessionLocal)
    monkeypatch.setattr(db_session, "engine", engine)


def test_calculate_prints_created_rows(capsys, session, org_setup):
    add_interval(session, "w-1", utc(2026, 2, 1, 0), utc(2026, 2, 1, 8))
    add_rate(session, "w-1", "1200", date(2026, 1, 1))

    exit_code = cli.main(
        ["calculate", "--organization", "org-1", "--actor", "ops", "--year", "2026", "--month", "2"]
    )

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["count"] == 1
    assert output["items"][0]["gross_amount"] == 9600


def test_render_pdf_into_directory(tmp_path, capsys, session, org_setup):
    calculation = add_calculation(session)

    exit_code = cli.main(
        [
            "render",
            "--id",
            calculation.id,
            "--organization",
            "org-1",
            "--actor",
            "ops",
            "--format",
            "pdf",
            "--output",
            str(tmp_path),
        ]
    )

    assert exit_code == 0
    written = tmp_path / f"wage-slip-{calculation.id}-202602.pdf"
    assert written.read_bytes().startswith(b"%PDF-1.4\n")
    assert str(written) in capsys.readouterr().out


def test_approve_from_other_organization_fails(capsys, session, org_setup):
    calculation = add_calculation(session)

    exit_code = cli.main(["approve", "--id", calculation.id, "--organization", "org-2", "--actor", "ops"])

    assert exit_code == 1
    assert "organization_forbidden" in capsys.readouterr().err


def test_templates_lists_codes(capsys):
    cli.main(["templates"])

    output = json.loads(capsys.readouterr().out)
    assert [option["code"] for option in output["available"]] == ["fukuoka", "kumamoto", "saga"]


def test_seed_loads_demo_data(capsys):
    assert cli.main(["seed"]) == 0

    with db_session.session_scope() as session:
        assert session.query(Worker).count() == 3


def test_approve_writes_only_the_calculation_to_stdout(capsys, session, org_setup):
    calculation = add_calculation(session)

    exit_code = cli.main(["approve", "--id", calculation.id, "--organization", "org-1", "--actor", "ops"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "audit_recorded" not in out
    assert "wage_calculation_approved" not in out
    payload = json.loads(out)
    assert payload["status"] == "approved"
    assert payload["approved_by"] == "ops"
