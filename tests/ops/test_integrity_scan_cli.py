import json
from datetime import datetime
from decimal import Decimal

from app.ops.integrity_scan import main, run_scan
from app.techno.db.models import Project, Store, StoreBalance


def _store_with_balance(db_session, *, status: str, on_hand: str):
    db_session.add(Project(code=55, name="Project Scan"))
    now = datetime.utcnow()
    store = Store(project_code=55, name="Store Scan", status=status, created_at=now, modified_at=now)
    db_session.add(store)
    db_session.flush()
    db_session.add(
        StoreBalance(
            store_id=store.id,
            item_code="ITEM-1",
            quantity_on_hand=Decimal(on_hand),
            quantity_reserved=Decimal("0"),
            created_at=now,
        )
    )
    db_session.commit()
    return store


def test_integrity_scan_no_findings(db_session, capsys):
    _store_with_balance(db_session, status="ACTIVE", on_hand="3")

    database_url = db_session.get_bind().url.render_as_string(hide_password=False)
    exit_code = run_scan("55", "json", False, database_url=database_url)
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["summary"]["total"] == 0


def test_integrity_scan_warn_does_not_fail(db_session, capsys):
    _store_with_balance(db_session, status="INACTIVE", on_hand="3")

    database_url = db_session.get_bind().url.render_as_string(hide_password=False)
    exit_code = run_scan("all", "json", True, database_url=database_url)
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["summary"]["warn"] == 1
    assert payload["findings"][0]["check_id"] == "inactive_store_with_balance"


def test_integrity_scan_critical_exit(db_session, capsys):
    _store_with_balance(db_session, status="ACTIVE", on_hand="-2")

    database_url = db_session.get_bind().url.render_as_string(hide_password=False)
    exit_code = run_scan("55", "text", True, database_url=database_url)
    output = capsys.readouterr().out

    assert exit_code == 1
    assert "CRITICAL: 1" in output
    assert "negative_balance" in output


def test_integrity_scan_cli_requires_project():
    try:
        main([])
    except SystemExit as exc:
        assert exc.code == 2
    else:
        raise AssertionError("expected argparse to exit")


def test_integrity_scan_cli_rejects_non_numeric_project(capsys):
    try:
        main(["--project", "abc"])
    except SystemExit as exc:
        assert exc.code == 2
    else:
        raise AssertionError("expected argparse to exit")

    assert "--project must be a numeric project code or 'all'" in capsys.readouterr().err
