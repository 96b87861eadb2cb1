"""
End-to-end tests for the typer CLI against a throwaway database.

Every invocation passes ``--config`` pointing at a TOML file whose database
lives under ``tmp_path``.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from inventory_tracker.cli import app

runner = CliRunner()

TEMPLATE = Path(__file__).resolve().parents[2] / "config" / "items" / "item_import_template.csv"


@pytest.fixture
def cli(tmp_path, monkeypatch):
    """Return ``invoke(*args)`` bound to a temporary config."""
    monkeypatch.delenv("INVENTORY_TRACKER_DB_PATH", raising=False)
    monkeypatch.delenv("INVENTORY_TRACKER_LOG_LEVEL", raising=False)
    config_path = tmp_path / "test.toml"
    config_path.write_text(
        "[database]\n"
        f"db_path = {json.dumps(str(tmp_path / 'inventory.db'))}\n"
        "wal_mode = false\n"
        "[data]\n"
        f"export_dir = {json.dumps(str(tmp_path / 'exports'))}\n"
        "[logging]\n"
        'level = "WARNING"\n'
        'log_file = ""\n',
        encoding="utf-8",
    )

    def invoke(*args: str):
        return runner.invoke(app, [*args, "--config", str(config_path)])

    return invoke


def _add_paper(cli, **overrides) -> None:
    opts = {"--name": "A4 Paper", "--category": "stationery", "--stock": "45",
            "--reorder-level": "20", "--daily-usage": "2.5", "--unit-price": "5.99"}
    opts.update(overrides)
    args = [part for kv in opts.items() for part in kv]
    result = cli("add-item", *args)
    assert result.exit_code == 0, result.output


def test_init_db(cli, tmp_path):
    result = cli("init-db")
    assert result.exit_code == 0, result.output
    assert "[OK] Database ready." in result.output
    assert (tmp_path / "inventory.db").exists()


def test_validate_config(cli):
    result = cli("validate-config")
    assert result.exit_code == 0
    assert "Lead time (days):  7" in result.output


def test_missing_config_file():
    result = runner.invoke(app, ["list-items", "--config", "/nonexistent/config.toml"])
    assert result.exit_code == 1
    assert "[ERROR]" in result.output


def test_add_and_list_items(cli):
    _add_paper(cli)
    result = cli("list-items")
    assert result.exit_code == 0
    assert "A4 Paper" in result.output
    assert "Healthy" in result.output


def test_add_item_invalid_category(cli):
    result = cli("add-item", "--name", "Soup", "--category", "food")
    assert result.exit_code == 1
    assert "[ERROR]" in result.output


def test_usage_restock_and_delete_usage(cli):
    _add_paper(cli, **{"--stock": "10"})
    result = cli("record-usage", "1", "4", "--date", "2026-03-10", "--notes", "print run")
    assert result.exit_code == 0, result.output
    assert "stock now 6 (Low)" in result.output
    assert "[ALERT]" in result.output

    result = cli("restock", "1", "30")
    assert "stock now 36 (Healthy)" in result.output

    result = cli("delete-usage", "1")
    assert result.exit_code == 0
    assert "stock restored to 40" in result.output


def test_record_usage_rejects_zero(cli):
    _add_paper(cli)
    result = cli("record-usage", "1", "0")
    assert result.exit_code == 1
    assert "positive integer" in result.output


def test_record_usage_unknown_item(cli):
    cli("init-db")
    result = cli("record-usage", "99", "1")
    assert result.exit_code == 1
    assert "Item 99 not found." in result.output


def test_update_and_delete_item(cli):
    _add_paper(cli)
    result = cli("update-item", "1", "--reorder-level", "50")
    assert result.exit_code == 0
    assert "(Low)" in result.output
    result = cli("delete-item", "1")
    assert "[OK] Deleted item 1: A4 Paper" in result.output
    assert "no items" in cli("list-items").output


def test_update_item_requires_option(cli):
    result = cli("update-item", "1")
    assert result.exit_code == 1
    assert "Nothing to update" in result.output


def test_import_items(cli):
    result = cli("import-items", str(TEMPLATE), "--dry-run")
    assert "[DRY RUN] 6 item(s) validated" in result.output
    assert "no items" in cli("list-items").output

    result = cli("import-items", str(TEMPLATE))
    assert result.exit_code == 0
    assert "[OK] Imported 6 item(s)" in result.output


def test_forecast_recommend_alerts_order(cli, tmp_path):
    cli("import-items", str(TEMPLATE))

    result = cli("forecast", "--today", "2026-03-01")
    assert result.exit_code == 0
    lines = [l for l in result.output.splitlines() if "Printer Cartridge" in l or "Laptop" in l]
    assert "Printer Cartridge" in lines[0]

    result = cli("recommend")
    assert "Urgent: Out of Stock Items" in result.output
    assert "Printer Cartridge" in result.output

    result = cli("alerts")
    assert "Out of Stock!" in result.output

    export = tmp_path / "order.csv"
    result = cli("order-request", "--export", str(export))
    assert result.exit_code == 0
    with export.open(newline="", encoding="utf-8") as f:
        names = [row["name"] for row in csv.DictReader(f)]
    assert names == ["Ballpoint Pens", "Stapler", "Printer Cartridge", "Desk Chair"]


def test_dashboard(cli):
    cli("import-items", str(TEMPLATE))
    cli("record-usage", "1", "3", "--date", "2026-03-09")
    result = cli("dashboard", "--today", "2026-03-10")
    assert result.exit_code == 0
    assert "Total items:      6" in result.output
    assert "[TOP USED]" in result.output
    assert "Peak 2026-03-09 (3)" in result.output


def test_suppliers(cli):
    result = cli(
        "add-supplier", "--name", "Tech Hub", "--contact", "Sarah", "--email",
        "Sarah@TechHub.com", "--phone", "555-0102", "--category", "electronics",
    )
    assert result.exit_code == 0, result.output
    assert "sarah@techhub.com" in cli("list-suppliers").output
    assert "[OK] Deleted supplier 1" in cli("delete-supplier", "1").output


def test_audit_log(cli):
    _add_paper(cli)
    cli("restock", "1", "5")
    result = cli("audit-log")
    assert "Restocked 5 of A4 Paper" in result.output
    assert "Added new item: A4 Paper" in result.output

    result = cli("audit-log", "--action", "restock")
    assert "Added new item" not in result.output

    result = cli("audit-log", "--action", "rename")
    assert result.exit_code != 0


def test_export_forecast(cli, tmp_path):
    cli("import-items", str(TEMPLATE))
    result = cli("export-forecast", "--format", "json", "--today", "2026-03-01")
    assert result.exit_code == 0, result.output
    written = tmp_path / "exports" / "forecast_2026-03-01.json"
    payload = json.loads(written.read_text(encoding="utf-8"))
    assert len(payload["rows"]) == 6
    assert payload["rows"][0]["name"] == "Printer Cartridge"


def test_list_items_export(cli, tmp_path):
    cli("import-items", str(TEMPLATE))
    out = tmp_path / "inventory.csv"
    result = cli("list-items", "--export", str(out))
    assert "[OK] 6 item(s) written" in result.output
    assert out.exists()


def test_clear_data(cli):
    _add_paper(cli)
    result = cli("clear-data", "--yes")
    assert result.exit_code == 0
    assert "[OK] All data cleared." in result.output
    assert "no items" in cli("list-items").output


def test_add_item_non_finite_usage_is_rejected(cli):
    result = cli("add-item", "--name", "Pens", "--category", "stationery",
                 "--reorder-level", "5", "--daily-usage", "nan")
    assert result.exit_code == 1
    assert "[ERROR]" in result.output
    assert "finite" in result.output
    assert "no items" in cli("list-items").output


def test_list_usage(cli):
    _add_paper(cli)
    _add_paper(cli, **{"--name": "Stapler", "--category": "equipment"})
    cli("record-usage", "1", "2", "--date", "2026-03-01")
    cli("record-usage", "2", "1", "--date", "2026-03-05")
    cli("record-usage", "1", "4", "--date", "2026-03-09", "--notes", "print run")

    result = cli("list-usage")
    assert result.exit_code == 0, result.output
    rows = [l for l in result.output.splitlines() if "2026-03-" in l]
    assert [r.split()[0] for r in rows] == ["3", "2", "1"]
    assert "print run" in rows[0]
    assert "3 record(s), 7 unit(s)" in result.output

    result = cli("list-usage", "--item", "1")
    assert "Stapler" not in result.output
    assert "2 record(s), 6 unit(s)" in result.output

    result = cli("list-usage", "--item", "1", "--since", "2026-03-05")
    assert "1 record(s), 4 unit(s)" in result.output

    result = cli("list-usage", "--since", "2026-03-05", "--limit", "1")
    assert "Showing 1 of 2 records" in result.output


def test_list_usage_empty_and_bad_date(cli):
    assert "(no usage recorded)" in cli("list-usage").output
    result = cli("list-usage", "--since", "yesterday")
    assert result.exit_code != 0


def test_update_supplier(cli):
    cli(
        "add-supplier", "--name", "Tech Hub", "--contact", "Sarah", "--email",
        "sarah@techhub.com", "--phone", "555-0102",
    )
    result = cli("update-supplier", "1", "--rating", "5", "--phone", "555-0199")
    assert result.exit_code == 0, result.output
    assert "[OK] Updated supplier 1: Tech Hub" in result.output
    assert "555-0199" in cli("list-suppliers").output
    assert "Updated supplier: Tech Hub" in cli("audit-log", "--action", "edit").output

    result = cli("update-supplier", "1", "--rating", "9")
    assert result.exit_code == 1
    assert "[ERROR]" in result.output

    result = cli("update-supplier", "7", "--name", "Ghost")
    assert result.exit_code == 1
    assert "not found" in result.output

    assert "Nothing to update" in cli("update-supplier", "1").output


def test_clear_audit(cli):
    _add_paper(cli)
    cli("restock", "1", "5")
    result = cli("clear-audit", "--yes")
    assert result.exit_code == 0, result.output
    assert "(2 entries removed)" in result.output
    assert "(no entries match)" in cli("audit-log").output
    assert "A4 Paper" in cli("list-items").output
