import importlib.util
from datetime import datetime, timezone
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "export_trades_csv.py"


def _load_script():
    found = importlib.util.spec_from_file_location("export_trades_csv", SCRIPT)
    module = importlib.util.module_from_spec(found)
    found.loader.exec_module(module)
    return module


def test_default_output_name_uses_timestamp():
    script = _load_script()

    name = script.default_output_name(datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc))

    assert name == "trades_export_20240305_140709.csv"


def test_default_output_name_defaults_to_now():
    script = _load_script()

    name = script.default_output_name()

    assert name.startswith("trades_export_")
    assert name.endswith(".csv")
