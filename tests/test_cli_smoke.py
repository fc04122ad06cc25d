import pandas as pd

from household_plan.__main__ import main
from tests.helpers import clone_scenario, write_scenario


def test_cli_builtin_summary(capsys):
    assert main(["--months", "12", "--summary"]) == 0
    out = capsys.readouterr().out

    assert "Months: 12" in out
    assert "Ending net worth:" in out
    assert "Reconciliation: all years balance" in out


def test_cli_writes_csv_files(tmp_path, scenario_dict):
    path = write_scenario(tmp_path, scenario_dict)
    monthly = tmp_path / "monthly.csv"
    annual = tmp_path / "annual.csv"

    assert main([str(path), "--csv", str(monthly), "--reconciliation-csv", str(annual)]) == 0
    assert len(pd.read_csv(monthly)) == 24
    assert pd.read_csv(annual)["Year"].tolist() == [1, 2]


def test_cli_validate_only(tmp_path, scenario_dict, capsys):
    path = write_scenario(tmp_path, scenario_dict)
    assert main([str(path), "--validate"]) == 0
    assert "Scenario is valid." in capsys.readouterr().out


def test_cli_missing_file_returns_two(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json")]) == 2
    assert "Failed to load scenario" in capsys.readouterr().err


def test_cli_schema_error_returns_two(tmp_path, scenario_dict):
    data = clone_scenario(scenario_dict)
    del data["income_by_year"]
    assert main([str(write_scenario(tmp_path, data))]) == 2


def test_cli_invalid_scenario_returns_one(tmp_path, scenario_dict, capsys):
    data = clone_scenario(scenario_dict)
    data["filing_status"] = "HOH"
    assert main([str(write_scenario(tmp_path, data))]) == 1
    assert "Filing status" in capsys.readouterr().err


def test_cli_variant_option(capsys):
    assert main(["--variant", "charity", "--months", "6", "--summary"]) == 0
    assert "Months: 6" in capsys.readouterr().out


def test_cli_null_age_returns_two(tmp_path, scenario_dict, capsys):
    data = clone_scenario(scenario_dict)
    data["ages"]["primary"] = None
    assert main([str(write_scenario(tmp_path, data))]) == 2
    assert "ages.primary" in capsys.readouterr().err
