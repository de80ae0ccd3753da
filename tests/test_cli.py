"""
End-to-end tests for the tic-convert command.
"""

import json

from click.testing import CliRunner

from tic_converter.cli import main
from tic_converter.types import ValidationResult, Finding

CSV_TEXT = (
    "Hospital Name,Last Updated,Address,License\n"
    "H\xf4pital G\xe9n\xe9ral,02_10_2024,1 Main St,12-3456789\n"
    "\n"
    "CPT_Code,Rev_Code,Description,Setting,Gross,Cash,Min,Max,Notes,AETNA_PPO100,CIGNA,AETNA_HMO\n"
    '99213,0450,Office visit,Outpatient,500,400,100,900,,"1,234.50",Not on Fee Schedule,200\n'
    "CPT_Code,Rev_Code,Description,Setting,Gross,Cash,Min,Max,Notes,AETNA_PPO100,CIGNA,AETNA_HMO\n"
    "T2025,Not Applicable,Waiver,Inpatient,500,400,100,900,,0,-1,\n"
)


def _write_csv(tmp_path, text=CSV_TEXT, name="export.csv"):
    p = tmp_path / name
    p.write_bytes(text.encode("latin-1"))
    return p


def test_convert_end_to_end(tmp_path):
    src = _write_csv(tmp_path)
    out = tmp_path / "in_network_rates.json"

    result = CliRunner().invoke(main, [str(src), str(out)])

    assert result.exit_code == 0, result.output
    assert "Hospital: Hôpital Général" in result.output
    assert "Last Updated: 2024-02-10" in result.output
    assert "Expiration Date: 2025-02-09" in result.output
    assert "Processed 2 in-network entries" in result.output
    assert "Total negotiated rates: 2" in result.output

    doc = json.loads(out.read_text(encoding="utf-8"))
    assert doc["reporting_entity_name"] == "Hôpital Général"
    assert doc["last_updated_on"] == "2024-02-10"
    first, second = doc["in_network"]
    assert first["billing_code_modifier"] == ["0450"]
    assert [g["negotiated_prices"][0]["negotiated_rate"] for g in first["negotiated_rates"]] == [1234.5, 200.0]
    assert second["billing_code_type"] == "HCPCS"
    assert second["negotiated_rates"] == []
    assert "billing_code_modifier" not in second


def test_output_is_byte_identical_across_runs(tmp_path):
    src = _write_csv(tmp_path)
    out1, out2 = tmp_path / "a.json", tmp_path / "b.json"
    runner = CliRunner()
    assert runner.invoke(main, [str(src), str(out1)]).exit_code == 0
    assert runner.invoke(main, [str(src), str(out2)]).exit_code == 0
    assert out1.read_bytes() == out2.read_bytes()


def test_default_paths(tmp_path):
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        with open("Pricing_Transparency_file_Nov_2025_GA_Facility_.csv", "wb") as f:
            f.write(CSV_TEXT.encode("latin-1"))
        result = runner.invoke(main, [])
        assert result.exit_code == 0, result.output
        with open("in_network_rates.json", encoding="utf-8") as f:
            assert len(json.load(f)["in_network"]) == 2


def test_missing_input_exits_non_zero(tmp_path):
    out = tmp_path / "out.json"
    result = CliRunner().invoke(main, [str(tmp_path / "nope.csv"), str(out)])
    assert result.exit_code == 1
    assert "Error during conversion" in result.output
    assert not out.exists()


def test_bad_date_writes_nothing(tmp_path):
    src = _write_csv(tmp_path, CSV_TEXT.replace("02_10_2024", "2024-02-10"))
    out = tmp_path / "out.json"
    result = CliRunner().invoke(main, [str(src), str(out)])
    assert result.exit_code == 1
    assert not out.exists()


def test_json_input_is_rejected(tmp_path):
    src = tmp_path / "export.csv"
    src.write_text('{"reporting_entity_name": "x"}', encoding="utf-8")
    out = tmp_path / "out.json"
    result = CliRunner().invoke(main, [str(src), str(out)])
    assert result.exit_code == 1
    assert "expected a CSV export" in result.output
    assert not out.exists()


def test_json_summary_format(tmp_path):
    src = _write_csv(tmp_path)
    out = tmp_path / "out.json"
    result = CliRunner().invoke(main, [str(src), str(out), "--format", "json"])
    assert result.exit_code == 0
    start = result.output.index('{\n  "summary"')
    parsed = json.loads(result.output[start:])
    assert parsed["summary"]["entries"] == 2
    assert parsed["summary"]["skipped_rows"] == 1
    assert parsed["validation"]["ok"] is True


def test_human_summary_without_validation(tmp_path):
    src = _write_csv(tmp_path)
    out = tmp_path / "out.json"
    result = CliRunner().invoke(main, [str(src), str(out), "--format", "human", "--no-validate"])
    assert result.exit_code == 0
    assert "Conversion Summary" in result.output
    assert out.exists()


def test_schema_failure_writes_nothing(tmp_path, monkeypatch):
    failing = ValidationResult(
        ok=False,
        schema_version="v1.0.0",
        findings=[Finding(severity="error", rule="jsonschema", message="'x' is not one of ['v1.0.0']", field="$.version")],
    )
    monkeypatch.setattr("tic_converter.converter.validate_document", lambda data: failing)
    src = _write_csv(tmp_path)
    out = tmp_path / "out.json"

    result = CliRunner().invoke(main, [str(src), str(out)])

    assert result.exit_code == 1
    assert "failed schema validation" in result.output
    assert "$.version" in result.output
    assert not out.exists()
    assert list(tmp_path.iterdir()) == [src]


def test_bracketed_title_row_converts(tmp_path):
    src = _write_csv(tmp_path, "[Price List]" + CSV_TEXT[len("Hospital Name"):])
    out = tmp_path / "out.json"
    result = CliRunner().invoke(main, [str(src), str(out)])
    assert result.exit_code == 0, result.output
    assert len(json.loads(out.read_text(encoding="utf-8"))["in_network"]) == 2
