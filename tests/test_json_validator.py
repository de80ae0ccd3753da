"""
Tests for checking assembled documents against the bundled schema
"""

import copy

from tic_converter.converter import convert_rows
from tic_converter.json_validator import validate_document
from tic_converter.types import ValidationResult


def _document():
    rows = [
        ["Hospital Name", "Last Updated", "Address", "License"],
        ["General Hospital", "03_15_2025", "1 Main St", "12-3456789"],
        [],
        ["CPT_Code", "Rev_Code", "Description", "Setting", "", "", "", "", "", "AETNA_PPO", "CIGNA"],
        ["99213", "0450", "Office visit", "Outpatient", "", "", "", "", "", "100", "200"],
        ["H0001", "Not Applicable", "Assessment", "Inpatient", "", "", "", "", "", "", ""],
    ]
    return convert_rows(rows)[0].to_dict()


class TestValidateDocument:
    """Test cases for document validation"""

    def test_converted_document_is_valid(self):
        result = validate_document(_document())
        assert isinstance(result, ValidationResult)
        assert result.ok is True
        assert result.findings == []
        assert result.schema_version == "v1.0.0"
        assert result.summary["in_network"] == 2

    def test_missing_top_level_field(self):
        data = _document()
        del data["in_network"]
        result = validate_document(data)
        assert result.ok is False
        assert result.counts()["errors"] >= 1
        assert any("in_network" in f.message for f in result.findings)

    def test_non_positive_rate_is_reported_with_path(self):
        data = copy.deepcopy(_document())
        data["in_network"][0]["negotiated_rates"][0]["negotiated_prices"][0]["negotiated_rate"] = 0
        result = validate_document(data)
        assert result.ok is False
        fields = [f.field for f in result.findings]
        assert "$.in_network[0].negotiated_rates[0].negotiated_prices[0].negotiated_rate" in fields

    def test_bad_enum_value(self):
        data = _document()
        data["in_network"][1]["billing_code_type"] = "ICD"
        result = validate_document(data)
        assert result.ok is False
        finding = result.findings[0]
        assert finding.field == "$.in_network[1].billing_code_type"
        assert finding.actual == "'ICD'"
