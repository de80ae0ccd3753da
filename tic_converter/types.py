from dataclasses import dataclass, field as dataclass_field
from typing import List, Optional, Dict, Any, Literal

Severity = Literal["error", "warning", "info"]
BillingCodeType = Literal["HCPCS", "CPT"]
BillingClass = Literal["institutional", "professional"]


class ConversionError(Exception):
    """Fatal failure; the run stops before any output is written."""


class FormatError(ConversionError, ValueError):
    """Input does not follow the fixed export layout."""


class SchemaValidationError(ConversionError):
    def __init__(self, result: "ValidationResult"):
        self.result = result
        errors = [f for f in result.findings if f.severity == "error"]
        first = errors[0] if errors else None
        detail = f"{first.field}: {first.message}" if first else "unknown error"
        super().__init__(f"Output document failed schema validation ({len(errors)} errors, first: {detail})")


@dataclass(frozen=True)
class SourceMetadata:
    hospital_name: str
    last_updated_raw: str             # MM_DD_YYYY
    hospital_address: str
    license_number: str
    last_updated_on: str              # YYYY-MM-DD
    expiration_date: str              # last_updated_on + 365 days


@dataclass(frozen=True)
class NegotiatedPrice:
    negotiated_rate: float
    expiration_date: str
    billing_class: BillingClass
    negotiated_type: str = "fee schedule"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "negotiated_type": self.negotiated_type,
            "negotiated_rate": self.negotiated_rate,
            "expiration_date": self.expiration_date,
            "billing_class": self.billing_class,
        }


@dataclass(frozen=True)
class NegotiatedRateGroup:
    tin_value: str
    negotiated_prices: List[NegotiatedPrice]
    tin_type: str = "ein"
    npi: List[int] = dataclass_field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider_groups": [{
                "npi": list(self.npi),
                "tin": {"type": self.tin_type, "value": self.tin_value},
            }],
            "negotiated_prices": [p.to_dict() for p in self.negotiated_prices],
        }


@dataclass(frozen=True)
class BillingCodeEntry:
    billing_code: str
    billing_code_type: BillingCodeType
    description: str
    negotiated_rates: List[NegotiatedRateGroup]
    modifier: Optional[List[str]] = None
    negotiation_arrangement: str = "ffs"
    billing_code_type_version: str = "2024"

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "negotiation_arrangement": self.negotiation_arrangement,
            "name": self.description,
            "billing_code_type": self.billing_code_type,
            "billing_code_type_version": self.billing_code_type_version,
            "billing_code": self.billing_code,
            "description": self.description,
            "negotiated_rates": [g.to_dict() for g in self.negotiated_rates],
        }
        if self.modifier:
            out["billing_code_modifier"] = list(self.modifier)
        return out


@dataclass(frozen=True)
class OutputDocument:
    reporting_entity_name: str
    last_updated_on: str
    in_network: List[BillingCodeEntry]
    reporting_entity_type: str = "hospital"
    version: str = "v1.0.0"

    def rate_group_count(self) -> int:
        return sum(len(e.negotiated_rates) for e in self.in_network)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reporting_entity_name": self.reporting_entity_name,
            "reporting_entity_type": self.reporting_entity_type,
            "last_updated_on": self.last_updated_on,
            "version": self.version,
            "in_network": [e.to_dict() for e in self.in_network],
        }


@dataclass
class ConversionSummary:
    hospital_name: str
    last_updated_on: str
    expiration_date: str
    entries: int = 0
    rate_groups: int = 0
    skipped_rows: int = 0
    output_path: Optional[str] = None


@dataclass
class Finding:
    severity: Severity
    rule: str
    message: str
    field: Optional[str] = None       # JSON path
    expected: Optional[str] = None
    actual: Optional[str] = None
    context: Dict[str, Any] = dataclass_field(default_factory=dict)


@dataclass
class ValidationResult:
    ok: bool
    schema_version: Optional[str] = None
    summary: Dict[str, Any] = dataclass_field(default_factory=dict)
    findings: List[Finding] = dataclass_field(default_factory=list)

    def counts(self):
        from collections import Counter
        c = Counter(f.severity for f in self.findings)
        return {"errors": c.get("error", 0), "warnings": c.get("warning", 0), "info": c.get("info", 0)}
