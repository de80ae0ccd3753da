from __future__ import annotations
from typing import Optional, Union
from pathlib import Path
from .types import ConversionSummary, OutputDocument, ValidationResult
from rich.console import Console
from rich.table import Table
import json, os, stat, sys, tempfile

def dumps_document(doc: OutputDocument) -> str:
    return json.dumps(doc.to_dict(), indent=2, ensure_ascii=False)

def _target_mode(path: Path) -> int:
    # keep an existing file's mode, otherwise what open() would give under the umask
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

def write_document(doc: OutputDocument, path: Union[str, Path]) -> Path:
    """
    Serialize ``doc`` and move it into place at ``path``.

    The text is written to a temporary file next to the target and renamed
    over it, so a failed run never leaves a truncated document behind.
    """
    path = Path(path)
    text = dumps_document(doc)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.chmod(tmp, _target_mode(path))
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
    return path

def to_human(summary: ConversionSummary, validation: Optional[ValidationResult] = None, *, stream=None):
    c = Console(file=stream or sys.stdout, highlight=False)
    c.rule("[bold]Conversion Summary")
    t = Table(show_header=True)
    t.add_column("Label"); t.add_column("Value")
    t.add_row("Hospital", summary.hospital_name)
    t.add_row("Last Updated", summary.last_updated_on)
    t.add_row("Expiration Date", summary.expiration_date)
    t.add_row("In-network entries", str(summary.entries))
    t.add_row("Negotiated rates", str(summary.rate_groups))
    t.add_row("Skipped rows", str(summary.skipped_rows))
    if summary.output_path:
        t.add_row("Output", summary.output_path)
    c.print(t)
    if validation is not None:
        counts = validation.counts()
        c.print(f"Schema: {validation.schema_version or '-'} • "
                f"[bold red]{counts['errors']} errors[/], [bold yellow]{counts['warnings']} warnings[/]")
        if validation.findings:
            ft = Table(title="Findings", show_header=True)
            for col in ("severity","rule","field","message","expected","actual"):
                ft.add_column(col)
            for f in validation.findings:
                ft.add_row(f.severity, f.rule, f.field or "", f.message, f.expected or "", f.actual or "")
            c.print(ft)

def to_json(summary: ConversionSummary, validation: Optional[ValidationResult] = None) -> str:
    out = {"summary": summary.__dict__}
    if validation is not None:
        out["validation"] = {
            "ok": validation.ok,
            "schema_version": validation.schema_version,
            "counts": validation.counts(),
            "findings": [f.__dict__ for f in validation.findings],
        }
    return json.dumps(out, indent=2)
