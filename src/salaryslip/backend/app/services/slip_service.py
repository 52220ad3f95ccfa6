"""Assemble, validate, persist and render salary slips."""

from __future__ import annotations

import csv
import json
import logging
import os
import sqlite3
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from html import escape
from io import StringIO
from threading import Lock
from typing import Any, Callable, Iterable, List, Mapping
from uuid import uuid4

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from pydantic import ValidationError

from salaryslip.backend.app.errors import FormatViolation, InvalidInput
from salaryslip.backend.app.models import (
    DEDUCTION_FIELDS,
    EARNINGS_COMPONENTS,
    DeductionBreakdown,
    EarningsBreakdown,
    NetResult,
    SalarySlipModel,
    SampleSlipRequest,
    SyntheticIdentity,
    format_validation_error,
)

from .calculation_service import run_pipeline
from .calculators import format_amount
from .generators import generate_gross_salary
from .identity_service import generate_identity, random_source

_LOGGER = logging.getLogger(__name__)

EARNINGS_LABELS: Mapping[str, str] = {
    "gross_salary": "Gross Salary",
    "basic": "Basic Salary",
    "hra": "House Rent Allowance",
    "da": "Dearness Allowance",
    "conveyance_allowance": "Conveyance Allowance",
    "medical_allowance": "Medical Allowance",
    "lta": "Leave Travel Allowance",
    "other_allowances": "Other Allowances",
    "performance_bonus": "Performance Bonus",
}

DEDUCTION_LABELS: Mapping[str, str] = {
    "pf": "Provident Fund",
    "professional_tax": "Professional Tax",
    "tds": "Tax Deducted at Source",
    "esi": "Employee State Insurance",
    "loan_repayments": "Loan Repayments",
}

EMPLOYEE_LABELS: Mapping[str, str] = {
    "employee_id": "Employee ID",
    "pan": "PAN",
    "tan": "TAN",
    "pf_number": "PF Number",
    "esi_number": "ESI Number",
    "designation": "Designation",
    "department": "Department",
    "location": "Location",
    "email": "Email",
}

BANK_LABELS: Mapping[str, str] = {
    "bank_name": "Bank Name",
    "account_number": "Account Number",
    "ifsc_code": "IFSC Code",
}

_FOOTER = "This is a computer-generated salary slip and does not require a signature."


@dataclass(frozen=True)
class SalarySlipRecord:
    """Persisted salary slip with its surrogate identifier."""

    id: str
    payload: Mapping[str, Any]
    created_at: datetime

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            **dict(self.payload),
        }


def build_salary_slip(
    identity: SyntheticIdentity,
    earnings: EarningsBreakdown,
    deductions: DeductionBreakdown,
    net: NetResult,
) -> dict[str, Any]:
    """Combine an identity and a finished calculation into a slip payload."""

    if net.gross_salary != earnings.gross_salary:
        raise ValueError("Net result was computed for a different gross salary")

    return {
        "employee_details": identity.employee_details(),
        "earnings": earnings.as_dict(),
        "deductions": deductions.as_dict(),
        "net_salary": net.net_salary,
    }


def build_sample_slip(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Generate an identity, draw or accept a gross salary and return a full slip.

    Identity generation and the calculation run as two separate steps; the
    result is not persisted.
    """

    if not isinstance(payload, Mapping):
        raise InvalidInput("Payload must be a mapping")
    try:
        request = SampleSlipRequest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInput(format_validation_error(exc, subject="sample request")) from exc

    rng = random_source(request.seed)
    identity = generate_identity(rng)
    if request.gross_salary is None:
        gross: int | float = generate_gross_salary(rng=rng)
    elif float(request.gross_salary).is_integer():
        gross = int(request.gross_salary)
    else:
        gross = request.gross_salary

    earnings, deductions, net = run_pipeline(gross)
    # Generated slips must be accepted by the store as-is.
    return validate_slip_payload(build_salary_slip(identity, earnings, deductions, net))


def validate_slip_payload(payload: Any) -> dict[str, Any]:
    """Check ``payload`` against the salary slip schema.

    Returns a plain copy of the payload so the nested structure is stored as
    submitted; raises :class:`FormatViolation` when the schema is not met.
    """

    if not isinstance(payload, Mapping):
        raise FormatViolation("Salary slip payload must be a JSON object")
    try:
        SalarySlipModel.model_validate(payload)
    except ValidationError as exc:
        raise FormatViolation(format_validation_error(exc, subject="salary slip")) from exc
    return json.loads(json.dumps(payload))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemorySlipRepository:
    """Thread-safe in-memory storage for salary slips."""

    def __init__(
        self,
        *,
        max_items: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if max_items is not None and max_items <= 0:
            raise ValueError("max_items must be positive when provided")

        self._max_items = max_items
        self._clock = clock or _utcnow
        self._records: "OrderedDict[str, SalarySlipRecord]" = OrderedDict()
        self._lock = Lock()

    def _evict_locked(self) -> None:
        if self._max_items is not None:
            while len(self._records) > self._max_items:
                evicted, _ = self._records.popitem(last=False)
                _LOGGER.info("Evicted salary slip %s (capacity %s)", evicted, self._max_items)

    def save(self, payload: Mapping[str, Any]) -> SalarySlipRecord:
        record = SalarySlipRecord(id=uuid4().hex, payload=payload, created_at=self._clock())
        with self._lock:
            self._records[record.id] = record
            self._evict_locked()
        return record

    def get(self, slip_id: str) -> SalarySlipRecord:
        with self._lock:
            record = self._records.get(slip_id)
        if record is None:
            raise KeyError(slip_id)
        return record

    def list(self) -> List[SalarySlipRecord]:
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=lambda record: record.created_at)


class SQLiteSlipRepository:
    """SQLite-backed repository storing each slip payload as JSON."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        max_items: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if max_items is not None and max_items <= 0:
            raise ValueError("max_items must be positive when provided")

        self._path = str(path)
        self._max_items = max_items
        self._clock = clock or _utcnow
        self._lock = Lock()
        self._initialise()

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._path, check_same_thread=False)
        connection.execute("PRAGMA journal_mode=WAL")
        connection.execute("PRAGMA synchronous=NORMAL")
        connection.row_factory = sqlite3.Row
        return connection

    def _initialise(self) -> None:
        with self._connect() as connection:
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS salary_slips (
                    id TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    seq INTEGER NOT NULL
                )
                """
            )
        _LOGGER.debug("Salary slip store ready at %s", self._path)

    def _evict_locked(self, connection: sqlite3.Connection) -> None:
        if self._max_items is None:
            return
        excess = connection.execute(
            "SELECT COUNT(*) - ? FROM salary_slips",
            (self._max_items,),
        ).fetchone()[0]
        if excess is not None and excess > 0:
            connection.execute(
                "DELETE FROM salary_slips WHERE id IN ("
                "SELECT id FROM salary_slips ORDER BY created_at ASC, seq ASC LIMIT ?"
                ")",
                (excess,),
            )

    @staticmethod
    def _decode_record(row: sqlite3.Row) -> SalarySlipRecord:
        created_at = datetime.fromisoformat(row["created_at"])
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return SalarySlipRecord(
            id=row["id"],
            payload=json.loads(row["payload"]),
            created_at=created_at,
        )

    def save(self, payload: Mapping[str, Any]) -> SalarySlipRecord:
        record = SalarySlipRecord(id=uuid4().hex, payload=payload, created_at=self._clock())
        payload_json = json.dumps(payload, ensure_ascii=False)

        with self._lock:
            with self._connect() as connection:
                seq = connection.execute(
                    "SELECT COALESCE(MAX(seq), 0) + 1 FROM salary_slips"
                ).fetchone()[0]
                connection.execute(
                    "INSERT INTO salary_slips (id, payload, created_at, seq)"
                    " VALUES (?, ?, ?, ?)",
                    (record.id, payload_json, record.created_at.isoformat(), seq),
                )
                self._evict_locked(connection)
        return record

    def get(self, slip_id: str) -> SalarySlipRecord:
        with self._lock:
            with self._connect() as connection:
                row = connection.execute(
                    "SELECT * FROM salary_slips WHERE id = ?",
                    (slip_id,),
                ).fetchone()
        if row is None:
            raise KeyError(slip_id)
        return self._decode_record(row)

    def list(self) -> List[SalarySlipRecord]:
        with self._lock:
            with self._connect() as connection:
                rows = connection.execute(
                    "SELECT * FROM salary_slips ORDER BY created_at ASC, seq ASC"
                ).fetchall()
        return [self._decode_record(row) for row in rows]


def _format_money(value: Any, symbol: str) -> str:
    number = float(value or 0)
    if number.is_integer():
        return format_amount(int(number), symbol=symbol)
    return f"{symbol}{number:,.2f}"


def _section(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = payload.get(key, {}) if isinstance(payload, Mapping) else {}
    return section if isinstance(section, Mapping) else {}


def _detail_rows(details: Mapping[str, Any], labels: Mapping[str, str]) -> Iterable[tuple[str, str]]:
    for field, label in labels.items():
        if field in details:
            yield label, str(details[field])


def _amount_rows(
    amounts: Mapping[str, Any], fields: Iterable[str], labels: Mapping[str, str], symbol: str
) -> List[tuple[str, str]]:
    return [
        (labels[field], _format_money(amounts[field], symbol))
        for field in fields
        if field in amounts
    ]


def _slip_sections(
    record: SalarySlipRecord, symbol: str
) -> dict[str, List[tuple[str, str]]]:
    payload = record.payload
    details = _section(payload, "employee_details")
    earnings = _section(payload, "earnings")
    deductions = _section(payload, "deductions")

    return {
        "Employee Information": list(_detail_rows(details, EMPLOYEE_LABELS)),
        "Bank Details": list(_detail_rows(details, BANK_LABELS)),
        "Earnings": _amount_rows(
            earnings, ("gross_salary",) + EARNINGS_COMPONENTS, EARNINGS_LABELS, symbol
        ),
        "Deductions": _amount_rows(deductions, DEDUCTION_FIELDS, DEDUCTION_LABELS, symbol),
    }


def _slip_period(record: SalarySlipRecord) -> str:
    return record.created_at.strftime("%B %Y")


def render_html(record: SalarySlipRecord, *, symbol: str = "₹") -> str:
    sections = _slip_sections(record, symbol)
    net_salary = _format_money(record.payload.get("net_salary"), symbol)

    section_html = "\n".join(
        f"<section><h2>{escape(title)}</h2><table>"
        + "".join(
            f"<tr><th>{escape(label)}</th><td>{escape(value)}</td></tr>"
            for label, value in rows
        )
        + "</table></section>"
        for title, rows in sections.items()
        if rows
    )

    return f"""<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>Salary Slip {escape(record.id)}</title>
    <style>
      body {{ font-family: 'Segoe UI', sans-serif; margin: 0; padding: 2rem; color: #212529; background: #f7fafc; }}
      h1, h2 {{ color: #2c5282; margin-top: 0; }}
      table {{ width: 100%; border-collapse: collapse; margin-bottom: 1rem; }}
      th, td {{ padding: 0.5rem; text-align: left; border-bottom: 1px solid #dee2e6; }}
      .net {{ font-size: 1.25rem; font-weight: bold; }}
      footer {{ margin-top: 2rem; font-size: 0.9rem; color: #6c757d; text-align: center; }}
    </style>
  </head>
  <body>
    <header>
      <h1>Salary Slip</h1>
      <p>Salary Slip for {escape(_slip_period(record))}</p>
    </header>
    {section_html}
    <p class=\"net\">Net Salary: {escape(net_salary)}</p>
    <footer>
      <p>{_FOOTER}</p>
    </footer>
  </body>
</html>"""


def render_csv(record: SalarySlipRecord, *, symbol: str = "₹") -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["section", "field", "value"])
    for title, rows in _slip_sections(record, symbol).items():
        for label, value in rows:
            writer.writerow([title, label, value])
    writer.writerow(["Summary", "Net Salary", _format_money(record.payload.get("net_salary"), symbol)])
    return buffer.getvalue()


def _latin1(text: str) -> str:
    return text.encode("latin-1", "replace").decode("latin-1")


def render_pdf(record: SalarySlipRecord, *, symbol: str = "Rs. ") -> bytes:
    """Render the slip as a PDF document.

    The built-in PDF fonts only cover Latin-1, so the rupee sign is spelled out.
    """

    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()
    pdf.set_title(f"Salary Slip {record.id}")
    pdf.set_text_color(33, 37, 41)

    pdf.set_font("Helvetica", style="B", size=16)
    pdf.cell(0, 10, "Salary Slip", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", size=11)
    pdf.cell(0, 6, f"Salary Slip for {_slip_period(record)}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    for title, rows in _slip_sections(record, symbol).items():
        if not rows:
            continue
        pdf.ln(4)
        pdf.set_font("Helvetica", style="B", size=12)
        pdf.cell(0, 8, title, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", size=11)
        for label, value in rows:
            pdf.multi_cell(
                pdf.epw,
                6,
                _latin1(f"{label}: {value}"),
                new_x=XPos.LMARGIN,
                new_y=YPos.NEXT,
            )

    pdf.ln(4)
    pdf.set_font("Helvetica", style="B", size=13)
    net_salary = _format_money(record.payload.get("net_salary"), symbol)
    pdf.cell(0, 8, f"Net Salary: {net_salary}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.ln(6)
    pdf.set_font("Helvetica", size=9)
    pdf.multi_cell(0, 5, _FOOTER)

    return bytes(pdf.output())


__all__ = [
    "InMemorySlipRepository",
    "SQLiteSlipRepository",
    "SalarySlipRecord",
    "build_salary_slip",
    "build_sample_slip",
    "render_csv",
    "render_html",
    "render_pdf",
    "validate_slip_payload",
]
