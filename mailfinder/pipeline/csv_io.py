"""
CSV import/export for the name + domain workflow.

Parsing is a plain comma split with quote stripping; quoted fields holding
commas are not supported. Exports are joined the same way and assume values
without commas (emails, scores, timestamps).
"""

import re
from typing import Iterable, List

from mailfinder.models.schemas import (
    ColumnMapping,
    CsvTable,
    GeneratedEmail,
    ProviderTestResult,
    ValidationResult,
)
from mailfinder.pipeline.permutations import generate_emails
from mailfinder.utils.clock import today

PROTOCOL_RE = re.compile(r"^https?://")
WWW_RE = re.compile(r"^www\.")

VALID_EMAIL_HEADERS = ["Email", "Score", "Provider", "Timestamp", "First Name", "Last Name", "Domain"]
RESULT_HEADERS = ["Email", "Valid", "Score", "Status", "Provider", "Error", "Timestamp"]
TEST_RESULT_HEADERS = ["Provider", "Email", "Valid", "Score", "Status", "Duration", "Error", "Timestamp"]


class CsvFormatError(ValueError):
    pass


def _cells(line: str) -> List[str]:
    return [cell.strip().replace('"', "") for cell in line.split(",")]


def parse_csv(text: str) -> CsvTable:
    lines = [line for line in text.split("\n") if line.strip()]
    if len(lines) < 2:
        raise CsvFormatError("Invalid CSV file format")

    headers = _cells(lines[0])
    rows = []
    for line in lines[1:]:
        values = _cells(line)
        rows.append({h: values[i] if i < len(values) else "" for i, h in enumerate(headers)})
    return CsvTable(headers=headers, rows=rows)


def clean_domain(raw: str) -> str:
    domain = raw.lower()
    domain = PROTOCOL_RE.sub("", domain)
    domain = WWW_RE.sub("", domain)
    return domain.split("/", 1)[0].strip()


def generate_emails_from_csv(table: CsvTable, mapping: ColumnMapping) -> List[GeneratedEmail]:
    if not mapping.first_name or not mapping.last_name or not mapping.domain:
        raise CsvFormatError("Please select all required columns")

    out: List[GeneratedEmail] = []
    for index, row in enumerate(table.rows):
        first = (row.get(mapping.first_name) or "").strip()
        last = (row.get(mapping.last_name) or "").strip()
        raw_domain = (row.get(mapping.domain) or "").strip()
        if not first or not last or not raw_domain:
            continue
        domain = clean_domain(raw_domain)
        if not domain:
            continue
        # +2: header is line 1 and rows are 1-based
        out.extend(generate_emails(first, last, domain, source_row=index + 2))
    return out


def _fmt(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _join(headers: List[str], rows: Iterable[list]) -> str:
    lines = [",".join(headers)]
    lines.extend(",".join(_fmt(v) for v in row) for row in rows)
    return "\n".join(lines)


def export_valid_emails(results: List[ValidationResult], generated: List[GeneratedEmail]) -> str:
    by_email = {g.email: g for g in generated}
    rows = []
    for r in results:
        person = by_email.get(r.email)
        rows.append([
            r.email,
            r.score,
            r.provider,
            r.timestamp,
            person.first_name if person else None,
            person.last_name if person else None,
            person.domain if person else None,
        ])
    return _join(VALID_EMAIL_HEADERS, rows)


def export_results(results: List[ValidationResult]) -> str:
    return _join(RESULT_HEADERS, (
        [r.email, r.is_valid, r.score, r.status, r.provider, r.error, r.timestamp]
        for r in results
    ))


def export_test_results(tests: List[ProviderTestResult]) -> str:
    rows = []
    for t in tests:
        r = t.result
        rows.append([
            t.provider,
            r.email if r else None,
            r.is_valid if r else None,
            r.score if r else None,
            r.status if r else None,
            t.duration,
            t.error,
            t.timestamp,
        ])
    return _join(TEST_RESULT_HEADERS, rows)


def export_filename(prefix: str) -> str:
    return f"{prefix}-{today()}.csv"
