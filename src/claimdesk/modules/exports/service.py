from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from datetime import datetime

from openpyxl import Workbook

from claimdesk.core.models import utcnow
from claimdesk.modules.claims.models import Claim
from claimdesk.modules.claims.priority import calculate_priority

EXPORT_COLUMNS = (
    "Claim Number",
    "Type",
    "Status",
    "Amount",
    "Incident Date",
    "Filed Date",
    "Priority",
)


def export_row(claim: Claim, *, now: datetime) -> list[str]:
    priority = calculate_priority(claim.type, claim.amount, claim.filed_date, claim.status, now=now)
    return [
        claim.claim_number,
        claim.type.value,
        claim.status.value,
        format(claim.amount, "f") if claim.amount is not None else "",
        claim.incident_date.isoformat() if claim.incident_date else "",
        claim.filed_date.isoformat() if claim.filed_date else "",
        priority.priority,
    ]


def build_claims_csv(claims: Iterable[Claim], *, now: datetime | None = None) -> str:
    now = now or utcnow()
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for claim in claims:
        writer.writerow(export_row(claim, now=now))
    return out.getvalue()


def build_claims_xlsx(claims: Iterable[Claim], *, now: datetime | None = None) -> bytes:
    now = now or utcnow()
    wb = Workbook()
    ws = wb.active
    ws.title = "Claims"
    ws.append(list(EXPORT_COLUMNS))
    for claim in claims:
        row: list = export_row(claim, now=now)
        if claim.amount is not None:
            row[3] = float(claim.amount)
        ws.append(row)
    ws.column_dimensions["A"].width = 18
    ws.column_dimensions["F"].width = 28
    ws.freeze_panes = "A2"

    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()
