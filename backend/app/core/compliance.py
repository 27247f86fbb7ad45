"""
Client Compliance Scorer
Scores a client's standing with GRA / NIS from registration identifiers and
filing history.

Checks and weights (total 100):
  - TIN Registration          25
  - NIS Registration          20
  - VAT Registration          15  (half credit when missing; not always required)
  - Business Registration     10
  - Filings                   30

Status: compliant (score >= 80), at-risk (>= 50), otherwise non-compliant.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

logger = logging.getLogger(__name__)


class CheckStatus(str, Enum):
    COMPLIANT = "compliant"
    WARNING = "warning"
    NON_COMPLIANT = "non-compliant"
    UNKNOWN = "unknown"


class ComplianceStatus(str, Enum):
    COMPLIANT = "compliant"
    AT_RISK = "at-risk"
    NON_COMPLIANT = "non-compliant"


TIN_WEIGHT = 25
NIS_WEIGHT = 20
VAT_WEIGHT = 15
BUSINESS_REGISTRATION_WEIGHT = 10
FILING_WEIGHT = 30

COMPLIANT_THRESHOLD = 80
AT_RISK_THRESHOLD = 50

OVERDUE_PENALTY_PER_FILING = 10
PENDING_WINDOW_DAYS = 7
CLOSED_FILING_STATUSES = ("submitted", "approved")


@dataclass
class Filing:
    type: str
    status: str
    due_date: date | datetime | str


@dataclass
class ClientData:
    tin_number: str | None = None
    nis_number: str | None = None
    vat_number: str | None = None
    business_registration: str | None = None
    filings: list[Filing] | None = None


@dataclass
class ComplianceCheck:
    name: str
    status: CheckStatus
    weight: float
    details: str | None = None
    due_date: date | None = None


@dataclass
class ClientComplianceResult:
    score: int
    status: ComplianceStatus
    checks: list[ComplianceCheck] = field(default_factory=list)
    summary: str = ""


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value.endswith("Z"):
        # fromisoformat only accepts a Z suffix from 3.11
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).date()


def _has_min_length(value: str | None, length: int) -> bool:
    return bool(value) and len(value) >= length


class ComplianceScorer:
    """
    Computes a weighted compliance score for a client.
    Missing fields map to a penalized or neutral check, never an error.
    """

    def check_tin(self, client: ClientData) -> tuple[ComplianceCheck, float]:
        if _has_min_length(client.tin_number, 8):
            return ComplianceCheck(
                name="TIN Registration",
                status=CheckStatus.COMPLIANT,
                weight=TIN_WEIGHT,
                details=f"TIN: {client.tin_number}",
            ), TIN_WEIGHT
        return ComplianceCheck(
            name="TIN Registration",
            status=CheckStatus.NON_COMPLIANT,
            weight=TIN_WEIGHT,
            details="No TIN registered",
        ), 0

    def check_nis(self, client: ClientData) -> tuple[ComplianceCheck, float]:
        if _has_min_length(client.nis_number, 6):
            return ComplianceCheck(
                name="NIS Registration",
                status=CheckStatus.COMPLIANT,
                weight=NIS_WEIGHT,
                details=f"NIS: {client.nis_number}",
            ), NIS_WEIGHT
        return ComplianceCheck(
            name="NIS Registration",
            status=CheckStatus.WARNING,
            weight=NIS_WEIGHT,
            details="NIS number not provided",
        ), 0

    def check_vat(self, client: ClientData) -> tuple[ComplianceCheck, float]:
        if _has_min_length(client.vat_number, 6):
            return ComplianceCheck(
                name="VAT Registration",
                status=CheckStatus.COMPLIANT,
                weight=VAT_WEIGHT,
                details=f"VAT: {client.vat_number}",
            ), VAT_WEIGHT
        # Many entities fall below the VAT threshold
        return ComplianceCheck(
            name="VAT Registration",
            status=CheckStatus.WARNING,
            weight=VAT_WEIGHT,
            details="Not VAT registered (may not be required)",
        ), VAT_WEIGHT / 2

    def check_business_registration(self, client: ClientData) -> tuple[ComplianceCheck, float]:
        if _has_min_length(client.business_registration, 4):
            return ComplianceCheck(
                name="Business Registration",
                status=CheckStatus.COMPLIANT,
                weight=BUSINESS_REGISTRATION_WEIGHT,
                details=f"Reg: {client.business_registration}",
            ), BUSINESS_REGISTRATION_WEIGHT
        return ComplianceCheck(
            name="Business Registration",
            status=CheckStatus.WARNING,
            weight=BUSINESS_REGISTRATION_WEIGHT,
            details="Business registration not on file",
        ), 0

    def check_filings(self, client: ClientData, today: date) -> tuple[ComplianceCheck, float]:
        if not client.filings:
            return ComplianceCheck(
                name="Filings",
                status=CheckStatus.UNKNOWN,
                weight=FILING_WEIGHT,
                details="No filings tracked",
            ), FILING_WEIGHT * 0.5

        overdue = []
        pending = []
        for filing in client.filings:
            if filing.status in CLOSED_FILING_STATUSES:
                continue
            try:
                due = _as_date(filing.due_date)
            except ValueError:
                logger.debug("Skipping %s filing with unreadable due date %r", filing.type, filing.due_date)
                continue
            days_until_due = (due - today).days
            if days_until_due < 0:
                overdue.append(due)
            elif days_until_due <= PENDING_WINDOW_DAYS:
                pending.append(due)

        if not overdue and not pending:
            return ComplianceCheck(
                name="Filings Up to Date",
                status=CheckStatus.COMPLIANT,
                weight=FILING_WEIGHT,
                details="All filings current",
            ), FILING_WEIGHT

        if overdue:
            deduction = min(FILING_WEIGHT, len(overdue) * OVERDUE_PENALTY_PER_FILING)
            earliest = min(overdue)
            return ComplianceCheck(
                name="Filings",
                status=CheckStatus.NON_COMPLIANT,
                weight=FILING_WEIGHT,
                details=f"{len(overdue)} overdue filing(s)",
                due_date=earliest,
            ), FILING_WEIGHT - deduction

        earliest = min(pending)
        return ComplianceCheck(
            name="Filings",
            status=CheckStatus.WARNING,
            weight=FILING_WEIGHT,
            details=f"{len(pending)} filing(s) due soon",
            due_date=earliest,
        ), FILING_WEIGHT * 0.75

    def calculate(self, client: ClientData, today: date | None = None) -> ClientComplianceResult:
        if today is None:
            today = date.today()

        evaluated = [
            self.check_tin(client),
            self.check_nis(client),
            self.check_vat(client),
            self.check_business_registration(client),
            self.check_filings(client, today),
        ]
        checks = [check for check, _ in evaluated]
        earned_weight = sum(earned for _, earned in evaluated)
        total_weight = sum(check.weight for check in checks)

        score = self._score(earned_weight, total_weight)
        status = self.status_for_score(score)
        summary = self._summarize(status, checks)

        logger.debug("Compliance score %d (%s): %s", score, status.value, summary)
        return ClientComplianceResult(score=score, status=status, checks=checks, summary=summary)

    @staticmethod
    def _score(earned_weight: float, total_weight: float) -> int:
        if total_weight <= 0:
            return 0
        ratio = Decimal(str(earned_weight)) / Decimal(str(total_weight)) * 100
        return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @staticmethod
    def status_for_score(score: int) -> ComplianceStatus:
        if score >= COMPLIANT_THRESHOLD:
            return ComplianceStatus.COMPLIANT
        if score >= AT_RISK_THRESHOLD:
            return ComplianceStatus.AT_RISK
        return ComplianceStatus.NON_COMPLIANT

    @staticmethod
    def _summarize(status: ComplianceStatus, checks: list[ComplianceCheck]) -> str:
        compliant = sum(1 for c in checks if c.status == CheckStatus.COMPLIANT)
        warnings = sum(1 for c in checks if c.status == CheckStatus.WARNING)
        non_compliant = sum(1 for c in checks if c.status == CheckStatus.NON_COMPLIANT)

        if status == ComplianceStatus.COMPLIANT:
            return f"Good standing - {compliant} of {len(checks)} requirements met"
        if status == ComplianceStatus.AT_RISK:
            return f"At risk - {warnings} warning(s), {non_compliant} issue(s) to address"
        return f"Non-compliant - {non_compliant} critical issue(s) requiring attention"
