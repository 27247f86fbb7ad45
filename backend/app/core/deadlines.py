"""
Tax Deadline Engine
Computes due dates for Guyana filing obligations and classifies urgency.

Filing calendar:
  - Monthly returns (VAT, PAYE, NIS, Excise) fall due on a fixed day of the
    month following the period
  - Annual returns fall due on a fixed MM-DD anchor
  - As-needed obligations (TCC, Capital Gains) have no computed due date

A due date landing on a weekend or public holiday moves to the next
business day.

Urgency (days until due):
  < 0 overdue | 0-3 urgent | 4-7 soon (orange) | 8-14 soon (yellow) | > 14 ok
"""

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

logger = logging.getLogger(__name__)


class Frequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
    AS_NEEDED = "as-needed"


class Agency(str, Enum):
    GRA = "GRA"
    NIS = "NIS"
    DCRA = "DCRA"


class FilingType(str, Enum):
    VAT = "vat"
    PAYE = "paye"
    NIS = "nis"
    EXCISE = "excise"
    INCOME_TAX = "income_tax"
    CORPORATION_TAX = "corporation_tax"
    PROPERTY_TAX = "property_tax"
    ANNUAL_RETURN = "annual_return"
    NIS_COMPLIANCE = "nis_compliance"
    TCC = "tcc"
    CAPITAL_GAINS = "capital_gains"
    TENDER_COMPLIANCE = "tender_compliance"
    LAND_TRANSFER = "land_transfer"


class ServiceType(str, Enum):
    VAT_RETURN = "VAT_RETURN"
    PAYE_FILING = "PAYE_FILING"
    NIS_SUBMISSION = "NIS_SUBMISSION"
    CORPORATE_TAX = "CORPORATE_TAX"
    INCOME_TAX = "INCOME_TAX"
    PROPERTY_TAX = "PROPERTY_TAX"
    EXCISE_TAX = "EXCISE_TAX"
    ANNUAL_RETURN = "ANNUAL_RETURN"


class DeadlineStatus(str, Enum):
    OVERDUE = "overdue"
    URGENT = "urgent"
    SOON = "soon"
    OK = "ok"


URGENT_DAYS = 3
SOON_DAYS = 7
UPCOMING_DAYS = 14


@dataclass(frozen=True)
class PublicHoliday:
    date: date
    name: str
    is_observed: bool = False


@dataclass(frozen=True)
class HolidayCalendar:
    holidays: tuple[PublicHoliday, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "_dates", frozenset(h.date for h in self.holidays))

    def __contains__(self, day: date) -> bool:
        return day in self._dates

    def merge(self, other: "HolidayCalendar") -> "HolidayCalendar":
        return HolidayCalendar(holidays=self.holidays + other.holidays)

    def for_year(self, year: int) -> list[PublicHoliday]:
        return sorted((h for h in self.holidays if h.date.year == year), key=lambda h: h.date)


@dataclass(frozen=True)
class TaxDeadline:
    id: FilingType
    name: str
    frequency: Frequency
    description: str
    agency: Agency
    due_day: int | None = None
    due_date: str | None = None  # MM-DD, annual only
    form: str | None = None


@dataclass
class DeadlineStatusInfo:
    status: DeadlineStatus
    label: str
    color: str
    badge_variant: str
    days_until_due: int


@dataclass
class UpcomingDeadline:
    deadline: TaxDeadline
    due_date: date
    status: DeadlineStatusInfo


@dataclass(frozen=True)
class Period:
    month: int  # 1-12
    year: int


def _holidays(year: int, entries: list[tuple[int, int, str]]) -> HolidayCalendar:
    return HolidayCalendar(holidays=tuple(
        PublicHoliday(date=date(year, month, day), name=name) for month, day, name in entries
    ))


GUYANA_PUBLIC_HOLIDAYS_2025 = _holidays(2025, [
    (1, 1, "New Year's Day"),
    (2, 23, "Republic Day"),
    (3, 14, "Phagwah/Holi"),
    (4, 18, "Good Friday"),
    (4, 21, "Easter Monday"),
    (5, 1, "Labour Day"),
    (5, 5, "Indian Arrival Day"),
    (5, 26, "Independence Day"),
    (7, 1, "CARICOM Day"),
    (8, 1, "Emancipation Day"),
    (10, 20, "Diwali"),
    (12, 25, "Christmas Day"),
    (12, 26, "Boxing Day"),
])

GUYANA_PUBLIC_HOLIDAYS_2026 = _holidays(2026, [
    (1, 1, "New Year's Day"),
    (2, 23, "Republic Day"),
    (3, 4, "Phagwah/Holi"),
    (4, 3, "Good Friday"),
    (4, 6, "Easter Monday"),
    (5, 1, "Labour Day"),
    (5, 5, "Indian Arrival Day"),
    (5, 26, "Independence Day"),
    (7, 6, "CARICOM Day"),
    (8, 1, "Emancipation Day"),
    (11, 8, "Diwali"),
    (12, 25, "Christmas Day"),
    (12, 26, "Boxing Day"),
])

GUYANA_HOLIDAY_CALENDAR = GUYANA_PUBLIC_HOLIDAYS_2025.merge(GUYANA_PUBLIC_HOLIDAYS_2026)


GUYANA_TAX_DEADLINES: dict[FilingType, TaxDeadline] = {
    FilingType.VAT: TaxDeadline(
        id=FilingType.VAT,
        name="VAT Return",
        frequency=Frequency.MONTHLY,
        due_day=21,
        description="VAT Return (Form VAT-3) due by 21st of following month",
        form="VAT-3",
        agency=Agency.GRA,
    ),
    FilingType.PAYE: TaxDeadline(
        id=FilingType.PAYE,
        name="PAYE Return",
        frequency=Frequency.MONTHLY,
        due_day=14,
        description="PAYE Return (Form 5) due by 14th of following month",
        form="Form 5",
        agency=Agency.GRA,
    ),
    FilingType.NIS: TaxDeadline(
        id=FilingType.NIS,
        name="NIS Contribution",
        frequency=Frequency.MONTHLY,
        due_day=15,
        description="NIS Contribution due by 15th of following month",
        form="NIS-C",
        agency=Agency.NIS,
    ),
    FilingType.EXCISE: TaxDeadline(
        id=FilingType.EXCISE,
        name="Excise Tax Return",
        frequency=Frequency.MONTHLY,
        due_day=21,
        description="Excise Tax Return due by 21st of following month",
        form="EX-1",
        agency=Agency.GRA,
    ),
    FilingType.INCOME_TAX: TaxDeadline(
        id=FilingType.INCOME_TAX,
        name="Income Tax Return",
        frequency=Frequency.ANNUAL,
        due_date="04-30",
        description="Income Tax Return (Form 2) due by April 30th",
        form="Form 2",
        agency=Agency.GRA,
    ),
    FilingType.CORPORATION_TAX: TaxDeadline(
        id=FilingType.CORPORATION_TAX,
        name="Corporation Tax",
        frequency=Frequency.ANNUAL,
        due_date="04-30",
        description="Corporation Tax due within 3 months of financial year end (default April 30)",
        form="CT-1",
        agency=Agency.GRA,
    ),
    FilingType.PROPERTY_TAX: TaxDeadline(
        id=FilingType.PROPERTY_TAX,
        name="Property Tax Return",
        frequency=Frequency.ANNUAL,
        due_date="03-31",
        description="Property Tax Return due by March 31st",
        form="PT-1",
        agency=Agency.GRA,
    ),
    FilingType.ANNUAL_RETURN: TaxDeadline(
        id=FilingType.ANNUAL_RETURN,
        name="Annual Return",
        frequency=Frequency.ANNUAL,
        due_date="03-31",
        description="Annual Return to Deeds Registry due by March 31st",
        form="AR-1",
        agency=Agency.DCRA,
    ),
    FilingType.NIS_COMPLIANCE: TaxDeadline(
        id=FilingType.NIS_COMPLIANCE,
        name="NIS Compliance Certificate",
        frequency=Frequency.ANNUAL,
        due_date="01-31",
        description="NIS Compliance Certificate renewal (valid 1 year)",
        form="C100F72/A",
        agency=Agency.NIS,
    ),
    FilingType.TCC: TaxDeadline(
        id=FilingType.TCC,
        name="Tax Compliance Certificate",
        frequency=Frequency.AS_NEEDED,
        description="Tax Compliance Certificate - valid for 1 year from issue",
        form="TCC",
        agency=Agency.GRA,
    ),
    FilingType.CAPITAL_GAINS: TaxDeadline(
        id=FilingType.CAPITAL_GAINS,
        name="Capital Gains Tax",
        frequency=Frequency.AS_NEEDED,
        description="Capital Gains Tax due on disposal of assets",
        form="CGT-1",
        agency=Agency.GRA,
    ),
    FilingType.TENDER_COMPLIANCE: TaxDeadline(
        id=FilingType.TENDER_COMPLIANCE,
        name="Tender Compliance",
        frequency=Frequency.AS_NEEDED,
        description="Tax compliance certificate for tender applications",
        form="TC-1",
        agency=Agency.GRA,
    ),
    FilingType.LAND_TRANSFER: TaxDeadline(
        id=FilingType.LAND_TRANSFER,
        name="Land Transfer Compliance",
        frequency=Frequency.AS_NEEDED,
        description="Tax compliance for property transfers",
        form="LT-1",
        agency=Agency.GRA,
    ),
}

SERVICE_DEADLINE_MAP: dict[ServiceType, tuple[FilingType, ...]] = {
    ServiceType.VAT_RETURN: (FilingType.VAT,),
    ServiceType.PAYE_FILING: (FilingType.PAYE,),
    ServiceType.NIS_SUBMISSION: (FilingType.NIS,),
    ServiceType.CORPORATE_TAX: (FilingType.CORPORATION_TAX,),
    ServiceType.INCOME_TAX: (FilingType.INCOME_TAX,),
    ServiceType.PROPERTY_TAX: (FilingType.PROPERTY_TAX,),
    ServiceType.EXCISE_TAX: (FilingType.EXCISE,),
    ServiceType.ANNUAL_RETURN: (FilingType.ANNUAL_RETURN,),
}


def _following_month(month: int, year: int) -> tuple[int, int]:
    if month == 12:
        return 1, year + 1
    return month + 1, year


def _day_in_month(year: int, month: int, day: int) -> date:
    """Clamp a due day to the last day of short months (31 -> Feb 28)."""
    return date(year, month, min(day, calendar.monthrange(year, month)[1]))


@dataclass(frozen=True)
class DeadlineEngine:
    """
    Due-date scheduling over an explicit holiday calendar and deadline
    registry. Swap either to model another year or jurisdiction.
    """

    calendar: HolidayCalendar = GUYANA_HOLIDAY_CALENDAR
    deadlines: dict[FilingType, TaxDeadline] = field(default_factory=lambda: dict(GUYANA_TAX_DEADLINES))
    service_map: dict[ServiceType, tuple[FilingType, ...]] = field(
        default_factory=lambda: dict(SERVICE_DEADLINE_MAP)
    )

    def is_public_holiday(self, day: date) -> bool:
        return day in self.calendar

    @staticmethod
    def is_weekend(day: date) -> bool:
        return day.weekday() >= 5

    def adjust_for_holidays(self, day: date) -> date:
        adjusted = day
        while self.is_weekend(adjusted) or self.is_public_holiday(adjusted):
            adjusted += timedelta(days=1)
        return adjusted

    def get_next_due_date(
        self,
        filing_type: FilingType,
        period: Period | None = None,
        today: date | None = None,
    ) -> date:
        if today is None:
            today = date.today()
        deadline = self.deadlines[FilingType(filing_type)]

        target_month = period.month if period else today.month
        target_year = period.year if period else today.year

        if deadline.frequency == Frequency.MONTHLY and deadline.due_day:
            month, year = _following_month(target_month, target_year)
            raw = _day_in_month(year, month, deadline.due_day)
        elif deadline.frequency == Frequency.QUARTERLY and deadline.due_day:
            quarter_end = ((target_month - 1) // 3 + 1) * 3
            month, year = _following_month(quarter_end, target_year)
            raw = _day_in_month(year, month, deadline.due_day)
        elif deadline.frequency == Frequency.ANNUAL and deadline.due_date:
            month, day = (int(part) for part in deadline.due_date.split("-"))
            raw = _day_in_month(target_year, month, day)
            if raw < today and period is None:
                raw = _day_in_month(target_year + 1, month, day)
        else:
            # As-needed: no computed deadline, today is a sentinel
            return today

        due = self.adjust_for_holidays(raw)
        if due != raw:
            logger.debug("%s due date moved from %s to %s", deadline.id.value, raw, due)
        return due

    @staticmethod
    def get_days_until_due(due_date: date, today: date | None = None) -> int:
        if today is None:
            today = date.today()
        return (due_date - today).days

    def get_due_date_status(self, due_date: date, today: date | None = None) -> DeadlineStatusInfo:
        days = self.get_days_until_due(due_date, today)

        if days < 0:
            return DeadlineStatusInfo(
                status=DeadlineStatus.OVERDUE,
                label=f"{abs(days)} days overdue",
                color="destructive",
                badge_variant="destructive",
                days_until_due=days,
            )
        if days <= URGENT_DAYS:
            return DeadlineStatusInfo(
                status=DeadlineStatus.URGENT,
                label="Due today" if days == 0 else f"Due in {days} days",
                color="red",
                badge_variant="destructive",
                days_until_due=days,
            )
        if days <= SOON_DAYS:
            return DeadlineStatusInfo(
                status=DeadlineStatus.SOON,
                label=f"Due in {days} days",
                color="orange",
                badge_variant="warning",
                days_until_due=days,
            )
        if days <= UPCOMING_DAYS:
            return DeadlineStatusInfo(
                status=DeadlineStatus.SOON,
                label=f"Due in {days} days",
                color="yellow",
                badge_variant="secondary",
                days_until_due=days,
            )
        return DeadlineStatusInfo(
            status=DeadlineStatus.OK,
            label=f"Due in {days} days",
            color="muted",
            badge_variant="default",
            days_until_due=days,
        )

    def get_upcoming_deadlines(
        self,
        services: list[ServiceType | str],
        days_ahead: int = 30,
        today: date | None = None,
    ) -> list[UpcomingDeadline]:
        if today is None:
            today = date.today()

        upcoming = []
        for service in services:
            try:
                service_type = ServiceType(service)
            except ValueError:
                logger.debug("Ignoring unknown service type %r", service)
                continue

            for filing_type in self.service_map.get(service_type, ()):
                due_date = self.get_next_due_date(filing_type, today=today)
                status = self.get_due_date_status(due_date, today)
                if status.days_until_due <= days_ahead:
                    upcoming.append(UpcomingDeadline(
                        deadline=self.deadlines[filing_type],
                        due_date=due_date,
                        status=status,
                    ))

        upcoming.sort(key=lambda u: u.due_date)
        return upcoming


def format_deadline_date(day: date) -> str:
    return f"{day:%a}, {day:%b} {day.day}, {day.year}"
