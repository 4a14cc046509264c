"""
Availability allocator — Core business logic.

Decides whether a normal order may target a delivery date and finds the
next date with free capacity. Everything here is a pure function of an
explicit counts snapshot, the booking rules and the current time; the
AvailabilityService class only fetches the snapshot.

Scan results are hints for the booking UI. Capacity is checked again when
an order is committed (see OrderService.create).
"""

from datetime import date, datetime, timedelta
from typing import Optional
import structlog

from config import BookingRules, get_booking_rules
from models.booking import (
    BookingCounts,
    DayCounts,
    RemainingSlots,
    DateAvailability,
    AvailabilityWindow,
    EstimatedDeliveryResponse,
    NextAvailableResponse,
)
from services.booking_counter_service import BookingCounterStore, get_booking_counter_store
from utils.date_utils import date_key, start_of_day, at_hour, hours_between, date_range

logger = structlog.get_logger(__name__)


# ===================
# PURE FUNCTIONS
# ===================

def counts_for(day: date, counts: BookingCounts) -> DayCounts:
    """Counts for a date; dates absent from the snapshot have none."""
    return counts.get(date_key(day)) or DayCounts()


def remaining_slots(day: date, counts: BookingCounts, rules: BookingRules) -> RemainingSlots:
    """Free normal and urgent capacity on a date, floored at zero."""
    booked = counts_for(day, counts)
    return RemainingSlots(
        normal=max(0, rules.max_normal_per_day - booked.normal),
        urgent=max(0, rules.max_urgent_per_day - booked.urgent),
    )


def has_normal_capacity(day: date, counts: BookingCounts, rules: BookingRules) -> bool:
    """True if the date can take one more normal order."""
    return remaining_slots(day, counts, rules).normal > 0


def urgent_target_datetime(day: date, rules: BookingRules) -> datetime:
    """Candidate urgent delivery moment: the date at the reference hour."""
    return at_hour(day, rules.urgent_reference_hour)


def is_urgent_lead_time_satisfied(target: datetime, now: datetime, rules: BookingRules) -> bool:
    """True if at least urgent_min_hours whole hours separate now and target."""
    return hours_between(target, now) >= rules.urgent_min_hours


def is_urgent_available(
    day: date,
    counts: BookingCounts,
    rules: BookingRules,
    now: datetime
) -> bool:
    """
    Can an urgent order target this date?

    The lead-time gate always applies. The urgent cap is consulted only when
    rules.enforce_urgent_cap is on; otherwise urgent orders are uncapped.
    """
    if not is_urgent_lead_time_satisfied(urgent_target_datetime(day, rules), now, rules):
        return False

    if rules.enforce_urgent_cap:
        return remaining_slots(day, counts, rules).urgent > 0

    return True


def next_available_normal_date(
    counts: BookingCounts,
    rules: BookingRules,
    today: date
) -> date:
    """
    First date with normal capacity, starting normal_min_days after today.

    Scans normal_scan_days dates. If every one is full, returns the first
    date of the window anyway; the caller must treat it as a hint.
    """
    start = today + timedelta(days=rules.normal_min_days)

    for day in date_range(start, rules.normal_scan_days):
        if has_normal_capacity(day, counts, rules):
            return day

    logger.warning(
        "normal_scan_window_full",
        start=date_key(start),
        days=rules.normal_scan_days
    )
    return start


def next_available_urgent_date(
    counts: BookingCounts,
    rules: BookingRules,
    now: datetime
) -> date:
    """
    First date with urgent capacity, starting the day now + urgent_min_hours falls on.

    Scans urgent_scan_days dates, falling back to the first one.
    """
    start = start_of_day(now + timedelta(hours=rules.urgent_min_hours)).date()

    for day in date_range(start, rules.urgent_scan_days):
        if remaining_slots(day, counts, rules).urgent > 0:
            return day

    logger.warning(
        "urgent_scan_window_full",
        start=date_key(start),
        days=rules.urgent_scan_days
    )
    return start


def availability_window(
    counts: BookingCounts,
    rules: BookingRules,
    start: date,
    days: int
) -> AvailabilityWindow:
    """
    Per-date normal availability for the booking calendar.

    first_available_date is None when every date in the window is full.
    """
    dates = []
    for day in date_range(start, days):
        remaining = remaining_slots(day, counts, rules).normal
        dates.append(DateAvailability(
            day=day,
            remaining_slots=remaining,
            is_full=remaining == 0,
        ))

    first_open = next((d.day for d in dates if not d.is_full), None)

    return AvailabilityWindow(
        min_days_ahead=rules.normal_min_days,
        max_per_day=rules.max_normal_per_day,
        first_available_date=first_open,
        dates=dates,
    )


def first_open_delivery_date(
    processing_start: date,
    counts: BookingCounts,
    rules: BookingRules
) -> date:
    """
    First normal delivery date with capacity on or after processing_start + normal_delivery_days.

    Falls back to that initial date when delivery_scan_days dates are all full.
    """
    initial = processing_start + timedelta(days=rules.normal_delivery_days)

    for day in date_range(initial, rules.delivery_scan_days):
        if has_normal_capacity(day, counts, rules):
            return day

    logger.warning(
        "delivery_scan_window_full",
        start=date_key(initial),
        days=rules.delivery_scan_days
    )
    return initial


# ===================
# SERVICE
# ===================

class AvailabilityService:
    """
    Availability queries backed by the booking counter store.

    Fetches the counts snapshot for the window being asked about and hands
    it to the pure functions above.
    """

    def __init__(
        self,
        store: Optional[BookingCounterStore] = None,
        rules: Optional[BookingRules] = None
    ):
        self.store = store or get_booking_counter_store()
        self.rules = rules or get_booking_rules()

    def get_available_dates(self, today: Optional[date] = None) -> AvailabilityWindow:
        """Availability for normal_scan_days dates starting normal_min_days ahead."""
        today = today or date.today()
        start = today + timedelta(days=self.rules.normal_min_days)
        days = self.rules.normal_scan_days

        logger.info("getting_available_dates", start=date_key(start), days=days)

        counts = self.store.get_counts(start, start + timedelta(days=days - 1))
        window = availability_window(counts, self.rules, start, days)

        logger.info(
            "available_dates_computed",
            first_available=str(window.first_available_date),
            full_days=sum(1 for d in window.dates if d.is_full)
        )
        return window

    def get_estimated_delivery(
        self,
        processing_start: Optional[date] = None,
        now: Optional[datetime] = None
    ) -> EstimatedDeliveryResponse:
        """
        First open normal delivery date.

        Without a processing start, processing begins tomorrow.
        """
        now = now or datetime.now()
        if processing_start is None:
            processing_start = start_of_day(now + timedelta(days=1)).date()

        initial = processing_start + timedelta(days=self.rules.normal_delivery_days)
        end = initial + timedelta(days=self.rules.delivery_scan_days - 1)
        counts = self.store.get_counts(initial, end)

        delivery = first_open_delivery_date(processing_start, counts, self.rules)

        logger.info(
            "estimated_delivery_computed",
            processing_start=date_key(processing_start),
            estimated_delivery=date_key(delivery)
        )

        return EstimatedDeliveryResponse(
            processing_start_date=processing_start,
            estimated_delivery=delivery,
            max_per_day=self.rules.max_normal_per_day,
            min_days_from_processing=self.rules.normal_delivery_days,
        )

    def get_next_available(self, now: Optional[datetime] = None) -> NextAvailableResponse:
        """Suggested normal and urgent delivery dates."""
        now = now or datetime.now()
        today = now.date()

        # One snapshot covering both scan windows
        end = today + timedelta(
            days=max(
                self.rules.normal_min_days + self.rules.normal_scan_days,
                self.rules.urgent_min_hours // 24 + 1 + self.rules.urgent_scan_days,
            )
        )
        counts = self.store.get_counts(today, end)

        return NextAvailableResponse(
            normal=next_available_normal_date(counts, self.rules, today),
            urgent=next_available_urgent_date(counts, self.rules, now),
            urgent_min_hours=self.rules.urgent_min_hours,
            normal_min_days=self.rules.normal_min_days,
        )


# Singleton instance
_availability_service: Optional[AvailabilityService] = None


def get_availability_service() -> AvailabilityService:
    """Get or create AvailabilityService instance."""
    global _availability_service
    if _availability_service is None:
        _availability_service = AvailabilityService()
    return _availability_service
