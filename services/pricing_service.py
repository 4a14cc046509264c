"""
Pricing & schedule calculator — Core business logic.

Formula:
    subtotal         = base_price + sum(add-on prices)
    urgent_surcharge = round(subtotal × urgent_surcharge_percent / 100)   (urgent only)
    total            = subtotal + urgent_surcharge
    advance_amount   = round(total × advance_payment_percent / 100)      (advance only)
    balance_amount   = total - advance_amount

Rounding is half-up to whole rupees and applied once per amount; the
balance is derived by subtraction so advance + balance == total always.

Schedule:
    processing start = midnight the day after the tailor visit (tailor)
                       or midnight tomorrow (self)
    delivery         = processing start + 36 hours (urgent)
                       or processing start + 7 days (normal)
Delivery dates are displayed estimates; orders may be ready earlier.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union
import structlog

from config import BookingRules, get_booking_rules
from config.catalog import get_service, get_add_on
from models.booking import BookingType
from models.order import MeasurementMethod
from models.pricing import AddOn, PricingResult, QuoteRequest, QuoteResponse
from exceptions import ServiceNotFoundError, AddOnNotFoundError
from utils.date_utils import start_of_day

logger = structlog.get_logger(__name__)


def round_currency(amount: Decimal) -> int:
    """Round to whole currency units, halves away from zero."""
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent_of(amount: int, percent: int) -> int:
    """percent% of amount, rounded to whole currency units."""
    return round_currency(Decimal(amount) * Decimal(percent) / Decimal(100))


def calculate_price(
    base_price: int,
    is_urgent: bool = False,
    add_ons: Optional[Iterable[AddOn]] = None,
    requires_advance: bool = False,
    rules: Optional[BookingRules] = None
) -> PricingResult:
    """
    Price breakdown for one order.

    Args:
        base_price: Service base price
        is_urgent: Apply the urgent surcharge
        add_ons: Paid extras; a missing price counts as zero
        requires_advance: Collect advance_payment_percent upfront
        rules: Booking rules (defaults to configured rules)

    Returns:
        PricingResult
    """
    rules = rules or get_booking_rules()

    add_ons_total = sum(add_on.price or 0 for add_on in (add_ons or []))
    subtotal = base_price + add_ons_total

    urgent_surcharge = percent_of(subtotal, rules.urgent_surcharge_percent) if is_urgent else 0
    total = subtotal + urgent_surcharge

    advance_amount = percent_of(total, rules.advance_payment_percent) if requires_advance else 0

    return PricingResult(
        base_price=base_price,
        add_ons_total=add_ons_total,
        urgent_surcharge=urgent_surcharge,
        total=total,
        advance_amount=advance_amount,
        balance_amount=total - advance_amount,
        requires_advance=requires_advance,
    )


def processing_start_date(
    measurement_method: Union[MeasurementMethod, str],
    tailor_visit_date: Optional[Union[date, datetime]],
    now: datetime
) -> datetime:
    """
    When work on the order begins.

    Tailor visit with a date: midnight the day after the visit.
    Otherwise: midnight tomorrow, whatever time the order was placed.
    Past visit dates are not rejected here.
    """
    if measurement_method == MeasurementMethod.TAILOR and tailor_visit_date is not None:
        return start_of_day(tailor_visit_date + timedelta(days=1))
    return start_of_day(now + timedelta(days=1))


def estimated_delivery_date(
    processing_start: datetime,
    is_urgent: bool,
    rules: Optional[BookingRules] = None
) -> datetime:
    """Urgent: a fixed number of hours after processing start. Normal: whole days."""
    rules = rules or get_booking_rules()
    if is_urgent:
        return processing_start + timedelta(hours=rules.urgent_delivery_hours)
    return processing_start + timedelta(days=rules.normal_delivery_days)


# ===================
# CATALOG PRICING
# ===================

def resolve_service(service_id: str) -> dict:
    """
    Catalog entry for a service id.

    Raises:
        ServiceNotFoundError: Unknown id
    """
    service = get_service(service_id)
    if service is None:
        raise ServiceNotFoundError(service_id)
    return service


def resolve_add_ons(add_on_ids: Iterable[str]) -> list[AddOn]:
    """
    Catalog add-ons for a list of ids, in request order.

    Raises:
        AddOnNotFoundError: Unknown id
    """
    add_ons = []
    for add_on_id in add_on_ids:
        entry = get_add_on(add_on_id)
        if entry is None:
            raise AddOnNotFoundError(add_on_id)
        add_ons.append(AddOn(name=entry["name"], price=entry["price"]))
    return add_ons


def quote(
    request: QuoteRequest,
    now: Optional[datetime] = None,
    rules: Optional[BookingRules] = None
) -> QuoteResponse:
    """Price and delivery preview for the storefront."""
    now = now or datetime.now()
    rules = rules or get_booking_rules()

    service = resolve_service(request.service_id)
    add_ons = resolve_add_ons(request.add_on_ids)
    is_urgent = request.booking_type == BookingType.URGENT

    pricing = calculate_price(
        service["base_price"],
        is_urgent=is_urgent,
        add_ons=add_ons,
        requires_advance=service["requires_advance"],
        rules=rules,
    )
    start = processing_start_date(request.measurement_method, request.tailor_visit_date, now)
    delivery = estimated_delivery_date(start, is_urgent, rules)

    logger.debug(
        "quote_computed",
        service_id=request.service_id,
        total=pricing.total,
        estimated_delivery=delivery.isoformat()
    )

    return QuoteResponse(
        service_id=service["id"],
        service_name=service["name"],
        add_ons=add_ons,
        booking_type=request.booking_type,
        pricing=pricing,
        processing_start_date=start,
        estimated_delivery=delivery,
    )
