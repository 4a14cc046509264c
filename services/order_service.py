"""
Order service for booking creation and the admin workflow.

Order creation runs the whole booking pipeline:
    catalog lookup → price → processing start / delivery → capacity
    re-check → counter increment → insert

Notification is left to the caller so a failed alert never fails a booking.
"""

from datetime import date, datetime
from typing import Optional, Union
import structlog

from config import BookingRules, get_booking_rules, get_supabase_client, settings
from models.booking import BookingType
from models.pricing import AddOn, PricingResult
from models.order import (
    SelfMeasuredOrderCreate,
    TailorVisitOrderCreate,
    OrderStatusUpdate,
    OrderImageCreate,
    OrderResponse,
    OrderStatus,
    PaymentStatus,
    ServiceType,
    TodayStats,
    IN_PROGRESS_STATUSES,
    is_valid_status_transition,
)
from services.availability_service import (
    has_normal_capacity,
    is_urgent_lead_time_satisfied,
    remaining_slots,
)
from services.booking_counter_service import BookingCounterStore, get_booking_counter_store
from services.pricing_service import (
    calculate_price,
    processing_start_date,
    estimated_delivery_date,
    resolve_service,
    resolve_add_ons,
)
from exceptions import (
    CapacityExceededError,
    DatabaseError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    UrgentLeadTimeError,
    ValidationError,
)
from utils.date_utils import date_key, start_of_day

logger = structlog.get_logger(__name__)


AnyOrderCreate = Union[SelfMeasuredOrderCreate, TailorVisitOrderCreate]

EXTRA_CHARGES_NOTE = "Extra charges may apply based on additional requirements"


class OrderService:
    """
    Order business logic.

    Handles booking creation, status workflow, images and dashboard stats.
    """

    def __init__(
        self,
        store: Optional[BookingCounterStore] = None,
        rules: Optional[BookingRules] = None
    ):
        self.db = get_supabase_client()
        self.table = "orders"
        self.store = store or get_booking_counter_store()
        self.rules = rules or get_booking_rules()
        self.strict_capacity = settings.strict_capacity

    # ===================
    # CREATE
    # ===================

    def create(self, data: AnyOrderCreate, now: Optional[datetime] = None) -> OrderResponse:
        """
        Create an order.

        Args:
            data: Self-measured or tailor-visit order
            now: Booking time (defaults to current time)

        Returns:
            Created OrderResponse

        Raises:
            ServiceNotFoundError / AddOnNotFoundError: Unknown catalog id
            CapacityExceededError: Delivery date already full
            UrgentLeadTimeError: Urgent delivery would land inside the lead time
            DatabaseError: If persistence fails
        """
        now = now or datetime.now()
        booking_type = data.booking_type
        is_urgent = data.is_urgent

        logger.info(
            "creating_order",
            service_id=data.service_id,
            booking_type=booking_type.value,
            measurement_method=data.measurement_method
        )

        service = resolve_service(data.service_id)
        add_ons = resolve_add_ons(data.add_on_ids)

        pricing = calculate_price(
            service["base_price"],
            is_urgent=is_urgent,
            add_ons=add_ons,
            requires_advance=service["requires_advance"],
            rules=self.rules,
        )

        start = processing_start_date(data.measurement_method, data.tailor_visit_date, now)
        delivery = estimated_delivery_date(start, is_urgent, self.rules)

        if data.preferred_delivery_date:
            if data.preferred_delivery_date < delivery.date():
                raise ValidationError(
                    code="DELIVERY_DATE_TOO_EARLY",
                    message="Preferred delivery date is before the earliest possible delivery",
                    details={
                        "preferred": date_key(data.preferred_delivery_date),
                        "earliest": date_key(delivery)
                    }
                )
            delivery = start_of_day(data.preferred_delivery_date)

        delivery_day = delivery.date()
        cap = self._check_capacity(delivery_day, delivery, booking_type, now)

        # Count first: a rejected conditional increment must not leave an order behind
        self.store.increment(
            delivery_day,
            booking_type,
            cap=cap if self.strict_capacity else None
        )

        try:
            result, order_id = self._insert_order(
                data, service, add_ons, pricing, booking_type, start, delivery, now
            )
        except DatabaseError:
            self.store.release(delivery_day, booking_type)
            raise

        logger.info(
            "order_created",
            order_id=order_id,
            total=pricing.total,
            advance=pricing.advance_amount,
            estimated_delivery=delivery.isoformat()
        )

        return self._row_to_response(result.data[0])

    def _insert_order(
        self,
        data: AnyOrderCreate,
        service: dict,
        add_ons: list[AddOn],
        pricing: PricingResult,
        booking_type: BookingType,
        start: datetime,
        delivery: datetime,
        now: datetime
    ):
        """
        Number and insert the order row.

        Returns:
            Tuple of (insert result, order id)
        """
        order_id = self._generate_order_id()

        has_extras = bool(data.additional_remarks)
        customization = data.customization
        if customization is not None and add_ons:
            customization = customization.model_copy(update={"add_ons": [a.name for a in add_ons]})

        row = {
            "order_id": order_id,
            "customer_name": data.customer_name,
            "phone": data.phone,
            "address": data.address,
            "notes": data.notes,
            "service_name": service["name"],
            "service_type": data.service_type.value,
            "booking_type": booking_type.value,
            "measurement_method": data.measurement_method,
            "tailor_visit_date": date_key(data.tailor_visit_date) if data.tailor_visit_date else None,
            "measurements": (
                data.measurements.model_dump()
                if isinstance(data, SelfMeasuredOrderCreate) else None
            ),
            "customization": customization.model_dump() if customization else None,
            "booking_date": date_key(now),
            "processing_start_date": start.isoformat(),
            "estimated_delivery": delivery.isoformat(),
            "base_price": pricing.base_price,
            "add_ons_total": pricing.add_ons_total,
            "urgent_surcharge": pricing.urgent_surcharge,
            "total_amount": pricing.total,
            "advance_amount": pricing.advance_amount,
            "requires_advance": pricing.requires_advance,
            "advance_paid": False,
            "payment_status": PaymentStatus.PENDING.value,
            "status": OrderStatus.PICKUP_AWAITED.value,
            "status_history": [{
                "status": OrderStatus.PICKUP_AWAITED.value,
                "note": "Order placed",
                "timestamp": now.isoformat(),
            }],
            "images": [],
            "additional_remarks": data.additional_remarks,
            "extra_charges_note": EXTRA_CHARGES_NOTE if has_extras else None,
            "created_at": now.isoformat(),
            "updated_at": now.isoformat(),
        }

        try:
            result = self.db.table(self.table).insert(row).execute()
        except Exception as e:
            logger.error(
                "create_order_failed",
                order_id=order_id,
                delivery_date=date_key(delivery),
                error=str(e)
            )
            raise DatabaseError("insert", str(e))

        return result, order_id

    def _check_capacity(
        self,
        delivery_day: date,
        delivery: datetime,
        booking_type: BookingType,
        now: datetime
    ) -> Optional[int]:
        """
        Re-validate capacity for the delivery date at commit time.

        Returns:
            The cap to enforce on increment, or None if the tier is uncapped
        """
        counts = self.store.get_counts(delivery_day, delivery_day)

        if booking_type == BookingType.NORMAL:
            if not has_normal_capacity(delivery_day, counts, self.rules):
                logger.warning("normal_capacity_exceeded", date=date_key(delivery_day))
                raise CapacityExceededError(
                    date_key(delivery_day),
                    booking_type.value,
                    self.rules.max_normal_per_day
                )
            return self.rules.max_normal_per_day

        if not is_urgent_lead_time_satisfied(delivery, now, self.rules):
            raise UrgentLeadTimeError(date_key(delivery_day), self.rules.urgent_min_hours)

        if not self.rules.enforce_urgent_cap:
            return None

        if remaining_slots(delivery_day, counts, self.rules).urgent <= 0:
            logger.warning("urgent_capacity_exceeded", date=date_key(delivery_day))
            raise CapacityExceededError(
                date_key(delivery_day),
                booking_type.value,
                self.rules.max_urgent_per_day
            )
        return self.rules.max_urgent_per_day

    def _generate_order_id(self) -> str:
        """
        Sequential order ID: prefix + (start sequence + existing orders), e.g. SLQ1231.
        """
        try:
            result = (
                self.db.table(self.table)
                .select("order_id", count="exact")
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("count_orders_failed", error=str(e))
            raise DatabaseError("select", str(e))

        sequence = settings.order_id_start_sequence + (result.count or 0)
        return f"{settings.order_id_prefix}{sequence:04d}"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        status: Optional[OrderStatus] = None,
        limit: int = 50,
        skip: int = 0
    ) -> tuple[list[OrderResponse], int]:
        """
        Get orders, newest first.

        Returns:
            Tuple of (orders list, total count)
        """
        logger.info("getting_orders", status=status, limit=limit, skip=skip)

        try:
            query = self.db.table(self.table).select("*", count="exact")

            if status:
                query = query.eq("status", status.value)

            query = query.order("created_at", desc=True).range(skip, skip + limit - 1)
            result = query.execute()

            orders = [self._row_to_response(row) for row in result.data]
            total = result.count or 0

            logger.info("orders_retrieved", count=len(orders), total=total)
            return orders, total

        except Exception as e:
            logger.error("get_orders_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_order_id(self, order_id: str) -> OrderResponse:
        """
        Get a single order.

        Raises:
            OrderNotFoundError: If order doesn't exist
        """
        logger.debug("getting_order", order_id=order_id)
        return self._row_to_response(self._fetch_row(order_id))

    def _fetch_row(self, order_id: str) -> dict:
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("order_id", order_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_order_failed", order_id=order_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise OrderNotFoundError(order_id)

        return result.data[0]

    # ===================
    # ADMIN WORKFLOW
    # ===================

    def update_status(
        self,
        order_id: str,
        data: OrderStatusUpdate,
        now: Optional[datetime] = None
    ) -> OrderResponse:
        """
        Move an order to a new status and record it in the history.

        Cancelling gives the order's slot on its delivery date back to the
        booking counts.

        Raises:
            OrderNotFoundError: If order doesn't exist
            InvalidStatusTransitionError: Backward move or terminal order
        """
        now = now or datetime.now()
        row = self._fetch_row(order_id)
        current = OrderStatus(row["status"])

        if not is_valid_status_transition(current, data.status):
            logger.warning(
                "invalid_status_transition",
                order_id=order_id,
                current=current.value,
                new=data.status.value
            )
            raise InvalidStatusTransitionError(current.value, data.status.value)

        history = list(row.get("status_history") or [])
        history.append({
            "status": data.status.value,
            "note": data.note,
            "timestamp": now.isoformat(),
        })

        update = {
            "status": data.status.value,
            "status_history": history,
            "updated_at": now.isoformat(),
        }
        if data.status == OrderStatus.DELIVERED:
            update["actual_delivery"] = now.isoformat()

        try:
            result = (
                self.db.table(self.table)
                .update(update)
                .eq("order_id", order_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_order_status_failed", order_id=order_id, error=str(e))
            raise DatabaseError("update", str(e))

        logger.info(
            "order_status_updated",
            order_id=order_id,
            old_status=current.value,
            new_status=data.status.value
        )

        if data.status == OrderStatus.CANCELLED:
            # Cancelled orders no longer hold capacity on their delivery date
            self.store.release(
                date.fromisoformat(row["estimated_delivery"][:10]),
                BookingType(row.get("booking_type") or BookingType.NORMAL.value)
            )

        return self._row_to_response(result.data[0])

    def add_image(
        self,
        order_id: str,
        data: OrderImageCreate,
        now: Optional[datetime] = None
    ) -> OrderResponse:
        """
        Attach an image URL to an order.

        Raises:
            OrderNotFoundError: If order doesn't exist
        """
        now = now or datetime.now()
        row = self._fetch_row(order_id)

        images = list(row.get("images") or [])
        images.append({
            "url": data.image_url,
            "type": data.image_type,
            "description": data.description,
            "uploaded_at": now.isoformat(),
        })

        try:
            result = (
                self.db.table(self.table)
                .update({"images": images, "updated_at": now.isoformat()})
                .eq("order_id", order_id)
                .execute()
            )
        except Exception as e:
            logger.error("add_order_image_failed", order_id=order_id, error=str(e))
            raise DatabaseError("update", str(e))

        logger.info("order_image_added", order_id=order_id, image_type=data.image_type)
        return self._row_to_response(result.data[0])

    def today_stats(self, now: Optional[datetime] = None) -> TodayStats:
        """Orders and revenue booked today plus open order counts."""
        now = now or datetime.now()
        midnight = start_of_day(now)

        try:
            today = (
                self.db.table(self.table)
                .select("total_amount, status")
                .gte("created_at", midnight.isoformat())
                .execute()
            )
            open_orders = (
                self.db.table(self.table)
                .select("status")
                .neq("status", OrderStatus.CANCELLED.value)
                .execute()
            )
        except Exception as e:
            logger.error("get_today_stats_failed", error=str(e))
            raise DatabaseError("select", str(e))

        in_progress_values = {s.value for s in IN_PROGRESS_STATUSES}

        return TodayStats(
            today_orders=len(today.data),
            pending_orders=sum(
                1 for row in open_orders.data
                if row["status"] == OrderStatus.PICKUP_AWAITED.value
            ),
            in_progress_orders=sum(
                1 for row in open_orders.data
                if row["status"] in in_progress_values
            ),
            today_revenue=sum(row.get("total_amount") or 0 for row in today.data),
        )

    def _row_to_response(self, row: dict) -> OrderResponse:
        """Convert database row to OrderResponse."""
        return OrderResponse(
            order_id=row["order_id"],
            customer_name=row["customer_name"],
            phone=row["phone"],
            address=row["address"],
            notes=row.get("notes"),
            service_name=row["service_name"],
            service_type=row.get("service_type") or ServiceType.BOOKING.value,
            booking_type=row.get("booking_type") or BookingType.NORMAL.value,
            measurement_method=row.get("measurement_method") or "self",
            tailor_visit_date=row.get("tailor_visit_date"),
            measurements=row.get("measurements"),
            customization=row.get("customization"),
            booking_date=row["booking_date"],
            processing_start_date=row["processing_start_date"],
            estimated_delivery=row["estimated_delivery"],
            actual_delivery=row.get("actual_delivery"),
            base_price=row.get("base_price") or 0,
            add_ons_total=row.get("add_ons_total") or 0,
            urgent_surcharge=row.get("urgent_surcharge") or 0,
            total_amount=row["total_amount"],
            advance_amount=row.get("advance_amount") or 0,
            requires_advance=row.get("requires_advance", False),
            advance_paid=row.get("advance_paid", False),
            payment_status=row.get("payment_status") or PaymentStatus.PENDING.value,
            status=row["status"],
            status_history=row.get("status_history") or [],
            images=row.get("images") or [],
            additional_remarks=row.get("additional_remarks"),
            extra_charges_note=row.get("extra_charges_note"),
            admin_notes=row.get("admin_notes"),
            created_at=row["created_at"],
            updated_at=row.get("updated_at"),
        )


# Singleton instance
_order_service: Optional[OrderService] = None


def get_order_service() -> OrderService:
    """Get or create OrderService instance."""
    global _order_service
    if _order_service is None:
        _order_service = OrderService()
    return _order_service
