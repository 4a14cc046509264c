"""
Booking counter store.

Per-date tallies of normal and urgent orders, persisted in the
`booking_counts` table (date primary key, normal, urgent). All reads,
increments and releases go through BookingCounterStore so the commit
strategy can be swapped without touching the allocator or calculator.
A cancelled order releases its slot.

Two increment strategies:
- lenient (default): read the row, write count + 1. Two concurrent
  bookings for the last slot can both succeed.
- conditional: pass a cap and the store calls the
  `increment_booking_count` database function, which only increments
  while the count is below the cap:

      create function increment_booking_count(p_date date, p_type text, p_cap int)
      returns setof booking_counts as $$
        insert into booking_counts (date) values (p_date) on conflict do nothing;
        update booking_counts
           set normal = normal + (p_type = 'normal')::int,
               urgent = urgent + (p_type = 'urgent')::int
         where date = p_date
           and (case when p_type = 'normal' then normal else urgent end) < p_cap
        returning *;
      $$ language sql;
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional
import structlog

from config import get_supabase_client
from models.booking import BookingCounts, BookingType, DayCounts
from exceptions import CapacityExceededError, DatabaseError
from utils.date_utils import date_key

logger = structlog.get_logger(__name__)


class BookingCounterStore(ABC):
    """Persistence interface for per-date booking counts."""

    @abstractmethod
    def get_counts(self, start: date, end: date) -> BookingCounts:
        """Counts for every booked date in [start, end]."""

    @abstractmethod
    def increment(
        self,
        day: date,
        booking_type: BookingType,
        cap: Optional[int] = None
    ) -> DayCounts:
        """
        Record one more booking on a date.

        Raises:
            CapacityExceededError: If cap is given and already reached
        """

    @abstractmethod
    def release(self, day: date, booking_type: BookingType) -> DayCounts:
        """Give back one booking on a date. Counts never drop below zero."""

    @abstractmethod
    def clear(self, day: date) -> None:
        """Reset a date's counts (dev use only)."""


class SupabaseBookingCounterStore(BookingCounterStore):
    """Booking counts stored in Supabase."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "booking_counts"
        self.rpc_name = "increment_booking_count"

    def get_counts(self, start: date, end: date) -> BookingCounts:
        logger.debug("getting_booking_counts", start=date_key(start), end=date_key(end))

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .gte("date", date_key(start))
                .lte("date", date_key(end))
                .execute()
            )

            counts = {
                row["date"][:10]: self._row_to_counts(row)
                for row in result.data
            }

            logger.debug("booking_counts_retrieved", days=len(counts))
            return counts

        except Exception as e:
            logger.error("get_booking_counts_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def increment(
        self,
        day: date,
        booking_type: BookingType,
        cap: Optional[int] = None
    ) -> DayCounts:
        if cap is not None:
            return self._increment_below_cap(day, booking_type, cap)

        key = date_key(day)
        logger.info("incrementing_booking_count", date=key, booking_type=booking_type.value)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("date", key)
                .execute()
            )

            if result.data:
                current = self._row_to_counts(result.data[0])
                updated = current.incremented(booking_type)
                (
                    self.db.table(self.table)
                    .update({
                        "normal": updated.normal,
                        "urgent": updated.urgent,
                        "updated_at": datetime.utcnow().isoformat(),
                    })
                    .eq("date", key)
                    .execute()
                )
            else:
                updated = DayCounts().incremented(booking_type)
                (
                    self.db.table(self.table)
                    .insert({
                        "date": key,
                        "normal": updated.normal,
                        "urgent": updated.urgent,
                    })
                    .execute()
                )

            logger.info(
                "booking_count_incremented",
                date=key,
                normal=updated.normal,
                urgent=updated.urgent
            )
            return updated

        except Exception as e:
            logger.error("increment_booking_count_failed", date=key, error=str(e))
            raise DatabaseError("update", str(e))

    def _increment_below_cap(self, day: date, booking_type: BookingType, cap: int) -> DayCounts:
        """Conditional increment in a single database call."""
        key = date_key(day)
        logger.info(
            "incrementing_booking_count_conditional",
            date=key,
            booking_type=booking_type.value,
            cap=cap
        )

        try:
            result = self.db.rpc(
                self.rpc_name,
                {"p_date": key, "p_type": booking_type.value, "p_cap": cap}
            ).execute()
        except Exception as e:
            logger.error("increment_booking_count_failed", date=key, error=str(e))
            raise DatabaseError("rpc", str(e))

        if not result.data:
            logger.warning("booking_capacity_reached", date=key, booking_type=booking_type.value)
            raise CapacityExceededError(key, booking_type.value, cap)

        return self._row_to_counts(result.data[0])

    def release(self, day: date, booking_type: BookingType) -> DayCounts:
        key = date_key(day)
        logger.info("releasing_booking_count", date=key, booking_type=booking_type.value)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("date", key)
                .execute()
            )

            if not result.data:
                logger.warning("release_without_booking_count", date=key)
                return DayCounts()

            updated = self._row_to_counts(result.data[0]).decremented(booking_type)
            (
                self.db.table(self.table)
                .update({
                    "normal": updated.normal,
                    "urgent": updated.urgent,
                    "updated_at": datetime.utcnow().isoformat(),
                })
                .eq("date", key)
                .execute()
            )

            logger.info(
                "booking_count_released",
                date=key,
                normal=updated.normal,
                urgent=updated.urgent
            )
            return updated

        except Exception as e:
            logger.error("release_booking_count_failed", date=key, error=str(e))
            raise DatabaseError("update", str(e))

    def clear(self, day: date) -> None:
        key = date_key(day)
        logger.info("clearing_booking_count", date=key)

        try:
            self.db.table(self.table).delete().eq("date", key).execute()
        except Exception as e:
            logger.error("clear_booking_count_failed", date=key, error=str(e))
            raise DatabaseError("delete", str(e))

    def _row_to_counts(self, row: dict) -> DayCounts:
        """Convert database row to DayCounts."""
        return DayCounts(
            normal=row.get("normal") or 0,
            urgent=row.get("urgent") or 0,
        )


# Singleton instance
_booking_counter_store: Optional[BookingCounterStore] = None


def get_booking_counter_store() -> BookingCounterStore:
    """Get or create the booking counter store."""
    global _booking_counter_store
    if _booking_counter_store is None:
        _booking_counter_store = SupabaseBookingCounterStore()
    return _booking_counter_store
