# turns a cart snapshot into a stored order, all or nothing
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Mapping, Optional

import db.crud as crud
from db.database import connect
from menu.items import SimpleItem
from utils.errors import (
    EmptyCart,
    OrderingError,
    PersistenceFailure,
    ResourceUnavailable,
)
from utils.logger import get_logger

_logger = get_logger(__name__)


class CommitState(enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    PERSISTING = "persisting"
    COMMITTED = "committed"
    FAILED = "failed"


@dataclass(frozen=True)
class CommitResult:
    state: CommitState
    order_id: Optional[int] = None
    error: Optional[OrderingError] = None

    @property
    def ok(self) -> bool:
        return self.state is CommitState.COMMITTED


def snapshot_total(snapshot: Mapping[SimpleItem, int]) -> Decimal:
    return sum((item.price * qty for item, qty in snapshot.items()), Decimal("0"))


class OrderCommitter:
    """
    Persists a cart snapshot as one order header plus one line per entry, in
    a single transaction.

    Line prices come from the snapshot, not from the menu, so a later price
    change cannot alter a placed order. The committer never touches the cart;
    clearing it after a successful commit is the caller's job.

    Failures are returned on the result rather than raised:
      - EmptyCart: nothing in the snapshot, the store is not contacted
      - ResourceUnavailable: the store could not be opened
      - PersistenceFailure: an insert or the commit failed, everything rolled back
    """

    def __init__(
        self,
        connect_fn=connect,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._connect = connect_fn
        self._clock = clock
        self.state = CommitState.IDLE

    async def commit(
        self,
        snapshot: Mapping[SimpleItem, int],
        customer_name: str,
        customer_address: str,
    ) -> CommitResult:
        self.state = CommitState.VALIDATING
        lines = list(snapshot.items())
        if not lines:
            _logger.warning("Attempted to place an order from an empty cart.")
            return self._fail(EmptyCart())

        total = snapshot_total(snapshot)
        try:
            async with self._connect() as conn:
                self.state = CommitState.PERSISTING
                order_id = await self._persist(
                    conn, lines, customer_name, customer_address, total
                )
        except (ResourceUnavailable, PersistenceFailure) as e:
            return self._fail(e)

        self.state = CommitState.COMMITTED
        _logger.info(f"Order {order_id} saved with {len(lines)} line(s), total {total}.")
        return CommitResult(CommitState.COMMITTED, order_id=order_id)

    async def _persist(self, conn, lines, customer_name, customer_address, total) -> int:
        try:
            await conn.execute("BEGIN;")
            affected, order_id = await crud.insert_order(
                conn, customer_name, customer_address, self._clock(), total
            )
            if affected == 0:
                raise PersistenceFailure("Creating order failed, no rows affected.")
            if not order_id:
                raise PersistenceFailure("Creating order failed, no ID obtained.")

            for line_no, (item, qty) in enumerate(lines, start=1):
                await crud.insert_order_line(conn, order_id, line_no, item, qty)
            await conn.commit()
            return order_id
        except Exception as e:
            _logger.exception(f"Error placing order: {e}")
            await self._rollback(conn)
            if isinstance(e, PersistenceFailure):
                raise
            raise PersistenceFailure(f"Order could not be saved: {e}", e) from e

    @staticmethod
    async def _rollback(conn) -> None:
        _logger.warning("Transaction is being rolled back.")
        try:
            await conn.rollback()
        except Exception:
            # the original failure is what gets reported
            _logger.exception("Error during transaction rollback.")

    def _fail(self, error: OrderingError) -> CommitResult:
        self.state = CommitState.FAILED
        return CommitResult(CommitState.FAILED, error=error)
