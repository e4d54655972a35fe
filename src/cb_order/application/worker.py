"""StatusTransitionWorker — periodic reconciliation of order statuses.

One pass loads every order, plans at most one forward transition per
non-terminal order (see cb_order.domain.transitions) and applies the
transitions as independent store updates. A failure on one order is logged
and counted; the rest of the pass continues.
"""
import asyncio
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from src.cb_common.datetime_utils import utc_now
from src.cb_order.domain.models import Order, QueueDepth
from src.cb_order.domain.repository import OrderStoreProtocol
from src.cb_order.domain.transitions import TRANSITION_EDGES, Transition, plan_transitions

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationReport:
    ran_at: datetime
    transitions: dict[str, int] = field(
        default_factory=lambda: {edge: 0 for edge in TRANSITION_EDGES}
    )
    queue_depth: dict[str, int] = field(default_factory=dict)
    failed: int = 0
    skipped: int = 0

    @property
    def applied(self) -> int:
        return sum(self.transitions.values())


Reporter = Callable[[ReconciliationReport], None]


class StatusTransitionWorker:
    def __init__(
        self,
        store: OrderStoreProtocol,
        *,
        clock: Callable[[], datetime] = utc_now,
        rng: random.Random | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._rng = rng or random.Random()
        self._reporter = reporter
        self._lock = asyncio.Lock()

    def _coin(self) -> bool:
        return self._rng.random() < 0.5

    async def run_once(self) -> ReconciliationReport:
        """Run a single reconciliation pass; concurrent callers wait their turn."""
        async with self._lock:
            now = self._clock()
            report = ReconciliationReport(ran_at=now)

            orders = await self._store.list()
            planned = plan_transitions(orders, now, self._coin)

            results = await asyncio.gather(
                *(self._apply(t) for t in planned), return_exceptions=True
            )
            for transition, result in zip(planned, results):
                if isinstance(result, BaseException):
                    report.failed += 1
                    logger.error(
                        "Failed to move order %s along %s",
                        transition.order_id,
                        transition.edge,
                        exc_info=result,
                    )
                elif result is None:
                    # Cancelled between the read and the update
                    report.skipped += 1
                    logger.info(
                        "Order %s disappeared before %s, skipped",
                        transition.order_id,
                        transition.edge,
                    )
                else:
                    report.transitions[transition.edge] += 1
                    logger.debug("Order %s: %s", transition.order_id, transition.edge)

            depth = QueueDepth()
            depth.counts.update(await self._store.count_by_status())
            report.queue_depth = dict(depth.counts)

            logger.info(
                "Reconciliation: %d order(s) advanced, %d failed, %d skipped, %d active",
                report.applied,
                report.failed,
                report.skipped,
                depth.active,
            )
            if self._reporter is not None:
                self._reporter(report)
            return report

    async def _apply(self, transition: Transition) -> Order | None:
        return await self._store.update_partial(transition.order_id, transition.update)

    async def run_forever(self, interval: float) -> None:
        """Run a pass now, then every `interval` seconds until cancelled."""
        logger.info("Status worker started, interval %.0fs", interval)
        while True:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Reconciliation pass failed")
            await asyncio.sleep(interval)
