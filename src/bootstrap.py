"""Store selection and service wiring.

The backing (PostgreSQL or in-memory) is chosen once at startup and never
mixed per call: if `DATABASE_URL` is unset or the database does not answer
`SELECT 1` within the connect timeout, every store is in-memory.
"""
import logging
import random
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from config.settings import Settings
from src.cb_catalog.application.service import CatalogApplicationService
from src.cb_catalog.domain.repository import CatalogRepositoryProtocol
from src.cb_catalog.infrastructure.memory import InMemoryCatalogRepository
from src.cb_catalog.infrastructure.persistence import SqlCatalogRepository
from src.cb_common.database import build_engine, build_session_factory
from src.cb_order.application.admission import OrderAdmissionService
from src.cb_order.application.service import OrderApplicationService
from src.cb_order.application.worker import StatusTransitionWorker
from src.cb_order.domain.repository import OrderStoreProtocol
from src.cb_order.infrastructure import metrics
from src.cb_order.infrastructure.memory import InMemoryOrderStore
from src.cb_order.infrastructure.persistence import SqlOrderStore
from src.cb_user.domain.repository import UserRegistryProtocol
from src.cb_user.infrastructure.memory import InMemoryUserRegistry
from src.cb_user.infrastructure.persistence import SqlUserRegistry

logger = logging.getLogger(__name__)

BACKEND_SQL = "postgresql"
BACKEND_MEMORY = "memory"


@dataclass
class AppContainer:
    backend: str
    catalog: CatalogRepositoryProtocol
    users: UserRegistryProtocol
    orders: OrderStoreProtocol
    catalog_service: CatalogApplicationService
    admission: OrderAdmissionService
    order_service: OrderApplicationService
    worker: StatusTransitionWorker
    engine: AsyncEngine | None = None


def build_container(
    settings: Settings,
    *,
    catalog: CatalogRepositoryProtocol,
    users: UserRegistryProtocol,
    orders: OrderStoreProtocol,
    backend: str = BACKEND_MEMORY,
    engine: AsyncEngine | None = None,
    rng: random.Random | None = None,
) -> AppContainer:
    """Wire services over already-selected stores."""
    rng = rng or random.Random()
    admission = OrderAdmissionService(
        orders,
        catalog,
        users,
        max_active_orders=settings.MAX_ACTIVE_ORDERS_PER_USER,
        max_burgers=settings.MAX_BURGERS_PER_ORDER,
        registration_url=settings.AGENT_WEBAPP_URL,
        rng=rng,
    )
    order_service = OrderApplicationService(
        orders,
        admission,
        users,
        on_placed=metrics.record_order_placed,
        on_cancelled=metrics.record_order_cancelled,
    )
    worker = StatusTransitionWorker(
        orders, rng=rng, reporter=metrics.record_reconciliation
    )
    return AppContainer(
        backend=backend,
        catalog=catalog,
        users=users,
        orders=orders,
        catalog_service=CatalogApplicationService(catalog),
        admission=admission,
        order_service=order_service,
        worker=worker,
        engine=engine,
    )


def build_memory_container(settings: Settings) -> AppContainer:
    return build_container(
        settings,
        catalog=InMemoryCatalogRepository(),
        users=InMemoryUserRegistry(settings.registered_user_id_list),
        orders=InMemoryOrderStore(),
    )


async def _probe(engine: AsyncEngine) -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_container(settings: Settings) -> AppContainer:
    """Pick the backing once: PostgreSQL when reachable, in-memory otherwise."""
    if not settings.DATABASE_URL:
        logger.warning("DATABASE_URL not set, using in-memory stores")
        return build_memory_container(settings)

    engine = build_engine(settings)
    try:
        await _probe(engine)
    except (SQLAlchemyError, OSError, TimeoutError) as exc:
        logger.warning("PostgreSQL unreachable (%s), falling back to in-memory stores", exc)
        await engine.dispose()
        return build_memory_container(settings)

    session_factory = build_session_factory(engine)
    logger.info("Using PostgreSQL stores")
    return build_container(
        settings,
        catalog=SqlCatalogRepository(session_factory),
        users=SqlUserRegistry(session_factory),
        orders=SqlOrderStore(session_factory),
        backend=BACKEND_SQL,
        engine=engine,
    )


async def close_container(container: AppContainer) -> None:
    if container.engine is not None:
        await container.engine.dispose()


def get_container(request: Request) -> AppContainer:
    """FastAPI dependency: the container built during lifespan startup."""
    return request.app.state.container
