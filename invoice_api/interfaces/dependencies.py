"""
Dependency wiring for the invoice API.

Builds infrastructure adapters, injects them into application services
by constructor, and binds services to handlers and pipeline stages.
This is the composition root; `create_app()` calls `build_state()`.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from slowapi.util import get_remote_address

from invoice_api.application.invoicing.accounts import AccountService
from invoice_api.application.invoicing.audit import AuditTrail
from invoice_api.application.invoicing.catalog import ProductGroupService, ProductService
from invoice_api.application.invoicing.clients import ClientService
from invoice_api.application.invoicing.deliveries import DeliveryService
from invoice_api.application.invoicing.exports import ExportService
from invoice_api.application.invoicing.invoices import InvoiceService
from invoice_api.core.config import Settings
from invoice_api.domain.invoicing.ports import PasswordHasher
from invoice_api.infrastructure.exports.csv_exporter import CsvExporter
from invoice_api.infrastructure.persistence.memory import InMemoryStore
from invoice_api.infrastructure.security.identity_lookup import UserIdentityLookup
from invoice_api.infrastructure.security.passwords import BcryptPasswordHasher
from invoice_api.infrastructure.security.tokens import JWTTokenService
from invoice_api.interfaces.handlers import (
    AuthHandler,
    ClientHandler,
    DeliveryHandler,
    ExportHandler,
    InvoiceHandler,
    LogHandler,
    ProductHandler,
)
from invoice_api.interfaces.health import HealthHandler
from invoice_api.interfaces.routes import build_route_table
from invoice_api.shared.dispatch.dispatcher import Dispatcher
from invoice_api.shared.security.authentication import AuthenticateStage, Authenticator
from invoice_api.shared.security.authorization import AuthorizeStage
from invoice_api.shared.security.rate_limiting import (
    FixedWindowRateLimiter,
    RateLimitStage,
)


@dataclass(frozen=True)
class Services:
    """Application services sharing one store and audit trail."""

    audit: AuditTrail
    accounts: AccountService
    clients: ClientService
    products: ProductService
    product_groups: ProductGroupService
    invoices: InvoiceService
    deliveries: DeliveryService
    exports: ExportService


@dataclass(frozen=True)
class Handlers:
    """Handler instances the route table binds to."""

    health: HealthHandler
    auth: AuthHandler
    clients: ClientHandler
    products: ProductHandler
    invoices: InvoiceHandler
    deliveries: DeliveryHandler
    exports: ExportHandler
    logs: LogHandler


@dataclass(frozen=True)
class AppState:
    """Everything a running app shares across requests.

    Attached to `app.state.invoice_api` so nothing is kept at module level.
    """

    settings: Settings
    store: InMemoryStore
    tokens: JWTTokenService
    identities: UserIdentityLookup
    rate_limiter: FixedWindowRateLimiter
    services: Services
    handlers: Handlers
    dispatcher: Dispatcher


def build_services(
    store: InMemoryStore,
    hasher: PasswordHasher,
    tokens: JWTTokenService,
) -> Services:
    """Wire application services to the repositories of `store`."""
    audit = AuditTrail(store.audit_logs)
    products = ProductService(store.products, store.product_groups, audit)
    return Services(
        audit=audit,
        accounts=AccountService(store.users, hasher, tokens, audit),
        clients=ClientService(store.clients, store.invoices, store.deliveries, audit),
        products=products,
        product_groups=ProductGroupService(store.product_groups, products, audit),
        invoices=InvoiceService(store.invoices, store.clients, store.products, audit),
        deliveries=DeliveryService(store.deliveries, store.clients, store.invoices, audit),
        exports=ExportService(store.invoices, store.clients, CsvExporter(), audit),
    )


def build_handlers(services: Services, settings: Settings) -> Handlers:
    return Handlers(
        health=HealthHandler(settings),
        auth=AuthHandler(services.accounts),
        clients=ClientHandler(services.clients),
        products=ProductHandler(services.products, services.product_groups),
        invoices=InvoiceHandler(services.invoices),
        deliveries=DeliveryHandler(services.deliveries),
        exports=ExportHandler(services.exports),
        logs=LogHandler(services.audit),
    )


def build_state(
    settings: Settings,
    store: Optional[InMemoryStore] = None,
    hasher: Optional[PasswordHasher] = None,
    rate_limit_clock: Callable[[], float] = time.monotonic,
    token_clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> AppState:
    """Build the full object graph for one application instance.

    Args:
        settings: Loaded configuration.
        store: Repositories to serve from. A fresh in-memory store by default.
        hasher: Password hasher. bcrypt by default.
        rate_limit_clock: Monotonic time source for the rate limiter.
        token_clock: Wall clock used when issuing tokens.

    Returns:
        The AppState, with a dispatcher whose route table is frozen.
    """
    if store is None:
        store = InMemoryStore()
    tokens = JWTTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiry=timedelta(hours=settings.jwt_expiry_hours),
        clock=token_clock,
    )
    identities = UserIdentityLookup(store.users)
    rate_limiter = FixedWindowRateLimiter.from_rate(
        settings.rate_limit,
        clock=rate_limit_clock,
        max_buckets=settings.rate_limit_max_buckets,
    )
    services = build_services(store, hasher or BcryptPasswordHasher(), tokens)
    handlers = build_handlers(services, settings)
    # Order matters: rate limit, then authenticate, then authorize
    stages = [
        RateLimitStage(rate_limiter),
        AuthenticateStage(Authenticator(tokens, identities)),
        AuthorizeStage(),
    ]
    dispatcher = Dispatcher(
        build_route_table(handlers), stages, key_func=get_remote_address
    )
    return AppState(
        settings=settings,
        store=store,
        tokens=tokens,
        identities=identities,
        rate_limiter=rate_limiter,
        services=services,
        handlers=handlers,
        dispatcher=dispatcher,
    )
