"""
Route declarations.

Every endpoint of the API is declared here with the capability it
requires. The resulting table is frozen by the dispatcher at startup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from invoice_api.domain.access.entities import Capability
from invoice_api.shared.dispatch.routing import RouteTable

if TYPE_CHECKING:
    from invoice_api.interfaces.dependencies import Handlers

API_PREFIX = "/api"


def build_route_table(handlers: Handlers) -> RouteTable:
    """Declare all routes against the given handler instances.

    Args:
        handlers: Handler objects built by the composition root.

    Returns:
        An unfrozen RouteTable.
    """
    table = RouteTable()
    table.add("GET", "/health", handlers.health.health_check, Capability.PUBLIC)

    # Auth
    auth = handlers.auth
    public = table.group(f"{API_PREFIX}/auth", Capability.PUBLIC)
    public.post("/register", auth.register)
    public.post("/login", auth.login)

    account = table.group(f"{API_PREFIX}/auth")
    account.get("/profile", auth.get_profile)
    account.put("/profile", auth.update_profile)
    account.put("/change-password", auth.change_password)
    account.post("/logout", auth.logout)

    admin = table.group(f"{API_PREFIX}/auth", Capability.ADMIN)
    admin.get("/users", auth.get_users)
    admin.post("/users", auth.create_user)
    admin.put("/users/:id/permissions", auth.update_user_permissions)
    admin.delete("/users/:id", auth.delete_user)
    admin.put("/users/:id/toggle-status", auth.toggle_user_status)

    # Clients
    clients = table.group(f"{API_PREFIX}/clients")
    clients.get("", handlers.clients.get_clients)
    clients.post("", handlers.clients.create_client)
    clients.get("/:id", handlers.clients.get_client)
    clients.put("/:id", handlers.clients.update_client)
    clients.delete("/:id", handlers.clients.delete_client)
    clients.get("/:id/invoices", handlers.clients.get_client_invoices)
    clients.get("/:id/deliveries", handlers.clients.get_client_deliveries)
    clients.get("/:id/statistics", handlers.clients.get_client_statistics)

    # Products
    products = table.group(f"{API_PREFIX}/products")
    products.get("", handlers.products.get_products)
    products.post("", handlers.products.create_product)
    products.get("/:id", handlers.products.get_product)
    products.put("/:id", handlers.products.update_product)
    products.delete("/:id", handlers.products.delete_product)

    # Product groups
    groups = table.group(f"{API_PREFIX}/product-groups")
    groups.get("", handlers.products.get_product_groups)
    groups.post("", handlers.products.create_product_group)
    groups.get("/:id", handlers.products.get_product_group)
    groups.put("/:id", handlers.products.update_product_group)
    groups.delete("/:id", handlers.products.delete_product_group)
    groups.post("/:id/products", handlers.products.add_product_to_group)
    groups.delete("/:id/products/:productId", handlers.products.remove_product_from_group)

    # Invoices
    invoices = table.group(f"{API_PREFIX}/invoices")
    invoices.get("", handlers.invoices.get_invoices)
    invoices.post("", handlers.invoices.create_invoice)
    invoices.get("/:id", handlers.invoices.get_invoice)
    invoices.patch("/:id/status", handlers.invoices.update_invoice_status)
    invoices.patch("/:id/tracking", handlers.invoices.update_invoice_tracking)
    invoices.delete("/:id", handlers.invoices.delete_invoice)

    # Deliveries
    deliveries = table.group(f"{API_PREFIX}/deliveries")
    deliveries.get("", handlers.deliveries.get_deliveries)
    deliveries.post("", handlers.deliveries.create_delivery)
    deliveries.get("/:id", handlers.deliveries.get_delivery)
    deliveries.put("/:id", handlers.deliveries.update_delivery)
    deliveries.delete("/:id", handlers.deliveries.delete_delivery)

    # Export
    export = table.group(f"{API_PREFIX}/export")
    export.get("/invoices", handlers.exports.export_invoices)
    export.get("/clients", handlers.exports.export_clients)

    # Logs
    table.group(API_PREFIX).get("/logs", handlers.logs.get_logs)

    return table
