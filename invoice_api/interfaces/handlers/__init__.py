"""
Request handlers, one class per resource.

Every handler method takes the RequestContext built by the dispatcher
and returns a Starlette response.
"""

from invoice_api.interfaces.handlers.auth import AuthHandler
from invoice_api.interfaces.handlers.clients import ClientHandler
from invoice_api.interfaces.handlers.deliveries import DeliveryHandler
from invoice_api.interfaces.handlers.exports import ExportHandler
from invoice_api.interfaces.handlers.invoices import InvoiceHandler
from invoice_api.interfaces.handlers.logs import LogHandler
from invoice_api.interfaces.handlers.products import ProductHandler

__all__ = [
    "AuthHandler",
    "ClientHandler",
    "DeliveryHandler",
    "ExportHandler",
    "InvoiceHandler",
    "LogHandler",
    "ProductHandler",
]
