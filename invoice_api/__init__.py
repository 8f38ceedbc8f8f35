"""
Srecha invoice API.

REST backend for invoice management: accounts, clients, products,
invoices, deliveries, CSV exports and audit logs.
"""

__version__ = "1.0.0"
