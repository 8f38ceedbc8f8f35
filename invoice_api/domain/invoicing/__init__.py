"""
Invoicing bounded context: domain layer.

This module contains the records the API manages:
- User accounts
- Clients
- Products and product groups
- Invoices and deliveries
- Audit log entries
"""
