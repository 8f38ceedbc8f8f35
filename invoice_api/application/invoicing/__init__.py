"""
Invoicing bounded context: application layer.

Services for accounts, clients, catalog, invoices, deliveries,
exports and the audit trail.
"""
