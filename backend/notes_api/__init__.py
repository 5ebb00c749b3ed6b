"""Multi-tenant notes REST API."""
