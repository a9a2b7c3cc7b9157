"""Data access layer: tenant connections, tracing and catalog repositories."""

from dal.tenant_database import TenantDatabase

__all__ = ["TenantDatabase"]
