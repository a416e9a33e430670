"""API route modules for the RefundHunter backend.

Routers:
- audit: CSV normalization, audits and claim validation
- mappings: Alias table and vendor template inspection

The rate-limited upload endpoint stays in app.py since it uses @limiter.
"""

from .audit import router as audit_router
from .mappings import router as mappings_router

__all__ = ["audit_router", "mappings_router"]
