"""Multi-tenant invoicing and inventory core."""

__version__ = "1.0.0"
