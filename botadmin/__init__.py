"""botadmin: multi-tenant admin backend for merchant bot configuration.

Serves a per-merchant configuration document made of sections and typed
fields, with validated updates and reset-to-factory operations.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
