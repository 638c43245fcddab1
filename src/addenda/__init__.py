"""
addenda — typed annotations and metadata attached to host entities.

Components:
- addenda.core: the extender model, external records, reconciliation and edit permissions (zero-IO).
- addenda.io: settings, the hook-driven importer, and polars frames for batches.
"""

__version__ = "0.1.0"
