"""Operation catalog."""

from motorent.application.catalog.operation_catalog import OperationCatalog, build_catalog

__all__ = ["OperationCatalog", "build_catalog"]
