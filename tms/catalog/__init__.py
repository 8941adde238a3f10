from .registry import CatalogEntry, CatalogError, ProgramCatalog, get_catalog

__all__ = ["CatalogEntry", "CatalogError", "ProgramCatalog", "get_catalog"]
