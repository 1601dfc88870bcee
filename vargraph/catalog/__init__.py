"""Catalog definitions for vargraph.

Submodules:
    fixtures -- Built-in ATL08 and RSSMIF16D catalogs.
    loader   -- JSON catalog documents to Catalog objects (and back).
"""

from vargraph.catalog.fixtures import ATL08, BUILTIN_CATALOGS, RSSMIF16D
from vargraph.catalog.loader import catalog_from_dict, catalog_to_dict, load_catalog_file, load_catalogs

__all__ = [
    "ATL08",
    "BUILTIN_CATALOGS",
    "RSSMIF16D",
    "catalog_from_dict",
    "catalog_to_dict",
    "load_catalog_file",
    "load_catalogs",
]
