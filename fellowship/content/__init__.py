"""Content catalog: defaults, YAML files, integrity audit."""

from .defaults import default_catalog, default_catalog_data
from .loader import load_catalog, dump_catalog
from .audit import audit_catalog, AuditResult, Issue, Severity, format_console

__all__ = [
    "default_catalog",
    "default_catalog_data",
    "load_catalog",
    "dump_catalog",
    "audit_catalog",
    "AuditResult",
    "Issue",
    "Severity",
    "format_console",
]
