"""Client library for the Truveo video search API."""

from .api.client import FILTERS, MODIFIERS, SORTERS, QueryClient
from .config.settings import TruveoConfig, load_config
from .core.cursor import ResultCursor
from .core.models import (
    MAX_RESULTS,
    TRANSPORT_ERROR_CODE,
    QueryKind,
    QueryParameters,
    singularize,
)

__all__ = [
    "QueryClient",
    "ResultCursor",
    "QueryKind",
    "QueryParameters",
    "TruveoConfig",
    "load_config",
    "singularize",
    "SORTERS",
    "FILTERS",
    "MODIFIERS",
    "MAX_RESULTS",
    "TRANSPORT_ERROR_CODE",
]
