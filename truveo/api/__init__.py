"""API integration layer."""

from .client import FILTERS, MODIFIERS, SORTERS, QueryClient
from .response_parser import ResponseParser

__all__ = ["QueryClient", "ResponseParser", "SORTERS", "FILTERS", "MODIFIERS"]
