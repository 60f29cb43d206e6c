"""
Catalog access: the HTTP client and the comparison resolver.
"""

from .catalog_client import CatalogClient, CreateResult, TOOL_TEMPLATE, validate_tool_payload
from .resolver import ComparisonResolver, ResolutionReport

__all__ = [
    'CatalogClient',
    'CreateResult',
    'TOOL_TEMPLATE',
    'validate_tool_payload',
    'ComparisonResolver',
    'ResolutionReport'
]
