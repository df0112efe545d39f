"""
Resource Infrastructure Module

Provides the provider contracts, request context, pagination handling,
base URL resolvers and the resource registry.
"""

from .base import ICRUD, IFindAll, IPaginatedFindAll, IURLResolver, IRequestAwareURLResolver
from .pagination import (
    PagePagination,
    OffsetPagination,
    Pagination,
    parse_pagination,
    build_pagination_links,
)
from .registry import Capability, ResourceRegistration, ResourceRegistry
from .request import Request
from .url_resolver import StaticURLResolver, HostURLResolver

__all__ = [
    'ICRUD',
    'IFindAll',
    'IPaginatedFindAll',
    'IURLResolver',
    'IRequestAwareURLResolver',
    'PagePagination',
    'OffsetPagination',
    'Pagination',
    'parse_pagination',
    'build_pagination_links',
    'Capability',
    'ResourceRegistration',
    'ResourceRegistry',
    'Request',
    'StaticURLResolver',
    'HostURLResolver',
]
