"""Service layer for chestnav - navigation logic on top of the content engine."""

from .base_service import BaseService
from .breadcrumb import Breadcrumb, build_breadcrumb
from .outline_service import OutlineService, Sidebar, SidebarElement, SidebarElementKind, build_sidebar
from .search_service import SearchRow, SearchService, aggregate_results
from .url_resolver import Resolution, ResolutionKind, UrlResolver, content_url

__all__ = [
    'BaseService',
    'UrlResolver',
    'Resolution',
    'ResolutionKind',
    'content_url',
    'OutlineService',
    'Sidebar',
    'SidebarElement',
    'SidebarElementKind',
    'build_sidebar',
    'SearchService',
    'SearchRow',
    'aggregate_results',
    'Breadcrumb',
    'build_breadcrumb',
]
