"""Cursors – paging, filtering, sorting and searching over collections."""
from schema_cursors.cursors.base import BaseCursor
from schema_cursors.cursors.descriptors import (
    CollectionFilterDescriptor,
    CollectionSortDescriptor,
    CursorColumnDefinition,
    FilterOperator,
    SortDirection,
)
from schema_cursors.cursors.endpoint import EndpointCursor
from schema_cursors.cursors.engine import (
    UnknownOperatorPolicy,
    filter_collection_by,
    search_collection_by,
    sort_collection_by,
)
from schema_cursors.cursors.pagination import PaginationInfo, build_page_params, normalize
from schema_cursors.cursors.ports import Agent, AgentResponse, LinkDescriptor, Schema
from schema_cursors.cursors.state import LoadingState
from schema_cursors.cursors.value import ValueCursor

__all__ = [
    "Agent",
    "AgentResponse",
    "BaseCursor",
    "CollectionFilterDescriptor",
    "CollectionSortDescriptor",
    "CursorColumnDefinition",
    "EndpointCursor",
    "FilterOperator",
    "LinkDescriptor",
    "LoadingState",
    "PaginationInfo",
    "Schema",
    "SortDirection",
    "UnknownOperatorPolicy",
    "ValueCursor",
    "build_page_params",
    "filter_collection_by",
    "normalize",
    "search_collection_by",
    "sort_collection_by",
]
