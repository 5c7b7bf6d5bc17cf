"""
Search client for the DIY Share GraphQL API
"""

from .queries import SEARCH_DIYS
from .search import GraphQLClient, GraphQLClientError, SearchBar

__all__ = ["SEARCH_DIYS", "GraphQLClient", "GraphQLClientError", "SearchBar"]
