"""
GraphQL documents used by the search client
"""

SEARCH_DIYS = """
query searchDIYs($searchTerm: String!) {
  searchDIYs(searchTerm: $searchTerm) {
    _id
    title
    description
  }
}
"""
