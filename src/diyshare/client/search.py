"""Live DIY search against the GraphQL API.

`SearchBar` keeps the state of a search box (term, loading flag and
results) and renders it as plain text lines, which is what the
`diyshare search` command prints.
"""

from typing import Any

import httpx

from ..logging import get_logger
from .queries import SEARCH_DIYS

logger = get_logger(__name__)

SEARCHING_MESSAGE = "Searching..."
NO_RESULTS_MESSAGE = "No results found."


class GraphQLClientError(Exception):
    """Raised when a GraphQL request fails or the response carries errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class GraphQLClient:
    """Minimal GraphQL client over httpx."""

    def __init__(
        self,
        url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.token = token
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def execute(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run a GraphQL document and return its `data`.

        Raises:
            GraphQLClientError: On transport failures, non-200 responses
                or GraphQL errors in the response
        """
        payload = {"query": query, "variables": variables or {}}

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(self.url, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            raise GraphQLClientError(f"Request to {self.url} failed: {e}") from e

        if response.status_code != 200:
            raise GraphQLClientError(
                f"GraphQL request failed: {response.status_code} {response.text}"
            )

        body = response.json()
        errors = body.get("errors")
        if errors:
            messages = "; ".join(error.get("message", "Unknown error") for error in errors)
            raise GraphQLClientError(messages, errors)

        return body.get("data") or {}


class SearchBar:
    """State and rendering of the DIY search box."""

    def __init__(self, client: GraphQLClient):
        self.client = client
        self.search_term = ""
        self.loading = False
        self.results: list[dict[str, Any]] = []

    async def handle_change(self, value: str) -> None:
        """Set the search term and fetch matching DIYs.

        No request is made for an empty term.
        """
        self.search_term = value
        if not value:
            self.results = []
            return

        self.loading = True
        try:
            data = await self.client.execute(SEARCH_DIYS, {"searchTerm": value})
            self.results = data.get("searchDIYs") or []
        except GraphQLClientError as e:
            logger.warning("DIY search failed", search_term=value, error=str(e))
            self.results = []
            raise
        finally:
            self.loading = False

    def handle_search(self) -> None:
        """Submit the search box, which empties it."""
        self.clear_search()

    def clear_search(self) -> None:
        self.search_term = ""
        self.results = []

    def select(self, index: int) -> str:
        """Follow a result: return its link and clear the search."""
        link = diy_link(self.results[index])
        self.clear_search()
        return link

    def render(self) -> list[str]:
        """Render the results panel as text entries, one per DIY."""
        if not self.search_term:
            return []
        if self.loading:
            return [SEARCHING_MESSAGE]
        if not self.results:
            return [NO_RESULTS_MESSAGE]
        return [
            f"{diy['title']}\n    {diy['description']}\n    {diy_link(diy)}"
            for diy in self.results
        ]


def diy_link(diy: dict[str, Any]) -> str:
    return f"/diy/{diy['_id']}"
