"""Abstract base class for authenticated RecipeSage clients."""

from abc import ABC, abstractmethod
from typing import Any

Query = dict[str, str]


class ApiClient(ABC):
    """Interface tools use to talk to the recipe service for one account.

    Implementations attach the session token themselves. Every verb returns the
    decoded response payload and raises UpstreamError on any non-success status
    or undecodable body.
    """

    @abstractmethod
    async def get(self, path: str, *, query: Query | None = None) -> Any:
        """Send a GET request.

        Args:
            path: Path relative to the API base URL (e.g., "/recipes/abc").
            query: Extra query parameters.
        """
        ...

    @abstractmethod
    async def post(self, path: str, body: Any = None, *, query: Query | None = None) -> Any:
        """Send a POST request with an optional JSON body."""
        ...

    @abstractmethod
    async def put(self, path: str, body: Any = None, *, query: Query | None = None) -> Any:
        """Send a PUT request with an optional JSON body."""
        ...

    @abstractmethod
    async def delete(self, path: str, body: Any = None, *, query: Query | None = None) -> Any:
        """Send a DELETE request with an optional JSON body."""
        ...
