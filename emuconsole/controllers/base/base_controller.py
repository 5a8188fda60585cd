"""Base controller for the console's per-service data access.

Each view owns one controller that turns backend calls into validated
snapshot models. Controllers are plain async objects; screens run them
inside Textual workers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from emuconsole.controllers.api.client import ConsoleApiClient


class BaseController(ABC):
    """Base controller class bound to one backend service.

    Subclasses implement ``fetch_all`` to return the view's full-state
    snapshot model.
    """

    def __init__(self, client: ConsoleApiClient) -> None:
        self._client = client

    @property
    def client(self) -> ConsoleApiClient:
        return self._client

    @abstractmethod
    async def fetch_all(self) -> Any:
        """Fetch the full-state snapshot for this controller's view.

        Returns:
            The validated snapshot model
        """
        ...


__all__ = [
    "BaseController",
]
