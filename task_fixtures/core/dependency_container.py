# Dependency Injection Container.

from typing import Callable, Optional

import httpx

from task_fixtures.settings import Settings


def default_http_client_factory(settings: Settings) -> httpx.AsyncClient:
    """Builds an AsyncClient bound to the service under test."""
    return httpx.AsyncClient(
        base_url=settings.get_api_base_url(),
        timeout=settings.get_api_timeout(),
        headers={"Content-Type": "application/json"},
    )


class DependencyContainer:
    """Holds shared dependencies for the fixture hooks.

    Dredd drives every async hook through its own event loop, so the container
    hands out a fresh HTTP client per call instead of holding a shared one.
    Tests swap the factory to inject a mocked transport.
    """

    def __init__(
        self,
        settings: Settings,
        http_client_factory: Optional[Callable[[Settings], httpx.AsyncClient]] = None,
    ) -> None:
        """
        Initializes the container.

        Args:
            settings: Fixture settings.
            http_client_factory: Callable returning a new httpx.AsyncClient for the configured service.
        """
        self.settings = settings
        self.http_client_factory = http_client_factory or default_http_client_factory

    def create_http_client(self) -> httpx.AsyncClient:
        return self.http_client_factory(self.settings)
