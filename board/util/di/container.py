"""Production container and FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from board.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with every component's real implementation.

    Settings are read from the environment when first resolved, so building
    the container opens no connections.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to the app.

    Calling this again replaces the container, which is how tests swap in
    mocked components. The lifespan reads whichever container is attached
    when the app starts.
    """
    setup_dishka(container, app)
