"""Actor use cases."""

from .bootstrap_session import (
    BootstrapSessionRequest,
    BootstrapSessionResponse,
    BootstrapSessionUseCase,
)
from .get_current_actor import (
    GetCurrentActorRequest,
    GetCurrentActorResponse,
    GetCurrentActorUseCase,
)

__all__ = [
    "BootstrapSessionRequest",
    "BootstrapSessionResponse",
    "BootstrapSessionUseCase",
    "GetCurrentActorRequest",
    "GetCurrentActorResponse",
    "GetCurrentActorUseCase",
]
