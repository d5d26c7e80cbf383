"""Maintenance use cases."""

from .run_maintenance import (
    RunMaintenanceRequest,
    RunMaintenanceResponse,
    RunMaintenanceUseCase,
)

__all__ = [
    "RunMaintenanceRequest",
    "RunMaintenanceResponse",
    "RunMaintenanceUseCase",
]
