"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from ryunix.services.registry import ServiceRegistry


def get_services(request: Request) -> ServiceRegistry:
    """The process-wide service registry built in the app lifespan."""
    services: ServiceRegistry = request.app.state.services
    return services


Services = Annotated[ServiceRegistry, Depends(get_services)]
