"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Request

from lorekeeper.container import Services
from lorekeeper.services.characters import CharacterService
from lorekeeper.services.jobs import JobTracker


def get_services(request: Request) -> Services:
    """Provide the service container built at startup."""
    return request.app.state.services


ServicesDep = Annotated[Services, Depends(get_services)]


def get_job_tracker(services: ServicesDep) -> JobTracker:
    """Provide JobTracker instance."""
    return services.job_tracker


def get_character_service(services: ServicesDep) -> CharacterService:
    """Provide CharacterService instance."""
    return services.character_service


# Type aliases for commonly used dependencies
JobTrackerDep = Annotated[JobTracker, Depends(get_job_tracker)]
CharacterServiceDep = Annotated[CharacterService, Depends(get_character_service)]
