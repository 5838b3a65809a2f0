"""Job posting lifecycle: create (and broadcast) or delete."""

from .service import JobCreationResult, JobService

__all__ = ["JobService", "JobCreationResult"]
