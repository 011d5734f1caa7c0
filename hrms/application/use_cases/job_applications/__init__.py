"""Job application use cases."""

from hrms.application.use_cases.job_applications.job_application_operations import (
    JobApplicationService,
)

__all__ = ["JobApplicationService"]
