"""Job posting use cases."""

from hrms.application.use_cases.job_postings.job_posting_operations import JobPostingService

__all__ = ["JobPostingService"]
