"""Interview use cases."""

from hrms.application.use_cases.interviews.interview_operations import InterviewService

__all__ = ["InterviewService"]
