"""Onboarding task use cases."""

from hrms.application.use_cases.onboarding_tasks.onboarding_task_operations import (
    OnboardingTaskService,
)

__all__ = ["OnboardingTaskService"]
