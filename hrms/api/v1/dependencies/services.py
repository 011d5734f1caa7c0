"""Entity use-case dependencies (composition root).

Routes depend only on these; repositories and storage are built here.
"""

from __future__ import annotations

from functools import partial
from typing import Annotated

from fastapi import Depends

from hrms.application.services import AuditTrailRecorder
from hrms.application.use_cases import (
    AuditLogService,
    DocumentService,
    EmployeeService,
    InterviewService,
    JobApplicationService,
    JobPostingService,
    OnboardingTaskService,
    OrgStructureService,
    PayrollService,
)
from hrms.core.config import get_settings
from hrms.infrastructure.persistence.database import run_after_commit
from hrms.infrastructure.persistence.repositories import (
    DepartmentRepository,
    DocumentRepository,
    EmployeeRepository,
    InterviewRepository,
    JobApplicationRepository,
    JobPostingRepository,
    OnboardingTaskRepository,
    OrgReferenceRepository,
    PayrollRepository,
    PositionRepository,
    UserAccountRepository,
)
from hrms.infrastructure.storage import LocalDocumentStorage

from .core import DbSession, Pipeline, Workflow, get_audit_recorder


async def get_employee_service(db: DbSession, pipeline: Pipeline) -> EmployeeService:
    return EmployeeService(
        pipeline,
        EmployeeRepository(db),
        OrgReferenceRepository(db),
        UserAccountRepository(db),
    )


async def get_job_posting_service(db: DbSession, pipeline: Pipeline) -> JobPostingService:
    return JobPostingService(pipeline, JobPostingRepository(db), OrgReferenceRepository(db))


async def get_job_application_service(
    db: DbSession, pipeline: Pipeline, workflow: Workflow
) -> JobApplicationService:
    return JobApplicationService(
        pipeline, JobApplicationRepository(db), JobPostingRepository(db), workflow
    )


async def get_org_structure_service(db: DbSession, pipeline: Pipeline) -> OrgStructureService:
    return OrgStructureService(pipeline, DepartmentRepository(db), PositionRepository(db))


async def get_interview_service(
    db: DbSession, pipeline: Pipeline, workflow: Workflow
) -> InterviewService:
    settings = get_settings()
    return InterviewService(
        pipeline,
        InterviewRepository(db),
        JobApplicationRepository(db),
        JobPostingRepository(db),
        EmployeeRepository(db),
        workflow,
        min_lead_minutes=settings.interview_min_lead_minutes,
        conflict_window_minutes=settings.interview_conflict_window_minutes,
    )


async def get_onboarding_task_service(
    db: DbSession, pipeline: Pipeline, workflow: Workflow
) -> OnboardingTaskService:
    return OnboardingTaskService(
        pipeline, OnboardingTaskRepository(db), EmployeeRepository(db), workflow
    )


async def get_payroll_service(
    db: DbSession, pipeline: Pipeline, workflow: Workflow
) -> PayrollService:
    return PayrollService(pipeline, PayrollRepository(db), EmployeeRepository(db), workflow)


async def get_document_service(db: DbSession, pipeline: Pipeline) -> DocumentService:
    settings = get_settings()
    return DocumentService(
        pipeline,
        DocumentRepository(db),
        EmployeeRepository(db),
        LocalDocumentStorage(settings.storage_root),
        max_upload_size=settings.max_upload_size,
        after_commit=partial(run_after_commit, db),
    )


async def get_audit_log_service(
    pipeline: Pipeline,
    recorder: Annotated[AuditTrailRecorder, Depends(get_audit_recorder)],
) -> AuditLogService:
    return AuditLogService(pipeline, recorder)
