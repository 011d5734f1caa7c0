"""Tests for InterviewService: scheduling checks, workflow updates and application cascades."""

import logging
from datetime import timedelta

import pytest

from hrms.application.dtos.interview import InterviewCreate
from hrms.application.use_cases import InterviewService
from hrms.domain.enums import (
    ApplicationStatus,
    EmployeeStatus,
    InterviewStatus,
    JobPostingStatus,
    Role,
)
from hrms.domain.exceptions import (
    AccessDeniedException,
    BusinessRuleException,
    DependencyNotFoundException,
    TransitionRejectedException,
    ValidationException,
)
from hrms.shared.utils.datetime import utc_now
from tests.fakes import (
    FakeEmployeeRepository,
    FakeInterviewRepository,
    FakeJobApplicationRepository,
    FakeJobPostingRepository,
    build_pipeline,
    make_application,
    make_ctx,
    make_employee,
    make_interview,
    make_posting,
    workflow,
)

Status = InterviewStatus


@pytest.fixture
def env():
    employees = FakeEmployeeRepository(
        make_employee("iv-1"),
        make_employee("iv-2"),
        make_employee("iv-off", status=EmployeeStatus.INACTIVE),
    )
    postings = FakeJobPostingRepository(
        make_posting(posting_id="open"),
        make_posting(JobPostingStatus.CLOSED, posting_id="closed"),
    )
    applications = FakeJobApplicationRepository()
    interviews = FakeInterviewRepository()
    pipeline, audit, events = build_pipeline(employees)
    service = InterviewService(
        pipeline, interviews, applications, postings, employees, workflow()
    )
    return service, interviews, applications, audit, events


def _request(application_id, *, hours_ahead=48, interviewers=("iv-1",)):
    return InterviewCreate(
        application_id=application_id,
        scheduled_at=utc_now() + timedelta(hours=hours_ahead),
        interviewer_ids=interviewers,
    )


class TestSchedule:
    async def test_schedules_and_moves_application(self, env) -> None:
        service, _, applications, _, events = env
        app = applications.add(make_application("open"))

        interview = await service.schedule_interview(make_ctx(Role.HR, actor_id="hr-1"), _request(app.id))

        assert interview.status is Status.SCHEDULED
        assert interview.created_by_id == "hr-1"
        assert applications.rows[app.id].status is ApplicationStatus.INTERVIEW_SCHEDULED
        assert events.names() == ["interview.scheduled"]

    async def test_unknown_application(self, env) -> None:
        service, *_ = env
        with pytest.raises(DependencyNotFoundException) as exc_info:
            await service.schedule_interview(make_ctx(), _request("missing"))
        assert exc_info.value.error_code == "APPLICATION_NOT_FOUND"

    async def test_closed_posting(self, env) -> None:
        service, _, applications, *_ = env
        app = applications.add(make_application("closed"))
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.schedule_interview(make_ctx(), _request(app.id))
        assert exc_info.value.error_code == "INACTIVE_JOB_POSTING"

    async def test_application_status_must_allow_interviews(self, env) -> None:
        service, _, applications, *_ = env
        app = applications.add(make_application("open", ApplicationStatus.APPLIED))
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.schedule_interview(make_ctx(), _request(app.id))
        assert exc_info.value.error_code == "INVALID_APPLICATION_STATUS"

    async def test_minimum_lead_time(self, env) -> None:
        service, _, applications, *_ = env
        app = applications.add(make_application("open"))
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.schedule_interview(make_ctx(), _request(app.id, hours_ahead=0))
        assert exc_info.value.error_code == "INVALID_SCHEDULE_TIME"

    async def test_inactive_or_unknown_interviewers(self, env) -> None:
        service, _, applications, *_ = env
        app = applications.add(make_application("open"))
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.schedule_interview(
                make_ctx(), _request(app.id, interviewers=("iv-1", "iv-off", "ghost"))
            )
        assert exc_info.value.details["invalid_ids"] == ["iv-off", "ghost"]

    async def test_interviewer_conflict_only_warns(self, env, caplog) -> None:
        service, interviews, applications, *_ = env
        app = applications.add(make_application("open"))
        await service.schedule_interview(make_ctx(), _request(app.id))
        with caplog.at_level(logging.WARNING):
            second = await service.schedule_interview(make_ctx(), _request(app.id))
        assert second.status is Status.SCHEDULED
        assert len(interviews.rows) == 2
        assert any("scheduling conflict" in r.getMessage() for r in caplog.records)

    async def test_employee_role_is_rejected(self, env) -> None:
        service, _, applications, audit, _ = env
        app = applications.add(make_application("open"))
        with pytest.raises(AccessDeniedException):
            await service.schedule_interview(make_ctx(Role.EMPLOYEE, employee_id="iv-1"), _request(app.id))
        assert audit.entries == []


class TestUpdate:
    async def test_completing_with_passing_rating_moves_application_to_review(self, env) -> None:
        service, interviews, applications, _, events = env
        app = applications.add(make_application("open", ApplicationStatus.INTERVIEW_SCHEDULED))
        interview = interviews.add(make_interview(app.id, status=Status.IN_PROGRESS))

        done = await service.update_interview(
            make_ctx(), interview.id, {"status": Status.COMPLETED, "feedback": "Solid", "rating": 4}
        )

        assert done.status is Status.COMPLETED
        assert applications.rows[app.id].status is ApplicationStatus.UNDER_REVIEW
        assert events.names() == ["interview.completed"]

    async def test_completing_with_low_rating_rejects_application(self, env) -> None:
        service, interviews, applications, *_ = env
        app = applications.add(make_application("open", ApplicationStatus.INTERVIEW_SCHEDULED))
        interview = interviews.add(make_interview(app.id, status=Status.IN_PROGRESS, feedback="Weak"))

        await service.update_interview(make_ctx(), interview.id, {"status": Status.COMPLETED, "rating": 2})

        assert applications.rows[app.id].status is ApplicationStatus.REJECTED

    async def test_no_show_rejects_application(self, env) -> None:
        service, interviews, applications, *_ = env
        app = applications.add(make_application("open", ApplicationStatus.INTERVIEW_SCHEDULED))
        interview = interviews.add(make_interview(app.id))

        await service.update_interview(make_ctx(), interview.id, {"status": Status.NO_SHOW})

        assert applications.rows[app.id].status is ApplicationStatus.REJECTED

    async def test_completion_without_feedback_is_rejected(self, env) -> None:
        service, interviews, applications, audit, _ = env
        app = applications.add(make_application("open", ApplicationStatus.INTERVIEW_SCHEDULED))
        interview = interviews.add(make_interview(app.id, status=Status.IN_PROGRESS))

        with pytest.raises(TransitionRejectedException) as exc_info:
            await service.update_interview(make_ctx(), interview.id, {"status": Status.COMPLETED, "rating": 5})

        assert exc_info.value.error_code == "FEEDBACK_REQUIRED"
        assert applications.rows[app.id].status is ApplicationStatus.INTERVIEW_SCHEDULED
        assert interviews.rows[interview.id].status is Status.IN_PROGRESS
        assert audit.entries == []

    async def test_skipping_in_progress_is_rejected(self, env) -> None:
        service, interviews, applications, *_ = env
        app = applications.add(make_application("open"))
        interview = interviews.add(make_interview(app.id))
        with pytest.raises(TransitionRejectedException) as exc_info:
            await service.update_interview(
                make_ctx(), interview.id, {"status": Status.COMPLETED, "feedback": "x", "rating": 3}
            )
        assert exc_info.value.error_code == "INVALID_STATUS_TRANSITION"


class TestCancel:
    async def test_cancelling_last_live_interview_returns_application_to_review(self, env) -> None:
        service, interviews, applications, *_ = env
        app = applications.add(make_application("open", ApplicationStatus.INTERVIEW_SCHEDULED))
        interview = interviews.add(make_interview(app.id))

        cancelled = await service.cancel_interview(make_ctx(), interview.id)

        assert cancelled.status is Status.CANCELLED
        assert applications.rows[app.id].status is ApplicationStatus.UNDER_REVIEW

    async def test_other_live_interview_keeps_application_scheduled(self, env) -> None:
        service, interviews, applications, *_ = env
        app = applications.add(make_application("open", ApplicationStatus.INTERVIEW_SCHEDULED))
        first = interviews.add(make_interview(app.id))
        interviews.add(make_interview(app.id))

        await service.cancel_interview(make_ctx(), first.id)

        assert applications.rows[app.id].status is ApplicationStatus.INTERVIEW_SCHEDULED

    async def test_completed_interview_cannot_be_cancelled(self, env) -> None:
        service, interviews, applications, *_ = env
        app = applications.add(make_application("open"))
        interview = interviews.add(make_interview(app.id, status=Status.COMPLETED, feedback="ok", rating=4))
        with pytest.raises(TransitionRejectedException):
            await service.cancel_interview(make_ctx(), interview.id)

    async def test_cancel_twice(self, env) -> None:
        service, interviews, applications, *_ = env
        app = applications.add(make_application("open"))
        interview = interviews.add(make_interview(app.id, status=Status.CANCELLED))
        with pytest.raises(BusinessRuleException) as exc_info:
            await service.cancel_interview(make_ctx(), interview.id)
        assert exc_info.value.error_code == "ALREADY_CANCELLED"


@pytest.mark.parametrize(
    "field", ["status", "scheduled_at", "interviewer_ids", "interview_type", "duration_minutes"]
)
async def test_update_refuses_null_required_field(env, field) -> None:
    service, interviews, applications, audit, _ = env
    app = applications.add(make_application("open", ApplicationStatus.INTERVIEW_SCHEDULED))
    interview = interviews.add(make_interview(app.id, interviewer_ids=("iv-1",)))

    with pytest.raises(ValidationException) as exc_info:
        await service.update_interview(make_ctx(), interview.id, {field: None})

    assert exc_info.value.error_code == "VALIDATION_ERROR"
    assert exc_info.value.details["field"] == field
    assert interviews.rows[interview.id] == interview
    assert audit.entries == []
    assert applications.rows[app.id].status is ApplicationStatus.INTERVIEW_SCHEDULED
