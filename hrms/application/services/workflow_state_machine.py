"""Workflow state machine: fixed per-entity transition tables plus preconditions.

Only Interview, OnboardingTask and PayrollRecord have governed transition
tables. Job applications carry a separate review table for manual moves;
interview outcomes move them through the cascade helpers instead.
The state machine decides legality; it never touches storage. Callers
apply the returned decision and any cascade it implies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum

from hrms.domain.enums import (
    ApplicationStatus,
    EmployeeStatus,
    GovernedEntity,
    InterviewStatus,
    OnboardingTaskStatus,
    PayrollAction,
    PayrollStatus,
    ReasonCode,
)
from hrms.domain.exceptions import BusinessRuleException, TransitionRejectedException
from hrms.domain.value_objects import PayFigures, PayPeriod

_I = InterviewStatus
_O = OnboardingTaskStatus
_P = PayrollStatus
_A = ApplicationStatus

INTERVIEW_TRANSITIONS: Mapping[InterviewStatus, frozenset[InterviewStatus]] = {
    _I.SCHEDULED: frozenset({_I.IN_PROGRESS, _I.CANCELLED, _I.RESCHEDULED, _I.NO_SHOW}),
    _I.IN_PROGRESS: frozenset({_I.COMPLETED, _I.CANCELLED}),
    _I.COMPLETED: frozenset(),
    _I.CANCELLED: frozenset({_I.SCHEDULED}),
    _I.RESCHEDULED: frozenset({_I.SCHEDULED, _I.CANCELLED}),
    _I.NO_SHOW: frozenset({_I.SCHEDULED}),
}

ONBOARDING_TRANSITIONS: Mapping[OnboardingTaskStatus, frozenset[OnboardingTaskStatus]] = {
    _O.PENDING: frozenset({_O.IN_PROGRESS, _O.CANCELLED}),
    _O.IN_PROGRESS: frozenset({_O.COMPLETED, _O.PENDING, _O.CANCELLED}),
    _O.COMPLETED: frozenset({_O.IN_PROGRESS}),
    _O.CANCELLED: frozenset({_O.PENDING, _O.IN_PROGRESS}),
}

PAYROLL_TRANSITIONS: Mapping[PayrollStatus, frozenset[PayrollStatus]] = {
    _P.DRAFT: frozenset({_P.PROCESSED, _P.CANCELLED}),
    _P.PROCESSED: frozenset({_P.PAID, _P.CANCELLED}),
    _P.PAID: frozenset(),
    _P.CANCELLED: frozenset(),
}

# INTERVIEW_SCHEDULED is entered only by scheduling an interview.
APPLICATION_TRANSITIONS: Mapping[ApplicationStatus, frozenset[ApplicationStatus]] = {
    _A.APPLIED: frozenset({_A.UNDER_REVIEW, _A.REJECTED, _A.WITHDRAWN}),
    _A.UNDER_REVIEW: frozenset({_A.SHORTLISTED, _A.OFFERED, _A.REJECTED, _A.WITHDRAWN}),
    _A.SHORTLISTED: frozenset({_A.UNDER_REVIEW, _A.OFFERED, _A.REJECTED, _A.WITHDRAWN}),
    _A.INTERVIEW_SCHEDULED: frozenset({_A.UNDER_REVIEW, _A.REJECTED, _A.WITHDRAWN}),
    _A.OFFERED: frozenset({_A.HIRED, _A.REJECTED, _A.WITHDRAWN}),
    _A.HIRED: frozenset(),
    _A.REJECTED: frozenset(),
    _A.WITHDRAWN: frozenset(),
}

# Each payroll target status is reachable only through its own action.
PAYROLL_ACTION_TARGETS: Mapping[PayrollAction, PayrollStatus] = {
    PayrollAction.PROCESS: _P.PROCESSED,
    PayrollAction.PAY: _P.PAID,
    PayrollAction.CANCEL: _P.CANCELLED,
}

TRANSITION_TABLES: Mapping[GovernedEntity, Mapping] = {
    GovernedEntity.INTERVIEW: INTERVIEW_TRANSITIONS,
    GovernedEntity.ONBOARDING_TASK: ONBOARDING_TRANSITIONS,
    GovernedEntity.PAYROLL_RECORD: PAYROLL_TRANSITIONS,
}

_STATUS_ENUMS: Mapping[GovernedEntity, type[Enum]] = {
    GovernedEntity.INTERVIEW: InterviewStatus,
    GovernedEntity.ONBOARDING_TASK: OnboardingTaskStatus,
    GovernedEntity.PAYROLL_RECORD: PayrollStatus,
}

MIN_RATING = 1
MAX_RATING = 5
PASSING_RATING = 3


@dataclass(frozen=True)
class TransitionContext:
    """Facts a transition may depend on.

    feedback/rating: merged from the request and the stored interview.
    payroll_action: the explicit action driving a payroll status change.
    employee_status: current status of the payroll record's employee.
    figures/stored_gross/stored_net: for the payroll reconciliation check.
    """

    feedback: str | None = None
    rating: int | None = None
    payroll_action: PayrollAction | None = None
    employee_status: EmployeeStatus | None = None
    figures: PayFigures | None = None
    stored_gross: float | None = None
    stored_net: float | None = None


@dataclass(frozen=True)
class TransitionDecision:
    entity_type: GovernedEntity
    current: str
    requested: str
    reason: ReasonCode | None = None
    message: str = ""
    valid_next_states: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.reason is None

    def raise_if_rejected(self) -> None:
        if self.reason is None:
            return
        raise TransitionRejectedException(
            self.reason,
            self.message,
            entity_type=self.entity_type.value,
            current_status=self.current,
            requested_status=self.requested,
            valid_next_states=self.valid_next_states,
        )


def _value(status: Enum | str) -> str:
    return status.value if isinstance(status, Enum) else str(status)


class WorkflowStateMachine:
    """Validates status changes for governed entities.

    Same-status requests are always legal. Entity types without a table
    (employees, documents, job postings) accept any status of their enum.
    """

    def __init__(self, payroll_max_period_days: int = 62) -> None:
        self.payroll_max_period_days = payroll_max_period_days

    # ---- Transition validation ----

    def allowed_next(self, entity_type: GovernedEntity, current: Enum | str) -> frozenset:
        table = TRANSITION_TABLES.get(entity_type)
        if table is None:
            return frozenset()
        return table.get(self._coerce(entity_type, current), frozenset())

    def validate_transition(
        self,
        entity_type: GovernedEntity,
        current: Enum | str,
        requested: Enum | str,
        context: TransitionContext | None = None,
    ) -> TransitionDecision:
        context = context or TransitionContext()
        current_s, requested_s = _value(current), _value(requested)
        if current_s == requested_s:
            return TransitionDecision(entity_type, current_s, requested_s)
        table = TRANSITION_TABLES.get(entity_type)
        if table is None:
            return TransitionDecision(entity_type, current_s, requested_s)

        allowed = table.get(self._coerce(entity_type, current), frozenset())
        allowed_values = tuple(sorted(_value(s) for s in allowed))
        if self._coerce(entity_type, requested) not in allowed:
            return TransitionDecision(
                entity_type,
                current_s,
                requested_s,
                ReasonCode.INVALID_STATUS_TRANSITION,
                f"Cannot change {entity_type.value} status from {current_s} to {requested_s}",
                allowed_values,
            )

        reason, message = self._precondition_failure(
            entity_type, self._coerce(entity_type, requested), context
        )
        return TransitionDecision(
            entity_type, current_s, requested_s, reason, message or "", allowed_values
        )

    def ensure_transition(
        self,
        entity_type: GovernedEntity,
        current: Enum | str,
        requested: Enum | str,
        context: TransitionContext | None = None,
    ) -> None:
        """Raise TransitionRejectedException unless the change is legal."""
        self.validate_transition(entity_type, current, requested, context).raise_if_rejected()

    def _precondition_failure(
        self, entity_type: GovernedEntity, requested: Enum, context: TransitionContext
    ) -> tuple[ReasonCode | None, str | None]:
        match entity_type:
            case GovernedEntity.INTERVIEW:
                if requested is _I.COMPLETED:
                    if not (context.feedback or "").strip():
                        return ReasonCode.FEEDBACK_REQUIRED, "Feedback is required to complete an interview"
                    if context.rating is None or not MIN_RATING <= context.rating <= MAX_RATING:
                        return (
                            ReasonCode.RATING_REQUIRED,
                            f"A rating between {MIN_RATING} and {MAX_RATING} is required to complete an interview",
                        )
            case GovernedEntity.PAYROLL_RECORD:
                if PAYROLL_ACTION_TARGETS.get(context.payroll_action) is not requested:  # type: ignore[arg-type]
                    return (
                        ReasonCode.INVALID_STATUS_TRANSITION,
                        f"Payroll status {requested.value} is only reachable through its explicit action",
                    )
                if requested is _P.PROCESSED:
                    if context.employee_status is not EmployeeStatus.ACTIVE:
                        return ReasonCode.EMPLOYEE_INACTIVE, "Cannot process payroll for inactive employee"
                    figures = context.figures
                    if figures is None or context.stored_net is None or not figures.reconciles(
                        context.stored_gross, context.stored_net
                    ):
                        return (
                            ReasonCode.CALCULATION_ERROR,
                            "Payroll calculations are incorrect. Please review and update.",
                        )
            case GovernedEntity.ONBOARDING_TASK:
                pass
            case (
                GovernedEntity.EMPLOYEE
                | GovernedEntity.DOCUMENT
                | GovernedEntity.JOB_POSTING
            ):
                pass
        return None, None

    @staticmethod
    def _coerce(entity_type: GovernedEntity, status: Enum | str) -> Enum:
        enum_cls = _STATUS_ENUMS[entity_type]
        return status if isinstance(status, enum_cls) else enum_cls(_value(status))

    # ---- Payroll actions ----

    def validate_payroll_action(
        self,
        current: PayrollStatus,
        action: PayrollAction,
        context: TransitionContext | None = None,
    ) -> TransitionDecision:
        """Validate an explicit payroll action against the record's current status.

        Unlike a plain status change, an action never degrades to a no-op:
        processing a PROCESSED record or cancelling a CANCELLED one is rejected.
        """
        target = PAYROLL_ACTION_TARGETS[action]
        context = replace(context or TransitionContext(), payroll_action=action)
        if current is target:
            reason = (
                ReasonCode.ALREADY_CANCELLED
                if action is PayrollAction.CANCEL
                else ReasonCode.INVALID_STATUS_TRANSITION
            )
            return TransitionDecision(
                GovernedEntity.PAYROLL_RECORD,
                current.value,
                target.value,
                reason,
                f"Payroll record is already {current.value}",
                tuple(sorted(s.value for s in PAYROLL_TRANSITIONS[current])),
            )
        return self.validate_transition(GovernedEntity.PAYROLL_RECORD, current, target, context)

    @staticmethod
    def ensure_payroll_editable(status: PayrollStatus) -> None:
        if status is PayrollStatus.PAID:
            raise BusinessRuleException(
                ReasonCode.RECORD_NOT_EDITABLE,
                "Paid payroll records cannot be modified",
                status=status.value,
            )

    def check_pay_period(self, start: date, end: date) -> PayPeriod:
        """Return the period or raise INVALID_DATE_RANGE (start < end, bounded length)."""
        period = PayPeriod(start, end)
        if start >= end:
            raise BusinessRuleException(
                ReasonCode.INVALID_DATE_RANGE,
                "Pay period start date must be before end date",
                pay_period_start=start.isoformat(),
                pay_period_end=end.isoformat(),
            )
        if period.days > self.payroll_max_period_days:
            raise BusinessRuleException(
                ReasonCode.INVALID_DATE_RANGE,
                f"Pay period cannot exceed {self.payroll_max_period_days} days",
                days=period.days,
            )
        return period

    @staticmethod
    def check_no_overlap(period: PayPeriod, existing: Iterable[object]) -> None:
        """Raise OVERLAPPING_PAY_PERIOD if period intersects any existing [start, end).

        existing holds records exposing id, status and period; CANCELLED
        records never conflict.
        """
        conflicting = [
            record.id  # type: ignore[attr-defined]
            for record in existing
            if record.status is not PayrollStatus.CANCELLED  # type: ignore[attr-defined]
            and period.overlaps(record.period)  # type: ignore[attr-defined]
        ]
        if conflicting:
            raise BusinessRuleException(
                ReasonCode.OVERLAPPING_PAY_PERIOD,
                "Payroll period overlaps with an existing record",
                conflicting_ids=conflicting,
            )

    # ---- Job applications ----

    @staticmethod
    def ensure_application_transition(
        current: ApplicationStatus, requested: ApplicationStatus
    ) -> None:
        if current is requested:
            return
        allowed = APPLICATION_TRANSITIONS[current]
        if requested not in allowed:
            raise TransitionRejectedException(
                ReasonCode.INVALID_STATUS_TRANSITION,
                f"Cannot change job_application status from {current.value} to {requested.value}",
                entity_type="job_application",
                current_status=current.value,
                requested_status=requested.value,
                valid_next_states=(s.value for s in allowed),
            )

    # ---- Cascades and side effects ----

    @staticmethod
    def application_status_after(
        requested: InterviewStatus, rating: int | None
    ) -> ApplicationStatus | None:
        """Application status implied by an interview reaching requested, if any."""
        if requested is _I.NO_SHOW:
            return ApplicationStatus.REJECTED
        if requested is _I.COMPLETED and rating is not None:
            return (
                ApplicationStatus.UNDER_REVIEW
                if rating >= PASSING_RATING
                else ApplicationStatus.REJECTED
            )
        return None

    @staticmethod
    def completion_timestamp(
        current: OnboardingTaskStatus,
        requested: OnboardingTaskStatus,
        completed_at: datetime | None,
        now: datetime,
    ) -> datetime | None:
        """completed_at after a task status change.

        Entering COMPLETED keeps an existing timestamp or stamps now;
        leaving COMPLETED clears it; anything else leaves it untouched.
        """
        if requested is _O.COMPLETED:
            return completed_at or now
        if current is _O.COMPLETED:
            return None
        return completed_at
