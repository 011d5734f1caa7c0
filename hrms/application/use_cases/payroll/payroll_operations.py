"""Payroll operations: drafts, explicit process/pay actions, cancellation and summaries."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import replace
from datetime import date
from typing import Any

from hrms.application.dtos.common import Page, PageRequest
from hrms.application.dtos.context import OperationContext
from hrms.application.dtos.payroll import (
    PayrollFilters,
    PayrollRecordCreate,
    PayrollRecordResult,
    PayrollSummary,
    PayTotals,
)
from hrms.application.interfaces.repositories import IEmployeeRepository, IPayrollRepository
from hrms.application.services.workflow_state_machine import (
    TransitionContext,
    WorkflowStateMachine,
)
from hrms.application.use_cases.pipeline import HR_ROLES, AccessScopedPipeline, reject_nulls
from hrms.domain.enums import (
    AuditAction,
    EmployeeStatus,
    GovernedEntity,
    PayrollAction,
    PayrollStatus,
    ReasonCode,
)
from hrms.domain.exceptions import DependencyNotFoundException, ResourceNotFoundException
from hrms.domain.value_objects import PayFigures
from hrms.shared.telemetry.tracing import traced
from hrms.shared.utils.datetime import utc_now

_RESOURCE = GovernedEntity.PAYROLL_RECORD
SUMMARY_RESOURCE = "payroll_summary"
FINANCIAL_FIELDS = ("base_salary", "overtime", "bonuses", "allowances", "deductions", "tax")
NOT_NULL_FIELDS = (
    "employee_id", "pay_period_start", "pay_period_end", "currency", *FINANCIAL_FIELDS
)
RECENT_RECORDS = 10


def _totals(records: Iterable[PayrollRecordResult]) -> PayTotals:
    gross = net = deductions = tax = 0.0
    count = 0
    for r in records:
        gross += r.gross_pay if r.gross_pay is not None else r.figures.gross_pay
        net += r.net_pay
        deductions += r.deductions
        tax += r.tax
        count += 1
    return PayTotals(
        gross_pay=round(gross, 2),
        net_pay=round(net, 2),
        deductions=round(deductions, 2),
        tax=round(tax, 2),
        records=count,
    )


class PayrollService:
    """Payroll records for one employee each.

    Figures are recomputed on every financial change. DRAFT → PROCESSED and
    PROCESSED → PAID happen only through process_record and pay_record;
    deleting cancels. PAID records are frozen.
    """

    def __init__(
        self,
        pipeline: AccessScopedPipeline,
        payroll_repo: IPayrollRepository,
        employee_repo: IEmployeeRepository,
        workflow: WorkflowStateMachine,
    ) -> None:
        self.pipeline = pipeline
        self.payroll_repo = payroll_repo
        self.employee_repo = employee_repo
        self.workflow = workflow

    async def list_records(
        self,
        ctx: OperationContext,
        filters: PayrollFilters,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[PayrollRecordResult]:
        paging = PageRequest.clamped(page, limit)

        async def load(scope):
            items, total = await self.payroll_repo.list_page(
                scope.owner_filter(), filters, paging.skip, paging.limit
            )
            return Page(items=items, total=total, page=paging.page, limit=paging.limit)

        return await self.pipeline.read_many(ctx, resource_type=_RESOURCE, load=load)

    async def get_record(self, ctx: OperationContext, record_id: str) -> PayrollRecordResult:
        return await self.pipeline.read_one(
            ctx, resource_type=_RESOURCE, resource_id=record_id, load=self.payroll_repo.get_by_id
        )

    @traced("payroll.create_record")
    async def create_record(
        self,
        ctx: OperationContext,
        *,
        employee_id: str,
        pay_period_start: date,
        pay_period_end: date,
        figures: PayFigures,
        currency: str = "USD",
        notes: str | None = None,
    ) -> PayrollRecordResult:
        async def insert(_scope) -> PayrollRecordResult:
            await self._require_active_employee(employee_id)
            period = self.workflow.check_pay_period(pay_period_start, pay_period_end)
            existing = await self.payroll_repo.find_overlapping(
                employee_id, period.start, period.end
            )
            self.workflow.check_no_overlap(period, existing)
            return await self.payroll_repo.create(
                PayrollRecordCreate(
                    employee_id=employee_id,
                    pay_period_start=period.start,
                    pay_period_end=period.end,
                    base_salary=figures.base_salary,
                    overtime=figures.overtime,
                    bonuses=figures.bonuses,
                    allowances=figures.allowances,
                    deductions=figures.deductions,
                    tax=figures.tax,
                    gross_pay=figures.gross_pay,
                    net_pay=figures.net_pay,
                    currency=currency,
                    notes=notes,
                )
            )

        return await self.pipeline.create(
            ctx, resource_type=_RESOURCE, insert=insert, allowed_roles=HR_ROLES
        )

    async def update_record(
        self, ctx: OperationContext, record_id: str, changes: dict[str, Any]
    ) -> PayrollRecordResult:
        changes = {k: v for k, v in changes.items() if k != "status"}
        reject_nulls(changes, NOT_NULL_FIELDS)

        async def apply(current: PayrollRecordResult, _scope) -> PayrollRecordResult:
            self.workflow.ensure_payroll_editable(current.status)
            employee_id = changes.get("employee_id", current.employee_id)
            if employee_id != current.employee_id:
                await self._require_active_employee(employee_id)
            if {"employee_id", "pay_period_start", "pay_period_end"} & changes.keys():
                period = self.workflow.check_pay_period(
                    changes.get("pay_period_start", current.pay_period_start),
                    changes.get("pay_period_end", current.pay_period_end),
                )
                existing = await self.payroll_repo.find_overlapping(
                    employee_id, period.start, period.end, exclude_id=record_id
                )
                self.workflow.check_no_overlap(period, existing)
            if any(f in changes for f in FINANCIAL_FIELDS):
                figures = replace(
                    current.figures, **{f: changes[f] for f in FINANCIAL_FIELDS if f in changes}
                )
                changes["gross_pay"] = figures.gross_pay
                changes["net_pay"] = figures.net_pay
            if not changes:
                return current
            return await self.payroll_repo.update(record_id, changes)

        return await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=record_id,
            load=self.payroll_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
        )

    async def cancel_record(self, ctx: OperationContext, record_id: str) -> PayrollRecordResult:
        """Delete by cancelling. PAID records cannot be cancelled."""

        async def apply(current: PayrollRecordResult, _scope) -> PayrollRecordResult:
            self.workflow.validate_payroll_action(
                current.status, PayrollAction.CANCEL
            ).raise_if_rejected()
            return await self.payroll_repo.update(record_id, {"status": PayrollStatus.CANCELLED})

        return await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=record_id,
            load=self.payroll_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
            audit_action=AuditAction.DELETE,
        )

    @traced("payroll.process_record")
    async def process_record(self, ctx: OperationContext, record_id: str) -> PayrollRecordResult:
        """DRAFT → PROCESSED: requires an ACTIVE employee and reconciling figures."""

        async def apply(current: PayrollRecordResult, _scope) -> PayrollRecordResult:
            employee = await self.employee_repo.get_by_id(current.employee_id)
            self.workflow.validate_payroll_action(
                current.status,
                PayrollAction.PROCESS,
                TransitionContext(
                    employee_status=employee.status if employee else None,
                    figures=current.figures,
                    stored_gross=current.gross_pay,
                    stored_net=current.net_pay,
                ),
            ).raise_if_rejected()
            return await self.payroll_repo.update(
                record_id,
                {
                    "status": PayrollStatus.PROCESSED,
                    "processed_at": utc_now(),
                    "processed_by_id": ctx.actor.id,
                },
            )

        processed = await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=record_id,
            load=self.payroll_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
        )
        await self.pipeline.publish("payroll.processed", self._event_payload(processed))
        return processed

    async def pay_record(self, ctx: OperationContext, record_id: str) -> PayrollRecordResult:
        """PROCESSED → PAID."""

        async def apply(current: PayrollRecordResult, _scope) -> PayrollRecordResult:
            self.workflow.validate_payroll_action(current.status, PayrollAction.PAY).raise_if_rejected()
            return await self.payroll_repo.update(
                record_id,
                {"status": PayrollStatus.PAID, "paid_at": utc_now(), "paid_by_id": ctx.actor.id},
            )

        paid = await self.pipeline.mutate(
            ctx,
            resource_type=_RESOURCE,
            resource_id=record_id,
            load=self.payroll_repo.get_by_id,
            apply=apply,
            allowed_roles=HR_ROLES,
        )
        await self.pipeline.publish("payroll.paid", self._event_payload(paid))
        return paid

    async def employee_summary(self, ctx: OperationContext, employee_id: str) -> PayrollSummary:
        scope = await self.pipeline.authorize(ctx, SUMMARY_RESOURCE, AuditAction.READ)
        self.pipeline.ensure_in_scope(
            scope, (employee_id,), resource_type=SUMMARY_RESOURCE, resource_id=employee_id
        )
        if await self.employee_repo.get_by_id(employee_id) is None:
            raise ResourceNotFoundException(GovernedEntity.EMPLOYEE.value, employee_id)
        records = await self.payroll_repo.list_for_employee(employee_id)
        live = [r for r in records if r.status is not PayrollStatus.CANCELLED]
        this_year = utc_now().year
        counts = Counter(r.status for r in records)
        all_time = _totals(live)
        summary = PayrollSummary(
            employee_id=employee_id,
            all_time=all_time,
            year_to_date=_totals(r for r in live if r.pay_period_start.year == this_year),
            status_counts={s.value: counts.get(s, 0) for s in PayrollStatus},
            average_gross_pay=round(all_time.gross_pay / all_time.records, 2) if all_time.records else 0.0,
            average_net_pay=round(all_time.net_pay / all_time.records, 2) if all_time.records else 0.0,
            recent_records=live[:RECENT_RECORDS],
        )
        await self.pipeline.record(ctx, AuditAction.READ, SUMMARY_RESOURCE, employee_id)
        return summary

    async def _require_active_employee(self, employee_id: str) -> None:
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None or employee.status is not EmployeeStatus.ACTIVE:
            raise DependencyNotFoundException(
                ReasonCode.EMPLOYEE_NOT_FOUND, "Employee not found or inactive", employee_id
            )

    @staticmethod
    def _event_payload(record: PayrollRecordResult) -> dict[str, Any]:
        return {
            "payroll_record_id": record.id,
            "employee_id": record.employee_id,
            "net_pay": record.net_pay,
            "currency": record.currency,
            "pay_period_start": record.pay_period_start.isoformat(),
            "pay_period_end": record.pay_period_end.isoformat(),
        }
