"""Payroll record repository. Implements IPayrollRepository."""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.application.dtos.payroll import PayrollFilters, PayrollRecordCreate, PayrollRecordResult
from hrms.domain.enums import GovernedEntity, PayrollStatus, ReasonCode
from hrms.domain.exceptions import BusinessRuleException
from hrms.infrastructure.persistence.models.payroll_record import (
    NO_OVERLAP_CONSTRAINT,
    PayrollRecord,
)
from hrms.infrastructure.persistence.repositories.base import BaseRepository, plain, violates


def _orm_to_result(r: PayrollRecord) -> PayrollRecordResult:
    return PayrollRecordResult(
        id=r.id,
        employee_id=r.employee_id,
        pay_period_start=r.pay_period_start,
        pay_period_end=r.pay_period_end,
        base_salary=r.base_salary,
        overtime=r.overtime,
        bonuses=r.bonuses,
        allowances=r.allowances,
        deductions=r.deductions,
        tax=r.tax,
        gross_pay=r.gross_pay,
        net_pay=r.net_pay,
        status=PayrollStatus(r.status),
        currency=r.currency,
        notes=r.notes,
        processed_at=r.processed_at,
        processed_by_id=r.processed_by_id,
        paid_at=r.paid_at,
        paid_by_id=r.paid_by_id,
        created_at=r.created_at,
        updated_at=r.updated_at,
    )


class PayrollRepository(BaseRepository[PayrollRecord]):
    resource_type = GovernedEntity.PAYROLL_RECORD.value

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, PayrollRecord)

    async def get_by_id(self, record_id: str) -> PayrollRecordResult | None:
        row = await self._get_row(record_id)
        return _orm_to_result(row) if row else None

    async def list_page(
        self,
        owner_ids: frozenset[str] | None,
        filters: PayrollFilters,
        skip: int,
        limit: int,
    ) -> tuple[list[PayrollRecordResult], int]:
        stmt = select(PayrollRecord)
        if owner_ids is not None:
            stmt = stmt.where(PayrollRecord.employee_id.in_(owner_ids))
        if filters.employee_id:
            stmt = stmt.where(PayrollRecord.employee_id == filters.employee_id)
        if filters.status is not None:
            stmt = stmt.where(PayrollRecord.status == filters.status.value)
        if filters.period_from is not None:
            stmt = stmt.where(PayrollRecord.pay_period_start >= filters.period_from)
        if filters.period_to is not None:
            stmt = stmt.where(PayrollRecord.pay_period_end <= filters.period_to)
        rows, total = await self._page(
            stmt.order_by(PayrollRecord.pay_period_start.desc(), PayrollRecord.id), skip, limit
        )
        return [_orm_to_result(r) for r in rows], total

    async def list_for_employee(self, employee_id: str) -> list[PayrollRecordResult]:
        result = await self.db.execute(
            select(PayrollRecord)
            .where(PayrollRecord.employee_id == employee_id)
            .order_by(PayrollRecord.pay_period_start.desc())
        )
        return [_orm_to_result(r) for r in result.scalars().all()]

    async def create(self, data: PayrollRecordCreate) -> PayrollRecordResult:
        row = await self._insert(
            PayrollRecord(
                employee_id=data.employee_id,
                pay_period_start=data.pay_period_start,
                pay_period_end=data.pay_period_end,
                base_salary=data.base_salary,
                overtime=data.overtime,
                bonuses=data.bonuses,
                allowances=data.allowances,
                deductions=data.deductions,
                tax=data.tax,
                gross_pay=data.gross_pay,
                net_pay=data.net_pay,
                currency=data.currency,
                notes=data.notes,
                status=plain(data.status),
            )
        )
        return _orm_to_result(row)

    async def update(self, record_id: str, changes: dict[str, Any]) -> PayrollRecordResult:
        return _orm_to_result(await self._update_row(record_id, changes))

    async def find_overlapping(
        self,
        employee_id: str,
        start: date,
        end: date,
        exclude_id: str | None = None,
    ) -> list[PayrollRecordResult]:
        stmt = select(PayrollRecord).where(
            PayrollRecord.employee_id == employee_id,
            PayrollRecord.status != PayrollStatus.CANCELLED.value,
            PayrollRecord.pay_period_start < end,
            PayrollRecord.pay_period_end > start,
        )
        if exclude_id:
            stmt = stmt.where(PayrollRecord.id != exclude_id)
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]

    def _translate_integrity_error(self, error: IntegrityError) -> None:
        if violates(error, NO_OVERLAP_CONSTRAINT):
            raise BusinessRuleException(
                ReasonCode.OVERLAPPING_PAY_PERIOD,
                "Payroll period overlaps with an existing record",
            ) from error
