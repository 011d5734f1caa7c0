"""Tests for domain value objects (Scope, PayFigures, PayPeriod)."""

from datetime import date

from hrms.domain.value_objects import PayFigures, PayPeriod, Scope, ScopeKind, check_scope


class TestScope:
    """Scope kinds and owner predicates."""

    def test_all_allows_anything_including_ownerless(self) -> None:
        scope = Scope.all()
        assert scope.kind is ScopeKind.ALL
        assert scope.allows("e-1")
        assert scope.allows(None)
        assert scope.owner_filter() is None

    def test_owned_only(self) -> None:
        scope = Scope.owned_only("e-1")
        assert scope.allows("e-1")
        assert not scope.allows("e-2")
        assert not scope.allows(None)
        assert scope.owner_filter() == frozenset({"e-1"})

    def test_owner_set(self) -> None:
        scope = Scope.owner_set({"m-1", "e-1", "e-2"})
        assert check_scope(scope, "e-2")
        assert not check_scope(scope, "e-3")
        assert not scope.is_unrestricted

    def test_empty_owner_set_matches_nothing(self) -> None:
        scope = Scope.owner_set(set())
        assert not scope.allows("e-1")
        assert scope.owner_filter() == frozenset()


class TestPayFigures:
    """gross = base + overtime + bonuses + allowances; net = gross - deductions - tax."""

    def test_gross_and_net(self) -> None:
        figures = PayFigures(
            base_salary=5000, overtime=200, bonuses=300, allowances=0, deductions=100, tax=1200
        )
        assert figures.gross_pay == 5500.0
        assert figures.total_deductions == 1300.0
        assert figures.net_pay == 4200.0

    def test_rounding_to_cents(self) -> None:
        figures = PayFigures(base_salary=0.1, overtime=0.2)
        assert figures.gross_pay == 0.3

    def test_reconciles_within_tolerance(self) -> None:
        figures = PayFigures(base_salary=1000, tax=100)
        assert figures.reconciles(1000.0, 900.0)
        assert figures.reconciles(1000.01, 899.99)
        assert not figures.reconciles(1000.0, 899.0)
        assert not figures.reconciles(1010.0, 900.0)

    def test_reconciles_without_stored_gross_checks_net_only(self) -> None:
        figures = PayFigures(base_salary=1000, tax=100)
        assert figures.reconciles(None, 900.0)
        assert not figures.reconciles(None, 950.0)


class TestPayPeriod:
    """Half-open [start, end) ranges."""

    def test_days(self) -> None:
        assert PayPeriod(date(2025, 1, 1), date(2025, 2, 1)).days == 31

    def test_adjacent_periods_do_not_overlap(self) -> None:
        january = PayPeriod(date(2025, 1, 1), date(2025, 2, 1))
        february = PayPeriod(date(2025, 2, 1), date(2025, 3, 1))
        assert not january.overlaps(february)
        assert not february.overlaps(january)

    def test_intersecting_periods_overlap(self) -> None:
        january = PayPeriod(date(2025, 1, 1), date(2025, 2, 1))
        mid = PayPeriod(date(2025, 1, 15), date(2025, 2, 15))
        assert january.overlaps(mid)
        assert mid.overlaps(january)

    def test_contained_period_overlaps(self) -> None:
        outer = PayPeriod(date(2025, 1, 1), date(2025, 2, 1))
        inner = PayPeriod(date(2025, 1, 10), date(2025, 1, 12))
        assert outer.overlaps(inner)
