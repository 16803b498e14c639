"""Tests for payroll summaries used by the dashboard and reports pages."""

from decimal import Decimal

import pytest

from payroll_modules.payroll import Employee, PayrollService, PayrollStatus, summarize_payroll
from payroll_modules.payroll.helpers import DEDUCTION_ITEMS, PayrollSummary


@pytest.fixture
def records(ph_config, make_input, employee):
    service = PayrollService(config=ph_config)
    senior = Employee(id="EMP-002", daily_rate=Decimal("1000"))
    june_a = service.submit(make_input(), employee)
    june_b = service.submit(make_input(employee_id="EMP-002", sss_loan="500"), senior)
    july_a = service.submit(make_input(period="2024-07", bonus="1000"), employee)
    return [
        service.change_status(june_a, "Paid"),
        june_b,
        service.change_status(july_a, "Processing"),
    ]


class TestSummarizePayroll:

    def test_totals(self, records):
        summary = summarize_payroll(records)
        assert summary.record_count == 3
        assert summary.employee_count == 2
        assert summary.total_net_pay == sum(r.net_pay for r in records)
        assert summary.total_bonus == Decimal("1000.00")

    def test_status_counts(self, records):
        assert summarize_payroll(records).status_counts == {
            "Pending": 1,
            "Processing": 1,
            "Paid": 1,
        }

    def test_filter_by_period(self, records):
        summary = summarize_payroll(records, period="2024-06")
        assert summary.record_count == 2
        assert summary.status_counts[PayrollStatus.PROCESSING.value] == 0
        assert summary.deduction_totals["sss_loan"] == Decimal("500.00")

    def test_deduction_totals_reconcile(self, records):
        summary = summarize_payroll(records)
        assert set(summary.deduction_totals) == set(DEDUCTION_ITEMS)
        assert sum(summary.deduction_totals.values()) == summary.total_deductions

    def test_net_pay_reconciles(self, records):
        summary = summarize_payroll(records)
        assert summary.total_net_pay == (
            summary.total_gross_pay + summary.total_bonus - summary.total_deductions
        )

    def test_government_contributions(self, records):
        summary = summarize_payroll(records)
        expected = sum(r.breakdown.government_contributions for r in records)
        assert summary.total_government_contributions == expected

    def test_empty(self):
        summary = summarize_payroll([])
        assert summary.record_count == 0
        assert summary.total_net_pay == Decimal("0.00")
        assert summary.status_counts == {"Pending": 0, "Processing": 0, "Paid": 0}


class TestPayrollSummaryValue:

    def test_hashable(self, records):
        summary = summarize_payroll(records)
        assert hash(summary) == hash(summarize_payroll(records))
        assert summary in {summary}

    def test_equal_summaries_compare_equal(self, records):
        assert summarize_payroll(records) == summarize_payroll(list(records))
        assert summarize_payroll(records) != summarize_payroll(records, period="2024-07")

    def test_mappings_are_read_only(self, records):
        summary = summarize_payroll(records)
        with pytest.raises(TypeError):
            summary.status_counts["Paid"] = 99
        with pytest.raises(TypeError):
            summary.deduction_totals["sss"] = Decimal("0")

    def test_caller_dict_is_copied(self):
        counts = {"Pending": 1}
        summary = PayrollSummary(record_count=1, status_counts=counts)
        counts["Pending"] = 5
        assert summary.status_counts["Pending"] == 1
