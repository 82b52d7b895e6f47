"""
Pytest fixtures for the penalty kernel test suite.

Provides:
- Structured logging configuration and log capture
- Ledger line / snapshot factories
- Fake token generators (counting and failing)
- Reference data compiled from the bundled configuration set
"""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from penalty_config import PenaltySettings, load_reference_data
from penalty_kernel.domain.ledger import CustomerAccountSnapshot, LedgerLine
from penalty_kernel.domain.reference import (
    AllowedTransactionRegistry,
    PenaltySubtypeReasonTable,
    RegimeDescriptor,
)
from penalty_kernel.domain.regime import Regime
from penalty_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

from tests.factories import (
    CONFIRMATION_STATEMENT_REASON,
    CONFIRMATION_STATEMENT_SUBTYPE,
    COST_SUBTYPE,
    COST_TRANSACTION_TYPE,
    FAILED_TO_VERIFY_IDENTITY_REASON,
    FAILED_TO_VERIFY_IDENTITY_SUBTYPE,
    LATE_FILING_KIND,
    LATE_FILING_SUBTYPE,
    ROE_FAILURE_TO_UPDATE_REASON,
    ROE_FAILURE_TO_UPDATE_SUBTYPE,
    SANCTIONS_KIND,
    CountingTokenGenerator,
    FailingTokenGenerator,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture penalty_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, service):
            service.generate(...)
            logs = captured_logs()
            assert any(r["message"] == "PENALTY_TRANSACTION_LIST_TRACE" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("penalty_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Ledger builders
# =============================================================================


@pytest.fixture
def make_line():
    """Factory for LedgerLine; defaults to an unpaid sanctions penalty."""

    def _make(**overrides) -> LedgerLine:
        fields = dict(
            company_code="C1",
            ledger_code="E1",
            customer_code="OE123456",
            transaction_reference="P1234567",
            transaction_date=date(2025, 2, 25),
            made_up_date=date(2025, 2, 12),
            due_date=date(2025, 3, 26),
            amount=Decimal("250"),
            outstanding_amount=Decimal("250"),
            is_paid=False,
            transaction_type="1",
            transaction_subtype=CONFIRMATION_STATEMENT_SUBTYPE,
            type_description="CS01",
            account_status="",
            dunning_status="%-12s" % "PEN1",
        )
        fields.update(overrides)
        return LedgerLine(**fields)

    return _make


@pytest.fixture
def make_late_filing_line(make_line):
    """Factory for an unpaid late filing penalty line."""

    def _make(**overrides) -> LedgerLine:
        fields = dict(
            company_code="LP",
            ledger_code="EW",
            customer_code="12345678",
            transaction_reference="A1234567",
            transaction_subtype=LATE_FILING_SUBTYPE,
            type_description="Penalty Ltd Wel & Eng <=1m     LTDWA",
        )
        fields.update(overrides)
        return make_line(**fields)

    return _make


@pytest.fixture
def make_cost_line(make_line):
    """Factory for an unpaid incidental cost line."""

    def _make(**overrides) -> LedgerLine:
        fields = dict(
            transaction_reference="F1",
            transaction_type=COST_TRANSACTION_TYPE,
            transaction_subtype=COST_SUBTYPE,
            type_description="Legal fees",
        )
        fields.update(overrides)
        return make_line(**fields)

    return _make


@pytest.fixture
def make_snapshot():
    """Factory for CustomerAccountSnapshot from a list of lines."""

    def _make(*lines: LedgerLine, customer_code: str = "OE123456",
              company_code: str = "C1") -> CustomerAccountSnapshot:
        return CustomerAccountSnapshot(
            customer_code=customer_code,
            company_code=company_code,
            lines=lines,
        )

    return _make


# =============================================================================
# Token generators
# =============================================================================


@pytest.fixture
def token_generator():
    return CountingTokenGenerator()


@pytest.fixture
def failing_token_generator():
    """Factory: ``failing_token_generator(2)`` fails on the second call."""
    return FailingTokenGenerator


# =============================================================================
# Reference data
# =============================================================================


@pytest.fixture(scope="session")
def reference_data():
    """Reference data compiled from the bundled default configuration set."""
    return load_reference_data(settings=PenaltySettings())


@pytest.fixture
def allowlist():
    """Allow-list covering every code used by the line factories."""
    return AllowedTransactionRegistry.from_mapping({
        "LATE_FILING": {
            "1": {"EU": True, "EJ": True, "Other": True},
            "2": {COST_SUBTYPE: True},
        },
        "SANCTIONS": {
            "1": {CONFIRMATION_STATEMENT_SUBTYPE: True, FAILED_TO_VERIFY_IDENTITY_SUBTYPE: True},
            "2": {COST_SUBTYPE: True},
        },
        "SANCTIONS_ROE": {
            "1": {ROE_FAILURE_TO_UPDATE_SUBTYPE: True},
            "2": {COST_SUBTYPE: True},
        },
    })


@pytest.fixture
def reason_table():
    return PenaltySubtypeReasonTable.from_pairs([
        (CONFIRMATION_STATEMENT_SUBTYPE, CONFIRMATION_STATEMENT_REASON),
        (FAILED_TO_VERIFY_IDENTITY_SUBTYPE, FAILED_TO_VERIFY_IDENTITY_REASON),
        (ROE_FAILURE_TO_UPDATE_SUBTYPE, ROE_FAILURE_TO_UPDATE_REASON),
    ])


@pytest.fixture
def late_filing_descriptor():
    return RegimeDescriptor(
        regime=Regime.LATE_FILING,
        description="Late Filing Penalty",
        description_id="late-filing-penalty",
        class_of_payment="penalty-lfp",
        resource_kind=LATE_FILING_KIND,
        product_type="late-filing-penalty",
        penalty_subtypes=frozenset({"EU", "EJ"}),
    )


@pytest.fixture
def sanctions_descriptor():
    return RegimeDescriptor(
        regime=Regime.SANCTIONS,
        description="Sanctions Penalty Payment",
        description_id="penalty-sanctions",
        class_of_payment="penalty-sanctions",
        resource_kind=SANCTIONS_KIND,
        product_type="penalty-sanctions",
        penalty_subtypes=frozenset({CONFIRMATION_STATEMENT_SUBTYPE, FAILED_TO_VERIFY_IDENTITY_SUBTYPE}),
    )


@pytest.fixture
def roe_descriptor():
    return RegimeDescriptor(
        regime=Regime.SANCTIONS_ROE,
        description="Overseas Entity Penalty Payment",
        description_id="penalty-sanctions",
        class_of_payment="penalty-sanctions",
        resource_kind=SANCTIONS_KIND,
        product_type="penalty-sanctions",
        penalty_subtypes=frozenset({ROE_FAILURE_TO_UPDATE_SUBTYPE}),
    )
