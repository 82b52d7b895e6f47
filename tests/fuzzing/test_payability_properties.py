"""
Hypothesis-based property tests for transaction list generation.

Properties:
- A paid line is never open.
- A DCA line is never open.
- With more than one surviving line, nothing is open.
- A lone, unpaid, non-DCA penalty is always open; a lone "other" line is not.
- DCA detection ignores whitespace padding.
- Output order equals input order after filtering.
- A token failure on any call yields no list.
"""

from datetime import date
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from penalty_kernel.domain.dunning import is_dca
from penalty_kernel.domain.ledger import CustomerAccountSnapshot, LedgerLine
from penalty_kernel.domain.reference import AllowedTransactionRegistry, RegimeDescriptor
from penalty_kernel.domain.regime import Regime
from penalty_kernel.domain.transaction_list import ChargeCategory, PayableStatus
from penalty_kernel.domain.transaction_list_builder import generate_transaction_list
from penalty_kernel.exceptions import TokenGenerationFailedError

from tests.factories import CountingTokenGenerator, FailingTokenGenerator

PENALTY_SUBTYPES = ("S1", "S3")
OTHER_SUBTYPES = ("F1", "F2")
LEGACY_SUBTYPES = ("S9", "XX")

ALLOWLIST = AllowedTransactionRegistry.from_mapping({
    "SANCTIONS": {
        "1": {s: True for s in PENALTY_SUBTYPES},
        "2": {s: True for s in OTHER_SUBTYPES},
    },
})

DESCRIPTOR = RegimeDescriptor(
    regime=Regime.SANCTIONS,
    description="Sanctions Penalty Payment",
    description_id="penalty-sanctions",
    class_of_payment="penalty-sanctions",
    resource_kind="penalty#sanctions",
    product_type="penalty-sanctions",
    penalty_subtypes=frozenset(PENALTY_SUBTYPES),
)

dunning_statuses = st.sampled_from(["", "PEN1", "PEN2", "DCA", "CHS"]).flatmap(
    lambda s: st.integers(min_value=0, max_value=8).map(lambda pad: s + " " * pad)
)

amounts = st.decimals(min_value=Decimal("0"), max_value=Decimal("100000"), places=2)


@st.composite
def ledger_lines(draw, subtypes=None):
    if subtypes is None:
        subtypes = PENALTY_SUBTYPES + OTHER_SUBTYPES + LEGACY_SUBTYPES
    subtype = draw(st.sampled_from(subtypes))
    transaction_type = "2" if subtype in OTHER_SUBTYPES else "1"
    amount = draw(amounts)
    return LedgerLine(
        company_code="C1",
        ledger_code="E1",
        customer_code="OE123456",
        transaction_reference=draw(st.text(alphabet="PF0123456789", min_size=2, max_size=8)),
        transaction_date=date(2025, 2, 25),
        made_up_date=date(2025, 2, 12),
        due_date=date(2025, 3, 26),
        amount=amount,
        outstanding_amount=amount,
        is_paid=draw(st.booleans()),
        transaction_type=transaction_type,
        transaction_subtype=subtype,
        dunning_status=draw(dunning_statuses),
    )


def _generate(lines, token_generator=None):
    snapshot = CustomerAccountSnapshot("OE123456", "C1", lines=lines)
    return generate_transaction_list(
        snapshot, Regime.SANCTIONS, DESCRIPTOR, ALLOWLIST,
        token_generator=token_generator or CountingTokenGenerator(),
    )


@pytest.mark.slow
class TestPayabilityProperties:

    @given(lines=st.lists(ledger_lines(), max_size=6))
    @settings(max_examples=200)
    def test_paid_or_dca_never_open(self, lines):
        for item in _generate(lines):
            if item.is_paid or item.is_dca:
                assert item.payable_status is PayableStatus.CLOSED

    @given(lines=st.lists(ledger_lines(), max_size=6))
    @settings(max_examples=200)
    def test_several_survivors_all_closed(self, lines):
        result = _generate(lines)
        if len(result) > 1:
            assert all(i.payable_status is PayableStatus.CLOSED for i in result)

    @given(line=ledger_lines(subtypes=PENALTY_SUBTYPES))
    def test_lone_unpaid_non_dca_penalty_open(self, line):
        (item,) = _generate([line]).items
        expected = not line.is_paid and not is_dca(line.dunning_status)
        assert (item.payable_status is PayableStatus.OPEN) == expected

    @given(line=ledger_lines(subtypes=OTHER_SUBTYPES))
    def test_lone_other_line_closed(self, line):
        (item,) = _generate([line]).items
        assert item.type is ChargeCategory.OTHER
        assert item.payable_status is PayableStatus.CLOSED

    @given(lines=st.lists(ledger_lines(), max_size=8))
    def test_order_preserved_after_filtering(self, lines):
        expected = [l.transaction_reference for l in lines if l.transaction_subtype not in LEGACY_SUBTYPES]
        assert [i.id for i in _generate(lines)] == expected


class TestDunningProperties:

    @given(status=st.text(max_size=10), pad=st.integers(min_value=0, max_value=12))
    def test_padding_does_not_change_dca(self, status, pad):
        assert is_dca(status) == is_dca(status + " " * pad)

    @given(pad=st.integers(min_value=0, max_value=12))
    def test_padded_sentinel_is_dca(self, pad):
        assert is_dca("DCA" + " " * pad)


class TestTokenFailureProperties:

    @given(
        lines=st.lists(ledger_lines(subtypes=PENALTY_SUBTYPES), min_size=1, max_size=5),
        data=st.data(),
    )
    def test_any_failing_call_yields_no_list(self, lines, data):
        # one call per item plus one for the list
        fail_on = data.draw(st.integers(min_value=1, max_value=len(lines) + 1))
        generator = FailingTokenGenerator(fail_on=fail_on)
        with pytest.raises(TokenGenerationFailedError) as exc_info:
            _generate(lines, generator)
        assert exc_info.value.call_number == fail_on
