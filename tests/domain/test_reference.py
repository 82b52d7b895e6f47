"""Tests for immutable reference data containers."""

from types import MappingProxyType

import pytest

from penalty_kernel.domain.reference import (
    AllowedTransactionRegistry,
    PenaltyReferenceData,
    PenaltySubtypeReasonTable,
)
from penalty_kernel.domain.regime import Regime
from penalty_kernel.exceptions import UnknownRegimeError


class TestAllowedTransactionRegistry:

    def test_integer_codes_normalized_to_text(self):
        registry = AllowedTransactionRegistry.from_mapping({"SANCTIONS": {1: {"S1": True}}})
        assert registry.is_allowed(Regime.SANCTIONS, "1", "S1") is True

    def test_disallowed_and_unknown_codes(self, allowlist):
        registry = AllowedTransactionRegistry.from_mapping({
            "SANCTIONS": {"1": {"S1": True, "S2": False}},
        })
        assert registry.is_allowed(Regime.SANCTIONS, "1", "S2") is False
        assert registry.is_allowed(Regime.SANCTIONS, "1", "S9") is False
        assert registry.is_allowed(Regime.SANCTIONS, "9", "S1") is False
        assert registry.is_allowed(Regime.LATE_FILING, "1", "EU") is False

    def test_has_regime(self, allowlist):
        assert allowlist.has_regime(Regime.SANCTIONS_ROE)
        empty = AllowedTransactionRegistry.from_mapping({})
        assert not empty.has_regime(Regime.SANCTIONS_ROE)

    def test_allowed_subtypes_spans_types(self, allowlist):
        assert allowlist.allowed_subtypes(Regime.SANCTIONS_ROE) == frozenset({"A2", "F1"})

    def test_unknown_regime_key_raises(self):
        with pytest.raises(UnknownRegimeError):
            AllowedTransactionRegistry.from_mapping({"PARKING": {"1": {"X": True}}})

    def test_entries_are_read_only(self, allowlist):
        with pytest.raises(TypeError):
            allowlist.entries[Regime.SANCTIONS] = {}
        with pytest.raises(TypeError):
            allowlist.types_for(Regime.SANCTIONS)["1"] = {}

    def test_to_dict(self):
        registry = AllowedTransactionRegistry.from_mapping(
            {"SANCTIONS_ROE": {"1": {"A2": True}}}, description="allowed"
        )
        assert registry.to_dict() == {
            "description": "allowed",
            "allowed_transactions": {"SANCTIONS_ROE": {"1": {"A2": True}}},
        }


class TestPenaltySubtypeReasonTable:

    def test_first_match_wins(self):
        table = PenaltySubtypeReasonTable.from_pairs([("S1", "first"), ("S1", "second")])
        assert table.lookup("S1") == "first"

    def test_no_match(self, reason_table):
        assert reason_table.lookup("ZZ") is None

    def test_len(self, reason_table):
        assert len(reason_table) == 3


class TestPenaltyReferenceData:

    def test_descriptors_frozen(self, allowlist, sanctions_descriptor, reason_table):
        data = PenaltyReferenceData(
            config_id="test",
            version=1,
            checksum="abc",
            allowed_transactions=allowlist,
            descriptors={Regime.SANCTIONS: sanctions_descriptor},
            reason_table=reason_table,
        )
        assert isinstance(data.descriptors, MappingProxyType)
        assert data.descriptor_for(Regime.SANCTIONS) is sanctions_descriptor
        assert data.descriptor_for(Regime.SANCTIONS_ROE) is None
