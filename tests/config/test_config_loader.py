"""Tests for YAML fragment parsing."""

import pytest
import yaml

from penalty_config.loader import (
    load_yaml_file,
    parse_allowed_transactions,
    parse_penalty_details,
    parse_penalty_type,
    parse_penalty_types,
)


class TestLoadYamlFile:

    def test_empty_file_is_empty_mapping(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_file(path) == {}

    def test_list_document_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_yaml_file(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("key: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_yaml_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_file(tmp_path / "nope.yaml")


class TestParsePenaltyDetails:

    def test_rows_in_file_order(self):
        name, rows = parse_penalty_details({
            "name": "penalty details",
            "details": {
                "SANCTIONS": {
                    "description": "Sanctions Penalty Payment",
                    "description_id": "penalty-sanctions",
                    "class_of_payment": "penalty-sanctions",
                    "resource_kind": "penalty#sanctions",
                    "product_type": "penalty-sanctions",
                    "penalty_subtypes": ["S1", "S3"],
                },
                "SANCTIONS_ROE": {
                    "description": "Overseas Entity Penalty Payment",
                    "description_id": "penalty-sanctions",
                    "class_of_payment": "penalty-sanctions",
                    "resource_kind": "penalty#sanctions",
                    "product_type": "penalty-sanctions",
                },
            },
        })
        assert name == "penalty details"
        assert [r.regime for r in rows] == ["SANCTIONS", "SANCTIONS_ROE"]
        assert rows[0].penalty_subtypes == ("S1", "S3")
        assert rows[1].penalty_subtypes == ()
        assert rows[1].email_msg_type == ""

    def test_missing_required_key(self):
        with pytest.raises(KeyError):
            parse_penalty_details({"details": {"SANCTIONS": {"description": "x"}}})


class TestParseAllowedTransactions:

    def test_integer_codes_become_text(self):
        description, rows = parse_allowed_transactions(
            yaml.safe_load("""
description: allowed
allowed_transactions:
  LATE_FILING:
    1:
      EU: true
      EJ: false
""")
        )
        assert description == "allowed"
        assert rows[0].regime == "LATE_FILING"
        assert rows[0].as_mapping() == {"1": {"EU": True, "EJ": False}}


class TestParsePenaltyTypes:

    def test_defaults(self):
        row = parse_penalty_type({"transaction_type": 1, "transaction_subtype": "S1", "regime": "SANCTIONS"})
        assert row.transaction_type == "1"
        assert row.reason == ""
        assert row.disabled is False

    def test_missing_regime(self):
        with pytest.raises(KeyError):
            parse_penalty_type({"transaction_type": "1", "transaction_subtype": "S1"})

    def test_order_kept(self):
        rows = parse_penalty_types({"penalty_types": [
            {"transaction_type": "1", "transaction_subtype": "S3", "regime": "SANCTIONS"},
            {"transaction_type": "1", "transaction_subtype": "S1", "regime": "SANCTIONS"},
        ]})
        assert [r.transaction_subtype for r in rows] == ["S3", "S1"]

    def test_no_rows(self):
        assert parse_penalty_types({}) == ()
