"""
Tests for the default catalog, YAML catalog files and the catalog audit.
"""

import pytest
from pydantic import ValidationError

from fellowship.content import (
    Severity,
    audit_catalog,
    default_catalog,
    dump_catalog,
    format_console,
    load_catalog,
)
from fellowship.errors import CatalogLoadError
from fellowship.state.schema import RunConfig, StatType


class TestDefaultCatalog:

    def test_contents(self, catalog):
        assert catalog.base_hp == 135
        assert catalog.base_member_slots == 4
        assert len(catalog.leaders) == 5
        assert len(catalog.member_templates) == 24
        assert len(catalog.gear_templates) == 7
        assert len(catalog.tactic_templates) == 9
        assert set(catalog.tactic_pools) == {"military", "political", "wilderness", "tricks"}
        assert catalog.starting_member_ids == []

    def test_tunables(self, catalog):
        assert catalog.heal_amount == 15
        assert catalog.auto_success_value == 100
        assert catalog.permanent_boost_value == 5
        assert catalog.next_segment_boost_percent == 100

    def test_every_rank_populated(self, catalog):
        for rank in (1, 2, 3):
            assert len(catalog.templates_of_rank(rank)) == 8

    def test_flavors_per_stat(self, catalog):
        for stat in StatType:
            assert len(catalog.event_flavors[stat]) == 4

    def test_independent_instances(self):
        """No shared module-level catalog."""
        a = default_catalog()
        b = default_catalog()
        a.leaders[0].bonus_hp = 999
        assert b.leaders[0].bonus_hp != 999

    def test_leader_tactics(self, catalog):
        warlord = catalog.get_leader("warlord")
        tactics = catalog.tactics_for_leader(warlord)
        assert len(tactics) == 6 + 9
        assert tactics[0].id == "shield_wall"

        balanced = catalog.get_leader("balanced")
        assert len(catalog.tactics_for_leader(balanced)) == 9

    def test_lookup_misses(self, catalog):
        assert catalog.get_leader("nobody") is None
        assert catalog.get_member_template("nobody") is None


class TestCatalogFiles:

    def test_round_trip(self, catalog, tmp_path):
        path = dump_catalog(catalog, tmp_path / "catalog.yaml")
        loaded = load_catalog(path)
        assert loaded == catalog

    def test_missing_flavors_default(self, catalog, tmp_path):
        """A catalog without event_flavors gets the default pool."""
        import yaml
        data = catalog.model_dump(mode="json")
        del data["event_flavors"]
        path = tmp_path / "no_flavors.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        assert load_catalog(path).event_flavors == catalog.event_flavors

    def test_model_requires_flavors(self, catalog_data):
        """Built directly, a catalog must name its flavors; only the loader defaults them."""
        del catalog_data["event_flavors"]
        with pytest.raises(ValidationError, match="event_flavors"):
            RunConfig.model_validate(catalog_data)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError, match="not found"):
            load_catalog(tmp_path / "nope.yaml")

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("leaders: [unclosed\n", encoding="utf-8")
        with pytest.raises(CatalogLoadError) as exc_info:
            load_catalog(path)
        assert exc_info.value.__cause__ is not None

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            load_catalog(path)

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("base_hp: 100\n", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            load_catalog(path)


class TestAudit:

    def test_default_catalog_healthy(self, catalog):
        result = audit_catalog(catalog)
        assert result.is_healthy
        assert result.exit_code == 0
        assert result.issues == []

    def test_missing_rank(self, catalog_data):
        catalog_data["member_templates"] = [m for m in catalog_data["member_templates"] if m["rank"] != 3]
        result = audit_catalog(RunConfig.model_validate(catalog_data))
        assert result.error_count == 1
        assert result.exit_code == 2
        assert "rank 3" in result.issues[0].message

    def test_missing_pool(self, catalog_data):
        del catalog_data["tactic_pools"]["military"]
        result = audit_catalog(RunConfig.model_validate(catalog_data))
        assert any(i.category == "leaders" and i.severity == Severity.ERROR for i in result.issues)

    def test_unused_pool_is_info(self, catalog_data):
        catalog_data["tactic_pools"]["spare"] = []
        result = audit_catalog(RunConfig.model_validate(catalog_data))
        assert result.is_healthy
        assert result.info_count == 1
        assert result.exit_code == 0

    def test_auto_success_without_stat(self, catalog_data):
        catalog_data["gear_templates"].append({"id": "broken", "type": "auto_success", "name": "Broken"})
        result = audit_catalog(RunConfig.model_validate(catalog_data))
        assert not result.is_healthy

    def test_stat_tactic_without_stat(self, catalog_data):
        catalog_data["tactic_templates"].append({"id": "vague", "type": "permanent_boost", "name": "Vague", "value": 5})
        result = audit_catalog(RunConfig.model_validate(catalog_data))
        assert result.error_count == 1

    def test_weak_heal_is_warning(self, catalog_data):
        catalog_data["gear_templates"].append({"id": "placebo", "type": "heal", "name": "Placebo", "value": 0})
        result = audit_catalog(RunConfig.model_validate(catalog_data))
        assert result.is_healthy
        assert result.exit_code == 1

    def test_unknown_starting_member(self, catalog_data):
        catalog_data["starting_member_ids"] = ["ghost"]
        result = audit_catalog(RunConfig.model_validate(catalog_data))
        assert result.error_count == 1

    def test_duplicate_ids(self, catalog_data):
        catalog_data["gear_templates"].append(dict(catalog_data["gear_templates"][0]))
        result = audit_catalog(RunConfig.model_validate(catalog_data))
        assert any("Duplicate id 'extra_slot_1'" in i.message for i in result.issues)

    def test_missing_flavors(self, catalog_data):
        catalog_data["event_flavors"]["chaos"] = []
        result = audit_catalog(RunConfig.model_validate(catalog_data))
        assert result.error_count == 1

    def test_to_dict(self, catalog_data):
        catalog_data["starting_member_ids"] = ["ghost"]
        data = audit_catalog(RunConfig.model_validate(catalog_data)).to_dict()
        assert data["status"] == "fail"
        assert data["summary"]["errors"] == 1
        assert data["issues"][0]["severity"] == "error"

    def test_console_format(self, catalog):
        text = format_console(audit_catalog(catalog))
        assert "All checks passed!" in text
        assert "Status: HEALTHY" in text
