"""Tests for lenient table configuration parsing and the table registry."""

import json

from shelfgrid.tables.registry import TableRegistry
from shelfgrid.tables.schemas import Column, TableConfiguration


class TestLenientConfiguration:

    def test_empty_configuration_uses_defaults(self):
        table = TableConfiguration.model_validate({})
        assert table.title == "Untitled Table"
        assert table.source.type == "all"
        assert [c.type for c in table.columns] == ["image", "name", "price", "button"]
        assert table.settings.pagination.limit == 10
        assert table.settings.features.bulk_select.position == "first"
        assert table.settings.features.bulk_select.width.value == 64

    def test_invalid_values_fall_back_per_field(self):
        table = TableConfiguration.model_validate({
            "source": {"type": "everything", "queryArgs": {"stockStatus": "plenty"}},
            "settings": {"pagination": {"limit": "ten", "position": "middle"}},
        })
        assert table.source.type == "all"
        assert table.source.query_args.stock_status == "any"
        assert table.settings.pagination.limit == 10
        assert table.settings.pagination.position == "bottom"

    def test_non_object_sections_become_defaults(self):
        table = TableConfiguration.model_validate({"settings": "oops", "style": [1, 2]})
        assert table.settings.features.search is True
        assert table.style.header.bg_color == "#f0f0f1"

    def test_malformed_columns_are_dropped(self):
        table = TableConfiguration.model_validate({
            "columns": ["name", None, {"id": "c1", "type": "sku", "heading": "SKU"}],
        })
        assert [c.id for c in table.columns] == ["c1"]

    def test_empty_columns_use_default_set(self):
        table = TableConfiguration.model_validate({"columns": []})
        assert len(table.columns) == 4

    def test_snake_case_and_camel_case_both_accepted(self):
        a = Column.model_validate({"advanced": {"showHeading": False}})
        b = Column.model_validate({"advanced": {"show_heading": False}})
        assert a.advanced.show_heading is False
        assert b.advanced.show_heading is False

    def test_width_applied_only_for_concrete_unit(self):
        auto = Column.model_validate({"advanced": {"width": {"value": 100, "unit": "auto"}}})
        zero = Column.model_validate({"advanced": {"width": {"value": 0, "unit": "px"}}})
        px = Column.model_validate({"advanced": {"width": {"value": 100, "unit": "px"}}})
        assert not auto.advanced.width.is_applied
        assert not zero.advanced.width.is_applied
        assert px.advanced.width.is_applied

    def test_bulk_select_hidden_is_inactive(self):
        table = TableConfiguration.model_validate({
            "settings": {"features": {"bulkSelect": {"visibility": "none"}}},
        })
        assert not table.settings.features.bulk_select.active


class TestTableRegistry:

    def test_loads_json_and_yaml(self, tmp_path):
        (tmp_path / "a.json").write_text(json.dumps({"id": 4, "title": "Four"}))
        (tmp_path / "b.yaml").write_text("id: 2\ntitle: Two\nstatus: draft\n")
        registry = TableRegistry(tmp_path)

        assert registry.list_ids() == [2, 4]
        assert registry.get(4).title == "Four"
        summary = registry.list_summaries()[0]
        assert summary.model_dump(by_alias=True)["sourceType"] == "all"

    def test_bad_files_are_skipped(self, tmp_path):
        (tmp_path / "good.json").write_text(json.dumps({"id": 1}))
        (tmp_path / "broken.json").write_text("{not json")
        (tmp_path / "no-id.json").write_text(json.dumps({"title": "Nameless"}))
        (tmp_path / "list.yaml").write_text("- 1\n- 2\n")

        assert TableRegistry(tmp_path).list_ids() == [1]

    def test_reload_picks_up_new_files(self, tmp_path):
        registry = TableRegistry(tmp_path)
        assert registry.count() == 0
        (tmp_path / "t.json").write_text(json.dumps({"id": 9}))
        registry.reload()
        assert registry.count() == 1

    def test_missing_directory(self, tmp_path):
        assert TableRegistry(tmp_path / "missing").count() == 0

    def test_packaged_definitions_load(self):
        registry = TableRegistry()
        assert {1, 2, 3} <= set(registry.list_ids())
