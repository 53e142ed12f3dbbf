# tests/unit/test_resolver.py
"""Tests for component discovery and metadata option parsing."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from metadata_enrichment.components.base import MetadataTypeAndName
from metadata_enrichment.components.registry import (
    APEX_CLASS,
    FLEXIPAGE,
    LIGHTNING_COMPONENT_BUNDLE,
    get_type,
    list_types,
)
from metadata_enrichment.components.resolver import (
    ComponentResolver,
    parse_metadata_option,
    select_components,
)
from metadata_enrichment.enrichment.runner import EnrichmentRunner
from tests.conftest import write_apex_class, write_lwc_bundle


class TestParseMetadataOption:
    def test_type_and_name(self):
        option = parse_metadata_option("LightningComponentBundle:helloWorld")
        assert option == MetadataTypeAndName("LightningComponentBundle", "helloWorld")
        assert str(option) == "LightningComponentBundle:helloWorld"

    def test_type_only(self):
        assert parse_metadata_option("ApexClass") == MetadataTypeAndName("ApexClass", None)

    def test_wildcard_name(self):
        assert parse_metadata_option("ApexClass:*").component_name is None

    def test_type_is_normalized(self):
        assert parse_metadata_option("lightningcomponentbundle:x").type_name == "LightningComponentBundle"

    def test_unknown_type_is_kept(self):
        assert parse_metadata_option("CustomObject:Account").type_name == "CustomObject"

    @pytest.mark.parametrize("value", ["", "   ", ":name"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_metadata_option(value)


class TestRegistry:
    def test_lookup_is_case_insensitive(self):
        assert get_type("apexclass") is APEX_CLASS
        assert get_type("Nope") is None

    def test_list_types(self):
        names = {t.name for t in list_types()}
        assert {"LightningComponentBundle", "AuraDefinitionBundle", "ApexClass", "Flexipage"} == names


class TestDiscover:
    def test_finds_bundles_and_files(self, project_root):
        write_lwc_bundle(project_root, "helloWorld")
        write_lwc_bundle(project_root, "noConfig", meta_xml=None)
        write_apex_class(project_root, "AccountService")
        flexipages = project_root / "flexipages"
        flexipages.mkdir()
        (flexipages / "Home.flexipage-meta.xml").write_text("<FlexiPage/>", encoding="utf-8")

        components = ComponentResolver(project_root.parents[2]).discover()
        by_name = {c.identity: c for c in components}

        assert set(by_name) == {"helloWorld", "noConfig", "AccountService", "Home"}
        assert by_name["helloWorld"].type == LIGHTNING_COMPONENT_BUNDLE
        assert by_name["helloWorld"].xml.endswith("helloWorld.js-meta.xml")
        assert by_name["noConfig"].xml is None
        assert by_name["AccountService"].type == APEX_CLASS
        assert by_name["Home"].type == FLEXIPAGE
        assert by_name["Home"].xml.endswith("Home.flexipage-meta.xml")

    def test_apex_sidecar_is_xml(self, project_root):
        write_apex_class(project_root, "Svc")
        (project_root / "classes" / "Svc.cls-meta.xml").write_text("<ApexClass/>", encoding="utf-8")

        components = ComponentResolver(project_root).discover()

        assert len(components) == 1
        assert components[0].xml.endswith("Svc.cls-meta.xml")

    def test_ignored_directories(self, tmp_path):
        write_lwc_bundle(tmp_path / "node_modules" / "pkg", "vendored")
        write_lwc_bundle(tmp_path / "src", "mine")

        names = [c.identity for c in ComponentResolver(tmp_path).discover()]

        assert names == ["mine"]

    def test_missing_project(self, tmp_path):
        assert ComponentResolver(tmp_path / "nope").discover() == []


class TestSelectComponents:
    def test_no_request_returns_everything(self, project_root):
        write_lwc_bundle(project_root, "a")
        write_apex_class(project_root, "B")
        components = ComponentResolver(project_root).discover()

        selected, missing = select_components(components)

        assert selected == components
        assert selected is not components
        assert missing == []

    def test_named_and_type_requests(self, project_root):
        write_lwc_bundle(project_root, "a")
        write_lwc_bundle(project_root, "b")
        write_apex_class(project_root, "C")

        selected, missing = select_components(
            ComponentResolver(project_root).discover(),
            [
                parse_metadata_option("ApexClass"),
                parse_metadata_option("LightningComponentBundle:b"),
                parse_metadata_option("LightningComponentBundle:ghost"),
            ],
        )

        assert [c.identity for c in selected] == ["C", "b"]
        assert missing == [MetadataTypeAndName("LightningComponentBundle", "ghost")]

    def test_duplicates_are_collapsed(self, project_root):
        write_lwc_bundle(project_root, "a")

        selected, _ = select_components(
            ComponentResolver(project_root).discover(),
            [parse_metadata_option("LightningComponentBundle"), parse_metadata_option("LightningComponentBundle:a")],
        )

        assert [c.identity for c in selected] == ["a"]

    def test_type_request_with_no_match_is_not_missing(self, project_root):
        write_lwc_bundle(project_root, "a")

        selected, missing = select_components(
            ComponentResolver(project_root).discover(), [parse_metadata_option("ApexClass")]
        )

        assert selected == []
        assert missing == []

    def test_runner_selects_through_same_function(self, fake_connection, project_root):
        write_lwc_bundle(project_root, "a")
        components = ComponentResolver(project_root).discover()
        request = [parse_metadata_option("LightningComponentBundle:ghost")]

        with patch(
            "metadata_enrichment.enrichment.runner.select_components",
            wraps=select_components,
        ) as select:
            result = EnrichmentRunner(fake_connection).run(components, request)

        select.assert_called_once_with(components, request)
        assert result.records.get("ghost") is not None
