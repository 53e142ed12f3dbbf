# tests/conftest.py
"""
Shared fixtures.

Components are real SourceComponents laid out under tmp_path; the org is a
FakeConnection that records every POST and answers from a canned table.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from metadata_enrichment.components.base import SourceComponent
from metadata_enrichment.components.registry import APEX_CLASS, LIGHTNING_COMPONENT_BUNDLE

META_XML = """<?xml version="1.0" encoding="UTF-8"?>
<LightningComponentBundle xmlns="http://soap.sforce.com/2006/04/metadata">
    <apiVersion>66.0</apiVersion>
    <isExposed>true</isExposed>
</LightningComponentBundle>
"""

OPT_OUT_META_XML = """<?xml version="1.0" encoding="UTF-8"?>
<LightningComponentBundle xmlns="http://soap.sforce.com/2006/04/metadata">
    <apiVersion>66.0</apiVersion>
    <ai>
        <skipUplift>true</skipUplift>
    </ai>
</LightningComponentBundle>
"""


def make_response(
    name: str,
    description: str = "A helpful component.",
    score: float = 0.95,
    metadata_type: str = "Lwc",
) -> Dict[str, Any]:
    """Wire-shaped enrichment response for one resource."""
    return {
        "metadata": {
            "durationMs": 1200,
            "failureCount": 0,
            "successCount": 1,
            "timestamp": "2026-01-01T00:00:00Z",
        },
        "results": [
            {
                "resourceId": f"id-{name}",
                "resourceName": name,
                "metadataType": metadata_type,
                "modelUsed": "test-model",
                "description": description,
                "descriptionScore": score,
            }
        ],
    }


class FakeConnection:
    """
    Records POSTs and answers by resource name.

    Names in `failures` raise the mapped exception instead of answering.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Any]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ):
        self.responses = responses or {}
        self.failures = failures or {}
        self.calls: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def request_post(self, path, body, headers=None):
        name = body["contentBundles"][0]["resourceName"]
        with self._lock:
            self.calls.append({"path": path, "body": body, "headers": headers, "name": name})

        if name in self.failures:
            raise self.failures[name]
        if name in self.responses:
            return self.responses[name]
        return make_response(name)

    @property
    def called_names(self) -> List[str]:
        return sorted(call["name"] for call in self.calls)

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def write_lwc_bundle(
    root: Path,
    name: str,
    files: Optional[Dict[str, str]] = None,
    meta_xml: Optional[str] = META_XML,
) -> SourceComponent:
    """Create lwc/<name>/ under root and return its SourceComponent."""
    bundle_dir = root / "lwc" / name
    bundle_dir.mkdir(parents=True, exist_ok=True)

    if files is None:
        files = {
            f"{name}.js": "import { LightningElement } from 'lwc';\nexport default class X extends LightningElement {}\n",
            f"{name}.html": "<template><p>Hello</p></template>\n",
        }
    for filename, content in files.items():
        (bundle_dir / filename).write_text(content, encoding="utf-8")

    xml_path = None
    if meta_xml is not None:
        xml_file = bundle_dir / f"{name}.js-meta.xml"
        xml_file.write_text(meta_xml, encoding="utf-8")
        xml_path = str(xml_file)

    return SourceComponent(
        name=name,
        type=LIGHTNING_COMPONENT_BUNDLE,
        xml=xml_path,
        content=str(bundle_dir),
    )


def write_apex_class(root: Path, name: str) -> SourceComponent:
    classes = root / "classes"
    classes.mkdir(parents=True, exist_ok=True)
    cls_file = classes / f"{name}.cls"
    cls_file.write_text(f"public class {name} {{}}\n", encoding="utf-8")
    return SourceComponent(name=name, type=APEX_CLASS, content=str(cls_file))


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def project_root(tmp_path) -> Path:
    root = tmp_path / "force-app" / "main" / "default"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def lwc_component(project_root) -> SourceComponent:
    return write_lwc_bundle(project_root, "helloWorld")


@pytest.fixture
def apex_component(project_root) -> SourceComponent:
    return write_apex_class(project_root, "AccountService")
