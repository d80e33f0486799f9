"""Shared test fixtures: small in-memory ontology repositories."""

import json

import pytest

from ontoguard.entities import EntityIndex
from ontoguard.versioning import BumpLevel, ChangeRecord


def make_index(**documents):
    """Build an EntityIndex from keyword lists of documents per entity type.

    >>> make_index(modules=[{"id": "Core", "categories": ["Agent"]}])
    """
    return EntityIndex.from_documents(documents)


def change(file, change_type="patch"):
    """Change record for ``<type>/<id>.json``."""
    return ChangeRecord(
        file=file,
        entity_type=file.split("/", 1)[0],
        change_type=BumpLevel(change_type),
    )


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def core_lab_index():
    """Core owns Agent; Lab depends on Core and owns Equipment; Default bundles both."""
    return make_index(
        categories=[
            {"id": "Agent"},
            {"id": "Equipment"},
        ],
        modules=[
            {"id": "Core", "categories": ["Agent"]},
            {"id": "Lab", "categories": ["Equipment"], "dependencies": ["Core"]},
        ],
        bundles=[{"id": "Default", "modules": ["Core", "Lab"]}],
    )


@pytest.fixture
def chain_index():
    """Chain of modules: App -> Service -> Base, plus an unrelated Extra."""
    return make_index(
        properties=[
            {"id": "Name"},
            {"id": "Endpoint"},
            {"id": "Screen"},
            {"id": "Note"},
        ],
        modules=[
            {"id": "Base", "properties": ["Name"]},
            {"id": "Service", "properties": ["Endpoint"], "dependencies": ["Base"]},
            {"id": "App", "properties": ["Screen"], "dependencies": ["Service"]},
            {"id": "Extra", "properties": ["Note"]},
        ],
    )


@pytest.fixture
def ontology_repo(tmp_path):
    """On-disk repository matching core_lab_index, with a schema file and VERSION."""
    write_json(tmp_path / "categories" / "_schema.json", {"type": "object"})
    write_json(tmp_path / "categories" / "Agent.json", {"id": "Agent"})
    write_json(
        tmp_path / "categories" / "Equipment.json",
        {"id": "Equipment", "parents": ["Agent"]},
    )
    write_json(tmp_path / "modules" / "Core.json", {"id": "Core", "categories": ["Agent"]})
    write_json(
        tmp_path / "modules" / "Lab.json",
        {"id": "Lab", "categories": ["Equipment"], "dependencies": ["Core"]},
    )
    write_json(tmp_path / "bundles" / "Default.json", {"id": "Default", "modules": ["Core", "Lab"]})
    (tmp_path / "VERSION").write_text("1.2.3\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def index_factory():
    return make_index


@pytest.fixture
def change_factory():
    return change
