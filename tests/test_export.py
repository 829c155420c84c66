"""Tests for skos2jskos.export module."""

import json

from skos2jskos.config import ConversionConfig
from skos2jskos.export import dump_json, export_concepts, export_scheme, write_json
from skos2jskos.models import JskosConcept, JskosScheme


def test_dump_json_sorted_and_pretty():
    text = dump_json({"b": 1, "a": {"d": "ä", "c": [1]}})
    assert text == (
        '{\n  "a": {\n    "c": [\n      1\n    ],\n    "d": "ä"\n  },\n  "b": 1\n}\n'
    )


def test_write_json(tmp_path):
    path = tmp_path / "out.json"
    path.write_text("old content")
    write_json(path, {"uri": "x", "prefLabel": {"de": "Größe"}})
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "uri": "x",
        "prefLabel": {"de": "Größe"},
    }
    assert "Größe" in path.read_text(encoding="utf-8")
    # no temporary files are left behind
    assert [p.name for p in tmp_path.iterdir()] == ["out.json"]


def test_export_scheme_with_name(tmp_path):
    config = ConversionConfig(source_url="http://x", outdir=tmp_path, name="voc")
    path = export_scheme(JskosScheme(uri="http://example.org/s"), config)
    assert path == tmp_path / "voc-scheme.json"
    data = json.loads(path.read_text())
    assert list(data) == ["@context", "type", "uri"]


def test_export_concepts_sorted_by_uri(tmp_path):
    config = ConversionConfig(source_url="http://x", outdir=tmp_path)
    concepts = [JskosConcept(uri=uri) for uri in ["uri:b", "uri:c", "uri:a"]]
    path = export_concepts(concepts, config)
    assert path == tmp_path / "concepts.json"
    data = json.loads(path.read_text())
    assert [c["uri"] for c in data] == ["uri:a", "uri:b", "uri:c"]


def test_export_concepts_empty(tmp_path):
    config = ConversionConfig(source_url="http://x", outdir=tmp_path)
    path = export_concepts([], config)
    assert path.read_text() == "[]\n"
