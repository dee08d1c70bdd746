import json

import pytest

from docschema.classify import ValueClassifier
from docschema.config import Config
from docschema.store import LocalDocumentStore


@pytest.fixture
def cfg_like():
    # deterministic, no color noise in output
    return Config(infer_datetimes=False, color_enabled=False)


@pytest.fixture
def classifier(cfg_like):
    return ValueClassifier(cfg=cfg_like)


@pytest.fixture
def export_tree():
    return {
        "users": {
            "u1": {
                "name": "Ada",
                "age": 36,
                "__collections__": {
                    "orders": {
                        "o1": {"total": 12.5, "items": ["pen"]},
                        "o2": {"total": 3, "items": [], "coupon": None},
                    }
                },
            },
            "u2": {"name": "Grace"},
            "u3": {"name": "Linus", "age": 21, "tags": ["admin", 1]},
        },
        "empty": {},
    }


@pytest.fixture
def local_store(export_tree):
    return LocalDocumentStore(export_tree)


@pytest.fixture
def write_file(tmp_path):
    """Write text (or JSON for non-str content) to tmp_path/name and return the path."""

    def _write(name, content):
        p = tmp_path / name
        if not isinstance(content, str):
            content = json.dumps(content)
        p.write_text(content, encoding="utf-8")
        return p

    return _write
