from __future__ import annotations

import json

import pytest


@pytest.fixture
def users_doc():
    return {"users": [{"name": "Ann"}, {"name": "bob"}]}


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "alpha.json").write_text(json.dumps({"items": [{"id": 1, "tag": "zz-unique"}]}), encoding="utf-8")
    (tmp_path / "beta.json").write_text(json.dumps({"items": [{"id": 2, "tag": "plain"}]}), encoding="utf-8")
    return tmp_path
