import json

import pytest


def mod_file_dict(**overrides):
    d = {
        "id": 4711,
        "gameId": 432,
        "modId": 238222,
        "displayName": "JEI 1.20.1-15.2.0.27",
        "fileName": "jei-1.20.1-forge-15.2.0.27.jar",
        "downloadUrl": "https://edge.forgecdn.net/files/4711/jei.jar",
        "fileLength": 1310720,
        "gameVersions": ["1.20.1", "Forge"],
    }
    d.update(overrides)
    return d


def match_dict(match_id, **file_overrides):
    return {"id": match_id, "file": mod_file_dict(**file_overrides)}


@pytest.fixture
def make_file_dict():
    return mod_file_dict


@pytest.fixture
def make_match_dict():
    return match_dict


@pytest.fixture
def write_manifest(tmp_path):
    def _write(payload, name="manifest.json"):
        path = tmp_path / name
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path
    return _write
