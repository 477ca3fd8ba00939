"""Tests for the {"data": ...} envelope unwrapper and the endpoint parsers."""

from __future__ import annotations

import json

import pytest

from cursepack.envelope import (
    ResponseEnvelope,
    list_of,
    parse_file_response,
    parse_fingerprint_response,
    parse_versions_response,
    unwrap,
)
from cursepack.exceptions import ParseError
from cursepack.types_models import FingerprintLookupResult, ModFile, ModLogo, ModVersionSet


def _versions_text(make_file_dict):
    return json.dumps({
        "data": [
            {
                "id": 238222, "gameId": 432, "name": "Just Enough Items", "slug": "jei",
                "downloadCount": 10, "latestFiles": [make_file_dict(id=1), make_file_dict(id=2)],
            },
            {
                "id": 32274, "gameId": 432, "name": "JourneyMap", "slug": "journeymap",
                "downloadCount": 5, "latestFiles": [],
            },
        ]
    })


class TestUnwrap:
    def test_exact_matches_length_preserved(self, make_match_dict):
        text = json.dumps({"data": {"exactMatches": [make_match_dict(i, id=100 + i) for i in range(3)]}})
        result = unwrap(text, FingerprintLookupResult.from_dict)
        assert len(result.exact_matches) == 3
        assert [m.file.id for m in result.exact_matches] == [100, 101, 102]

    def test_accepts_bytes(self, make_file_dict):
        text = json.dumps({"data": make_file_dict()}).encode("utf-8")
        assert unwrap(text, ModFile.from_dict).id == 4711

    def test_list_payload(self, make_file_dict):
        sets = unwrap(_versions_text(make_file_dict), list_of(ModVersionSet.from_dict))
        assert isinstance(sets, tuple)
        assert [s.slug for s in sets] == ["jei", "journeymap"]

    @pytest.mark.parametrize("text", [
        "", "not json", "[1, 2]", '"data"', '{"payload": {}}',
        '{"data": ' + "[" * 100000 + "]" * 100000 + "}",
    ])
    def test_bad_envelope(self, text):
        with pytest.raises(ParseError):
            unwrap(text, FingerprintLookupResult.from_dict)

    def test_inner_payload_mismatch(self):
        with pytest.raises(ParseError, match="exactMatches"):
            unwrap('{"data": {"matches": []}}', FingerprintLookupResult.from_dict)

    def test_list_of_rejects_object(self):
        with pytest.raises(ParseError, match="array"):
            unwrap('{"data": {}}', list_of(ModVersionSet.from_dict))

    def test_decoder_errors_become_parse_errors(self):
        def strict(value):
            return int(value)

        with pytest.raises(ParseError) as excinfo:
            unwrap('{"data": "abc"}', strict)
        assert isinstance(excinfo.value.cause, ValueError)

    def test_any_decoder_works(self):
        assert unwrap('{"data": 7}', lambda v: v * 2) == 14


class TestResponseEnvelope:
    def test_from_text_and_back(self):
        d = {"id": 1, "modId": 2, "thumbnailUrl": "t", "url": "u"}
        env = ResponseEnvelope.from_text(json.dumps({"data": d}), ModLogo.from_dict)
        assert env.data == ModLogo.from_dict(d)
        assert env.to_dict() == {"data": d}

    def test_tuple_payload_encoded_item_by_item(self, make_file_dict):
        env = ResponseEnvelope.from_text(_versions_text(make_file_dict), list_of(ModVersionSet.from_dict))
        encoded = env.to_dict()
        assert [v["slug"] for v in encoded["data"]] == ["jei", "journeymap"]

    def test_payload_without_encoding_still_decodes(self):
        env = ResponseEnvelope.from_text('{"data": 3}', int)
        assert env.data == 3
        with pytest.raises(TypeError):
            env.to_dict()
        assert env.to_dict(encoder=str) == {"data": "3"}


class TestEndpointParsers:
    def test_fingerprint_response(self, make_match_dict):
        text = json.dumps({"data": {"exactMatches": [make_match_dict(1), make_match_dict(2, id=9)]}})
        result = parse_fingerprint_response(text)
        assert [m.id for m in result.exact_matches] == [1, 2]
        assert result.exact_matches[1].file.id == 9

    def test_fingerprint_response_round_trip(self, make_match_dict):
        payload = {"data": {"exactMatches": [make_match_dict(1)]}}
        result = parse_fingerprint_response(json.dumps(payload))
        assert result.to_dict() == payload["data"]

    def test_versions_response(self, make_file_dict):
        resp = parse_versions_response(_versions_text(make_file_dict))
        assert len(resp.data) == 2
        assert [f.id for f in resp.data[0].latest_files] == [1, 2]
        assert resp.to_dict() == json.loads(_versions_text(make_file_dict))

    def test_file_response_normalizes(self, make_file_dict):
        f = parse_file_response(json.dumps({"data": make_file_dict(gameId=None, downloadUrl=None)}))
        assert f.game_id == 0
        assert f.download_url == ""
