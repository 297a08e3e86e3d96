"""Unit tests for session_recall.search.parsing."""
from __future__ import annotations

import json

from session_recall.search.parsing import extract_json_payload, parse_search_response


def _payload(*records: dict[str, object]) -> str:
    return json.dumps({"results": list(records)})


_HIT = {
    "path": "/s/a.jsonl",
    "startLine": 1,
    "endLine": 5,
    "score": 0.8,
    "snippet": "deploy notes",
    "source": "sessions",
}


class TestExtractJsonPayload:
    def test_plain_object(self) -> None:
        assert extract_json_payload('{"a": 1}') == {"a": 1}

    def test_surrounding_noise(self) -> None:
        text = 'Loading plugins...\n[info] ready\n{"a": {"b": 2}}\ntrailing line'
        assert extract_json_payload(text) == {"a": {"b": 2}}

    def test_braces_inside_strings(self) -> None:
        text = 'noise {"snippet": "if (x) { return }"} more'
        assert extract_json_payload(text) == {"snippet": "if (x) { return }"}

    def test_skips_unbalanced_prefix(self) -> None:
        text = 'warning: {unterminated\n{"ok": true}'
        assert extract_json_payload(text) == {"ok": True}

    def test_returns_first_object(self) -> None:
        assert extract_json_payload('{"n": 1} {"n": 2}') == {"n": 1}

    def test_no_object(self) -> None:
        assert extract_json_payload("no json here [1, 2]") is None

    def test_empty_text(self) -> None:
        assert extract_json_payload("") is None


class TestParseSearchResponse:
    def test_valid_response(self) -> None:
        hits = parse_search_response(_payload(_HIT))
        assert len(hits) == 1
        assert hits[0].path == "/s/a.jsonl"
        assert hits[0].start_line == 1
        assert hits[0].source == "sessions"

    def test_keeps_backend_order(self) -> None:
        second = {**_HIT, "path": "/s/b.jsonl", "score": 0.9}
        hits = parse_search_response(_payload(_HIT, second))
        assert [h.path for h in hits] == ["/s/a.jsonl", "/s/b.jsonl"]

    def test_garbage_gives_empty(self) -> None:
        assert parse_search_response("Error: index not found") == []

    def test_missing_results_key(self) -> None:
        assert parse_search_response('{"hits": []}') == []

    def test_results_not_a_list(self) -> None:
        assert parse_search_response('{"results": "nope"}') == []

    def test_invalid_records_dropped(self) -> None:
        bad_score = {**_HIT, "score": "high"}
        no_path = {k: v for k, v in _HIT.items() if k != "path"}
        hits = parse_search_response(_payload(bad_score, no_path, _HIT, "text"))  # type: ignore[arg-type]
        assert [h.path for h in hits] == ["/s/a.jsonl"]

    def test_noise_around_payload(self) -> None:
        text = "plugin loaded\n" + _payload(_HIT) + "\ndone"
        assert len(parse_search_response(text)) == 1
