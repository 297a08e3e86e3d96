"""Parsing of backend search output.

The search command may print log lines or banners around its JSON
document, so the payload is located rather than assumed.

Functions
---------
- extract_json_payload   — first decodable ``{...}`` object in a text
- parse_search_response  — raw output to a list of ``RawHit``
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from pydantic import ValidationError

from session_recall.models import RawHit

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()


def extract_json_payload(text: str) -> dict[str, object] | None:
    """Return the first balanced JSON object embedded in ``text``.

    Each ``{`` is tried in turn as the start of a JSON document; text
    before and after the object is ignored.

    Returns
    -------
    dict | None
        The decoded object, or None if ``text`` contains none.
    """
    start = text.find("{")
    while start != -1:
        try:
            payload, _end = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(payload, dict):
            return payload
        start = text.find("{", start + 1)
    return None


def parse_search_response(text: str) -> list[RawHit]:
    """Parse backend output into hits.

    A missing or malformed payload yields an empty list.  Individual
    records that fail validation are dropped; the rest are kept in order.
    """
    payload = extract_json_payload(text)
    if payload is None:
        logger.debug("parse_search_response: no JSON object in backend output")
        return []

    records = payload.get("results")
    if not isinstance(records, list):
        logger.debug("parse_search_response: payload has no 'results' list")
        return []

    hits: list[RawHit] = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            logger.debug("parse_search_response: record %d is not an object", index)
            continue
        try:
            hits.append(RawHit.model_validate(record))
        except ValidationError as exc:
            logger.debug("parse_search_response: dropping record %d: %s", index, exc)
    return hits
