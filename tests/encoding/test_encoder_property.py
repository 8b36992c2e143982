# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : test_encoder_property.py
#   file_relpath : tests/encoding/test_encoder_property.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Property-based tests for the encoder (Hypothesis).

Run with the ``long`` profile for a deeper search:

    pytest -m hypothesis --hypothesis-profile=long
"""

from __future__ import annotations

import json
from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from forge_jsonapi import (
    UNSET,
    encode,
    encode_collection,
    encode_with_mode,
    serialize_document,
)
from forge_jsonapi.encoding.config import EncoderMode
from tests.models import Article
from tests.strategies_forge import articles

pytestmark = pytest.mark.hypothesis

modes = st.sampled_from(list(EncoderMode))


def _payload(article: Article, mode: EncoderMode) -> dict[str, Any]:
    doc = encode(article, encode_with_mode(mode))
    assert doc is not None
    return doc.to_dict()


@given(article=articles(), mode=modes)
def test_encoding_is_deterministic(article: Article, mode: EncoderMode) -> None:
    assert encode(article, encode_with_mode(mode)) == encode(article, encode_with_mode(mode))


@given(article=articles(), mode=modes)
def test_mode_flags_shape_the_document(article: Article, mode: EncoderMode) -> None:
    payload = _payload(article, mode)
    data = payload["data"]
    attributes = data.get("attributes", {})

    if mode is EncoderMode.CLIENT_CREATE:
        assert "id" not in data
    elif article.id is not None:
        assert data["id"] == article.id

    if mode is EncoderMode.SERVER_READ:
        assert "included" in payload
        assert ("timestamps" in attributes) is (article.timestamps is not None)
    else:
        assert "included" not in payload
        assert "timestamps" not in attributes


@given(article=articles())
def test_included_resources_are_unique_and_exclude_primary(article: Article) -> None:
    payload = _payload(article, EncoderMode.SERVER_READ)
    keys = [(res.get("id"), res["type"]) for res in payload["included"]]

    assert len(keys) == len(set(keys))
    if article.id is not None:
        assert (article.id, "articles") not in keys


@given(article=articles())
def test_absent_and_cleared_relationships(article: Article) -> None:
    relationships = _payload(article, EncoderMode.SERVER_READ)["data"].get("relationships", {})

    for name, value in (("author", article.author), ("publisher", article.publisher)):
        if value is UNSET:
            assert name not in relationships
        elif value is None:
            assert relationships[name] == {"data": None}
        else:
            assert relationships[name]["data"]["id"] == value.id


@given(items=st.lists(articles(), max_size=4), mode=modes)
def test_collection_keeps_element_order(items: list[Article], mode: EncoderMode) -> None:
    doc = encode_collection(items, encode_with_mode(mode))
    assert doc is not None
    data = doc.to_dict()["data"]

    assert len(data) == len(items)
    if mode is not EncoderMode.CLIENT_CREATE:
        assert [body.get("id") for body in data] == [item.id for item in items]


@given(article=articles(), mode=modes)
def test_serialized_document_is_valid_json(article: Article, mode: EncoderMode) -> None:
    doc = encode(article, encode_with_mode(mode))
    text = serialize_document(doc)
    assert json.loads(text) == json.loads(serialize_document(doc, indent=2))
