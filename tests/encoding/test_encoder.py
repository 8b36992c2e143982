# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : test_encoder.py
#   file_relpath : tests/encoding/test_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for single-resource encoding.

Covers the document shape per mode, attribute/nested/meta encoding, relationship
linkage (absent vs. cleared), transitive ``included`` harvesting and error cases.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

import pytest

from forge_jsonapi import (
    UNSET,
    Document,
    Encoder,
    Resource,
    UnexpectedValueTypeError,
    UnregisteredModelError,
    WrappedResource,
    encode,
    encode_as_client,
    encode_as_server,
    encode_with_mode,
    encode_with_root_meta,
    relationship,
    resource_schema,
    serialize_document,
)
from forge_jsonapi.encoding.config import EncoderMode
from tests.conftest import parametrize
from tests.models import (
    Article,
    ArticleIllustration,
    ArticleInfo,
    ArticlePrint,
    Author,
    FeaturedArticle,
    Publisher,
    sample_article,
)

EXPECTED_TIMESTAMPS: dict[str, str] = {
    "createdAt": "2024-01-02T03:04:05.678Z",
    "updatedAt": "2024-02-03T04:05:06.000Z",
}


def _encode_dict(resource: object, *options: Any) -> dict[str, Any]:
    doc: Document | None = encode(resource, *options)
    assert doc is not None
    return doc.to_dict()


def test_server_read_document() -> None:
    """A server read keeps id and timestamps and side-loads related resources."""
    payload = _encode_dict(sample_article(), encode_as_server())

    assert payload == {
        "data": {
            "id": "1234",
            "type": "articles",
            "attributes": {
                "title": "Hello",
                "tagsByKeyword": {"a": ["x", "y"]},
                "publishedOn": "2024-03-01",
                "timestamps": EXPECTED_TIMESTAMPS,
            },
            "relationships": {
                "author": {"data": {"id": "a1", "type": "authors"}},
                "publisher": {"data": {"id": "p1", "type": "publishers"}},
            },
        },
        "included": [
            {
                "id": "a1",
                "type": "authors",
                "attributes": {"name": "Ada"},
                "relationships": {"publisher": {"data": {"id": "p1", "type": "publishers"}}},
            },
            {"id": "p1", "type": "publishers", "attributes": {"name": "Acme Press"}},
        ],
    }


def test_cleared_relationship_encodes_null_data() -> None:
    payload = _encode_dict(sample_article(author=None), encode_as_server())

    assert payload["data"]["relationships"]["author"] == {"data": None}
    # Only the directly related publisher remains to be included.
    assert [res["type"] for res in payload["included"]] == ["publishers"]


def test_absent_relationship_is_omitted() -> None:
    """``UNSET`` means "not loaded": no key at all, unlike ``None``."""
    payload = _encode_dict(sample_article(), encode_as_server())
    assert "subarticles" not in payload["data"]["relationships"]


def test_client_create_omits_id_and_timestamps() -> None:
    payload = _encode_dict(sample_article())
    data = payload["data"]

    assert "id" not in data
    assert "timestamps" not in data["attributes"]
    assert "included" not in payload
    assert "meta" not in payload
    # Relationships keep their linkage, including the related ids.
    assert data["relationships"]["author"] == {"data": {"id": "a1", "type": "authors"}}


@parametrize("method", ["PATCH", "PUT", "DELETE"])
def test_client_update_and_delete_keep_id(method: str) -> None:
    payload = _encode_dict(sample_article(), encode_as_client(method))

    assert payload["data"]["id"] == "1234"
    assert "timestamps" not in payload["data"]["attributes"]
    assert "included" not in payload


def test_encode_none_returns_none() -> None:
    assert encode(None) is None
    assert encode(None, encode_as_server()) is None


def test_encoding_is_idempotent() -> None:
    article = sample_article()
    assert encode(article, encode_as_server()) == encode(article, encode_as_server())


def test_encoder_instance_matches_module_function() -> None:
    article = sample_article()
    assert Encoder().encode(article, encode_with_mode(EncoderMode.CLIENT_UPDATE)) == encode(
        article, encode_as_client("PATCH")
    )


def test_dictionary_attribute_is_flattened_into_a_copy() -> None:
    tags = {"a": ["x"]}
    doc = encode(sample_article(tags_by_keyword=tags), encode_as_server())
    assert doc is not None
    assert not isinstance(doc.data, list)
    assert doc.data.attributes is not None

    encoded = doc.data.attributes["tagsByKeyword"]
    assert encoded == tags
    assert encoded is not tags


def test_none_attributes_are_skipped() -> None:
    payload = _encode_dict(Article(id="1", title=None), encode_as_server())
    assert "attributes" not in payload["data"]
    assert "relationships" not in payload["data"]
    assert payload["included"] == []


def test_nested_attributes_are_encoded_with_wrapped_fields() -> None:
    article = Article(
        id="1",
        illustrations=[
            ArticleIllustration(url="https://img/1", caption=None, taken_on=date(2024, 1, 5)),
            None,
        ],
        print_run=ArticlePrint(
            pages=12, printed_at=datetime(2024, 4, 1, 8, 0, tzinfo=timezone.utc)
        ),
    )
    attrs = _encode_dict(article, encode_as_server())["data"]["attributes"]

    assert attrs["illustrations"] == [{"url": "https://img/1", "takenOn": "2024-01-05"}, None]
    assert attrs["print"] == {"pages": 12, "printedAt": "2024-04-01T08:00:00.000Z"}


def test_nested_attribute_accepts_plain_mapping() -> None:
    article = Article(id="1", print_run={"pages": 3, "binding": "soft"})
    attrs = _encode_dict(article, encode_as_server())["data"]["attributes"]
    # Only declared wrapped fields are encoded.
    assert attrs["print"] == {"pages": 3}


def test_scalar_nested_attribute_raises() -> None:
    with pytest.raises(UnexpectedValueTypeError) as exc_info:
        encode(Article(id="1", illustrations="not-a-list"), encode_as_server())

    assert exc_info.value.name == "illustrations"
    assert exc_info.value.model_type is Article
    assert isinstance(exc_info.value, TypeError)


def test_meta_encoding() -> None:
    """Objects go through their wrapped fields, dictionaries are flattened, scalars copied."""
    article = Article(
        id="1",
        info=ArticleInfo(source="wire", reviewed=False, labels=("news", "tech")),
        stats={"views": 3},
        revision=7,
    )
    payload = _encode_dict(article, encode_as_server())

    assert payload["data"]["meta"] == {
        "info": {"source": "wire", "reviewed": False, "labels": ["news", "tech"]},
        "stats": {"views": 3},
        "revision": 7,
    }


def test_meta_mapping_is_flattened_even_with_target() -> None:
    article = Article(id="1", info={"source": "wire", "extra": 1})
    payload = _encode_dict(article, encode_as_server())
    assert payload["data"]["meta"] == {"info": {"source": "wire", "extra": 1}}


def test_meta_object_without_target_is_flattened() -> None:
    """Target-less meta objects encode as plain JSON objects of their properties."""
    doc = encode(Article(id="1", stats=WrappedResource(views=3, shares=1)), encode_as_server())
    assert doc is not None

    payload = json.loads(serialize_document(doc))
    assert payload["data"]["meta"] == {"stats": {"views": 3, "shares": 1}}


def test_root_meta_is_attached() -> None:
    payload = _encode_dict(sample_article(), encode_with_root_meta({"requestId": "r-1"}))
    assert payload["meta"] == {"requestId": "r-1"}


def test_empty_root_meta_is_kept() -> None:
    payload = _encode_dict(sample_article(), encode_as_server(), encode_with_root_meta({}))
    assert payload["meta"] == {}


def test_identifier_uses_target_discriminator() -> None:
    """Linkage uses the relationship target's type, not the related object's own."""
    article = Article(id="1", author=Author(id="a9", type="writers"))
    rels = _encode_dict(article, encode_as_server())["data"]["relationships"]
    assert rels["author"] == {"data": {"id": "a9", "type": "authors"}}


def test_relationship_to_mapping_value() -> None:
    article = Article(id="1", publisher={"id": "p9"})
    payload = _encode_dict(article, encode_as_server())

    assert payload["data"]["relationships"]["publisher"] == {
        "data": {"id": "p9", "type": "publishers"}
    }
    assert payload["included"] == [{"id": "p9", "type": "publishers"}]


def test_to_many_relationship() -> None:
    article = Article(
        id="1",
        subarticles=[Article(id="2", title="Child"), None, Article(id="3")],
    )
    payload = _encode_dict(article, encode_as_server())

    assert payload["data"]["relationships"]["subarticles"] == {
        "data": [{"id": "2", "type": "articles"}, {"id": "3", "type": "articles"}]
    }
    assert [res["id"] for res in payload["included"]] == ["2", "3"]


def test_empty_to_many_relationship() -> None:
    payload = _encode_dict(Article(id="1", subarticles=[]), encode_as_server())
    assert payload["data"]["relationships"]["subarticles"] == {"data": []}


def test_scalar_relationship_value_is_ignored() -> None:
    payload = _encode_dict(Article(id="1", author="a1"), encode_as_server())
    assert "relationships" not in payload["data"]
    assert payload["included"] == []


def test_scalar_elements_of_to_many_relationship_are_ignored(
    caplog: pytest.LogCaptureFixture,
) -> None:
    article = Article(id="1", subarticles=["a1", Article(id="2"), 7])
    payload = _encode_dict(article, encode_as_server())

    assert payload["data"]["relationships"]["subarticles"] == {
        "data": [{"id": "2", "type": "articles"}]
    }
    assert payload["included"] == [{"id": "2", "type": "articles"}]
    assert "ignoring relationship element of type str" in caplog.text


def test_included_is_transitive_and_deduplicated() -> None:
    """Related resources of related resources are included once each."""
    shared = Publisher(id="p1", name="Acme Press")
    article = Article(
        id="1",
        author=Author(id="a1", publisher=shared),
        subarticles=[
            Article(id="2", author=Author(id="a2", publisher=shared)),
            Article(id="3", author=Author(id="a1", publisher=shared)),
        ],
    )
    payload = _encode_dict(article, encode_as_server())
    keys = [(res["type"], res["id"]) for res in payload["included"]]

    assert keys == [
        ("authors", "a1"),
        ("articles", "2"),
        ("articles", "3"),
        ("publishers", "p1"),
        ("authors", "a2"),
    ]


def test_cyclic_graph_terminates() -> None:
    """A graph referring back to the primary resource still encodes."""
    parent = Article(id="1", title="Parent")
    child = Article(id="2", title="Child", subarticles=[parent])
    object.__setattr__(parent, "subarticles", [child])

    payload = _encode_dict(parent, encode_as_server())

    assert [res["id"] for res in payload["included"]] == ["2"]
    assert payload["included"][0]["relationships"]["subarticles"] == {
        "data": [{"id": "1", "type": "articles"}]
    }


def test_self_reference_is_not_included() -> None:
    article = Article(id="1")
    object.__setattr__(article, "subarticles", [article])

    payload = _encode_dict(article, encode_as_server())
    assert payload["included"] == []


def test_subtype_encodes_with_own_discriminator() -> None:
    featured = FeaturedArticle(id="9", title="T", headline="H", publisher=Publisher(id="p1"))
    payload = _encode_dict(featured, encode_as_server())

    assert payload["data"]["type"] == "featured-articles"
    assert payload["data"]["attributes"] == {"title": "T", "headline": "H"}
    assert payload["data"]["relationships"] == {
        "publisher": {"data": {"id": "p1", "type": "publishers"}}
    }


class _Loose:
    """Unregistered model carrying nothing."""

    id = "x"


class _Typed:
    """Unregistered model carrying its own type."""

    id = "x"
    type = "loose"


def test_unregistered_model_without_type_raises() -> None:
    with pytest.raises(UnregisteredModelError) as exc_info:
        encode(_Loose(), encode_as_server())
    assert exc_info.value.model_type is _Loose
    assert isinstance(exc_info.value, LookupError)


def test_unregistered_model_falls_back_to_own_type() -> None:
    assert _encode_dict(_Typed(), encode_as_server()) == {
        "data": {"id": "x", "type": "loose"},
        "included": [],
    }


def test_linkage_without_any_type_discriminator_raises(scratch_models: list[type]) -> None:
    """Linkage and ``included`` agree: a related object needs a type from somewhere."""

    @resource_schema("holders", relationship("owner", _Loose), relationship("owners", _Loose))
    @dataclass(frozen=True)
    class Holder(Resource):
        owner: Any = UNSET
        owners: Any = UNSET

    scratch_models.append(Holder)

    for holder in (Holder(id="h1", owner=_Loose()), Holder(id="h1", owners=[_Loose()])):
        for options in ((), (encode_as_server(),)):
            with pytest.raises(UnregisteredModelError) as exc_info:
                encode(holder, *options)
            assert exc_info.value.model_type is _Loose

    rels = _encode_dict(Holder(id="h1", owner=_Typed()))["data"]["relationships"]
    assert rels["owner"] == {"data": {"id": "x", "type": "loose"}}
