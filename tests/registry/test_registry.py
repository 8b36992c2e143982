# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : test_registry.py
#   file_relpath : tests/registry/test_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the metadata registry and its declarative front-end."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from forge_jsonapi import (
    DuplicateFieldError,
    MetadataRegistry,
    RegistryError,
    Resource,
    Timestamps,
    attribute,
    meta,
    relationship,
    resource_schema,
)
from forge_jsonapi.constants import ATTR_TIMESTAMPS
from forge_jsonapi.registry import FieldKind, FieldMapping, SchemaMeta
from tests.models import Article, ArticleInfo, Author, FeaturedArticle, Publisher


def test_lookup_returns_attributes_in_declaration_order() -> None:
    """Attribute mappings come back keyed by wire name, in declaration order."""
    attrs = MetadataRegistry.lookup(Article, FieldKind.ATTRIBUTE)
    assert list(attrs) == ["title", "tagsByKeyword", "publishedOn"]
    assert attrs["tagsByKeyword"].key == "tags_by_keyword"
    assert attrs["title"].key == "title"


def test_lookup_is_empty_for_unused_kind() -> None:
    """A kind with no declarations yields an empty mapping, never an error."""
    assert dict(MetadataRegistry.lookup(Publisher, FieldKind.META)) == {}
    assert dict(MetadataRegistry.lookup(int, FieldKind.ATTRIBUTE)) == {}


def test_lookup_result_is_read_only() -> None:
    """Returned mappings cannot be mutated by callers."""
    attrs = MetadataRegistry.lookup(Article, FieldKind.ATTRIBUTE)
    with pytest.raises(TypeError):
        attrs["title"] = attribute("title")  # type: ignore[index]


def test_subtype_inherits_base_mappings_first() -> None:
    """A subtype sees its bases' mappings first, then its own."""
    attrs = MetadataRegistry.lookup(FeaturedArticle, FieldKind.ATTRIBUTE)
    assert list(attrs) == ["title", "tagsByKeyword", "publishedOn", "headline"]

    nested = MetadataRegistry.lookup(FeaturedArticle, FieldKind.NESTED_ATTRIBUTE)
    assert list(nested) == [ATTR_TIMESTAMPS, "illustrations", "print"]


def test_every_resource_inherits_timestamps_nested_attribute() -> None:
    """The base resource declares the ``timestamps`` nested attribute."""
    mapping = MetadataRegistry.lookup(Publisher, FieldKind.NESTED_ATTRIBUTE)[ATTR_TIMESTAMPS]
    assert mapping.resolve_target() is Timestamps


def test_resource_type_resolution() -> None:
    """Discriminators are registered per class and resolved through the MRO."""
    assert MetadataRegistry.resource_type(Article) == "articles"
    assert MetadataRegistry.resource_type(FeaturedArticle) == "featured-articles"
    assert MetadataRegistry.resource_type(Timestamps) is None
    assert MetadataRegistry.resource_type(Resource) is None


def test_instances_default_their_type_from_the_registry() -> None:
    """A resource built without ``type`` carries its registered discriminator."""
    assert Author(id="a1").type == "authors"
    assert Author(id="a1", type="writers").type == "writers"


def test_deferred_target_resolves_self_reference() -> None:
    """A callable target allows a model to reference itself."""
    mapping = MetadataRegistry.lookup(Article, FieldKind.RELATIONSHIP)["subarticles"]
    assert mapping.resolve_target() is Article
    assert mapping.target_name == "Article"


def test_duplicate_field_on_subtype_is_rejected(scratch_models: list[type]) -> None:
    """A subtype may not redeclare a base field by wire name."""

    class Duplicate(Article):
        pass

    scratch_models.append(Duplicate)
    with pytest.raises(DuplicateFieldError) as exc_info:
        MetadataRegistry.register(Duplicate, "title", attribute("title"))

    assert exc_info.value.name == "title"
    assert exc_info.value.model_type is Duplicate
    assert isinstance(exc_info.value, ValueError)


def test_attribute_and_relationship_share_a_namespace(scratch_models: list[type]) -> None:
    """An attribute and a relationship may not use the same wire name."""

    class Clash:
        pass

    scratch_models.append(Clash)
    MetadataRegistry.register(Clash, "owner", attribute("owner"))
    with pytest.raises(DuplicateFieldError):
        MetadataRegistry.register(Clash, "owner", relationship("owner", Author))


def test_meta_has_its_own_namespace(scratch_models: list[type]) -> None:
    """Meta fields do not clash with attributes of the same name."""

    @resource_schema("notes", attribute("title"), meta("title"))
    @dataclass(frozen=True)
    class Note(Resource):
        title: str | None = None

    scratch_models.append(Note)
    assert list(MetadataRegistry.lookup(Note, FieldKind.META)) == ["title"]


def test_register_rejects_mismatched_name(scratch_models: list[type]) -> None:
    class Thing:
        pass

    scratch_models.append(Thing)
    with pytest.raises(RegistryError, match="does not match"):
        MetadataRegistry.register(Thing, "label", attribute("name"))


def test_register_type_conflicts(scratch_models: list[type]) -> None:
    """A class keeps a single discriminator; re-registering the same one is allowed."""

    class Thing:
        pass

    scratch_models.append(Thing)
    MetadataRegistry.register_type(Thing, "things")
    MetadataRegistry.register_type(Thing, "things")
    with pytest.raises(RegistryError, match="already registered"):
        MetadataRegistry.register_type(Thing, "stuff")
    with pytest.raises(RegistryError, match="Empty"):
        MetadataRegistry.register_type(Thing, "")


def test_unregister_drops_direct_declarations() -> None:
    class Temp:
        pass

    MetadataRegistry.register_type(Temp, "temps")
    MetadataRegistry.register(Temp, "label", attribute("label"))
    assert MetadataRegistry.is_registered(Temp)

    assert MetadataRegistry.unregister(Temp) is True
    assert MetadataRegistry.unregister(Temp) is False
    assert not MetadataRegistry.is_registered(Temp)
    assert MetadataRegistry.resource_type(Temp) is None


def test_field_mapping_defaults_key_to_name() -> None:
    mapping = FieldMapping(FieldKind.ATTRIBUTE, "title")
    assert mapping.key == "title"
    assert mapping.resolve_target() is None
    assert mapping.target_name == ""

    with pytest.raises(ValueError):
        FieldMapping(FieldKind.ATTRIBUTE, "")


def test_model_types_sorted_by_discriminator() -> None:
    names = [MetadataRegistry.resource_type(t) for t in MetadataRegistry.model_types()]
    assert names == sorted(names)  # type: ignore[type-var]
    assert {"articles", "authors", "publishers"} <= set(names)


def test_iter_meta_describes_fields() -> None:
    """Schema metadata lists every mapping, inherited ones included."""
    schemas: dict[str, SchemaMeta] = {s.type_name: s for s in MetadataRegistry.iter_meta()}
    article = schemas["articles"]
    assert article.model == f"{Article.__module__}.Article"

    by_name = {f.name: f for f in article.fields}
    assert by_name["tagsByKeyword"].kind == "attribute"
    assert by_name["tagsByKeyword"].key == "tags_by_keyword"
    assert by_name["publishedOn"].transformer == "DateTransformer('date')"
    assert by_name[ATTR_TIMESTAMPS].kind == "nested_attribute"
    assert by_name["author"].target == "Author"
    assert by_name["info"].target == ArticleInfo.__qualname__
    # Wrapped value classes have no discriminator and are not listed.
    assert "ArticleInfo" not in {s.model.rsplit(".", 1)[-1] for s in schemas.values()}
