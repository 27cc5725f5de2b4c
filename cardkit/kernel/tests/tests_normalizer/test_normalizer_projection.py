"""
CardKit Normalizer -- Projection Tests

normalize(record) → CanonicalProjection | SUPPRESSED

Covers:
  - absent and non-record inputs are suppressed
  - every string field is trimmed; wrongly-typed fields count as absent
  - path_slug is /articles/ + percent-encoded slug, and decodes back
  - tags are trimmed with empties dropped
  - normalizing a projection again changes nothing
"""

from types import SimpleNamespace

import pytest

from cardkit.kernel.normalizer import (
    SourceRecord,
    build_route,
    decode_path_slug,
    encode_path_slug,
    normalize,
)
from cardkit.kernel.types import SUPPRESSED, CanonicalProjection

# ============================================================================
# Suppression
# ============================================================================


class TestSuppression:
    @pytest.mark.parametrize("record", [None, "an article", b"bytes", 42, 3.5, True, ["title"], ("t",), {"x"}])
    def test_non_records_are_suppressed(self, record):
        assert normalize(record) is SUPPRESSED

    def test_object_without_known_fields_is_suppressed(self):
        assert normalize(object()) is SUPPRESSED

    def test_suppressed_is_falsy(self):
        assert not SUPPRESSED

    def test_empty_mapping_is_a_record(self):
        """An empty dict is record-shaped; its slots are simply all empty."""
        projection = normalize({})
        assert isinstance(projection, CanonicalProjection)
        assert projection == CanonicalProjection()


# ============================================================================
# Trimming
# ============================================================================


class TestTrimming:
    def test_all_text_fields_trimmed(self, full_record):
        projection = normalize(full_record)

        assert projection.title == "Test Article Title"
        assert projection.description == "A short description of the article."
        assert projection.date == "2024-01-15"
        assert projection.slug == "test-article"
        assert projection.image == "/images/cover.png"

    def test_missing_fields_become_empty(self):
        projection = normalize({"title": "Only title"})

        assert projection.title == "Only title"
        assert projection.description == ""
        assert projection.date is None
        assert projection.formatted_date == ""
        assert projection.slug == ""
        assert projection.path_slug is None
        assert projection.tags == ()
        assert projection.image is None

    def test_wrongly_typed_fields_count_as_absent(self):
        projection = normalize({"title": 123, "description": ["a"], "date": None, "slug": {"x": 1}})

        assert projection.title == ""
        assert projection.description == ""
        assert projection.date is None
        assert projection.slug == ""

    def test_blank_date_is_none(self):
        assert normalize({"date": "   "}).date is None

    def test_blank_image_is_none(self):
        assert normalize({"image": "  "}).image is None

    def test_unknown_fields_ignored(self):
        projection = normalize({"title": "T", "author": "someone"})
        assert projection.title == "T"


# ============================================================================
# Record shapes
# ============================================================================


class TestRecordShapes:
    def test_attribute_object(self):
        record = SimpleNamespace(title=" T ", slug=" s ", date="2024-01-15", description=" D ")
        projection = normalize(record)

        assert projection.title == "T"
        assert projection.slug == "s"
        assert projection.description == "D"

    def test_source_record_model(self):
        record = SourceRecord(title=" T ", tags=[" a "])
        projection = normalize(record)

        assert projection.title == "T"
        assert projection.tags == ("a",)

    def test_source_record_coerces_bad_types(self):
        record = SourceRecord.model_validate({"title": 5, "tags": "not-a-list"})

        assert record.title is None
        assert record.tags is None


# ============================================================================
# Dates
# ============================================================================


class TestDates:
    def test_formatted_date(self, full_record):
        assert normalize(full_record).formatted_date == "January 15, 2024"

    def test_datetime_string(self):
        assert normalize({"date": "2024-03-05T10:30:00Z"}).formatted_date == "March 5, 2024"

    def test_unparseable_date_keeps_raw_value(self):
        projection = normalize({"date": " not-a-date "})

        assert projection.date == "not-a-date"
        assert projection.formatted_date == ""

    def test_custom_formatter(self):
        projection = normalize({"date": "2024-01-15"}, date_formatter=lambda raw: f"on {raw}")
        assert projection.formatted_date == "on 2024-01-15"


# ============================================================================
# Path slug
# ============================================================================


class TestPathSlug:
    def test_simple_slug(self, full_record):
        assert normalize(full_record).path_slug == "/articles/test-article"

    def test_empty_slug_has_no_path(self):
        assert normalize({"slug": "   "}).path_slug is None

    def test_special_characters_are_encoded(self):
        projection = normalize({"slug": "test & article with spaces & symbols!"})
        assert projection.path_slug == "/articles/test%20%26%20article%20with%20spaces%20%26%20symbols%21"

    def test_slash_in_slug_is_encoded(self):
        assert encode_path_slug("a/b") == "/articles/a%2Fb"

    def test_round_trip(self):
        slug = "test & article with spaces & symbols!"
        projection = normalize({"slug": f"  {slug}  "})

        assert decode_path_slug(projection.path_slug) == slug

    def test_round_trip_unicode(self):
        slug = "café crème ünïcødé"
        assert decode_path_slug(normalize({"slug": slug}).path_slug) == slug

    def test_custom_collection(self):
        projection = normalize({"slug": "x"}, collection="notes")
        assert projection.path_slug == "/notes/x"
        assert decode_path_slug(projection.path_slug, collection="notes") == "x"

    def test_decode_rejects_foreign_prefix(self):
        with pytest.raises(ValueError):
            decode_path_slug("/projects/x")

    def test_build_route(self):
        assert build_route("articles", "abc") == "/articles/abc"
        assert build_route("/articles/", "abc") == "/articles/abc"


# ============================================================================
# Tags
# ============================================================================


class TestTags:
    def test_tags_trimmed_and_empties_dropped(self, full_record):
        assert normalize(full_record).tags == ("python", "web")

    def test_non_string_tags_dropped(self):
        assert normalize({"tags": ["a", 1, None, " b "]}).tags == ("a", "b")

    def test_bare_string_is_not_a_tag_list(self):
        assert normalize({"tags": "a, b"}).tags == ()

    def test_tag_with_inner_comma_is_kept_whole(self):
        assert normalize({"tags": [" a, b "]}).tags == ("a, b",)


# ============================================================================
# Idempotence
# ============================================================================


class TestIdempotence:
    def test_full_record(self, full_record):
        once = normalize(full_record)
        assert normalize(once) == once

    def test_partial_record(self):
        once = normalize({"title": " T ", "date": "garbage", "tags": [" x "]})
        assert normalize(once) == once

    def test_empty_record(self):
        once = normalize({})
        assert normalize(once) == once

    def test_special_slug(self):
        once = normalize({"slug": "test & article with spaces & symbols!"})
        twice = normalize(once)

        assert twice == once
        assert twice.path_slug == once.path_slug

    def test_to_dict_normalizes_to_same(self, full_record):
        once = normalize(full_record)
        assert normalize(once.to_dict()) == once
