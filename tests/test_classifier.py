# File: tests/test_classifier.py
import pytest

from schema_harvest.classifier import CRAWL_ERROR, NO_SCHEMA, PARSE_ERROR, UNKNOWN_TYPE, classify


@pytest.mark.parametrize(
    "block,expected",
    [
        ({"@type": "Product"}, "Product"),
        ({"@type": ["Article", "NewsArticle"]}, "Article"),
        ({}, UNKNOWN_TYPE),
        ({"@type": None}, UNKNOWN_TYPE),
        ({"@type": []}, UNKNOWN_TYPE),
        ({"@type": ""}, UNKNOWN_TYPE),
        ({"@type": 42}, "42"),
        ({"@type": True}, "true"),
        ({"@graph": [{"@type": "Organization"}]}, UNKNOWN_TYPE),
    ],
)
def test_classify(block, expected):
    assert classify(block) == expected


@pytest.mark.parametrize(
    "block",
    [
        {"@type": {"@id": "x"}},
        {"@type": [{"@id": "x"}, "Thing"]},
    ],
)
def test_object_type_is_compact_json(block):
    assert classify(block) == '{"@id":"x"}'


def test_sentinels_are_distinct_from_unknown():
    assert len({UNKNOWN_TYPE, NO_SCHEMA, PARSE_ERROR, CRAWL_ERROR}) == 4
