# File: tests/test_aggregator.py
import dataclasses

import pytest

from schema_harvest.aggregator import NO_SCHEMA_MESSAGE, ResultRecord, ResultSet


def test_record_row_puts_primary_fields_first():
    record = ResultRecord.success("http://a", {"name": "x", "@type": "Product"})
    row = record.as_row()
    assert list(row)[:3] == ["sourceUrl", "schemaFound", "errorMessage"]
    assert row == {
        "sourceUrl": "http://a",
        "schemaFound": True,
        "errorMessage": "",
        "name": "x",
        "@type": "Product",
    }


def test_record_is_immutable():
    fields = {"name": "x"}
    record = ResultRecord.success("http://a", fields)
    fields["name"] = "changed"
    assert record.fields["name"] == "x"
    with pytest.raises(TypeError):
        record.fields["name"] = "y"  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.source_url = "http://b"  # type: ignore[misc]


def test_flattened_key_cannot_override_primary_field():
    record = ResultRecord.success("http://a", {"sourceUrl": "http://spoof"})
    assert record.as_row()["sourceUrl"] == "http://a"


def test_result_set_keeps_insertion_order():
    results = ResultSet()
    results.add("Product", ResultRecord.success("http://1", {}))
    results.add_crawl_error("http://2", "boom")
    results.add("Product", ResultRecord.success("http://3", {}))
    results.add_no_schema("http://4")

    assert results.types() == ["Product", "CrawlError", "NoSchema"]
    assert [r.source_url for r in results.records("Product")] == ["http://1", "http://3"]
    assert results.counts() == {"Product": 2, "CrawlError": 1, "NoSchema": 1}
    assert results.total == len(results) == 4


def test_error_records_carry_messages():
    results = ResultSet()
    results.add_crawl_error("http://a", "timeout")
    results.add_parse_error("http://b", "Expecting value")
    results.add_no_schema("http://c")

    crawl = results.records("CrawlError")[0]
    parse = results.records("ParseError")[0]
    none = results.records("NoSchema")[0]
    assert (crawl.schema_found, crawl.error_message) == (False, "Crawl error: timeout")
    assert parse.error_message == "Parse error: Expecting value"
    assert none.error_message == NO_SCHEMA_MESSAGE
    assert "ParseError" in results
    assert "Product" not in results


def test_records_returns_copy():
    results = ResultSet()
    results.add_no_schema("http://a")
    results.records("NoSchema").clear()
    assert results.total == 1
