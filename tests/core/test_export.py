import pytest
from pydantic import ValidationError

from addenda.core.extender import annotation, metadata
from addenda.core.ids import extender_uuid, guid_to_uuid, is_uuid_this_domain, uuid_to_guid
from addenda.core.schema import ExternalRecord


def test_export_builds_canonical_record() -> None:
    m = metadata(id=7, entity_guid=42, owner_guid=3, name="color", value="blue", time_created=1230768000)
    rec = m.export()
    assert rec.uuid == "http://localhost/export/opendd/42/metadata/7/"
    assert rec.entity_uuid == "http://localhost/export/opendd/42/"
    assert rec.owner_uuid == "http://localhost/export/opendd/3/"
    assert rec.name == "color"
    assert rec.body == "blue"
    assert rec.type == "metadata"
    assert rec.published == "Thu, 01 Jan 2009 00:00:00 +0000"


def test_export_keeps_raw_value_representation() -> None:
    a = annotation(id=1, entity_guid=42, owner_guid=3, name="rating", value="05", time_created=0)
    assert a.value == 5
    assert a.export().body == "05"


def test_export_honours_site_url_and_iso_format() -> None:
    a = annotation(id=1, entity_guid=2, owner_guid=3, name="n", value="v", time_created=0)
    rec = a.export("https://example.org/", "iso")
    assert rec.uuid == "https://example.org/export/opendd/2/annotation/1/"
    assert rec.published == "1970-01-01T00:00:00+00:00"


def test_export_without_time_created_has_no_published() -> None:
    a = annotation(id=1, entity_guid=2, owner_guid=3, name="n", value="v")
    assert a.export().published is None


def test_export_is_side_effect_free() -> None:
    m = metadata(id=7, entity_guid=42, owner_guid=3, name="color", value="blue", time_created=0)
    before = m.as_dict()
    m.export()
    assert m.as_dict() == before


def test_record_json_roundtrip_is_canonical() -> None:
    rec = metadata(id=7, entity_guid=42, owner_guid=3, name="color", value="blue", time_created=0).export()
    text = rec.to_json()
    assert text.index('"body"') < text.index('"uuid"')  # keys sorted
    assert ExternalRecord.from_json(text) == rec


def test_record_attributes_exclude_body() -> None:
    rec = ExternalRecord(name="color", body="blue", type="metadata", published="2009-01-01")
    assert rec.get_attribute("type") == "metadata"
    assert rec.get_attribute("published") == "2009-01-01"
    assert rec.get_attribute("body") is None
    assert rec.attributes == {"name": "color", "published": "2009-01-01", "type": "metadata"}


def test_record_type_is_stripped_but_not_case_folded() -> None:
    assert ExternalRecord(name="n", type=" volatile ").type == "volatile"
    assert ExternalRecord(name="n", type="Volatile").type == "Volatile"
    assert ExternalRecord(name="n", type="").type is None


def test_record_keeps_additional_attributes() -> None:
    rec = ExternalRecord(type="metadata", name="color", body="blue", subtype="blog")
    assert rec.get_attribute("subtype") == "blog"
    assert rec.get_attribute("colour") is None
    assert rec.attributes == {"name": "color", "subtype": "blog", "type": "metadata"}
    back = ExternalRecord.from_json(rec.to_json())
    assert back.get_attribute("subtype") == "blog"
    assert back == rec


def test_record_requires_a_name() -> None:
    with pytest.raises(ValidationError):
        ExternalRecord(type="metadata", body="blue")


def test_uuid_helpers() -> None:
    assert guid_to_uuid(5, "https://a.test/") == "https://a.test/export/opendd/5/"
    assert extender_uuid(5, "annotation", 9, "https://a.test/") == "https://a.test/export/opendd/5/annotation/9/"
    assert uuid_to_guid("https://a.test/export/opendd/5/annotation/9/", "https://a.test/") == 5
    assert uuid_to_guid("https://b.test/export/opendd/5/", "https://a.test/") is None
    assert uuid_to_guid("https://a.test/export/opendd/x/", "https://a.test/") is None
    assert is_uuid_this_domain("https://a.test/export/opendd/5/", "https://a.test/") is True
    assert is_uuid_this_domain("", "https://a.test/") is False
