import pytest

from skuidsync.errors import ManifestParseError
from skuidsync.models import (
    CATEGORY_NAMES,
    Category,
    DeployPayload,
    DeployResult,
    Record,
    RetrieveMetadata,
    RetrieveRequest,
)


class TestCategory:
    def test_closed_set(self):
        assert CATEGORY_NAMES == {"datasources", "pages", "apps", "profiles", "themes"}

    def test_selection_keys(self):
        assert {c.value: c.selection_key for c in Category} == {
            "datasources": "dataSources",
            "pages": "pages",
            "apps": "apps",
            "profiles": "profiles",
            "themes": "themes",
        }

    @pytest.mark.parametrize("path, expected", [
        ("pages/app1_Home.json", Category.PAGES),
        ("datasources/db.json", Category.DATA_SOURCES),
        ("pages/nested/x.json", Category.PAGES),
        ("readme.txt", None),
        ("pages", None),
        ("Pages/x.json", None),
        ("dataSources/x.json", None),
        ("other/pages/x.json", None),
    ])
    def test_from_path(self, path, expected):
        assert Category.from_path(path) == expected


class TestRecord:
    def test_file_basename(self):
        assert Record(name="Home", module="app1").file_basename() == "app1_Home"
        assert Record(name="Home").file_basename() == "Home"
        assert Record(name="Home", module="app1").body_filename() == "app1_Home.xml"

    def test_to_dict_omits_empty_master_page(self):
        data = Record(name="Home").to_dict()
        assert "masterPageUniqueId" not in data
        assert data["composerSettings"] is None
        assert "body" not in data

    def test_to_dict_with_body(self, sample_record):
        assert sample_record.to_dict(include_body=True)["body"] == sample_record.body
        assert "body" not in Record(name="x").to_dict(include_body=True)

    def test_without_body(self, sample_record):
        clone = sample_record.without_body()
        assert clone.body == ""
        assert clone.name == sample_record.name
        assert sample_record.body != ""

    def test_from_dict_defaults(self):
        record = Record.from_dict({"name": "Home"})
        assert record.module == ""
        assert record.max_auto_saves == 0
        assert record.is_master_page is False
        assert record.composer_settings is None

    def test_from_dict_reads_service_names(self):
        record = Record.from_dict({
            "name": "Home",
            "uniqueId": "u1",
            "type": "desktop",
            "module": "app1",
            "maxAutoSaves": 5,
            "masterPageUniqueId": "m",
            "isMasterPage": True,
            "composerSettings": {"k": "v"},
        })
        assert record.unique_id == "u1"
        assert record.type == "desktop"
        assert record.max_auto_saves == 5
        assert record.master_page_unique_id == "m"
        assert record.is_master_page is True
        assert record.composer_settings == {"k": "v"}

    @pytest.mark.parametrize("data", [
        [],
        "text",
        None,
        {"name": 1},
        {"maxAutoSaves": "ten"},
        {"maxAutoSaves": True},
        {"isMasterPage": "yes"},
    ])
    def test_from_dict_rejects_bad_data(self, data):
        with pytest.raises(ManifestParseError):
            Record.from_dict(data)

    def test_equality(self, sample_record):
        assert sample_record == Record.from_dict(sample_record.to_dict(include_body=True))
        assert sample_record != sample_record.without_body()


class TestRetrieveMetadata:
    def test_empty_mappings_omitted(self):
        metadata = RetrieveMetadata(pages={"Home": "p1"}, data_sources={"DB": "d1"})
        assert metadata.to_dict() == {"dataSources": {"DB": "d1"}, "pages": {"Home": "p1"}}

    def test_request_body(self):
        request = RetrieveRequest(RetrieveMetadata(themes={"Dark": "t1"}))
        assert request.to_dict() == {"metadata": {"themes": {"Dark": "t1"}}}

    def test_from_dict(self):
        metadata = RetrieveMetadata.from_dict({"apps": {"Sales": "a1"}, "profiles": {"Admin": "p"}})
        assert metadata.for_category(Category.APPS) == {"Sales": "a1"}
        assert metadata.for_category("profiles") == {"Admin": "p"}
        assert not metadata.is_empty()
        assert RetrieveMetadata().is_empty()

    def test_request_from_dict(self):
        request = RetrieveRequest.from_dict({"metadata": {"pages": {"Home": "p1"}}})
        assert request.metadata.pages == {"Home": "p1"}

    def test_from_records_skips_records_without_id(self):
        records = [Record(name="Home", unique_id="p1"), Record(name="Draft"), Record(unique_id="x")]
        metadata = RetrieveMetadata.from_records(Category.PAGES, records)
        assert metadata.to_dict() == {"pages": {"Home": "p1"}}


class TestDeploy:
    def test_payload_carries_bodies(self):
        payload = DeployPayload.from_records([Record(name="Home", module="app1", body="<xml/>")])
        data = payload.to_dict()
        assert data["changes"][0]["body"] == "<xml/>"
        assert data["deletions"] == []
        assert not payload.is_empty()
        assert DeployPayload().is_empty()

    def test_result_from_dict(self):
        result = DeployResult.from_dict({
            "orgName": "acme", "success": False, "upsertErrors": ["bad page"],
        })
        assert result.org_name == "acme"
        assert result.success is False
        assert result.errors == ["bad page"]

    def test_result_omits_empty_errors(self):
        assert DeployResult("acme", True).to_dict() == {"orgName": "acme", "success": True}
