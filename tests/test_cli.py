import json
import logging

import pytest

from skuidsync import cli
from skuidsync.errors import StorageError
from skuidsync.models.record import Record
from skuidsync.utils.persistence.entity_store import write_at_rest

from .conftest import build_zip


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("SKUID_CONFIG", str(tmp_path / "config.json"))
    for name in ("SKUID_DIR", "SKUID_MODULE"):
        monkeypatch.delenv(name, raising=False)
    yield
    root = logging.getLogger("skuidsync")
    for handler in [h for h in root.handlers if isinstance(h, logging.FileHandler)]:
        root.removeHandler(handler)
        handler.close()


def test_retrieve_writes_categories(tmp_path):
    archive = tmp_path / "retrieve.zip"
    archive.write_bytes(build_zip([
        ("pages/app1_Home.json", '{"name": "Home", "module": "app1"}'),
        ("pages/app1_Home.xml", "<xml/>"),
        ("readme.txt", "skip me"),
    ]))
    out = tmp_path / "out"

    assert cli.main(["retrieve", str(archive), "--dir", str(out)]) == 0

    assert (out / "pages" / "app1_Home.xml").read_text() == "<xml/>"
    assert not (out / "readme.txt").exists()


def test_retrieve_with_workers(tmp_path):
    archives = []
    for i in range(3):
        path = tmp_path / f"part{i}.zip"
        path.write_bytes(build_zip([(f"themes/t{i}.json", "{}")]))
        archives.append(str(path))
    out = tmp_path / "out"

    assert cli.main(["retrieve", *archives, "--dir", str(out), "--workers", "2"]) == 0
    assert sorted(p.name for p in (out / "themes").iterdir()) == ["t0.json", "t1.json", "t2.json"]


def test_retrieve_missing_archive(tmp_path):
    assert cli.main(["retrieve", str(tmp_path / "missing.zip")]) == 1


def test_retrieve_corrupt_archive(tmp_path):
    archive = tmp_path / "bad.zip"
    archive.write_bytes(b"garbage")
    assert cli.main(["retrieve", str(archive), "--dir", str(tmp_path / "out")]) == 1


def test_retrieve_rejects_non_integer_workers(tmp_path):
    (tmp_path / "config.json").write_text(json.dumps({"retrieve_workers": "four"}))
    archive = tmp_path / "retrieve.zip"
    archive.write_bytes(build_zip([("themes/t.json", "{}")]))
    out = tmp_path / "out"

    assert cli.main(["retrieve", str(archive), "--dir", str(out)]) == 1
    assert not (out / "themes").exists()


def test_config_update_rejects_wrongly_typed_value(tmp_path):
    assert cli.main(["--config", '{"retrieve_workers": "four"}']) == 1
    assert not (tmp_path / "config.json").exists()


def test_list(tmp_path, capsys):
    write_at_rest(Record(name="Home", module="app1", body="<xml/>"), str(tmp_path))

    assert cli.main(["list", "--dir", str(tmp_path), "--module", "app1"]) == 0
    assert "Home" in capsys.readouterr().out


def test_list_missing_directory(tmp_path):
    assert cli.main(["list", "--dir", str(tmp_path / "missing"), "--module", "app1"]) == 1


def test_package_to_file(tmp_path):
    pages = tmp_path / "pages"
    write_at_rest(Record(name="Home", module="app1", body="<xml/>"), str(pages))
    output = tmp_path / "deploy.json"

    assert cli.main(["package", "--dir", str(pages), "-m", "app1", "-o", str(output)]) == 0

    payload = json.loads(output.read_text())
    assert payload["changes"][0]["name"] == "Home"
    assert payload["changes"][0]["body"] == "<xml/>"


def test_config_update(tmp_path):
    assert cli.main(["--config", '{"module": "app1"}']) == 0
    assert json.loads((tmp_path / "config.json").read_text())["module"] == "app1"


def test_no_command():
    assert cli.main([]) == 1


def test_package_retrieve_request(tmp_path):
    pages = tmp_path / "pages"
    write_at_rest(Record(name="Home", unique_id="p1", module="app1", body="<xml/>"), str(pages))
    write_at_rest(Record(name="Draft", module="app1"), str(pages))
    output = tmp_path / "retrieve.json"

    assert cli.main(["package", "--dir", str(pages), "-m", "app1", "--request", "-o", str(output)]) == 0
    assert json.loads(output.read_text()) == {"metadata": {"pages": {"Home": "p1"}}}


def test_package_request_needs_a_category(tmp_path):
    store = tmp_path / "records"
    write_at_rest(Record(name="Dark", unique_id="t1"), str(store))

    assert cli.main(["package", "--dir", str(store), "--request"]) == 1
    assert cli.main(["package", "--dir", str(store), "--request", "--category", "themes"]) == 0


def test_report_success(tmp_path, capsys):
    results = tmp_path / "deploy-result.json"
    results.write_text(json.dumps([{"orgName": "acme", "success": True}]))

    assert cli.main(["report", str(results)]) == 0
    assert "acme" in capsys.readouterr().out


def test_report_failure_exits_non_zero(tmp_path, capsys):
    results = tmp_path / "deploy-result.json"
    results.write_text(json.dumps({"orgName": "acme", "success": False, "upsertErrors": ["bad page"]}))

    assert cli.main(["report", str(results)]) == 1
    assert "bad page" in capsys.readouterr().out


def test_report_rejects_non_result_json(tmp_path):
    results = tmp_path / "deploy-result.json"
    results.write_text("[1, 2]")
    assert cli.main(["report", str(results)]) == 1
    assert cli.main(["report", str(tmp_path / "missing.json")]) == 1


def test_retrieve_log_file(tmp_path):
    archive = tmp_path / "retrieve.zip"
    archive.write_bytes(build_zip([("themes/Dark.json", "{}")]))
    log_file = tmp_path / "retrieve.log"

    assert cli.main(["retrieve", str(archive), "--dir", str(tmp_path / "out"),
                     "--log-file", str(log_file)]) == 0

    for handler in logging.getLogger("skuidsync").handlers:
        handler.flush()
    assert "Extracting 1 archive(s)" in log_file.read_text()


def test_run_extraction_reports_uncreatable_directory(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")

    with pytest.raises(StorageError):
        cli.SkuidSync().run_extraction([], str(blocker / "out"))
