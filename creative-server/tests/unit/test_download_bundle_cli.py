import importlib.util
import json
from pathlib import Path

import pytest

from apparel_studio.interfaces.http.responses import content_disposition

SCRIPT_PATH = Path(__file__).resolve().parents[3] / "scripts" / "download_bundle.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("download_bundle", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_rfc5987_filename_wins_and_keeps_non_ascii_titles(cli):
    header = content_disposition("Été_Drop_Bundle.zip")

    assert cli.filename_from_disposition(header, "fallback.zip") == "Été_Drop_Bundle.zip"


def test_quoted_filename_is_used_without_extended_parameter(cli):
    header = 'attachment; filename="Summer_Drop_Bundle.zip"'

    assert cli.filename_from_disposition(header, "fallback.zip") == "Summer_Drop_Bundle.zip"


@pytest.mark.parametrize("header", [None, "", "attachment", 'attachment; filename=""'])
def test_missing_filename_falls_back(cli, header):
    assert cli.filename_from_disposition(header, "o-1_Bundle.zip") == "o-1_Bundle.zip"


def test_fetch_bundle_defaults_to_order_id_name(cli, monkeypatch):
    monkeypatch.setattr(cli, "http_request", lambda url, payload=None, headers=None, timeout=30: (200, {}, b"zip"))

    assert cli.fetch_bundle("http://studio.test", "token", "o-1", timeout=5) == ("o-1_Bundle.zip", b"zip")


def test_fetch_bundle_failure_exits(cli, monkeypatch):
    monkeypatch.setattr(
        cli,
        "http_request",
        lambda url, payload=None, headers=None, timeout=30: (500, {}, b'{"detail": "Bundling failed"}'),
    )

    with pytest.raises(SystemExit, match="download failed: 500"):
        cli.fetch_bundle("http://studio.test", "token", "o-1", timeout=5)


def test_main_logs_in_and_saves_the_bundle(cli, monkeypatch, tmp_path):
    calls = []

    def fake_request(url, payload=None, headers=None, timeout=30):
        calls.append((url, payload, headers))
        if url.endswith("/api/auth/login"):
            return 200, {}, json.dumps({"access_token": "tok"}).encode()
        return 200, {"content-disposition": content_disposition("Été_Drop_Bundle.zip")}, b"PK-archive"

    monkeypatch.setattr(cli, "http_request", fake_request)
    monkeypatch.setattr(
        "sys.argv",
        ["download_bundle.py", "o-1", "--server", "http://studio.test/", "--output-dir", str(tmp_path)],
    )

    cli.main()

    saved = tmp_path / "Été_Drop_Bundle.zip"
    assert saved.read_bytes() == b"PK-archive"
    assert not list(tmp_path.glob("*.part"))
    assert calls[0][0] == "http://studio.test/api/auth/login"
    assert calls[1][0] == "http://studio.test/api/orders/o-1/bundle"
    assert calls[1][2] == {"Authorization": "Bearer tok"}
