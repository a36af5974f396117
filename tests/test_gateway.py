"""Tests for the root host gateway and the response cache."""

from pathlib import Path

from imgsrc_client.services.cache import DirectoryResponseCache
from imgsrc_client.services.gateway import ApiGateway, encode_legacy_text, format_query
from tests.conftest import FakeTransport


def test_format_query_does_not_escape() -> None:
    assert format_query({"login": "a b", "passwd": "x&y"}) == "login=a b&passwd=x&y"
    assert format_query({}) == ""


def test_encode_legacy_text() -> None:
    assert encode_legacy_text("Trip") == "Trip"
    assert encode_legacy_text("Мир") == "%CC%E8%F0"


def test_cache_file_name_omits_passwords(tmp_path: Path) -> None:
    cache = DirectoryResponseCache(tmp_path / ".imgsrc")

    path = cache.path_for(
        "cli/info.php", {"login": "vasya", "passwd": "abc", "create_passwd": "x"}
    )

    assert path == tmp_path / ".imgsrc" / "cli-info.php_login-vasya.xml"


def test_gateway_writes_responses_to_cache(tmp_path: Path) -> None:
    transport = FakeTransport()
    transport.queue(b"<info/>")
    cache = DirectoryResponseCache(tmp_path / "cache")
    gateway = ApiGateway(transport, cache)

    body = gateway.call_get("cli/cats.php", {})

    assert body == b"<info/>"
    assert (tmp_path / "cache" / "cli-cats.php.xml").read_bytes() == b"<info/>"


def test_gateway_reads_cache_only_when_asked(tmp_path: Path) -> None:
    directory = tmp_path / "cache"
    directory.mkdir()
    (directory / "cli-cats.php.xml").write_bytes(b"cached")
    transport = FakeTransport()
    transport.queue(b"fresh")
    gateway = ApiGateway(transport, DirectoryResponseCache(directory))

    assert gateway.call_get("cli/cats.php", {}, use_cache=True) == b"cached"
    assert transport.calls == []
    assert gateway.call_get("cli/cats.php", {}) == b"fresh"


def test_cache_write_failure_is_ignored(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    transport = FakeTransport()
    transport.queue(b"<info/>")
    gateway = ApiGateway(transport, DirectoryResponseCache(blocker / "cache"))

    assert gateway.call_get("cli/cats.php", {}) == b"<info/>"


def test_gateway_root_host() -> None:
    gateway = ApiGateway(FakeTransport(host="imgsrc.test"))

    assert gateway.root_host == "imgsrc.test"
