from pathlib import Path
import pytest
from domain_checker.domains import (
    DomainSourceError,
    deduplicate_root_domains,
    extract_domains,
    hostname_of,
    load_domains_file,
)


def make_sites(root: Path) -> Path:
    sites = root / "sites"
    (sites / "news").mkdir(parents=True)
    (sites / "shops").mkdir()
    (sites / "news" / "daily.js").write_text(
        "/**\n * Daily news\n * @domain daily.example.com\n * @url https://www.daily.example.com/feed\n */\n",
        encoding="utf-8",
    )
    (sites / "shops" / "store.py").write_text(
        '"""\nStore scraper\n\n@domain store.example.co.uk\n"""\n',
        encoding="utf-8",
    )
    (sites / "shops" / "notes.txt").write_text("@domain ignored.example\n", encoding="utf-8")
    return sites


def test_extract_all_categories(tmp_path: Path):
    sites = make_sites(tmp_path)

    domains = extract_domains(sites)

    assert domains == ["daily.example.com", "www.daily.example.com", "store.example.co.uk"]


def test_extract_selected_category(tmp_path: Path):
    sites = make_sites(tmp_path)

    assert extract_domains(sites, ["shops"]) == ["store.example.co.uk"]


def test_unknown_category_raises(tmp_path: Path):
    sites = make_sites(tmp_path)

    with pytest.raises(DomainSourceError):
        extract_domains(sites, ["nope"])


def test_missing_sites_dir_raises(tmp_path: Path):
    with pytest.raises(DomainSourceError):
        extract_domains(tmp_path / "missing")


def test_hostname_of_handles_urls_and_ports():
    assert hostname_of("https://WWW.Example.com:8443/path?q=1") == "www.example.com"
    assert hostname_of("example.com:80") == "example.com"
    assert hostname_of("example.com.") == "example.com"
    assert hostname_of("") is None


def test_deduplicate_root_domains_keeps_first_order():
    domains = [
        "www.daily.example.com",
        "daily.example.com",
        "shop.example.co.uk",
        "example.co.uk",
        "other.org",
    ]

    assert deduplicate_root_domains(domains) == ["example.com", "example.co.uk", "other.org"]


def test_load_domains_file_skips_comments(tmp_path: Path):
    f = tmp_path / "domains.txt"
    f.write_text("# list\nexample.com\n\nother.org  # trailing\n", encoding="utf-8")

    assert load_domains_file(f) == ["example.com", "other.org"]


def test_load_domains_file_missing_raises(tmp_path: Path):
    with pytest.raises(DomainSourceError):
        load_domains_file(tmp_path / "missing.txt")


def test_malformed_annotation_is_skipped(tmp_path: Path):
    sites = tmp_path / "sites"
    sites.mkdir()
    (sites / "broken.js").write_text(
        "// @url https://[broken/\n// @domain fine.example.com\n",
        encoding="utf-8",
    )

    assert extract_domains(sites) == ["fine.example.com"]
    assert hostname_of("https://[broken/") is None


def test_load_domains_file_not_utf8_raises(tmp_path: Path):
    f = tmp_path / "domains.txt"
    f.write_bytes(b"\xff\xfe bad\n")

    with pytest.raises(DomainSourceError):
        load_domains_file(f)
