import logging
import re
from pathlib import Path
from urllib.parse import urlparse
import tldextract

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = {".js", ".mjs", ".ts", ".py"}

# `@domain example.com` or `@url https://www.example.com/path` inside a comment
_ANNOTATION_RE = re.compile(r"@(domain|url)\s+(\S+)")

# Offline: use the bundled public suffix snapshot, never fetch it
_extract = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())


class DomainSourceError(Exception):
    """The list of domains to check could not be built."""


def extract_domains(sites_dir: str | Path, categories: list[str] | None = None) -> list[str]:
    """
    Collect annotated domains from source files under `sites_dir`.

    A file's category is the first directory below `sites_dir`. With
    `categories` given, only those directories are scanned. Order of first
    appearance is kept; duplicates are not removed here.
    """
    root = Path(sites_dir)
    if not root.is_dir():
        raise DomainSourceError(f"Sites directory not found: {root}")

    if categories:
        dirs = []
        for name in categories:
            d = root / name
            if not d.is_dir():
                raise DomainSourceError(f"Unknown category: {name}")
            dirs.append(d)
    else:
        dirs = [root]

    domains: list[str] = []
    for d in dirs:
        for path in sorted(d.rglob("*")):
            if not path.is_file() or path.suffix not in SOURCE_SUFFIXES:
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise DomainSourceError(f"Cannot read {path}: {e}") from e
            for _, value in _ANNOTATION_RE.findall(text):
                host = hostname_of(value)
                if host:
                    domains.append(host)

    logger.debug("Extracted %d annotated domains from %s", len(domains), root)
    return domains


def load_domains_file(path: str | Path) -> list[str]:
    """One domain per line; blank lines and `#` comments are skipped."""
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DomainSourceError(f"Cannot read domains file {p}: {e}") from e

    domains = []
    for ln in raw.splitlines():
        ln = ln.split("#", 1)[0].strip()
        if ln:
            domains.append(ln)
    return domains


def hostname_of(value: str) -> str | None:
    """
    Bare lower-cased hostname from a host, host:port or URL string.
    None when nothing usable can be parsed (e.g. an unbalanced IPv6 bracket).
    """
    value = value.strip().strip("\"'`,;")
    if "://" not in value:
        value = f"//{value}"
    try:
        host = urlparse(value).hostname
    except ValueError:
        logger.debug("Skipping malformed host %r", value)
        return None
    return host.rstrip(".") if host else None


def root_domain(host: str) -> str:
    """
    Registrable domain for a hostname, e.g. www.shop.example.co.uk ->
    example.co.uk. Hosts without a public suffix (IPs, localhost) pass through.
    """
    ext = _extract(host)
    return ext.top_domain_under_public_suffix or host


def deduplicate_root_domains(domains: list[str]) -> list[str]:
    seen = set()
    unique = []
    for d in domains:
        host = hostname_of(d)
        if not host:
            continue
        root = root_domain(host)
        if root not in seen:
            seen.add(root)
            unique.append(root)
    return unique
