import logging
from pathlib import Path
from dataclasses import dataclass, field, fields
from pydantic import BaseModel, ConfigDict
import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[1]

logger = logging.getLogger(__name__)


class PatternSettings(BaseModel):
    """
    Read-only phrase tables used to classify a response body.

    Matching is case-sensitive substring search, as the phrases are copied
    verbatim from the pages they identify.

    Override any table via the `patterns:` mapping in domain_check.yaml.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    placeholder: tuple[str, ...] = (
        "Welcome to nginx!",
        "This domain is parked",
        "Buy this domain",
        "Domain for sale",
        "Default PLESK Page",
    )
    waf: tuple[str, ...] = (
        "Attention Required! | Cloudflare",
        "Checking your browser before accessing",
        "DDOS protection by",
    )
    error_page: tuple[str, ...] = (
        "Error 521",
        "Error 522",
        "Error 523",
        "Error 524",
        "Error 525",
        "Service Temporarily Unavailable",
    )
    # Markup of Cloudflare's own error template
    cloudflare_wrapper: tuple[str, ...] = (
        'id="cf-wrapper"',
        'id="cf-error-details"',
    )
    cloudflare_identifier: tuple[str, ...] = (
        "Cloudflare Ray ID",
    )


DEFAULT_PATTERNS = PatternSettings()


@dataclass
class CheckConfig:
    """
    Central configuration for a domain check run.

    Values can be overridden via domain_check.yaml at the project root.
    """

    # Probe
    max_redirects: int = 5
    request_timeout_s: float = 10.0
    body_prefix_bytes: int = 8192
    user_agent: str = "Mozilla/5.0 (compatible; domain-checker/1.0)"
    verify_ssl: bool = True

    # DNS
    dns_timeout_s: float = 5.0

    # Domain source / output
    sites_dir: str = "sites"
    results_dir: str = "results"

    debug: bool = False

    patterns: PatternSettings = field(default_factory=PatternSettings)


def load_check_config(path: str | Path | None = None) -> CheckConfig:
    """
    Load CheckConfig from YAML if present; otherwise use defaults.

    By default, looks for `domain_check.yaml` at the project root.
    """

    if path is None:
        path = PROJECT_ROOT / "domain_check.yaml"

    path = Path(path)

    if not path.exists():
        logger.debug("[config] YAML not found at %s, using defaults", path)
        return CheckConfig()

    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}

    if not isinstance(data, dict):
        logger.warning("[config] Expected mapping in %s, got %s, using defaults", path, type(data))
        return CheckConfig()

    allowed_keys = {f.name for f in fields(CheckConfig)}
    filtered = {k: v for k, v in data.items() if k in allowed_keys}

    if "patterns" in filtered:
        filtered["patterns"] = PatternSettings(**(filtered["patterns"] or {}))

    return CheckConfig(**filtered)


def resolve_path(p: str | Path) -> Path:
    """Relative paths in the config are relative to the project root."""
    p = Path(p)
    if not p.is_absolute():
        p = PROJECT_ROOT / p
    return p
