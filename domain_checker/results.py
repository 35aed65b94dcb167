from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class DomainStatus(str, Enum):
    """Closed set of verdicts. Member order is the report order."""
    VALID = "VALID"
    PLACEHOLDER = "PLACEHOLDER"
    EMPTY_PAGE = "EMPTY_PAGE"
    JS_ONLY = "JS_ONLY"
    CLIENT_ERROR = "CLIENT_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    INVALID_SSL = "INVALID_SSL"
    EXPIRED = "EXPIRED"
    UNREACHABLE = "UNREACHABLE"
    REFUSED = "REFUSED"
    TIMEOUT = "TIMEOUT"
    REDIRECT_LOOP = "REDIRECT_LOOP"
    PROTECTED = "PROTECTED"
    UNKNOWN = "UNKNOWN"


STATUS_ICONS: Mapping[DomainStatus, str] = {
    DomainStatus.VALID: "✅",
    DomainStatus.PLACEHOLDER: "⚠️",
    DomainStatus.EMPTY_PAGE: "📄",
    DomainStatus.JS_ONLY: "📜",
    DomainStatus.CLIENT_ERROR: "🚫",
    DomainStatus.SERVER_ERROR: "🔥",
    DomainStatus.INVALID_SSL: "🔒",
    DomainStatus.EXPIRED: "❌",
    DomainStatus.UNREACHABLE: "🌐",
    DomainStatus.REFUSED: "⛔",
    DomainStatus.TIMEOUT: "⏱️",
    DomainStatus.REDIRECT_LOOP: "🔁",
    DomainStatus.PROTECTED: "🛡️",
    DomainStatus.UNKNOWN: "❓",
}

# Low-level fetch failures. Each one is also a terminal DomainStatus.
FAILURE_KINDS = frozenset({
    DomainStatus.TIMEOUT,
    DomainStatus.REFUSED,
    DomainStatus.INVALID_SSL,
    DomainStatus.UNREACHABLE,
})


def icon_for(status: DomainStatus) -> str:
    return STATUS_ICONS.get(status, STATUS_ICONS[DomainStatus.UNKNOWN])


@dataclass(frozen=True)
class DomainResult:
    """
    Verdict for one probed domain.

    Fields:
        domain      : Hostname as supplied by the domain source.
        status      : Final DomainStatus.
        resolvable  : True if the A or AAAA lookup succeeded.
        accessible  : Derived, True only when status is VALID.
    """
    domain: str
    status: DomainStatus
    resolvable: bool
    accessible: bool = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "accessible", self.status is DomainStatus.VALID)


@dataclass(frozen=True)
class NetworkFailure:
    """Fetch failed below HTTP. `kind` is one of FAILURE_KINDS."""
    kind: DomainStatus

    def __post_init__(self):
        if self.kind not in FAILURE_KINDS:
            raise ValueError(f"not a network failure kind: {self.kind}")


@dataclass(frozen=True)
class HttpResponse:
    """
    A response that reached the HTTP layer.

    Fields:
        status_code : Numeric HTTP status.
        headers     : Response headers with lower-cased names.
        body        : Decoded prefix of the body, capped by body_prefix_bytes.
    """
    status_code: int
    headers: Mapping[str, str]
    body: str = ""

    @property
    def location(self) -> str | None:
        return self.headers.get("location") or None

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400 and self.location is not None


ProbeOutcome = NetworkFailure | HttpResponse
