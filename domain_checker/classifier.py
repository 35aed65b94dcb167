import logging
from urllib.parse import urljoin
from .content import classify_content
from .results import DomainResult, DomainStatus, HttpResponse, NetworkFailure
from .settings import CheckConfig

logger = logging.getLogger(__name__)

# Cloudflare edge errors (web server down, timeout, unreachable origin, SSL)
CLOUDFLARE_EDGE_CODES = frozenset(range(521, 526))

PROTOCOLS = ("https", "http")


class DomainClassifier:
    """
    Turns a domain name into exactly one DomainResult.

    Collaborators are injected so they can be faked in tests:
        dns     : object with `async is_resolvable(domain) -> bool`
        prober  : object with `async fetch(url) -> ProbeOutcome`

    Network conditions never raise out of `classify`; they become statuses.
    Protocols are tried in order (HTTPS, then HTTP). Only an exception that
    escapes an attempt moves on to the next protocol. Mapped network failures
    (timeout, refused, bad certificate) are final for the domain.
    """

    def __init__(self, dns, prober, config: CheckConfig):
        self.dns = dns
        self.prober = prober
        self.config = config

    async def classify(self, domain: str) -> DomainResult:
        if not await self.dns.is_resolvable(domain):
            return DomainResult(domain, DomainStatus.EXPIRED, resolvable=False)

        status = await self._probe(domain)
        return DomainResult(domain, status, resolvable=True)

    async def _probe(self, domain: str) -> DomainStatus:
        for protocol in PROTOCOLS:
            try:
                return await self._follow(f"{protocol}://{domain}")
            except Exception as e:
                logger.debug("Exception checking %s://%s: %s", protocol, domain, e)
                continue

        return DomainStatus.UNREACHABLE

    async def _follow(self, url: str) -> DomainStatus:
        """Walk the redirect chain from `url` until something final happens."""
        visited: set[str] = set()
        redirects = 0

        while redirects < self.config.max_redirects:
            if url in visited:
                logger.debug("Redirect loop back to %s", url)
                return DomainStatus.REDIRECT_LOOP
            visited.add(url)

            outcome = await self.prober.fetch(url)

            if isinstance(outcome, NetworkFailure):
                return outcome.kind

            status = self.status_for_response(outcome)
            if status is not None:
                return status

            url = urljoin(url, outcome.location)
            redirects += 1
            logger.debug("Redirected to %s (%d/%d)", url, redirects, self.config.max_redirects)

        logger.debug("Gave up after %d redirects", redirects)
        return DomainStatus.REDIRECT_LOOP

    def status_for_response(self, resp: HttpResponse) -> DomainStatus | None:
        """Final status for a response, or None if it is a redirect to follow."""
        code = resp.status_code

        if resp.is_redirect:
            return None

        if code >= 500 or code in CLOUDFLARE_EDGE_CODES:
            return DomainStatus.SERVER_ERROR
        if code >= 400:
            return DomainStatus.CLIENT_ERROR

        status = classify_content(resp.body, self.config.patterns)
        logger.debug("Content of %d response classified as %s", code, status.value)
        return status
