import logging
import dns.asyncresolver
import dns.exception
from .settings import CheckConfig

logger = logging.getLogger(__name__)


class DnsChecker:
    """
    Answers one question per domain: does it resolve at all?

    Tries A first, then AAAA. Any DNS failure (NXDOMAIN, NoAnswer,
    NoNameservers, timeout) counts as "does not resolve" for that record type.
    """

    RECORD_TYPES = ("A", "AAAA")

    def __init__(self, config: CheckConfig, resolver: dns.asyncresolver.Resolver | None = None):
        self.lifetime = config.dns_timeout_s
        self.resolver = resolver or dns.asyncresolver.Resolver()

    async def is_resolvable(self, domain: str) -> bool:
        for rdtype in self.RECORD_TYPES:
            try:
                await self.resolver.resolve(domain, rdtype, lifetime=self.lifetime)
            except dns.exception.DNSException as e:
                logger.debug("Domain %s has no %s record: %s", domain, rdtype, type(e).__name__)
                continue
            logger.debug("Domain %s resolved via %s", domain, "IPv4" if rdtype == "A" else "IPv6")
            return True

        logger.debug("Domain %s is NOT resolvable", domain)
        return False
