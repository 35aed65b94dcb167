import logging
import aiohttp
from .results import HttpResponse, NetworkFailure, ProbeOutcome
from .settings import CheckConfig
from .utils import failure_kind

logger = logging.getLogger(__name__)

DEFAULT_HTTP_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


class HttpProber:
    """
    Single-request fetcher built on aiohttp.

    - Never follows redirects itself; the classifier walks the chain
    - One overall timeout per request (CheckConfig.request_timeout_s)
    - Reads at most CheckConfig.body_prefix_bytes of the body
    - Transport errors come back as NetworkFailure instead of raising
    """
    name = "http"

    def __init__(self, session: aiohttp.ClientSession, config: CheckConfig):
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> ProbeOutcome:
        """
        Fetch a single URL.

        Returns:
            HttpResponse with status, lower-cased headers and body prefix,
            or NetworkFailure for timeouts, refused connections, bad
            certificates and other transport errors.
        Raises:
            Anything that is not a transport error, e.g. a malformed URL.
        """
        headers = {**DEFAULT_HTTP_HEADERS, "User-Agent": self.config.user_agent}
        timeout = aiohttp.ClientTimeout(total=self.config.request_timeout_s)

        try:
            async with self.session.get(
                url, headers=headers, timeout=timeout,
                allow_redirects=False, ssl=self.config.verify_ssl,
            ) as resp:
                body = await self._read_prefix(resp)
                logger.debug("Fetched %s: %s", url, resp.status)
                return HttpResponse(
                    status_code=resp.status,
                    headers={k.lower(): v for k, v in resp.headers.items()},
                    body=_decode(body, resp.charset),
                )
        except aiohttp.InvalidURL:
            raise
        except Exception as e:
            kind = failure_kind(e)
            if kind is None:
                raise
            logger.debug("Error fetching %s: %s (%s)", url, type(e).__name__, kind.value)
            return NetworkFailure(kind)

    async def _read_prefix(self, resp: aiohttp.ClientResponse) -> bytes:
        limit = self.config.body_prefix_bytes
        buf = bytearray()
        while len(buf) < limit:
            chunk = await resp.content.read(limit - len(buf))
            if not chunk:
                break
            buf.extend(chunk)
        return bytes(buf)


def _decode(body: bytes, charset: str | None) -> str:
    try:
        return body.decode(charset or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")
