import asyncio
import errno
import os
import socket
import ssl
import aiohttp
from .results import DomainStatus

# OS-level errnos that mean nothing is listening (or nothing can be reached)
# at the resolved address.
REFUSED_ERRNOS = {
    errno.ECONNREFUSED,
    errno.EHOSTUNREACH,
}

# asyncio folds per-address connect errors into one OSError with no errno;
# only the message says what happened.
REFUSED_MESSAGES = tuple(os.strerror(e) for e in sorted(REFUSED_ERRNOS))


def failure_kind(exc: BaseException) -> DomainStatus | None:
    """
    Map a transport-level exception to a NetworkFailure kind.

    Returns None for exceptions that are not network failures; the caller
    should let those propagate.
    """
    if isinstance(exc, asyncio.TimeoutError):
        return DomainStatus.TIMEOUT

    if isinstance(exc, aiohttp.ClientConnectorCertificateError):
        return DomainStatus.INVALID_SSL
    if isinstance(exc, ssl.SSLCertVerificationError):
        return DomainStatus.INVALID_SSL

    if isinstance(exc, aiohttp.ClientConnectorError):
        return _refused_or_unreachable(exc.os_error)
    if isinstance(exc, OSError):
        return _refused_or_unreachable(exc)

    if isinstance(exc, aiohttp.ClientError):
        return DomainStatus.UNREACHABLE

    return None


def _refused_or_unreachable(err: OSError | None) -> DomainStatus:
    if isinstance(err, (ConnectionRefusedError, socket.gaierror)):
        return DomainStatus.REFUSED
    if err is None:
        return DomainStatus.UNREACHABLE
    if err.errno in REFUSED_ERRNOS:
        return DomainStatus.REFUSED
    if err.errno is None and any(m in str(err) for m in REFUSED_MESSAGES):
        return DomainStatus.REFUSED
    return DomainStatus.UNREACHABLE
