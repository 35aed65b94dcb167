from domain_checker.results import HttpResponse, NetworkFailure, DomainStatus


class FakeDns:
    """Resolves every domain except the ones listed in `dead`."""

    def __init__(self, dead=()):
        self.dead = set(dead)
        self.calls = []

    async def is_resolvable(self, domain: str) -> bool:
        self.calls.append(domain)
        return domain not in self.dead


class FakeProber:
    """
    Serves scripted outcomes by URL. `routes` maps URL -> outcome, or a
    callable taking the URL for responses that depend on the request.
    """

    def __init__(self, routes=None, default=None):
        self.routes = routes or {}
        self.default = default
        self.calls = []

    async def fetch(self, url: str):
        self.calls.append(url)
        route = self.routes.get(url, self.default)
        if callable(route):
            route = route(url)
        if isinstance(route, Exception):
            raise route
        if route is None:
            return NetworkFailure(DomainStatus.UNREACHABLE)
        return route


def ok(body: str = "<html><body>Welcome</body></html>", status: int = 200) -> HttpResponse:
    return HttpResponse(status_code=status, headers={"content-type": "text/html"}, body=body)


def redirect(location: str, status: int = 302) -> HttpResponse:
    return HttpResponse(status_code=status, headers={"location": location}, body="")
