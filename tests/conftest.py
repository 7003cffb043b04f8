import pytest

from pqc_checker.browser import PageCapture
from pqc_checker.exceptions import NavigationError
from pqc_checker.security_state import SecurityStateRecord


def make_event(security_state="secure", **cert):
    """Build a Security.visibleSecurityStateChanged payload."""
    state = {"securityState": security_state, "securityStateIssueIds": []}
    if cert:
        state["certificateSecurityState"] = cert
    return {"visibleSecurityState": state}


PQC_EVENT = make_event(
    protocol="TLS 1.3",
    keyExchange="",
    keyExchangeGroup="X25519MLKEM768",
    cipher="AES_128_GCM",
    subjectName="pq.example.com",
    issuer="Test CA",
    validFrom=1704067200,
    validTo=1735689599,
)

CLASSICAL_EVENT = make_event(
    protocol="TLS 1.2",
    keyExchange="ECDHE_RSA",
    keyExchangeGroup="X25519",
    cipher="AES_256_GCM",
    subjectName="classic.example.com",
    issuer="Other CA",
    validFrom=1704067200,
    validTo=1735689599,
)


class FakeSession:
    """Stands in for BrowserSession: maps URL -> event dict or exception."""

    def __init__(self, pages, server="nginx"):
        self.pages = pages
        self.server = server
        self.visited = []

    def capture(self, url):
        self.visited.append(url)
        page = self.pages[url]
        if isinstance(page, Exception):
            raise page
        return PageCapture(
            url=url,
            security_state=SecurityStateRecord.from_event(page),
            server_header=self.server,
        )


@pytest.fixture
def fake_session():
    return FakeSession({
        "https://pq.example.com": PQC_EVENT,
        "https://classic.example.com": CLASSICAL_EVENT,
        "https://down.example.com": NavigationError(
            "https://down.example.com", "net::ERR_NAME_NOT_RESOLVED at https://down.example.com"
        ),
    })
