import logging
from dataclasses import dataclass, field
from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Response, sync_playwright

from pqc_checker.exceptions import NavigationError
from pqc_checker.security_state import SecurityStateRecord

logger = logging.getLogger(__name__)

CHROMIUM_ARGS = [
    "--disable-gpu",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--ignore-certificate-errors",
    "--ignore-certificate-errors-spki-list",
]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass
class BrowserConfig:
    headless: bool = True
    timeout_ms: int = 30_000
    settle_ms: int = 5_000
    wait_until: str = "networkidle"
    user_agent: str = DEFAULT_USER_AGENT
    extra_headers: dict[str, str] = field(default_factory=lambda: {"Accept-Language": "en-US,en;q=0.9"})
    launch_args: list[str] = field(default_factory=lambda: list(CHROMIUM_ARGS))


@dataclass
class PageCapture:
    url: str
    security_state: SecurityStateRecord
    server_header: Optional[str] = None
    # visibleSecurityStateChanged events seen, only the last is reported
    notifications: int = 1


class BrowserSession:
    """
    Drives Chromium through Playwright and reads TLS details over CDP.

    Use as a context manager; one browser process serves all URLs, each URL
    gets a fresh browser context.
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        self.config = config or BrowserConfig()
        self._playwright = None
        self._browser = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def start(self):
        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch(
                headless=self.config.headless,
                args=self.config.launch_args,
            )
        except PlaywrightError:
            self._playwright.stop()
            self._playwright = None
            raise
        logger.debug(f"Chromium launched (headless={self.config.headless})")

    def close(self):
        if self._browser:
            try:
                self._browser.close()
            except PlaywrightError as e:
                logger.warning(f"Failed to close browser: {e}")
            self._browser = None
        if self._playwright:
            self._playwright.stop()
            self._playwright = None

    def capture(self, url: str) -> PageCapture:
        """
        Navigate to a URL and return the last security state it reported.

        Raises NavigationError on load failures or when Chrome never emits
        a security state for the page.
        """
        if not self._browser:
            raise RuntimeError("BrowserSession is not started")

        snapshots: list[dict] = []
        server_headers: list[str] = []

        def on_response(response: Response):
            server = response.headers.get("server")
            if server:
                server_headers.append(server)

        context = self._browser.new_context(
            ignore_https_errors=True,
            user_agent=self.config.user_agent,
            extra_http_headers=self.config.extra_headers,
        )
        try:
            page = context.new_page()
            page.set_default_navigation_timeout(self.config.timeout_ms)
            page.set_default_timeout(self.config.timeout_ms)

            cdp = context.new_cdp_session(page)
            cdp.on("Security.visibleSecurityStateChanged", snapshots.append)
            cdp.send("Security.enable")

            page.on("response", on_response)

            logger.info(f"Navigating to {url}")
            page.goto(url, wait_until=self.config.wait_until, timeout=self.config.timeout_ms)

            # Security events can trail the load event
            page.wait_for_timeout(self.config.settle_ms)
        except PlaywrightError as e:
            raise NavigationError(url, e.message) from e
        finally:
            try:
                context.close()
            except PlaywrightError as e:
                logger.debug(f"Failed to close context for {url}: {e}")

        if not snapshots:
            raise NavigationError(url, "No security state was reported for the page")

        logger.debug(f"{url}: {len(snapshots)} security state notification(s)")
        return PageCapture(
            url=url,
            security_state=SecurityStateRecord.from_event(snapshots[-1]),
            server_header=server_headers[-1] if server_headers else None,
            notifications=len(snapshots),
        )
