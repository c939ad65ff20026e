"""
Playwright-managed Chromium for page login and Lighthouse audits.

ChromeSession is an async context manager that owns one browser process.
The browser is always closed on exit, including when the body raises:

    async with ChromeSession(config, debugging_port=True) as chrome:
        await run_lighthouse(url, port=chrome.port)
"""
import logging
import socket
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class BrowserConfig(BaseModel):
    """
    Configuration for the Chromium instances launched during a run.

    All fields are validated by Pydantic to ensure type safety and valid values.
    """

    model_config = ConfigDict(frozen=True)

    headless: bool = Field(
        default=True,
        description="Run browser in headless mode (no visible UI)"
    )

    launch_args: List[str] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-dev-shm-usage"],
        description="Additional Chromium launch arguments"
    )


DEFAULT_BROWSER_CONFIG = BrowserConfig()


def find_free_port(host: str = "127.0.0.1") -> int:
    """Ask the OS for an unused TCP port.

    The socket is closed before the port is returned, so another process can
    take the port before Chromium binds it. Chromium then fails to open its
    debugging endpoint and Lighthouse cannot attach; that URL is recorded as
    an Error row and the batch continues.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


class ChromeSession:
    """
    One Chromium process, launched on enter and closed on exit.

    With debugging_port=True the browser also listens on a remote debugging
    port so that an external tool (Lighthouse) can drive it.
    """

    def __init__(self, config: Optional[BrowserConfig] = None, debugging_port: bool = False):
        """
        Initialize the session.

        Args:
            config: BrowserConfig instance with launch settings
            debugging_port: Expose a remote debugging port on launch
        """
        self._config = config or DEFAULT_BROWSER_CONFIG
        self._debugging_port = debugging_port
        self._playwright = None
        self.browser = None
        self.port: Optional[int] = None

    async def __aenter__(self) -> "ChromeSession":
        """Enter async context manager, launching the browser."""
        from playwright.async_api import async_playwright

        launch_args = list(self._config.launch_args)
        if self._debugging_port:
            self.port = find_free_port()
            launch_args.append(f"--remote-debugging-port={self.port}")

        logger.info(f"Launching Chromium (headless={self._config.headless}, port={self.port})")

        self._playwright = await async_playwright().start()
        try:
            self.browser = await self._playwright.chromium.launch(
                headless=self._config.headless,
                args=launch_args,
            )
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager, closing the browser."""
        await self.close()

    async def close(self) -> None:
        """Close the browser and stop Playwright. Safe to call more than once."""
        try:
            if self.browser:
                logger.debug("Closing browser")
                await self.browser.close()
        finally:
            self.browser = None
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None
