"""
Authentication for audited sites.

Three modes are supported besides "none":

- basic:  a Basic-auth request is made against each URL before it is
          audited, and the audit is skipped if the server refuses it.
          The credentials are only used for this check; the Lighthouse run
          itself does not send them.
- digest: not implemented; every URL fails.
- page:   a login form is filled in once with Playwright before the batch
          starts, and the resulting cookies are handed to every audit as a
          Cookie header.
"""
import base64
import logging
from typing import Any, Dict, Iterable, Optional

import httpx

from lighthouse_batch.browser import BrowserConfig, ChromeSession
from lighthouse_batch.config import AuthType, RunConfig
from lighthouse_batch.constants import LOGIN_FIELD_TIMEOUT_MS, LOGIN_NAVIGATION_TIMEOUT_MS
from lighthouse_batch.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def basic_auth_header(username: str, password: str) -> str:
    """Build the value of a Basic Authorization header."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def session_cookie_string(cookies: Iterable[Dict[str, Any]]) -> str:
    """Serialize browser cookies as a Cookie header value (name=value; ...)."""
    return "; ".join(f"{cookie['name']}={cookie['value']}" for cookie in cookies)


class Authenticator:
    """Performs the authentication selected by RunConfig.auth_type."""

    def __init__(
        self,
        config: RunConfig,
        browser_config: Optional[BrowserConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the authenticator.

        Args:
            config: Run configuration holding the auth mode and credentials
            browser_config: Launch settings for the page-login browser
            transport: Optional httpx transport for the Basic-auth check
        """
        self._config = config
        self._browser_config = browser_config
        self._transport = transport

    @property
    def auth_type(self) -> AuthType:
        return self._config.auth_type

    async def check(self, url: str) -> None:
        """Run the per-URL authentication check for basic and digest modes.

        Raises:
            AuthenticationError: If the check fails
        """
        if self.auth_type is AuthType.BASIC:
            await self.basic_auth(url)
        elif self.auth_type is AuthType.DIGEST:
            await self.digest_auth(url)

    async def session_token(self) -> Optional[str]:
        """Return the session cookie string for page mode, None otherwise."""
        if self.auth_type is AuthType.PAGE:
            return await self.page_login()
        return None

    async def basic_auth(self, url: str) -> None:
        """Request the URL with Basic credentials and require a 2xx response."""
        credentials = self._config.basic_auth
        headers = {"Authorization": basic_auth_header(credentials.username, credentials.password)}

        try:
            async with httpx.AsyncClient(transport=self._transport, follow_redirects=True) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise AuthenticationError(f"Basic Authentication request failed: {e}") from e

        if not response.is_success:
            logger.debug(f"Basic auth check for {url} returned {response.status_code}")
            raise AuthenticationError("Basic Authentication failed")

    async def digest_auth(self, url: str) -> None:
        raise AuthenticationError("Digest Authentication not implemented")

    async def page_login(self) -> str:
        """
        Log in through the configured form and return the session cookies.

        The browser used for the login is closed before this returns, whether
        the login succeeded or not.

        Returns:
            Cookie header value built from the authenticated session

        Raises:
            AuthenticationError: If any login step fails or times out
        """
        page_auth = self._config.page_auth

        try:
            async with ChromeSession(self._browser_config) as chrome:
                context = await chrome.browser.new_context()
                page = await context.new_page()

                logger.info("Navigating to login page...")
                await page.goto(
                    page_auth.login_url,
                    wait_until="networkidle",
                    timeout=LOGIN_NAVIGATION_TIMEOUT_MS,
                )

                logger.info("Waiting for username field...")
                await page.wait_for_selector(page_auth.username_field, timeout=LOGIN_FIELD_TIMEOUT_MS)
                await page.fill(page_auth.username_field, page_auth.username)
                logger.info("Entered username")

                logger.info("Waiting for password field...")
                await page.wait_for_selector(page_auth.password_field, timeout=LOGIN_FIELD_TIMEOUT_MS)
                await page.fill(page_auth.password_field, page_auth.password)
                logger.info("Entered password")

                logger.info("Waiting for submit button...")
                await page.wait_for_selector(page_auth.submit_field, timeout=LOGIN_FIELD_TIMEOUT_MS)

                logger.info("Submitting login form and waiting for navigation...")
                async with page.expect_navigation(
                    wait_until="load",
                    timeout=LOGIN_NAVIGATION_TIMEOUT_MS,
                ):
                    await page.click(page_auth.submit_field)
                logger.info("Login successful")

                cookies = await context.cookies()
        except Exception as e:
            logger.error(f"Page login failed: {e}")
            raise AuthenticationError(f"Page login failed: {e}") from e

        logger.debug(f"Captured {len(cookies)} session cookies")
        return session_cookie_string(cookies)
