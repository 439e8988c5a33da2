"""
Local OAuth callback server
"""
import asyncio
import html
import logging
from typing import Optional

from aiohttp import web

from settings import OAUTH_CALLBACK_HOST, OAUTH_CALLBACK_PORT, OAUTH_CALLBACK_PATH

logger = logging.getLogger(__name__)

SUCCESS_PAGE = """
<html>
    <body>
        <h1>Successfully Connected!</h1>
        <p>You can now close this window and return to the terminal.</p>
        <script>
            setTimeout(function() {
                window.close();
            }, 2000);
        </script>
    </body>
</html>
"""

ERROR_PAGE = """
<html>
    <body>
        <h1>Authentication Failed</h1>
        <p>Error: {error}</p>
        <p>{description}</p>
        <p>You can close this window.</p>
    </body>
</html>
"""


class CallbackResult:
    """OAuth callback result

    Either code is set (success) or error is set (provider refused).
    """

    def __init__(
        self,
        code: Optional[str] = None,
        state: Optional[str] = None,
        error: Optional[str] = None,
        error_description: Optional[str] = None,
    ):
        self.code = code
        self.state = state
        self.error = error
        self.error_description = error_description

    @property
    def ok(self) -> bool:
        return self.code is not None and self.error is None


class OAuthCallbackServer:
    """Local HTTP server for OAuth callback"""

    def __init__(
        self,
        expected_state: str,
        host: str = OAUTH_CALLBACK_HOST,
        port: int = OAUTH_CALLBACK_PORT,
        path: str = OAUTH_CALLBACK_PATH,
    ):
        self.expected_state = expected_state
        self.host = host
        self.port = port
        self.path = path
        self.result: Optional[CallbackResult] = None
        self.app = web.Application()
        self.runner: Optional[web.AppRunner] = None
        self._event = asyncio.Event()

        self.app.router.add_get(path, self._handle_callback)

    async def _handle_callback(self, request: web.Request) -> web.Response:
        """Handle OAuth callback request"""
        code = request.query.get("code")
        state = request.query.get("state")
        error = request.query.get("error")
        error_description = request.query.get("error_description")

        # Validate state first so a forged redirect cannot end the flow (CSRF)
        if state != self.expected_state:
            logger.warning("OAuth callback with mismatched state ignored")
            return web.Response(text="Invalid state parameter", status=400)

        if error:
            logger.warning(f"OAuth provider returned error: {error}")
            self._settle(CallbackResult(state=state, error=error, error_description=error_description))
            return web.Response(
                text=ERROR_PAGE.format(
                    error=html.escape(error),
                    description=html.escape(error_description or ""),
                ),
                content_type="text/html",
                status=400,
            )

        if not code:
            return web.Response(text="Missing code parameter", status=400)

        self._settle(CallbackResult(code=code, state=state))
        return web.Response(text=SUCCESS_PAGE, content_type="text/html")

    def _settle(self, result: CallbackResult) -> None:
        # First callback wins
        if self._event.is_set():
            return
        self.result = result
        self._event.set()

    async def start(self) -> None:
        """Start the callback server"""
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()

        site = web.TCPSite(self.runner, host=self.host, port=self.port)
        await site.start()
        logger.info(f"OAuth callback server listening on {self.host}:{self.port}{self.path}")

    async def wait_for_callback(self, timeout: float = 300) -> Optional[CallbackResult]:
        """
        Wait for OAuth callback.

        Args:
            timeout: Maximum time to wait in seconds (default 5 minutes)

        Returns:
            CallbackResult once received, None on timeout
        """
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
            return self.result
        except asyncio.TimeoutError:
            logger.warning(f"OAuth callback timeout after {timeout} seconds")
            return None

    async def stop(self) -> None:
        """Stop the callback server"""
        if self.runner:
            await self.runner.cleanup()
            self.runner = None


async def start_callback_server(expected_state: str, **kwargs) -> OAuthCallbackServer:
    """
    Start OAuth callback server.

    Args:
        expected_state: Expected state parameter for CSRF protection
        **kwargs: host / port / path overrides

    Returns:
        OAuthCallbackServer instance
    """
    server = OAuthCallbackServer(expected_state, **kwargs)
    await server.start()
    return server
