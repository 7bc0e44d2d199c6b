"""Web endpoints for triggering a sync and completing OAuth."""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse

from . import sync
from .auth import YouTubeSession
from .config import load_settings

logger = logging.getLogger(__name__)

app = FastAPI()

SYNC_STARTED_PAGE = (
    "<p>Sync process started. Check the logs for details.</p>"
)
AUTH_SUCCESS_PAGE = (
    "<p>Authorization successful! You can close this tab and run the sync again.</p>"
)
AUTH_FAILURE_PAGE = (
    "<p>Authorization failed. Check the client ID/secret settings and try again.</p>"
)


def get_session() -> YouTubeSession:
    """Build the OAuth session from the environment settings.

    Raises:
        HTTPException: If the OAuth client is not configured
    """
    settings = load_settings()
    if not settings.client_id or not settings.client_secret:
        logger.error("YOUTUBE_CLIENT_ID and YOUTUBE_CLIENT_SECRET must be set")
        raise HTTPException(status_code=500, detail="OAuth client not configured")
    return YouTubeSession.from_settings(settings)


@app.get("/sync", response_class=HTMLResponse)
def sync_endpoint() -> HTMLResponse:
    """Run the sync and acknowledge the request."""
    logger.info("Received sync request via web endpoint")
    sync.run_sync()
    return HTMLResponse(SYNC_STARTED_PAGE)


@app.get("/authorize")
def authorize_endpoint() -> RedirectResponse:
    """Redirect to the OAuth consent page."""
    session = get_session()
    return RedirectResponse(session.authorization_url())


@app.get("/oauth2callback", response_class=HTMLResponse)
def oauth_callback_endpoint(
    code: Optional[str] = None, error: Optional[str] = None
) -> HTMLResponse:
    """Complete the OAuth handshake and report the outcome."""
    if error:
        logger.error("Authorization was denied: %s", error)
        return HTMLResponse(AUTH_FAILURE_PAGE, status_code=400)

    session = get_session()
    if session.handle_callback(code):
        return HTMLResponse(AUTH_SUCCESS_PAGE)
    return HTMLResponse(AUTH_FAILURE_PAGE, status_code=400)
