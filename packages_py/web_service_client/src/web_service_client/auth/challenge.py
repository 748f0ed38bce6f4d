"""
Challenge/response authenticator for session-based login endpoints.

The login endpoint answers with::

    <SessionInfo><SID>0000000000000000</SID><Challenge>1234abcd</Challenge></SessionInfo>

An all-zero SID means "not logged in". The client answers the challenge with
``<challenge>-<md5(utf-16-le("<challenge>-<password>"))>`` and receives a
session id.
"""
import hashlib
import logging
from typing import TYPE_CHECKING, Optional, Tuple
from xml.etree.ElementTree import ParseError

import defusedxml.ElementTree as DefusedET
import httpx

from ..core.url_builder import combine_url
from ..diagnostics import mask_sensitive
from ..exceptions import WebServiceAuthenticationError
from .authenticator import Authenticator

if TYPE_CHECKING:
    from ..core.base_service import WebService

logger = logging.getLogger("web_service_client.auth.challenge")

EMPTY_SESSION_ID = "0000000000000000"


def challenge_response(challenge: str, password: str) -> str:
    """Compute the response string for a login challenge."""
    digest = hashlib.md5(f"{challenge}-{password}".encode("utf-16-le")).hexdigest()
    return f"{challenge}-{digest}"


class ChallengeResponseAuthenticator(Authenticator):
    """Logs in through a challenge/response endpoint.

    Unlike the header authenticators this one performs network I/O and keeps
    the session id it obtained in ``session_id``.
    """

    def __init__(self, login: str, password: str, login_path: str = "login_sid.lua"):
        self._login = login
        self._password = password
        self._login_path = login_path
        self.session_id: Optional[str] = None

    async def _fetch_session(self, client: httpx.AsyncClient, url: str) -> Tuple[Optional[str], Optional[str]]:
        response = await client.get(url)
        if not response.is_success:
            raise WebServiceAuthenticationError(
                response.text or None,
                str(response.request.url),
                response.status_code,
                response.reason_phrase,
                type(self).__name__,
            )
        try:
            info = DefusedET.fromstring(response.content)
        except (ParseError, ValueError) as e:
            raise WebServiceAuthenticationError(
                f"Invalid session info: {e}",
                str(response.request.url),
                response.status_code,
                response.reason_phrase,
                type(self).__name__,
            ) from e
        return info.findtext("SID"), info.findtext("Challenge")

    async def authenticate(self, service: "WebService", client: httpx.AsyncClient) -> None:
        session_id, challenge = await self._fetch_session(client, self._login_path)

        if session_id == EMPTY_SESSION_ID:
            response = challenge_response(challenge or "", self._password)
            url = combine_url(self._login_path, ("username", self._login), ("response", response))
            session_id, _ = await self._fetch_session(client, url)

        if not session_id or session_id == EMPTY_SESSION_ID:
            raise WebServiceAuthenticationError(
                "Login failed", self._login_path, label=type(self).__name__
            )

        logger.debug(f"ChallengeResponseAuthenticator.authenticate: sid={mask_sensitive(session_id)}")
        self.session_id = session_id
