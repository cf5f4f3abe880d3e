"""Sign-in precondition for backend-requiring handlers."""

from __future__ import annotations

import logging

from scamvigil.client.remote import RemoteClient
from scamvigil.constants.storage import AUTH_TOKEN_KEY, BACKEND_URL_KEY
from scamvigil.exceptions import NotSignedInError
from scamvigil.model import AuthCredential
from scamvigil.storage import StorageArea

logger = logging.getLogger(__name__)


class AuthGate:
    """Reads the stored credential and mirrors it into the remote client.

    ``default_backend_url`` comes from operator config and is used when the
    synced scope holds no ``backendUrl``.
    """

    def __init__(
        self,
        sync_area: StorageArea,
        client: RemoteClient,
        *,
        default_backend_url: str | None = None,
    ) -> None:
        self._sync_area = sync_area
        self._client = client
        self._default_backend_url = default_backend_url

    async def read_credential(self) -> AuthCredential | None:
        """Return the stored credential, or None when signed out."""
        stored = await self._sync_area.get((AUTH_TOKEN_KEY, BACKEND_URL_KEY))
        token = stored.get(AUTH_TOKEN_KEY)
        if not isinstance(token, str) or not token.strip():
            return None
        backend_url = stored.get(BACKEND_URL_KEY)
        if not isinstance(backend_url, str) or not backend_url.strip():
            backend_url = self._default_backend_url
        return AuthCredential(token=token.strip(), backend_url=backend_url)

    async def require(self) -> AuthCredential:
        """Return the credential or raise ``NotSignedInError`` before any network use."""
        credential = await self.read_credential()
        if credential is None:
            logger.debug("No stored credential; refusing backend call")
            raise NotSignedInError()
        self._client.configure(base_url=credential.backend_url, auth_token=credential.token)
        return credential

    async def sign_in(self, token: str, *, backend_url: str | None = None) -> AuthCredential:
        """Store a credential supplied by a sign-in flow or the user."""
        items: dict[str, str] = {AUTH_TOKEN_KEY: token.strip()}
        if backend_url:
            items[BACKEND_URL_KEY] = backend_url.strip().rstrip("/")
        await self._sync_area.set(items)
        credential = await self.require()
        logger.info("Stored credential for %s", credential.backend_url or "<unconfigured backend>")
        return credential

    async def sign_out(self) -> None:
        """Forget the stored token; the backend URL is kept."""
        await self._sync_area.remove((AUTH_TOKEN_KEY,))
        self._client.configure(base_url=self._client.base_url, auth_token=None)
