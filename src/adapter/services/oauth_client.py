"""
OAuth provider client (Google, Facebook) over httpx.

Implements the authorization-code flow: build the consent URL, exchange the
returned code for an access token, then read the user's profile.
"""

import logging
from urllib.parse import urlencode

import httpx

from src.app.services.oauth_client import IOAuthClient, OAuthExchangeError, OAuthProfile
from src.domain.entities import OAuthProvider

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"

FACEBOOK_AUTH_URL = "https://www.facebook.com/v19.0/dialog/oauth"
FACEBOOK_TOKEN_URL = "https://graph.facebook.com/v19.0/oauth/access_token"
FACEBOOK_PROFILE_URL = "https://graph.facebook.com/me"

PLACEHOLDER_CREDENTIALS = {
    "",
    "your_google_client_id",
    "your_google_client_secret",
    "your_facebook_app_id",
    "your_facebook_app_secret",
}

HTTP_TIMEOUT_SECONDS = 10.0


class HttpxOAuthClient(IOAuthClient):
    def __init__(self, config):
        self.config = config

    def _credentials(self, provider: OAuthProvider) -> tuple[str, str, str]:
        backend_url = self.config.BACKEND_URL.rstrip("/")
        if provider == OAuthProvider.google:
            return (
                self.config.GOOGLE_CLIENT_ID,
                self.config.GOOGLE_CLIENT_SECRET,
                self.config.GOOGLE_CALLBACK_URL or f"{backend_url}/auth/google/callback",
            )
        return (
            self.config.FACEBOOK_APP_ID,
            self.config.FACEBOOK_APP_SECRET,
            self.config.FACEBOOK_CALLBACK_URL or f"{backend_url}/auth/facebook/callback",
        )

    def is_configured(self, provider: OAuthProvider) -> bool:
        client_id, client_secret, _ = self._credentials(provider)
        return (
            client_id not in PLACEHOLDER_CREDENTIALS
            and client_secret not in PLACEHOLDER_CREDENTIALS
        )

    def authorization_url(self, provider: OAuthProvider, state: str) -> str:
        client_id, _, redirect_uri = self._credentials(provider)
        if provider == OAuthProvider.google:
            params = {
                "client_id": client_id,
                "redirect_uri": redirect_uri,
                "response_type": "code",
                "scope": "openid email profile",
                "state": state,
            }
            return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"
        params = {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": "email",
            "state": state,
        }
        return f"{FACEBOOK_AUTH_URL}?{urlencode(params)}"

    async def fetch_profile(self, provider: OAuthProvider, code: str) -> OAuthProfile:
        try:
            async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as client:
                if provider == OAuthProvider.google:
                    return await self._fetch_google_profile(client, code)
                return await self._fetch_facebook_profile(client, code)
        except (httpx.HTTPError, KeyError, ValueError) as exc:
            logger.warning(f"OAuth code exchange failed for {provider.value}: {exc}")
            raise OAuthExchangeError(str(exc)) from exc

    async def _fetch_google_profile(self, client: httpx.AsyncClient, code: str) -> OAuthProfile:
        client_id, client_secret, redirect_uri = self._credentials(OAuthProvider.google)
        token_response = await client.post(
            GOOGLE_TOKEN_URL,
            data={
                "code": code,
                "client_id": client_id,
                "client_secret": client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        token_response.raise_for_status()
        access_token = token_response.json()["access_token"]

        userinfo_response = await client.get(
            GOOGLE_USERINFO_URL, headers={"Authorization": f"Bearer {access_token}"}
        )
        userinfo_response.raise_for_status()
        info = userinfo_response.json()

        return OAuthProfile(
            provider=OAuthProvider.google,
            provider_user_id=str(info["sub"]),
            email=info.get("email"),
            display_name=info.get("name"),
            avatar_url=info.get("picture"),
        )

    async def _fetch_facebook_profile(self, client: httpx.AsyncClient, code: str) -> OAuthProfile:
        client_id, client_secret, redirect_uri = self._credentials(OAuthProvider.facebook)
        token_response = await client.get(
            FACEBOOK_TOKEN_URL,
            params={
                "client_id": client_id,
                "client_secret": client_secret,
                "redirect_uri": redirect_uri,
                "code": code,
            },
        )
        token_response.raise_for_status()
        access_token = token_response.json()["access_token"]

        profile_response = await client.get(
            FACEBOOK_PROFILE_URL,
            params={
                "fields": "id,name,email,picture.type(large)",
                "access_token": access_token,
            },
        )
        profile_response.raise_for_status()
        info = profile_response.json()
        picture = (info.get("picture") or {}).get("data") or {}

        return OAuthProfile(
            provider=OAuthProvider.facebook,
            provider_user_id=str(info["id"]),
            email=info.get("email"),
            display_name=info.get("name"),
            avatar_url=picture.get("url"),
        )
