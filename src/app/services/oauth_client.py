from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import OAuthProvider


class OAuthProfile(BaseModel):
    """Verified profile returned by an OAuth provider"""

    provider: OAuthProvider
    provider_user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class OAuthExchangeError(Exception):
    """Raised when the authorization code cannot be exchanged for a profile."""


class IOAuthClient(ABC):
    """OAuth provider client interface - application layer"""

    @abstractmethod
    def is_configured(self, provider: OAuthProvider) -> bool:
        """True when client credentials for the provider are set"""
        pass

    @abstractmethod
    def authorization_url(self, provider: OAuthProvider, state: str) -> str:
        """URL of the provider consent page"""
        pass

    @abstractmethod
    async def fetch_profile(self, provider: OAuthProvider, code: str) -> OAuthProfile:
        """Exchange an authorization code for the user's profile"""
        pass
