"""
Authenticators for web_service_client.
"""
from .authenticator import (
    Authenticator,
    HeaderAuthenticator,
    ApiKeyAuthenticator,
    TokenAuthenticator,
    BasicAuthenticator,
    BasicHeaderAuthenticator,
    BasicTokenAuthenticator,
    BearerAuthenticator,
    MultiAuthenticator,
    encode_credentials,
)
from .challenge import ChallengeResponseAuthenticator, challenge_response

__all__ = [
    "Authenticator",
    "HeaderAuthenticator",
    "ApiKeyAuthenticator",
    "TokenAuthenticator",
    "BasicAuthenticator",
    "BasicHeaderAuthenticator",
    "BasicTokenAuthenticator",
    "BearerAuthenticator",
    "MultiAuthenticator",
    "ChallengeResponseAuthenticator",
    "encode_credentials",
    "challenge_response",
]
