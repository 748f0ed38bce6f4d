"""
Async client base for HTTP web services.

Provides a connection-scoped base service with verb operations, a pluggable
authenticator family, JSON and XML adapters with typed serializers, and a
file-backed credential store.
"""
from .types import (
    HttpMethod,
    QueryEntry,
    FileUpload,
    RequestDescriptor,
    TypeSerializer,
)
from .config import (
    TimeoutConfig,
    ServiceConfig,
    ResolvedConfig,
    resolve_config,
)
from .exceptions import (
    WebServiceArgumentError,
    ArgumentRequestUriError,
    ArgumentNullError,
    WebServiceError,
    WebServiceNotConnectedError,
    WebServiceAuthenticationError,
    SerializerNotFoundError,
    KeyStoreError,
)
from .core.url_builder import combine_url, combine_path, combine_query
from .core.base_service import WebService
from .auth import (
    Authenticator,
    HeaderAuthenticator,
    ApiKeyAuthenticator,
    TokenAuthenticator,
    BasicAuthenticator,
    BasicHeaderAuthenticator,
    BasicTokenAuthenticator,
    BearerAuthenticator,
    MultiAuthenticator,
    ChallengeResponseAuthenticator,
)
from .serialization import (
    SerializerRegistry,
    JsonSerializer,
    PydanticSerializer,
    LenientDatetime,
)
from .adapters import JsonService, XmlService
from .store import AuthenticationType, KeyStore, KeyStoreEntry

__version__ = "0.1.0"

__all__ = [
    # Types
    "HttpMethod",
    "QueryEntry",
    "FileUpload",
    "RequestDescriptor",
    "TypeSerializer",
    # Config
    "TimeoutConfig",
    "ServiceConfig",
    "ResolvedConfig",
    "resolve_config",
    # Exceptions
    "WebServiceArgumentError",
    "ArgumentRequestUriError",
    "ArgumentNullError",
    "WebServiceError",
    "WebServiceNotConnectedError",
    "WebServiceAuthenticationError",
    "SerializerNotFoundError",
    "KeyStoreError",
    # URL building
    "combine_url",
    "combine_path",
    "combine_query",
    # Services
    "WebService",
    "JsonService",
    "XmlService",
    # Auth
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
    # Serialization
    "SerializerRegistry",
    "JsonSerializer",
    "PydanticSerializer",
    "LenientDatetime",
    # Store
    "AuthenticationType",
    "KeyStore",
    "KeyStoreEntry",
]
