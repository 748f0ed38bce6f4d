"""
Credential store for web_service_client.
"""
from .key_store import (
    AuthenticationType,
    KeyStore,
    KeyStoreEntry,
    default_path,
    demo_entries,
)

__all__ = [
    "AuthenticationType",
    "KeyStore",
    "KeyStoreEntry",
    "default_path",
    "demo_entries",
]
