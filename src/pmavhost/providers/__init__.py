"""Resource providers for pmavhost."""

from pmavhost.providers.base import BaseProvider, ProviderStatus
from pmavhost.providers.registry import ProviderRegistry

__all__ = [
    "BaseProvider",
    "ProviderStatus", 
    "ProviderRegistry",
]
