"""Base provider interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any
from pydantic import BaseModel


class ProviderStatus(Enum):
    """Provider resource status."""
    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"
    ERROR = "error"


class BaseProvider(ABC):
    """Base provider interface that all providers must implement."""
    
    @abstractmethod
    def initialize(self, config: Any):
        """Initialize the provider with configuration."""
        pass
        
    @abstractmethod
    def status(self, spec: BaseModel) -> ProviderStatus:
        """Check the current status of a resource."""
        pass
        
    @abstractmethod
    def present(self, spec: BaseModel) -> bool:
        """Ensure the resource is present. Returns True when something changed."""
        pass
        
    @abstractmethod
    def absent(self, spec: BaseModel) -> bool:
        """Ensure the resource is absent. Returns True when something changed."""
        pass
        
    @abstractmethod
    def validate_spec(self, spec: BaseModel) -> bool:
        """Validate the resource specification."""
        pass
