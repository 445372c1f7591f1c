"""
System failure error classifications for the status resource.

These exceptions represent backend and configuration failures that abort
the current resource operation. None of them are retried by the driver.
"""

from typing import Optional, Dict, Any


class ResourceError(Exception):
    """Base class for every fatal resource failure."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = False


class StoreError(ResourceError):
    """Transport, permission or backend failure talking to the object store."""
    
    def __init__(self, message: str, operation: Optional[str] = None, 
                 key: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.key = key


class MalformedStatusError(ResourceError):
    """Stored status document exists but cannot be decoded."""
    
    def __init__(self, message: str, raw_data: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data


class ConfigurationError(ResourceError):
    """Invalid source configuration or protocol request."""
    
    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
