from .container import ServiceContainer
from .error_response_service import ErrorResponseService

__all__ = ["ServiceContainer", "ErrorResponseService"]
