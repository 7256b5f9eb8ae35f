from ._base_service import BaseService
from ._error_reporter import ErrorReporter
from .api_client import ApiClient

__all__ = ["ApiClient", "BaseService", "ErrorReporter"]
