"""HTTP access to the TaskLite backend."""

from .client import APIClient, ApiOutcome, ApiResult

__all__ = ["APIClient", "ApiOutcome", "ApiResult"]
