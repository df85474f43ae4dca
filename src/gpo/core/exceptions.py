"""
Error types raised by the optimization engines.

Author: Nik Jois <nikjois@llamasearch.ai>
"""

import time
from typing import Dict, Any, Optional


class OptimizationError(Exception):
    """Base exception for optimization errors."""

    def __init__(
        self,
        message: str,
        error_type: str = "optimization_error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}
        self.timestamp = time.time()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "message": self.message,
            "error_type": self.error_type,
            "details": self.details,
            "timestamp": self.timestamp
        }


class ConfigurationError(OptimizationError, ValueError):
    """Invalid engine configuration detected at construction time."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_type="configuration_error", details=details)


class ContractViolationError(OptimizationError, RuntimeError):
    """A collaborator (candidate, selection strategy, objective) broke its contract."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_type="contract_violation", details=details)
