"""
Base Service Foundation

Purpose
-------
Foundational class for the domain services. Services implement business
logic, own their transactions and raise domain exceptions.

Design Notes
------------
This base class provides:
- Structured logging with operation context
- Safe config access

What this class does NOT do:
- Manage database transactions (that's DatabaseService's job)
- Know about Discord or the request boundary

Usage
-----
    class PetService(BaseService):
        def __init__(self, config, logger):
            super().__init__(config, logger)

        async def feed(self, owner_id: str):
            self.log_operation("feed", owner_id=owner_id)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from logging import Logger

    from ghostagotchi.core.config.config import Config


class BaseService:
    """
    Base class for all domain services.

    Args:
        config: Static configuration (the ``Config`` class or a stand-in)
        logger: Structured logger instance
    """

    def __init__(self, config: type[Config], logger: Logger) -> None:
        self._config = config
        self.log = logger

    def get_config(
        self, key: str, default: Optional[Any] = None, required: bool = False
    ) -> Any:
        """
        Safely retrieve a configuration value.

        Raises:
            ConfigurationError: If required=True and the key is missing
        """
        from ghostagotchi.core.exceptions import ConfigurationError

        value = getattr(self._config, key, default)
        if required and value is None:
            raise ConfigurationError(
                key, f"Required configuration key '{key}' is missing"
            )
        return value

    def log_operation(self, operation: str, **context: Any) -> None:
        """Log a service operation with structured context."""
        self.log.info(
            f"Service operation: {operation}",
            extra={"operation": operation, **context},
        )

    def log_error(
        self,
        operation: str,
        error: Exception,
        **context: Any,
    ) -> None:
        """Log a service error with full context."""
        self.log.error(
            f"Service error during {operation}: {str(error)}",
            extra={
                "operation": operation,
                "error_type": type(error).__name__,
                "error_message": str(error),
                **context,
            },
        )
