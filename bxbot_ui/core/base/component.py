"""
Base component providing common functionality.

Every service in the BX-bot UI server derives from BaseComponent to get a
name and a structured logger bound with that name and a correlation id. The
logger redacts password, secret and token fields before they are emitted.
"""

import uuid
from typing import Any

from bxbot_ui.core.logging import get_secure_logger


class BaseComponent:
    """
    Base component with identification and structured logging.

    Example:
        ```python
        class BotConfigService(BaseComponent):
            def __init__(self, repository):
                super().__init__(name="BotConfigService")
                self.repository = repository
        ```
    """

    def __init__(self, name: str | None = None, correlation_id: str | None = None):
        """
        Initialize base component.

        Args:
            name: Component name for logging and identification
            correlation_id: Correlation ID for tracing
        """
        self._name = name or self.__class__.__name__
        self._correlation_id = correlation_id or str(uuid.uuid4())
        self._logger = get_secure_logger(self.__class__.__module__).bind(
            component=self._name,
            correlation_id=self._correlation_id,
        )

        self._logger.debug("Component initialized", name=self._name)

    @property
    def name(self) -> str:
        """Get component name."""
        return self._name

    @property
    def logger(self) -> Any:
        """Get logger instance for this component."""
        return self._logger

    @property
    def correlation_id(self) -> str:
        """Get correlation ID for tracing."""
        return self._correlation_id

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self._name}')"
