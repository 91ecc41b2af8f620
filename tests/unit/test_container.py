"""
Unit tests for ServiceContainer wiring.
"""

import pytest

from ghostagotchi.api.boundary import RequestBoundary
from ghostagotchi.core.config.config import Config
from ghostagotchi.core.services.container import ServiceContainer


@pytest.mark.unit
class TestServiceContainer:
    def test_accessors_require_initialize(self, service_logger, fake_llm):
        container = ServiceContainer(Config, service_logger, llm_client=fake_llm)

        with pytest.raises(RuntimeError):
            container.boundary

    async def test_initialize_wires_boundary(self, service_logger, fake_llm):
        # Arrange
        container = ServiceContainer(Config, service_logger, llm_client=fake_llm)

        # Act
        await container.initialize()

        # Assert
        assert isinstance(container.boundary, RequestBoundary)
        assert container.chat._llm is fake_llm
        assert "/leaderboard" in container.boundary.routes
        assert container.errors is not None

    async def test_injected_llm_is_not_closed(self, mocker, service_logger, fake_llm):
        close = mocker.spy(fake_llm, "close")
        container = ServiceContainer(Config, service_logger, llm_client=fake_llm)
        await container.initialize()

        await container.shutdown()

        close.assert_not_called()
        with pytest.raises(RuntimeError):
            container.pet

    async def test_owned_llm_is_closed(self, mocker, service_logger):
        client = mocker.AsyncMock()
        mocker.patch(
            "ghostagotchi.core.services.container.LanguageModelClient",
            return_value=client,
        )
        container = ServiceContainer(Config, service_logger)
        await container.initialize()

        await container.shutdown()

        client.close.assert_awaited_once()
