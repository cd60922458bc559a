"""Dependency injection container for the currency converter.

Provides lazily-built, shared instances of the rate service and the
conversion log. Tests build a Container with their own
Settings, or override the FastAPI dependency functions below.

Usage:
    from currency_converter.container import get_container

    container = get_container()
    rate = await container.rate_service.get_rate("USD", "BRL")
"""

from functools import cached_property, lru_cache
from typing import TYPE_CHECKING

from currency_converter.config import Settings, get_settings
from currency_converter.logging_config import get_logger

if TYPE_CHECKING:
    from currency_converter.repositories.interfaces import ConversionLogRepository
    from currency_converter.services.exchange_rates import ExchangeRateServiceImpl

logger = get_logger(__name__)


class Container:
    """Dependency injection container.

    Services are instantiated on first access and cached for reuse:

        test_settings = Settings(rate_cache_ttl_seconds=0)
        container = Container(settings=test_settings)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        logger.debug(
            "container_created",
            environment=self._settings.environment.value,
        )

    @property
    def settings(self) -> Settings:
        """Get application settings."""
        return self._settings

    @cached_property
    def rate_service(self) -> "ExchangeRateServiceImpl":
        """Get the upstream-backed, cached exchange rate service."""
        from currency_converter.services.exchange_rates import ExchangeRateServiceImpl

        logger.info(
            "initializing_rate_service",
            base_url=self._settings.exchange_api_base_url,
            cache_ttl=self._settings.rate_cache_ttl_seconds,
        )
        return ExchangeRateServiceImpl(
            base_url=self._settings.exchange_api_base_url,
            timeout=self._settings.exchange_api_timeout,
            cache_ttl=self._settings.rate_cache_ttl_seconds,
        )

    @cached_property
    def conversion_log(self) -> "ConversionLogRepository":
        """Get the conversion log repository."""
        from currency_converter.repositories.json_file import (
            JsonConversionLogRepository,
        )

        return JsonConversionLogRepository(
            self._settings.conversion_log_path,
            max_entries=self._settings.conversion_log_max_entries,
        )

    async def aclose(self) -> None:
        """Close resources held by the container.

        Should be awaited during application shutdown.
        """
        if "rate_service" in self.__dict__:
            logger.info("closing_rate_service")
            await self.rate_service.aclose()


_container: Container | None = None


@lru_cache
def get_container() -> Container:
    """Get the global container singleton, created on first access."""
    global _container
    if _container is None:
        _container = Container()
    return _container


async def reset_container() -> None:
    """Close and drop the global container."""
    global _container
    if _container is not None:
        await _container.aclose()
        _container = None
    get_container.cache_clear()


# FastAPI dependency functions
def get_rate_service() -> "ExchangeRateServiceImpl":
    """FastAPI dependency for the exchange rate service."""
    return get_container().rate_service


def get_conversion_log() -> "ConversionLogRepository":
    """FastAPI dependency for the conversion log."""
    return get_container().conversion_log

