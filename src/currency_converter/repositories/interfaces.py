from abc import ABC, abstractmethod
from collections.abc import Iterable

from currency_converter.domain.conversions import ConversionRecord


class ConversionLogRepository(ABC):
    @abstractmethod
    def add(self, record: ConversionRecord) -> None:
        pass

    @abstractmethod
    def list_recent(self, limit: int | None = None) -> Iterable[ConversionRecord]:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass
