from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping

from datamodels import Projection, SymbolCounts

Row = Mapping[str, Any]


class SymbolNormalizer(ABC):
    @property
    @abstractmethod
    def projection(self) -> Projection:
        """Output shape produced (e.g., Projection.STANDARD)"""
        pass

    @abstractmethod
    def normalize(
        self,
        functions_rows: Iterable[Row],
        types_rows: Iterable[Row],
        enum_rows: Iterable[Row],
    ) -> Any:
        """Turn the three metadata result sets into one output document"""
        pass

    @abstractmethod
    def count(self, document: Any) -> SymbolCounts:
        """Number of functions, types and enums in a normalized document"""
        pass
