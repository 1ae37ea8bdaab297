"""Row-to-entity mapping."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TypeVar

E = TypeVar("E")
M = TypeVar("M")


class BaseMapper[E, M](ABC):
    """One-way mapper: catalog rows are written by the upload pipeline."""

    @abstractmethod
    def to_domain(self, model: M) -> E: ...

    def to_domain_list(self, models: Iterable[M]) -> list[E]:
        return [self.to_domain(model) for model in models]
