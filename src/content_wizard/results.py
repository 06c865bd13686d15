"""Result type shared by wizard services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a wizard service call.

    Generation services return ``fail(error)`` on problems. Enrichment
    services (RAG, transcription) degrade to ``ok(None)`` instead, so a
    successful result may still carry no data.
    """

    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> ServiceResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> ServiceResult[T]:
        return cls(success=False, error=error)

    def is_success(self) -> bool:
        return self.success

    def is_failure(self) -> bool:
        return not self.success
