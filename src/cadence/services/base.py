"""BaseService — shared foundation for cadence services.

Every service receives the frozen :class:`CadenceSettings` at
construction time, plus an optional clock used whenever an operation
is called without an explicit reference instant.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cadence.config.settings import CadenceSettings


def local_now() -> datetime:
    """Current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ScheduleService(BaseService):
            def next_occurrence(self, rule: str) -> ServiceResult:
                after = self._now()
                ...
    """

    def __init__(
        self,
        settings: CadenceSettings,
        *,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._settings = settings
        self._clock = clock

    def _now(self) -> datetime:
        return self._clock()
