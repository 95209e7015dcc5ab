"""
Optimistic commands.

The local view changes first; the remote write follows. If the write
fails, the command's compensating action (when it has one) puts the
local view back. A transient failure ends as a soft notice; any other
typed failure is re-raised to the page after compensation.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from elderease.core.exceptions import ElderEaseError, TransientIOError
from elderease.client.notices import user_message

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    saved: bool
    value: Any = None
    notice: Optional[str] = None


class OptimisticCommand:
    """
    apply -> remote -> (compensate on failure)

    ``apply`` and ``compensate`` only touch local state and must not fail.
    """

    def __init__(
        self,
        name: str,
        apply: Callable[[], None],
        remote: Callable[[], Awaitable[Any]],
        compensate: Optional[Callable[[], None]] = None,
        failure_notice: Optional[str] = None,
    ):
        self.name = name
        self.apply = apply
        self.remote = remote
        self.compensate = compensate
        self.failure_notice = failure_notice

    async def run(self) -> CommandResult:
        self.apply()
        try:
            value = await self.remote()
        except TransientIOError as e:
            self._undo()
            logger.warning(f"{self.name}: remote write failed, local state {'reverted' if self.compensate else 'kept'}")
            return CommandResult(saved=False, notice=self.failure_notice or user_message(e))
        except ElderEaseError:
            self._undo()
            raise
        return CommandResult(saved=True, value=value)

    def _undo(self) -> None:
        if self.compensate is not None:
            self.compensate()
