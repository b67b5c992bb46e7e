"""Action models.

An Action is the server's record of an asynchronous operation started by a
mutating call. Clients receive it as an immutable snapshot, either still
``running`` or already terminal. Refreshing means fetching a new snapshot by
ID (see ``ActionClient``); a snapshot never changes in place.

Lifecycle:
    running -> success
    running -> error

``success`` and ``error`` are terminal. An ``error`` action keeps the
structured cause (code and message) so callers can branch on the code.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .common import ListOpts


class ActionStatus(str, Enum):
    """Status of an action."""

    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ActionResource:
    """A resource affected by an action."""

    id: int
    type: str


@dataclass(frozen=True)
class ActionError:
    """Structured cause of a failed action. Data, not an exception."""

    code: str
    message: str


@dataclass(frozen=True)
class Action:
    id: int
    command: str
    status: ActionStatus | str
    progress: int
    started: datetime
    finished: datetime | None = None
    resources: list[ActionResource] = field(default_factory=list)
    error: ActionError | None = None

    @property
    def is_running(self) -> bool:
        return self.status == ActionStatus.RUNNING

    @property
    def is_terminal(self) -> bool:
        return self.status != ActionStatus.RUNNING

    @property
    def is_successful(self) -> bool:
        return self.status == ActionStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status == ActionStatus.ERROR


@dataclass
class ActionListOpts(ListOpts):
    """Options for listing actions."""

    id: list[int] = field(default_factory=list)
    status: list[ActionStatus] = field(default_factory=list)
    sort: list[str] = field(default_factory=list)

    def values(self) -> list[tuple[str, str]]:
        vals = super().values()
        vals.extend(("id", str(action_id)) for action_id in self.id)
        vals.extend(("status", ActionStatus(status).value) for status in self.status)
        vals.extend(("sort", sort) for sort in self.sort)
        return vals
