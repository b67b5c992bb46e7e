"""Action client: reads action snapshots and waits for them to finish."""

import asyncio

import structlog

from ..api.endpoints import APIEndpoints
from ..api.schema import ActionSchema
from ..api.transport import Transport
from ..constants import DEFAULT_POLL_INTERVAL
from ..core.mapper import action_from_schema
from ..core.resource import ResourceClient, ResourceKind
from ..models.action import Action, ActionListOpts
from ..utils.exceptions import ActionFailedError, ResourceNotFoundError

logger = structlog.get_logger(__name__)

ACTION_KIND: ResourceKind[Action, ActionSchema] = ResourceKind(
    name="Action",
    path=APIEndpoints.ACTIONS,
    singular_key="action",
    plural_key="actions",
    schema=ActionSchema,
    from_schema=action_from_schema,
)


class ActionClient(ResourceClient[Action, ActionSchema, ActionListOpts]):
    """Client for actions returned by mutating operations."""

    kind = ACTION_KIND
    list_opts_class = ActionListOpts

    def __init__(self, transport: Transport, poll_interval: float = DEFAULT_POLL_INTERVAL):
        super().__init__(transport)
        self.poll_interval = poll_interval

    async def wait_for(self, *actions: Action, poll_interval: float | None = None) -> list[Action]:
        """
        Poll the given actions until every one of them is terminal.

        Running actions are refreshed together with one list request per
        round. The first action found in status ``error`` stops the wait.

        Args:
            actions: Action snapshots to wait for
            poll_interval: Seconds between rounds, defaults to the client setting

        Returns:
            Final snapshots, in the order the actions were given

        Raises:
            ActionFailedError: If an action finishes with status error
            ResourceNotFoundError: If a running action is missing from a refresh
        """
        interval = self.poll_interval if poll_interval is None else poll_interval
        latest: dict[int, Action] = {action.id: action for action in actions}

        while True:
            for action in latest.values():
                if action.is_failed:
                    logger.error(
                        "Action failed",
                        action_id=action.id,
                        command=action.command,
                        error_code=action.error.code if action.error else None,
                    )
                    raise ActionFailedError(action)

            pending = [action_id for action_id, action in latest.items() if action.is_running]
            if not pending:
                break

            logger.debug("Waiting for actions", pending=pending, poll_interval=interval)
            await asyncio.sleep(interval)

            refreshed = await self.all_with_opts(ActionListOpts(id=pending))
            for action in refreshed:
                if action.id in latest:
                    latest[action.id] = action

            missing = sorted(set(pending) - {action.id for action in refreshed})
            if missing:
                logger.error("Actions vanished while waiting", missing=missing)
                raise ResourceNotFoundError(f"Actions not found: {missing}", details={"ids": missing})

        return [latest[action.id] for action in actions]
