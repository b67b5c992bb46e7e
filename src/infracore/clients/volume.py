"""Volume client."""

from ..api.endpoints import APIEndpoints
from ..api.schema import (
    VolumeActionDetachRequest,
    VolumeActionResizeRequest,
    VolumeCreateResponse,
    VolumeSchema,
)
from ..api.transport import Response
from ..core.mapper import (
    action_from_schema,
    actions_from_schema,
    volume_attach_opts_to_schema,
    volume_change_protection_opts_to_schema,
    volume_create_opts_to_schema,
    volume_from_schema,
    volume_update_opts_to_schema,
)
from ..core.resource import ManagedResourceClient, ResourceKind, parse_model
from ..models.action import Action
from ..models.common import Server
from ..models.volume import (
    Volume,
    VolumeAttachOpts,
    VolumeChangeProtectionOpts,
    VolumeCreateOpts,
    VolumeCreateResult,
    VolumeListOpts,
    VolumeUpdateOpts,
)
from ..utils.exceptions import ValidationError

VOLUME_KIND: ResourceKind[Volume, VolumeSchema] = ResourceKind(
    name="Volume",
    path=APIEndpoints.VOLUMES,
    singular_key="volume",
    plural_key="volumes",
    schema=VolumeSchema,
    from_schema=volume_from_schema,
)


class VolumeClient(ManagedResourceClient[Volume, VolumeSchema, VolumeListOpts]):
    """
    Client for volumes.

    Every action method returns as soon as the server accepted the request;
    use ActionClient.wait_for to wait for the returned action.
    """

    kind = VOLUME_KIND
    list_opts_class = VolumeListOpts

    async def create(self, opts: VolumeCreateOpts) -> tuple[VolumeCreateResult, Response]:
        """
        Create a volume, either attached to a server or in a location.

        Raises:
            ValidationError: If opts are invalid; nothing is sent in that case
        """
        response = await self._create(opts, volume_create_opts_to_schema)
        parsed = parse_model(VolumeCreateResponse, response.body)
        result = VolumeCreateResult(
            volume=volume_from_schema(parsed.volume),
            action=action_from_schema(parsed.action) if parsed.action else None,
            next_actions=actions_from_schema(parsed.next_actions),
        )
        return result, response

    async def update(self, volume: Volume, opts: VolumeUpdateOpts) -> tuple[Volume, Response]:
        return await self._update(volume, volume_update_opts_to_schema(opts))

    async def attach(self, volume: Volume, server: Server) -> tuple[Action, Response]:
        return await self.attach_with_opts(volume, VolumeAttachOpts(server=server))

    async def attach_with_opts(
        self, volume: Volume, opts: VolumeAttachOpts
    ) -> tuple[Action, Response]:
        opts.validate()
        return await self._action(volume, APIEndpoints.ATTACH, volume_attach_opts_to_schema(opts))

    async def detach(self, volume: Volume) -> tuple[Action, Response]:
        return await self._action(volume, APIEndpoints.DETACH, VolumeActionDetachRequest())

    async def resize(self, volume: Volume, size: int) -> tuple[Action, Response]:
        """Grow a volume to ``size`` GB. Volumes cannot shrink."""
        if size <= 0:
            raise ValidationError("size must be greater than 0", field="size")
        return await self._action(volume, APIEndpoints.RESIZE, VolumeActionResizeRequest(size=size))

    async def change_protection(
        self, volume: Volume, opts: VolumeChangeProtectionOpts
    ) -> tuple[Action, Response]:
        return await self._action(
            volume, APIEndpoints.CHANGE_PROTECTION, volume_change_protection_opts_to_schema(opts)
        )
