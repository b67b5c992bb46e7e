"""Generic resource client shared by every resource kind.

Architecture Overview:
---------------------
Each resource kind (firewall, volume, primary IP, action) is described by a
``ResourceKind``: its display name, path segment, JSON body keys, wire model
and mapper function. The generic clients below implement every operation
whose shape does not depend on the kind:

    ResourceClient          get_by_id, list, all, all_with_opts
    ManagedResourceClient   + get_by_name, get, delete, and the create,
                            update and action-request helpers kind clients
                            build their typed operations on

Common Endpoint Patterns:
------------------------
- GET    /<kind>                      list one page
- GET    /<kind>/<id>                 get by ID
- POST   /<kind>                      create
- PUT    /<kind>/<id>                 update
- DELETE /<kind>/<id>                 delete
- POST   /<kind>/<id>/actions/<verb>  kind-specific action
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Generic, Protocol, TypeVar

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..api.endpoints import APIEndpoints
from ..api.schema import ActionResponse, ActionsResponse, dump_request
from ..api.transport import Response, Transport
from ..constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..models.action import Action
from ..models.common import ListOpts, NamedListOpts
from ..utils.exceptions import ErrorCode, MalformedDataError, TransportError, is_error
from .mapper import action_from_schema, actions_from_schema
from .pagination import iter_pages
from .resolver import first_by_name, get_by_id_or_name

logger = structlog.get_logger(__name__)


class Identified(Protocol):
    @property
    def id(self) -> int: ...


E = TypeVar("E", bound=Identified)
W = TypeVar("W", bound=BaseModel)
L = TypeVar("L", bound=ListOpts)
N = TypeVar("N", bound=NamedListOpts)
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ResourceKind(Generic[E, W]):
    """Descriptor of one resource kind."""

    name: str  # Display name, e.g. "Firewall"
    path: str  # Path segment, e.g. "firewalls"
    singular_key: str  # Body key of a single entity, e.g. "firewall"
    plural_key: str  # Body key of a list page, e.g. "firewalls"
    schema: type[W]
    from_schema: Callable[[W], E]


def parse_model(model: type[M], data: Any) -> M:
    """Validate wire data, surfacing failures as MalformedDataError."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise MalformedDataError(f"Invalid {model.__name__} payload: {e}", e) from e


class ResourceClient(Generic[E, W, L]):
    """Read operations shared by every resource kind."""

    kind: ResourceKind[E, W]
    list_opts_class: type[L]

    def __init__(self, transport: Transport):
        self._transport = transport

    def _entity_from_body(self, body: dict[str, Any], key: str | None = None) -> E:
        key = key or self.kind.singular_key
        if key not in body:
            raise MalformedDataError(f"Response has no {key!r} object")
        return self.kind.from_schema(parse_model(self.kind.schema, body[key]))

    async def get_by_id(self, resource_id: int) -> tuple[E | None, Response | None]:
        """
        Retrieve an entity by its ID.

        Returns:
            (entity, response), or (None, None) if the entity does not exist
        """
        path = APIEndpoints.by_id(self.kind.path, resource_id)
        try:
            response = await self._transport.request("GET", path)
        except TransportError as e:
            if is_error(e, ErrorCode.NOT_FOUND):
                logger.debug("Resource not found", kind=self.kind.name, id=resource_id)
                return None, None
            raise
        return self._entity_from_body(response.body), response

    async def all(self) -> list[E]:
        """Return every entity."""
        return await self.all_with_opts(self.list_opts_class(per_page=DEFAULT_PAGE_SIZE))

    async def all_with_opts(self, opts: L | None = None) -> list[E]:
        """
        Return every entity matching the options, walking all pages.

        The page number in opts is ignored; per_page defaults to 50 and is
        capped at the largest page size the API accepts.
        """
        opts = opts if opts is not None else self.list_opts_class()
        if opts.per_page <= 0:
            opts = replace(opts, per_page=DEFAULT_PAGE_SIZE)
        elif opts.per_page > MAX_PAGE_SIZE:
            opts = replace(opts, per_page=MAX_PAGE_SIZE)

        async def list_page(page: int) -> tuple[list[E], Response]:
            return await self.list(replace(opts, page=page))

        return await iter_pages(list_page)

    # Kept last in the class body: the name shadows the builtin for later annotations
    async def list(self, opts: L | None = None) -> tuple[list[E], Response]:
        """
        Return one page of entities.

        Filters whose value is empty or zero are not sent.
        """
        opts = opts if opts is not None else self.list_opts_class()
        response = await self._transport.request(
            "GET", APIEndpoints.collection(self.kind.path), params=opts.values()
        )
        key = self.kind.plural_key
        raw_items = response.body.get(key)
        if not isinstance(raw_items, list):
            raise MalformedDataError(f"Response has no {key!r} list")
        items = [self.kind.from_schema(parse_model(self.kind.schema, raw)) for raw in raw_items]
        logger.debug("Listed page", kind=self.kind.name, page=opts.page, count=len(items))
        return items, response


class ManagedResourceClient(ResourceClient[E, W, N]):
    """Resource client for kinds that are named and can be created and deleted."""

    async def get_by_name(self, name: str) -> tuple[E | None, Response | None]:
        """
        Retrieve an entity by its name.

        Returns:
            (entity, response), entity None if nothing carries the name

        Raises:
            AmbiguousNameError: If more than one entity carries the name
        """

        async def list_by_name() -> tuple[list[E], Response]:
            return await self.list(self.list_opts_class(name=name))

        return await first_by_name(self.kind.name, name, list_by_name)

    async def get(self, id_or_name: str) -> tuple[E | None, Response | None]:
        """
        Retrieve an entity by ID if the input parses as an integer, else by name.

        Returns:
            (entity, response), entity None if nothing matches
        """
        return await get_by_id_or_name(id_or_name, self.get_by_id, self.get_by_name)

    async def delete(self, entity: E) -> Response:
        """
        Delete an entity.

        Not-found is raised here, unlike in the get operations.
        """
        path = APIEndpoints.by_id(self.kind.path, entity.id)
        response = await self._transport.request("DELETE", path)
        logger.info("Deleted resource", kind=self.kind.name, id=entity.id)
        return response

    async def _create(self, opts: Any, to_request: Callable[[Any], BaseModel]) -> Response:
        """Validate opts locally, then POST the mapped request body."""
        opts.validate()
        body = dump_request(to_request(opts))
        response = await self._transport.request(
            "POST", APIEndpoints.collection(self.kind.path), json=body
        )
        logger.info("Created resource", kind=self.kind.name, name=body.get("name"))
        return response

    async def _update(self, entity: E, request: BaseModel) -> tuple[E, Response]:
        """PUT only the fields set on the request model."""
        path = APIEndpoints.by_id(self.kind.path, entity.id)
        body = dump_request(request)
        response = await self._transport.request("PUT", path, json=body)
        logger.info("Updated resource", kind=self.kind.name, id=entity.id, fields=sorted(body))
        return self._entity_from_body(response.body), response

    async def _request_action(
        self, entity: E, verb: str, request: BaseModel | None = None
    ) -> Response:
        path = APIEndpoints.resource_action(self.kind.path, entity.id, verb)
        body = dump_request(request) if request is not None else None
        response = await self._transport.request("POST", path, json=body)
        logger.info("Requested action", kind=self.kind.name, id=entity.id, action=verb)
        return response

    async def _action(
        self, entity: E, verb: str, request: BaseModel | None = None
    ) -> tuple[Action, Response]:
        """Issue an action expected to produce a single Action."""
        response = await self._request_action(entity, verb, request)
        parsed = parse_model(ActionResponse, response.body)
        return action_from_schema(parsed.action), response

    async def _actions(
        self, entity: E, verb: str, request: BaseModel | None = None
    ) -> tuple[list[Action], Response]:
        """Issue an action expected to produce a list of Actions."""
        response = await self._request_action(entity, verb, request)
        parsed = parse_model(ActionsResponse, response.body)
        return actions_from_schema(parsed.actions), response
