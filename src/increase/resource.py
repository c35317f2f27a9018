from __future__ import annotations

from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

from increase.client import Client, get_default_client
from increase.config import ClientConfig
from increase.endpoint import (
    SAME_AS_NAME,
    WITH_ID,
    WITH_PAGINATION,
    EndpointSpec,
    Target,
    build_path,
    build_spec,
    resource_name as _resource_name,
    resource_root,
    validate_shape,
)
from increase.errors import DefinitionError
from increase.executor import RequestExecutor
from increase.pagination import PageHandler

_ABSTRACT = (
    "Resource is an abstract class. "
    "Perform actions on its subclasses (Events, PendingTransactions, ...)"
)


def _with_id(id, params=None, headers=None, callback=None):
    return id, params, headers, callback


def _without_id(params=None, headers=None, callback=None):
    return None, params, headers, callback


class Operation:
    """
    A registered endpoint bound either to a resource instance or, when
    reached through the class, to a fresh default-configured instance.
    """

    def __init__(self, spec: EndpointSpec, resource_cls: type, instance: Optional["Resource"] = None):
        self.spec = spec
        self._resource_cls = resource_cls
        self._instance = instance

    def _target(self) -> "Resource":
        if self._instance is not None:
            return self._instance
        return self._resource_cls()

    def _split(self, args: tuple, kwargs: dict) -> tuple:
        if self.spec.requires_id:
            return _with_id(*args, **kwargs)
        return _without_id(*args, **kwargs)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        id, params, headers, callback = self._split(args, kwargs)
        return self._target()._invoke(self.spec, id, params, headers, callback)

    def pages(self, *args: Any, **kwargs: Any) -> Iterator[Any]:
        """Lazy page iterator; same arguments as the call minus `callback`."""
        id, params, headers, callback = self._split(args, kwargs)
        if callback is not None:
            raise TypeError("pages() does not take a callback")
        return self._target()._pages(self.spec, id, params, headers)

    def __repr__(self) -> str:
        owner = self._resource_cls.__name__
        return f"<operation {owner}.{self.spec.name} {self.spec.http_method} {self.spec.shape}>"


class Endpoint:
    """
    Class-body declaration of one operation:

        class Accounts(Resource):
            list = Endpoint.list()
            close = endpoint("POST", with_="id")   # POST /accounts/{id}/close
    """

    def __init__(
        self,
        http_method: str,
        to: Target = SAME_AS_NAME,
        with_: Union[str, tuple, list, None] = None,
    ):
        self.http_method = http_method
        self.to = to
        self.with_ = with_
        # validate now so a bad shape fails while the class statement runs
        validate_shape(to, with_, http_method)
        self.spec: Optional[EndpointSpec] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.spec = build_spec(name, self.http_method, self.to, self.with_)
        owner._register_spec(self.spec)

    def __get__(self, obj: Optional["Resource"], owner: type) -> Operation:
        if self.spec is None:
            raise DefinitionError("Endpoint used before being attached to a resource class")
        return Operation(self.spec, owner, obj)

    # Shortcuts for the endpoints nearly every resource has.

    @staticmethod
    def create() -> "Endpoint":
        return Endpoint("POST", to=None)

    @staticmethod
    def list() -> "Endpoint":
        return Endpoint("GET", to=None, with_=WITH_PAGINATION)

    @staticmethod
    def update() -> "Endpoint":
        return Endpoint("PATCH", to=None, with_=WITH_ID)

    @staticmethod
    def retrieve() -> "Endpoint":
        return Endpoint("GET", to=None, with_=WITH_ID)


def endpoint(
    http_method: str,
    to: Target = SAME_AS_NAME,
    with_: Union[str, tuple, list, None] = None,
) -> Endpoint:
    return Endpoint(http_method, to=to, with_=with_)


def register(
    resource_cls: type,
    name: str,
    http_method: str,
    to: Target = SAME_AS_NAME,
    with_: Union[str, tuple, list, None] = None,
) -> Endpoint:
    """Attach an endpoint to an already defined resource class."""
    if name in resource_cls.endpoints():
        raise DefinitionError(f"{resource_cls.__name__}.{name} is already registered")
    ep = Endpoint(http_method, to=to, with_=with_)
    setattr(resource_cls, name, ep)
    ep.__set_name__(resource_cls, name)
    return ep


class Resource:
    NAME: Optional[str] = None

    _endpoints: dict[str, EndpointSpec] = {}

    def __init__(self, client: Optional[Client] = None):
        if type(self) is Resource:
            raise NotImplementedError(_ABSTRACT)
        self.client = client or get_default_client()
        self._executor = RequestExecutor(self.client.connection)

    @classmethod
    def with_config(cls, config: Union[Client, ClientConfig, Mapping[str, Any]]) -> "Resource":
        if isinstance(config, Client):
            return cls(client=config)
        if isinstance(config, ClientConfig):
            return cls(client=Client(config))
        if isinstance(config, MappingABC):
            return cls(client=Client(**config))
        raise TypeError(f"Unsupported config type: {type(config).__name__}")

    @classmethod
    def resource_name(cls) -> str:
        if cls is Resource:
            raise NotImplementedError(_ABSTRACT)
        return cls.NAME or _resource_name(cls.__name__)

    @classmethod
    def resource_url(cls) -> str:
        return resource_root(cls.resource_name())

    @classmethod
    def endpoints(cls) -> Mapping[str, EndpointSpec]:
        return MappingProxyType(cls._endpoints)

    @classmethod
    def _register_spec(cls, spec: EndpointSpec) -> None:
        # give each class its own table, seeded from the parent's
        if "_endpoints" not in cls.__dict__:
            cls._endpoints = dict(cls._endpoints)
        cls._endpoints[spec.name] = spec

    def _invoke(
        self,
        spec: EndpointSpec,
        id: Optional[str],
        params: Optional[Mapping[str, Any]],
        headers: Optional[Mapping[str, str]],
        callback: Optional[PageHandler],
    ) -> Any:
        path = build_path(spec, self.resource_url(), id)
        if spec.paginated:
            return self._executor.paginator.paginate(spec.http_method, path, params, headers, callback)
        return self._executor.request(spec.http_method, path, params, headers, callback)

    def _pages(
        self,
        spec: EndpointSpec,
        id: Optional[str],
        params: Optional[Mapping[str, Any]],
        headers: Optional[Mapping[str, str]],
    ) -> Iterator[Any]:
        path = build_path(spec, self.resource_url(), id)
        return self._executor.paginator.iter_pages(spec.http_method, path, params, headers)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.resource_url()} client={self.client!r}>"
