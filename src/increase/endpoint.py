from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Sequence, Union

from increase.errors import DefinitionError

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

_HTTP_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE"}
_CAPITAL = re.compile(r"(?<!^)(?=[A-Z])")

# Markers accepted by `to=` when declaring an endpoint.
ROOT = "<root>"
SAME_AS_NAME = "<same_as_name>"

Target = Union[str, Sequence[str], None]

WITH_ID = "id"
WITH_PAGINATION = "pagination"
_WITH_OPTIONS = {WITH_ID, WITH_PAGINATION}


@dataclass(frozen=True)
class EndpointSpec:
    """
    One operation of a resource type: verb + URL shape + pagination flag.

    Shapes (relative to the resource root):
      ()          -> root            or  root/{id}
      (a,)        -> root/a          or  root/{id}/a
      (a, b)      -> root/a/{id}/b   (requires an id)
    """

    name: str
    http_method: HttpMethod
    url_segments: tuple[str, ...] = ()
    requires_id: bool = False
    paginated: bool = False

    def __post_init__(self) -> None:
        if self.http_method not in _HTTP_METHODS:
            raise DefinitionError(f"{self.name}: unsupported HTTP method {self.http_method!r}")
        _check_shape(len(self.url_segments), self.requires_id)
        for seg in self.url_segments:
            if not seg or "/" in seg:
                raise DefinitionError(f"{self.name}: invalid URL segment {seg!r}")

    @property
    def shape(self) -> str:
        """Human readable URL shape, e.g. `/{id}/close`."""
        segs = list(self.url_segments)
        if self.requires_id:
            if len(segs) == 2:
                segs = [segs[0], "{id}", segs[1]]
            else:
                segs = ["{id}"] + segs
        return "/" + "/".join(segs) if segs else "/"


def _check_shape(n_segments: int, requires_id: bool) -> None:
    if n_segments > 2:
        raise DefinitionError("Invalid `to`. Max of 2 elements allowed")
    if n_segments == 2 and not requires_id:
        raise DefinitionError("Only one `to` allowed when not `with` an `id`")


def normalize_with(with_: Union[str, Iterable[str], None]) -> frozenset[str]:
    if with_ is None:
        return frozenset()
    opts = frozenset([with_]) if isinstance(with_, str) else frozenset(with_)
    unknown = opts - _WITH_OPTIONS
    if unknown:
        raise DefinitionError(f"Unknown `with` option(s): {sorted(unknown)}")
    return opts


def normalize_to(to: Target, name: Optional[str] = None) -> tuple[str, ...]:
    """
    Resolve a `to=` declaration into literal URL segments.

    `SAME_AS_NAME` needs the operation name; without one it is kept as a
    placeholder so the shape can still be validated early.
    """
    if to is None or to == ROOT:
        return ()
    if to == SAME_AS_NAME:
        return (name,) if name else (SAME_AS_NAME,)
    if isinstance(to, str):
        return (to,)
    return tuple(seg for seg in to if seg is not None)


def validate_shape(
    to: Target,
    with_: Union[str, Iterable[str], None],
    http_method: Optional[str] = None,
) -> None:
    """Definition-time check; raises DefinitionError on an impossible shape."""
    if http_method is not None and http_method.upper() not in _HTTP_METHODS:
        raise DefinitionError(f"unsupported HTTP method {http_method!r}")
    segments = normalize_to(to)
    _check_shape(len(segments), WITH_ID in normalize_with(with_))
    for seg in segments:
        if not seg or "/" in seg:
            raise DefinitionError(f"invalid URL segment {seg!r}")


def build_spec(
    name: str,
    http_method: str,
    to: Target = SAME_AS_NAME,
    with_: Union[str, Iterable[str], None] = None,
) -> EndpointSpec:
    opts = normalize_with(with_)
    return EndpointSpec(
        name=name,
        http_method=http_method.upper(),
        url_segments=normalize_to(to, name),
        requires_id=WITH_ID in opts,
        paginated=WITH_PAGINATION in opts,
    )


def resource_name(class_name: str) -> str:
    # EventSubscriptions -> Event Subscriptions
    return _CAPITAL.sub(" ", class_name).strip()


def resource_root(name: str) -> str:
    return "/" + name.lower().replace(" ", "_")


def build_path(spec: EndpointSpec, root: str, id: Optional[str] = None) -> str:
    if not spec.requires_id:
        if spec.url_segments:
            return f"{root}/{spec.url_segments[0]}"
        return root

    if not isinstance(id, str):
        raise TypeError(f"{spec.name}: id must be a string, got {type(id).__name__}")
    if not id:
        raise ValueError(f"{spec.name}: id must not be empty")

    if len(spec.url_segments) == 2:
        return f"{root}/{spec.url_segments[0]}/{id}/{spec.url_segments[1]}"
    if len(spec.url_segments) == 1:
        return f"{root}/{id}/{spec.url_segments[0]}"
    return f"{root}/{id}"
