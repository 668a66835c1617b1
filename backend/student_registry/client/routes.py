# student_registry/client/routes.py
"""
Route table for the request dispatcher.

A route pairs an HTTP verb with an ordered tuple of typed segment matchers
and the local handler that serves it. The first route whose verb and
segments match wins; a path no route matches is sent over the network.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple, Type

import httpx
from pydantic import BaseModel

from ..schemas import GroupCreate, StudentCreate, StudentImport, StudentUpdate, TransferRequestCreate
from . import local


class Segment:
    """Matches one path segment; returns captured params or None"""

    def capture(self, value: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError


@dataclass(frozen=True)
class LiteralSegment(Segment):
    text: str

    def capture(self, value: str) -> Optional[Dict[str, Any]]:
        return {} if value == self.text else None


@dataclass(frozen=True)
class IdSegment(Segment):
    name: str

    def capture(self, value: str) -> Optional[Dict[str, Any]]:
        if value.isascii() and value.isdigit():
            return {self.name: int(value)}
        return None


@dataclass(frozen=True)
class WildcardSegment(Segment):
    name: str

    def capture(self, value: str) -> Optional[Dict[str, Any]]:
        return {self.name: value}


Handler = Callable[..., Any]


@dataclass(frozen=True)
class Route:
    method: str
    pattern: Tuple[Segment, ...]
    handler: Handler
    body: Optional[Type[BaseModel]] = None

    def match(self, method: str, segments: Tuple[str, ...]) -> Optional[Dict[str, Any]]:
        if method != self.method or len(segments) != len(self.pattern):
            return None
        params: Dict[str, Any] = {}
        for matcher, value in zip(self.pattern, segments):
            captured = matcher.capture(value)
            if captured is None:
                return None
            params.update(captured)
        return params


@dataclass(frozen=True)
class RouteMatch:
    route: Route
    params: Dict[str, Any] = field(default_factory=dict)
    query: httpx.QueryParams = field(default_factory=httpx.QueryParams)


API = LiteralSegment("api")
STUDENTS = LiteralSegment("students")
GROUPS = LiteralSegment("groups")
TRANSFER_REQUESTS = LiteralSegment("transfer-requests")
STUDENT_ID = IdSegment("student_id")
GROUP_ID = WildcardSegment("group_id")

ROUTES: Tuple[Route, ...] = (
    Route("GET", (API, STUDENTS), local.list_students),
    Route("POST", (API, STUDENTS), local.create_student, StudentCreate),
    Route("GET", (API, STUDENTS, LiteralSegment("search")), local.search_students),
    Route("POST", (API, STUDENTS, LiteralSegment("import")), local.import_students, StudentImport),
    Route("GET", (API, STUDENTS, STUDENT_ID), local.get_student),
    Route("PATCH", (API, STUDENTS, STUDENT_ID), local.update_student, StudentUpdate),
    Route("DELETE", (API, STUDENTS, STUDENT_ID), local.delete_student),
    Route("GET", (API, STUDENTS, STUDENT_ID, TRANSFER_REQUESTS), local.list_student_transfer_requests),
    Route("GET", (API, GROUPS), local.list_groups),
    Route("POST", (API, GROUPS), local.create_group, GroupCreate),
    Route("DELETE", (API, GROUPS, GROUP_ID), local.delete_group),
    Route("POST", (API, TRANSFER_REQUESTS), local.create_transfer_request, TransferRequestCreate),
)


def split_path(url: str) -> Tuple[Tuple[str, ...], httpx.QueryParams]:
    parsed = httpx.URL(url)
    segments = tuple(segment for segment in parsed.path.split("/") if segment)
    return segments, parsed.params


def match_route(method: str, url: str, routes: Tuple[Route, ...] = ROUTES) -> Optional[RouteMatch]:
    segments, query = split_path(url)
    method = method.upper()
    for route in routes:
        params = route.match(method, segments)
        if params is not None:
            return RouteMatch(route=route, params=params, query=query)
    return None
