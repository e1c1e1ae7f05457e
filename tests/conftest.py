# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures: schemas and a recording stub transport."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import msgspec
import pytest

from rest_api_client.transport import HttpRequest


@pytest.fixture
def anyio_backend():
    """Run async tests on asyncio only."""
    return "asyncio"


class Todo(msgspec.Struct):
    id: str
    title: str
    completed: bool = False


class NewTodo(msgspec.Struct):
    title: str
    completed: bool = False


class ApiError(msgspec.Struct):
    message: str
    code: str | None = None


class OtherError(msgspec.Struct):
    reason: str


class StubTransport:
    """Records every request and answers with a canned response.

    ``reply`` is either an ``httpx.Response`` returned for every request
    or a callable building one from the request.
    """

    def __init__(self, reply: httpx.Response | Callable[[HttpRequest], httpx.Response]):
        self.reply = reply
        self.requests: list[HttpRequest] = []

    async def execute(self, request: HttpRequest) -> httpx.Response:
        self.requests.append(request)
        if callable(self.reply):
            return self.reply(request)
        return self.reply

    @property
    def last(self) -> HttpRequest:
        return self.requests[-1]


@pytest.fixture
def todo_json():
    return {"id": "1", "title": "Write tests", "completed": False}


@pytest.fixture
def ok_transport(todo_json):
    return StubTransport(httpx.Response(200, json=todo_json))
