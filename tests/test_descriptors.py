# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Descriptor discrimination and per-field resolution."""

import copy
from typing import Annotated, NewType

import httpx
import msgspec
import pytest

from rest_api_client import body, error, headers, response, url
from rest_api_client._types import Unset, UnsetType
from rest_api_client.errors import DecodeError, DescriptorError, EncodeError
from rest_api_client.schema import decode, encode, is_schema

from .conftest import ApiError, NewTodo, Todo

TodoId = NewType("TodoId", int)


class _CallableThing:
    def __call__(self, res):
        return res


class TestSchemaDiscrimination:
    """One structural check decides schema vs function for every field."""

    @pytest.mark.parametrize(
        "candidate",
        [
            Todo,
            dict,
            int,
            list[int],
            dict[str, Todo],
            int | None,
            Annotated[int, msgspec.Meta(ge=0)],
            TodoId,
        ],
    )
    def test_types_and_aliases_are_schemas(self, candidate):
        assert is_schema(candidate)

    @pytest.mark.parametrize(
        "candidate",
        [lambda res: res, print, _CallableThing(), _CallableThing().__call__],
    )
    def test_callables_are_functions(self, candidate):
        assert not is_schema(candidate)

    @pytest.mark.parametrize("module", [body, response, error])
    def test_from_maker_uses_shared_discrimination(self, module):
        assert isinstance(module.from_maker(Todo), module.Schema)
        assert isinstance(module.from_maker(lambda x: x), module.Fn)
        assert module.from_maker(None) is None

    @pytest.mark.parametrize("module", [body, response, error])
    def test_tagged_descriptors_pass_through(self, module):
        desc = module.schema(ApiError)
        assert module.from_maker(desc) is desc

    def test_field_variants_are_distinct_types(self):
        """An error descriptor is not a response descriptor."""
        assert not isinstance(error.schema(ApiError), response.Schema)
        assert not isinstance(response.fn(lambda r: r), error.Fn)

    def test_url_from_maker(self):
        assert url.from_maker("/todos") == url.Value("/todos")
        assert isinstance(url.from_maker(lambda p: "/x"), url.Fn)

    def test_headers_from_maker(self):
        desc = headers.from_maker({"x-api-version": "v1"})
        assert isinstance(desc, headers.Value)
        assert dict(desc.headers) == {"x-api-version": "v1"}
        assert isinstance(headers.from_maker(lambda p: {}), headers.Fn)

    @pytest.mark.parametrize(
        ("module", "maker"),
        [(url, 42), (headers, "not-a-mapping"), (body, 3.5), (response, "Todo"), (error, 7)],
    )
    def test_invalid_makers_rejected(self, module, maker):
        with pytest.raises(DescriptorError):
            module.from_maker(maker)

    def test_descriptor_error_is_type_error(self):
        with pytest.raises(TypeError):
            url.from_maker(None)

    @pytest.mark.anyio
    async def test_newtype_response_decodes_body(self):
        desc = response.from_maker(TodoId)
        assert isinstance(desc, response.Schema)
        assert await response.resolve(desc, httpx.Response(200, content=b"7"), {}) == 7

    @pytest.mark.anyio
    @pytest.mark.parametrize("module", [url, headers, response, error])
    async def test_resolver_rejects_unknown_descriptor(self, module):
        with pytest.raises(DescriptorError):
            await module.resolve("/todos", {}, {})


class TestUrlResolution:
    @pytest.mark.anyio
    async def test_static_url_used_as_is(self):
        assert await url.resolve(url.value("/todos/1"), {}, {}) == "/todos/1"

    @pytest.mark.anyio
    async def test_function_receives_url_params(self):
        desc = url.fn(lambda p: f"/todos/{p['id']}")
        assert await url.resolve(desc, {"url": {"id": "42"}}, {}) == "/todos/42"

    @pytest.mark.anyio
    async def test_returned_string_is_not_validated(self):
        desc = url.fn(lambda p: "not a url")
        assert await url.resolve(desc, {}, {}) == "not a url"


class TestHeaderResolution:
    @pytest.mark.anyio
    async def test_absent_contributes_nothing(self):
        assert await headers.resolve(None, {}, {}) == {}

    @pytest.mark.anyio
    async def test_async_function_with_dependency(self):
        async def auth(params, *, session):
            return {"x-session": session, "x-user": params["user"]}

        desc = headers.fn(auth, requires=("session",))
        resolved = await headers.resolve(desc, {"headers": {"user": "ada"}}, {"session": "s-1"})
        assert resolved == {"x-session": "s-1", "x-user": "ada"}

    @pytest.mark.anyio
    async def test_function_failure_propagates(self):
        def broken(params):
            raise PermissionError("no session")

        with pytest.raises(PermissionError, match="no session"):
            await headers.resolve(headers.fn(broken), {}, {})


class TestBodyEncoding:
    @pytest.mark.anyio
    async def test_not_engaged_without_descriptor(self):
        assert await body.encode(None, {"body": {"title": "x"}}, {}) is None

    @pytest.mark.anyio
    async def test_not_engaged_without_body_param(self):
        assert await body.encode(body.schema(NewTodo), {}, {}) is None

    @pytest.mark.anyio
    async def test_schema_validates_and_encodes(self):
        content = await body.encode(body.schema(NewTodo), {"body": {"title": "x"}}, {})
        assert msgspec.json.decode(content) == {"title": "x", "completed": False}

    @pytest.mark.anyio
    async def test_struct_instance_encodes(self):
        content = await body.encode(body.schema(NewTodo), {"body": NewTodo(title="y")}, {})
        assert msgspec.json.decode(content) == {"title": "y", "completed": False}

    @pytest.mark.anyio
    async def test_invalid_body_is_encode_error(self):
        with pytest.raises(EncodeError):
            await body.encode(body.schema(NewTodo), {"body": {"title": 1}}, {})

    @pytest.mark.anyio
    async def test_custom_encoder(self):
        desc = body.fn(lambda b: {"wrapped": b})
        content = await body.encode(desc, {"body": [1, 2]}, {})
        assert msgspec.json.decode(content) == {"wrapped": [1, 2]}

    @pytest.mark.anyio
    async def test_custom_encoder_unserializable_result(self):
        desc = body.fn(lambda b: object())
        with pytest.raises(EncodeError):
            await body.encode(desc, {"body": None}, {})


class TestSchemaCapability:
    def test_decode_validates_parsed_json(self):
        assert decode(Todo, {"id": "1", "title": "t"}) == Todo(id="1", title="t")

    def test_decode_failure(self):
        with pytest.raises(DecodeError) as exc_info:
            decode(Todo, {"id": "1"})
        assert exc_info.value.context["schema"] == "Todo"

    def test_encode_returns_builtins(self):
        assert encode(list[Todo], [Todo(id="1", title="t")]) == [
            {"id": "1", "title": "t", "completed": False}
        ]

    def test_encode_failure(self):
        with pytest.raises(EncodeError):
            encode(Annotated[int, msgspec.Meta(ge=0)], -1)

    def test_unset_sentinel_is_falsy_singleton(self):
        assert not Unset
        assert copy.deepcopy(Unset) is Unset
        assert UnsetType() is Unset
