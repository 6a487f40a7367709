"""
Tests for the gRPC interface.

Servicer methods are exercised directly with a fake context, and once
through a real in-process gRPC server.
"""

import json
import uuid as uuid_lib
from typing import Any, Iterator
from unittest.mock import MagicMock

import grpc
import pytest

from user_service.application.users.service import UserService
from user_service.domain.users.ports import PasswordHasher, UserRepository
from user_service.interfaces.rpc.server import RpcServer
from user_service.interfaces.rpc.servicer import SERVICE_NAME, UserRpcServicer

ANN = {
    "name": "Ann",
    "email": "ann@x.com",
    "password": "p1",
    "repeated_password": "p1",
}


class AbortCalled(Exception):
    pass


class FakeContext:
    """Records the status passed to abort() and raises like grpc does."""

    def __init__(self) -> None:
        self.code = None
        self.details = None

    def abort(self, code: grpc.StatusCode, details: str) -> None:
        self.code = code
        self.details = details
        raise AbortCalled(details)


def _encode(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def servicer(service: UserService) -> UserRpcServicer:
    return UserRpcServicer(service)


def _call(servicer: UserRpcServicer, method: str, payload: Any) -> dict:
    raw = getattr(servicer, method)(_encode(payload), FakeContext())
    return json.loads(raw)


def _call_failing(servicer: UserRpcServicer, method: str, payload: Any) -> FakeContext:
    context = FakeContext()
    with pytest.raises(AbortCalled):
        getattr(servicer, method)(_encode(payload), context)
    return context


class TestServicer:
    """Tests for UserRpcServicer with a fake context."""

    def test_create_and_get(self, servicer: UserRpcServicer) -> None:
        created = _call(servicer, "Create", ANN)

        fetched = _call(servicer, "GetByUUID", {"uuid": created["uuid"]})

        user = fetched["user"]
        assert user["uuid"] == created["uuid"]
        assert (user["name"], user["email"]) == ("Ann", "ann@x.com")
        assert user["password"] != "p1"

    def test_get_by_email_and_password(self, servicer: UserRpcServicer) -> None:
        created = _call(servicer, "Create", ANN)
        found = _call(
            servicer, "GetByEmailAndPassword", {"email": "ann@x.com", "password": "p1"}
        )
        assert found["user"]["uuid"] == created["uuid"]

    def test_wrong_password_is_invalid_argument(
        self, servicer: UserRpcServicer
    ) -> None:
        _call(servicer, "Create", ANN)
        context = _call_failing(
            servicer,
            "GetByEmailAndPassword",
            {"email": "ann@x.com", "password": "nope"},
        )
        assert context.code == grpc.StatusCode.INVALID_ARGUMENT
        assert context.details == "incorrect password"

    def test_password_mismatch_is_invalid_argument(
        self, servicer: UserRpcServicer
    ) -> None:
        context = _call_failing(servicer, "Create", {**ANN, "repeated_password": "x"})
        assert context.code == grpc.StatusCode.INVALID_ARGUMENT

    def test_update_keeps_unset_fields(self, servicer: UserRpcServicer) -> None:
        user_uuid = _call(servicer, "Create", ANN)["uuid"]

        assert _call(
            servicer,
            "Update",
            {"uuid": user_uuid, "password": "p1", "email": "new@x.com"},
        ) == {}

        user = _call(servicer, "GetByUUID", {"uuid": user_uuid})["user"]
        assert (user["name"], user["email"]) == ("Ann", "new@x.com")

    def test_delete(self, servicer: UserRpcServicer) -> None:
        user_uuid = _call(servicer, "Create", ANN)["uuid"]
        assert _call(servicer, "Delete", {"uuid": user_uuid}) == {}

        context = _call_failing(servicer, "GetByUUID", {"uuid": user_uuid})
        assert context.code == grpc.StatusCode.NOT_FOUND

    @pytest.mark.parametrize("method", ["GetByUUID", "Delete"])
    def test_unknown_uuid_not_found(
        self, servicer: UserRpcServicer, method: str
    ) -> None:
        context = _call_failing(servicer, method, {"uuid": str(uuid_lib.uuid4())})
        assert context.code == grpc.StatusCode.NOT_FOUND

    def test_update_unknown_uuid_not_found(self, servicer: UserRpcServicer) -> None:
        context = _call_failing(
            servicer, "Update", {"uuid": str(uuid_lib.uuid4()), "password": "p1"}
        )
        assert context.code == grpc.StatusCode.NOT_FOUND

    @pytest.mark.parametrize(
        "method, payload",
        [
            ("GetByUUID", {"uuid": ""}),
            ("GetByUUID", {}),
            ("Delete", {"uuid": ""}),
            ("GetByEmailAndPassword", {"email": "ann@x.com", "password": ""}),
            ("Create", {"name": "Ann"}),
        ],
    )
    def test_decode_failures_are_invalid_argument(
        self, servicer: UserRpcServicer, method: str, payload: dict
    ) -> None:
        context = _call_failing(servicer, method, payload)
        assert context.code == grpc.StatusCode.INVALID_ARGUMENT

    def test_malformed_json_is_invalid_argument(
        self, servicer: UserRpcServicer
    ) -> None:
        context = FakeContext()
        with pytest.raises(AbortCalled):
            servicer.Create(b"{broken", context)
        assert context.code == grpc.StatusCode.INVALID_ARGUMENT

    def test_storage_failure_is_internal(self, hasher: PasswordHasher) -> None:
        repository = MagicMock(spec=UserRepository)
        repository.find_by_uuid.side_effect = RuntimeError("db gone")
        servicer = UserRpcServicer(UserService(repository, hasher))

        context = _call_failing(servicer, "GetByUUID", {"uuid": "abc"})

        assert context.code == grpc.StatusCode.INTERNAL
        assert "db gone" not in context.details


class TestRpcServer:
    """Round trip through a real gRPC server on a free local port."""

    @pytest.fixture
    def channel(self, service: UserService) -> Iterator[grpc.Channel]:
        server = RpcServer(service, host="127.0.0.1", port=0, max_workers=2)
        server.start()
        channel = grpc.insecure_channel(f"127.0.0.1:{server.port}")
        try:
            yield channel
        finally:
            channel.close()
            server.stop(grace_seconds=0)

    @staticmethod
    def _invoke(channel: grpc.Channel, method: str, payload: Any) -> dict:
        call = channel.unary_unary(f"/{SERVICE_NAME}/{method}")
        return json.loads(call(_encode(payload), timeout=5))

    def test_create_and_lookup(self, channel: grpc.Channel) -> None:
        user_uuid = self._invoke(channel, "Create", ANN)["uuid"]
        found = self._invoke(
            channel, "GetByEmailAndPassword", {"email": "ann@x.com", "password": "p1"}
        )
        assert found["user"]["uuid"] == user_uuid

    def test_not_found_status(self, channel: grpc.Channel) -> None:
        with pytest.raises(grpc.RpcError) as exc_info:
            self._invoke(channel, "GetByUUID", {"uuid": str(uuid_lib.uuid4())})
        assert exc_info.value.code() == grpc.StatusCode.NOT_FOUND
        assert exc_info.value.details() == "not found"
