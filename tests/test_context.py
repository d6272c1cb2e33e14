"""Tests for switchyard.context — request-scoped ContextVar."""

import pytest

from switchyard.context import get_request, request_var
from switchyard.http.request import RequestContext
from switchyard.routing.router import Router


class TestRequestVar:
    def test_get_request_raises_outside_context(self) -> None:
        """get_request raises LookupError when no request is active."""
        with pytest.raises(LookupError):
            get_request()

    def test_set_and_get_request(self) -> None:
        request = RequestContext("GET", "/test")
        token = request_var.set(request)
        try:
            assert get_request() is request
            assert get_request().path == "/test"
        finally:
            request_var.reset(token)


class TestDispatchBinding:
    def test_dispatch_uses_bound_request(self) -> None:
        router = Router()
        router.post("/submit", lambda: "submitted")

        token = request_var.set(RequestContext("POST", "/submit"))
        try:
            assert router.dispatch() == "submitted"
        finally:
            request_var.reset(token)

    def test_dispatch_restores_outer_request(self) -> None:
        outer = RequestContext("GET", "/outer")
        router = Router()
        router.get("/inner", lambda: get_request().path)

        token = request_var.set(outer)
        try:
            assert router.dispatch(RequestContext("GET", "/inner")) == "/inner"
            assert get_request() is outer
        finally:
            request_var.reset(token)

    def test_unbound_after_handler_failure(self) -> None:
        def failing() -> None:
            raise ValueError("boom")

        router = Router()
        router.get("/boom", failing)
        router.dispatch(RequestContext("GET", "/boom"))

        with pytest.raises(LookupError):
            get_request()
