"""Unit tests for the API exception handlers.

Handlers are called directly with a mocked request to check the JSON body
and status code each domain error maps to.
"""

import json
from unittest.mock import MagicMock

from fastapi import status
from pydantic import BaseModel, ValidationError

from api.exceptions import (
    generic_exception_handler,
    invalid_state_handler,
    not_found_handler,
    template_load_error_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.models import ErrorResponse
from models.errors import InvalidStateError, NoCommitError, NotFoundError, TemplateLoadError


def make_request():
    request = MagicMock()
    request.method = "GET"
    request.url.path = "/api/test"
    return request


def body_of(response) -> dict:
    return json.loads(response.body)


class TestDomainErrors:
    """Tests for the domain error classes."""

    def test_not_found_message(self):
        exc = NotFoundError("branch", "feature")

        assert exc.kind == "branch"
        assert exc.key == "feature"
        assert str(exc) == "Branch not found: feature"

    def test_no_commit_is_invalid_state(self):
        exc = NoCommitError("main")

        assert isinstance(exc, InvalidStateError)
        assert "main" in exc.message

    def test_template_load_error_message(self):
        exc = TemplateLoadError("DeFi/x", "missing template.json")
        assert str(exc) == "Failed to load template at DeFi/x: missing template.json"


class TestHandlers:
    """Tests for status codes and bodies produced by each handler."""

    async def test_not_found(self):
        response = await not_found_handler(make_request(), NotFoundError("template", "nope"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = body_of(response)
        assert body["kind"] == "template"
        assert body["key"] == "nope"
        ErrorResponse(**body)

    async def test_invalid_state_reports_subclass_name(self):
        response = await invalid_state_handler(make_request(), NoCommitError("main"))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert body_of(response)["type"] == "NoCommitError"

    async def test_template_load_error(self):
        exc = TemplateLoadError("DeFi/broken/template.json", "invalid JSON")

        response = await template_load_error_handler(make_request(), exc)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert body_of(response)["path"] == "DeFi/broken/template.json"

    async def test_validation_error(self):
        class Sample(BaseModel):
            count: int

        try:
            Sample(count="many")
        except ValidationError as exc:
            response = await validation_exception_handler(make_request(), exc)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        body = body_of(response)
        assert body["validation_errors"][0]["loc"] == ["count"]

    async def test_value_error(self):
        response = await value_error_handler(make_request(), ValueError("bad path"))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert body_of(response)["detail"] == "bad path"

    async def test_generic_error_hides_message(self):
        response = await generic_exception_handler(make_request(), RuntimeError("secret"))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = body_of(response)
        assert "secret" not in body["detail"]
        assert body["type"] == "RuntimeError"
