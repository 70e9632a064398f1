"""
Unit Tests for Error Handling

Tests for custom exceptions, error handlers, and error response formats.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from taskapi.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    ErrorCode,
    InvalidCredentialError,
    MalformedCredentialError,
    MethodNotAllowedError,
    MissingCredentialError,
    NotFoundError,
    UnprocessableEntityError,
)
from taskapi.middleware.error_handler import register_exception_handlers


@pytest.mark.unit
class TestCustomExceptions:
    """Test custom exception classes"""

    def test_app_exception_defaults(self):
        """Test AppException with default values"""
        exc = AppException("Simple error")

        assert exc.message == "Simple error"
        assert exc.status_code == 500
        assert exc.error_code == ErrorCode.INTERNAL_ERROR
        assert exc.details == {}
        assert exc.headers == {}
        assert str(exc) == "Simple error"

    def test_credential_errors(self):
        """Test the three authentication failures"""
        assert MissingCredentialError().status_code == 400
        assert MalformedCredentialError().status_code == 400
        assert InvalidCredentialError().status_code == 401
        assert MissingCredentialError("Missing API key").to_dict() == {"message": "Missing API key"}

    def test_not_found_error(self):
        """Test NotFoundError message format"""
        exc = NotFoundError("Task", "123")

        assert exc.status_code == 404
        assert exc.to_dict() == {"message": "Task with ID 123 not found"}

    def test_method_not_allowed_error(self):
        """Test MethodNotAllowedError body and Allow header"""
        exc = MethodNotAllowedError(["GET", "PATCH", "DELETE"])

        assert exc.status_code == 405
        assert exc.headers == {"Allow": "GET, PATCH, DELETE"}
        assert exc.to_dict() == {}

    def test_unprocessable_entity_error(self):
        """Test UnprocessableEntityError keeps every message"""
        exc = UnprocessableEntityError(["Name is required", "Priority must be an integer"])

        assert exc.status_code == 422
        assert exc.to_dict() == {"errors": ["Name is required", "Priority must be an integer"]}

    def test_conflict_details_not_rendered(self):
        """Details are for logs, not response bodies"""
        exc = ConflictError("Username already registered", details={"username": "alice"})

        assert exc.to_dict() == {"message": "Username already registered"}


class Item(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: int


@pytest.fixture
def error_app():
    """Small app wired with the global exception handlers"""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/bad-request")
    async def bad_request():
        raise BadRequestError("Request body is not valid JSON")

    @app.get("/method")
    async def method():
        raise MethodNotAllowedError(["GET", "POST"])

    @app.get("/invalid")
    async def invalid():
        raise UnprocessableEntityError(["Name is required"])

    @app.post("/items")
    async def create_item(item: Item):
        return item

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    return app


@pytest.fixture
def error_client(error_app):
    return TestClient(error_app, raise_server_exceptions=False)


@pytest.mark.unit
class TestExceptionHandlers:
    """Test handler responses through a real ASGI app"""

    def test_app_exception_response(self, error_client):
        response = error_client.get("/bad-request")

        assert response.status_code == 400
        assert response.json() == {"message": "Request body is not valid JSON"}

    def test_method_not_allowed_response(self, error_client):
        response = error_client.get("/method")

        assert response.status_code == 405
        assert response.headers["Allow"] == "GET, POST"
        assert response.json() == {}

    def test_unprocessable_entity_response(self, error_client):
        response = error_client.get("/invalid")

        assert response.status_code == 422
        assert response.json() == {"errors": ["Name is required"]}

    def test_unknown_route(self, error_client):
        response = error_client.get("/nowhere")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}

    def test_request_validation_error(self, error_client):
        response = error_client.post("/items", json={"name": ""})

        assert response.status_code == 422
        errors = response.json()["errors"]
        assert len(errors) == 2
        assert any(error.startswith("name:") for error in errors)
        assert any(error.startswith("quantity:") for error in errors)

    def test_unhandled_exception_hides_internals(self, error_client):
        response = error_client.get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"
        assert "database exploded" not in response.text
