"""
Integration Tests for the Render API
====================================

HTTP contract tests for the render, health and info endpoints.
"""

from unittest.mock import Mock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from matrix_renderer.api.main import create_app
from matrix_renderer.api.routes.render import render_matrix_to_png
from matrix_renderer.core.exceptions import InvalidInputError, RenderError
from matrix_renderer.core.rendering.renderer import RenderMode
from matrix_renderer.models.schemas import MatrixPayload

from tests.utils.assertions import assert_error_response, assert_valid_png_result, decode_png
from tests.utils.data_generators import MatrixDataGenerator


class TestAppFactory:
    """Test explicit application construction."""

    def test_factory_builds_independent_apps(self, test_settings):
        first = create_app(test_settings)
        second = create_app(test_settings)
        assert isinstance(first, FastAPI)
        assert first is not second
        assert first.state.settings is test_settings

    def test_routes_registered(self, app):
        paths = {route.path for route in app.routes}
        assert {"/renderImage", "/renderRealistic", "/health", "/"} <= paths


class TestGeneralEndpoints:
    """Test health and info endpoints."""

    def test_root_endpoint(self, client):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == "Matrix Renderer"
        assert data["version"] == "1.0.0"
        assert data["pixel_size"] == {"default": 4, "min": 1, "max": 29}
        assert "render_block" in data["endpoints"]

    def test_health_check_endpoint(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        health = response.json()
        assert health["status"] == "healthy"
        assert health["version"] == "1.0.0"
        assert health["render_modes"] == ["block", "realistic"]

    def test_request_id_header(self, client):
        response = client.get("/health")
        assert response.headers.get("X-Request-ID")


class TestRenderImage:
    """Test block-mode rendering over HTTP."""

    def test_single_red_cell(self, client):
        body = MatrixDataGenerator.generate_payload(1, 1, [0xFF0000])
        response = client.post("/renderImage", params={"pixSize": 2}, json=body)

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"] == "image/png"
        assert int(response.headers["content-length"]) == len(response.content)

        image = decode_png(response.content)
        assert image.size == (2, 2)
        assert set(image.getdata()) == {(255, 0, 0, 255)}

    def test_default_pixel_size(self, client, sample_payload):
        response = client.post("/renderImage", json=sample_payload)

        assert response.status_code == status.HTTP_200_OK
        assert decode_png(response.content).size == (8, 8)

    def test_column_keyed_layout(self, client, sample_payload):
        response = client.post("/renderImage", params={"pixSize": 1}, json=sample_payload)
        image = decode_png(response.content)
        # bitmap = [red, green, blue, white] with 2 rows: (0,1) is green, (1,0) is blue
        assert image.getpixel((0, 0)) == (255, 0, 0, 255)
        assert image.getpixel((0, 1)) == (0, 255, 0, 255)
        assert image.getpixel((1, 0)) == (0, 0, 255, 255)
        assert image.getpixel((1, 1)) == (255, 255, 255, 255)

    @pytest.mark.parametrize("pix_size", ["1", "29"])
    def test_pixel_size_bounds_accepted(self, client, pix_size):
        body = MatrixDataGenerator.generate_payload(2, 3)
        response = client.post("/renderImage", params={"pixSize": pix_size}, json=body)

        assert response.status_code == status.HTTP_200_OK
        size = int(pix_size)
        assert decode_png(response.content).size == (3 * size, 2 * size)

    @pytest.mark.parametrize("pix_size", ["0", "-1", "30", "100", "big", "1_0", " 5", "٥"])
    def test_invalid_pixel_size(self, client, sample_payload, pix_size):
        response = client.post("/renderImage", params={"pixSize": pix_size}, json=sample_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert_error_response(body, "INVALID_INPUT")
        assert pix_size in body["error"]

    def test_dimension_mismatch(self, client):
        body = MatrixDataGenerator.generate_payload(2, 2, [0, 0, 0])
        response = client.post("/renderImage", json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert_error_response(response.json(), "DIMENSION_MISMATCH")

    def test_malformed_json(self, client):
        response = client.post(
            "/renderImage",
            content=b'{"rows": 1, "columns":',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert_error_response(body, "INVALID_INPUT")
        assert body["error"].startswith("Invalid JSON")

    @pytest.mark.parametrize(
        "body",
        [
            {"rows": 0, "columns": 1, "bitmap": []},
            {"rows": 1, "columns": 1, "bitmap": [-5]},
            {"rows": 1, "columns": 1, "bitmap": "ff0000"},
            {"columns": 1, "bitmap": [0]},
        ],
    )
    def test_invalid_matrix_shape(self, client, body):
        response = client.post("/renderImage", json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert_error_response(response.json(), "INVALID_INPUT")

    def test_error_carries_request_id(self, client):
        response = client.post("/renderImage", params={"pixSize": "0"}, json={})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["request_id"] == response.headers["X-Request-ID"]


class TestRenderRealistic:
    """Test realistic-mode rendering over HTTP."""

    def test_single_red_cell(self, client):
        body = MatrixDataGenerator.generate_payload(1, 1, [0xFF0000])
        response = client.post("/renderRealistic", params={"pixSize": 2}, json=body)

        assert response.status_code == status.HTTP_200_OK
        image = decode_png(response.content)
        assert image.size == (3, 3)
        assert image.getpixel((1, 1)) == (255, 0, 0, 255)
        assert image.getpixel((1, 0)) == (69, 69, 69, 185)
        assert image.getpixel((0, 0)) == (0, 0, 0, 255)

    def test_even_default_is_normalized(self, client, sample_payload):
        response = client.post("/renderRealistic", json=sample_payload)

        assert response.status_code == status.HTTP_200_OK
        assert decode_png(response.content).size == (10, 10)

    def test_invalid_pixel_size(self, client, sample_payload):
        response = client.post("/renderRealistic", params={"pixSize": "30"}, json=sample_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert_error_response(response.json(), "INVALID_INPUT")

    def test_identical_requests_identical_output(self, client):
        matrix = MatrixDataGenerator.generate_random(rows=3, columns=4, seed=11)
        body = MatrixDataGenerator.generate_payload(3, 4, list(matrix.bitmap))

        first = client.post("/renderRealistic", params={"pixSize": 6}, json=body)
        second = client.post("/renderRealistic", params={"pixSize": 6}, json=body)
        assert first.content == second.content


class TestRenderMatrixToPNG:
    """Test the render pipeline without the HTTP layer."""

    @pytest.mark.asyncio
    async def test_pipeline(self, test_settings):
        payload = MatrixPayload(rows=2, columns=3, bitmap=[0x00FF00] * 6)
        result = await render_matrix_to_png(payload, "3", RenderMode.BLOCK, test_settings)

        assert_valid_png_result(result)
        assert (result.width, result.height) == (9, 6)
        assert result.metadata["render_mode"] == "block"
        assert result.metadata["pixel_size"] == 3

    @pytest.mark.asyncio
    async def test_invalid_pixel_size(self, test_settings):
        payload = MatrixPayload(rows=1, columns=1, bitmap=[0])
        with pytest.raises(InvalidInputError):
            await render_matrix_to_png(payload, "0", RenderMode.REALISTIC, test_settings)


class TestUnexpectedErrors:
    """Test the catch-all error handler."""

    def test_internal_error(self, test_settings, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("matrix_renderer.api.routes.render.render_matrix", explode)
        app = create_app(test_settings)
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.post(
                "/renderImage", json=MatrixDataGenerator.generate_payload(1, 1)
            )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = response.json()
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"] == {"exception": "boom"}


class TestErrorLogLevels:
    """Client errors log at warning level, server errors at error level."""

    @pytest.fixture
    def mock_logger(self, monkeypatch):
        mock = Mock()
        monkeypatch.setattr("matrix_renderer.api.main.logger", mock)
        return mock

    def test_invalid_pixel_size_logs_warning(self, test_settings, mock_logger, sample_payload):
        with TestClient(create_app(test_settings)) as client:
            response = client.post("/renderImage", params={"pixSize": "0"}, json=sample_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args == ("Render error",)
        mock_logger.error.assert_not_called()

    def test_malformed_body_logs_warning(self, test_settings, mock_logger):
        with TestClient(create_app(test_settings)) as client:
            response = client.post("/renderImage", json={"rows": "x"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_logger.warning.assert_called_once()
        mock_logger.error.assert_not_called()

    def test_server_side_render_error_logs_error(self, test_settings, mock_logger, monkeypatch):
        def fail(*args, **kwargs):
            raise RenderError("encoder unavailable")

        monkeypatch.setattr("matrix_renderer.api.routes.render.render_matrix", fail)
        with TestClient(create_app(test_settings)) as client:
            response = client.post(
                "/renderImage", json=MatrixDataGenerator.generate_payload(1, 1)
            )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert_error_response(response.json(), "RENDER_ERROR")
        mock_logger.error.assert_called_once()
        mock_logger.warning.assert_not_called()


class TestCORS:
    """Test cross-origin headers."""

    def test_wildcard_origin_without_credentials(self, client):
        response = client.get("/health", headers={"Origin": "http://example.com"})

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-credentials" not in response.headers

    def test_preflight_does_not_allow_credentials(self, client):
        response = client.options(
            "/renderImage",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access-control-allow-credentials" not in response.headers
