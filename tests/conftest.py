"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides test settings, the FastAPI test client and sample matrices.
"""

from typing import Any, Dict, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic_settings import SettingsConfigDict

from matrix_renderer.api.main import create_app
from matrix_renderer.config.settings import Settings
from matrix_renderer.core.matrix import Matrix
from matrix_renderer.core.rendering.block_renderer import BlockRenderer
from matrix_renderer.core.rendering.circle_renderer import CircleRenderer

from tests.utils.data_generators import MatrixDataGenerator, pack_color


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "DEBUG"

    model_config = SettingsConfigDict(env_file=".env.test", env_prefix="MATRIX_RENDERER_TEST_")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(scope="session")
def app(test_settings: TestSettings) -> FastAPI:
    """FastAPI application built from test settings."""
    return create_app(test_settings)


@pytest.fixture(scope="session")
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def block_renderer() -> BlockRenderer:
    return BlockRenderer()


@pytest.fixture
def circle_renderer() -> CircleRenderer:
    return CircleRenderer()


@pytest.fixture
def red_cell() -> Matrix:
    """1x1 matrix holding pure red."""
    return Matrix(rows=1, columns=1, bitmap=(pack_color(255, 0, 0),))


@pytest.fixture
def two_by_three() -> Matrix:
    """
    2 rows x 3 columns with a distinct color per cell.

    Cell (x, y) lives at bitmap[x * 2 + y].
    """
    bitmap = (
        pack_color(255, 0, 0),  # (0, 0)
        pack_color(0, 255, 0),  # (0, 1)
        pack_color(0, 0, 255),  # (1, 0)
        pack_color(255, 255, 0),  # (1, 1)
        pack_color(0, 255, 255),  # (2, 0)
        pack_color(255, 0, 255),  # (2, 1)
    )
    return Matrix(rows=2, columns=3, bitmap=bitmap)


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    """Valid JSON body for the render endpoints."""
    return MatrixDataGenerator.generate_payload(
        rows=2,
        columns=2,
        bitmap=[0xFF0000, 0x00FF00, 0x0000FF, 0xFFFFFF],
    )
