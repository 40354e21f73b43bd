"""
测试公共 fixture
"""
import pytest
from fastapi.testclient import TestClient

from fee_estimator.main import create_app


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client
