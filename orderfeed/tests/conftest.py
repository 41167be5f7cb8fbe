"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from orderfeed.execution.invest_client import InvestClientError
from orderfeed.models.order import PostOrderRequest


class RecordingClient:
    """Fake trading client that records requests.

    Instrument ids listed in ``fail_for`` raise InvestClientError.
    """

    def __init__(self, fail_for: tuple[str, ...] = (), status: str = "EXECUTION_REPORT_STATUS_NEW"):
        self.fail_for = fail_for
        self.status = status
        self.requests: list[PostOrderRequest] = []
        self.closed = False
        self._uid = 0

    def __enter__(self) -> "RecordingClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def create_uid(self) -> str:
        self._uid += 1
        return f"uid-{self._uid}"

    def post_order(self, request: PostOrderRequest) -> dict:
        self.requests.append(request)
        if request.instrument_id in self.fail_for:
            raise InvestClientError("HTTP 400: not enough assets", 400, 3)
        return {"orderId": request.order_id, "executionReportStatus": self.status}

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def recording_client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def make_client():
    """Factory for RecordingClient with custom failures or status."""
    return RecordingClient


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "account_id": "2000000001",
        "api": {"token": "t.test-token", "max_retries": 0},
        "logging": {"level": "INFO"},
    }
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def write_orders(tmp_path: Path):
    """Return a helper that writes order file lines and returns the path."""
    def _write(*lines: str, name: str = "orders.txt") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path
    return _write
