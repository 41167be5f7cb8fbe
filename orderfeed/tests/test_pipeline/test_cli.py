"""Tests for CLI commands."""

import json
from pathlib import Path

import httpx
import respx

from orderfeed.cli import main
from orderfeed.execution.invest_client import SANDBOX_REST_URL

POST_ORDER_URL = (
    f"{SANDBOX_REST_URL}/tinkoff.public.invest.api.contract.v1.OrdersService/PostOrder"
)


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        result = main([])
        assert result == 1

    def test_config_show_masks_token(self, config_yaml_path: Path, capsys):
        result = main(["--config", str(config_yaml_path), "config", "show"])
        assert result == 0
        out = capsys.readouterr().out
        assert "2000000001" in out
        assert "t.test-token" not in out

    def test_missing_config_fails(self, tmp_path: Path):
        result = main(["--config", str(tmp_path / "nope.yaml"), "submit"])
        assert result == 1

    def test_missing_orders_file_fails(self, config_yaml_path: Path, tmp_path: Path):
        result = main([
            "--config", str(config_yaml_path),
            "submit", "--orders", str(tmp_path / "nope.txt"), "--dry-run",
        ])
        assert result == 1

    def test_missing_token_fails(self, tmp_path: Path, write_orders, monkeypatch):
        monkeypatch.delenv("INVEST_TOKEN", raising=False)
        config_path = tmp_path / "config.yaml"
        config_path.write_text("account_id: acc-1\n")
        result = main([
            "--config", str(config_path),
            "submit", "--orders", str(write_orders("A;BUY;1.0;1")),
        ])
        assert result == 1

    def test_dry_run_submit(self, config_yaml_path: Path, write_orders, capsys):
        path = write_orders("BBG000B9XRY4;BUY;150.5;10", "bad line")
        result = main([
            "--config", str(config_yaml_path),
            "submit", "--orders", str(path), "--dry-run",
        ])
        assert result == 0
        out = capsys.readouterr().out
        assert "FIGI: BBG000B9XRY4" in out
        assert "post order resp = DRY_RUN" in out

    @respx.mock
    def test_live_submit_exits_0_despite_failures(self, config_yaml_path: Path, write_orders, capsys):
        route = respx.post(POST_ORDER_URL).mock(
            side_effect=[
                httpx.Response(400, json={"code": 3, "message": "30042", "description": "not enough assets"}),
                httpx.Response(200, json={"executionReportStatus": "EXECUTION_REPORT_STATUS_NEW"}),
            ]
        )
        path = write_orders("A;BUY;1.0;1", "B;SELL;2.0;2")
        result = main([
            "--config", str(config_yaml_path), "submit", "--orders", str(path),
        ])

        assert result == 0
        assert route.call_count == 2
        body = json.loads(route.calls[1].request.content)
        assert body["accountId"] == "2000000001"
        assert body["instrumentId"] == "B"
        assert "post order resp = EXECUTION_REPORT_STATUS_NEW" in capsys.readouterr().out
