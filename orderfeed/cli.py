"""CLI entry point for the order file submitter."""

import argparse
import logging

from orderfeed.config.loader import ConfigError, load_config
from orderfeed.config.schema import LogLevel, OrderFeedConfig
from orderfeed.execution.dry_run import DryRunClient
from orderfeed.execution.invest_client import InvestClient, InvestClientError
from orderfeed.execution.submitter import OrderSubmitter
from orderfeed.pipeline.order_batch import DEFAULT_ORDERS_PATH, OrderBatch, OrderFileError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "config.yaml"
EXIT_INTERRUPTED = 130


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="orderfeed",
        description="Submit limit orders from an order file",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=[level.value for level in LogLevel],
        help="Override logging.level from config",
    )

    sub = parser.add_subparsers(dest="command")

    # submit
    submit_p = sub.add_parser("submit", help="Submit every order in the file")
    submit_p.add_argument(
        "--orders", default=DEFAULT_ORDERS_PATH, help="Order file path"
    )
    submit_p.add_argument(
        "--dry-run", action="store_true", help="Log orders without placing them"
    )

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=args.log_level or logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error("config loading error: %s", e)
        return 1

    if not args.log_level:
        logging.getLogger().setLevel(config.logging.level.value)

    if args.command == "submit":
        return _cmd_submit(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _build_client(config: OrderFeedConfig, dry_run: bool) -> InvestClient | DryRunClient:
    if dry_run:
        return DryRunClient()
    api = config.api
    return InvestClient(
        token=api.token.get_secret_value(),
        base_url=api.base_url,
        app_name=api.app_name,
        timeout=api.timeout_seconds,
        max_retries=api.max_retries,
        retry_base_delay=api.retry_base_delay,
    )


def _cmd_submit(config: OrderFeedConfig, args) -> int:
    try:
        client = _build_client(config, args.dry_run)
    except InvestClientError as e:
        logger.error("client creating error: %s", e)
        return 1

    if args.dry_run:
        print("DRY-RUN: no orders will be placed")

    with client:
        submitter = OrderSubmitter(client, config.account_id)
        batch = OrderBatch(submitter, args.orders)
        try:
            completed = batch.run()
        except OrderFileError as e:
            logger.error("%s", e)
            return 1

    return 0 if completed else EXIT_INTERRUPTED


def _cmd_config(config: OrderFeedConfig, args) -> int:
    if args.config_command == "show":
        # SecretStr renders the token masked
        print(config.model_dump_json(indent=2))
        return 0
    else:
        print("Use: config show")
        return 1
