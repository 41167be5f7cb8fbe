"""Dry-run client: logs order requests, places nothing."""

import logging
import uuid

from orderfeed.models.order import PostOrderRequest

logger = logging.getLogger(__name__)

DRY_RUN_STATUS = "DRY_RUN"


class DryRunClient:
    def __enter__(self) -> "DryRunClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def post_order(self, request: PostOrderRequest) -> dict:
        logger.info(
            "DRY-RUN: %s %s x%d at %s (account %s, order %s)",
            request.direction.value,
            request.instrument_id,
            request.quantity,
            request.price,
            request.account_id,
            request.order_id,
        )
        return {
            "orderId": request.order_id,
            "executionReportStatus": DRY_RUN_STATUS,
        }

    @staticmethod
    def create_uid() -> str:
        return str(uuid.uuid4())

    def close(self) -> None:
        pass
