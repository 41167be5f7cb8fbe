"""Order submitter: maps an OrderIntent onto PostOrder and reports the outcome."""

import logging

from orderfeed.execution.dry_run import DryRunClient
from orderfeed.execution.invest_client import InvestClient, InvestClientError
from orderfeed.models.order import (
    OrderIntent,
    OrderType,
    PostOrderRequest,
    SubmissionResult,
)

logger = logging.getLogger(__name__)

STATUS_UNSPECIFIED = "EXECUTION_REPORT_STATUS_UNSPECIFIED"


class OrderSubmitter:
    def __init__(
        self,
        client: InvestClient | DryRunClient,
        account_id: str,
    ):
        self.client = client
        self.account_id = account_id

    def build_request(self, intent: OrderIntent) -> PostOrderRequest:
        """Wire request for an intent; every submission is a limit order."""
        return PostOrderRequest(
            instrument_id=intent.instrument_id,
            quantity=intent.quantity,
            price=intent.price,
            direction=intent.direction,
            account_id=self.account_id,
            order_type=OrderType.LIMIT,
            order_id=self.client.create_uid(),
        )

    def submit(self, intent: OrderIntent) -> SubmissionResult:
        """Place one order. Called exactly once per intent, never retried here.

        Errors are logged and returned; they never propagate.
        """
        request = self.build_request(intent)
        try:
            resp = self.client.post_order(request)
        except InvestClientError as e:
            logger.error("post order %s: %s", intent.instrument_id, e)
            return SubmissionResult(
                instrument_id=intent.instrument_id,
                order_id=request.order_id,
                status=None,
                error_message=str(e),
            )
        except Exception as e:
            logger.exception("post order %s crashed", intent.instrument_id)
            return SubmissionResult(
                instrument_id=intent.instrument_id,
                order_id=request.order_id,
                status=None,
                error_message=str(e),
            )

        # proto3 JSON may omit an enum left at its default value
        status = resp.get("executionReportStatus") or STATUS_UNSPECIFIED
        print(f"post order resp = {status}")
        logger.info(
            "Order %s for %s: %s", request.order_id, intent.instrument_id, status
        )
        return SubmissionResult(
            instrument_id=intent.instrument_id,
            order_id=resp.get("orderId") or request.order_id,
            status=status,
        )
