"""T-Invest REST gateway client for order placement."""

import logging
import os
import time
import uuid

import httpx

from orderfeed.models.order import PostOrderRequest

logger = logging.getLogger(__name__)

SANDBOX_REST_URL = "https://sandbox-invest-public-api.tinkoff.ru/rest"
PROD_REST_URL = "https://invest-public-api.tinkoff.ru/rest"
ORDERS_SERVICE = "tinkoff.public.invest.api.contract.v1.OrdersService"
DEFAULT_APP_NAME = "orderfeed"
TOKEN_ENV = "INVEST_TOKEN"

RETRY_STATUS_CODES = (429, 503)


class InvestClientError(Exception):
    """Raised when the gateway rejects a call or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: int | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class InvestClient:
    """Thin wrapper around the T-Invest REST gateway.

    Owns a single httpx connection pool; use as a context manager or call
    ``close()`` on shutdown. 429/503 responses and transport errors are
    retried with exponential backoff, reusing the request's ``orderId``.
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str = SANDBOX_REST_URL,
        app_name: str = DEFAULT_APP_NAME,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
    ):
        self.token = token or os.environ.get(TOKEN_ENV, "")
        if not self.token:
            raise InvestClientError(f"{TOKEN_ENV} not set")
        self.base_url = base_url.rstrip("/")
        self.app_name = app_name
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self._http = httpx.Client(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=timeout,
        )

    def __enter__(self) -> "InvestClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "x-app-name": self.app_name,
        }

    def _retry_delay(self, attempt: int, resp: httpx.Response | None = None) -> float:
        if resp is not None and resp.status_code == 429:
            reset = resp.headers.get("x-ratelimit-reset", "")
            if reset.isdigit():
                return float(reset)
        return self.retry_base_delay * (2**attempt)

    def _call(self, service: str, method: str, payload: dict) -> dict:
        """POST a unary call to the gateway and return the decoded body."""
        endpoint = f"/{service}/{method}"
        for attempt in range(self.max_retries + 1):
            try:
                resp = self._http.post(endpoint, json=payload)
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self._retry_delay(attempt)
                    logger.warning(
                        "%s request error, retrying in %.1fs: %s", method, delay, e
                    )
                    time.sleep(delay)
                    continue
                logger.error("%s request failed: %s", method, e)
                raise InvestClientError(f"Request failed: {e}") from e

            if resp.status_code in RETRY_STATUS_CODES and attempt < self.max_retries:
                delay = self._retry_delay(attempt, resp)
                logger.warning(
                    "%s returned %d, retrying in %.1fs (attempt %d/%d)",
                    method, resp.status_code, delay, attempt + 1, self.max_retries,
                )
                time.sleep(delay)
                continue

            if resp.status_code >= 400:
                raise self._error_from_response(method, resp)

            try:
                body = resp.json()
            except ValueError as e:
                raise InvestClientError(
                    f"Invalid JSON in {method} response", resp.status_code
                ) from e
            if not isinstance(body, dict):
                raise InvestClientError(
                    f"Unexpected {method} response: {type(body).__name__}",
                    resp.status_code,
                )
            return body

        # range() always runs at least once and every branch returns or raises
        raise AssertionError("unreachable")

    def _error_from_response(self, method: str, resp: httpx.Response) -> InvestClientError:
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        code = body.get("code")
        detail = body.get("description") or body.get("message") or resp.text
        message = f"HTTP {resp.status_code}: {detail}"
        if body.get("message") and body.get("description"):
            message += f" ({body['message']})"
        logger.debug("%s error body: %s", method, resp.text)
        return InvestClientError(
            message,
            status_code=resp.status_code,
            code=code if isinstance(code, int) else None,
        )

    # --- Orders ---

    def post_order(self, request: PostOrderRequest) -> dict:
        """Place an order.

        Returns the PostOrderResponse body; ``executionReportStatus`` holds
        the broker's verdict, e.g. ``EXECUTION_REPORT_STATUS_NEW``.
        """
        return self._call(ORDERS_SERVICE, "PostOrder", request.to_payload())

    @staticmethod
    def create_uid() -> str:
        """Fresh idempotency key for an order."""
        return str(uuid.uuid4())

    def close(self) -> None:
        logger.info("closing client connection")
        self._http.close()
