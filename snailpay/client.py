"""Async client for the Snail payment API.

Every operation is one HTTP exchange against `https://snailpay.app`: the API
key goes out verbatim in the `Authorization` header, and only an exact 200
counts as success. Other statuses raise `RemoteError` carrying the status
text, except `verify_payment`, which answers `False` instead so callers can
treat "not verified" as an ordinary outcome.
"""

from collections.abc import Sequence
from time import perf_counter
from typing import Any
from uuid import uuid4

import httpx

from snailpay.common.config import DEFAULT_BASE_URL, ClientSettings, get_settings
from snailpay.common.errors import ConfigurationError, RemoteError, TransportError, ValidationError
from snailpay.common.logging import logger, operation_ctx, request_id_ctx
from snailpay.common.metrics import (
    snail_request_duration_seconds,
    snail_requests_total,
    snail_validation_failures_total,
)
from snailpay.common.tracing import tracer
from snailpay.schemas import (
    PaymentLinkRequest,
    PayoutRequest,
    RefundRequest,
    SubscriptionLinkRequest,
    parse_link_request,
    validate_payload,
)


VERIFICATION_CODE_LENGTH = 10


class Snail:
    """Authenticated binding for the Snail HTTP API.

    The client holds no state besides its construction arguments, so one
    instance can serve any number of concurrent calls.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("You need to provide an API key!")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "Snail":
        """Build a client from `SNAIL_*` environment settings."""

        settings = settings or get_settings()
        return cls(
            settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"Snail(base_url={self._base_url!r})"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self._api_key,
            "Content-Type": "application/json",
        }

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request and return the raw response, whatever its status."""

        operation_token = operation_ctx.set(operation)
        request_token = request_id_ctx.set(str(uuid4()))
        started = perf_counter()
        try:
            with tracer.start_as_current_span(f"snail.{operation}") as span:
                span.set_attribute("http.method", method)
                span.set_attribute("http.route", path)
                logger.debug("request_sent method=%s path=%s", method, path)
                try:
                    async with httpx.AsyncClient(
                        base_url=self._base_url,
                        timeout=self._timeout,
                        transport=self._transport,
                    ) as client:
                        response = await client.request(
                            method,
                            path,
                            params=params,
                            json=body,
                            headers=self._headers(),
                        )
                except httpx.HTTPError as exc:
                    snail_requests_total.labels(operation=operation, status_code="error").inc()
                    logger.error("request_failed method=%s path=%s error=%s", method, path, exc)
                    raise TransportError(f"{method} {path} failed: {exc}") from exc
                span.set_attribute("http.status_code", response.status_code)

            elapsed = max(0.0, perf_counter() - started)
            snail_request_duration_seconds.labels(operation=operation).observe(elapsed)
            snail_requests_total.labels(
                operation=operation,
                status_code=str(response.status_code),
            ).inc()
            logger.info(
                "request_completed method=%s path=%s status_code=%s elapsed_ms=%.1f",
                method,
                path,
                response.status_code,
                elapsed * 1000,
            )
            return response
        finally:
            operation_ctx.reset(operation_token)
            request_id_ctx.reset(request_token)

    @staticmethod
    def _ensure_ok(response: httpx.Response) -> None:
        if response.status_code != 200:
            logger.warning(
                "remote_error path=%s status_code=%s reason=%s",
                response.request.url.path,
                response.status_code,
                response.reason_phrase,
            )
            raise RemoteError(response.reason_phrase, response.status_code, body=response.text)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"Malformed JSON from {response.request.url.path}: {exc}") from exc

    async def _get_list(self, operation: str, path: str) -> Any:
        response = await self._send(operation, "GET", path)
        self._ensure_ok(response)
        return self._json(response)

    async def _create_link(self, operation: str, path: str, model, options) -> str:
        try:
            request = parse_link_request(model, options)
        except ValidationError:
            snail_validation_failures_total.labels(operation=operation).inc()
            raise
        response = await self._send(operation, "POST", path, body=request.to_body())
        self._ensure_ok(response)
        return response.text

    async def verify_payment(self, code: str) -> Any:
        """Redeem a customer's verification code.

        Returns the payment object on success and `False` when the code is
        not exactly 10 characters (no request is made) or the server does
        not answer 200. Transport failures still raise.
        """

        if len(code) != VERIFICATION_CODE_LENGTH:
            logger.debug("verification_code_rejected length=%s", len(code))
            return False
        response = await self._send("verify_payment", "GET", "/verify-payment", params={"code": code})
        if response.status_code != 200:
            return False
        return self._json(response)

    async def create_payment_link(self, options: PaymentLinkRequest | dict[str, Any]) -> str:
        """Create a one-time payment link and return its URL.

        `options` needs `name` and `price`; `image` is an optional base64
        string. Missing fields raise `ValidationError` before any request.
        """

        return await self._create_link("create_payment_link", "/payment-link", PaymentLinkRequest, options)

    async def create_subscription_link(self, options: SubscriptionLinkRequest | dict[str, Any]) -> str:
        """Create a recurring subscription link and return its URL."""

        return await self._create_link(
            "create_subscription_link",
            "/subscription-link",
            SubscriptionLinkRequest,
            options,
        )

    async def list_payments(self) -> Any:
        return await self._get_list("list_payments", "/payment-list")

    async def list_subscriptions(self) -> Any:
        return await self._get_list("list_subscriptions", "/subscription-list")

    async def list_subscription_links(self) -> Any:
        return await self._get_list("list_subscription_links", "/subscription-link-list")

    async def list_payment_links(self) -> Any:
        return await self._get_list("list_payment_links", "/payment-link-list")

    async def list_payouts(self) -> Any:
        return await self._get_list("list_payouts", "/payout")

    async def new_payout(self, amount: int | float) -> None:
        """Pay out `amount` USD of the account balance."""

        body = validate_payload(PayoutRequest, {"amount": amount}).model_dump()
        response = await self._send("new_payout", "POST", "/new-payout", body=body)
        self._ensure_ok(response)

    async def refund_payment(self, payment_ids: Sequence[str]) -> None:
        """Refund the given payments, in order."""

        body = validate_payload(RefundRequest, {"payments": list(payment_ids)}).model_dump()
        response = await self._send("refund_payment", "POST", "/refund-payment", body=body)
        self._ensure_ok(response)
