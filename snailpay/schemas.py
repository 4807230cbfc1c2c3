"""Request payloads sent to the Snail API."""

from collections.abc import Mapping
from typing import Any

import pydantic
from pydantic import BaseModel, Field, FiniteFloat

from snailpay.common.errors import ValidationError


MISSING_NAME_OR_PRICE = "You need to provide a name and a price for your product!"


class LinkRequest(BaseModel):
    """Product description shared by payment and subscription links."""

    name: str = Field(min_length=1)
    price: int | FiniteFloat = Field(gt=0)
    # Base64 encoded product image.
    image: str | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class PaymentLinkRequest(LinkRequest):
    """Payload accepted by `POST /payment-link`."""


class SubscriptionLinkRequest(LinkRequest):
    """Payload accepted by `POST /subscription-link`."""


class PayoutRequest(BaseModel):
    """Payload accepted by `POST /new-payout`; amount is in USD."""

    amount: int | FiniteFloat


class RefundRequest(BaseModel):
    """Payload accepted by `POST /refund-payment`."""

    payments: list[str]


def validate_payload(model: type[BaseModel], data: Mapping[str, Any]) -> BaseModel:
    """Validate `data` against `model`, raising this package's `ValidationError`."""

    try:
        return model.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        field = str(first["loc"][0]) if first.get("loc") else None
        raise ValidationError(f"Invalid {field}: {first['msg']}", field=field) from exc


def parse_link_request(model: type[LinkRequest], options) -> LinkRequest:
    """Build a link request from a model instance or a plain mapping.

    Raises `ValidationError` when `name` or `price` is missing or falsy, or
    when a supplied value is rejected by the model.
    """

    if isinstance(options, model):
        return options
    if isinstance(options, LinkRequest):
        options = options.model_dump()
    if not isinstance(options, Mapping):
        raise ValidationError(f"Expected a mapping of link options, got {type(options).__name__}")

    for field in ("name", "price"):
        if not options.get(field):
            raise ValidationError(MISSING_NAME_OR_PRICE, field=field)

    return validate_payload(model, options)
