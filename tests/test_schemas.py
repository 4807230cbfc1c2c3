"""Unit tests for link request parsing."""

import pytest

from snailpay.common.errors import ValidationError
from snailpay.schemas import (
    MISSING_NAME_OR_PRICE,
    PaymentLinkRequest,
    SubscriptionLinkRequest,
    parse_link_request,
)


def test_mapping_is_parsed_and_image_omitted_when_absent():
    """A plain mapping becomes a model whose body omits the missing image."""

    request = parse_link_request(PaymentLinkRequest, {"name": "Widget", "price": 5})

    assert isinstance(request, PaymentLinkRequest)
    assert request.to_body() == {"name": "Widget", "price": 5}


def test_integer_price_stays_integer():
    """Integer prices are not widened to floats on the wire."""

    request = parse_link_request(PaymentLinkRequest, {"name": "Widget", "price": 5})

    assert type(request.price) is int


def test_model_instance_passes_through():
    """A ready-made model is used as is."""

    request = SubscriptionLinkRequest(name="Plan", price=3)

    assert parse_link_request(SubscriptionLinkRequest, request) is request


def test_missing_fields_message():
    """Missing fields keep the familiar error message."""

    with pytest.raises(ValidationError, match=MISSING_NAME_OR_PRICE):
        parse_link_request(PaymentLinkRequest, {"name": "", "price": 5})


def test_non_mapping_options_are_rejected():
    """Options must be a mapping or a request model."""

    with pytest.raises(ValidationError):
        parse_link_request(PaymentLinkRequest, "Widget")
