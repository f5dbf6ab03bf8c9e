import pytest

from business_tools.schemas.inputs import (
    MessagingRequest,
    RequestRejected,
    SwotRequest,
    parse_request,
)


@pytest.mark.parametrize("payload", [{}, {"company": ""}, {"company": "   "}, {"company": None}])
def test_swot_requires_company(payload):
    with pytest.raises(RequestRejected, match="Company name is required"):
        parse_request(SwotRequest, payload)


def test_swot_company_length_limit():
    assert parse_request(SwotRequest, {"company": "x" * 100}).company == "x" * 100
    with pytest.raises(RequestRejected, match=r"too long \(max 100 characters\)"):
        parse_request(SwotRequest, {"company": "x" * 101})


def test_swot_optional_fields_by_alias():
    req = parse_request(
        SwotRequest,
        {"company": "Acme", "industry": "Retail", "additionalContext": "EU only", "unknown": 1},
    )
    assert req.industry == "Retail"
    assert req.additional_context == "EU only"


def test_messaging_requires_company_then_product():
    with pytest.raises(RequestRejected, match="Company name is required"):
        parse_request(MessagingRequest, {"product": "Widget"})
    with pytest.raises(RequestRejected, match="Product/service name is required"):
        parse_request(MessagingRequest, {"company": "Acme", "product": "  "})


def test_messaging_has_no_length_cap_by_default():
    req = parse_request(MessagingRequest, {"company": "A" * 500, "product": "B" * 500})
    assert len(req.company) == 500


def test_max_field_length_tightens_every_field():
    with pytest.raises(RequestRejected, match=r"keyFeatures too long \(max 10 characters\)"):
        parse_request(
            MessagingRequest,
            {"company": "Acme", "product": "Widget", "keyFeatures": "fast and cheap"},
            max_field_length=10,
        )


@pytest.mark.parametrize("payload", [None, [], "Acme", 42])
def test_body_must_be_an_object(payload):
    with pytest.raises(RequestRejected, match="must be a JSON object"):
        parse_request(SwotRequest, payload)


def test_wrong_type_names_the_field():
    with pytest.raises(RequestRejected, match="industry"):
        parse_request(SwotRequest, {"company": "Acme", "industry": ["Retail"]})
