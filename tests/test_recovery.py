import json

import pytest

from business_tools.services.llm_client import UnparseableResponse, parse_model_json

DOC = {"company": "Acme", "keyInsights": ["a", "b", "c"], "nested": {"x": [1, 2]}}


def test_plain_json():
    assert parse_model_json(json.dumps(DOC)) == DOC


def test_surrounding_whitespace():
    assert parse_model_json("\n\n  " + json.dumps(DOC) + "  \n") == DOC


def test_json_wrapped_in_prose():
    text = f"Here is the result: {json.dumps(DOC)} Thanks!"
    assert parse_model_json(text) == DOC


def test_markdown_code_fence():
    text = "```json\n" + json.dumps(DOC, indent=2) + "\n```"
    assert parse_model_json(text) == DOC


def test_first_valid_object_when_outer_braces_do_not_parse():
    text = 'Result: {"company": "Acme"} and also {not json}'
    assert parse_model_json(text) == {"company": "Acme"}


def test_trailing_comma_is_repaired():
    text = 'Sure! {"company": "Acme", "keyInsights": ["a", "b",],}'
    assert parse_model_json(text) == {"company": "Acme", "keyInsights": ["a", "b"]}


@pytest.mark.parametrize(
    "text",
    [
        "",
        "I'm sorry, I cannot help with that.",
        "[1, 2, 3]",
        '"just a string"',
        "} backwards {",
    ],
)
def test_no_json_object_is_unparseable(text):
    with pytest.raises(UnparseableResponse):
        parse_model_json(text)


@pytest.mark.parametrize(
    "text",
    [
        '{"company": "Acme", "score": NaN}',
        '{"company": "Acme", "score": Infinity}',
        'Result: {"company": "Acme", "score": -Infinity} done',
    ],
)
def test_non_standard_constants_never_come_back(text):
    try:
        result = parse_model_json(text)
    except UnparseableResponse:
        return
    # anything recovered must render as strict JSON
    json.dumps(result, allow_nan=False)


def test_constant_in_outer_object_is_not_returned():
    inner = {"point": "Brand", "description": "Strong"}
    text = '{"score": NaN, "analysis": ' + json.dumps(inner) + "}"
    assert parse_model_json(text) == inner
