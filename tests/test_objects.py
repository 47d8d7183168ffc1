"""Tests for object nodes."""

import pytest

from schemacheck.engine.errors import ErrorKind
from schemacheck.engine.schema import SchemaEngine

ADDRESS_PROPERTIES = """
    "number": {"type": "number"},
    "street_name": {"type": "string"},
    "street_type": {"type": "string", "enum": ["Street", "Avenue", "Boulevard"]}
"""

ADDRESS = '{"type": "object", "properties": {%s}}' % ADDRESS_PROPERTIES
ADDRESS_CLOSED = '{"type": "object", "properties": {%s}, "additionalProperties": false}' % ADDRESS_PROPERTIES
ADDRESS_STRINGS = (
    '{"type": "object", "properties": {%s}, "additionalProperties": {"type": "string"}}' % ADDRESS_PROPERTIES
)

CONTACT = """{
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "email": {"type": "string"},
        "address": {"type": "string"},
        "telephone": {"type": "string"}
    },
    "required": ["name", "email"]
}"""

TOKEN_NAMES = '{"type": "object", "propertyNames": {"pattern": "^[A-Za-z_][A-Za-z0-9_]*$"}}'

SIZED = '{"type": "object", "minProperties": 2, "maxProperties": 3}'

BILLING = """{
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "credit_card": {"type": "number"},
        "billing_address": {"type": "string"}
    },
    "required": ["name"],
    "dependencies": {"credit_card": ["billing_address"]}
}"""

BILLING_BIDIRECTIONAL = """{
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "credit_card": {"type": "number"},
        "billing_address": {"type": "string"}
    },
    "required": ["name"],
    "dependencies": {
        "credit_card": ["billing_address"],
        "billing_address": ["credit_card"]
    }
}"""

BILLING_SCHEMA_DEPENDENCY = """{
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "credit_card": {"type": "number"}
    },
    "required": ["name"],
    "dependencies": {
        "credit_card": {
            "properties": {"billing_address": {"type": "string"}},
            "required": ["billing_address"]
        }
    }
}"""

PREFIXED = """{
    "type": "object",
    "patternProperties": {
        "^S_": {"type": "string"},
        "^I_": {"type": "integer"}
    },
    "additionalProperties": false
}"""

PREFIXED_WITH_BUILTIN = """{
    "type": "object",
    "properties": {"builtin": {"type": "number"}},
    "patternProperties": {
        "^S_": {"type": "string"},
        "^I_": {"type": "integer"}
    },
    "additionalProperties": {"type": "string"}
}"""

FULL_BILLING = '{"name": "John Doe", "credit_card": 5555555555555555, "billing_address": "555 Debtor\'s Lane"}'
CARD_ONLY = '{"name": "John Doe", "credit_card": 5555555555555555}'
ADDRESS_ONLY = '{"name": "John Doe", "billing_address": "555 Debtor\'s Lane"}'


@pytest.mark.parametrize(
    "schema, value, expected",
    [
        ('{"type": "object"}', '{"key": "value", "another_key": "another_value"}', True),
        ('{"type": "object"}', '{"Sun": 1.9891e30, "Jupiter": 1.8986e27, "Moon": 7.349e22}', True),
        ('{"type": "object"}', '"Not an object"', False),
        ('{"type": "object"}', '["An", "array", "not", "an", "object"]', False),
        # properties
        (ADDRESS, '{"number": 1600, "street_name": "Pennsylvania", "street_type": "Avenue"}', True),
        (ADDRESS, '{"number": "1600", "street_name": "Pennsylvania", "street_type": "Avenue"}', False),
        (ADDRESS, '{"number": 1600, "street_name": "Pennsylvania"}', True),
        (ADDRESS, "{}", True),
        (ADDRESS, '{"number": 1600, "street_name": "Pennsylvania", "street_type": "Avenue", "direction": "NW"}', True),
        # additionalProperties
        (ADDRESS_CLOSED, '{"number": 1600, "street_name": "Pennsylvania", "street_type": "Avenue"}', True),
        (
            ADDRESS_CLOSED,
            '{"number": 1600, "street_name": "Pennsylvania", "street_type": "Avenue", "direction": "NW"}',
            False,
        ),
        (ADDRESS_STRINGS, '{"number": 1600, "street_name": "Pennsylvania", "street_type": "Avenue"}', True),
        (ADDRESS_STRINGS, '{"number": 1600, "street_name": "Pennsylvania", "direction": "NW"}', True),
        (ADDRESS_STRINGS, '{"number": 1600, "street_name": "Pennsylvania", "direction": 7}', False),
        # required
        (CONTACT, '{"name": "William Shakespeare", "email": "bill@stratford-upon-avon.co.uk"}', True),
        (
            CONTACT,
            """{
                "name": "William Shakespeare",
                "email": "bill@stratford-upon-avon.co.uk",
                "address": "Henley Street, Stratford-upon-Avon, Warwickshire, England",
                "authorship": "in question"
            }""",
            True,
        ),
        (
            CONTACT,
            '{"name": "William Shakespeare", "address": "Henley Street, Stratford-upon-Avon"}',
            False,
        ),
        # propertyNames
        (TOKEN_NAMES, '{"_a_proper_token_001": "value"}', True),
        (TOKEN_NAMES, '{"001 invalid": "value"}', False),
        # size
        (SIZED, "{}", False),
        (SIZED, '{"a": 0}', False),
        (SIZED, '{"a": 0, "b": 1}', True),
        (SIZED, '{"a": 0, "b": 1, "c": 2}', True),
        (SIZED, '{"a": 0, "b": 1, "c": 2, "d": 3}', False),
        # dependencies
        (BILLING, FULL_BILLING, True),
        (BILLING, CARD_ONLY, False),
        (BILLING, '{"name": "John Doe"}', True),
        (BILLING, ADDRESS_ONLY, True),
        (BILLING_BIDIRECTIONAL, CARD_ONLY, False),
        (BILLING_BIDIRECTIONAL, ADDRESS_ONLY, False),
        (BILLING_SCHEMA_DEPENDENCY, FULL_BILLING, True),
        (BILLING_SCHEMA_DEPENDENCY, CARD_ONLY, False),
        (BILLING_SCHEMA_DEPENDENCY, '{"name": "John Doe"}', True),
        # patternProperties
        (PREFIXED, '{"S_25": "This is a string"}', True),
        (PREFIXED, '{"I_0": 42}', True),
        (PREFIXED, '{"S_0": 42}', False),
        (PREFIXED, '{"I_42": "This is a string"}', False),
        (PREFIXED, '{"keyword": "value"}', False),
        (PREFIXED_WITH_BUILTIN, '{"builtin": 42}', True),
        (PREFIXED_WITH_BUILTIN, '{"keyword": "value"}', True),
        (PREFIXED_WITH_BUILTIN, '{"keyword": 42}', False),
        (PREFIXED_WITH_BUILTIN, '{"I_1": 42, "S_1": "x", "extra": "y"}', True),
    ],
)
def test_is_valid(schema, value, expected):
    assert SchemaEngine(schema).is_valid(value) is expected


def test_additional_properties_message_lists_names():
    result = SchemaEngine(ADDRESS_CLOSED).validate('{"number": 1600, "direction": "NW", "zip": "20500"}')
    assert result.errors == ["additional properties forbidden: direction, zip at context path: #/"]


def test_required_message_lists_missing_names():
    result = SchemaEngine(CONTACT).validate("{}")
    assert result.errors == ["missing properties: name, email at context path: #/"]


def test_empty_required_list():
    draft4 = '{"$schema": "http://json-schema.org/draft-04/schema#", "required": []}'
    result = SchemaEngine(draft4).validate("{}")

    assert result.valid is False
    assert result.messages[0].kind is ErrorKind.SCHEMA_ERROR
    assert result.errors == ['D4: "required" must contain at least one string at context path: #/']

    assert SchemaEngine('{"required": []}').is_valid("{}")


def test_property_names_message_uses_member_path():
    result = SchemaEngine(TOKEN_NAMES).validate('{"001 invalid": "value"}')
    assert result.errors == ['value "001 invalid" does not match pattern at context path: #/001 invalid']


def test_property_names_keeps_declared_type():
    """A declared type is not replaced: integer names never match."""
    engine = SchemaEngine('{"propertyNames": {"type": "integer"}}')
    assert engine.is_valid("{}")
    assert not engine.is_valid('{"a": 1}')


def test_property_names_ignored_in_draft4():
    draft4 = '{"$schema": "http://json-schema.org/draft-04/schema#", "propertyNames": {"maxLength": 1}}'
    assert SchemaEngine(draft4).is_valid('{"long_name": 1}')


def test_size_messages():
    engine = SchemaEngine(SIZED)
    assert engine.validate('{"a": 0}').errors == ["too few properties (min 2) at context path: #/"]
    assert engine.validate('{"a": 0, "b": 1, "c": 2, "d": 3}').errors == [
        "too many properties (max 3) at context path: #/"
    ]


def test_dependency_message():
    result = SchemaEngine(BILLING).validate(CARD_ONLY)
    assert result.errors == [
        'missing dependant properties: "billing_address" (depending on "credit_card") at context path: #/'
    ]


def test_schema_dependency_reports_with_object_path():
    result = SchemaEngine(BILLING_SCHEMA_DEPENDENCY).validate(CARD_ONLY)
    assert result.errors == ["missing properties: billing_address at context path: #/"]


def test_pattern_property_message_uses_member_path():
    result = SchemaEngine(PREFIXED).validate('{"S_0": 42}')
    assert result.errors == ["value 42 must be a string at context path: #/S_0"]


def test_key_matching_several_patterns_is_checked_against_each():
    engine = SchemaEngine('{"patternProperties": {"^a": {"type": "integer"}, "b$": {"minimum": 10}}}')

    assert engine.is_valid('{"ab": 12}')
    result = engine.validate('{"ab": 5}')
    assert result.errors == ["value 5 is less than minimum of 10 at context path: #/ab"]


def test_pattern_property_with_unicode_property_class():
    engine = SchemaEngine(r'{"patternProperties": {"^\\p{Lu}": {"type": "integer"}}, "additionalProperties": false}')

    assert engine.is_valid('{"\u00c9t\u00e9": 1}')
    assert not engine.is_valid('{"lower": 1}')


def test_invalid_pattern_property_is_a_schema_error():
    result = SchemaEngine('{"patternProperties": {"(": {}}}').validate('{"a": 1}')

    assert result.valid is False
    assert result.messages[0].kind is ErrorKind.SCHEMA_ERROR


def test_nested_object_paths():
    engine = SchemaEngine(
        """{
            "properties": {
                "patient": {
                    "properties": {"contact": {"required": ["phone"]}}
                }
            }
        }"""
    )
    result = engine.validate('{"patient": {"contact": {}}}')
    assert result.errors == ["missing properties: phone at context path: #/patient/contact"]
