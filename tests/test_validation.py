"""Tests for the validation service."""

from schemacheck.services.validation import validate_against_schema, validate_batch

PATIENT_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["resourceType", "mrn", "name"],
    "properties": {
        "resourceType": {"const": "Patient"},
        "mrn": {"type": "string", "minLength": 1},
        "name": {"type": "string"},
        "birthDate": {"type": "string", "format": "date"},
        "gender": {"enum": ["male", "female", "other", "unknown"]},
    },
}


def test_valid_patient():
    record = {
        "resourceType": "Patient",
        "mrn": "MRN-001",
        "name": "Jane Doe",
        "birthDate": "1990-01-15",
        "gender": "female",
    }
    errors = validate_against_schema(record, PATIENT_SCHEMA)
    assert errors == []


def test_missing_required_fields():
    record = {"resourceType": "Patient"}
    errors = validate_against_schema(record, PATIENT_SCHEMA)
    assert any("mrn" in e for e in errors)
    assert any("name" in e for e in errors)


def test_invalid_date_format():
    record = {
        "resourceType": "Patient",
        "mrn": "MRN-001",
        "name": "Jane",
        "birthDate": "01/15/1990",  # wrong format
    }
    errors = validate_against_schema(record, PATIENT_SCHEMA)
    assert errors == ['"date" format mismatch: "01/15/199... at context path: #/birthDate']


def test_invalid_gender():
    record = {
        "resourceType": "Patient",
        "mrn": "MRN-001",
        "name": "Jane",
        "gender": "invalid_value",
    }
    errors = validate_against_schema(record, PATIENT_SCHEMA)
    assert len(errors) > 0


def test_valid_record_with_warning_is_reported_clean():
    """Setup messages (unknown $schema) do not turn a valid record into errors."""
    schema = {**PATIENT_SCHEMA, "$schema": "http://example.com/custom#"}
    record = {"resourceType": "Patient", "mrn": "MRN-001", "name": "Jane"}
    assert validate_against_schema(record, schema) == []


def test_batch_splits_valid_and_invalid():
    records = [
        {"resourceType": "Patient", "mrn": "MRN-001", "name": "Jane"},
        {"resourceType": "Observation", "mrn": "MRN-002", "name": "John"},
        {"resourceType": "Patient", "mrn": "", "name": "Ann"},
    ]
    summary = validate_batch(records, PATIENT_SCHEMA)

    assert summary["draft_version"] == 7
    assert summary["valid_count"] == 1
    assert summary["invalid_count"] == 2
    assert summary["valid_records"] == [records[0]]
    assert [entry["record"] for entry in summary["validation_errors"]] == records[1:]
    assert [r["valid"] for r in summary["results"]] == [True, False, False]
    assert summary["results"][1]["errors"] == [
        'value "Observation" is not a defined constant at context path: #/resourceType'
    ]
