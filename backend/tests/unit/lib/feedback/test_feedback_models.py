"""Unit tests for the FeedbackEntry model."""

import re
import uuid

import pytest
from pydantic import ValidationError as PydanticValidationError

from feedback_service.lib.feedback.models import FeedbackEntry, utc_timestamp

ISO_MILLIS_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_create_generates_uuid_and_timestamp():
    entry = FeedbackEntry.create(name="A", feedback="hi")

    assert str(uuid.UUID(entry.id)) == entry.id
    assert ISO_MILLIS_UTC.match(entry.created_at)


def test_create_without_email_stores_empty_string():
    entry = FeedbackEntry.create(name="A", feedback="hi", email=None)

    assert entry.email == ""


def test_create_generates_distinct_ids():
    ids = {FeedbackEntry.create(name="A", feedback="hi").id for _ in range(50)}

    assert len(ids) == 50


def test_to_record_uses_camel_case_timestamp():
    entry = FeedbackEntry.create(name="A", feedback="hi", email="a@example.com")

    assert entry.to_record() == {
        "id": entry.id,
        "name": "A",
        "email": "a@example.com",
        "feedback": "hi",
        "createdAt": entry.created_at,
    }


def test_model_validate_from_stored_record():
    record = {
        "id": "abc",
        "name": "A",
        "email": "",
        "feedback": "hi",
        "createdAt": "2024-05-01T10:00:00.000Z",
    }

    assert FeedbackEntry.model_validate(record).to_record() == record


@pytest.mark.parametrize("missing", ["id", "createdAt"])
def test_model_validate_does_not_invent_identity(missing):
    record = {
        "id": "abc",
        "name": "A",
        "feedback": "hi",
        "createdAt": "2024-05-01T10:00:00.000Z",
    }
    del record[missing]

    with pytest.raises(PydanticValidationError):
        FeedbackEntry.model_validate(record)


def test_entries_are_immutable():
    entry = FeedbackEntry.create(name="A", feedback="hi")

    with pytest.raises(PydanticValidationError):
        entry.name = "B"


def test_utc_timestamp_format():
    assert ISO_MILLIS_UTC.match(utc_timestamp())
