# tests/test_models.py
# Tests for Pydantic models in pretraffic-gate.

"""
Unit tests for core data models.

Tests cover:
- Book conversion to and from DynamoDB items
- Probe record defaults and request payload
- Hook event validation
- Invocation context immutability
"""

import json

import pytest
from pydantic import ValidationError

from pretraffic_gate.errors import InvalidEventError
from pretraffic_gate.gates.models import CheckResult, HookStatus, StepStatus, Verdict
from pretraffic_gate.models import (
    PROBE_ISBN,
    Book,
    HookEvent,
    InvocationContext,
    ProbeRecord,
)


class TestBook:
    """Tests for Book model."""

    def test_to_item_uses_type_descriptors(self):
        """Strings map to S, numbers to N."""
        book = Book(
            isbn="978-0", title="Dune", year=1965, author="Herbert",
            publisher="Chilton", rating=5, pages=412,
        )
        assert book.to_item() == {
            "isbn": {"S": "978-0"},
            "title": {"S": "Dune"},
            "year": {"N": "1965"},
            "author": {"S": "Herbert"},
            "publisher": {"S": "Chilton"},
            "rating": {"N": "5"},
            "pages": {"N": "412"},
        }

    def test_from_item_parses_numbers(self):
        """Numeric attributes come back as integers."""
        item = ProbeRecord().to_item()
        book = Book.from_item(item)
        assert book.year == 1111
        assert book.rating == 1
        assert book.pages == 111
        assert book.isbn == PROBE_ISBN

    def test_missing_field_rejected(self):
        """A book without pages does not validate."""
        with pytest.raises(ValidationError):
            Book(isbn="x", title="t", year="1", author="a", publisher="p", rating=1)

    def test_empty_isbn_rejected(self):
        with pytest.raises(ValidationError):
            Book(isbn="", title="t", year="1", author="a", publisher="p", rating=1, pages=1)


class TestProbeRecord:
    """Tests for the probe book."""

    def test_defaults(self):
        """Probe fields are deterministic placeholders."""
        probe = ProbeRecord()
        assert probe.isbn == "1-111-111-111"
        assert probe.title == "Smoke Test"
        assert probe.year == "1111"
        assert probe.author == "Test"
        assert probe.publisher == "Test"
        assert probe.rating == 1
        assert probe.pages == 111

    def test_two_probes_are_equal(self):
        assert ProbeRecord() == ProbeRecord()

    def test_request_wraps_serialized_body(self):
        """The request carries the probe as a JSON string body."""
        request = ProbeRecord().to_request()
        assert set(request) == {"body"}
        assert json.loads(request["body"]) == {
            "isbn": "1-111-111-111",
            "title": "Smoke Test",
            "year": "1111",
            "author": "Test",
            "publisher": "Test",
            "rating": 1,
            "pages": 111,
        }

    def test_probe_accepted_by_create_schema(self):
        """The probe body validates against the Book schema."""
        body = json.loads(ProbeRecord().to_request()["body"])
        assert Book.model_validate(body).isbn == PROBE_ISBN


class TestHookEvent:
    """Tests for CodeDeploy event parsing."""

    def test_parse_valid_event(self, hook_event):
        event = HookEvent.parse(hook_event)
        assert event.deployment_id == "d-ABC123"
        assert event.hook_execution_id == "hook-exec-1"

    def test_extra_fields_ignored(self, hook_event):
        hook_event["Extra"] = "value"
        assert HookEvent.parse(hook_event).deployment_id == "d-ABC123"

    def test_missing_field_raises(self):
        """A missing hook execution id is reported by name."""
        with pytest.raises(InvalidEventError, match="LifecycleEventHookExecutionId"):
            HookEvent.parse({"DeploymentId": "d-1"})

    def test_empty_field_raises(self):
        with pytest.raises(InvalidEventError):
            HookEvent.parse({"DeploymentId": "", "LifecycleEventHookExecutionId": "h"})

    def test_non_dict_raises(self):
        with pytest.raises(InvalidEventError, match="must be an object"):
            HookEvent.parse(["d-1"])


class TestInvocationContext:
    """Tests for InvocationContext."""

    def test_from_event(self, hook_event):
        ctx = InvocationContext.from_event(hook_event, new_version_id="books-create:7")
        assert ctx.new_version_id == "books-create:7"
        assert ctx.deployment_id == "d-ABC123"
        assert ctx.hook_execution_id == "hook-exec-1"

    def test_is_frozen(self, ctx):
        """Context cannot change during a run."""
        with pytest.raises(ValidationError):
            ctx.deployment_id = "other"


class TestVerdict:
    """Tests for Verdict and CheckResult."""

    def test_status_values(self):
        """Only the two CodeDeploy literals exist."""
        assert [s.value for s in HookStatus] == ["Succeeded", "Failed"]

    def test_to_dict(self):
        verdict = Verdict(
            status=HookStatus.FAILED,
            message="probe record not found post-write",
            checks=[CheckResult(name="invoke", status=StepStatus.PASSED)],
            error_type="VerificationError",
        )
        data = verdict.to_dict()
        assert data["status"] == "Failed"
        assert data["checks"][0]["status"] == "passed"
        assert data["error_type"] == "VerificationError"
        assert not verdict.succeeded

    def test_check_lookup(self):
        verdict = Verdict(status=HookStatus.SUCCEEDED)
        assert verdict.check("invoke") is None
