"""
Unit tests for the test run ingestion rules.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from results_receiver.core.errors import BadRequest
from results_receiver.core.run_ingestion import (
    FULL_REVISION_HASH_LENGTH,
    SHORT_REVISION_LENGTH,
    apply_default_timestamps,
    normalize_revision,
    parse_test_run,
)
from results_receiver.models.dtos import TestRunDTO
from results_receiver.tests.constants import FULL_SHA

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class TestParseTestRun:
    """Test cases for parse_test_run."""

    def test_parses_known_fields(self):
        body = json.dumps({
            "full_revision_hash": FULL_SHA,
            "browser_name": "chrome",
            "browser_version": "120.0",
            "os_name": "linux",
            "labels": ["stable", "experimental"],
            "time_start": "2026-10-19T10:00:00Z",
        }).encode()

        run = parse_test_run(body)

        assert run.full_revision_hash == FULL_SHA
        assert run.browser_name == "chrome"
        assert run.browser_version == "120.0"
        assert run.os_name == "linux"
        assert run.labels == ["stable", "experimental"]
        assert run.time_start == datetime(2026, 10, 19, 10, 0, 0, tzinfo=timezone.utc)
        assert run.time_end is None

    def test_ignores_unknown_fields(self):
        run = parse_test_run(b'{"full_revision_hash": "abc", "not_a_field": 1}')
        assert run.full_revision_hash == "abc"

    def test_null_strings_are_read_as_empty(self):
        run = parse_test_run(b'{"full_revision_hash": null, "revision": null, "browser_name": null}')
        assert run.full_revision_hash == ""
        assert run.revision == ""
        assert run.browser_name == ""

    @pytest.mark.parametrize("body", [b"", b"{", b"not json", b"[]", b'{"browser_name": 5}'])
    def test_rejects_malformed_body(self, body):
        with pytest.raises(BadRequest) as exc_info:
            parse_test_run(body)
        assert exc_info.value.status_code == 400
        assert exc_info.value.message.startswith("Failed to parse JSON: ")


class TestApplyDefaultTimestamps:
    """Test cases for apply_default_timestamps."""

    def test_missing_start_and_end_default_to_now(self):
        run = apply_default_timestamps(TestRunDTO(), now=NOW)
        assert run.time_start == NOW
        assert run.time_end == NOW

    def test_missing_end_defaults_to_start(self):
        start = NOW - timedelta(hours=1)
        run = apply_default_timestamps(TestRunDTO(time_start=start), now=NOW)
        assert run.time_start == start
        assert run.time_end == start

    def test_supplied_times_are_kept(self):
        start = NOW - timedelta(hours=2)
        end = NOW - timedelta(hours=1)
        run = apply_default_timestamps(TestRunDTO(time_start=start, time_end=end), now=NOW)
        assert run.time_start == start
        assert run.time_end == end

    def test_zero_time_counts_as_missing(self):
        run = parse_test_run(b'{"time_start": "0001-01-01T00:00:00Z", "time_end": "0001-01-01T00:00:00Z"}')
        apply_default_timestamps(run, now=NOW)
        assert run.time_start == NOW
        assert run.time_end == NOW

    def test_naive_times_are_taken_as_utc(self):
        run = apply_default_timestamps(TestRunDTO(time_start=datetime(2026, 1, 1, 8, 30)), now=NOW)
        assert run.time_start == datetime(2026, 1, 1, 8, 30, tzinfo=timezone.utc)

    def test_created_at_is_always_overwritten(self):
        client_created_at = datetime(2000, 1, 1, tzinfo=timezone.utc)
        run = apply_default_timestamps(TestRunDTO(created_at=client_created_at), now=NOW)
        assert run.created_at == NOW

    def test_defaults_to_current_time(self):
        before = datetime.now(timezone.utc)
        run = apply_default_timestamps(TestRunDTO())
        after = datetime.now(timezone.utc)
        assert before <= run.time_start <= after
        assert run.created_at == run.time_start


class TestNormalizeRevision:
    """Test cases for normalize_revision."""

    def test_revision_derived_from_full_hash(self):
        run = normalize_revision(TestRunDTO(full_revision_hash=FULL_SHA))
        assert run.revision == "abcdefabcd"
        assert len(run.revision) == SHORT_REVISION_LENGTH

    @pytest.mark.parametrize("revision", ["abc", "abcdefabcd", "abcdefabcdab", FULL_SHA])
    def test_prefix_revision_is_replaced_by_short_form(self, revision):
        run = normalize_revision(TestRunDTO(full_revision_hash=FULL_SHA, revision=revision))
        assert run.revision == "abcdefabcd"

    def test_mismatched_revision_is_rejected(self):
        with pytest.raises(BadRequest) as exc_info:
            normalize_revision(TestRunDTO(full_revision_hash=FULL_SHA, revision="1234567890"))
        message = exc_info.value.message
        assert "Mismatch of full_revision_hash and revision fields" in message
        assert FULL_SHA in message
        assert "1234567890" in message

    def test_revision_found_later_in_hash_is_not_a_prefix(self):
        with pytest.raises(BadRequest):
            normalize_revision(TestRunDTO(full_revision_hash=FULL_SHA, revision="bcdef"))

    @pytest.mark.parametrize("length", [0, 10, FULL_REVISION_HASH_LENGTH - 1, FULL_REVISION_HASH_LENGTH + 1])
    def test_wrong_length_hash_is_rejected(self, length):
        with pytest.raises(BadRequest) as exc_info:
            normalize_revision(TestRunDTO(full_revision_hash=("a" * length)))
        assert exc_info.value.message == "full_revision_hash must be the full SHA (40 chars)"
