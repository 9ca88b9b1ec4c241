"""Tests for boxer.core.errors module."""

from __future__ import annotations

from boxer.core.errors import BoxerError, ErrorCode, exit_code_for


class TestErrorCode:
    def test_values_are_stable(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.INPUT_ERROR == 2
        assert ErrorCode.TOOL_ERROR == 3
        assert ErrorCode.CONSISTENCY_ERROR == 4
        assert ErrorCode.IO_ERROR == 5

    def test_str(self) -> None:
        assert str(ErrorCode.IO_ERROR) == "io error"

    def test_is_success(self) -> None:
        assert ErrorCode.OK.is_success
        assert not ErrorCode.TOOL_ERROR.is_success


class TestExitCodeFor:
    def test_each_kind_maps_to_a_code(self) -> None:
        assert exit_code_for(BoxerError("missing_argument", "m")) == ErrorCode.USER_ERROR
        assert exit_code_for(BoxerError("invalid_input", "m")) == ErrorCode.INPUT_ERROR
        assert exit_code_for(BoxerError("external_tool_failure", "m")) == ErrorCode.TOOL_ERROR
        assert exit_code_for(BoxerError("consistency_error", "m")) == ErrorCode.CONSISTENCY_ERROR
        assert exit_code_for(BoxerError("no_such_field", "m")) == ErrorCode.CONSISTENCY_ERROR
        assert exit_code_for(BoxerError("io_failure", "m")) == ErrorCode.IO_ERROR


def test_at_stage_returns_tagged_copy() -> None:
    error = BoxerError("io_failure", "disk full")
    tagged = error.at_stage("catalog_updated")
    assert tagged.stage == "catalog_updated"
    assert tagged.message == "disk full"
    assert error.stage is None
