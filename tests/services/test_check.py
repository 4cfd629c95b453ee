"""Tests for CheckService and target resolution."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from rtcheck import ContractViolation, Toggle, disable_checks
from rtcheck.services.check import CheckService, TargetError, resolve_target
from rtcheck.services.result import ErrorCode, ServiceError, ServiceResult
from tests import sample_contracts

ALICE = json.dumps({"name": "alice", "age": 30})


class TestResolveTarget:
    def test_resolves_descriptor(self) -> None:
        assert resolve_target("tests.sample_contracts:USER") is sample_contracts.USER

    def test_dotted_attribute_path_is_followed(self) -> None:
        target = "tests.sample_contracts:USER.arguments"
        with pytest.raises(TargetError, match="not a descriptor"):
            resolve_target(target)

    @pytest.mark.parametrize(
        "target",
        ["tests.sample_contracts", "tests.sample_contracts:", ":USER", ""],
    )
    def test_malformed(self, target: str) -> None:
        with pytest.raises(TargetError, match="package.module:attribute"):
            resolve_target(target)

    def test_unknown_module(self) -> None:
        with pytest.raises(TargetError, match="Cannot import"):
            resolve_target("tests.no_such_module:USER")

    def test_unknown_attribute(self) -> None:
        with pytest.raises(TargetError, match="has no attribute"):
            resolve_target("tests.sample_contracts:NOBODY")

    def test_not_a_descriptor(self) -> None:
        with pytest.raises(TargetError, match="dict, not a descriptor"):
            resolve_target("tests.sample_contracts:NOT_A_DESCRIPTOR")


class TestCheckService:
    def test_valid_document(self) -> None:
        result = CheckService().check("tests.sample_contracts:USER", ALICE)
        assert result.ok is True
        assert result.op == "check"
        assert result.data["target"] == "tests.sample_contracts:USER"
        assert result.data["kind"] == "object"
        assert result.data["skipped"] is False
        assert result.data["descriptor"].startswith("shape(")

    def test_violation(self) -> None:
        document = json.dumps({"name": "alice", "age": 300})
        result = CheckService().check("tests.sample_contracts:USER", document)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "CONTRACT_VIOLATION"
        assert result.error.detail["path"] == "['age']"
        assert result.error.detail["reason"] == "expected a number within [0, 150]"
        assert result.error.detail["descriptor"] == "Number(within=(0, 150))"
        assert result.error.detail["target"] == "tests.sample_contracts:USER"

    def test_array_target(self) -> None:
        result = CheckService().check("tests.sample_contracts:POINT", "[1, 2.5]")
        assert result.ok is True
        assert result.data["kind"] == "array"

    def test_nested_violation_path(self) -> None:
        document = json.dumps({"name": "bob", "age": 4, "tags": ["a", 1]})
        result = CheckService().check("tests.sample_contracts:USER", document)
        assert result.error is not None
        assert result.error.detail["path"] == "['tags'][1]"

    def test_invalid_target(self) -> None:
        result = CheckService().check("tests.sample_contracts:NOBODY", ALICE)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "INVALID_TARGET"
        assert result.error.detail == {"target": "tests.sample_contracts:NOBODY"}

    def test_invalid_document(self) -> None:
        result = CheckService().check("tests.sample_contracts:USER", "{not json")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "INVALID_DOCUMENT"

    def test_global_toggle_off_skips(self) -> None:
        disable_checks()
        result = CheckService().check("tests.sample_contracts:USER", '"not a user"')
        assert result.ok is True
        assert result.data["skipped"] is True
        assert result.data["kind"] == "string"

    def test_injected_toggle(self) -> None:
        service = CheckService(toggle=Toggle(enabled=False))
        result = service.check("tests.sample_contracts:USER", "null")
        assert result.data["skipped"] is True
        assert result.data["kind"] == "null"


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="check")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None

    def test_json_round_trip(self) -> None:
        result = ServiceResult(
            ok=False,
            op="check",
            error=ServiceError(code="INVALID_DOCUMENT", message="bad"),
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["error"] == {"code": "INVALID_DOCUMENT", "message": "bad", "detail": {}}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="check")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_success_constructor(self) -> None:
        result = ServiceResult.success("status", enabled=True)
        assert result.ok is True
        assert result.data == {"enabled": True}
        assert result.error is None

    def test_failure_constructor(self) -> None:
        result = ServiceResult.failure("check", ErrorCode.INVALID_TARGET, "nope", target="x")
        assert result.ok is False
        assert result.error == ServiceError(
            code=ErrorCode.INVALID_TARGET, message="nope", detail={"target": "x"}
        )

    def test_from_violation(self) -> None:
        with pytest.raises(ContractViolation) as info:
            sample_contracts.POINT([0, "y"])
        result = ServiceResult.from_violation("check", info.value)
        assert result.error is not None
        assert result.error.code == ErrorCode.CONTRACT_VIOLATION
        assert result.error.detail == {
            "path": "[1]",
            "reason": "expected a number, got string",
            "descriptor": "Number()",
        }
        assert "at [1]" in result.error.message

    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceError(code="E001", message="bad")
