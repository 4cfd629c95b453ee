"""Tests for combinators: one_of, each_of, not_, nullable, option, shape."""

import pytest

from rtcheck import (
    MISSING,
    Any,
    Array,
    ContractViolation,
    Descriptor,
    Number,
    String,
    UnsupportedCyclicInput,
    deep_equal,
    each_of,
    not_,
    nullable,
    one_of,
    option,
    shape,
)


class TestOneOf:
    def test_passes_when_any_child_passes(self) -> None:
        either = one_of(Number(), String())
        either(1)
        either("one")

    def test_failure_lists_every_alternative(self) -> None:
        with pytest.raises(ContractViolation) as info:
            one_of(Number(), String())(None)
        message = str(info.value)
        assert message.startswith("one_of(Number(), String()) rejected None")
        assert "expected a number" in message
        assert "expected a string" in message

    def test_no_children_never_passes(self) -> None:
        with pytest.raises(ContractViolation, match="no alternative matched"):
            one_of()(1)

    def test_non_violation_errors_propagate(self) -> None:
        loop: list[object] = []
        loop.append(loop)
        with pytest.raises(UnsupportedCyclicInput):
            one_of(deep_equal(loop), Number())(loop)


class TestEachOf:
    def test_passes_when_all_pass(self) -> None:
        each_of(Number(above=0), Number(below=10))(5)

    def test_reports_first_failing_child(self) -> None:
        with pytest.raises(ContractViolation) as info:
            each_of(Number(above=0), Number(below=10))(-20)
        assert repr(info.value.descriptor) == "Number(above=0)"

    def test_short_circuits(self) -> None:
        seen: list[object] = []

        def _record(descriptor: object, value: object) -> None:
            seen.append(value)

        spy = Descriptor("spy", _record)
        with pytest.raises(ContractViolation):
            each_of(String(), spy)(1)
        assert seen == []

    def test_no_children_always_passes(self) -> None:
        each_of()(object())


class TestNot:
    def test_inverts(self) -> None:
        not_number = not_(Number())
        not_number("1")
        with pytest.raises(ContractViolation, match="rejected by Number"):
            not_number(1)

    def test_any_child_exception_counts_as_failure(self) -> None:
        loop: list[object] = []
        loop.append(loop)
        not_(deep_equal(loop))(loop)


class TestNullable:
    def test_accepts_none_and_child_values(self) -> None:
        maybe_number = nullable(Number())
        maybe_number(None)
        maybe_number(3)

    def test_rejects_other_values(self) -> None:
        with pytest.raises(ContractViolation):
            nullable(Number())("3")

    def test_rejects_missing(self) -> None:
        with pytest.raises(ContractViolation):
            nullable(Number())(MISSING)

    def test_missing_allowed_when_child_allows_it(self) -> None:
        nullable(Any())(MISSING)


class TestOption:
    def test_accepts_missing_and_child_values(self) -> None:
        optional_number = option(Number())
        optional_number(MISSING)
        optional_number(3)

    def test_rejects_none(self) -> None:
        with pytest.raises(ContractViolation):
            option(Number())(None)

    def test_rejects_other_values(self) -> None:
        with pytest.raises(ContractViolation):
            option(Number())("3")

    def test_none_allowed_when_child_allows_it(self) -> None:
        option(nullable(Number()))(None)


class TestShapeMapping:
    def test_matching_record(self) -> None:
        shape({"a": Number()})({"a": 42})

    def test_wrong_field_type(self) -> None:
        with pytest.raises(ContractViolation) as info:
            shape({"a": Number()})({"a": "42"})
        assert info.value.path == ("a",)
        assert "at ['a']" in str(info.value)

    @pytest.mark.parametrize("value", [42, "a", [42], None])
    def test_non_record_fails(self, value: object) -> None:
        with pytest.raises(ContractViolation, match="expected a mapping"):
            shape({"a": Number()})(value)

    def test_undeclared_fields_ignored(self) -> None:
        shape({"a": Number()})({"a": 1, "b": "anything"})

    def test_missing_field_is_checked_as_missing(self) -> None:
        with pytest.raises(ContractViolation, match="got missing"):
            shape({"a": Number()})({})
        shape({"a": option(Number())})({})

    def test_nested_path(self) -> None:
        user = shape({"profile": shape({"ages": Array(type=Number())})})
        with pytest.raises(ContractViolation) as info:
            user({"profile": {"ages": [1, "x"]}})
        assert info.value.path == ("profile", "ages", 1)

    def test_spec_is_captured(self) -> None:
        spec = {"a": Number()}
        record = shape(spec)
        spec["b"] = String()
        record({"a": 1})


class TestShapeSequence:
    def test_matching_sequence(self) -> None:
        shape([Number()])([42])

    def test_wrong_element(self) -> None:
        with pytest.raises(ContractViolation):
            shape([Number()])(["42"])

    def test_extra_elements_ignored(self) -> None:
        shape([Number(), String()])([1, "a", None, {}])

    def test_short_sequence_checks_missing(self) -> None:
        with pytest.raises(ContractViolation) as info:
            shape([Number(), Number()])([1])
        assert info.value.path == (1,)
        shape([Number(), option(Number())])([1])

    def test_rejects_mapping(self) -> None:
        with pytest.raises(ContractViolation, match="expected an array"):
            shape([Number()])({"0": 1})


class TestConstruction:
    def test_children_must_be_descriptors(self) -> None:
        with pytest.raises(TypeError, match="expects descriptors"):
            one_of(Number(), int)  # type: ignore[arg-type]

    def test_shape_rejects_scalar_spec(self) -> None:
        with pytest.raises(TypeError, match="mapping or sequence"):
            shape(42)  # type: ignore[arg-type]

    def test_children_are_shareable(self) -> None:
        number = Number()
        a = one_of(number, String())
        b = each_of(number, Number(above=0))
        a("x")
        b(1)
        assert a.children[0] is b.children[0]
