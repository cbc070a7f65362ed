"""Unit tests for argument matchers."""

import re

import pytest

from doublekit.core.exceptions import MatcherError, UnknownMatcherError
from doublekit.provider.matchers import (
    MATCHER_CONSTRUCTORS,
    Callback,
    IsEqual,
    IsType,
    Matcher,
    anything,
    array_has_key,
    as_matcher,
    callback,
    contains_equal,
    count_of,
    equal_to,
    get_matcher_constructor,
    greater_than,
    greater_than_or_equal,
    identical_to,
    is_empty,
    is_false,
    is_instance_of,
    is_null,
    is_true,
    is_type,
    less_than,
    less_than_or_equal,
    list_matcher_names,
    logical_and,
    logical_not,
    logical_or,
    matches_regular_expression,
    string_contains,
    string_ends_with,
    string_starts_with,
)


# ============================================================================
# Simple Matchers
# ============================================================================


@pytest.mark.unit
class TestSimpleMatchers:
    """Test matchers without constructor arguments."""

    def test_anything_accepts_every_value(self):
        """Test anything() accepts None, objects and falsy values."""
        matcher = anything()
        for value in (None, 0, "", [], object()):
            assert matcher.matches(value)

    def test_equal_to_uses_equality(self):
        """Test equal_to compares with ==."""
        matcher = equal_to([1, 2])
        assert matcher.matches([1, 2])
        assert not matcher.matches([2, 1])

    def test_identical_to_uses_identity(self):
        """Test identical_to only accepts the same object."""
        expected = [1, 2]
        matcher = identical_to(expected)
        assert matcher.matches(expected)
        assert not matcher.matches([1, 2])

    def test_is_null(self):
        """Test is_null only accepts None."""
        assert is_null().matches(None)
        assert not is_null().matches(0)

    def test_is_true_is_strict(self):
        """Test is_true rejects truthy values other than True."""
        assert is_true().matches(True)
        assert not is_true().matches(1)
        assert not is_true().matches("yes")

    def test_is_false_is_strict(self):
        """Test is_false rejects falsy values other than False."""
        assert is_false().matches(False)
        assert not is_false().matches(0)
        assert not is_false().matches(None)

    def test_is_empty(self):
        """Test is_empty accepts sized values of length zero."""
        assert is_empty().matches("")
        assert is_empty().matches({})
        assert not is_empty().matches([0])
        assert not is_empty().matches(0)

    def test_is_instance_of(self):
        """Test is_instance_of honors subclasses."""
        matcher = is_instance_of(Exception)
        assert matcher.matches(ValueError("x"))
        assert not matcher.matches("x")


@pytest.mark.unit
class TestIsType:
    """Test the named type matcher."""

    @pytest.mark.parametrize(
        "type_name,accepted,rejected",
        [
            ("int", 3, True),
            ("bool", False, 0),
            ("float", 1.5, 1),
            ("numeric", 1.5, "1"),
            ("string", "x", b"x"),
            ("list", [], ()),
            ("dict", {}, []),
            ("callable", len, "len"),
            ("null", None, 0),
            ("scalar", "x", []),
        ],
    )
    def test_type_names(self, type_name, accepted, rejected):
        """Test each type name accepts and rejects representative values."""
        matcher = is_type(type_name)
        assert matcher.matches(accepted)
        assert not matcher.matches(rejected)

    def test_invalid_type_name(self):
        """Test unknown type names are rejected at construction."""
        with pytest.raises(ValueError, match="Invalid type name"):
            IsType("integer")


@pytest.mark.unit
class TestCallbackMatcher:
    """Test predicate-based matching."""

    def test_predicate_result_is_coerced_to_bool(self):
        """Test truthy predicate results are accepted."""
        matcher = callback(lambda value: value)
        assert matcher.matches("non-empty")
        assert not matcher.matches("")

    def test_describe_uses_predicate_name(self):
        """Test the description names the predicate."""
        assert callback(callable).describe() == "is accepted by callable"

    def test_rejects_non_callable_predicate(self):
        """Test a non-callable predicate raises TypeError."""
        with pytest.raises(TypeError):
            Callback("callable")


# ============================================================================
# Comparison and String Matchers
# ============================================================================


@pytest.mark.unit
class TestComparisonMatchers:
    """Test ordering matchers."""

    def test_bounds(self):
        """Test each comparison at and around its bound."""
        assert greater_than(2).matches(3)
        assert not greater_than(2).matches(2)
        assert greater_than_or_equal(2).matches(2)
        assert less_than(2).matches(1)
        assert not less_than(2).matches(2)
        assert less_than_or_equal(2).matches(2)

    def test_incomparable_values_do_not_match(self):
        """Test a TypeError during comparison means no match."""
        assert not greater_than(2).matches("3")
        assert not less_than(2).matches(None)

    def test_describe(self):
        """Test comparison descriptions show operator and bound."""
        assert greater_than(2).describe() == "is > 2"
        assert less_than_or_equal(0.5).describe() == "is <= 0.5"


@pytest.mark.unit
class TestStringMatchers:
    """Test string matchers."""

    def test_string_contains(self):
        """Test substring matching with optional case folding."""
        assert string_contains("ell").matches("Hello")
        assert not string_contains("ELL").matches("Hello")
        assert string_contains("ELL", True).matches("Hello")
        assert not string_contains("1").matches(1)

    def test_prefix_and_suffix(self):
        """Test prefix and suffix matchers."""
        assert string_starts_with("He").matches("Hello")
        assert not string_starts_with("lo").matches("Hello")
        assert string_ends_with("lo").matches("Hello")
        assert not string_ends_with("lo").matches(None)

    def test_regular_expression_searches(self):
        """Test the pattern may match anywhere in the string."""
        matcher = matches_regular_expression(r"\d{3}")
        assert matcher.matches("abc123def")
        assert not matcher.matches("12")
        assert not matcher.matches(123)

    def test_invalid_regular_expression(self):
        """Test an invalid pattern raises at construction."""
        with pytest.raises(re.error):
            matches_regular_expression("(")


# ============================================================================
# Container and Logical Matchers
# ============================================================================


@pytest.mark.unit
class TestContainerMatchers:
    """Test matchers over collections."""

    def test_array_has_key_on_mapping(self):
        """Test key lookup in a mapping."""
        assert array_has_key("a").matches({"a": 1})
        assert not array_has_key("b").matches({"a": 1})

    def test_array_has_key_on_sequence(self):
        """Test index lookup in a sequence."""
        assert array_has_key(1).matches([10, 20])
        assert not array_has_key(2).matches([10, 20])
        assert not array_has_key(0).matches("ab")

    def test_contains_equal(self):
        """Test membership with equality."""
        assert contains_equal(2).matches([1, 2, 3])
        assert not contains_equal(4).matches([1, 2, 3])
        assert not contains_equal(1).matches(5)

    def test_count_of(self):
        """Test length matching."""
        assert count_of(2).matches({"a": 1, "b": 2})
        assert not count_of(2).matches([1])


@pytest.mark.unit
class TestLogicalMatchers:
    """Test matcher composition."""

    def test_logical_not(self):
        """Test negation of a matcher."""
        assert logical_not(is_null()).matches(0)
        assert not logical_not(is_null()).matches(None)

    def test_logical_and_or(self):
        """Test conjunction and disjunction."""
        in_range = logical_and(greater_than(0), less_than(10))
        assert in_range.matches(5)
        assert not in_range.matches(10)

        either = logical_or(is_null(), is_true())
        assert either.matches(None)
        assert either.matches(True)
        assert not either.matches(False)

    def test_plain_values_are_wrapped(self):
        """Test non-matcher operands become equality matchers."""
        matcher = logical_or("a", "b")
        assert matcher.matches("b")
        assert not matcher.matches("c")
        assert matcher.describe() == "is equal to 'a' or is equal to 'b'"


# ============================================================================
# Matcher Table
# ============================================================================


@pytest.mark.unit
class TestMatcherTable:
    """Test name-based matcher lookup."""

    def test_every_constructor_builds_a_matcher(self):
        """Test table entries are callables returning Matchers."""
        samples = {
            "isInstanceOf": (int,),
            "isType": ("int",),
            "callback": (callable,),
            "logicalNot": (1,),
            "logicalAnd": (1,),
            "logicalOr": (1,),
        }
        for name, constructor in MATCHER_CONSTRUCTORS.items():
            args = samples.get(name, ())
            if not args and constructor.__code__.co_argcount:
                args = ("x",)
            assert isinstance(constructor(*args), Matcher), name

    def test_camel_case_lookup(self):
        """Test lookup by camelCase name."""
        assert get_matcher_constructor("greaterThan")(0).matches(5)

    def test_snake_case_lookup(self):
        """Test lookup by snake_case alias."""
        assert get_matcher_constructor("string_starts_with") is string_starts_with
        assert get_matcher_constructor("is_null") is is_null

    def test_unknown_name(self):
        """Test unknown names raise UnknownMatcherError."""
        with pytest.raises(UnknownMatcherError) as exc_info:
            get_matcher_constructor("isPositive")

        assert exc_info.value.matcher_name == "isPositive"
        assert isinstance(exc_info.value, MatcherError)
        assert isinstance(exc_info.value, LookupError)

    def test_non_string_name(self):
        """Test non-string names are unknown."""
        with pytest.raises(UnknownMatcherError):
            get_matcher_constructor(42)

    def test_list_matcher_names_is_sorted(self):
        """Test the listing covers the table in order."""
        names = list_matcher_names()
        assert names == sorted(MATCHER_CONSTRUCTORS)
        assert "equalTo" in names

    def test_as_matcher(self):
        """Test coercion keeps matchers and wraps other values."""
        matcher = is_null()
        assert as_matcher(matcher) is matcher
        wrapped = as_matcher(3)
        assert isinstance(wrapped, IsEqual)
        assert repr(wrapped) == "<IsEqual: is equal to 3>"
