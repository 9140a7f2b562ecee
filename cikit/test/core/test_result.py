"""Tests for cikit.core.result module."""

import pytest

from cikit.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    """Tests for Ok type."""

    def test_unwrap(self) -> None:
        assert Ok("1.2.3").unwrap() == "1.2.3"

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok("1.2.3").unwrap_or("0.0.0") == "1.2.3"

    def test_map(self) -> None:
        assert Ok(" master\n").map(str.strip) == Ok("master")

    def test_map_err_is_noop(self) -> None:
        assert Ok(42).map_err(lambda e: f"wrapped: {e}") == Ok(42)

    def test_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]


class TestErr:
    """Tests for Err type."""

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("git failed").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        result: Result[str, str] = Err("git failed")
        assert result.unwrap_or("fallback") == "fallback"

    def test_map_is_noop(self) -> None:
        result: Result[int, str] = Err("boom")
        assert result.map(lambda x: x * 2) == Err("boom")

    def test_map_err(self) -> None:
        assert Err("exit 1").map_err(lambda e: f"git tag: {e}") == Err("git tag: exit 1")

    def test_equality(self) -> None:
        assert Err("a") == Err("a")
        assert Err(42) != Ok(42)


class TestTypeGuards:
    def test_is_ok(self) -> None:
        assert is_ok(Ok(1)) is True
        assert is_ok(Err(1)) is False

    def test_is_err(self) -> None:
        assert is_err(Err(1)) is True
        assert is_err(Ok(1)) is False


class TestPatternMatching:
    def test_match_ok(self) -> None:
        result: Result[int, str] = Ok(42)
        match result:
            case Ok(value):
                assert value == 42
            case Err(_):
                pytest.fail("Should not match Err")

    def test_match_err(self) -> None:
        result: Result[int, str] = Err("oops")
        match result:
            case Ok(_):
                pytest.fail("Should not match Ok")
            case Err(error):
                assert error == "oops"
