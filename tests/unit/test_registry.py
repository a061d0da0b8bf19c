"""Tests for Registry registration, lookup and logging."""

import logging
from typing import Any

import pytest

from depwire import (
    DepwireAlreadyRegisteredError,
    DepwireDependenciesNotFoundError,
    DepwireDependencyNotFoundError,
    DepwireError,
    DepwireInvalidRegistrationError,
    Registry,
)


class TestRegister:
    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("logger", logging.getLogger("we be logging")),
            ("pool-size", 20),
            ("easter-egg", "apple-banana-cherry"),
            ("empty", None),
            ("", "empty names are allowed"),
            ("mapping", {"a": 1}),
        ],
    )
    def test_registered_value_is_returned_unchanged(
        self,
        registry: Registry,
        name: str,
        value: Any,
    ) -> None:
        """get() returns exactly the object passed to register()."""
        registry.register(name, value)

        assert registry.get(name) is value

    def test_duplicate_registration_is_rejected(self, registry: Registry) -> None:
        """Registering a name twice raises and keeps the first value."""
        first = object()
        second = object()
        registry.register("thing", first)

        with pytest.raises(DepwireAlreadyRegisteredError) as exc_info:
            registry.register("thing", second)

        assert exc_info.value.name == "thing"
        assert str(exc_info.value) == "Dependency 'thing' is already registered."
        assert registry.get("thing") is first

    def test_duplicate_registration_is_rejected_even_for_equal_value(
        self,
        registry: Registry,
    ) -> None:
        registry.register("pool-size", 20)

        with pytest.raises(DepwireAlreadyRegisteredError):
            registry.register("pool-size", 20)

    @pytest.mark.parametrize("name", [1, None, b"bytes", ("tuple",)])
    def test_non_string_name_is_rejected(self, registry: Registry, name: Any) -> None:
        with pytest.raises(DepwireInvalidRegistrationError, match="must be a string"):
            registry.register(name, object())

        assert len(registry) == 0

    def test_errors_share_base_class(self) -> None:
        assert issubclass(DepwireAlreadyRegisteredError, DepwireError)
        assert issubclass(DepwireInvalidRegistrationError, DepwireError)
        assert issubclass(DepwireDependencyNotFoundError, DepwireError)


class TestGet:
    def test_missing_name_raises_not_found(self, registry: Registry) -> None:
        with pytest.raises(DepwireDependencyNotFoundError) as exc_info:
            registry.get("db")

        assert exc_info.value.name == "db"
        assert str(exc_info.value) == "Dependency 'db' is not registered."

    def test_not_found_is_a_key_error(self, registry: Registry) -> None:
        with pytest.raises(KeyError):
            registry.get("db")

    def test_get_has_no_side_effects(self, registry: Registry) -> None:
        registry.register("a", 1)

        with pytest.raises(DepwireDependencyNotFoundError):
            registry.get("b")

        assert registry.names() == ("a",)
        assert registry.get("a") == 1


class TestIntrospection:
    def test_new_registry_is_empty(self, registry: Registry) -> None:
        assert len(registry) == 0
        assert registry.names() == ()
        assert "logger" not in registry

    def test_names_are_sorted(self, registry: Registry) -> None:
        for name in ("cherry", "apple", "banana"):
            registry.register(name, name.upper())

        assert registry.names() == ("apple", "banana", "cherry")
        assert len(registry) == 3
        assert "banana" in registry
        assert repr(registry) == "Registry(names=['apple', 'banana', 'cherry'])"

    def test_registries_are_independent(self) -> None:
        first = Registry()
        second = Registry()
        first.register("only-first", 1)

        assert "only-first" in first
        assert "only-first" not in second


class TestOperationalLogger:
    def test_operations_are_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("tests.registry.operations")
        registry = Registry(logger=logger)

        with caplog.at_level(logging.DEBUG, logger="tests.registry.operations"):
            registry.register("pool-size", 20)
            registry.get("pool-size")

        messages = [record.getMessage() for record in caplog.records]
        assert messages == [
            "[BEGIN] register('pool-size', <int>)",
            "[END]   register('pool-size', <int>)",
            "[BEGIN] get('pool-size')",
            "[END]   get('pool-size')",
        ]

    def test_errors_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("tests.registry.errors")
        registry = Registry(logger=logger)

        with caplog.at_level(logging.DEBUG, logger="tests.registry.errors"):
            with pytest.raises(DepwireDependencyNotFoundError):
                registry.get("db")

        assert caplog.records[-1].getMessage() == (
            "[END]   get('db') with ERROR: Dependency 'db' is not registered."
        )

    def test_registry_logger_is_a_hidden_dependency(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Injecting a registry into itself swaps its operational logger."""
        registry = Registry()
        replacement = logging.getLogger("tests.registry.replacement")
        registry.register("logger", replacement)

        registry.inject(registry)

        assert registry.dependencies().logger is replacement
        with caplog.at_level(logging.DEBUG, logger="tests.registry.replacement"):
            registry.register("pool-size", 20)
        assert {record.name for record in caplog.records} == {"tests.registry.replacement"}

    def test_self_injection_without_logger_reports_it_missing(self) -> None:
        registry = Registry()
        original = registry.dependencies().logger

        with pytest.raises(DepwireDependenciesNotFoundError) as exc_info:
            registry.inject(registry)

        assert exc_info.value.names == ("logger",)
        assert registry.dependencies().logger is original
