"""Tests for redact."""

import logging
import queue
from dataclasses import dataclass, field
from typing import Any

import pytest

from polaris_sdk.errors import PolarisError, create_error
from polaris_sdk.log import get_logger
from polaris_sdk.secret import DebugMode, RedactionText, String, redact


@dataclass
class Plain:
    f1: str
    f2: list[int]


@dataclass
class Sensitive:
    f1: String
    f2: list[int]


@dataclass
class Mixed:
    key: str
    secret: String


@dataclass
class Visibility:
    exported: String
    _unexported: String = String("")


@dataclass
class Nested:
    name: str
    mixed: Mixed
    history: list[Mixed] = field(default_factory=list)
    labels: dict[str, String] = field(default_factory=dict)
    optional: Mixed | None = None


class TestRedact:
    """Tests for redact."""

    def test_redact_without_secrets(self) -> None:
        """Test a value without String leaves is copied unchanged."""
        v = Plain(f1="str", f2=[1, 2])
        r = redact(v)
        assert r == v
        assert r is not v
        assert r.f2 is not v.f2

    def test_redact_with_secrets(self) -> None:
        v = Sensitive(f1=String("str"), f2=[1, 2])
        assert redact(v) == Sensitive(f1=String("REDACTED"), f2=[1, 2])

    def test_redact_any_field(self) -> None:
        """Test fields typed Any are redacted by their content."""

        @dataclass
        class Anything:
            f: Any

        assert redact(Anything(f="str")) == Anything(f="str")
        assert redact(Anything(f=String("str"))) == Anything(f=String("REDACTED"))

    def test_input_is_not_modified(self) -> None:
        v = Nested(name="n", mixed=Mixed(key="k", secret=String("s")))
        redact(v)
        assert v.mixed.secret == "s"

    def test_nested(self) -> None:
        v = Nested(
            name="n",
            mixed=Mixed(key="k", secret=String("s1")),
            history=[Mixed(key="a", secret=String("s2"))],
            labels={"token": String("s3"), "plain": String("s4")},
        )
        r = redact(v)
        assert r.mixed == Mixed(key="k", secret=String("REDACTED"))
        assert r.history == [Mixed(key="a", secret=String("REDACTED"))]
        assert r.labels == {"token": "REDACTED", "plain": "REDACTED"}
        assert r.optional is None


class TestRedactScenarios:
    """Scenarios from the redaction contract."""

    def test_struct_with_mixed_fields(self) -> None:
        r = redact(Mixed(key="k", secret=String("shh")))
        assert r == Mixed(key="k", secret=String("REDACTED"))

    def test_list_of_markers(self) -> None:
        assert redact([String("a"), String("b")]) == [String("REDACTED"), String("REDACTED")]

    def test_map_with_marker_keys(self) -> None:
        r = redact({String("a"): 1, String("b"): 2})
        assert list(r) == ["REDACTED"]
        assert r["REDACTED"] in (1, 2)

    def test_fresh_reference(self) -> None:
        p = String("x")
        r = redact(p)
        assert r is not p
        assert r == String("REDACTED")

    def test_field_visibility(self) -> None:
        r = redact(Visibility(exported=String("a"), _unexported=String("b")))
        assert r.exported == "REDACTED"
        assert r._unexported == ""


class TestRedactPassthrough:
    """Tests for values returned as is."""

    def test_none(self) -> None:
        assert redact(None) is None

    def test_plain_string(self) -> None:
        v = "text"
        assert redact(v) is v

    @pytest.mark.parametrize("value", [len, lambda: 1, Plain])
    def test_functions(self, value: Any) -> None:
        assert redact(value) is value

    def test_channels(self) -> None:
        q: queue.Queue[String] = queue.Queue()
        assert redact(q) is q

        gen = (String(s) for s in "ab")
        assert redact(gen) is gen

    def test_plain_object_is_a_leaf(self) -> None:
        """Test objects the proxy cannot rebuild are not traversed."""

        class Opaque:
            def __init__(self) -> None:
                self.secret = String("s")

        v = Opaque()
        assert redact(v) is v
        assert v.secret == "s"

    def test_empty_containers(self) -> None:
        for v in ([], {}, set()):
            r = redact(v)
            assert r == v
            assert type(r) is type(v)
            assert r is not v


class TestRedactOptions:
    """Tests for options."""

    def test_redaction_text(self) -> None:
        r = redact([String("a"), "b"], RedactionText("X"))
        assert r == ["X", "b"]

    def test_last_option_wins(self) -> None:
        r = redact(String("a"), RedactionText("X"), RedactionText("Y"))
        assert r == "Y"

    def test_idempotent(self) -> None:
        v = Mixed(key="k", secret=String("s"))
        assert redact(redact(v)) == redact(v)
        assert redact(redact(v, RedactionText("X")), RedactionText("X")) == redact(
            v, RedactionText("X")
        )

    def test_invalid_option(self) -> None:
        with pytest.raises(TypeError, match="Option"):
            redact(String("a"), "X")  # type: ignore[arg-type]

    def test_debug_mode_logs_each_step(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="polaris.secret")
        r = redact(Mixed(key="k", secret=String("s")), DebugMode(True))
        assert r.secret == "REDACTED"

        messages = [record.getMessage() for record in caplog.records]
        assert messages == ["Proxy struct", "Proxy value", "Proxy value"]
        assert caplog.records[0].value_type.endswith("Mixed")
        assert caplog.records[2].value_type.endswith("String")

    def test_debug_mode_off_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="polaris.secret")
        redact([String("a")])
        redact([String("a")], DebugMode(True), DebugMode(False))
        assert caplog.records == []

    def test_debug_mode_does_not_change_result(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="polaris.secret")
        v = {"a": [String("x"), (1, String("y"))]}
        assert redact(v, DebugMode(True)) == redact(v)

    def test_debug_mode_overrides_logger_level(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="polaris.secret")
        secret_logger = get_logger("secret")
        secret_logger.set_level(logging.WARNING)
        try:
            redact([String("a")], DebugMode(True))
        finally:
            secret_logger.set_level(logging.DEBUG)

        messages = [record.getMessage() for record in caplog.records]
        assert messages == ["Proxy slice", "Proxy value"]

    def test_redact_sdk_error(self) -> None:
        error = create_error("ACCOUNT_INVALID", field="client secret", detail="bad")
        r = redact(error)
        assert type(r) is PolarisError
        assert r is not error
        assert str(r) == str(error)
        assert r.args == error.args
        assert r.category is error.category
