"""Tests for frame() option validation and construction."""

from __future__ import annotations

import sys

import pytest

from cbframe import (
    ANONYMOUS_FRAME,
    ConfigurationError,
    current_frame,
    frame,
    framed,
    is_frame,
    registry,
)


def noop() -> None:
    return None


def test_frame_returns_registered_callback() -> None:
    callback = frame(code=noop)

    assert callable(callback)
    assert is_frame(callback)
    assert callback() is None


def test_name_is_annotated_with_call_site() -> None:
    line = sys._getframe().f_lineno + 1
    callback = frame(name="probe", code=noop)

    node = registry.node_for(callback)
    assert node.name.endswith(f"test_frame_builder.py:{line} - probe")


def test_missing_name_defaults_to_anonymous_label() -> None:
    node = registry.node_for(frame(code=noop))

    assert node.name.endswith(f" - {ANONYMOUS_FRAME}")


def test_callback_keeps_code_metadata() -> None:
    def fetch_user() -> str:
        """Look up the current user."""
        return "alice"

    callback = frame(code=fetch_user)

    assert callback.__name__ == "fetch_user"
    assert callback.__doc__ == "Look up the current user."
    assert callback.__wrapped__ is fetch_user


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        frame(code=noop, retries=3)

    assert excinfo.value.key == "retries"
    assert "Unknown frame option: retries" in str(excinfo.value)


def test_code_is_required() -> None:
    with pytest.raises(ConfigurationError, match="needs a 'code' callback"):
        frame(name="no code")


@pytest.mark.parametrize("key", ["name", "code", "catch", "local", "existing_frame"])
def test_supplied_key_without_value_is_rejected(key: str) -> None:
    options = {"code": noop, key: None}

    with pytest.raises(ConfigurationError, match=f"value missing for key {key}"):
        frame(**options)


def test_non_callable_code_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="code must be callable"):
        frame(code="print('hi')")


def test_async_code_is_rejected() -> None:
    async def fetch() -> None:
        raise RuntimeError("raised after the frame returned")

    with pytest.raises(ConfigurationError, match="async function") as excinfo:
        frame(code=fetch, catch=print)

    assert excinfo.value.key == "code"


def test_async_generator_code_is_rejected() -> None:
    async def stream():
        yield 1

    with pytest.raises(ConfigurationError, match="async function"):
        frame(code=stream)


def test_async_catch_is_rejected() -> None:
    async def report(trace: str) -> None:
        return None

    with pytest.raises(ConfigurationError) as excinfo:
        frame(code=noop, catch=report)

    assert excinfo.value.key == "catch"


def test_non_callable_catch_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="catch must be callable"):
        frame(code=noop, catch="log")


def test_non_string_name_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="name must be str"):
        frame(code=noop, name=42)


@pytest.mark.parametrize("local", ["unqualified", "tests.", "tests.1x", 7, ["tests.ok", 3]])
def test_local_requires_qualified_names(local: object) -> None:
    with pytest.raises(ConfigurationError):
        frame(code=noop, local=local)


def test_local_accepts_one_name_or_many() -> None:
    single = registry.node_for(frame(code=noop, local="tests.a"))
    many = registry.node_for(
        frame(code=noop, local=["tests.a", "tests.b", "tests.a"])
    )

    assert list(single.bindings) == ["tests.a"]
    assert list(many.bindings) == ["tests.a", "tests.b"]


def test_frame_without_local_declares_no_bindings() -> None:
    assert registry.node_for(frame(code=noop)).bindings is None


def test_construction_captures_parent_without_installing() -> None:
    created = {}

    def outer_code() -> None:
        created["inner"] = frame(name="inner", code=noop)
        created["running"] = current_frame()

    outer = frame(name="outer", code=outer_code)
    assert current_frame() is None
    outer()

    outer_node = registry.node_for(outer)
    inner_node = registry.node_for(created["inner"])
    assert created["running"] is outer_node
    assert inner_node.parent is outer_node
    assert outer_node.parent is None


def test_siblings_share_one_parent() -> None:
    created = []

    def spawn() -> None:
        created.append(frame(name="left", code=noop))
        created.append(frame(name="right", code=noop))

    parent = frame(name="parent", code=spawn)
    parent()

    left, right = (registry.node_for(cb) for cb in created)
    assert left is not right
    assert left.parent is right.parent is registry.node_for(parent)


class TestExistingFrame:
    def test_alias_shares_the_node(self) -> None:
        original = frame(name="original", code=noop)
        alias = frame(code=lambda: "alias", existing_frame=original)

        assert alias is not original
        assert is_frame(alias)
        assert registry.node_for(alias) is registry.node_for(original)
        assert alias() == "alias"

    def test_alias_keeps_original_parent(self) -> None:
        created = {}

        def build_child() -> None:
            created["child"] = frame(name="child", code=noop)

        frame(name="root", code=build_child)()

        def build_alias() -> None:
            created["alias"] = frame(code=noop, existing_frame=created["child"])

        frame(name="elsewhere", code=build_alias)()

        child_node = registry.node_for(created["child"])
        assert registry.node_for(created["alias"]) is child_node
        assert child_node.parent.name.endswith(" - root")

    def test_alias_uses_original_handler(self) -> None:
        traces: list[str] = []

        def fail() -> None:
            raise RuntimeError("alias failed")

        original = frame(name="original", code=noop, catch=traces.append)
        alias = frame(name="ignored", code=fail, existing_frame=original)

        assert alias() is None
        lines = traces[0].splitlines()
        assert "alias failed" in lines[0]
        assert lines[2].endswith(" - original")

    def test_alias_rejects_new_catch(self) -> None:
        original = frame(code=noop)

        with pytest.raises(ConfigurationError) as excinfo:
            frame(code=noop, existing_frame=original, catch=print)

        assert excinfo.value.key == "catch"

    def test_alias_rejects_new_local(self) -> None:
        original = frame(code=noop)

        with pytest.raises(ConfigurationError) as excinfo:
            frame(code=noop, existing_frame=original, local="tests.x")

        assert excinfo.value.key == "local"

    @pytest.mark.parametrize("value", [noop, lambda: None, "frame", 12])
    def test_alias_requires_a_live_frame(self, value: object) -> None:
        with pytest.raises(ConfigurationError, match="existing_frame isn't a frame"):
            frame(code=noop, existing_frame=value)


class TestFramedDecorator:
    def test_bare_decorator(self) -> None:
        decorator_line = sys._getframe().f_lineno + 2

        @framed
        def ping() -> str:
            return "pong"

        assert is_frame(ping)
        assert ping() == "pong"
        location, label = registry.node_for(ping).name.split(" - ")
        assert label == ANONYMOUS_FRAME
        filename, line = location.rsplit(":", 1)
        assert filename.endswith("test_frame_builder.py")
        # Decorator application is reported on the decorator or the def line.
        assert int(line) in (decorator_line, decorator_line + 1)

    def test_decorator_with_options(self) -> None:
        traces: list[str] = []

        @framed(name="poll", catch=traces.append)
        def poll() -> None:
            raise TimeoutError("slow upstream")

        assert poll() is None
        lines = traces[0].splitlines()
        assert "slow upstream" in lines[0]
        assert lines[2].endswith(" - poll")

    def test_decorator_rejects_code_option(self) -> None:
        with pytest.raises(ConfigurationError, match="decorated function"):
            framed(code=noop)

    def test_decorator_validates_options(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown frame option"):
            framed(timeout=3)(noop)
