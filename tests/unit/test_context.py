"""Tests for the immutable shell context."""

import io
import sys

import pytest

from smallshell.context import (
    COMMANDS_KEY,
    DEFAULT_PROMPT,
    PROMPT_KEY,
    STDOUT_KEY,
    ShellContext,
)


class TestBindings:
    """Tests for generic key/value bindings."""

    def test_empty_root(self) -> None:
        """Test a bare root context has no bindings."""
        ctx = ShellContext()
        assert ctx.bindings() == {}
        assert ctx.value("anything") is None
        assert ctx.has("anything") is False

    def test_with_value_returns_new_context(self) -> None:
        """Test binding never mutates the receiver."""
        root = ShellContext()
        child = root.with_value("demo.key", 1)

        assert child is not root
        assert child.value("demo.key") == 1
        assert root.value("demo.key") is None

    def test_child_sees_parent_bindings(self) -> None:
        """Test a derived context is a superset of its parent."""
        parent = ShellContext().with_value("a", 1).with_value("b", 2)
        child = parent.with_value("c", 3)

        for key, value in parent.bindings().items():
            assert child.value(key) == value
        assert child.bindings() == {"a": 1, "b": 2, "c": 3}

    def test_newest_binding_wins(self) -> None:
        """Test lookup walks from the most recent binding backward."""
        ctx = ShellContext().with_value("k", "old").with_value("k", "new")

        assert ctx.value("k") == "new"
        assert ctx.parent is not None
        assert ctx.parent.value("k") == "old"
        assert list(ctx.iter_bindings()) == [("k", "new"), ("k", "old")]

    def test_default_value(self) -> None:
        """Test missing keys return the supplied default."""
        assert ShellContext().value("missing", 42) == 42

    def test_has_with_none_value(self) -> None:
        """Test a key bound to None still counts as bound."""
        ctx = ShellContext().with_value("k", None)
        assert ctx.has("k") is True

    def test_empty_key_rejected(self) -> None:
        """Test binding an empty key raises."""
        with pytest.raises(ValueError):
            ShellContext().with_value("", 1)

    def test_immutable(self) -> None:
        """Test contexts cannot be mutated in place."""
        ctx = ShellContext().with_value("k", 1)
        with pytest.raises(AttributeError):
            ctx.data = 2  # type: ignore[misc]


class TestEquality:
    """Tests for structural equality."""

    def test_equal_chains(self) -> None:
        """Test identical chains compare equal."""
        a = ShellContext().with_value("x", 1).with_value("y", "z")
        b = ShellContext().with_value("x", 1).with_value("y", "z")
        assert a == b

    def test_different_chains(self) -> None:
        """Test different values compare unequal."""
        a = ShellContext().with_value("x", 1)
        b = ShellContext().with_value("x", 2)
        assert a != b

    def test_cancellation_not_compared(self) -> None:
        """Test cancellation state does not affect equality."""
        a = ShellContext().with_value("x", 1)
        b = ShellContext().with_value("x", 1)
        a.cancel()
        assert a == b


class TestTypedAccessors:
    """Tests for prompt, streams and command accessors."""

    def test_background_binds_streams(self) -> None:
        """Test background() binds the given streams and prompt."""
        out, err, inp = io.StringIO(), io.StringIO(), io.StringIO()
        ctx = ShellContext.background(prompt="$ ", stdin=inp, stdout=out, stderr=err)

        assert ctx.prompt == "$ "
        assert ctx.stdout is out
        assert ctx.stderr is err
        assert ctx.stdin is inp

    def test_background_defaults_to_process_streams(self) -> None:
        """Test background() falls back to sys streams."""
        ctx = ShellContext.background()
        assert ctx.stdout is sys.stdout
        assert ctx.stderr is sys.stderr
        assert ctx.stdin is sys.stdin

    def test_default_prompt(self) -> None:
        """Test prompt falls back when unbound."""
        assert ShellContext().prompt == DEFAULT_PROMPT

    def test_non_string_prompt_falls_back(self) -> None:
        """Test prompt falls back when bound to a non-string."""
        ctx = ShellContext().with_value(PROMPT_KEY, 42)
        assert ctx.prompt == DEFAULT_PROMPT

    def test_with_prompt(self) -> None:
        """Test overriding the prompt."""
        ctx = ShellContext().with_prompt("$ ")
        assert ctx.prompt == "$ "
        assert ctx.value(PROMPT_KEY) == "$ "

    def test_invalid_stream_falls_back(self) -> None:
        """Test an object without write() is not used as stdout."""
        ctx = ShellContext().with_value(STDOUT_KEY, "not a stream")
        assert ctx.stdout is sys.stdout

    def test_commands_default_empty(self) -> None:
        """Test commands is an empty mapping when unbound."""
        assert dict(ShellContext().commands) == {}

    def test_commands_snapshot_is_read_only(self) -> None:
        """Test the stored registry cannot be mutated through the context."""
        ctx = ShellContext().with_commands({"a": object()})
        with pytest.raises(TypeError):
            ctx.commands["b"] = object()  # type: ignore[index]

    def test_commands_snapshot_is_copied(self) -> None:
        """Test later changes to the source dict are not visible."""
        source = {"a": object()}
        ctx = ShellContext().with_commands(source)
        source["b"] = object()

        assert set(ctx.commands) == {"a"}

    def test_non_mapping_commands_ignored(self) -> None:
        """Test a bogus commands binding reads as empty."""
        ctx = ShellContext().with_value(COMMANDS_KEY, ["not", "a", "mapping"])
        assert dict(ctx.commands) == {}


class TestCancellation:
    """Tests for the shared cancellation signal."""

    def test_not_cancelled_initially(self) -> None:
        assert ShellContext().cancelled is False

    def test_cancel_visible_across_chain(self) -> None:
        """Test cancelling any context cancels the whole chain."""
        root = ShellContext()
        child = root.with_value("a", 1).with_prompt("> ")

        child.cancel()

        assert root.cancelled is True
        assert child.cancelled is True

    def test_separate_roots_independent(self) -> None:
        """Test unrelated roots do not share cancellation."""
        a = ShellContext()
        b = ShellContext()
        a.cancel()
        assert b.cancelled is False


def test_repr_lists_keys() -> None:
    """Test repr shows effective keys without dumping values."""
    ctx = ShellContext().with_prompt("$ ")
    assert "shell.prompt" in repr(ctx)
