"""Unit tests for the host hook dispatcher."""

import pytest

from sparxstar_gluon.core.hooks import INIT, HookRegistry


class TestActions:
    def test_callbacks_run_in_priority_then_subscription_order(self):
        hooks = HookRegistry()
        calls = []
        hooks.add_action(INIT, lambda: calls.append("late"), priority=20)
        hooks.add_action(INIT, lambda: calls.append("first"))
        hooks.add_action(INIT, lambda: calls.append("second"))
        hooks.add_action(INIT, lambda: calls.append("early"), priority=1)

        hooks.do_action(INIT)

        assert calls == ["early", "first", "second", "late"]

    def test_arguments_are_forwarded(self):
        hooks = HookRegistry()
        seen = []
        hooks.add_action("custom", lambda a, b: seen.append((a, b)))

        hooks.do_action("custom", 1, "x")

        assert seen == [(1, "x")]

    def test_did_action_counts_firings_without_subscribers(self):
        hooks = HookRegistry()
        assert hooks.did_action(INIT) == 0

        hooks.do_action(INIT)
        hooks.do_action(INIT)

        assert hooks.did_action(INIT) == 2

    def test_callback_exception_propagates(self):
        hooks = HookRegistry()

        def boom():
            raise RuntimeError("boom")

        hooks.add_action(INIT, boom)

        with pytest.raises(RuntimeError):
            hooks.do_action(INIT)

    def test_remove_action(self):
        hooks = HookRegistry()
        calls = []

        def cb():
            calls.append(1)

        hooks.add_action(INIT, cb)
        assert hooks.has_action(INIT)
        assert hooks.remove_action(INIT, cb) is True
        assert hooks.remove_action(INIT, cb) is False
        assert not hooks.has_action(INIT)

        hooks.do_action(INIT)
        assert calls == []


class TestFilters:
    def test_value_threads_through_filters(self):
        hooks = HookRegistry()
        hooks.add_filter("f", lambda v: v + 1)
        hooks.add_filter("f", lambda v: v * 10, priority=5)

        assert hooks.apply_filters("f", 1) == 11

    def test_extra_arguments_are_passed(self):
        hooks = HookRegistry()
        hooks.add_filter("f", lambda v, suffix: v + suffix)

        assert hooks.apply_filters("f", "a", "b") == "ab"

    def test_no_filters_returns_value_unchanged(self):
        hooks = HookRegistry()
        value = {"k": 1}

        assert hooks.apply_filters("missing", value) is value
        assert not hooks.has_filter("missing")
