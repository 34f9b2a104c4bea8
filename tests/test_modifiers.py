"""Tests for the modifier verbs: method, override, before, after, around."""

import pytest

from submonkey.errors import (
    ClassNotSpecified,
    MethodAlreadyExists,
    MethodNotFound,
    PermissionDenied,
)
from submonkey.registry import UNDEFINED

VERBS = ["method", "override", "before", "after", "around"]


def _noop(*args, **kwargs):
    return None


class TestPermission:

    @pytest.mark.parametrize("verb", VERBS)
    def test_unauthorized_class_rejected(self, monkey, sample_cls, verb):
        with pytest.raises(PermissionDenied):
            getattr(monkey, verb)("greet", _noop, sample_cls)
        assert "greet" in sample_cls.__dict__
        assert sample_cls().greet("x") == "Hello, x"

    @pytest.mark.parametrize("verb", VERBS)
    @pytest.mark.parametrize("empty", [None, ""])
    def test_no_class_specified(self, monkey, verb, empty):
        with pytest.raises(ClassNotSpecified):
            getattr(monkey, verb)("greet", _noop, empty)

    def test_around_enforces_gate(self, monkey, sample_cls):
        with pytest.raises(PermissionDenied):
            monkey.around("greet", lambda orig, self, name: "hijacked", sample_cls)
        assert sample_cls().greet("x") == "Hello, x"

    def test_base_authorization_does_not_cover_subclass(self, monkey, sample, child_cls):
        with pytest.raises(PermissionDenied):
            monkey.override("greet", _noop, child_cls)

    def test_non_callable_rejected(self, monkey, sample):
        with pytest.raises(TypeError):
            monkey.override("greet", "not callable", sample)

    def test_gate_checked_before_code(self, monkey, sample_cls):
        with pytest.raises(PermissionDenied):
            monkey.override("greet", "not callable", sample_cls)


class TestMethod:

    def test_creates_new_method(self, monkey, sample):
        monkey.method("wave", lambda self: "o/", sample)
        assert sample().wave() == "o/"

    def test_existing_method_rejected(self, monkey, sample):
        with pytest.raises(MethodAlreadyExists, match="override"):
            monkey.method("greet", _noop, sample)

    def test_inherited_method_rejected(self, monkey, gate, child_cls):
        gate.authorize(child_cls)
        with pytest.raises(MethodAlreadyExists):
            monkey.method("greet", _noop, child_cls)

    def test_second_method_same_name_rejected(self, monkey, sample):
        monkey.method("wave", lambda self: "o/", sample)
        with pytest.raises(MethodAlreadyExists):
            monkey.method("wave", lambda self: "\\o", sample)
        assert sample().wave() == "o/"

    def test_snapshot_is_undefined(self, monkey, registry, sample):
        monkey.method("wave", lambda self: "o/", sample)
        snapshot = registry.get_snapshot((sample, "wave"))
        assert snapshot.implementation is UNDEFINED
        assert snapshot.verb == "method"


class TestOverride:

    def test_replaces_method(self, monkey, sample):
        monkey.override("greet", lambda self, name: "Yo, " + name, sample)
        assert sample().greet("x") == "Yo, x"

    def test_missing_method(self, monkey, sample):
        with pytest.raises(MethodNotFound, match="Perhaps you meant 'method'"):
            monkey.override("nope", _noop, sample)

    def test_missing_method_is_attribute_error(self, monkey, sample):
        with pytest.raises(AttributeError):
            monkey.override("nope", _noop, sample)

    def test_inherited_method(self, monkey, gate, sample_cls, child_cls):
        gate.authorize(child_cls)
        monkey.override("greet", lambda self, name: "child", child_cls)
        assert child_cls().greet("x") == "child"
        assert sample_cls().greet("x") == "Hello, x"

    def test_chained_overrides_keep_first_snapshot(self, monkey, registry, sample):
        original = sample.__dict__["greet"]
        monkey.override("greet", lambda self, name: "one", sample)
        monkey.override("greet", lambda self, name: "two", sample)
        assert sample().greet("x") == "two"
        assert registry.get_snapshot((sample, "greet")).implementation is original

    def test_staticmethod_kind_preserved(self, monkey, sample):
        monkey.override("shout", lambda text: text + "!", sample)
        assert isinstance(sample.__dict__["shout"], staticmethod)
        assert sample.shout("hi") == "hi!"
        assert sample().shout("hi") == "hi!"

    def test_classmethod_kind_preserved(self, monkey, sample):
        monkey.override("kind", lambda cls: "kind of " + cls.__name__, sample)
        assert sample.kind() == "kind of Sample"


class TestBefore:

    def test_runs_before_original(self, monkey, sample):
        monkey.before("greet", lambda self, name: self.events.append("before"), sample)
        obj = sample()
        assert obj.greet("x") == "Hello, x"
        assert obj.events == ["before", "greet"]

    def test_return_value_discarded(self, monkey, sample):
        monkey.before("greet", lambda self, name: "ignored", sample)
        assert sample().greet("x") == "Hello, x"

    def test_receives_call_arguments(self, monkey, sample):
        seen = []
        monkey.before("greet", lambda self, name: seen.append((self, name)), sample)
        obj = sample()
        obj.greet(name="kw")
        assert seen == [(obj, "kw")]

    def test_every_call(self, monkey, sample):
        monkey.before("greet", lambda self, name: self.events.append("before"), sample)
        obj = sample()
        obj.greet("a")
        obj.greet("b")
        assert obj.events == ["before", "greet", "before", "greet"]

    def test_list_of_names(self, monkey, sample):
        monkey.before(
            ["greet", "farewell"],
            lambda self, name: self.events.append("before"),
            sample,
        )
        obj = sample()
        obj.greet("a")
        obj.farewell("a")
        assert obj.events == ["before", "greet", "before", "farewell"]

    def test_list_is_all_or_nothing(self, monkey, registry, sample):
        with pytest.raises(MethodNotFound):
            monkey.before(["greet", "missing"], _noop, sample)
        obj = sample()
        obj.greet("a")
        assert obj.events == ["greet"]
        assert registry.keys() == []

    def test_missing_method(self, monkey, sample):
        with pytest.raises(MethodNotFound, match="hierarchy"):
            monkey.before("missing", _noop, sample)

    def test_preserves_metadata(self, monkey, sample):
        monkey.before("greet", _noop, sample)
        composed = sample.__dict__["greet"]
        assert composed.__name__ == "greet"
        assert composed.__submonkey_verb__ == "before"

    def test_staticmethod(self, monkey, sample):
        seen = []
        monkey.before("shout", lambda text: seen.append(text), sample)
        assert isinstance(sample.__dict__["shout"], staticmethod)
        assert sample.shout("hi") == "HI"
        assert seen == ["hi"]

    def test_non_callable_attribute(self, monkey, sample):
        sample.label = "plain"
        with pytest.raises(MethodNotFound, match="not a method"):
            monkey.before("label", _noop, sample)


class TestAfter:

    def test_runs_after_original(self, monkey, sample):
        monkey.after("greet", lambda self, name: self.events.append("after"), sample)
        obj = sample()
        obj.greet("x")
        assert obj.events == ["greet", "after"]

    def test_none_keeps_original_result(self, monkey, sample):
        monkey.after("greet", lambda self, name: None, sample)
        assert sample().greet("x") == "Hello, x"

    def test_result_replaces_original_result(self, monkey, sample):
        monkey.after("greet", lambda self, name: "after " + name, sample)
        assert sample().greet("x") == "after x"

    def test_falsy_non_none_result_is_kept(self, monkey, sample):
        monkey.after("greet", lambda self, name: "", sample)
        assert sample().greet("x") == ""

    def test_classmethod(self, monkey, sample):
        seen = []
        monkey.after("kind", lambda cls: seen.append(cls), sample)
        assert sample.kind() == "Sample"
        assert seen == [sample]

    def test_missing_method(self, monkey, sample):
        with pytest.raises(MethodNotFound):
            monkey.after("missing", _noop, sample)


class TestAround:

    def test_receives_original(self, monkey, sample):
        def wrapper(orig, self, name):
            return orig(self, name.upper()) + "?"

        monkey.around("greet", wrapper, sample)
        assert sample().greet("x") == "Hello, X?"

    def test_can_skip_original(self, monkey, sample):
        monkey.around("greet", lambda orig, self, name: "skipped", sample)
        obj = sample()
        assert obj.greet("x") == "skipped"
        assert obj.events == []

    def test_can_call_original_many_times(self, monkey, sample):
        def twice(orig, self, name):
            return [orig(self, name), orig(self, name)]

        monkey.around("greet", twice, sample)
        obj = sample()
        assert obj.greet("x") == ["Hello, x", "Hello, x"]
        assert obj.events == ["greet", "greet"]

    def test_conditional_call(self, monkey, sample):
        def only_with_name(orig, self, *args):
            if args:
                return orig(self, *args)
            return None

        monkey.around("greet", only_with_name, sample)
        obj = sample()
        assert obj.greet() is None
        assert obj.greet("x") == "Hello, x"

    def test_missing_method(self, monkey, sample):
        with pytest.raises(MethodNotFound):
            monkey.around("missing", _noop, sample)


class TestChaining:

    def test_wrappers_compose_against_live_method(self, monkey, sample):
        monkey.before("greet", lambda self, name: self.events.append("before"), sample)
        monkey.after("greet", lambda self, name: self.events.append("after"), sample)

        def around(orig, self, name):
            self.events.append("around-in")
            result = orig(self, name)
            self.events.append("around-out")
            return result

        monkey.around("greet", around, sample)
        obj = sample()
        assert obj.greet("x") == "Hello, x"
        assert obj.events == ["around-in", "before", "greet", "after", "around-out"]

    def test_snapshot_stays_pristine(self, monkey, registry, sample):
        original = sample.__dict__["greet"]
        monkey.before("greet", _noop, sample)
        monkey.after("greet", _noop, sample)
        monkey.around("greet", lambda orig, *a: orig(*a), sample)
        assert registry.get_snapshot((sample, "greet")).implementation is original
        assert registry.get_snapshot((sample, "greet")).verb == "before"

    def test_wrap_after_override(self, monkey, sample):
        monkey.override("greet", lambda self, name: "Yo, " + name, sample)
        monkey.after("greet", lambda self, name: None, sample)
        assert sample().greet("x") == "Yo, x"


class TestIntrospection:

    def test_can(self, monkey, sample, child_cls):
        assert monkey.can("greet", sample) is sample.__dict__["greet"]
        assert monkey.can("greet", child_cls) is sample.__dict__["greet"]
        assert monkey.can("nope", sample) is None

    def test_has_snapshot(self, monkey, sample):
        assert not monkey.has_snapshot("greet", sample)
        monkey.before("greet", _noop, sample)
        assert monkey.has_snapshot("greet", sample)

    def test_history(self, monkey, sample):
        monkey.before("greet", _noop, sample)
        monkey.after("greet", _noop, sample)
        monkey.method("wave", _noop, sample)
        records = monkey.history(sample, "greet")
        assert [(r.verb, r.version) for r in records] == [("before", 1), ("after", 2)]
        assert len(monkey.history()) == 3

    def test_summary_empty(self, monkey):
        assert "No patches applied" in monkey.summary()

    def test_summary_lists_changes(self, monkey, sample):
        monkey.before("greet", _noop, sample)
        monkey.after("greet", _noop, sample)
        monkey.method("wave", _noop, sample)
        text = monkey.summary()
        assert "Sample.greet" in text
        assert "Sample.wave" in text
        assert "<created>" in text
        assert text.index("before") < text.index("after")
