"""Tests for with_default() and null_tolerant()."""

import logging

import pytest

from shapechain import (
    Action,
    DereferenceError,
    Effect,
    InvalidArgumentError,
    InvalidCompositionError,
    Producer,
    Transformer,
    null_tolerant,
    with_default,
)
from fakes import Recorder, make_recorders


class TestProducerWithDefault:
    def test_present_value_is_returned(self) -> None:
        s = Recorder("s", returns="Hej")
        assert Producer(s).with_default("Hello")() == "Hej"
        assert s.calls == [()]

    def test_absent_value_is_replaced(self) -> None:
        s = Recorder("s", returns=None)
        assert Producer(s).with_default("Hello")() == "Hello"
        assert s.calls == [()]

    def test_dereference_failure_is_replaced(self) -> None:
        s = Recorder("s", raises=DereferenceError())
        assert Producer(s).with_default("Hello")() == "Hello"
        assert s.calls == [()]

    def test_falsy_values_are_present(self) -> None:
        assert Producer(lambda: "").with_default("Hello")() == ""
        assert Producer(lambda: 0).with_default(7)() == 0
        assert Producer(lambda: []).with_default([1])() == []

    def test_other_failures_propagate(self) -> None:
        err = ValueError("not a dereference")
        s = Recorder("s", raises=err)
        with pytest.raises(ValueError) as info:
            Producer(s).with_default("Hello")()
        assert info.value is err

    def test_keeps_shape(self) -> None:
        assert isinstance(Producer(lambda: None).with_default("Hello"), Producer)

    def test_get_with_default(self) -> None:
        assert Producer(lambda: None).get_with_default("Hello") == "Hello"
        assert Producer(lambda: "Hej").get_with_default("Hello") == "Hej"

    def test_each_invocation_reruns_producer(self) -> None:
        values = iter(["Hej", None])
        tolerant = Producer(lambda: next(values)).with_default("Hello")
        assert tolerant() == "Hej"
        assert tolerant() == "Hello"


class TestTransformerWithDefault:
    def test_present_value_is_returned(self) -> None:
        f = Recorder("f", returns="Hej")
        assert Transformer(f).with_default("Goodbye")("Hello") == "Hej"
        assert f.calls == [("Hello",)]

    def test_absent_value_is_replaced(self) -> None:
        f = Recorder("f", returns=None)
        assert Transformer(f).with_default("Goodbye")("Hello") == "Goodbye"
        assert f.calls == [("Hello",)]

    def test_dereference_failure_is_replaced(self) -> None:
        f = Recorder("f", raises=DereferenceError())
        assert Transformer(f).with_default("Goodbye")("Hello") == "Goodbye"
        assert f.calls == [("Hello",)]

    def test_attribute_access_on_none_is_replaced(self) -> None:
        tolerant = Transformer(lambda user: user.name).with_default("anonymous")
        assert tolerant(None) == "anonymous"

    def test_subscripting_none_is_replaced(self) -> None:
        tolerant = Transformer(lambda row: row[0]).with_default(-1)
        assert tolerant(None) == -1
        assert tolerant([4, 5]) == 4

    def test_missing_attribute_on_real_object_propagates(self) -> None:
        tolerant = Transformer(lambda text: text.no_such_attribute).with_default("fallback")
        with pytest.raises(AttributeError):
            tolerant("Hello")

    def test_unrelated_type_error_propagates(self) -> None:
        tolerant = Transformer(lambda text: text + 1).with_default("fallback")
        with pytest.raises(TypeError):
            tolerant("Hello")

    def test_apply_with_default(self) -> None:
        f = Transformer(lambda key: {"a": "alpha"}.get(key))
        assert f.apply_with_default("a", "missing") == "alpha"
        assert f.apply_with_default("b", "missing") == "missing"


class TestPipelineWithDefault:
    def test_failure_part_way_through_producer_pipeline(self) -> None:
        log, r = make_recorders("s", "f1", "f2")
        r["s"].returns = None
        r["f1"].raises = DereferenceError()

        pipeline = Producer(r["s"]).and_(Transformer(r["f1"])).and_(Transformer(r["f2"]))

        assert pipeline.with_default("Goodbye")() == "Goodbye"
        assert r["s"].calls == [()]
        assert r["f1"].calls == [(None,)]
        assert r["f2"].calls == []
        assert log.names() == ["s", "f1"]

    def test_failure_part_way_through_effect_pipeline(self) -> None:
        log, r = make_recorders("c", "f1", "f2")
        r["f1"].raises = DereferenceError()

        pipeline = Effect(r["c"]).and_(Transformer(r["f1"])).and_(Transformer(r["f2"]))

        assert pipeline.with_default("Goodbye")(None) == "Goodbye"
        assert log.entries == [("c", (None,)), ("f1", (None,))]

    def test_absent_intermediate_value_flows_to_next_stage(self) -> None:
        log, r = make_recorders("s", "f")
        r["s"].returns = None
        r["f"].returns = "from none"

        pipeline = Producer(r["s"]).and_(Transformer(r["f"])).with_default("Goodbye")

        assert pipeline() == "from none"
        assert log.entries == [("s", ()), ("f", (None,))]

    def test_non_dereference_failure_propagates_from_middle_stage(self) -> None:
        log, r = make_recorders("s", "f1", "f2")
        r["s"].returns = "Hello"
        err = KeyError("missing")
        r["f1"].raises = err

        pipeline = Producer(r["s"]).and_(Transformer(r["f1"])).and_(Transformer(r["f2"]))

        with pytest.raises(KeyError) as info:
            pipeline.with_default("Goodbye")()
        assert info.value is err
        assert log.names() == ["s", "f1"]


class TestNullTolerant:
    def test_effect_discards_dereference_failure(self) -> None:
        c = Recorder("c", raises=DereferenceError())
        tolerant = Effect(c).null_tolerant()
        assert isinstance(tolerant, Effect)
        assert tolerant("Hello") is None
        assert c.calls == [("Hello",)]

    def test_action_discards_dereference_failure(self) -> None:
        a = Recorder("a", raises=DereferenceError())
        tolerant = Action(a).null_tolerant()
        assert isinstance(tolerant, Action)
        assert tolerant() is None
        assert a.calls == [()]

    def test_void_pipeline(self) -> None:
        log, r = make_recorders("s", "c")
        r["s"].returns = None
        r["c"].compute = lambda value: value.strip()

        tolerant = Producer(r["s"]).and_(Effect(r["c"])).null_tolerant()

        tolerant()
        assert log.entries == [("s", ()), ("c", (None,))]

    def test_other_failures_propagate(self) -> None:
        c = Recorder("c", raises=RuntimeError("boom"))
        with pytest.raises(RuntimeError, match="boom"):
            Effect(c).null_tolerant()("Hello")


class TestModuleFunctions:
    def test_with_default_on_wrapper(self) -> None:
        tolerant = with_default(Producer(lambda: None), "Hello")
        assert isinstance(tolerant, Producer)
        assert tolerant() == "Hello"

    def test_with_default_on_bare_callable(self) -> None:
        tolerant = with_default(lambda key: {"a": 1}.get(key), 0)
        assert tolerant("a") == 1
        assert tolerant("b") == 0

    def test_null_tolerant_on_wrapper(self) -> None:
        tolerant = null_tolerant(Action(Recorder("a", raises=DereferenceError())))
        assert isinstance(tolerant, Action)
        tolerant()

    def test_null_tolerant_on_bare_callable(self) -> None:
        def touch(value: object) -> None:
            value.touched  # type: ignore[attr-defined]

        null_tolerant(touch)(None)

    @pytest.mark.parametrize("wrapper", [Effect(print), Action(lambda: None)])
    def test_with_default_rejects_void_shapes(self, wrapper: Effect | Action) -> None:
        with pytest.raises(InvalidCompositionError) as info:
            with_default(wrapper, "Hello")
        assert info.value.argument == "with_default"

    @pytest.mark.parametrize("wrapper", [Producer(lambda: 1), Transformer(str)])
    def test_null_tolerant_rejects_value_shapes(self, wrapper: Producer | Transformer) -> None:
        with pytest.raises(InvalidCompositionError):
            null_tolerant(wrapper)

    def test_methods_reject_mismatched_shapes(self) -> None:
        pipeline = Producer(lambda: "Hello").and_(Effect(print))
        with pytest.raises(InvalidCompositionError, match="not available on a action"):
            pipeline.with_default("x")
        with pytest.raises(InvalidCompositionError) as info:
            Transformer(str).null_tolerant()
        assert info.value.receiver == "transformer"
        assert info.value.argument == "null_tolerant"

    @pytest.mark.parametrize("bad", [None, 42])
    def test_absent_target_is_rejected(self, bad: object) -> None:
        with pytest.raises(InvalidArgumentError):
            with_default(bad, "Hello")  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError):
            null_tolerant(bad)  # type: ignore[arg-type]


class TestLogging:
    def test_substitution_is_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="shapechain.tolerance.defaults")
        Producer(Recorder("s", raises=DereferenceError("no user"))).with_default("Hello")()
        assert "Substituting default after DereferenceError: no user" in caplog.text

    def test_propagated_failures_are_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="shapechain.tolerance.defaults")
        with pytest.raises(ValueError):
            Producer(Recorder("s", raises=ValueError("boom"))).with_default("Hello")()
        assert caplog.records == []
