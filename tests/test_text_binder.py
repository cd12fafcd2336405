"""Tests for the TextBinder rendering engine."""
import logging
from dataclasses import dataclass
from unittest.mock import patch

import pytest
from pydantic import BaseModel

from textbinder import BinderSettings, InvalidFunctionError, TextBinder, TextBinderError


@pytest.fixture
def binder():
    return TextBinder()


class TestRenderBasics:
    """Variable substitution without function chains."""

    def test_simple_substitution(self, binder):
        assert binder.render("Hello {name}!", {"name": "World"}) == "Hello World!"

    def test_empty_vars_returns_text_unchanged(self, binder):
        text = "Hello {name}! {x.upper} {{raw}}"
        assert binder.render(text, {}) == text
        assert binder.render(text, {}, default=False) == text
        assert binder.render(text, {}, default=True) == text

    def test_missing_variable_left_verbatim_when_default_disabled(self, binder):
        assert binder.render("{missing}", {}, default=False) == "{missing}"
        assert binder.render("{a}{b.upper}", {"a": "1"}, default=False) == "1{b.upper}"

    def test_missing_variable_blank_by_default(self, binder):
        assert binder.render("[{missing}]", {"other": "x"}) == "[]"

    def test_missing_variable_still_runs_chain(self, binder):
        assert binder.render("{missing.exists}", {"other": "x"}) == "0"

    def test_multiple_placeholders(self, binder):
        assert binder.render("{a}-{b}", {"a": "1", "b": "2"}) == "1-2"

    def test_same_placeholder_twice(self, binder):
        assert binder.render("{a}{a}", {"a": "ha"}) == "haha"

    def test_whitespace_inside_braces(self, binder):
        assert binder.render("{ name }|{\tname.upper\n}", {"name": "ab"}) == "ab|AB"

    def test_hyphen_and_digits_in_names(self, binder):
        assert binder.render("{user-id_2}", {"user-id_2": 7}) == "7"

    def test_replacement_is_not_rescanned(self, binder):
        assert binder.render("{a}", {"a": "{b}", "b": "B"}) == "{b}"

    def test_double_braces_match_inner_placeholder(self, binder):
        assert binder.render("{{a}}", {"a": "x"}) == "{x}"

    def test_malformed_placeholders_left_alone(self, binder):
        vars = {"a": "x"}
        assert binder.render("{a.b c}", vars) == "{a.b c}"
        assert binder.render("{a", vars) == "{a"
        assert binder.render("{a b}", vars) == "{a b}"
        assert binder.render("{}", vars) == "{}"
        assert binder.render("{a..upper}", vars) == "{a..upper}"

    def test_non_string_values_are_converted(self, binder):
        vars = {"n": 5, "f": 1.5, "t": True, "no": False, "none": None}
        assert binder.render("{n} {f} {t} {no} [{none}]", vars) == "5 1.5 1 0 []"

    def test_structured_values_render_as_json(self, binder):
        vars = {"items": [1, "two"], "data": {"a": 1, "b": "é"}}
        assert binder.render("{items}", vars) == '[1,"two"]'
        assert binder.render("{data}", vars) == '{"a":1,"b":"é"}'

    def test_none_value_is_a_bound_variable(self, binder):
        assert binder.render("[{x}]", {"x": None}, default=False) == "[]"


class TestBuiltinRegistryFunctions:
    """The exists/ok functions installed on every binder."""

    def test_ok(self, binder):
        assert binder.render("{flag.ok}", {"flag": 0}) == "0"
        assert binder.render("{flag.ok}", {"flag": 5}) == "1"
        assert binder.render("{flag.ok}", {"flag": "0"}) == "0"
        assert binder.render("{flag.ok}", {"flag": ""}) == "0"
        assert binder.render("{flag.ok}", {"flag": []}) == "0"
        assert binder.render("{flag.ok}", {"flag": "no"}) == "1"

    def test_exists(self, binder):
        assert binder.render("{val.exists}", {"val": ""}) == "0"
        assert binder.render("{val.exists}", {"val": "x"}) == "1"
        assert binder.render("{val.exists}", {"val": None}) == "0"
        assert binder.render("{val.exists}", {"val": False}) == "0"
        assert binder.render("{val.exists}", {"val": 0}) == "1"

    def test_exists_then_ok(self, binder):
        assert binder.render("{val.exists.ok}", {"val": ""}) == "0"
        assert binder.render("{val.exists.ok}", {"val": "x"}) == "1"


class TestFunctionChains:
    """Function resolution, ordering and normalization."""

    def test_chain_applies_left_to_right(self, binder):
        binder.add_func("f1", lambda v: v + "1")
        binder.add_func("f2", lambda v: v + "2")
        assert binder.render("{x.f1.f2}", {"x": "v"}) == "v12"
        assert binder.render("{x.f2.f1}", {"x": "v"}) == "v21"

    def test_output_normalized_after_each_step(self, binder):
        seen = []

        def record(value):
            seen.append(value)
            return value

        binder.add_func("yes", lambda v: True)
        binder.add_func("nothing", lambda v: None)
        binder.add_func("listify", lambda v: [v])
        binder.add_func("record", record)

        assert binder.render("{x.yes.record}", {"x": "a"}) == "1"
        assert binder.render("{x.nothing.record}", {"x": "a"}) == ""
        assert binder.render("{x.listify.record}", {"x": "a"}) == '["a"]'
        assert seen == ["1", "", '["a"]']

    def test_first_function_receives_raw_value(self, binder):
        received = []
        binder.add_func("peek", lambda v: received.append(v) or "done")
        assert binder.render("{x.peek}", {"x": [1, 2]}) == "done"
        assert received == [[1, 2]]

    def test_unknown_function_is_skipped(self, binder):
        binder.add_func("shout", lambda v: v + "!")
        assert binder.render("{x.nope.shout}", {"x": "hi"}) == "hi!"
        assert binder.render("{x.nope}", {"x": 3}) == "3"

    def test_unknown_function_is_logged_at_debug(self, binder, caplog):
        caplog.set_level(logging.DEBUG, logger="textbinder")
        binder.render("{x.nope}", {"x": "hi"})
        assert "Unknown function 'nope'" in caplog.text

    def test_builtin_fallback_functions(self, binder):
        assert binder.render("{name.trim.ucfirst}", {"name": "  ada "}) == "Ada"
        assert binder.render("{n.intval}", {"n": "42px"}) == "42"
        assert binder.render("{s.strlen}", {"s": "hello"}) == "5"

    def test_registry_takes_precedence_over_fallback(self, binder):
        binder.add_func("upper", lambda v: "custom")
        assert binder.render("{x.upper}", {"x": "a"}) == "custom"

    def test_injected_fallback_replaces_default_table(self):
        binder = TextBinder(fallback_functions={"twice": lambda v: v * 2})
        assert binder.render("{x.twice}", {"x": "ab"}) == "abab"
        assert binder.render("{x.upper}", {"x": "ab"}) == "ab"

    def test_empty_fallback_disables_builtins(self):
        binder = TextBinder(fallback_functions={})
        assert binder.render("{x.upper.ok}", {"x": "ab"}) == "1"

    def test_fallback_mapping_is_copied(self):
        table = {"twice": lambda v: v * 2}
        binder = TextBinder(fallback_functions=table)
        table.clear()
        assert binder.render("{x.twice}", {"x": "ab"}) == "abab"

    def test_structured_results(self, binder):
        @dataclass
        class Point:
            x: int
            y: int

        class User(BaseModel):
            name: str
            admin: bool = False

        binder.add_func("point", lambda v: Point(1, 2))
        binder.add_func("user", lambda v: User(name=v))
        binder.add_func("pair", lambda v: (v, v))
        assert binder.render("{x.point}", {"x": ""}) == '{"x":1,"y":2}'
        assert binder.render("{x.user}", {"x": "ada"}) == '{"name":"ada","admin":false}'
        assert binder.render("{x.pair}", {"x": "a"}) == '["a","a"]'

    def test_structured_result_with_tuple_keys(self, binder):
        binder.add_func("pairs", lambda v: {(1, 2): v})
        assert binder.render("{x.pairs}", {"x": "a"}) == '{"(1, 2)":"a"}'

    def test_function_errors_propagate(self, binder):
        binder.add_func("boom", lambda v: 1 / 0)
        with pytest.raises(ZeroDivisionError):
            binder.render("{x.boom}", {"x": "a"})

    def test_errors_not_raised_for_verbatim_placeholders(self, binder):
        binder.add_func("boom", lambda v: 1 / 0)
        assert binder.render("{y.boom}", {"x": "a"}, default=False) == "{y.boom}"


class TestRegistry:
    """add_func / has_func / del_func."""

    def test_builtins_registered(self, binder):
        assert binder.has_func("exists")
        assert binder.has_func("ok")

    def test_fallback_functions_are_not_registered(self, binder):
        assert not binder.has_func("upper")

    def test_add_and_has(self, binder):
        binder.add_func("shout", str.upper)
        assert binder.has_func("shout")

    def test_del_func(self, binder):
        binder.add_func("shout", str.upper)
        assert binder.del_func("shout") is True
        assert not binder.has_func("shout")
        assert binder.del_func("shout") is False

    def test_del_missing_is_noop(self, binder):
        assert binder.del_func("never-added") is False

    def test_override_builtin_then_delete(self, binder):
        binder.add_func("ok", lambda v: "yes")
        assert binder.render("{x.ok}", {"x": 0}) == "yes"

        assert binder.del_func("ok") is True
        # Deleted names are unknown, not restored to the built-in
        assert binder.render("{x.ok}", {"x": "abc"}) == "abc"

    def test_registries_are_per_instance(self):
        first = TextBinder()
        second = TextBinder()
        first.add_func("shout", str.upper)
        first.del_func("ok")
        assert not second.has_func("shout")
        assert second.has_func("ok")

    @pytest.mark.parametrize("name", ["", None, 3])
    def test_invalid_name_rejected(self, binder, name):
        with pytest.raises(InvalidFunctionError):
            binder.add_func(name, str.upper)

    def test_non_callable_rejected(self, binder):
        with pytest.raises(InvalidFunctionError) as exc_info:
            binder.add_func("shout", "upper")
        assert exc_info.value.name == "shout"
        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value, TextBinderError)


class TestSettingsIntegration:
    """Defaults taken from binder_settings."""

    def test_default_for_missing_from_settings(self):
        settings = BinderSettings(default_for_missing=False)
        with patch("textbinder.binder.text_binder.binder_settings", settings):
            binder = TextBinder()
            assert binder.render("{a}{b}", {"a": "1"}) == "1{b}"
            assert binder.render("{a}{b}", {"a": "1"}, default=True) == "1"

    def test_builtin_fallback_disabled_in_settings(self):
        settings = BinderSettings(builtin_fallback=False)
        with patch("textbinder.binder.text_binder.binder_settings", settings):
            binder = TextBinder()
        assert binder.render("{x.upper}", {"x": "ab"}) == "ab"
