"""
Тесты рендерера: вывод значений, условия, итерация, диагностика.
"""

import asyncio
from types import MappingProxyType

from templatron.render.renderer import Renderer
from templatron.template.parser import compile_template
from tests.infrastructure import warnings_from


def render(text, data=None):
    return Renderer().render(compile_template(text), data or {})


class TestValueNodes:

    def test_text_is_emitted_verbatim(self):
        """Текст выводится как есть"""
        text = "<p>plain & simple</p>\n  body { color: red; }\n"
        assert render(text, {"anything": 1}) == text

    def test_variable_is_escaped(self):
        """Тест экранирования переменной"""
        assert render("{ a }", {"a": "<b>x</b>"}) == "&lt;b&gt;x&lt;&#x2F;b&gt;"

    def test_missing_variable_renders_empty(self):
        """Отсутствующая переменная даёт пустую строку"""
        assert render("[{ a.b }]", {"a": {}}) == "[]"

    def test_null_variable_renders_empty(self):
        """None даёт пустую строку"""
        assert render("[{ a }]", {"a": None}) == "[]"

    def test_scalars(self):
        """Тест скалярных значений"""
        assert render("{ n } { f } { t } { b }", {"n": 3, "f": 1.5, "t": True, "b": False}) == "3 1.5 true false"

    def test_integral_float_has_no_fraction(self):
        """Целый float выводится без .0"""
        assert render("{ a } { b }", {"a": 2.0, "b": [1.0, 2.5]}) == "2 1,2.5"

    def test_literal_variable(self):
        """Тест литерала в переменной"""
        assert render("{ 42 }") == "42"

    def test_json(self):
        """Тест {@json}"""
        assert render("{@json a}", {"a": {"x": 1}}) == '{"x":1}'

    def test_json_missing_is_null(self):
        """Отсутствующее значение в JSON даёт null"""
        assert render("{@json a}") == "null"

    def test_json_explicit_null(self):
        """Тест явного null"""
        assert render("{@json a}", {"a": None}) == "null"

    def test_json_unserializable_is_null(self, caplog):
        """Несериализуемое значение даёт null и предупреждение"""
        assert render("{@json a}", {"a": object()}) == "null"
        assert any("Cannot serialize 'a'" in m for m in warnings_from(caplog))

    def test_json_inside_script_cannot_close_tag(self):
        """JSON внутри <script> не закрывает тег"""
        out = render("<script>var d = {@json d};</script>", {"d": {"s": "</script>"}})
        assert out == '<script>var d = {"s":"\\u003c/script\\u003e"};</script>'

    def test_html_is_raw(self):
        """{@html} не экранируется"""
        assert render("{@html a}", {"a": "<b>x</b>"}) == "<b>x</b>"

    def test_html_missing_is_empty(self):
        """Тест отсутствующего {@html}"""
        assert render("[{@html a}]") == "[]"


class TestIfNode:

    def test_then_and_else(self):
        """Тест веток then и else"""
        template = "{#if admin}Yes{:else}No{/if}"

        assert render(template, {"admin": True}) == "Yes"
        assert render(template, {"admin": False}) == "No"
        assert render(template, {}) == "No"

    def test_negation(self):
        """Тест отрицания"""
        assert render("{#if !admin}A{/if}", {"admin": True}) == ""
        assert render("{#if !admin}A{/if}", {"admin": False}) == "A"

    def test_if_without_else_renders_nothing_when_false(self):
        """Тест {#if} без {:else}"""
        assert render("a{#if x}b{/if}c", {}) == "ac"

    def test_invalid_condition_falls_back_to_false(self, caplog):
        """Некорректное условие считается ложным"""
        assert render("{#if a == 1}x{:else}y{/if}", {"a": 1}) == "y"
        assert any("Invalid condition" in m for m in warnings_from(caplog))


class TestEachNode:

    def test_iteration(self):
        """Тест итерации"""
        assert render("{#each items as it}{ it }{/each}", {"items": ["a", "b"]}) == "ab"

    def test_default_alias(self):
        """Тест алиаса по умолчанию"""
        assert render("{#each items}<{ item }>{/each}", {"items": [1, 2]}) == "<1><2>"

    def test_index_alias(self):
        """Тест алиаса индекса"""
        assert render("{#each xs as x, i}{ i }:{ x };{/each}", {"xs": ["a", "b"]}) == "0:a;1:b;"

    def test_tuple_collection(self):
        """Тест кортежа как коллекции"""
        assert render("{#each xs}{ item }{/each}", {"xs": ("p", "q")}) == "pq"

    def test_missing_collection(self, caplog):
        """Тест отсутствующей коллекции"""
        assert render("[{#each items as it}{ it }{/each}]", {}) == "[]"
        assert any("'items' is not defined" in m for m in warnings_from(caplog))

    def test_non_list_collection(self, caplog):
        """Не-список пропускается с предупреждением"""
        for value in ("abc", {"a": 1}, 5, None):
            assert render("{#each items}{ item }{/each}", {"items": value}) == ""
        assert any("is not a list (got str)" in m for m in warnings_from(caplog))

    def test_nested_loops_scope_inner_alias(self):
        """Алиас внутреннего цикла не утекает наружу"""
        data = {"outer": [{"inner": [1, 2]}, {"inner": [3]}]}
        template = "{#each outer as o}{#each o.inner as i}{ i }{/each}[{ i }]{/each}"

        assert render(template, data) == "12[]3[]"

    def test_loop_alias_shadows_and_restores(self):
        """Алиас цикла временно перекрывает ключ"""
        data = {"items": [1, 2], "item": "orig"}

        assert render("{#each items}{ item }{/each}{ item }", data) == "12orig"
        assert data == {"items": [1, 2], "item": "orig"}

    def test_loop_body_sees_outer_context(self):
        """Тело цикла видит внешний контекст"""
        data = {"prefix": "#", "items": ["a"]}
        assert render("{#each items as it}{ prefix }{ it }{/each}", data) == "#a"

    def test_conditions_inside_loop(self):
        """Тест условий внутри цикла"""
        data = {"users": [{"name": "a", "admin": True}, {"name": "b", "admin": False}]}
        template = "{#each users as u}{ u.name }{#if u.admin}*{/if};{/each}"

        assert render(template, data) == "a*;b;"


class TestRenderProperties:

    def test_render_is_repeatable(self):
        """Повторный рендер даёт тот же результат"""
        ast = compile_template("{#each xs as x}{ x }{/each}{#if f}!{/if}")
        renderer = Renderer()
        data = {"xs": [1, 2], "f": True}

        assert renderer.render(ast, data) == renderer.render(ast, data) == "12!"

    def test_same_ast_with_different_data(self):
        """Одно AST с разными данными"""
        ast = compile_template("Hi { name }")
        renderer = Renderer()

        assert renderer.render(ast, {"name": "A"}) == "Hi A"
        assert renderer.render(ast, {"name": "B"}) == "Hi B"

    def test_read_only_mapping_context(self):
        """Тест контекста только для чтения"""
        assert render("{ a.b }", MappingProxyType({"a": {"b": "x"}})) == "x"

    def test_async_render_matches_sync(self):
        """Асинхронный рендер совпадает с синхронным"""
        ast = compile_template("{#each xs as x}{ x }{/each}")
        renderer = Renderer()

        assert asyncio.run(renderer.render_async(ast, {"xs": ["a", "b"]})) == "ab"
