"""
Тесты лексера шаблонов.
"""

from templatron.template.lexer import tokenize_template
from templatron.template.tokens import TokenType


def _types(text):
    return [t.type for t in tokenize_template(text)]


class TestTemplateLexer:

    def test_plain_text_is_single_token(self):
        """Текст без тегов даёт один токен"""
        tokens = tokenize_template("Hello, world")

        assert _types("Hello, world") == [TokenType.TEXT, TokenType.EOF]
        assert tokens[0].value == "Hello, world"

    def test_empty_template(self):
        """Тест пустого шаблона"""
        assert _types("") == [TokenType.EOF]

    def test_variable_between_text(self):
        """Тест переменной между текстом"""
        tokens = tokenize_template("a{ user.name }b")

        assert [t.type for t in tokens] == [TokenType.TEXT, TokenType.VARIABLE, TokenType.TEXT, TokenType.EOF]
        assert tokens[1].args == ("user.name",)
        assert tokens[1].value == "{ user.name }"

    def test_variable_without_spaces(self):
        """Тест переменной без пробелов"""
        tokens = tokenize_template("{name}")
        assert tokens[0].type == TokenType.VARIABLE
        assert tokens[0].args == ("name",)

    def test_json_and_html_tags(self):
        """Тест тегов @json и @html"""
        tokens = tokenize_template("{@json a.b}{@html body}")

        assert tokens[0].type == TokenType.JSON
        assert tokens[0].args == ("a.b",)
        assert tokens[1].type == TokenType.HTML
        assert tokens[1].args == ("body",)

    def test_if_tag_keeps_raw_condition(self):
        """{#if} сохраняет исходный текст условия"""
        tokens = tokenize_template("{#if !user.admin}")

        assert tokens[0].type == TokenType.IF
        assert tokens[0].args == ("!user.admin",)

    def test_each_tag_variants(self):
        """Тест вариантов {#each}"""
        full = tokenize_template("{#each items as it, i}")[0]
        aliased = tokenize_template("{#each items as it}")[0]
        bare = tokenize_template("{#each items}")[0]

        assert full.type == TokenType.EACH
        assert full.args == ("items", "it", "i")
        assert aliased.args == ("items", "it", "")
        assert bare.args == ("items", "item", "")

    def test_include_quotes_are_stripped(self):
        """Кавычки в {#include} снимаются"""
        assert tokenize_template('{#include "partials/nav.html"}')[0].args == ("partials/nav.html",)
        assert tokenize_template("{#include 'nav.html'}")[0].args == ("nav.html",)
        assert tokenize_template("{#include nav.html}")[0].args == ("nav.html",)

    def test_else_and_end_tags(self):
        """Тест {:else} и закрывающих тегов"""
        tokens = tokenize_template("{:else}{/if}{/each}")

        assert tokens[0].type == TokenType.ELSE
        assert tokens[1].type == TokenType.END
        assert tokens[1].args == ("if",)
        assert tokens[2].args == ("each",)

    def test_unrecognized_braces_stay_text(self):
        """CSS, объектные литералы JS и неизвестные блоки не являются тегами"""
        for text in ["body { color: red; }", "{#unless x}", "{/endif}", "{ a b }", "const o = {};"]:
            assert _types(text) == [TokenType.TEXT, TokenType.EOF], text

    def test_structural_flag(self):
        """Тест признака структурного тега"""
        tokens = tokenize_template("{#if a}{ b }{/if}")

        assert tokens[0].is_structural
        assert not tokens[1].is_structural
        assert tokens[2].is_structural

    def test_positions(self):
        """Тест строк и колонок"""
        tokens = tokenize_template("ab{ x }\n  {/if}")

        variable = tokens[1]
        end = tokens[3]
        assert (variable.line, variable.column, variable.position) == (1, 3, 2)
        assert (end.line, end.column) == (2, 3)

    def test_eof_position(self):
        """Тест позиции EOF"""
        tokens = tokenize_template("a\nbc")
        assert tokens[-1].type == TokenType.EOF
        assert (tokens[-1].line, tokens[-1].column) == (2, 3)
