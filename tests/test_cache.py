"""
Тесты кэша скомпилированных шаблонов.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from templatron import TemplateCache, TemplateSyntaxError
from templatron.template.parser import compile_template


class TestTemplateCache:

    def setup_method(self):
        self.cache = TemplateCache()
        self.compiled = []

    def _compile(self, text):
        self.compiled.append(text)
        return compile_template(text)

    def test_compiles_once_per_source(self):
        """Компиляция один раз на исходный текст"""
        first = self.cache.get_or_compile("a", "x{ y }", self._compile)
        second = self.cache.get_or_compile("a", "x{ y }", self._compile)

        assert first is second
        assert self.compiled == ["x{ y }"]
        assert (self.cache.hits, self.cache.misses) == (1, 1)

    def test_changed_source_is_recompiled(self):
        """Изменённый текст перекомпилируется"""
        self.cache.get_or_compile("a", "one", self._compile)
        ast = self.cache.get_or_compile("a", "two", self._compile)

        assert self.compiled == ["one", "two"]
        assert self.cache.get("a", "two") is ast
        assert self.cache.get("a", "one") is None
        assert len(self.cache) == 1

    def test_compile_errors_are_not_cached(self):
        """Ошибки компиляции не кэшируются"""
        with pytest.raises(TemplateSyntaxError):
            self.cache.get_or_compile("bad", "{#if x}", self._compile)

        assert "bad" not in self.cache

    def test_invalidate(self):
        """Тест инвалидации записи"""
        self.cache.get_or_compile("a", "x", self._compile)

        assert self.cache.invalidate("a") is True
        assert self.cache.invalidate("a") is False
        assert "a" not in self.cache

    def test_clear(self):
        """Тест очистки кэша"""
        self.cache.put("a", "x", compile_template("x"))
        self.cache.put("b", "y", compile_template("y"))

        self.cache.clear()

        assert len(self.cache) == 0

    def test_caches_are_independent(self):
        """Кэши независимы друг от друга"""
        other = TemplateCache()
        self.cache.get_or_compile("a", "x", self._compile)

        assert "a" not in other

    def test_counters_under_concurrent_access(self):
        """Счётчики согласованы при обращении из нескольких потоков"""
        self.cache.get_or_compile("a", "x{ y }", compile_template)

        def worker(_):
            return self.cache.get_or_compile("a", "x{ y }", compile_template)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(worker, range(200)))

        assert all(ast is results[0] for ast in results)
        assert self.cache.hits == 200
        assert self.cache.misses == 1
