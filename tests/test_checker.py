"""Tests for the scope checker and import name resolution."""

from __future__ import annotations

import pytest
from conftest import ParseSources

from goquickfix.checker import DefaultImporter, ScopeChecker, assumed_package_name


def _messages(parse_sources: ParseSources, sources: str | dict[str, str]) -> list[str]:
    _, files = parse_sources(sources)
    result = ScopeChecker().check(files, DefaultImporter())
    return [d.message for d in result.diagnostics]


def _func(body: str, imports: str = "") -> str:
    return f"package main\n\n{imports}func main() {{\n{body}\n}}\n"


# -----------------------------------------------------------------------------
# Importer Tests
# -----------------------------------------------------------------------------


class TestAssumedPackageName:
    """Tests for guessing package names from import paths."""

    @pytest.mark.parametrize(
        ("path", "name"),
        [
            ("fmt", "fmt"),
            ("net/http", "http"),
            ("github.com/go-chi/chi/v5", "chi"),
            ("github.com/mattn/go-sqlite3", "sqlite3"),
            ("gopkg.in/yaml.v3", "yaml"),
            ("example.com/my-lib", "my"),
        ],
    )
    def test_assumed_names(self, path: str, name: str) -> None:
        """Test the goimports naming heuristic."""
        assert assumed_package_name(path) == name

    def test_overrides_take_precedence(self) -> None:
        """Test that configured names win over the heuristic."""
        importer = DefaultImporter({"example.com/lib-go": "lib"})
        assert importer.import_name("example.com/lib-go") == "lib"
        assert importer.import_name("example.com/other") == "other"


# -----------------------------------------------------------------------------
# ScopeChecker Tests
# -----------------------------------------------------------------------------


class TestScopeChecker:
    """Tests for the binding diagnostics of the scope checker."""

    def test_clean_package_passes(self, parse_sources: ParseSources) -> None:
        """Test that a well-formed package yields no diagnostics."""
        _, files = parse_sources(_func('\tfmt.Println("hi")', 'import "fmt"\n\n'))
        result = ScopeChecker().check(files, DefaultImporter())
        assert result.ok
        assert result.status == "pass"
        assert result.name == "scope-checker"

    def test_unused_variable(self, parse_sources: ParseSources) -> None:
        """Test that unused locals are reported."""
        assert _messages(parse_sources, _func("\tx := 1")) == ["x declared but not used"]

    def test_assignment_is_not_use(self, parse_sources: ParseSources) -> None:
        """Test that assigning to a variable does not count as using it."""
        assert _messages(parse_sources, _func("\tvar x int\n\tx = 2")) == ["x declared but not used"]

    def test_field_assignment_is_use(self, parse_sources: ParseSources) -> None:
        """Test that only a bare variable on the left escapes being used, as in go/types."""
        source = (
            "package main\n\ntype S struct{ a int }\n\n"
            "func main() {\n\tvar s S\n\ts.a = 1\n\tvar p S\n\t(p) = S{}\n}\n"
        )
        assert _messages(parse_sources, source) == ["p declared but not used"]

    def test_unused_import(self, parse_sources: ParseSources) -> None:
        """Test that unused imports are reported with the quoted path."""
        messages = _messages(parse_sources, _func("", 'import "os"\n\n'))
        assert messages == ['"os" imported but not used']

    def test_unused_renamed_import(self, parse_sources: ParseSources) -> None:
        """Test the message for an unused import with an explicit name."""
        messages = _messages(parse_sources, _func("", 'import str "strings"\n\n'))
        assert messages == ['"strings" imported as str and not used']

    def test_blank_import_is_not_reported(self, parse_sources: ParseSources) -> None:
        """Test that blank imports are never unused."""
        assert _messages(parse_sources, _func("", 'import _ "embed"\n\n')) == []

    def test_no_new_variables(self, parse_sources: ParseSources) -> None:
        """Test `:=` with only existing names on the left."""
        messages = _messages(parse_sources, _func("\tx := 1\n\tx := 2\n\tprintln(x)"))
        assert messages == ["no new variables on left side of :="]

    def test_redefine_in_inner_scope_is_new(self, parse_sources: ParseSources) -> None:
        """Test that `:=` in a nested block declares a new variable."""
        body = "\tx := 1\n\tprintln(x)\n\tif true {\n\t\tx := 2\n\t\tprintln(x)\n\t}"
        assert _messages(parse_sources, _func(body)) == []

    def test_undefined_name(self, parse_sources: ParseSources) -> None:
        """Test that unresolved identifiers are reported."""
        assert _messages(parse_sources, _func("\tprintln(y)")) == ["undefined: y"]

    def test_package_scope_spans_files(self, parse_sources: ParseSources) -> None:
        """Test that package-level names resolve across files."""
        sources = {
            "a.go": "package main\n\nfunc main() {\n\thelper()\n}\n",
            "b.go": "package main\n\nfunc helper() {}\n",
        }
        assert _messages(parse_sources, sources) == []

    def test_imports_are_file_scoped(self, parse_sources: ParseSources) -> None:
        """Test that an import in one file is not visible in another."""
        sources = {
            "a.go": 'package main\n\nimport "fmt"\n\nfunc a() {\n\tfmt.Println()\n}\n',
            "b.go": "package main\n\nfunc b() {\n\tfmt.Println()\n}\n",
        }
        assert _messages(parse_sources, sources) == ["undefined: fmt"]

    def test_type_switch_symbol_used_in_one_clause(self, parse_sources: ParseSources) -> None:
        """Test that a type switch symbol read in any clause is used."""
        body = (
            "\tvar x interface{}\n"
            "\tswitch v := x.(type) {\n"
            "\tcase int:\n"
            "\t\tprintln(v)\n"
            "\tcase string:\n"
            "\t}"
        )
        assert _messages(parse_sources, _func(body)) == []

    def test_unused_type_switch_symbol(self, parse_sources: ParseSources) -> None:
        """Test that a type switch symbol read nowhere is reported once."""
        body = "\tvar x interface{}\n\tswitch v := x.(type) {\n\tcase int:\n\t}"
        assert _messages(parse_sources, _func(body)) == ["v declared but not used"]

    def test_function_literal_captures(self, parse_sources: ParseSources) -> None:
        """Test that reads inside closures count as uses."""
        body = "\tx := 1\n\tf := func() {\n\t\tprintln(x)\n\t}\n\tf()"
        assert _messages(parse_sources, _func(body)) == []

    def test_composite_literal_keys(self, parse_sources: ParseSources) -> None:
        """Test that struct field keys are not reported as undefined."""
        source = (
            "package main\n\n"
            "type T struct{ name string }\n\n"
            'func main() {\n\tt := T{name: "x"}\n\tprintln(t.name)\n}\n'
        )
        assert _messages(parse_sources, source) == []

    def test_labels(self, parse_sources: ParseSources) -> None:
        """Test unused and undefined labels."""
        body = "unused:\n\tfor {\n\t\tbreak missing\n\t}"
        assert _messages(parse_sources, _func(body)) == [
            "label unused declared but not used",
            "label missing not defined",
        ]

    def test_dot_import_is_lenient(self, parse_sources: ParseSources) -> None:
        """Test that names in files with dot imports are not reported undefined."""
        source = 'package main\n\nimport . "strings"\n\nfunc main() {\n\tprintln(ToUpper("x"))\n}\n'
        assert _messages(parse_sources, source) == []

    def test_diagnostics_are_ordered_by_position(self, parse_sources: ParseSources) -> None:
        """Test that all diagnostics are reported, in source order."""
        messages = _messages(parse_sources, _func("\tb := 1\n\ta := 2", 'import "os"\n\n'))
        assert messages == [
            '"os" imported but not used',
            "b declared but not used",
            "a declared but not used",
        ]
