from dataclasses import dataclass

import pytest

from homestead.gotemplate import (
    Template,
    TemplateError,
    TemplateSyntaxError,
    parse_template,
)


def render(text, data):
    return parse_template("t", text).render(data)


def test_field_access():
    assert render("Hello, {{.Name}}!", {"Name": "World"}) == "Hello, World!"


def test_missing_key_renders_no_value():
    assert render("V={{.Gone}}", {}) == "V=<no value>"


def test_range_with_index_separator():
    text = "({{range $i, $p := .P}}{{if $i}} {{end}}{{$p}}{{end}})"
    assert render(text, {"P": ["git", "docker", "rails"]}) == "(git docker rails)"


def test_range_over_map_is_sorted_by_key():
    text = "{{range $k, $v := .M}}{{$k}}={{$v}};{{end}}"
    result = render(text, {"M": {"b": "2", "a": "1"}})
    assert result.index("a=1") < result.index("b=2")


def test_range_else_on_empty():
    assert render("{{range .L}}x{{else}}empty{{end}}", {"L": []}) == "empty"


def test_range_dot_is_element():
    assert render("{{range .L}}[{{.}}]{{end}}", {"L": ["a", "b"]}) == "[a][b]"


def test_if_else_if_chain():
    text = "{{if .A}}a{{else if .B}}b{{else}}c{{end}}"
    assert render(text, {"A": False, "B": True}) == "b"
    assert render(text, {"A": False, "B": False}) == "c"
    assert render(text, {"A": True, "B": True}) == "a"


def test_with_sets_dot():
    assert render("{{with .User}}{{.Name}}{{end}}", {"User": {"Name": "ana"}}) == "ana"


def test_trim_markers_and_comments():
    assert render("a  {{- /* note */ -}}  b", {}) == "ab"


def test_attribute_lookup_uses_snake_case():
    @dataclass
    class Cfg:
        core_components: list

    assert render("{{range .CoreComponents}}{{.}}{{end}}", Cfg(["zsh"])) == "zsh"


def test_pipeline_and_functions():
    assert render("{{.L | len}}", {"L": [1, 2, 3]}) == "3"
    assert render('{{if eq .X "y"}}yes{{end}}', {"X": "y"}) == "yes"
    assert render('{{printf "%s-%d" .A 5}}', {"A": "n"}) == "n-5"


def test_variable_declaration_and_root():
    text = "{{$n := .Name}}{{range .L}}{{$n}}{{$.Name}}{{end}}"
    assert render(text, {"Name": "q", "L": [1]}) == "qq"


def test_bool_formatting():
    assert render("{{.B}}", {"B": True}) == "true"


@pytest.mark.parametrize(
    "text",
    ["{{.Name", "{{if .A}}x", "{{end}}", "{{nosuchfunc .A}}", "{{}}"],
)
def test_syntax_errors(text):
    with pytest.raises(TemplateSyntaxError):
        Template("bad", text)


def test_range_over_scalar_fails():
    with pytest.raises(TemplateError, match="range can't iterate"):
        render("{{range .X}}{{end}}", {"X": True})


def test_undefined_variable_fails():
    with pytest.raises(TemplateError, match="undefined variable"):
        render("{{$nope}}", {})