from __future__ import annotations

import pytest

from contract.diagnostics import DIAGNOSTIC_ID, PRESERVE_FORMATTABLE_STRING
from fix.document import Document
from rules.analyzer import analyze_document
from rules.cancellation import CancellationToken, OperationCanceledError

_USINGS = """
using System;
using System.Collections.Generic;
using System.Linq;
using System.Text;
using System.Threading.Tasks;
using System.Diagnostics;
"""


_FOO_OBJECT = "        public void Foo(object obj)\n        {\n        }\n"


def _program(bar_body: str, members: str = _FOO_OBJECT) -> str:
    return (
        _USINGS
        + "\nnamespace ConsoleApplication1\n{\n    class TypeName\n    {\n"
        + "        public void Bar()\n        {\n"
        + f"            {bar_body}\n"
        + "        }\n\n"
        + members
        + "    }\n}"
    )


def _analyze(source: str) -> list[tuple[int, int]]:
    findings = analyze_document(Document(path="Test0.cs", text=source))
    return [
        (finding.location.start_line, finding.location.start_col)
        for finding in findings
        if finding.location is not None
    ]


def test_empty_file_has_no_findings() -> None:
    assert _analyze("") == []


def test_null_argument_has_no_findings() -> None:
    assert _analyze(_program("Foo(null);")) == []


def test_plain_string_has_no_findings() -> None:
    assert _analyze(_program('Foo("abc");')) == []


def test_interpolated_string_passed_as_object() -> None:
    findings = analyze_document(Document(path="Test0.cs", text=_program('Foo($"abc{1}");')))

    assert len(findings) == 1
    finding = findings[0]
    assert finding.rule_id == DIAGNOSTIC_ID
    assert finding.severity == "error"
    assert finding.message == PRESERVE_FORMATTABLE_STRING.message_format
    assert finding.location is not None
    assert (finding.location.start_line, finding.location.start_col) == (15, 17)
    assert finding.format() == (
        "Test0.cs:15:17: error PreserveFormattableStringForObjParams: "
        "Raw data values from interpolated string are lost due to cast to an object."
    )


def test_positional_and_named_arguments_both_reported() -> None:
    source = _program(
        'Foo($"abc{1}", obj2 : $"abc{2}");',
        members="        public void Foo(object obj, object obj2)\n        {\n        }\n",
    )

    assert _analyze(source) == [(15, 17), (15, 28)]


def test_named_arguments_out_of_order() -> None:
    source = _program(
        'Foo(text: $"a{1}", obj: $"b{2}");',
        members="        public void Foo(object obj, string text)\n        {\n        }\n",
    )

    assert _analyze(source) == [(15, 32)]


@pytest.mark.parametrize(
    "parameter_type",
    ["object", "Object", "System.Object", "global::System.Object", "object?"],
)
def test_object_spellings_are_reported(parameter_type: str) -> None:
    source = _program(
        'Foo($"abc{1}");',
        members=f"        public void Foo({parameter_type} obj)\n        {{\n        }}\n",
    )

    assert _analyze(source) == [(15, 17)]


@pytest.mark.parametrize(
    "parameter",
    [
        "string obj",
        "IFormattable obj",
        "FormattableString obj",
        "T obj",
        "object[] obj",
        "dynamic obj",
    ],
)
def test_non_object_parameters_are_ignored(parameter: str) -> None:
    source = _program(
        'Foo($"abc{1}");',
        members=f"        public void Foo<T>({parameter})\n        {{\n        }}\n",
    )

    assert _analyze(source) == []


def test_locally_declared_object_type_is_not_system_object() -> None:
    source = _program(
        'Foo($"abc{1}");',
        members="        public void Foo(Object obj)\n        {\n        }\n",
    ) + "\nclass Object { }\n"

    assert _analyze(source) == []


@pytest.mark.parametrize("array_type", ["object[]", "object[]?", "object?[]", "object?[]?"])
def test_params_object_array_reports_each_string(array_type: str) -> None:
    source = _program(
        'Log("x", $"a{1}", 2, $"b{2}");',
        members=(
            f"        public void Log(string format, params {array_type} args)\n"
            "        {\n        }\n"
        ),
    )

    assert _analyze(source) == [(15, 22), (15, 34)]


def test_params_string_array_is_ignored() -> None:
    source = _program(
        'Log("x", $"a{1}");',
        members=(
            "        public void Log(string format, params string[] args)\n"
            "        {\n        }\n"
        ),
    )

    assert _analyze(source) == []


@pytest.mark.parametrize(
    "call",
    [
        'Foo($"a{1}" + "b");',
        'Foo(($"a{1}"));',
        'Foo(flag ? $"a{1}" : null);',
    ],
)
def test_nested_interpolated_strings_are_not_candidates(call: str) -> None:
    assert _analyze(_program(call)) == []


def test_formattable_string_mention_suppresses() -> None:
    assert _analyze(_program('Foo($"{nameof(FormattableString)} {1}");')) == []


def test_unresolved_callees_are_skipped() -> None:
    source = _program('Console.WriteLine($"abc{1}"); Missing($"abc{2}"); x.Foo($"abc{3}");')

    assert _analyze(source) == []


def test_ambiguous_overloads_are_skipped() -> None:
    source = _program(
        'Foo($"abc{1}");',
        members=(
            "        public void Foo(object obj)\n        {\n        }\n"
            "        public void Foo(string text)\n        {\n        }\n"
        ),
    )

    assert _analyze(source) == []


def test_overload_picked_by_arity() -> None:
    source = _program(
        'Foo($"abc{1}", 2);',
        members=(
            "        public void Foo(string text)\n        {\n        }\n"
            "        public void Foo(object obj, int count)\n        {\n        }\n"
        ),
    )

    assert _analyze(source) == [(15, 17)]


def test_this_and_type_qualified_calls_resolve() -> None:
    source = _program(
        'this.Foo($"a{1}"); TypeName.Foo($"b{2}");',
    )

    assert _analyze(source) == [(15, 22), (15, 45)]


def test_dotted_receiver_must_name_a_declared_nested_type() -> None:
    source = """class Helper
{
    void Bar()
    {
        Helper.Instance.Foo($"a{1}");
        Outer.Inner.Foo($"b{2}");
    }
}

class Instance
{
    public void Foo(object obj) { }
}

class Outer
{
    class Inner
    {
        public static void Foo(object obj) { }
    }
}
"""

    assert _analyze(source) == [(6, 25)]


def test_constructor_and_local_function_bodies_are_analyzed() -> None:
    source = """class TypeName
{
    public TypeName()
    {
        Foo($"a{1}");
    }

    void Bar()
    {
        void Local(object value) { }
        Local($"b{2}");
    }

    static void Foo(object obj) { }
}
"""

    assert _analyze(source) == [(5, 13), (11, 15)]


def test_findings_are_in_source_order_across_methods() -> None:
    source = """class TypeName
{
    void B() { Foo($"b{2}"); }
    void A() { Foo($"a{1}"); }
    void Foo(object obj) { }
}
"""

    assert _analyze(source) == [(3, 20), (4, 20)]


def test_syntax_errors_do_not_raise() -> None:
    source = 'class TypeName { void Bar() { Foo($"a{1}" } void Foo(object obj) { } }'

    analyze_document(Document(path="broken.cs", text=source))


def test_cancellation_raises_without_partial_results() -> None:
    token = CancellationToken()
    token.cancel()

    with pytest.raises(OperationCanceledError):
        analyze_document(
            Document(path="Test0.cs", text=_program('Foo($"abc{1}");')),
            cancellation=token,
        )


def test_cancellation_token_not_requested_by_default() -> None:
    token = CancellationToken()

    assert token.is_cancellation_requested is False
    token.raise_if_cancellation_requested()
