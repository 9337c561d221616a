"""Tests for static scope resolution"""

import lox
from loxtest import output, static_errors


def resolved(source):
    """Parse and resolve source, returning statements and the resolution."""
    statements, diagnostics = lox.parse(source)
    assert not diagnostics, diagnostics.messages
    return statements, lox.resolve(statements)


def test_globals_are_not_recorded():
    statements, resolution = resolved("var a = 1; print a;")
    assert not resolution.diagnostics
    assert resolution.locals == {}
    assert resolution.distance(statements[1].expression) is None


def test_local_distances():
    source = "{ var a = 1; { var b = 2; print a; print b; } }"
    statements, resolution = resolved(source)
    inner = statements[0].statements[1]
    read_a = inner.statements[1].expression
    read_b = inner.statements[2].expression

    assert resolution.distance(read_a) == 1
    assert resolution.distance(read_b) == 0


def test_closure_distance_through_function_scope():
    source = "fun outer() { var x = 1; fun inner() { return x; } }"
    statements, resolution = resolved(source)
    inner = statements[0].body[1]
    read_x = inner.body[0].value

    # inner's parameter scope, then outer's
    assert resolution.distance(read_x) == 1


def test_closure_captures_declaration_before_shadowing():
    lines = output(
        """
        var a = "outer";
        {
            fun show() { return a; }
            print show();
            var a = "inner";
            print show();
        }
        """
    )
    assert lines == ["outer", "outer"]


def test_shadowing_keeps_static_binding():
    lines = output("var a = 1; { fun f() { return a; } var a = 2; print f(); }")
    assert lines == ["1"]


def test_redeclare_local():
    messages = static_errors("{ var a = 1; var a = 2; }")
    assert messages == [
        "[line 1] Error at 'a': Already a variable with this name in this scope."
    ]


def test_redeclare_global_allowed():
    assert output("var a = 1; var a = 2; print a;") == ["2"]


def test_duplicate_parameter():
    messages = static_errors("fun f(a, a) {}")
    assert messages == [
        "[line 1] Error at 'a': Already a variable with this name in this scope."
    ]


def test_read_in_own_initializer():
    messages = static_errors("var a = 1; { var a = a; }")
    assert messages == [
        "[line 1] Error at 'a': Can't read local variable in its own initializer."
    ]


def test_return_at_top_level():
    messages = static_errors("print 1; return 2;")
    assert messages == ["[line 1] Error at 'return': Can't return from top-level code."]


def test_this_outside_class():
    messages = static_errors("print this;")
    assert messages == ["[line 1] Error at 'this': Can't use 'this' outside of a class."]

    messages = static_errors("fun f() { return this; }")
    assert messages == ["[line 1] Error at 'this': Can't use 'this' outside of a class."]


def test_super_errors():
    messages = static_errors("super.m();")
    assert messages == ["[line 1] Error at 'super': Can't use 'super' outside of a class."]

    messages = static_errors("class A { m() { super.m(); } }")
    assert messages == [
        "[line 1] Error at 'super': Can't use 'super' in a class with no superclass."
    ]


def test_inherit_from_self():
    messages = static_errors("class A < A {}")
    assert messages == ["[line 1] Error at 'A': A class can't inherit from itself."]


def test_errors_do_not_stop_resolution():
    messages = static_errors(
        """
        return 1;
        { var a = 1; var a = 2; }
        print this;
        """
    )
    assert len(messages) == 3
    assert messages[0].startswith("[line 2]")
    assert messages[2].startswith("[line 4]")


def test_static_errors_prevent_execution():
    # The print before the error must not run
    static_errors('print "ran"; { var a = a; }')
