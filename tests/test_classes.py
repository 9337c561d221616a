"""Tests for classes, instances, methods and inheritance"""

import lox
from loxtest import output, run, runtime_error


def test_greeter():
    lines = output(
        """
        class Greeter { greet() { return "hi " + this.name; } }
        var g = Greeter();
        g.name = "Amy";
        print g.greet();
        """
    )
    assert lines == ["hi Amy"]


def test_class_and_instance_text():
    lines = output("class Point {} print Point; print Point();")
    assert lines == ["Point", "Point instance"]


def test_initializer():
    lines = output(
        """
        class Point {
            init(x, y) { this.x = x; this.y = y; }
            sum() { return this.x + this.y; }
        }
        var p = Point(1, 2);
        print p.sum();
        """
    )
    assert lines == ["3"]


def test_initializer_returns_instance():
    lines = output(
        """
        class A {
            init() { this.n = 1; return; }
        }
        var a = A();
        print a.init() == a;
        class B { init() { return 5; } }
        print B();
        """
    )
    assert lines == ["true", "B instance"]


def test_initializer_arity():
    message = runtime_error("class P { init(a) {} } P();")
    assert message == "Expected 1 arguments but got 0."

    message = runtime_error("class Q {} Q(1);")
    assert message == "Expected 0 arguments but got 1."


def test_fields_shadow_methods():
    lines = output(
        """
        class A { m() { return "method"; } }
        var a = A();
        print a.m();
        a.m = fun () { return "field"; };
        print a.m();
        print A().m();
        """
    )
    assert lines == ["method", "field", "method"]


def test_bound_method_keeps_receiver():
    lines = output(
        """
        class Person {
            init(name) { this.name = name; }
            hello() { return "I am " + this.name; }
        }
        var m = Person("Bo").hello;
        var other = Person("Cy");
        other.borrowed = m;
        print other.borrowed();
        """
    )
    assert lines == ["I am Bo"]


def test_this_in_nested_function():
    lines = output(
        """
        class Thing {
            getCallback() {
                fun callback() { return this; }
                return callback;
            }
        }
        var t = Thing();
        print t.getCallback()() == t;
        """
    )
    assert lines == ["true"]


def test_single_inheritance_and_super():
    lines = output(
        """
        class Base { greet() { return "base"; } only() { return "only base"; } }
        class Derived < Base { greet() { return "derived+" + super.greet(); } }
        var d = Derived();
        print d.greet();
        print d.only();
        """
    )
    assert lines == ["derived+base", "only base"]


def test_multiple_inheritance_first_superclass_wins():
    lines = output(
        """
        class A { m() { return "A"; } }
        class B { m() { return "B"; } b() { return "only B"; } }
        class C < A, B {}
        print C().m();
        print C().b();
        """
    )
    assert lines == ["A", "only B"]


def test_own_method_beats_superclasses():
    lines = output(
        """
        class A { m() { return "A"; } }
        class B { m() { return "B"; } }
        class C < A, B { m() { return "C"; } }
        print C().m();
        """
    )
    assert lines == ["C"]


def test_depth_first_lookup():
    lines = output(
        """
        class Root { m() { return "Root"; } }
        class Left < Root {}
        class Right { m() { return "Right"; } }
        class Child < Left, Right {}
        print Child().m();
        """
    )
    # Left's chain is exhausted before Right is tried
    assert lines == ["Root"]


def test_super_skips_own_class_and_searches_in_order():
    lines = output(
        """
        class A { m() { return "A"; } }
        class B { m() { return "B"; } }
        class C < B, A { m() { return "C>" + super.m(); } }
        print C().m();
        """
    )
    assert lines == ["C>B"]


def test_super_binds_this():
    lines = output(
        """
        class A { name() { return this.n; } }
        class B < A { init() { this.n = "bee"; } name() { return super.name() + "!"; } }
        print B().name();
        """
    )
    assert lines == ["bee!"]


def test_super_through_several_levels():
    lines = output(
        """
        class A { say() { return "A"; } }
        class B < A { say() { return "B" + super.say(); } }
        class C < B { say() { return "C" + super.say(); } }
        print C().say();
        """
    )
    assert lines == ["CBA"]


def test_inherited_initializer():
    lines = output(
        """
        class A { init(v) { this.v = v; } }
        class B < A {}
        print B(7).v;
        """
    )
    assert lines == ["7"]


def test_undefined_property():
    assert runtime_error("class A {} print A().nope;") == "Undefined property 'nope'."
    message = runtime_error(
        "class A {} class B < A { m() { return super.nope(); } } B().m();"
    )
    assert message == "Undefined property 'nope'."


def test_superclass_must_be_a_class():
    message = runtime_error('var NotClass = "x"; class A < NotClass {}')
    assert message == "Superclass must be a class."


def test_instances_are_independent():
    lines = output(
        """
        class Bag {}
        var a = Bag();
        var b = Bag();
        a.item = 1;
        b.item = 2;
        print a.item;
        print a == b;
        print a == a;
        """
    )
    assert lines == ["1", "false", "true"]


def test_method_lookup_api():
    outcome = run("class A { m() {} } class B { m() {} n() {} } class C < A, B {}")
    assert outcome.exit_code == lox.EXIT_OK

    a = lox.LoxClass("A", (), {"m": "A.m"})
    b = lox.LoxClass("B", (), {"m": "B.m", "n": "B.n"})
    c = lox.LoxClass("C", (a, b), {"m": "C.m"})
    assert c.find_method("m") == "C.m"
    assert c.find_method("n") == "B.n"
    assert c.find_method_in_superclasses("m") == "A.m"
    assert c.find_method("missing") is None
