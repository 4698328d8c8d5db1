import pytest

from analyzer import ExpressionAnalyzer, SemanticAnalyzer
from ast_nodes import *
from conftest import MAIN_CLASS, with_main
from errors import ErrorCode, SemanticError
from my_types import BOOLEAN, INTEGER, NONE, object_type
from parser import parse


def main_with(body, methods=""):
    """入口类之外再放一个 Test 类，方法体写在 Test.run 中"""
    return with_main("""
        class Test {
            %s
            run() -> none {
                %s
            }
        }
    """ % (methods, body))


# ==================== 整体程序 ====================

def test_minimal_program_table(check):
    classes = check(MAIN_CLASS)
    assert list(classes) == ["Main"]
    main = classes["Main"]
    assert main.superclass is None
    assert main.members == {}
    assert main.members_size == 0
    assert list(main.methods) == ["main"]
    method = main.methods["main"]
    assert method.return_type == NONE
    assert method.parameters == []
    assert method.locals_size == 0


def test_no_main_class(error_code):
    assert error_code("class Foo { main() -> none { } }") == "no_main_class"


def test_main_class_members_present(error_code):
    source = "class Main { integer x; main() -> none { } }"
    assert error_code(source) == "main_class_members_present"


def test_no_main_method(error_code):
    assert error_code("class Main { run() -> none { } }") == "no_main_method"


def test_main_method_returning_value(error_code):
    source = "class Main { main() -> integer { return 1; } }"
    assert error_code(source) == "main_method_incorrect_signature"


def test_main_method_with_parameters(error_code):
    source = "class Main { main(x: integer) -> none { } }"
    assert error_code(source) == "main_method_incorrect_signature"


def test_validator_order_reports_members_before_missing_method(error_code):
    source = "class Main { integer x; run() -> none { } }"
    assert error_code(source) == "main_class_members_present"


def test_custom_entry_point(check, error_code):
    source = "class App { start() -> none { } }"
    config = {"entry_class": "App", "entry_method": "start"}
    assert list(check(source, config)) == ["App"]
    assert error_code(MAIN_CLASS, config) == "no_main_class"


def test_circular_inheritance_is_rejected(error_code):
    source = with_main("class A extends B { } class B extends A { }")
    assert error_code(source) == "circular_inheritance"


def test_duplicate_class(error_code):
    assert error_code(MAIN_CLASS + MAIN_CLASS) == "duplicate_declaration"


# ==================== 符号表建立 ====================

def test_offsets_and_sizes(check):
    classes = check(with_main("""
        class Point {
            integer x, y;
            boolean visible;
            move(dx: integer, dy: integer) -> none {
                integer tmp;
                tmp = dx;
                x = x + tmp;
                y = y + dy;
            }
        }
    """))
    point = classes["Point"]
    assert [(n, v.type_, v.offset, v.size) for n, v in point.members.items()] == [
        ("x", INTEGER, 0, 4),
        ("y", INTEGER, 4, 4),
        ("visible", BOOLEAN, 8, 4),
    ]
    assert point.members_size == 12
    move = point.methods["move"]
    assert move.parameters == [INTEGER, INTEGER]
    assert list(move.variables) == ["dx", "dy", "tmp"]
    assert [v.offset for v in move.variables.values()] == [0, 4, 8]
    assert move.locals_size == 12


def test_class_table_keeps_declaration_order(check):
    classes = check(with_main("class B { } class A extends B { }"))
    assert list(classes) == ["B", "A", "Main"]
    assert classes["A"].superclass == "B"


def test_duplicate_member(error_code):
    source = with_main("class A { integer x; boolean x; }")
    assert error_code(source) == "duplicate_declaration"


def test_duplicate_method(error_code):
    source = with_main("class A { m() -> none { } m() -> none { } }")
    assert error_code(source) == "duplicate_declaration"


def test_parameter_local_collision(error_code):
    source = with_main("class A { m(x: integer) -> none { boolean x; } }")
    assert error_code(source) == "duplicate_declaration"


def test_duplicate_parameter(error_code):
    source = with_main("class A { m(x: integer, x: integer) -> none { } }")
    assert error_code(source) == "duplicate_declaration"


def test_local_may_shadow_member(check):
    classes = check(with_main("""
        class A {
            integer x;
            m() -> boolean { boolean x; x = true; return x; }
        }
    """))
    assert classes["A"].methods["m"].return_type == BOOLEAN


# ==================== 构造函数与返回值 ====================

def test_constructor_must_return_none(error_code):
    source = with_main("class A { A() -> integer { return 1; } }")
    assert error_code(source) == "constructor_returns_type"


def test_constructor_check_precedes_body_errors(error_code):
    source = with_main("class A { A() -> boolean { x = undefinedThing; return true; } }")
    assert error_code(source) == "constructor_returns_type"


def test_return_type_mismatch(error_code):
    source = main_with("", methods="get() -> integer { return true; }")
    assert error_code(source) == "return_type_mismatch"


def test_missing_return_in_value_method(error_code):
    source = main_with("", methods="get() -> integer { }")
    assert error_code(source) == "return_type_mismatch"


def test_returning_value_from_none_method(error_code):
    source = main_with("", methods="get() -> none { return 1; }")
    assert error_code(source) == "return_type_mismatch"


def test_bare_return_in_none_method(check):
    classes = check(main_with("", methods="stop() -> none { return; }"))
    assert "stop" in classes["Test"].methods


def test_bare_return_in_value_method(error_code):
    source = main_with("", methods="get() -> integer { return; }")
    assert error_code(source) == "return_type_mismatch"


def test_object_return_type(check):
    classes = check(with_main("""
        class Node {
            Node next;
            Node() -> none { }
            getNext() -> Node { return next; }
            copy() -> Node { return new Node(); }
        }
    """))
    assert classes["Node"].methods["getNext"].return_type == object_type("Node")


def test_recursive_method(check):
    classes = check(with_main("""
        class Math {
            fact(n: integer) -> integer {
                integer r;
                r = 1;
                if n > 1 { r = n * fact(n - 1); }
                return r;
            }
        }
    """))
    assert classes["Math"].methods["fact"].parameters == [INTEGER]


# ==================== 表达式 ====================

def test_arithmetic_requires_integers(error_code):
    assert error_code(main_with("integer x; x = 1 + true;")) == "expression_type_mismatch"
    assert error_code(main_with("integer x; x = -false;")) == "expression_type_mismatch"


def test_comparison_requires_integers(error_code):
    assert error_code(main_with("boolean b; b = true > false;")) == "expression_type_mismatch"


def test_equality_requires_matching_operands(check, error_code):
    check(main_with("boolean b; b = 1 == 2; b = true == false;"))
    assert error_code(main_with("boolean b; b = 1 == true;")) == "expression_type_mismatch"


def test_boolean_algebra_requires_booleans(error_code):
    assert error_code(main_with("boolean b; b = true and 1;")) == "expression_type_mismatch"
    assert error_code(main_with("boolean b; b = not 1;")) == "expression_type_mismatch"


def test_undefined_variable(error_code):
    assert error_code(main_with("print missing;")) == "undefined_variable"


def test_member_access_on_non_object(error_code):
    assert error_code(main_with("integer i; print i.x;")) == "not_object"


def test_undefined_member(error_code):
    source = with_main("""
        class Point { integer x; }
        class Test { run() -> none { Point p; print p.z; } }
    """)
    assert error_code(source) == "undefined_member"


def test_member_of_undeclared_class(error_code):
    assert error_code(main_with("Ghost g; print g.x;")) == "undefined_class"


def test_dangling_superclass_member_access(error_code):
    source = with_main("""
        class A extends B { integer own; }
        class Test { run() -> none { A a; print a.own; print a.inherited; } }
    """)
    assert error_code(source) == "undefined_member"


def test_inherited_member_and_method(check):
    check(with_main("""
        class Base {
            integer value;
            get() -> integer { return value; }
        }
        class Derived extends Base {
            twice() -> integer { return get() + value; }
        }
        class Test {
            run() -> none {
                Derived d;
                integer v;
                v = d.value;
                v = d.get();
                v = d.twice();
            }
        }
    """))


def test_method_call_on_non_object(error_code):
    assert error_code(main_with("boolean b; b.go();")) == "not_object"


def test_undefined_method(error_code):
    assert error_code(main_with("missing();")) == "undefined_method"


def test_argument_number_mismatch(error_code):
    source = with_main("""
        class Obj { foo(a: integer) -> none { } }
        class Test { run() -> none { Obj obj; obj.foo(1, 2); } }
    """)
    assert error_code(source) == "argument_number_mismatch"


def test_argument_type_mismatch(error_code):
    source = main_with("take(true);", methods="take(a: integer) -> none { }")
    assert error_code(source) == "argument_type_mismatch"


def test_no_subtype_widening_for_arguments(error_code):
    source = with_main("""
        class Base { }
        class Derived extends Base { }
        class Test {
            take(b: Base) -> none { }
            run() -> none { Derived d; take(d); }
        }
    """)
    assert error_code(source) == "argument_type_mismatch"


def test_new_undefined_class(error_code):
    assert error_code(main_with("print new Ghost();")) == "undefined_class"


def test_new_without_constructor(error_code):
    source = with_main("""
        class Foo { }
        class Test { run() -> none { Foo f; f = new Foo(); } }
    """)
    assert error_code(source) == "undefined_method"


def test_constructor_is_not_inherited(error_code):
    source = with_main("""
        class Base { Base() -> none { } }
        class Derived extends Base { }
        class Test { run() -> none { Derived d; d = new Derived(); } }
    """)
    assert error_code(source) == "undefined_method"


def test_new_checks_constructor_arguments(check, error_code):
    classes = with_main("""
        class Pair {
            integer a;
            boolean b;
            Pair(x: integer, y: boolean) -> none { a = x; b = y; }
        }
        class Test { run() -> none { Pair p; p = new Pair(%s); } }
    """)
    check(classes % "1, true")
    assert error_code(classes % "1") == "argument_number_mismatch"
    assert error_code(classes % "true, 1") == "argument_type_mismatch"


def test_class_can_construct_itself(check):
    check(with_main("""
        class List {
            List() -> none { }
            clone() -> List { return new List(); }
        }
    """))


def test_classes_declared_later_are_not_visible(error_code):
    source = with_main("""
        class Test { run() -> none { print new Later(); } }
        class Later { Later() -> none { } }
    """)
    assert error_code(source) == "undefined_class"


# ==================== 语句 ====================

def test_assignment_type_mismatch(error_code):
    assert error_code(main_with("integer x; x = true;")) == "assignment_type_mismatch"


def test_assignment_to_undefined_variable(error_code):
    assert error_code(main_with("x = 1;")) == "undefined_variable"


def test_object_assignment_requires_same_class(error_code):
    source = with_main("""
        class A { A() -> none { } }
        class B { B() -> none { } }
        class Test { run() -> none { A a; a = new B(); } }
    """)
    assert error_code(source) == "assignment_type_mismatch"


def test_member_assignment(check, error_code):
    template = with_main("""
        class Box { integer size; }
        class Test { run() -> none { Box box; integer n; %s } }
    """)
    check(template % "box.size = 3;")
    assert error_code(template % "box.size = true;") == "assignment_type_mismatch"
    assert error_code(template % "box.other = 1;") == "undefined_member"
    assert error_code(template % "n.size = 1;") == "not_object"


def test_if_predicate(error_code):
    assert error_code(main_with("if 1 { print 1; }")) == "if_predicate_type_mismatch"


def test_while_predicate(error_code):
    assert error_code(main_with("while 0 { }")) == "while_predicate_type_mismatch"


def test_do_while_predicate(error_code):
    assert error_code(main_with("do { } while 1;")) == "do_while_predicate_type_mismatch"


def test_nested_blocks_are_checked(error_code):
    source = main_with("if true { } else { while true { x = 1; } }")
    assert error_code(source) == "undefined_variable"


def test_print_accepts_any_type(check):
    check(with_main("""
        class Test {
            Test() -> none { }
            nothing() -> none { }
            run() -> none {
                print 1;
                print true;
                print new Test();
                print nothing();
            }
        }
    """))


def test_print_propagates_errors(error_code):
    assert error_code(main_with("print 1 + false;")) == "expression_type_mismatch"


def test_call_statement_discards_result(check):
    check(main_with("value();", methods="value() -> integer { return 1; }"))


def test_first_error_wins(error_code):
    source = main_with("x = 1; if 1 { }")
    assert error_code(source) == "undefined_variable"


# ==================== 节点覆盖 ====================

def test_every_expression_node_has_a_handler():
    for node_type in EXPRESSION_NODES:
        assert hasattr(ExpressionAnalyzer, f"_analyze_{node_type.__name__}"), node_type


def test_every_statement_node_has_a_handler():
    for node_type in STATEMENT_NODES:
        assert hasattr(SemanticAnalyzer, f"_analyze_{node_type.__name__}"), node_type


def test_hand_built_ast():
    program = Program([
        ClassDecl("Main", None, [], [
            MethodDecl("main", [], NoneType(), MethodBody(
                declarations=[Declaration(IntegerType(), ["i"])],
                statements=[
                    Assignment("i", Plus(IntegerLiteral(1), IntegerLiteral(2))),
                    While(Greater(Variable("i"), IntegerLiteral(0)), [
                        Assignment("i", Minus(Variable("i"), IntegerLiteral(1))),
                    ]),
                ],
            )),
        ]),
    ])
    classes = SemanticAnalyzer().analyze(program)
    assert classes["Main"].methods["main"].locals_size == 4


def test_analysis_error_carries_code_and_message():
    with pytest.raises(SemanticError) as exc_info:
        SemanticAnalyzer().analyze(Program([]))
    err = exc_info.value
    assert err.code == ErrorCode.NO_MAIN_CLASS
    assert err.pretty().startswith("[no_main_class] ")


def test_analyzer_instance_is_reusable():
    analyzer = SemanticAnalyzer()
    first = analyzer.analyze(parse(with_main("class A { integer x; }")))
    second = analyzer.analyze(parse(MAIN_CLASS))
    assert list(first) == ["A", "Main"]
    assert list(second) == ["Main"]
