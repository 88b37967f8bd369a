import pytest

from dashlang.context import Context
from dashlang.errors import DashError
from dashlang.interpreter import Interpreter
from dashlang.parser import parse_program


def run_source(source):
    return Interpreter().run(parse_program(source))


def printed(source, capsys):
    run_source(source)
    return capsys.readouterr().out.splitlines()


def test_add_function(capsys):
    assert printed("fn add(a, b) { return a + b } print(add(2, 3))", capsys) == ['5']


def test_nested_calls_in_arguments(capsys):
    source = "fn add(a, b) { return a + b } print(add(add(1, 2), add(3, 4)))"
    assert printed(source, capsys) == ['10']


def test_function_without_return_yields_empty_string(capsys):
    assert printed('fn noop(x) { let y = x } print(noop(1)) print("end")', capsys) == ['', 'end']


def test_return_stops_function_body(capsys):
    source = 'fn f() { print("a") return 1 print("b") } print(f())'
    assert printed(source, capsys) == ['a', '1']


def test_return_from_inside_loop_and_if(capsys):
    source = """
    fn find(limit) {
      let i = 0
      while 1 {
        if i * i > limit { return i }
        let i = i + 1
      }
    }
    print(find(20))
    """
    assert printed(source, capsys) == ['5']


def test_calling_other_user_function_fails():
    source = "fn one() { return 1 } fn two() { return one() + 1 } print(two())"
    with pytest.raises(DashError) as excinfo:
        run_source(source)
    assert excinfo.value.err.name == 'NameError'
    assert 'undefined function one' in str(excinfo.value)


def test_recursion_fails():
    source = "fn fact(n) { if n == 0 { return 1 } return n * fact(n - 1) } print(fact(3))"
    with pytest.raises(DashError) as excinfo:
        run_source(source)
    assert 'undefined function fact' in str(excinfo.value)


def test_recursion_base_case_does_not_touch_function_table(capsys):
    source = "fn fact(n) { if n == 0 { return 1 } return n * fact(n - 1) } print(fact(0))"
    assert printed(source, capsys) == ['1']


def test_function_cannot_see_caller_variables():
    with pytest.raises(DashError) as excinfo:
        run_source("let g = 1 fn f() { return g } print(f())")
    assert 'undefined variable g' in str(excinfo.value)


def test_function_cannot_write_caller_variables(capsys):
    source = "let x = 1 fn f(x) { let x = 99 let y = 2 return x } print(f(5)) print(x)"
    ctx = run_source(source)
    assert capsys.readouterr().out.splitlines() == ['99', '1']
    assert ctx.variables == {'x': '1'}


def test_functions_defined_inside_a_function_stay_local(capsys):
    source = """
    fn outer() {
      fn inner() { return 2 }
      return inner()
    }
    print(outer())
    """
    assert printed(source, capsys) == ['2']
    with pytest.raises(DashError):
        run_source("fn outer() { fn inner() { return 2 } return 1 } print(outer()) print(inner())")


def test_wrong_argument_count_is_fatal():
    with pytest.raises(DashError) as excinfo:
        run_source("fn add(a, b) { return a + b } print(add(1))")
    assert excinfo.value.err.name == 'ArityError'
    with pytest.raises(DashError):
        run_source("fn add(a, b) { return a + b } add(1, 2, 3)")


def test_arity_checked_before_arguments_are_evaluated(capsys):
    source = 'fn loud() { print("evaluated") return 1 } fn one(a) { return a } print(one(loud(), loud()))'
    with pytest.raises(DashError):
        run_source(source)
    assert capsys.readouterr().out == ''


def test_undefined_function_is_fatal():
    with pytest.raises(DashError):
        run_source("print(nope())")
    with pytest.raises(DashError):
        run_source("nope()")


def test_redefinition_shadows(capsys):
    source = "fn f() { return 1 } print(f()) fn f() { return 2 } print(f())"
    assert printed(source, capsys) == ['1', '2']


def test_definition_visible_in_nested_blocks(capsys):
    source = "if 1 { fn f() { return 3 } } let i = 0 while i < 2 { print(f()) let i = i + 1 }"
    assert printed(source, capsys) == ['3', '3']


def test_call_statement_ignores_return(capsys):
    source = 'fn f(x) { print(x) return 1 print("after return") } f("hi")'
    assert printed(source, capsys) == ['hi', 'after return']


def test_call_statement_ignores_break_and_continue(capsys):
    source = 'fn f() { break print("a") continue print("b") } f() print("c")'
    assert printed(source, capsys) == ['a', 'b', 'c']


def test_call_expression_rejects_escaping_break():
    with pytest.raises(DashError) as excinfo:
        run_source("fn f() { break } print(f())")
    assert excinfo.value.err.name == 'ControlFlowError'


def test_call_expression_rejects_escaping_continue_from_if():
    with pytest.raises(DashError):
        run_source("fn f() { if 1 { continue } return 1 } print(f())")


def test_break_inside_function_loop_is_fine(capsys):
    source = "fn f(n) { while 1 { if n > 2 { break } let n = n + 1 } return n } print(f(0))"
    assert printed(source, capsys) == ['3']


def test_function_table_lives_in_context():
    ctx = run_source("fn add(a, b) { return a + b }")
    assert list(ctx.functions) == ['add']
    assert ctx.functions['add'].params == ['a', 'b']


def test_context_call_binds_parameters_only():
    ctx = Context()
    ctx.set('outer', '1')
    ctx.define_function('f', ['a', 'b'], [])
    local = ctx.call('f', ['x', 'y'])
    assert local.variables == {'a': 'x', 'b': 'y'}
    assert local.functions == {}
    with pytest.raises(DashError):
        ctx.call('f', ['x'])
    with pytest.raises(DashError):
        ctx.call('g', [])
