import gc
import weakref

import pytest

from toylisp.errors import (
    ToyLispArityError,
    ToyLispDuplicateSymbol,
    ToyLispFormError,
    ToyLispScopeError,
    ToyLispTypeError,
)
from toylisp.evaluation.evaluator import evaluate
from toylisp.interpreter import evaluate_program
from toylisp.reader import parse_program
from toylisp.types.environment import Environment
from toylisp.types.function import Closure, UserDefined
from toylisp.types.symbol import Symbol

# -----------------------------------------------------
# defn
# -----------------------------------------------------

def test_defn_value_and_rendering():
    result = evaluate_program("(do (defn name (a b) (add a b)) name)")
    assert isinstance(result, UserDefined)
    assert str(result) == "(defn name (a b) (add a b))"


def test_defn_returns_function(run):
    assert run("(defn zero () 0)") == "(defn zero () 0)"


def test_defn_call(run):
    assert run("(do (defn myadd (a b) (add a b)) (myadd 1 2))") == "3"


def test_defn_recursion(run):
    source = """
        (do
            (defn fib (a)
                (if
                    (lte a 1)
                    a
                    (add
                        (fib (sub a 1))
                        (fib (sub a 2))
                    )
                )
            )
            (fib 10)
        )
    """
    assert run(source) == "55"


def test_mutual_recursion(run):
    source = """
        (do
            (defn is_even (n) (if (eq n 0) true (is_odd (sub n 1))))
            (defn is_odd (n) (if (eq n 0) false (is_even (sub n 1))))
            (is_even 10))
    """
    assert run(source) == "true"


def test_defn_sees_later_definitions_in_its_scope(run):
    assert run("(do (defn get () later) (let later 9) (get))") == "9"


def test_top_level_defn_persists_in_interpreter(interp):
    interp.eval("(defn double (x) (mul x 2))")
    assert interp.eval("(double 21)") == 42


@pytest.mark.parametrize(
    "source, error, message",
    [
        ("(defn f (a))", ToyLispFormError, "expected 3 sub-expressions for the DEFN expression"),
        ("(defn f (a) a a)", ToyLispFormError, "expected 3 sub-expressions for the DEFN expression"),
        ("(defn 1 (a) a)", ToyLispTypeError, "function name should be a symbol"),
        ("(defn f a a)", ToyLispTypeError, "expected parameter name list"),
        ("(defn f (a 1) a)", ToyLispTypeError, "parameter name should be a symbol"),
        ("(defn f (a (b)) a)", ToyLispTypeError, "parameter name should be a symbol"),
        ("(do (defn f () 1) (defn f () 2))", ToyLispDuplicateSymbol, "identifier already exists: f"),
        ("(do (let f 1) (defn f () 2))", ToyLispDuplicateSymbol, "identifier already exists: f"),
    ]
)
def test_defn_errors(run, source, error, message):
    with pytest.raises(error) as excinfo:
        run(source)
    assert excinfo.value.message == message


# -----------------------------------------------------
# fn
# -----------------------------------------------------

def test_fn_value_and_rendering():
    result = evaluate_program("(fn (a b) (add a b))")
    assert isinstance(result, Closure)
    assert str(result) == "(fn (a b) (add a b))"


def test_fn_is_not_bound(interp):
    interp.eval("(fn (a) a)")
    assert interp.env.lookup(Symbol("fn")) is None
    assert len(interp.env.vars) == 13


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(do (let myadd (fn (a b) (add a b))) (myadd 2 3))", "5"),
        ("((fn (x) (mul x x)) 7)", "49"),
        ("((fn () true))", "true"),
        ("(((fn (x) (fn (y) (sub x y))) 10) 3)", "7"),
        # nested closures see every enclosing activation
        ("(do (let k 100) (((fn (a) (fn (b) (add k (add a b)))) 1) 2))", "103"),
    ]
)
def test_fn_calls(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source, error, message",
    [
        ("(fn (a))", ToyLispFormError, "expected 2 sub-expressions for the FN expression"),
        ("(fn (a) a a)", ToyLispFormError, "expected 2 sub-expressions for the FN expression"),
        ("(fn a a)", ToyLispTypeError, "expected parameter name list"),
        ("(fn (true) 1)", ToyLispTypeError, "parameter name should be a symbol"),
    ]
)
def test_fn_errors(run, source, error, message):
    with pytest.raises(error) as excinfo:
        run(source)
    assert excinfo.value.message == message


def test_closure_rendering_nested(run):
    assert run("((fn (x) (fn (i) (add x i))) 1)") == "(fn (i) (add x i))"


# -----------------------------------------------------
# Closures and captured scopes
# -----------------------------------------------------

def test_closure_captures_defining_scope(run):
    source = """
        (do
            (defn inc_x
                (x)
                (fn
                    (i)
                    (add x i)
                )
            )
            (let inc_two (inc_x 2))
            (inc_two 10)
        )
    """
    assert run(source) == "12"


def test_closures_keep_separate_activations(run):
    source = """
        (do
            (defn adder (n) (fn (i) (add n i)))
            (let add1 (adder 1))
            (let add5 (adder 5))
            (add (add1 10) (add5 10)))
    """
    assert run(source) == "26"


def test_closure_returned_from_block_keeps_block_alive(run):
    assert run("(do (let f (do (let secret 41) (fn () (add secret 1)))) (f))") == "42"


def test_closure_keeps_scope_alive_after_interpreter_lookup(interp):
    closure = interp.eval("(do (let base 10) (fn (i) (add base i)))")
    gc.collect()
    assert isinstance(closure.scope, Environment)
    assert closure.scope.lookup(Symbol("base")) == 10


def test_defn_loses_scope_after_block_ends(run):
    # g was defined in the inner block; that scope is gone once the block returns
    with pytest.raises(ToyLispScopeError, match="static scope environment not found"):
        run("(do (let g (do (defn inner () 1) inner)) (g))")


def test_defn_returned_from_function_loses_scope(run):
    source = """
        (do
            (defn make () (do (defn helper (x) x) helper))
            (let h (make))
            (h 1))
    """
    with pytest.raises(ToyLispScopeError):
        run(source)


def test_defn_inside_closure_scope_stays_callable(run):
    # the closure owns the block scope, and with it the named function's scope
    source = """
        (do
            (let f (do (defn sq (x) (mul x x)) (fn (y) (sq y))))
            (f 9))
    """
    assert run(source) == "81"


def test_user_defined_holds_weak_reference():
    scope = Environment()
    fn = UserDefined(Symbol("f"), [], 1, scope)
    assert fn.scope() is scope
    ref = weakref.ref(scope)
    del scope
    gc.collect()
    assert ref() is None
    assert fn.scope() is None


def test_closure_holds_strong_reference():
    scope = Environment()
    ref = weakref.ref(scope)
    closure = Closure([], 1, scope)
    del scope
    gc.collect()
    assert ref() is closure.scope


def test_recursive_defn_does_not_keep_scope_alive(interp):
    # scope -> function is strong, function -> scope is weak: no cycle
    scope = Environment(interp.env)
    ref = weakref.ref(scope)

    evaluate(parse_program("(defn loop (n) (loop n))"), scope)
    del scope
    assert ref() is None


# -----------------------------------------------------
# Arity
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source, message",
    [
        ("(do (defn f (a b) a) (f 1))", "args length error: expected 2, got 1"),
        ("(do (defn f (a b) a) (f 1 2 3))", "args length error: expected 2, got 3"),
        ("(do (defn f () 0) (f 1))", "args length error: expected 0, got 1"),
        ("((fn (a) a))", "args length error: expected 1, got 0"),
        ("((fn (a) a) 1 2)", "args length error: expected 1, got 2"),
    ]
)
def test_argument_count_mismatch(run, source, message):
    with pytest.raises(ToyLispArityError) as excinfo:
        run(source)
    assert excinfo.value.message == message


def test_arity_checked_before_scope_resolution(run):
    with pytest.raises(ToyLispArityError):
        run("(do (let g (do (defn inner () 1) inner)) (g 1))")


def test_parameters_shadow_outer_bindings(run):
    assert run("(do (let x 1) (defn f (x) (add x 10)) (f 5))") == "15"
    assert run("(do (defn f (add) add) (f 3))") == "3"


def test_parameters_cannot_be_redefined_in_body(run):
    with pytest.raises(ToyLispDuplicateSymbol):
        run("(do (defn f (x) (let x 2)) (f 1))")


def test_unbounded_recursion_exhausts_stack(run):
    with pytest.raises(RecursionError):
        run("(do (defn forever (n) (forever n)) (forever 1))")


# -----------------------------------------------------
# Scopes caught in closure cycles
# -----------------------------------------------------

CYCLIC_BLOCK = "(do (let g (do (let c (fn () 1)) (defn inner () 2) inner)) (g))"


def test_cyclic_scope_survives_collection_before_call(run, monkeypatch):
    resolve = UserDefined.scope

    def collect_then_resolve(self):
        gc.collect()
        return resolve(self)

    monkeypatch.setattr(UserDefined, "scope", collect_then_resolve)
    assert run(CYCLIC_BLOCK) == "2"


def test_cyclic_scope_survives_between_evaluations(interp):
    interp.eval("(let g (do (let c (fn () 1)) (defn inner () 2) inner))")
    gc.collect()
    assert interp.eval("(g)") == 2


def test_cycle_through_nested_scope_is_retained(interp):
    # the closure captures a child of the block scope, not the block itself
    interp.eval("(let g (do (let c (do (fn () 1))) (defn inner () 3) inner))")
    gc.collect()
    assert interp.eval("(g)") == 3


def test_closure_defined_in_its_own_scope_is_retained_by_root(env):
    block = Environment(env)
    block.define(Symbol("f"), Closure([], 1, block))
    assert block in env.retained
    assert block.retained == set()


def test_closure_over_another_scope_is_not_retained(env):
    other = Environment(env)
    block = Environment(env)
    block.define(Symbol("f"), Closure([], 1, other))
    assert not block.is_owned_by(block.vars[Symbol("f")])
    assert env.retained == set()


def test_ownership_followed_through_bound_closures(env):
    block = Environment(env)
    holder = Environment(env)
    holder.define(Symbol("back"), Closure([], 1, block))
    # block -> f -> holder -> back -> block
    assert block.is_owned_by(Closure([], 2, holder))
    assert not block.is_owned_by(UserDefined(Symbol("g"), [], 2, block))
    assert not block.is_owned_by(7)


def test_acyclic_block_is_still_released(run, monkeypatch):
    resolve = UserDefined.scope

    def collect_then_resolve(self):
        gc.collect()
        return resolve(self)

    monkeypatch.setattr(UserDefined, "scope", collect_then_resolve)
    with pytest.raises(ToyLispScopeError):
        run("(do (let g (do (let c 1) (defn inner () 2) inner)) (g))")
