"""
Testes do `RunRegister`, o handle de última run pertencente ao chamador.
"""

from seqflow import RunRegister, make, run, transformation


def _pipeline():
    return make({}, transformation("double", lambda x: x * 2, ["x"], "y"))


def test_register_is_updated_only_when_passed():
    register = RunRegister()

    run(_pipeline(), {"x": 1})
    assert register.last() is None

    finished = run(_pipeline(), {"x": 2}, register=register)
    assert register.last() is finished


def test_register_keeps_last_run_including_failures():
    register = RunRegister()
    run(_pipeline(), {"x": 1}, register=register)
    failed = run(_pipeline(), {"x": None}, register=register)

    assert register.last() is failed
    assert register.last().failure_value.__class__ is TypeError


def test_independent_registers_do_not_share_state():
    a, b = RunRegister(), RunRegister()
    run(_pipeline(), {"x": 1}, register=a)

    assert a.last() is not None
    assert b.last() is None


def test_clear():
    register = RunRegister()
    run(_pipeline(), {"x": 3}, register=register)
    register.clear()

    assert register.last() is None
