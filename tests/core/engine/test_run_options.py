# tests/core/engine/test_run_options.py
"""
Testes de `RunOptions` e da coerção de opções informadas como mapa.
"""

import pytest

from seqflow import BindingPrecedence, RunOptions, RunOptionsError, SchemaRegistry, make, run, transformation
from seqflow.core.engine.options import coerce_options


def test_defaults():
    opts = coerce_options(None)

    assert opts == RunOptions()
    assert opts.allow_async_args is False
    assert opts.binding_precedence == BindingPrecedence.STEP_BINDINGS
    assert opts.schemas is None


def test_from_mapping():
    registry = SchemaRegistry()
    opts = coerce_options({"allow_async_args": True, "binding_precedence": "args", "schemas": registry})

    assert opts.allow_async_args is True
    assert opts.binding_precedence == BindingPrecedence.ARGS
    assert opts.schemas is registry


def test_instances_pass_through():
    opts = RunOptions(allow_async_args=True)
    assert coerce_options(opts) is opts


@pytest.mark.parametrize(
    "data, match",
    [
        ({"allowAsyncArgs": True}, "Unknown run option"),
        ({"allow_async_args": "yes"}, "boolean"),
        ({"binding_precedence": "random"}, "binding_precedence"),
        ({"schemas": {"money": float}}, "SchemaRegistry"),
    ],
)
def test_invalid_mappings(data, match):
    with pytest.raises(RunOptionsError, match=match):
        RunOptions.from_mapping(data)


def test_invalid_options_type():
    with pytest.raises(RunOptionsError):
        coerce_options(["allow_async_args"])


def test_run_rejects_invalid_options():
    p = make({}, transformation("one", lambda: 1, [], "v"))

    with pytest.raises(RunOptionsError):
        run(p, {}, {"timeout": 5})
