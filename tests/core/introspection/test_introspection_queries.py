"""
Testes da API de introspecção sobre Pipelines e Steps.

Os testes asseguram que:
- os predicados de estado funcionam para Step e Pipeline
- campos condicionais levantam erro fora do estado em que existem
- lookup de Step por nome e por `seq_id`
"""

import pytest

from seqflow import (
    FailureReason,
    NotFailedError,
    NotSuccessfulError,
    StepNotFoundError,
    StepState,
    args,
    bindings,
    exception,
    failed_step,
    failed_steps,
    failure_message,
    failure_reason,
    failure_value,
    final_state,
    is_exception,
    is_failed,
    is_not_started,
    is_pipeline,
    is_step,
    is_successful,
    make,
    result,
    run,
    state,
    step,
    step_name,
    step_runs,
    steps,
    transformation,
)


@pytest.fixture
def failing_pipeline():
    return make(
        {"mode": "test"},
        transformation("ok", lambda: 1, [], "a"),
        transformation("boom", lambda a: 1 / 0, ["a"], "b"),
        transformation("never", lambda b: b, ["b"], "c"),
    )


def test_type_predicates(currency_pipeline):
    s = currency_pipeline.steps[0]

    assert is_pipeline(currency_pipeline) and not is_pipeline(s)
    assert is_step(s) and not is_step(currency_pipeline)
    assert not is_step({"name": "fake"})


def test_template_predicates(currency_pipeline):
    assert state(currency_pipeline) == StepState.NOT_STARTED
    assert is_not_started(currency_pipeline)
    assert not is_successful(currency_pipeline)
    assert not is_failed(currency_pipeline)
    assert args(currency_pipeline) is None
    assert final_state(currency_pipeline) is None
    assert step_runs(currency_pipeline) == []
    assert failed_step(currency_pipeline) is None


def test_successful_predicates(currency_pipeline, currency_args, expected_value):
    finished = run(currency_pipeline, currency_args)

    assert state(finished) == StepState.SUCCESSFUL
    assert is_successful(finished)
    assert not is_not_started(finished)
    assert len(step_runs(finished)) == 4
    assert failed_steps(finished) == []
    assert result(finished) == pytest.approx(expected_value)
    assert result(step(finished, "extract-currencies")) == ["SEK", "USD"]
    assert args(finished) == currency_args


def test_failure_queries(failing_pipeline):
    finished = run(failing_pipeline, {})
    boom = step(finished, "boom")

    assert state(finished) == StepState.FAILED
    assert is_failed(finished) and is_failed(boom)
    assert failed_steps(finished) == [boom]
    assert failed_step(finished) is boom
    assert [step_name(s) for s in step_runs(finished)] == ["ok", "boom"]
    assert failure_reason(boom) == FailureReason.EXCEPTION
    assert isinstance(failure_value(boom), ZeroDivisionError)
    assert failure_message(boom) == str(failure_value(boom))
    assert is_exception(boom) and is_exception(finished)
    assert exception(finished) is failure_value(boom)
    assert is_not_started(step(finished, "never"))


def test_result_requires_success(failing_pipeline):
    finished = run(failing_pipeline, {})

    with pytest.raises(NotSuccessfulError):
        result(finished)
    with pytest.raises(NotSuccessfulError):
        result(step(finished, "never"))

    assert result(step(finished, "ok")) == 1


def test_failure_fields_require_failure(failing_pipeline):
    finished = run(failing_pipeline, {})

    for fn in (failure_reason, failure_value, failure_message):
        with pytest.raises(NotFailedError):
            fn(step(finished, "ok"))
        with pytest.raises(NotFailedError):
            fn(step(finished, "never"))

    assert exception(step(finished, "ok")) is None


def test_step_lookup(failing_pipeline):
    assert step(failing_pipeline, "boom") is failing_pipeline.steps[1]
    assert step(failing_pipeline, 2).name == "never"
    assert steps(failing_pipeline) == failing_pipeline.steps

    with pytest.raises(StepNotFoundError):
        step(failing_pipeline, "missing")
    with pytest.raises(StepNotFoundError):
        step(failing_pipeline, 7)


def test_bindings_query(failing_pipeline):
    assert bindings(failing_pipeline) == {"mode": "test"}
    assert bindings(step(failing_pipeline, "ok")) == {"mode": "test"}
