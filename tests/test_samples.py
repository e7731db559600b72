import pytest

from athread import samples
from athread.samples import RunnableSample, auto_shutdown, lambda_sample, main, simple


@pytest.fixture(autouse=True)
def fast_tick(monkeypatch):
    monkeypatch.setattr(samples, "TICK", 0.05)


def test_runnable_sample_runs_its_loop(capsys):
    sample = RunnableSample("task-x", 3)
    sample.run()
    assert sample.lines == [f"task-x running {i}" for i in range(3)]
    out = capsys.readouterr().out
    assert ">task-x loop 3" in out
    assert ">task-x running 2" in out


def test_runnable_sample_random_loop_range():
    loops = {RunnableSample("r").loop for _ in range(50)}
    assert min(loops) >= 2
    assert max(loops) <= 11


def test_auto_shutdown_runs_both_tasks():
    lines = auto_shutdown()
    expected = {
        "auto_shutdown: run taks 1",
        "auto_shutdown: end taks 1",
        "auto_shutdown: run taks 2",
        "auto_shutdown: end taks 2",
    }
    assert set(lines) == expected
    assert len(lines) == 4
    for number in (1, 2):
        assert lines.index(f"auto_shutdown: run taks {number}") < lines.index(
            f"auto_shutdown: end taks {number}"
        )


def test_lambda_sample_prints_captured_value():
    assert lambda_sample() == ["lambda function: 4"]


def test_simple_completes_started_tasks():
    first, second = simple()
    assert first.name == "task-1"
    assert second.name == "task-2"
    assert first.lines == [f"task-1 running {i}" for i in range(first.loop)]
    full_second = [f"task-2 running {i}" for i in range(second.loop)]
    assert second.lines in ([], full_second)


def test_main_runs_named_sample(capsys):
    assert main(["lambda"]) == 0
    assert "lambda function: 4" in capsys.readouterr().out


def test_main_rejects_unknown_sample():
    with pytest.raises(SystemExit):
        main(["nonexistent"])