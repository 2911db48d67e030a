import pytest

from homestead.events import (
    Batch,
    KeyPress,
    Quit,
    Sequence,
    Tick,
    WindowSize,
    batch,
    is_quit,
    sequence,
)


def _noop():
    return "msg"


def test_window_size_fields():
    size = WindowSize(80, 24)
    assert (size.width, size.height) == (80, 24)
    assert size == WindowSize(width=80, height=24)


def test_key_press_equality():
    assert KeyPress("enter") == KeyPress("enter")
    assert KeyPress("enter") != KeyPress("esc")


def test_quit_instances_are_equal():
    assert batch(Quit(), None) == Quit()
    assert sequence(None, Quit()) == Quit()


def test_tick_message_uses_factory():
    tick = Tick(2.0, lambda: WindowSize(1, 2))
    assert tick.message() == WindowSize(1, 2)
    assert tick.delay == 2.0


def test_tick_rejects_negative_delay():
    with pytest.raises(ValueError):
        Tick(-1.0, _noop)


def test_batch_empty_is_none():
    assert batch() is None
    assert batch(None, None) is None


def test_batch_single_returns_command():
    assert batch(None, _noop) is _noop


def test_batch_many():
    quit_cmd = Quit()
    result = batch(_noop, None, quit_cmd)
    assert isinstance(result, Batch)
    assert result.commands == (_noop, quit_cmd)
    assert list(result) == [_noop, quit_cmd]
    assert len(result) == 2


def test_sequence_keeps_order():
    first, second = Quit(), _noop
    result = sequence(first, second)
    assert isinstance(result, Sequence)
    assert result.commands == (first, second)


def test_sequence_empty_and_single():
    assert sequence() is None
    assert sequence(None, _noop) is _noop


def test_is_quit_plain():
    assert is_quit(Quit()) is True
    assert is_quit(None) is False
    assert is_quit(_noop) is False


def test_is_quit_nested():
    tick = Tick(1.0, _noop)
    assert is_quit(batch(tick, sequence(_noop, Quit()))) is True
    assert is_quit(batch(tick, _noop)) is False