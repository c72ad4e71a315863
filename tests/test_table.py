import io

from philosophers.args import Settings
from philosophers.table import Table, now_ms


def _lines(out):
    return [line.split(" ", 2) for line in out.getvalue().splitlines()]


def test_now_ms_advances():
    first = now_ms()
    second = now_ms()
    assert second >= first
    assert abs(first - __import_time()) < 10_000


def __import_time():
    import time

    return int(time.time() * 1000)


def test_fork_assignment():
    table = Table(Settings(3, 800, 10, 10), io.StringIO())
    assert [(p.left, p.right) for p in table.philosophers] == [(0, 1), (1, 2), (2, 0)]
    assert len(table.forks) == 3


def test_log_format():
    out = io.StringIO()
    table = Table(Settings(2, 800, 10, 10), out)
    table.log(2, "is sleeping")
    stamp, pid, message = _lines(out)[0]
    assert int(stamp) >= 0
    assert pid == "2"
    assert message == "is sleeping"


def test_announce_death_threshold():
    out = io.StringIO()
    table = Table(Settings(2, 100, 10, 10), out)
    last = table.philosophers[0].last_meal()
    assert table.announce_death(0, last + 100) is False
    assert table.is_over() is False
    assert table.announce_death(0, last + 101) is True
    assert table.is_over() is True
    assert out.getvalue().splitlines()[-1].endswith("1 died")


def test_log_suppressed_after_death():
    out = io.StringIO()
    table = Table(Settings(2, 100, 10, 10), out)
    table.announce_death(1, table.philosophers[1].last_meal() + 500)
    before = out.getvalue()
    table.log(1, "is eating")
    assert out.getvalue() == before


def test_all_fed_without_limit():
    table = Table(Settings(2, 800, 1, 1), io.StringIO())
    for p in table.philosophers:
        p.eat()
    assert table.all_fed() is False


def test_eat_counts_meals_and_all_fed():
    out = io.StringIO()
    table = Table(Settings(2, 800, 1, 1, must_eat=1), out)
    assert table.all_fed() is False
    table.philosophers[0].eat()
    assert table.philosophers[0].meals() == 1
    assert table.all_fed() is False
    table.philosophers[1].eat()
    assert table.all_fed() is True
    messages = [m for _, _, m in _lines(out)]
    assert messages.count("has taken a fork") == 4
    assert messages.count("is eating") == 2


def test_eat_updates_last_meal():
    table = Table(Settings(2, 800, 1, 1), io.StringIO())
    before = now_ms()
    table.philosophers[0].eat()
    assert table.philosophers[0].last_meal() >= before


def test_think_only_with_odd_count():
    odd_out = io.StringIO()
    Table(Settings(3, 800, 10, 10), odd_out).philosophers[0].think()
    assert "is thinking" in odd_out.getvalue()
    even_out = io.StringIO()
    Table(Settings(2, 800, 10, 10), even_out).philosophers[0].think()
    assert even_out.getvalue() == ""


def test_single_philosopher_dies():
    out = io.StringIO()
    table = Table(Settings(1, 50, 10, 10), out)
    table.run()
    lines = _lines(out)
    assert lines[0][1:] == ["1", "has taken a fork"]
    assert lines[-1][1:] == ["1", "died"]
    assert int(lines[-1][0]) >= 50
    assert len(lines) == 2


def test_everyone_fed_no_death():
    out = io.StringIO()
    table = Table(Settings(3, 800, 20, 20, must_eat=2), out)
    table.run()
    lines = _lines(out)
    assert all(message != "died" for _, _, message in lines)
    for pid in ("1", "2", "3"):
        eaten = sum(1 for _, who, m in lines if who == pid and m == "is eating")
        assert eaten >= 2
    stamps = [int(stamp) for stamp, _, _ in lines]
    assert stamps == sorted(stamps)


def test_starvation_is_detected():
    out = io.StringIO()
    table = Table(Settings(4, 310, 200, 100), out)
    table.run()
    lines = _lines(out)
    assert lines[-1][2] == "died"
    assert int(lines[-1][0]) > 310
    assert sum(1 for _, _, m in lines if m == "died") == 1
    assert table.is_over() is True