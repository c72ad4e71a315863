"""The dining table: forks, philosophers and the monitor that watches them."""

from __future__ import annotations

import threading
import time
from typing import List, TextIO

from .args import Settings


def now_ms() -> int:
    """Wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def _sleep_ms(ms: float) -> None:
    time.sleep(ms / 1000)


class Philosopher:
    """One philosopher seated at a :class:`Table`."""

    def __init__(self, table: "Table", index: int) -> None:
        self.table = table
        self.index = index
        self.id = index + 1
        self.left = index
        self.right = (index + 1) % table.settings.count
        self._meals = 0
        self._last_meal = table.start_time
        self._meal_lock = threading.Lock()
        self._count_lock = threading.Lock()

    def meals(self) -> int:
        """Number of meals finished so far."""
        with self._count_lock:
            return self._meals

    def last_meal(self) -> int:
        """Timestamp (ms) at which the latest meal started."""
        with self._meal_lock:
            return self._last_meal

    def _stamp(self, when: int) -> None:
        with self._meal_lock:
            self._last_meal = when

    def eat(self) -> None:
        """Take both forks, eat, then put the forks down."""
        forks = self.table.forks
        if self.id % 2 == 0:
            first, second = forks[self.left], forks[self.right]
        else:
            first, second = forks[self.right], forks[self.left]
        with first, second:
            self.table.log(self.id, "has taken a fork")
            self.table.log(self.id, "has taken a fork")
            self._stamp(now_ms())
            self.table.log(self.id, "is eating")
            _sleep_ms(self.table.settings.eat_time)
            with self._count_lock:
                self._meals += 1

    def think(self) -> None:
        """Think for a while; only tables with an odd head count need it."""
        settings = self.table.settings
        if settings.count % 2 != 0:
            pause = min((settings.eat_time + settings.sleep_time) // 2, 100)
            self.table.log(self.id, "is thinking")
            _sleep_ms(pause)

    def _alone(self) -> None:
        fork = self.table.forks[self.right]
        with fork:
            self.table.log(self.id, "has taken a fork")
            while not self.table.is_over():
                _sleep_ms(0.1)

    def run(self) -> None:
        """The philosopher's life: eat, sleep, think until done or someone dies."""
        settings = self.table.settings
        if settings.count == 1:
            self._alone()
            return
        if self.id % 2 == 0:
            _sleep_ms(settings.eat_time * 0.5)
        while True:
            self.eat()
            if settings.must_eat is not None and self.meals() >= settings.must_eat:
                break
            if self.table.is_over():
                break
            self.table.log(self.id, "is sleeping")
            _sleep_ms(settings.sleep_time)
            if self.table.is_over():
                break
            self.think()


class Table:
    """Shared state of a simulation: forks, the death flag and the output."""

    def __init__(self, settings: Settings, out: TextIO) -> None:
        self.settings = settings
        self.out = out
        self.start_time = now_ms()
        self._dead = False
        self._print_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self.forks: List[threading.Lock] = [
            threading.Lock() for _ in range(settings.count)
        ]
        self.philosophers: List[Philosopher] = [
            Philosopher(self, index) for index in range(settings.count)
        ]

    def _elapsed(self, when: int) -> int:
        return max(when - self.start_time, 0)

    def log(self, philosopher_id: int, message: str) -> None:
        """Print a timestamped status line unless the simulation is over."""
        with self._print_lock, self._state_lock:
            if not self._dead:
                stamp = self._elapsed(now_ms())
                print(f"{stamp} {philosopher_id} {message}", file=self.out, flush=True)

    def is_over(self) -> bool:
        """Whether a philosopher has died."""
        with self._state_lock:
            return self._dead

    def announce_death(self, index: int, now: int) -> bool:
        """Declare philosopher ``index`` dead if it starved by ``now``."""
        last = self.philosophers[index].last_meal()
        if now >= last and now - last > self.settings.die_time:
            with self._print_lock, self._state_lock:
                self._dead = True
                stamp = self._elapsed(now)
                print(f"{stamp} {index + 1} died", file=self.out, flush=True)
            return True
        return False

    def all_fed(self) -> bool:
        """Whether every philosopher has eaten the required number of meals."""
        must_eat = self.settings.must_eat
        if must_eat is None:
            return False
        return all(p.meals() >= must_eat for p in self.philosophers)

    def monitor(self) -> None:
        """Watch the philosophers until one dies or all are fed."""
        _sleep_ms(1)
        while True:
            moment = now_ms()
            for index in range(len(self.philosophers)):
                if self.announce_death(index, moment):
                    return
            if self.all_fed():
                return
            _sleep_ms(0.5)

    def run(self) -> None:
        """Run the whole simulation and wait for it to finish."""
        self.start_time = now_ms()
        for philosopher in self.philosophers:
            philosopher._stamp(self.start_time)
        threads = [
            threading.Thread(target=p.run, name=f"philosopher-{p.id}")
            for p in self.philosophers
        ]
        for thread in threads:
            thread.start()
        watcher = threading.Thread(target=self.monitor, name="monitor")
        watcher.start()
        watcher.join()
        for thread in threads:
            thread.join()