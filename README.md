# philosophers

A simulation of the dining philosophers problem. Each philosopher runs in its
own thread and takes the two forks on either side of it. It then eats, sleeps
and thinks. A monitor thread watches for starvation.

## Installation

```
pip install .
```

## Usage

```
philo NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MEALS_REQUIRED]
```

You can also start it with `python -m philosophers.cli` and the same arguments.

All times are in milliseconds. Each argument must be written in plain digits,
with no sign and no spaces. It may be at most 10 digits long, and its value must
be between 1 and 2147483647. When the arguments are wrong, `philo` prints
`Error` and exits with status 1.

Each event is printed as one line. A line holds the milliseconds since the
start, the philosopher's number (counting from 1) and the event:

```
0 1 has taken a fork
0 1 has taken a fork
0 1 is eating
200 1 is sleeping
```

The possible events are `has taken a fork`, `is eating`, `is sleeping`,
`is thinking` and `died`. The `is thinking` line only appears when the number
of philosophers is odd. The simulation stops at the first death, which is
printed as `<time> <id> died`. After that line nothing more is printed. When
`MEALS_REQUIRED` is given, the simulation also stops once every philosopher
has eaten that many times.

A lone philosopher has only one fork. It takes that fork and waits until it
starves.

Examples:

```
philo 5 800 200 200
philo 4 410 200 200 7
philo 1 800 200 200
```

## Library use

`philosophers.args.parse_args` turns a list of command-line words into a
`Settings` object. The list must leave out the program name. When the words
are not valid, it raises `ArgumentError`, which is a subclass of `ValueError`.

`philosophers.table.Table` runs a simulation for those settings and writes
the log to any text stream:

```python
import io
from philosophers.args import parse_args
from philosophers.table import Table

out = io.StringIO()
Table(parse_args(["4", "410", "200", "200", "3"]), out).run()
print(out.getvalue())
```

## Running the tests

```
pip install .[test]
pytest
```