# fendcalc

`fendcalc` holds the building blocks of a unit-aware calculator. The modules are:

- `fendcalc.errors` holds `FendError`, the exception raised for every lexing,
  parsing and calculation failure. Its `kind` names the error and `str()`
  gives the message. The module also has the `Interrupt` base class with
  its `Never` implementation, `test_int()`, and `Range` / `RangeBound` with
  `out_of_range()` for the messages about out-of-range values.
- `fendcalc.ident` holds `Ident`, an identifier. It prints underscores as
  spaces unless the name starts with an underscore.
- `fendcalc.results` holds `Context`, `FendResult`, `Span`, `SpanKind` and
  `CurrentTimeInfo`, which describe a calculation's settings and its output.
  `get_version()` returns the version string.
- `fendcalc.dates` is a proleptic Gregorian calendar with `Year`, `Month`,
  `Day`, `DayOfWeek` and `Date`. It parses `YYYY-MM-DD` dates with
  `parse_date()` or `Date.parse()`. It works out the day of the week, steps
  forwards and backwards with `next()` and `prev()`, and adds whole days
  with `add_days()`.
- `fendcalc.numlex` reads number literals with `parse_number()`. It handles
  base prefixes (`0x`, `0o`, `0b`, `36#...`), digit separators (`_` and `,`),
  decimals, recurring digits such as `0.(3)`, exponents and dice such as
  `4d6`. Exact values come back as `fractions.Fraction` and dice as `Dice`,
  both wrapped in a `LexedNumber`.
- `fendcalc.lexer` turns an expression into `Token`s through `lex()` or
  `Lexer`. A token is a number, an identifier, a `Symbol`, whitespace or a
  string literal. String literals may use escape sequences and may be raw
  (`#"..."#`).
- `fendcalc.colors` and `fendcalc.config` hold the terminal settings, read
  from a TOML configuration file, and the ANSI output colours.
- `fendcalc.paths` says where the configuration and history files live.
- `fendcalc.cli` turns command-line arguments into an `ArgsAction` with
  `parse_args()`. It also has `print_spans()` for coloured output,
  `print_help()`, and `register_handler()`, which installs a Ctrl-C handler
  and returns a `CtrlC` interrupt.

The package needs Python 3.11 or later and has no runtime dependencies.

## Dates

```python
from fendcalc.dates import Date

date = Date.parse("2021-04-14")
print(date)              # Wednesday, 14 April 2021
print(date.next())       # Thursday, 15 April 2021
print(date.add_days(30))
```

Years before 1000 and invalid dates such as `2021-02-29` raise
`fendcalc.errors.FendError`.

## Lexing

```python
from fendcalc.errors import Never
from fendcalc.lexer import lex

for token in lex("0x1f + 2.5 kg to lbs", Never()):
    print(token.kind, token.value)
```

The words `to`, `as` and `in` become `Symbol.UNIT_CONVERSION`, `per` becomes
`Symbol.DIV`, and `of` and `mod` become symbols of their own. A lexing
error raises `FendError`. One example is an unterminated string literal.

## Command-line arguments

```python
from fendcalc.cli import ActionKind, parse_args

action = parse_args(["1", "+", "1"])
assert action.kind is ActionKind.EVAL and action.expression == "1 + 1"
```

`help`, `--help` and `-h` always choose `ActionKind.HELP`.
`--version`, `-v` and `-V` choose `ActionKind.VERSION` unless help is also
asked for. `--default-config` chooses `ActionKind.DEFAULT_CONFIG`. Blank
arguments are ignored. With no arguments the result is `ActionKind.REPL`.

## Configuration

`fendcalc.config.read()` loads `config.toml` from the configuration
directory. If the file is missing or unreadable, it returns the defaults. If
the file is invalid, it prints the error on standard error and also returns
the defaults. `Config.from_toml()` parses a configuration given as text and
raises `ConfigError` if the text is invalid:

```python
from fendcalc.config import Config

config = Config.from_toml('prompt = "=> "\nenable-colors = "never"\n')
print(config.prompt)
```

The recognised settings are:

- `prompt`
- `enable-colors` (alias `color`): `never`, `auto` or `always`, or a boolean
- `coulomb-and-farad`
- `colors`, a table of styles with `foreground`, `underline` and `bold`
- `max-history-size`
- `unknown-settings`: `warn` or `ignore`

With `auto`, colours are used unless `NO_COLOR` is set. `CLICOLOR_FORCE`
turns them on. Otherwise they are used when standard output is a terminal and
`CLICOLOR` is not `0`. When `unknown-settings` is `warn`, `read()` prints
warnings on standard error about unknown keys and unknown colour names.

The configuration directory comes from the first of these that applies:

1. `FEND_CONFIG_DIR`
2. `XDG_CONFIG_HOME/fend`
3. `~/.config/fend`

The history directory comes from the first of these that applies:

1. `FEND_STATE_DIR`
2. `XDG_STATE_HOME/fend`
3. `~/.local/state/fend`

`get_history_file_location()` creates the history directory.

## What this package does not do

The package does not evaluate expressions. There is no parser from tokens to
an expression tree, no unit database and no arithmetic on values. `Context`
and `FendResult` describe settings and output but nothing produces results
from input. There is also no interactive prompt and no installed command.
`parse_args()` only decides which action the arguments ask for.
`Context.set_current_time_v1()` leaves the current time unset, so
`Date.today()` raises `FendError`.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.