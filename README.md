# monkeylang

An interpreter for the Monkey programming language. Monkey is a small,
dynamically typed language with integers, booleans, strings, arrays,
hashes, first-class functions and closures.

## Installing

```
pip install .
```

## The interactive shell

```
monkey
```

The shell prints a greeting and then a `>> ` prompt. Each line you type
is parsed and evaluated on its own, and every line shares one environment.
If a line produces a value, the shell prints it. A `let` statement on its
own prints nothing.

```
>> let add = fn(a, b) { a + b };
>> add(2, 3)
5
>> let newAdder = fn(x) { fn(y) { x + y } };
>> newAdder(2)(2)
4
>> let people = {"name": "Monkey", "age": 1};
>> people["name"]
Monkey
```

When a line does not parse, the shell prints a monkey face and the list of
parser errors, then waits for the next line. Runtime errors come back as
values and print as `ERROR: <message>`, for example
`ERROR: type mismatch: INTEGER + BOOLEAN` or
`ERROR: identifier not found: foobar`. The shell stops at end of input.

## The language

- `let name = expression;` binds a value.
- Integers are signed 64-bit. `+ - *` wrap around on overflow, and `/`
  truncates toward zero. An integer literal with a leading zero is read as
  octal. A literal larger than the 64-bit maximum is a parse error.
- `+` also joins two strings. String literals are written in double quotes
  and have no escape sequences.
- Comparison uses `< > == !=`. The prefix operators are `-` and `!`.
  Integers compare by value. For other values, `==` is true only for the
  same object, such as the shared `true`, `false` and null.
- `if (cond) { ... } else { ... }` is an expression. With no `else` and a
  false condition, it gives null. Null and `false` are falsy, and every
  other value is truthy, `0` included.
- `fn(a, b) { ... }` builds a function that closes over its scope.
  `return` leaves it early. Extra arguments are ignored.
- Arrays are written `[1, 2, 3]` and hashes `{"key": value}`. Both are
  indexed with `[...]`. Hash keys can be integers, booleans or strings. An
  array index out of range, negative ones included, gives null, and so
  does a missing hash key.

The built-in functions are:

| name | does |
|------|------|
| `len(x)` | the number of elements of an array, or of UTF-8 bytes in a string |
| `first(arr)` | the first element, or null for an empty array |
| `last(arr)` | the last element, or null for an empty array |
| `rest(arr)` | a new array without the first element, or null for an empty array |
| `push(arr, x)` | a new array with `x` appended |
| `puts(...)` | prints each argument on its own line and gives null |

A user-defined binding with the same name hides a built-in function.

```
let map = fn(arr, f) {
  let iter = fn(arr, acc) {
    if (len(arr) == 0) { acc } else { iter(rest(arr), push(acc, f(first(arr)))) }
  };
  iter(arr, []);
};
map([1, 2, 3], fn(x) { x * 2 });
```

## Using it from Python

```python
from monkeylang.environment import Environment
from monkeylang.evaluator import evaluate
from monkeylang.parser import parse

env = Environment()
result = evaluate(parse("let x = 5 * 5; x + 1"), env)
print(result.inspect())  # 26
```

- `monkeylang.parser.parse(source)` returns a `Program`. If the source
  does not parse, it raises `ParseError`, and the error's `errors`
  attribute lists every message. You can also build a `Parser(Lexer(source))`
  yourself, call `parse_program()`, and then read `parser.errors`.
- `monkeylang.lexer.Lexer` gives tokens one at a time through
  `next_token()`. Iterating over a lexer yields the remaining tokens, with
  the EOF token last. Tokens are `Token(type, literal)` values with a
  `TokenType` from `monkeylang.token`.
- The syntax tree uses the node classes in `monkeylang.nodes`. `str()` of
  a node gives its fully parenthesised form, for example `((-a) * b)`.
- `evaluate(node, env)` returns a runtime value from `monkeylang.objects`,
  such as `Integer`, `String`, `Array`, `Hash`, `Function` or `Error`. It
  returns `None` for a `let` statement. `inspect()` on a value gives the
  text the shell prints. `is_truthy(obj)` applies the language's truth
  rule.
- `Environment` holds bindings. `enclosed()` makes a nested scope whose
  lookups fall back to the outer one.
- `monkeylang.repl.start(stdin, stdout)` runs the shell over any pair of
  text streams.

## What it does not do

- The `monkey` command reads only standard input, one line at a time. It
  ignores command-line arguments, and it has no way to run a script file.
  A statement cannot span several lines in the shell.
- Some faults are not Monkey error values. Instead, they raise Python
  exceptions that stop the shell. Dividing by zero raises
  `ZeroDivisionError`. Calling a function with fewer arguments than it has
  parameters raises `TypeError`.
- There is no line editing, history or completion in the shell.

## Running the tests

```
pip install ".[test]"
pytest
```