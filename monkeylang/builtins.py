"""Functions every Monkey program can call without defining them."""

from __future__ import annotations

from monkeylang.objects import (
    Array,
    Boolean,
    Builtin,
    Error,
    Integer,
    MonkeyObject,
    Null,
    String,
)

NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)


def _wrong_count(args: tuple[MonkeyObject, ...], want: int) -> Error:
    return Error(f"wrong number of arguments. got={len(args)}, want={want}")


def _array_argument(name: str, arg: MonkeyObject) -> Array | Error:
    if not isinstance(arg, Array):
        return Error(f"argument to `{name}` must be ARRAY, got {arg.type.value}")
    return arg


def builtin_puts(*args: MonkeyObject) -> MonkeyObject:
    """Print each argument on a line of its own and return null."""
    for arg in args:
        print(arg.inspect())
    return NULL


def builtin_len(*args: MonkeyObject) -> MonkeyObject:
    """Return the number of elements of an array or of bytes in a string."""
    if len(args) != 1:
        return _wrong_count(args, 1)
    (arg,) = args
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    if isinstance(arg, String):
        return Integer(len(arg.value.encode("utf-8")))
    return Error(f"argument to `len` not supported, got {arg.type.value}")


def builtin_first(*args: MonkeyObject) -> MonkeyObject:
    """Return the first element of an array, or null if it is empty."""
    if len(args) != 1:
        return _wrong_count(args, 1)
    arr = _array_argument("first", args[0])
    if isinstance(arr, Error):
        return arr
    return arr.elements[0] if arr.elements else NULL


def builtin_last(*args: MonkeyObject) -> MonkeyObject:
    """Return the last element of an array, or null if it is empty."""
    if len(args) != 1:
        return _wrong_count(args, 1)
    arr = _array_argument("last", args[0])
    if isinstance(arr, Error):
        return arr
    return arr.elements[-1] if arr.elements else NULL


def builtin_rest(*args: MonkeyObject) -> MonkeyObject:
    """Return a new array of all but the first element, or null if empty."""
    if len(args) != 1:
        return _wrong_count(args, 1)
    arr = _array_argument("rest", args[0])
    if isinstance(arr, Error):
        return arr
    if not arr.elements:
        return NULL
    return Array(list(arr.elements[1:]))


def builtin_push(*args: MonkeyObject) -> MonkeyObject:
    """Return a new array holding the elements of the first argument and then the second."""
    if len(args) != 2:
        return _wrong_count(args, 2)
    arr = _array_argument("push", args[0])
    if isinstance(arr, Error):
        return arr
    return Array([*arr.elements, args[1]])


BUILTINS: dict[str, Builtin] = {
    "puts": Builtin(builtin_puts),
    "len": Builtin(builtin_len),
    "first": Builtin(builtin_first),
    "last": Builtin(builtin_last),
    "rest": Builtin(builtin_rest),
    "push": Builtin(builtin_push),
}