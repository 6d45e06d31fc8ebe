"""mkey value objects — Integer, Text, Composite.

Each object encodes itself once, at construction, and keeps the bytes.
Equality and ordering work on those cached bytes, so sorting a list of
keys never decodes anything.  Integer and Text hash like the native value
they wrap, since they compare equal to it.

Scalars and composites share one order.  The sort key is
``(encoded, rank)`` with scalars ranked before composites, which puts a
bare scalar ahead of a composite whose first component equals it:

    Text("users") < Composite("users") < Composite("users", 1)
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

from ._composite import join_encoded, split_encoded
from ._constants import INT64_MAX, INT64_MIN
from ._core import (
    KIND_INTEGER,
    Native,
    classify_native,
    decode_scalar,
    integer_from_native,
    text_from_native,
)
from ._errors import ERR_EMPTY_KEY, ERR_NESTED, ERR_TYPE, MKeyError
from ._integer import encode_integer
from ._text import encode_text, to_utf8


def _comparable(other: Any) -> Optional["_Key"]:
    """Wrap a native int or str so it orders among value objects."""
    if isinstance(other, _Key):
        return other
    if isinstance(other, bool):
        return None
    if isinstance(other, int):
        return Integer(other)
    if isinstance(other, str):
        return Text(other)
    return None


def _out_of_range(other: Any) -> bool:
    return (isinstance(other, int) and not isinstance(other, bool)
            and not INT64_MIN <= other <= INT64_MAX)


class _Key:
    """Shared ordering and immutability for every value object.

    Native ints and strs compare as the Integer or Text they would
    become.  Ordering against an int outside int64 raises ERR_RANGE.
    """

    __slots__ = ()
    _rank = 0

    encoded: bytes

    def _sort_key(self) -> Tuple[bytes, int]:
        return (self.encoded, self._rank)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("{} is immutable".format(type(self).__name__))

    def __delattr__(self, name: str) -> None:
        raise AttributeError("{} is immutable".format(type(self).__name__))

    def __bytes__(self) -> bytes:
        return self.encoded

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __eq__(self, other: object) -> bool:
        if _out_of_range(other):
            return False
        k = _comparable(other)
        if k is None:
            return NotImplemented
        return self._sort_key() == k._sort_key()

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        if eq is NotImplemented:
            return NotImplemented
        return not eq

    def __lt__(self, other: object) -> bool:
        k = _comparable(other)
        if k is None:
            return NotImplemented
        return self._sort_key() < k._sort_key()

    def __le__(self, other: object) -> bool:
        k = _comparable(other)
        if k is None:
            return NotImplemented
        return self._sort_key() <= k._sort_key()

    def __gt__(self, other: object) -> bool:
        k = _comparable(other)
        if k is None:
            return NotImplemented
        return self._sort_key() > k._sort_key()

    def __ge__(self, other: object) -> bool:
        k = _comparable(other)
        if k is None:
            return NotImplemented
        return self._sort_key() >= k._sort_key()


def _operand(other: Any) -> Any:
    if isinstance(other, Integer):
        return other.value
    if isinstance(other, bool) or not isinstance(other, (int, float)):
        return NotImplemented
    return other


class Integer(_Key):
    """A signed int64 subscript.

    Accepts an int, a finite float (truncated toward zero), a numeric
    literal string ("42", "007", "3.14"), or another Integer.  Arithmetic
    returns a new Integer and raises ERR_RANGE when the result leaves
    int64.
    """

    __slots__ = ("value", "encoded")

    value: int

    def __init__(self, value: Any) -> None:
        n = value.value if isinstance(value, Integer) else integer_from_native(value)
        object.__setattr__(self, "value", n)
        object.__setattr__(self, "encoded", encode_integer(n))

    def __reduce__(self) -> Tuple[Any, ...]:
        return (Integer, (self.value,))

    # Equal to the matching native int, so hash like it.
    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __float__(self) -> float:
        return float(self.value)

    def __add__(self, other: Any) -> "Integer":
        x = _operand(other)
        if x is NotImplemented:
            return NotImplemented
        return Integer(self.value + x)

    __radd__ = __add__

    def __sub__(self, other: Any) -> "Integer":
        x = _operand(other)
        if x is NotImplemented:
            return NotImplemented
        return Integer(self.value - x)

    def __rsub__(self, other: Any) -> "Integer":
        x = _operand(other)
        if x is NotImplemented:
            return NotImplemented
        return Integer(x - self.value)

    def __mul__(self, other: Any) -> "Integer":
        x = _operand(other)
        if x is NotImplemented:
            return NotImplemented
        return Integer(self.value * x)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> "Integer":
        """Divide, truncating toward zero like float construction does."""
        x = _operand(other)
        if x is NotImplemented:
            return NotImplemented
        if isinstance(x, float):
            return Integer(self.value / x)
        q = abs(self.value) // abs(x)
        return Integer(-q if (self.value < 0) != (x < 0) else q)

    def __floordiv__(self, other: Any) -> "Integer":
        x = _operand(other)
        if x is NotImplemented:
            return NotImplemented
        return Integer(self.value // x)

    def __mod__(self, other: Any) -> "Integer":
        x = _operand(other)
        if x is NotImplemented:
            return NotImplemented
        return Integer(self.value % x)

    def __pow__(self, other: Any) -> "Integer":
        x = _operand(other)
        if x is NotImplemented:
            return NotImplemented
        return Integer(self.value ** x)

    def __neg__(self) -> "Integer":
        return Integer(-self.value)

    def __pos__(self) -> "Integer":
        return self

    def __abs__(self) -> "Integer":
        return Integer(abs(self.value))

    def __round__(self, ndigits: Optional[int] = None) -> "Integer":
        if ndigits is None:
            return self
        return Integer(round(self.value, ndigits))

    @property
    def is_negative(self) -> bool:
        return self.value < 0

    @property
    def is_positive(self) -> bool:
        return self.value > 0

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    def __repr__(self) -> str:
        return "Integer({!r})".format(self.value)


class Text(_Key):
    """A text subscript.  Accepts str, UTF-8 bytes, None (empty) or Text."""

    __slots__ = ("value", "encoded")

    value: str

    def __init__(self, value: Any = "") -> None:
        s = value.value if isinstance(value, Text) else text_from_native(value)
        object.__setattr__(self, "value", s)
        object.__setattr__(self, "encoded", encode_text(to_utf8(s)))

    def __reduce__(self) -> Tuple[Any, ...]:
        return (Text, (self.value,))

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        return len(self.value)

    def __repr__(self) -> str:
        return "Text({!r})".format(self.value)


Scalar = Union[Integer, Text]


def _wrap(kind: str, v: Native) -> Scalar:
    return Integer(v) if kind == KIND_INTEGER else Text(v)


def scalar(value: Any) -> Scalar:
    """Wrap a native value without the subscript convention.

    ``scalar("42")`` is Text.  Use :func:`subscript` to get Integer(42).
    """
    if isinstance(value, (Integer, Text)):
        return value
    if isinstance(value, Composite):
        raise MKeyError(ERR_TYPE, "a composite key is not a scalar")
    return _wrap(*classify_native(value))


def subscript(value: Any) -> Scalar:
    """Wrap a native value as a key component.

    Integer-literal strings become Integer, None becomes empty Text, and a
    Composite is rejected.
    """
    if isinstance(value, (Integer, Text)):
        return value
    if isinstance(value, Composite):
        raise MKeyError(ERR_NESTED, "cannot nest composite keys")
    return _wrap(*classify_native(value, subscript=True))


def from_encoded(buf: bytes, lenient: bool = False) -> Scalar:
    """Decode one scalar encoding to an Integer or Text."""
    v = decode_scalar(buf, lenient)
    if isinstance(v, int):
        return Integer(v)
    return Text(v)


class Composite(_Key):
    """An ordered, non-empty tuple of scalar subscripts."""

    __slots__ = ("components", "encoded")
    _rank = 1

    components: Tuple[Scalar, ...]

    def __init__(self, *components: Any) -> None:
        if not components:
            raise MKeyError(ERR_EMPTY_KEY, "composite key requires at least one component")
        parts = tuple(subscript(c) for c in components)
        object.__setattr__(self, "components", parts)
        object.__setattr__(self, "encoded", join_encoded([p.encoded for p in parts]))

    def __reduce__(self) -> Tuple[Any, ...]:
        return (Composite, self.components)

    @classmethod
    def decode(cls, buf: bytes, lenient: bool = False) -> "Composite":
        return cls(*[from_encoded(run, lenient) for run in split_encoded(buf, lenient)])

    def to_list(self) -> List[Native]:
        return [c.value for c in self.components]

    def __len__(self) -> int:
        return len(self.components)

    def __getitem__(self, index: int) -> Scalar:
        return self.components[index]

    def __iter__(self) -> Iterator[Scalar]:
        return iter(self.components)

    def __repr__(self) -> str:
        return "Composite({})".format(", ".join(repr(v) for v in self.to_list()))


def key(*values: Any) -> Union[Scalar, Composite]:
    """Build a key: one value gives a scalar, several give a Composite.

        >>> key(42)
        Integer(42)
        >>> key("users", "7")
        Composite('users', 7)
    """
    if not values:
        raise MKeyError(ERR_EMPTY_KEY, "key() requires at least one value")
    if len(values) == 1:
        if isinstance(values[0], Composite):
            return values[0]
        return subscript(values[0])
    return Composite(*values)


# ── Functional API ───────────────────────────────────────────

def encode_scalar(value: Any) -> bytes:
    """Encode one int, float, str, bytes, None, Integer or Text."""
    return scalar(value).encoded


def encode_composite(values: Sequence[Any]) -> bytes:
    """Encode an ordered sequence of components as one key."""
    if isinstance(values, Composite):
        return values.encoded
    if isinstance(values, (str, bytes, bytearray, memoryview)):
        raise MKeyError(ERR_TYPE, "components must be a sequence, not {}".format(
            type(values).__name__))
    return Composite(*values).encoded
