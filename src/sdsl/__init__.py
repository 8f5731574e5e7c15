"""
SDSL parsing library.

Parses SDSL documents into ordered dictionaries, lists and scalars. Keys are
introduced with ``$``, values are strings, integers or floats, and structure
nests through ``( ... )`` objects and ``[ ... ]`` arrays.

Parsing is a single forward pass: every character is classified into a small
symbol alphabet and the same state machine both accumulates the current token
and maintains the stack of open containers.
"""

import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import IO
from typing import Any
from typing import TypeAlias

__version__ = "0.1.0"

# Type aliases for domain concepts - recursive definition
SdslValue = str | int | float | dict[str, "SdslValue"] | list["SdslValue"]
SdslDocument = dict[str, SdslValue]
Position: TypeAlias = int

# Coercion hooks can return custom types (e.g. decimal.Decimal)
ParseIntHook = Callable[[str], Any] | None
ParseFloatHook = Callable[[str], Any] | None

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "SDSL_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during parsing."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        """Records a call with its timing and characters processed."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, chars: int = 0) -> None:
            self.func_name = func_name
            self.chars = chars
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            stats = _hot_path_stats.setdefault(
                self.func_name, HotPathStats(self.func_name)
            )
            stats.record_call(duration, self.chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:
    # Zero-cost in production - arguments are ignored
    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, chars: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class Symbol(Enum):
    """Input alphabet: every character maps to exactly one symbol."""

    KEY_SIGIL = "key_sigil"
    LETTER = "letter"
    DIGIT = "digit"
    UNDERSCORE = "underscore"
    SPACE = "space"
    END_LINE = "end_line"
    PAREN = "paren"
    BRACKET = "bracket"
    COMMA = "comma"
    DOT = "dot"
    IGNORED = "ignored"


_FIXED_SYMBOLS: dict[str, Symbol] = {
    "$": Symbol.KEY_SIGIL,
    "[": Symbol.BRACKET,
    "]": Symbol.BRACKET,
    "(": Symbol.PAREN,
    ")": Symbol.PAREN,
    "\n": Symbol.END_LINE,
    ",": Symbol.COMMA,
    " ": Symbol.SPACE,
    ".": Symbol.DOT,
    "_": Symbol.UNDERSCORE,
}


def classify_symbol(char: str) -> Symbol:
    """
    Maps a single character to its symbol class.

    Only ASCII digits and letters are recognised; everything outside the
    fixed punctuation table is IGNORED.
    """
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")

    symbol = _FIXED_SYMBOLS.get(char)
    if symbol is not None:
        return symbol
    if "0" <= char <= "9":
        return Symbol.DIGIT
    if "A" <= char <= "Z" or "a" <= char <= "z":
        return Symbol.LETTER
    return Symbol.IGNORED


class ScanState(Enum):
    """
    Token-accumulation modes of the parser.

    The state says what the next character continues or starts; which
    container it lands in is decided by the frame stack.
    """

    BUILDING_KEY = "building_key"
    DEFINING_TYPE = "defining_type"
    READING_STRING = "reading_string"
    READING_NUMBER = "reading_number"
    BUILDING_OBJECT = "building_object"
    BUILDING_ARRAY = "building_array"
    SWITCHING_LINE = "switching_line"


class ValueType(Enum):
    """Scalar kind declared by the first character of a value."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"


# States in which a letter or digit starts a new scalar
_VALUE_START_STATES = frozenset(
    {
        ScanState.DEFINING_TYPE,
        ScanState.BUILDING_ARRAY,
        ScanState.SWITCHING_LINE,
    }
)


class SDSLDecodeError(ValueError):
    """
    Handles SDSL parsing failures with position and context information.

    Carries the offending character offset along with line and column
    numbers so callers can point at the exact spot in the document.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Compute line and column numbers from position
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.msg, self.doc, self.pos)


class InvalidKeyNameError(SDSLDecodeError):
    """A key name contains a digit or punctuation."""


class StructuralError(SDSLDecodeError):
    """Unbalanced or misplaced object/array markers, or misplaced values."""


class TypeCoercionError(SDSLDecodeError):
    """Accumulated characters do not form a value of the declared type."""


@dataclass
class ObjectFrame:
    """
    An open mapping on the nesting stack.

    Implicit frames are the objects opened by ``$`` directly inside an
    array; they close on the next ``,`` or on the array's ``]``.
    """

    container: dict[str, SdslValue]
    implicit: bool = False


@dataclass
class ArrayFrame:
    """An open list on the nesting stack."""

    container: list[SdslValue]


Frame: TypeAlias = ObjectFrame | ArrayFrame


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures SDSL parsing behavior with immutable settings.

    Holds the scalar coercion hooks and the optional nesting limit.
    """

    parse_int: ParseIntHook = None
    parse_float: ParseFloatHook = None
    max_depth: int | None = None

    def __post_init__(self) -> None:
        if self.max_depth is None:
            return
        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer or None")
        if self.max_depth < 1:
            raise ValueError("max_depth must be a positive integer")


class SdslParser:
    """
    Single-pass state machine parser for SDSL.

    Each character is classified and dispatched to one handler. Handlers
    accumulate key and value text, commit finished values into the innermost
    open container, and push or pop container frames. One instance parses
    one document.
    """

    def __init__(self, text: str, config: ParseConfig | None = None) -> None:
        self.text = text
        self.config = config or ParseConfig()
        self.pos: Position = 0

        self.state = ScanState.BUILDING_KEY
        self.key: list[str] = []
        self.value: list[str] = []
        self.value_type: ValueType | None = None
        self.value_start: Position = 0

        self.result: SdslDocument = {}
        self.frames: list[Frame] = [ObjectFrame(self.result)]
        self._parsed = False

        self._handlers: dict[Symbol, Callable[[str], None]] = {
            Symbol.KEY_SIGIL: self._on_key_sigil,
            Symbol.LETTER: self._on_letter,
            Symbol.DIGIT: self._on_digit,
            Symbol.UNDERSCORE: self._on_underscore,
            Symbol.SPACE: self._on_space,
            Symbol.END_LINE: self._on_end_line,
            Symbol.PAREN: self._on_paren,
            Symbol.BRACKET: self._on_bracket,
            Symbol.COMMA: self._on_comma,
            Symbol.DOT: self._on_dot,
            Symbol.IGNORED: self._on_ignored,
        }

    @property
    def depth(self) -> int:
        """Number of containers currently open below the root."""
        return len(self.frames) - 1

    def parse(self) -> SdslDocument:
        """Consumes the whole text and returns the root mapping."""
        if self._parsed:
            raise RuntimeError("SdslParser instances parse exactly once")
        self._parsed = True

        with ProfileContext("parse", len(self.text)):
            try:
                for pos, char in enumerate(self.text):
                    self.pos = pos
                    self._handlers[classify_symbol(char)](char)
                self.pos = len(self.text)
                self._finish()
            except SDSLDecodeError:
                self._discard()
                raise

        return self.result

    def _error(
        self, error_cls: type[SDSLDecodeError], msg: str, pos: Position = -1
    ) -> SDSLDecodeError:
        return error_cls(msg, self.text, self.pos if pos < 0 else pos)

    def _discard(self) -> None:
        """Drops all working state and the partially built tree."""
        self.frames = []
        self.key = []
        self.value = []
        self.value_type = None
        self.result = {}

    def _key_in_progress(self) -> bool:
        return self.state is ScanState.BUILDING_KEY and bool(self.key)

    def _check_dangling_key(self) -> None:
        if self.key:
            raise self._error(
                StructuralError,
                f"Expecting a value for key {''.join(self.key)!r}",
            )

    # Value buffer

    def _start_value(self, value_type: ValueType, char: str) -> None:
        self.value_type = value_type
        self.value = [char]
        self.value_start = self.pos
        if value_type is ValueType.STRING:
            self.state = ScanState.READING_STRING
        else:
            self.state = ScanState.READING_NUMBER

    def _coerce(self, value_type: ValueType, text: str) -> SdslValue:
        """Converts accumulated text to its declared scalar type."""
        if value_type is ValueType.STRING:
            return text

        try:
            if value_type is ValueType.FLOAT:
                if self.config.parse_float:
                    return self.config.parse_float(text)
                return float(text)
            if self.config.parse_int:
                return self.config.parse_int(text)
            return int(text)
        except (ValueError, ArithmeticError) as e:
            raise self._error(
                TypeCoercionError,
                f"Invalid {value_type.value} value {text!r}",
                self.value_start,
            ) from e

    def _insert(self, value: SdslValue) -> None:
        """Stores a value under the pending key or appends it to an array."""
        frame = self.frames[-1]
        if self.key:
            if not isinstance(frame, ObjectFrame):
                raise self._error(
                    StructuralError, "Keyed value inside an array"
                )
            frame.container["".join(self.key)] = value
            self.key = []
        elif isinstance(frame, ArrayFrame):
            frame.container.append(value)
        else:
            raise self._error(
                StructuralError, "Value without a key outside an array"
            )

    def _commit_value(self) -> None:
        """Coerces the pending value, if any, into the current container."""
        if self.value_type is None:
            return
        with ProfileContext("commit_value", len(self.value)):
            value = self._coerce(self.value_type, "".join(self.value))
            self._insert(value)
            self.value = []
            self.value_type = None

    # Frame stack

    def _push(self, frame: Frame) -> None:
        max_depth = self.config.max_depth
        if max_depth is not None and self.depth >= max_depth:
            raise self._error(
                StructuralError,
                f"Maximum nesting depth of {max_depth} exceeded",
            )
        self.frames.append(frame)

    def _open_object(self, implicit: bool = False) -> None:
        with ProfileContext("open_container"):
            container: dict[str, SdslValue] = {}
            self._insert(container)
            self._push(ObjectFrame(container, implicit))
            if not implicit:
                self.state = ScanState.BUILDING_OBJECT

    def _open_array(self) -> None:
        with ProfileContext("open_container"):
            container: list[SdslValue] = []
            self._insert(container)
            self._push(ArrayFrame(container))
            self.state = ScanState.BUILDING_ARRAY

    def _close_implicit_object(self) -> None:
        frame = self.frames[-1]
        if isinstance(frame, ObjectFrame) and frame.implicit:
            self.frames.pop()

    def _close_frame(self) -> None:
        with ProfileContext("close_container"):
            self.frames.pop()
            self.state = ScanState.SWITCHING_LINE

    # Symbol handlers

    def _on_key_sigil(self, char: str) -> None:
        self._commit_value()
        self._check_dangling_key()
        self.state = ScanState.BUILDING_KEY

        # "$" directly inside an array starts an object element
        if isinstance(self.frames[-1], ArrayFrame):
            self._open_object(implicit=True)

    def _on_letter(self, char: str) -> None:
        if self.state is ScanState.BUILDING_KEY:
            self.key.append(char)
        elif self.state in _VALUE_START_STATES:
            self._start_value(ValueType.STRING, char)
        elif self.state is ScanState.READING_STRING:
            self.value.append(char)

    def _on_digit(self, char: str) -> None:
        if self.state is ScanState.BUILDING_KEY:
            raise self._error(
                InvalidKeyNameError, "Key names cannot contain digits"
            )
        if self.state in _VALUE_START_STATES:
            self._start_value(ValueType.INTEGER, char)
        elif self.state is ScanState.READING_NUMBER:
            self.value.append(char)

    def _on_underscore(self, char: str) -> None:
        if self.state is ScanState.BUILDING_KEY:
            self.key.append(char)

    def _on_dot(self, char: str) -> None:
        if self.state is ScanState.BUILDING_KEY:
            raise self._error(
                InvalidKeyNameError, "Key names cannot contain '.'"
            )
        if self.state is ScanState.READING_NUMBER:
            self.value_type = ValueType.FLOAT
            self.value.append(char)

    def _on_ignored(self, char: str) -> None:
        if self.state is not ScanState.BUILDING_KEY:
            return
        if char.isspace():
            # Tabs and carriage returns end a key like a space does
            self._on_space(char)
            return
        raise self._error(
            InvalidKeyNameError, f"Invalid character {char!r} in key name"
        )

    def _on_space(self, char: str) -> None:
        if self.state is ScanState.BUILDING_KEY:
            if self.key:
                self.state = ScanState.DEFINING_TYPE
        elif (
            self.value_type is not None
            and not self.key
            and isinstance(self.frames[-1], ArrayFrame)
        ):
            # Single-line array element separator
            self._commit_value()
            self.state = ScanState.BUILDING_ARRAY

    def _on_end_line(self, char: str) -> None:
        if self.value_type is None:
            self._check_dangling_key()
            return
        self._commit_value()
        self.state = ScanState.SWITCHING_LINE

    def _on_comma(self, char: str) -> None:
        if self._key_in_progress():
            raise self._error(
                InvalidKeyNameError, "Key names cannot contain ','"
            )
        self._commit_value()
        self._check_dangling_key()

        self._close_implicit_object()
        if not isinstance(self.frames[-1], ArrayFrame):
            raise self._error(
                StructuralError, "No open array for ',' separator"
            )
        self.state = ScanState.BUILDING_ARRAY

    def _on_paren(self, char: str) -> None:
        if self._key_in_progress():
            raise self._error(
                InvalidKeyNameError, "Key names cannot contain parentheses"
            )
        if self.state is ScanState.DEFINING_TYPE:
            self._open_object()
            return

        self._commit_value()
        self._check_dangling_key()

        frame = self.frames[-1]
        if isinstance(frame, ArrayFrame):
            # Anonymous object element
            self._open_object()
        elif frame.implicit:
            raise self._error(
                StructuralError, f"Unexpected {char!r} inside array element"
            )
        elif self.depth == 0:
            raise self._error(StructuralError, f"Unmatched {char!r}")
        else:
            self._close_frame()

    def _on_bracket(self, char: str) -> None:
        if self._key_in_progress():
            raise self._error(
                InvalidKeyNameError, "Key names cannot contain brackets"
            )
        if self.state is ScanState.DEFINING_TYPE:
            self._open_array()
            return

        # Trailing element of a single-line array
        self._commit_value()
        self._check_dangling_key()

        self._close_implicit_object()
        if isinstance(self.frames[-1], ArrayFrame):
            self._close_frame()
        elif self.depth == 0:
            raise self._error(StructuralError, f"Unmatched {char!r}")
        else:
            raise self._error(
                StructuralError, f"Mismatched {char!r} closes an object"
            )

    def _finish(self) -> None:
        """Handles end of input: flushes the last value and checks balance."""
        self._commit_value()
        self._check_dangling_key()

        self._close_implicit_object()
        if self.depth > 0:
            frame = self.frames[-1]
            kind = "array" if isinstance(frame, ArrayFrame) else "object"
            raise self._error(
                StructuralError, f"Unclosed {kind} at end of input"
            )


def loads(s: str | bytes | bytearray, **kwargs: Any) -> SdslDocument:
    """
    Parses an SDSL document into a dictionary.

    Bytes are decoded as UTF-8; a leading byte order mark is dropped.
    Keyword arguments populate ParseConfig.
    """
    if isinstance(s, bytes | bytearray):
        try:
            s = bytes(s).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise SDSLDecodeError(
                "SDSL input is not valid UTF-8", "", e.start
            ) from e
    elif not isinstance(s, str):
        raise TypeError(
            f"the SDSL document must be str or bytes, not {type(s).__name__}"
        )
    elif s.startswith("\ufeff"):
        s = s[1:]

    config = ParseConfig(**kwargs)
    return SdslParser(s, config).parse()


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> SdslDocument:
    """
    Parses SDSL from a text or binary file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


from sdsl._reader import InvalidFileExtensionError  # noqa: E402
from sdsl._reader import SdslFile  # noqa: E402

__all__ = [
    "ArrayFrame",
    "HotPathStats",
    "InvalidFileExtensionError",
    "InvalidKeyNameError",
    "ObjectFrame",
    "ParseConfig",
    "SDSLDecodeError",
    "ScanState",
    "SdslDocument",
    "SdslFile",
    "SdslParser",
    "SdslValue",
    "StructuralError",
    "Symbol",
    "TypeCoercionError",
    "ValueType",
    "classify_symbol",
    "clear_hot_path_stats",
    "get_hot_path_stats",
    "load",
    "loads",
]
