r"""
Argsmith argument definitions.

Overview
- ArgumentKind: closed set of shapes an argument can take.
  • FLAG: named, presence-only switch (no payload), e.g., -v/--verbose.
  • OPTION: named, value-bearing option (e.g., -o/--output), stored as raw text.
  • POSITIONAL: unnamed on the command line, bound by position.

- Argument: one declared argument. The kind is a tag fixed at construction, not
  a subclass, so every typed read (get) handles all three shapes in one place.
  • Argument.flag(short, long, descr)
  • Argument.option(short, long, descr, default="")
  • Argument.positional(name, descr, required=False)

Metadata (sanitized on construction)
- short: "" or exactly one character, without the leading '-'.
- long: "" or a name without leading dashes, whitespace or '='.
- name: positional name (non-empty).
- Flags and options need at least one of short/long.

Value state
- is_set/value only change through set_value (options, positionals) and
  set_flag (flags). Repeating a token overwrites the value (last one wins).
- Raw values stay strings; conversion happens on read:
  • str: the raw text as given.
  • int/float: plain ASCII decimal text only (no blanks, "_", inf or nan);
    anything else yields None.
  • bool: a flag answers is_set; others test the text against true/1/yes/on.

Fluent configuration (each call returns the argument)
    name = Argument.option("n", "name", "who to greet").default_value("world").required()
    count = Argument.option("c", "count", "repetitions").validator(str.isdigit)
"""
import enum
import functools
import operator
import re

from .faults import FaultCode, ValidationError
from .utils import *


class ArgumentKind(enum.Enum):
    FLAG = "flag"
    OPTION = "option"
    POSITIONAL = "positional"


_TRUTHY = frozenset({"true", "1", "yes", "on"})

# ASCII only, no surrounding blanks, no digit separators, no inf/nan.
_NUMERIC = {
    int: re.compile(r"[+-]?[0-9]+"),
    float: re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"),
}


def _sanitize_metadata(kind, metadata, /):
    """
    Internal: validate the description shared by every kind.

    Raises
    - TypeError: if 'descr' is not a string.
    """
    if not isinstance(metadata["descr"], str):
        raise TypeError(f"{kind.value} 'descr' must be a string")
    metadata["descr"] = metadata["descr"].strip()


def _sanitize_named_metadata(kind, metadata, /):
    r"""
    Internal: validate short/long names of flags and options.

    Rules
    - both must be strings; surrounding whitespace is trimmed.
    - at least one must be non-empty.
    - short: exactly one character, not '-', not whitespace, not '='.
    - long: matches r"[^\s=-][^\s=]*" (no leading dash, no whitespace, no '=').
    """
    for field in ("short", "long"):
        if not isinstance(metadata[field], str):
            raise TypeError(f"{kind.value} '{field}' name must be a string")
        metadata[field] = metadata[field].strip()

    if not metadata["short"] and not metadata["long"]:
        raise TypeError(f"{kind.value} must specify at least one name")
    if metadata["short"] and not re.fullmatch(r"[^\s=-]", metadata["short"]):
        raise ValueError(f"{kind.value} short name must be a single character without dashes (got {metadata['short']!r})")
    if metadata["long"] and not re.fullmatch(r"[^\s=-][^\s=]*", metadata["long"]):
        raise ValueError(f"{kind.value} long name must not start with '-' nor contain '=' or spaces (got {metadata['long']!r})")


def _sanitize_positional_metadata(kind, metadata, /):
    if not isinstance(metadata["name"], str):
        raise TypeError(f"{kind.value} name must be a string")
    elif not (name := metadata["name"].strip()):
        raise TypeError(f"{kind.value} must specify a name")
    elif name.startswith("-"):
        raise ValueError(f"{kind.value} name cannot start with '-' (got {name!r})")
    metadata["name"] = name


class Argument:
    """
    One declared argument: identity, constraints and current value state.

    Instances are normally created through a Registry (add_flag, add_option,
    add_positional) which owns them; the caller keeps the returned object only
    to configure it further.
    """

    def __init__(self, kind, /, *, short="", long="", name="", descr="", default="", required=False):
        if not isinstance(kind, ArgumentKind):
            raise TypeError("argument kind must be an ArgumentKind")

        metadata = {
            "short": short,
            "long": long,
            "name": name,
            "descr": descr,
        }
        _sanitize_metadata(kind, metadata)
        if kind is ArgumentKind.POSITIONAL:
            _sanitize_positional_metadata(kind, metadata)
        else:
            _sanitize_named_metadata(kind, metadata)

        self._kind = kind
        self._short_name = metadata["short"] if kind is not ArgumentKind.POSITIONAL else ""
        self._long_name = metadata["long"] if kind is not ArgumentKind.POSITIONAL else ""
        self._name = metadata["name"] if kind is ArgumentKind.POSITIONAL else ""
        self._descr = metadata["descr"]
        self._default = ""
        self._value = None
        self._is_required = bool(required)
        self._is_set = False
        self._validator = None

        self.default_value(default)

    @classmethod
    def flag(cls, short, long, descr, /):
        return cls(ArgumentKind.FLAG, short=short, long=long, descr=descr)

    @classmethod
    def option(cls, short, long, descr, default="", /):
        return cls(ArgumentKind.OPTION, short=short, long=long, descr=descr, default=default)

    @classmethod
    def positional(cls, name, descr, required=False, /):
        return cls(ArgumentKind.POSITIONAL, name=name, descr=descr, required=required)

    kind = mirror("kind")
    short_name = mirror("short_name")
    long_name = mirror("long_name")
    name = mirror("name")
    descr = mirror("descr")
    default = mirror("default")
    value = mirror("value")
    is_required = mirror("is_required")
    is_set = mirror("is_set")

    @property
    def identities(self):
        """
        Every lookup key of this argument, in (short, long) or (name,) order.
        """
        if self._kind is ArgumentKind.POSITIONAL:
            return (self._name,)
        return tuple(filter(None, (self._short_name, self._long_name)))

    @property
    def label(self):
        """
        Display form used in messages: the positional name, '--long' or '-s'.
        """
        if self._kind is ArgumentKind.POSITIONAL:
            return self._name
        return "--" + self._long_name if self._long_name else "-" + self._short_name

    def required(self, flag=True, /):
        self._is_required = bool(flag)
        return self

    def default_value(self, value, /):
        """
        Set the default text; numbers and booleans are stored in text form.
        """
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, int | float):
            value = str(value)
        elif not isinstance(value, str):
            raise TypeError(f"{self._kind.value} default must be a string, an integer, a float, or a boolean")
        self._default = value
        return self

    def help(self, descr, /):
        if not isinstance(descr, str):
            raise TypeError(f"{self._kind.value} 'descr' must be a string")
        self._descr = descr.strip()
        return self

    def validator(self, func, /):
        """
        Attach a predicate run on every assigned value.

        func receives the raw text and must return a bool; it should not raise.
        An exception it raises propagates unchanged out of set_value and parse.
        """
        if not callable(func):
            raise TypeError(f"{self._kind.value} validator must be callable")
        self._validator = func
        return self

    def validate(self, value, /):
        return self._validator is None or bool(self._validator(value))

    def set_value(self, value, /):
        if not isinstance(value, str):
            raise TypeError(f"{self._kind.value} value must be a string")

        if self._kind is ArgumentKind.FLAG:
            raise ValidationError(
                "flag %r cannot be assigned a value" % self.label,
                title="flag cannot take a value",
                code=FaultCode.KIND_MISMATCH,
                hint="declare %r with add_option() if it should carry a value" % self.label,
                argument=self,
            )

        if not self.validate(value):
            raise ValidationError(
                "invalid value %r for %s %r" % (value, self._kind.value, self.label),
                title="invalid value",
                code=FaultCode.INVALID_VALUE,
                hint="run with --help to see what %r accepts" % self.label,
                argument=self,
                value=value,
            )

        self._value = value
        self._is_set = True

    def set_flag(self, present=True, /):
        if self._kind is not ArgumentKind.FLAG:
            raise ValidationError(
                "%s %r cannot be set as a flag" % (self._kind.value, self.label),
                title="not a flag",
                code=FaultCode.KIND_MISMATCH,
                hint="assign a value with set_value() instead",
                argument=self,
            )
        self._is_set = bool(present)

    def get(self, type=str, /):
        """
        Read the current value (or the default) converted to 'type'.

        Returns None when there is nothing to read, or when the text is not a
        well-formed int/float; a flag read as bool always answers is_set.
        """
        if type not in (str, int, float, bool):
            raise TypeError("get() type must be one of str, int, float, or bool")

        if type is bool and self._kind is ArgumentKind.FLAG:
            return self._is_set

        if not self._is_set and not self._default:
            return None

        value = self._value if self._is_set else self._default
        if value is None:
            return None

        if type is str:
            return value
        if type is bool:
            return value.lower() in _TRUTHY

        if not _NUMERIC[type].fullmatch(value):
            return None
        return type(value)

    def get_string(self):
        return self.get(str) or ""

    def get_int(self):
        return self._strict(int)

    def get_double(self):
        return self._strict(float)

    def get_bool(self):
        return bool(self.get(bool))

    def _strict(self, type, /):
        if (result := self.get(type)) is not None:
            return result

        if (text := self.get(str)) is None:
            message = "%s %r has no value to convert to %s" % (self._kind.value, self.label, type.__name__)
        else:
            message = "cannot convert %s %r value %r to %s" % (self._kind.value, self.label, text, type.__name__)

        raise ValidationError(
            message,
            title="unconvertible value",
            code=FaultCode.UNCONVERTIBLE_VALUE,
            hint="pass a valid %s for %r" % (type.__name__, self.label),
            argument=self,
        )

    def __rich_repr__(self):
        yield "short", self._short_name
        yield "long", self._long_name
        yield "name", self._name
        yield "descr", self._descr
        yield "default", self._default
        yield "required", self._is_required
        yield "value", self._value
        yield "set", self._is_set

    def __repr__(self):
        return f"{self._kind.value}({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


__all__ = (
    "ArgumentKind",
    "Argument",
)
