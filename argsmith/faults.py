"""
Argsmith faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- ArgumentError / ArgumentWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

Taxonomy
- ArgumentError
  • UnknownArgumentError: a '-x' or '--name' token matches no declaration.
  • ParseError: an option has no value left, or a flag was given '=value'.
  • ValidationError: a validator rejected a value, a flag/value contract was
    broken by the declaring code, or a strict getter could not convert.
  • MissingArgumentError: a required declaration is still unset after parsing.
  • ArgumentNotFoundError: a strict getter was asked for an undeclared name.
- ArgumentWarning
  • DuplicateNameWarning: a declaration overwrote an existing lookup name.

Integration
- The parser builds faults with position-first messages and calls trigger(fault, **ctx).
- In non-shell mode, errors are raised and warnings go through warnings.warn;
  in shell mode, both are rendered via rich on stderr and errors exit with status 1.
"""
import copy
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - switches and values (111xx)
      • UNKNOWN_ARGUMENT, FLAG_ASSIGNMENT, MISSING_VALUE, INVALID_VALUE,
        MISSING_ARGUMENT, UNCONVERTIBLE_VALUE
    - declaration contracts (1113x / 1114x)
      • KIND_MISMATCH, ARGUMENT_NOT_FOUND
    - warnings (12xxx)
      • DUPLICATED_NAME
    """
    # --- switch/value errors (11xxx) ---
    UNKNOWN_ARGUMENT    = 11112
    FLAG_ASSIGNMENT     = 11113
    MISSING_VALUE       = 11117
    INVALID_VALUE       = 11124
    MISSING_ARGUMENT    = 11125
    UNCONVERTIBLE_VALUE = 11126

    # --- declaration contract errors (11xxx) ---
    KIND_MISMATCH       = 11131
    ARGUMENT_NOT_FOUND  = 11141

    # --- warnings (12xxx) ---
    DUPLICATED_NAME     = 12115

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", fault.options.get("prog") or "argsmith"), styler("prog-name"))

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(fault.code.normalize(), styler("code")),
        " | ",
        text(fault.title.title(), styler("title")),
        " ]"
    )
    message = text(coalesce(fault.message, ""), styler("message"))
    renders = [message]
    if hint := fault.options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fault.options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class ArgumentError(Exception):
    """
    Base of every error raised while declaring, parsing or querying arguments.

    The first positional parameter is the human message; every other piece of
    context travels as keyword options (title, code, hint, token, index,
    argument, prog, shell, fancy, colorful) and is kept read-only.
    """
    __fault__ = {"title": "argument error", "code": FaultCode.INVALID_VALUE}

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(type(self).__fault__ | options)

    @property
    def code(self):
        return self.options["code"]

    @property
    def title(self):
        return self.options["title"]

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownArgumentError(ArgumentError):
    __fault__ = {"title": "unknown argument", "code": FaultCode.UNKNOWN_ARGUMENT}


class ParseError(ArgumentError):
    __fault__ = {"title": "missing value", "code": FaultCode.MISSING_VALUE}


class ValidationError(ArgumentError):
    __fault__ = {"title": "invalid value", "code": FaultCode.INVALID_VALUE}


class MissingArgumentError(ArgumentError):
    __fault__ = {"title": "missing required argument", "code": FaultCode.MISSING_ARGUMENT}


class ArgumentNotFoundError(ArgumentError):
    __fault__ = {"title": "argument not found", "code": FaultCode.ARGUMENT_NOT_FOUND}


class ArgumentWarning(UserWarning):
    """
    Base of non-fatal declaration issues; same options contract as ArgumentError.
    """
    __fault__ = {"title": "argument warning", "code": FaultCode.DUPLICATED_NAME}

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(type(self).__fault__ | options)

    @property
    def code(self):
        return self.options["code"]

    @property
    def title(self):
        return self.options["title"]

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateNameWarning(ArgumentWarning):
    __fault__ = {"title": "duplicated name", "code": FaultCode.DUPLICATED_NAME}


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, errors are
      raised and warnings are emitted through the warnings module.

    typical options
    - prog, shell, fancy, colorful, title, code, hint, and any other context the
      reporter may want to show (e.g., token/index/argument).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgumentError",
    "UnknownArgumentError",
    "ParseError",
    "ValidationError",
    "MissingArgumentError",
    "ArgumentNotFoundError",
    "ArgumentWarning",
    "DuplicateNameWarning",
    "trigger",
)
