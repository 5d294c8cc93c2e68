"""
Argsmith parser: the engine that turns raw process arguments into argument state.

What this module provides
- ArgParser: a Registry that also knows how to scan a token list, carries the
  program metadata (prog, descr, version) and renders help.
- Outcome: result of a parse (COMPLETED, or HELP when embedded).

Token grammar (one left-to-right scan with an explicit cursor, no backtracking)
- "-h" / "--help": checked before anything else. Help is printed; the process
  exits with status 0, or parse() returns Outcome.HELP when embedded=True.
- "--name" / "--name=value": long form, split on the first '='.
  • flags take no value; "--flag=..." is a ParseError.
  • options take the inline value, or else the next token.
- "-x" / "-xVALUE": short form, the name is the single character after '-'.
  • flags ignore anything after that character (no "-abc" grouping).
  • options take the attached text, or else the next token.
- anything else (including a lone "-"): a positional value.

After the scan
- positional values bind to declared positionals in declaration order, one
  each; extra values stay in positional_arguments() and are never an error.
- every required declaration must be set, else MissingArgumentError.

Failure policy
- the first fault aborts the parse (raised, or rendered + exit 1 when
  shell=True). Values already assigned during the same call are kept.

Quick start
    from argsmith import ArgParser

    parser = ArgParser("greet", "Say hello.", version="1.0")
    parser.add_flag("v", "verbose", "chatty output")
    parser.add_option("n", "name", "who to greet", "world")
    parser.add_positional("message", "what to say", True)

    parser.parse(["-v", "--name=Ada", "hello"])
    parser.get_string("name")   # 'Ada'
    parser.get("message")       # 'hello'
"""
import difflib
import enum
import os.path
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .arguments import ArgumentKind
from .faults import *
from .formatting import render_help
from .registry import Registry
from .utils import *


class Outcome(enum.IntEnum):
    COMPLETED = 0
    HELP = 1


class ArgParser(Registry):
    """
    Declaration registry plus the parsing engine and help metadata.

    Parameters
    - prog: str
      Program name shown in usage and fault headers. When empty, parse_options()
      takes it from argv[0].
    - descr: str
      Paragraph shown above the usage line.
    - version: str (keyword-only)
      Shown as the last help line when non-empty.
    - embedded: bool (keyword-only)
      Return Outcome.HELP after printing help instead of exiting the process.
    - shell: bool (keyword-only)
      Render faults on stderr and exit with status 1 instead of raising them.
    - fancy: bool (keyword-only)
      Wrap rendered faults in a panel.
    - colorful: bool (keyword-only)
      Style help and faults; False keeps output plain.
    """
    HELP_TOKENS = ("--help", "-h")

    def __init__(self, prog="", descr="", /, *, version="", embedded=False, shell=False, fancy=False, colorful=True):
        super().__init__()
        self.prog = prog
        self.descr = descr
        self.version = version
        self._embedded = bool(embedded)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._positionals = []
        self._tokens = []
        self._index = 0

    embedded = mirror("embedded")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    @property
    def prog(self):
        return self._prog

    @prog.setter
    def prog(self, value):
        if not isinstance(value, str):
            raise TypeError("ArgParser 'prog' must be a string")
        self._prog = value

    @property
    def descr(self):
        return self._descr

    @descr.setter
    def descr(self, value):
        if not isinstance(value, str):
            raise TypeError("ArgParser 'descr' must be a string")
        self._descr = value

    @property
    def version(self):
        return self._version

    @version.setter
    def version(self, value):
        if not isinstance(value, str):
            raise TypeError("ArgParser 'version' must be a string")
        self._version = value

    def trigger(self, fault, /, **options):
        super().trigger(fault, **options, prog=self._prog, shell=self._shell, fancy=self._fancy, colorful=self._colorful)

    def parse_options(self, argv=Unset, /):
        """
        Parse a full argv (program name first), defaulting to sys.argv.
        """
        argv = list(sys.argv if argv is Unset else argv)
        if not self._prog and argv:
            self.prog = os.path.basename(argv[0])
        return self.parse(argv[1:])

    def parse(self, tokens, /):
        """
        Scan tokens, bind positionals, then check required declarations.

        Parameters
        - tokens:
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized arguments, without the program name.

        Returns
        - Outcome.COMPLETED, or Outcome.HELP when help was requested in embedded mode.

        Raises
        - UnknownArgumentError, ParseError, ValidationError, MissingArgumentError
          (unless shell=True, where the fault is rendered and the process exits).
        - TypeError: when tokens is not a string or an iterable of strings.
        """
        if isinstance(tokens, str):
            tokens = shlex.split(tokens)
        elif isinstance(tokens, Iterable):
            tokens = list(tokens)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        self._tokens = tokens
        self._index = 0
        self._positionals.clear()

        while self._index < len(self._tokens):
            token = self._tokens[self._index]

            if token in self.HELP_TOKENS:
                return self._helper()

            if token.startswith("--"):
                self._parse_long(token)
            elif token.startswith("-") and len(token) > 1:
                self._parse_short(token)
            else:
                self._positionals.append(token)
                self._index += 1

        self._bind_positionals()
        self._validate_required()
        return Outcome.COMPLETED

    def _helper(self):
        self.print_help()
        if self._embedded:
            return Outcome.HELP
        sys.exit(0)

    def _resolve(self, name, input, token):
        """
        find the declaration for a switch name, or fail with suggestions.
        """
        if (argument := self.argument(name)) is not None:
            return argument

        spellings = []
        for declared in self._arguments:
            if declared.short_name:
                spellings.append("-" + declared.short_name)
            if declared.long_name:
                spellings.append("--" + declared.long_name)
        suggestions = difflib.get_close_matches(input, spellings, 5)
        try:
            hint = "did you mean %r? you can also run '%s --help' to see all options" % (suggestions[0], self._prog)
        except IndexError:
            hint = "try '%s --help' to see all available options" % self._prog

        self.trigger(UnknownArgumentError(
            "unknown option %r at %s position" % (input, ordinal(self._index + 1)),
            title="unknown option or flag",
            hint=hint,
            token=token,
            input=input,
            index=self._index + 1,
            suggestions=suggestions,
        ))

    def _parse_long(self, token):
        name, separator, value = token[2:].partition("=")
        input = "--" + name
        argument = self._resolve(name, input, token)

        if argument.kind is ArgumentKind.FLAG:
            if separator:
                self.trigger(ParseError(
                    "flag %r at %s position cannot have an inline value" % (input, ordinal(self._index + 1)),
                    title="flag cannot take a value",
                    code=FaultCode.FLAG_ASSIGNMENT,
                    hint="remove everything from '=' (for example: %s)" % input,
                    token=token,
                    input=input,
                    index=self._index + 1,
                    argument=argument,
                ))
            argument.set_flag(True)
            self._index += 1
        elif separator:
            self._assign(argument, value, input)
            self._index += 1
        else:
            self._assign(argument, self._next_value(argument, input), input)
            self._index += 2

    def _parse_short(self, token):
        input = token[:2]
        argument = self._resolve(token[1], input, token)

        if argument.kind is ArgumentKind.FLAG:
            argument.set_flag(True)
            self._index += 1
        elif len(token) > 2:
            self._assign(argument, token[2:], input)
            self._index += 1
        else:
            self._assign(argument, self._next_value(argument, input), input)
            self._index += 2

    def _next_value(self, argument, input):
        if self._index + 1 < len(self._tokens):
            return self._tokens[self._index + 1]

        if input.startswith("--"):
            hint = "pass a value after it (for example: %s <value> or %s=<value>)" % (input, input)
        else:
            hint = "pass a value after it (for example: %s <value> or %s<value>)" % (input, input)
        self.trigger(ParseError(
            "missing value for option %r at %s position" % (input, ordinal(self._index + 1)),
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            hint=hint,
            token=self._tokens[self._index],
            input=input,
            index=self._index + 1,
            argument=argument,
        ))

    def _assign(self, argument, value, input):
        try:
            argument.set_value(value)
        except ValidationError as exception:
            self.trigger(ValidationError(
                "%s at %s position" % (exception.message, ordinal(self._index + 1)),
                **exception.options | {"input": input, "index": self._index + 1},
            ))

    def _bind_positionals(self):
        for argument, value in zip(self.arguments(ArgumentKind.POSITIONAL), self._positionals):
            try:
                argument.set_value(value)
            except ValidationError as exception:
                self.trigger(exception)

    def _validate_required(self):
        for argument in self._arguments:
            if argument.is_required and not argument.is_set:
                if argument.kind is ArgumentKind.POSITIONAL:
                    hint = "pass a value for %r in its position" % argument.label
                elif argument.kind is ArgumentKind.FLAG:
                    hint = "add %r to the command line" % argument.label
                else:
                    hint = "add %s <value> to the command line" % argument.label
                self.trigger(MissingArgumentError(
                    "missing required %s %r" % (argument.kind.value, argument.label),
                    hint=hint,
                    argument=argument,
                ))

    def positional_arguments(self):
        """
        Every positional token of the last parse, bound or not, in input order.
        """
        return list(self._positionals)

    def render(self):
        return render_help(self, prog=self._prog, descr=self._descr, version=self._version, colorful=self._colorful)

    def help(self):
        return render_help(self, prog=self._prog, descr=self._descr, version=self._version, colorful=False).plain

    def print_help(self):
        Console().print(self.render(), soft_wrap=True)

    def __rich_repr__(self):
        yield "prog", self._prog
        yield "descr", self._descr
        yield "version", self._version
        yield "arguments", self.arguments()
        yield "positionals", self.positional_arguments()

    def __repr__(self):
        return f"ArgParser(prog={self._prog!r}, arguments={len(self._arguments)})"


__all__ = (
    "ArgParser",
    "Outcome",
)
