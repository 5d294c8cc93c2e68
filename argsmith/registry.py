"""
Argsmith registry: ownership and lookup of declared arguments.

What this module provides
- Registry: owns every Argument declared through add_flag/add_option/add_positional,
  keeps them in declaration order, and maps each identity (short name, long name,
  positional name) to its Argument in one flat table.
- Typed queries by identity: get, get_string, get_int, get_double, get_bool, is_set.

Lookup rules
- Names are registered without dashes: add_flag("v", "verbose", ...) answers to
  both "v" and "verbose".
- The table is flat: short, long and positional names share one namespace.
- Declaring an identity twice overwrites the earlier entry (last declaration wins)
  and emits a DuplicateNameWarning so the collision does not go unnoticed.

Query rules
- Unknown names: get -> None, get_string -> "", get_bool/is_set -> False,
  get_int/get_double -> ArgumentNotFoundError.
- Conversions are lenient in get (malformed numbers read as None) and strict in
  get_int/get_double (ValidationError).
"""
from .arguments import Argument, ArgumentKind
from .faults import *


class Registry:
    """
    Exclusive owner of argument declarations and their name lookup table.
    """

    def __init__(self):
        self._arguments = []
        self._lookup = {}

    def add_flag(self, short, long, descr, /):
        return self._declare(Argument.flag(short, long, descr))

    def add_option(self, short, long, descr, default="", /):
        return self._declare(Argument.option(short, long, descr, default))

    def add_positional(self, name, descr, required=False, /):
        return self._declare(Argument.positional(name, descr, required))

    def _declare(self, argument, /):
        for identity in argument.identities:
            if (previous := self._lookup.get(identity)) is not None:
                self.trigger(DuplicateNameWarning(
                    "name %r of %s %r overrides %s %r" % (
                        identity, argument.kind.value, argument.label, previous.kind.value, previous.label
                    ),
                    title="duplicated name",
                    hint="give every flag, option and positional its own names",
                    input=identity,
                    argument=argument,
                ))
            self._lookup[identity] = argument
        self._arguments.append(argument)
        return argument

    def trigger(self, fault, /, **options):
        trigger(fault, **options)

    def argument(self, name, /):
        if not isinstance(name, str):
            raise TypeError("argument() name must be a string")
        return self._lookup.get(name)

    def arguments(self, kind=None, /):
        """
        Declarations in order, optionally restricted to one ArgumentKind.
        """
        if kind is None:
            return tuple(self._arguments)
        if not isinstance(kind, ArgumentKind):
            raise TypeError("arguments() kind must be an ArgumentKind")
        return tuple(argument for argument in self._arguments if argument.kind is kind)

    def get(self, name, type=str, /):
        if (argument := self.argument(name)) is None:
            return None
        return argument.get(type)

    def get_string(self, name, /):
        if (argument := self.argument(name)) is None:
            return ""
        return argument.get_string()

    def get_int(self, name, /):
        return self._strict(name, Argument.get_int)

    def get_double(self, name, /):
        return self._strict(name, Argument.get_double)

    def get_bool(self, name, /):
        if (argument := self.argument(name)) is None:
            return False
        return argument.get_bool()

    def is_set(self, name, /):
        if (argument := self.argument(name)) is None:
            return False
        return argument.is_set

    def _strict(self, name, getter, /):
        if (argument := self.argument(name)) is None:
            return self.trigger(ArgumentNotFoundError(
                "argument %r was never declared" % name,
                hint="declare it with add_flag(), add_option() or add_positional() first",
                input=name,
            ))
        try:
            return getter(argument)
        except ValidationError as exception:
            self.trigger(exception)


__all__ = (
    "Registry",
)
