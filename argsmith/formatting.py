"""
Argsmith help rendering.

render_help() reads a Registry and builds one rich Text holding, in order:
- the description (if any) followed by a blank line;
- the usage line: "Usage: <prog>", " [OPTIONS]" when any flag/option exists, then
  every positional, bare when required and bracketed when optional;
- "Positional arguments:" with one line per positional;
- "Options:" with one line per flag/option, showing the default and the
  required marker when present;
- "Version: <version>" after a blank line (if any).

The names column is padded to the widest entry across both blocks. The result
is styled for terminals; Text.plain gives the exact uncolored help string.

Palette keys
- description-section, usage-label, program-name, usage-section
- group-label, metavar, option-name, flag-name
- argument-description, default, required, version

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- colorful=False drops every style.
"""
from collections import defaultdict

from rich.text import Text

from .arguments import ArgumentKind


def names(argument, /):
    """
    Names column entry: the positional name, or "-s, --long" for flags/options.
    """
    if argument.kind is ArgumentKind.POSITIONAL:
        return argument.name
    return ", ".join(filter(None, (
        "-" + argument.short_name if argument.short_name else "",
        "--" + argument.long_name if argument.long_name else "",
    )))


def render_help(registry, /, *, prog="", descr="", version="", colorful=True):
    styles = defaultdict(str, {
        # === Head sections ===
        "description-section": "italic #A3A3A3",  # Neutral gray
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan

        # === Groups / arguments ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "metavar": "bold #FFD600",  # AMBER for positionals
        "option-name": "bold #00E6FF",  # CYAN for options
        "flag-name": "bold #22C55E",  # GREEN for flags
        "argument-description": "#9CA3AF",  # Muted gray
        "default": "#737373",
        "required": "bold #EF4444",

        # === Footer ===
        "version": "#737373",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    arguments = registry.arguments()
    positionals = registry.arguments(ArgumentKind.POSITIONAL)
    switches = tuple(argument for argument in arguments if argument.kind is not ArgumentKind.POSITIONAL)

    width = max(map(len, map(names, arguments)), default=0)

    help = Text()

    if descr:
        help.append(descr, styler("description-section")).append("\n\n")

    # Usage line
    help.append("Usage:", styler("usage-label")).append(" ").append(prog, styler("program-name"))
    if switches:
        help.append(" ").append("[OPTIONS]", styler("usage-section"))
    for positional in positionals:
        help.append(" ").append(
            positional.name if positional.is_required else "[%s]" % positional.name,
            styler("metavar"),
        )
    help.append("\n\n")

    if positionals:
        help.append("Positional arguments:", styler("group-label")).append("\n")
        for positional in positionals:
            help.append(" ").append(names(positional).ljust(width), styler("metavar"))
            help.append(" ").append(positional.descr, styler("argument-description"))
            if positional.is_required:
                help.append(" (required)", styler("required"))
            help.append("\n")

    if switches:
        if positionals:
            help.append("\n")
        help.append("Options:", styler("group-label")).append("\n")
        for switch in switches:
            style = "flag-name" if switch.kind is ArgumentKind.FLAG else "option-name"
            help.append(" ").append(names(switch).ljust(width), styler(style))
            help.append(" ").append(switch.descr, styler("argument-description"))
            if switch.default:
                help.append(" (default: %s)" % switch.default, styler("default"))
            if switch.is_required:
                help.append(" (required)", styler("required"))
            help.append("\n")

    if version:
        help.append("\n").append("Version: %s" % version, styler("version"))

    return help


__all__ = (
    "render_help",
)
