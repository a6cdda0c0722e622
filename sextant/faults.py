"""
Sextant faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault,
  grouped by domain so logs and searches stay predictable.
- ConsoleException: base type that carries a message + options and knows how to
  render itself (plain lines, or a rich Panel when `fancy`).
- The taxonomy used by the parser and the runner:
  • ConfigurationError: a descriptor or registration is invalid (programmer error).
  • ValidationError: the invocation does not satisfy a command's descriptors
    (RequiredOptionError, OptionValueRequiredError, FlagValueError,
    RequiredArgumentError).
  • NoCommandError: no command could be resolved for the invocation.
- trigger(): central entry point to surface a fault (raise, or print in shell mode).

Host customization (looked up on __main__, as plain module attributes)
- __styles__: mapping of palette keys to rich styles.
- __prog__: program name shown in fault headers.
- __codes__: mapping of FaultCode → label, replacing the numeric identifiers.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the console toolkit.

    grouping
    - configuration (2110x): INVALID_DESCRIPTOR, INVALID_REQUIREMENT, INVALID_OPTION_TYPE,
      DUPLICATED_DESCRIPTOR, REASSIGNED_ORDER
    - validation (2111x): REQUIRED_OPTION, OPTION_VALUE_REQUIRED, REQUIRED_ARGUMENT,
      FLAG_VALUE_GIVEN
    - resolution (2112x): NO_COMMAND
    """
    # --- configuration errors ---
    INVALID_DESCRIPTOR          = 21101
    INVALID_REQUIREMENT         = 21102
    INVALID_OPTION_TYPE         = 21103
    DUPLICATED_DESCRIPTOR       = 21104
    REASSIGNED_ORDER            = 21105

    # --- validation errors ---
    REQUIRED_OPTION             = 21111
    OPTION_VALUE_REQUIRED       = 21112
    REQUIRED_ARGUMENT           = 21113
    FLAG_VALUE_GIVEN            = 21114

    # --- resolution errors ---
    NO_COMMAND                  = 21121

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ConsoleException(Exception):
    """
    base type for every fault raised by the parser and the runner.

    the defaults for `code`, `title` and `hint` come from the class and can be
    overridden per instance through keyword options.
    """
    __faultcode__ = Unset
    __title__ = "console error"
    __hint__ = ""

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType({
            "code": type(self).__faultcode__,
            "title": type(self).__title__,
            "hint": type(self).__hint__,
            "shell": False,
            "fancy": False,
            "colorful": False,
            "deferred": False,
        } | options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    @property
    def code(self):
        return self.options["code"]

    @property
    def hint(self):
        return self.options["hint"]

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if self.options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = getattr(main, "__prog__", self.options.get("prog") or "sextant")
        code = self.options["code"]

        header = Text.assemble(
            "[ ",
            text(prog, styler("prog-name")),
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        renders = [message]
        if self.options["hint"]:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint"))))

        if self.options["fancy"]:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options["shell"]:
            raise self from None
        self.options.get("console", console).print(self)
        if self.options["deferred"]:
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(ConsoleException):
    __faultcode__ = FaultCode.INVALID_DESCRIPTOR
    __title__ = "configuration error"


class ValidationError(ConsoleException):
    __title__ = "invalid invocation"


class RequiredOptionError(ValidationError):
    __faultcode__ = FaultCode.REQUIRED_OPTION
    __title__ = "required option"
    __hint__ = "pass the option as --name or --name=value"


class OptionValueRequiredError(ValidationError):
    __faultcode__ = FaultCode.OPTION_VALUE_REQUIRED
    __title__ = "option value required"
    __hint__ = "pass the value inline, as --name=value"


class FlagValueError(ValidationError):
    __faultcode__ = FaultCode.FLAG_VALUE_GIVEN
    __title__ = "flag value given"
    __hint__ = "pass the flag bare, as --name"


class RequiredArgumentError(ValidationError):
    __faultcode__ = FaultCode.REQUIRED_ARGUMENT
    __title__ = "required argument"
    __hint__ = "pass the missing positional argument in its position"


class NoCommandError(ConsoleException):
    __faultcode__ = FaultCode.NO_COMMAND
    __title__ = "no command"
    __hint__ = "run the 'help' command to list the available commands"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ConsoleException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode the fault is printed on the error console, otherwise it is raised.

    typical options
    - shell, fancy, colorful, deferred, console, prog, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ConsoleException",
    "ConfigurationError",
    "ValidationError",
    "RequiredOptionError",
    "OptionValueRequiredError",
    "FlagValueError",
    "RequiredArgumentError",
    "NoCommandError",
    "trigger",
)
