"""
Sextant command layer: named, described units of work.

What this module provides
- Command: associates option/argument descriptors with a handler and runs it.
  • add_option()/add_argument() build and store descriptors (names are unique
    per command; a duplicate raises ConfigurationError).
  • prepare() injects the collaborators the handler receives.
  • run() invokes the handler and returns its result (False when there is none).
  • Subclasses may override run() instead of setting a handler.

- command(...): build a Command from a function, directly or as a decorator.

Handler contract
- A prepared command calls handler(app, output, input, parameter); an
  unprepared one calls handler() with no arguments.
- Handlers may run other commands (other.run()) and use their result. There is
  no cycle detection: a handler that ends up running itself recurses until the
  interpreter's recursion limit is hit.

Quick start
    from sextant import App, command, OPTION_VALUE_REQUIRED

    @command(description="Build the project")
    def build(app, output, input, parameter):
        output.writeln(f"building for {parameter.get_option('env')}")

    build.add_option("env", option_type=OPTION_VALUE_REQUIRED, default="dev")
"""
import builtins
import inspect
import logging

from .arguments import Argument, Option, OptionType, Requirement
from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


class Command:
    """
    Named, describable unit associating descriptors with a handler.

    Lifecycle
    - Constructed once, populated with descriptors at startup, registered in an
      App under its name (which therefore has to be set before registration).
    - prepare() is called by App.add_command() with the app's collaborators.
    - run() is called by App.run() once validation has passed.
    """

    def __init__(self, name=Unset, description=Unset, callable=Unset):
        self._name = None
        self._description = None
        self._callable = None
        self._options = {}
        self._arguments = {}
        self._context = None
        if name is not Unset:
            self.set_name(name)
        if description is not Unset:
            self.set_description(description)
        if callable is not Unset:
            self.set_callable(callable)

    def __repr__(self):
        return "command(name=%r, description=%r, options=%r, arguments=%r)" % (
            self._name,
            self._description,
            list(self._options),
            list(self._arguments),
        )

    def set_name(self, name, /):
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError("command name must be a non-empty string")
        self._name = name
        return self

    def get_name(self):
        return self._name

    def set_description(self, description, /):
        if not isinstance(description, str):
            raise ConfigurationError("command description must be a string")
        self._description = description
        return self

    def get_description(self):
        return self._description

    def set_callable(self, callable, /):
        if not builtins.callable(callable):
            raise ConfigurationError(f"command {self._name!r} handler must be callable")
        self._callable = callable
        return self

    def get_callable(self):
        return self._callable

    def add_option(
            self,
            name,
            requirement=Requirement.OPTIONAL,
            option_type=OptionType.VALUE_OPTIONAL,
            default=None,
    ):
        """
        Build an Option and store it under its name.

        Raises
        - ConfigurationError: invalid descriptor, or an option of that name exists.
        """
        option = Option(name, requirement, option_type, default)
        if name in self._options:
            raise ConfigurationError(
                f"command {self._name!r} already has an option named '--{name}'",
                code=FaultCode.DUPLICATED_DESCRIPTOR,
            )
        self._options[name] = option
        return self

    def get_options(self):
        return dict(self._options)

    def add_argument(self, name, requirement=Requirement.OPTIONAL, default=None):
        """
        Build an Argument and store it after the previously added ones.

        Raises
        - ConfigurationError: invalid descriptor, or an argument of that name exists.
        """
        argument = Argument(name, requirement, default)
        if name in self._arguments:
            raise ConfigurationError(
                f"command {self._name!r} already has an argument named {name!r}",
                code=FaultCode.DUPLICATED_DESCRIPTOR,
            )
        self._arguments[name] = argument
        return self

    def get_arguments(self):
        return dict(self._arguments)

    def prepare(self, app, output, input, parameter):
        """
        Inject the collaborators the handler receives when run.
        """
        self._context = (app, output, input, parameter)
        return self

    def is_prepared(self):
        return self._context is not None

    def run(self):
        """
        Invoke the handler and return its result; False when no handler is set.
        """
        if self._callable is None:
            return False
        logger.debug("running command %r", self._name)
        if self._context is None:
            return self._callable()
        return self._callable(*self._context)

    def get_usage(self):
        """
        Return a one-line usage string, e.g. "build --env=<value> [--force] <target> [<extra>]".
        """
        parts = [self._name or ""]
        for option in self._options.values():
            match option.option_type:
                case OptionType.FLAG:
                    part = f"--{option.get_name()}"
                case OptionType.VALUE_OPTIONAL:
                    part = f"--{option.get_name()}[=<value>]"
                case _:
                    part = f"--{option.get_name()}=<value>"
            parts.append(part if option.is_required() else f"[{part}]")
        for argument in self._arguments.values():
            part = f"<{argument.get_name()}>"
            parts.append(part if argument.is_required() else f"[{part}]")
        return " ".join(filter(None, parts))


def command(source=Unset, /, name=Unset, description=Unset):
    """
    Create a Command from a function, or return a decorator that does.

    Modes
    - command(function, name=..., description=...) -> Command
    - @command / @command("name", "description") / @command(name=..., description=...) -> decorator

    Defaults
    - name: the function name with underscores replaced by hyphens.
    - description: the first line of the function's docstring, or "".
    """
    if isinstance(source, str):
        # decorator form with a positional name: command("name", "description")
        if description is not Unset:
            raise TypeError("command() takes at most a name and a description")
        source, name, description = Unset, source, name

    def wrapper(function, /):
        if not callable(function):
            raise TypeError("command() must be applied to a callable")
        docstring = inspect.getdoc(function) or ""
        return Command(
            coalesce(name, function.__name__.replace("_", "-")),
            coalesce(description, docstring.partition("\n")[0]),
            function,
        )

    if source is Unset:
        return wrapper
    return wrapper(source)


__all__ = (
    "Command",
    "command",
)
