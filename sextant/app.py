"""
Sextant console application runner.

What this module provides
- State: lifecycle of one App.run() call (IDLE → RESOLVING → EXECUTING → DONE,
  or FAILED when resolution or validation raises).
- App: registry of named commands plus the collaborators (Output, Input,
  Parameter) it hands to them. App.run() resolves the command to execute,
  validates the invocation against its descriptors and runs it.
- invoke(app, argv): run an App as a process entry point and exit with its status.

Resolution
1. A configured default command is looked up by name (None when unknown).
2. Unless only the default command may be used, the parser's command name is
   looked up and command-name recognition is enabled; otherwise recognition is
   disabled, so the would-be command name is the first positional argument.
3. An explicitly named command wins over the default one.
4. No command → NoCommandError (listing the registered commands).
5. The command's descriptors are registered on the parser and checked
   (ValidationError on failure); nothing is bound and nothing runs unless
   every check passes.
6. The command runs; its result is returned unchanged. Errors raised by the
   handler propagate unchanged as well.

Collaborators are passed in explicitly: there is no process-wide registry, so
two Apps never share parsing state unless they are given the same Parameter.
"""
import logging
import sys
from enum import Enum

from .commands import Command, command
from .console import Input, Output
from .faults import *
from .parameter import Parameter
from .utils import *

logger = logging.getLogger(__name__)


class State(Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


class App:
    """
    Console application: command registry, resolution and execution.

    Parameters
    - output/input/parameter: collaborators handed to every registered command;
      defaults are built when omitted (Parameter() reads sys.argv).
    - name: application name shown by help and in fault headers.
    - shell: when True, main() prints resolution/validation faults on the error
      console and returns 1; when False, main() lets them propagate.
    - fancy/colorful: fault rendering style (rich Panel, colors).
    """

    def __init__(
            self,
            output=Unset,
            input=Unset,
            parameter=Unset,
            /,
            name=Unset,
            *,
            shell=True,
            fancy=False,
            colorful=True,
    ):
        self._output = Output() if output is Unset else output
        self._input = Input(output=self._output) if input is Unset else input
        self._parameter = Parameter() if parameter is Unset else parameter
        self._name = coalesce(name)
        self._commands = {}
        self._default_command = None
        self._only_use_default_command = False
        self._state = State.IDLE
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

    def __repr__(self):
        return "app(name=%r, commands=%r, default=%r, state=%s)" % (
            self._name,
            list(self._commands),
            self._default_command,
            self._state.value,
        )

    @property
    def state(self):
        return self._state

    @property
    def output(self):
        return self._output

    @property
    def input(self):
        return self._input

    @property
    def parameter(self):
        return self._parameter

    def set_name(self, name, /):
        self._name = name
        return self

    def get_name(self):
        return self._name

    def add_command(self, command, /):
        """
        Register a command under its name and prepare it with this app's collaborators.

        Raises
        - ConfigurationError: not a Command, no name set, or the name is taken.
        """
        if not isinstance(command, Command):
            raise ConfigurationError(f"add_command() argument must be a Command, got {type(command).__name__!r}")
        if not command.get_name():
            raise ConfigurationError("a command needs a name before it can be added to an app")
        if command.get_name() in self._commands:
            raise ConfigurationError(
                f"a command named {command.get_name()!r} is already registered",
                code=FaultCode.DUPLICATED_DESCRIPTOR,
            )
        command.prepare(self, self._output, self._input, self._parameter)
        self._commands[command.get_name()] = command
        return self

    def add_commands(self, commands, /):
        for command in commands:
            self.add_command(command)
        return self

    def command(self, source=Unset, /, name=Unset, description=Unset):
        """
        Decorator form of add_command(): build a Command from a function and register it.

        Accepts the same forms as sextant.command().
        """
        if callable(source):
            created = command(source, name=name, description=description)
            self.add_command(created)
            return created

        factory = command(source, name, description)

        @rename("command")
        def wrapper(function, /):
            created = factory(function)
            self.add_command(created)
            return created

        return wrapper

    def remove_command_by_name(self, name, /):
        self._commands.pop(name, None)
        return self

    def get_command(self, name, /):
        return self._commands.get(name)

    def get_commands(self):
        return dict(self._commands)

    def set_default_command_by_name(self, name, /):
        self._default_command = name
        return self

    def set_default_command(self, command, /):
        if not isinstance(command, Command):
            raise ConfigurationError("set_default_command() argument must be a Command")
        return self.set_default_command_by_name(command.get_name())

    def get_default_command_name(self):
        return self._default_command

    def set_only_use_default_command(self, only_use_default_command, /):
        self._only_use_default_command = bool(only_use_default_command)
        return self

    def should_only_use_default_command(self):
        return self._only_use_default_command

    def _transition(self, state, /):
        logger.debug("app %r: %s → %s", self._name, self._state.value, state.value)
        self._state = state

    def _resolve(self):
        default = None
        explicit = None

        if self._default_command:
            default = self.get_command(self._default_command)

        if not self._only_use_default_command:
            # enabling first takes the name back if an earlier run disabled recognition
            self._parameter.enable_command_name()
            if name := self._parameter.get_command_name():
                explicit = self.get_command(name)
        else:
            self._parameter.disable_command_name()

        resolved = explicit or default
        if resolved is None:
            available = ", ".join(sorted(self._commands)) or "none registered"
            raise NoCommandError(
                "No valid commands found.",
                hint=f"available commands: {available}",
            )
        return resolved

    def run(self):
        """
        Resolve, validate and execute one command; return the handler's result.

        Raises
        - NoCommandError: no command could be resolved.
        - ValidationError: the invocation does not satisfy the command's descriptors.
        """
        self._transition(State.RESOLVING)
        try:
            command = self._resolve()
            self._parameter.set_command_options(command.get_options())
            self._parameter.set_command_arguments(command.get_arguments())
            self._parameter.check_command_parameters()
        except ConsoleException:
            self._transition(State.FAILED)
            raise

        self._transition(State.EXECUTING)
        result = command.run()
        self._transition(State.DONE)
        return result

    def main(self, argv=Unset, /):
        """
        Run as a process entry point and return the exit status.

        - argv, when given, replaces the parser's raw argument vector.
        - Resolution and validation faults are reported on the error console
          (shell mode) and give status 1.
        - Otherwise the status follows the handler's result: an int is used as-is,
          False gives 1, anything else gives 0.
        """
        if argv is not Unset:
            self._parameter.set_parameters(argv)
        try:
            result = self.run()
        except ConsoleException as fault:
            if self._state is not State.FAILED:
                raise
            trigger(
                fault,
                shell=self._shell,
                fancy=self._fancy,
                colorful=self._colorful,
                deferred=True,
                console=self._output.error,
                prog=self._name or self._parameter.get_script_name(),
            )
            return 1

        if result is False:
            return 1
        if isinstance(result, int) and not isinstance(result, bool):
            return result
        return 0


def invoke(app, argv=Unset, /):
    """
    Run `app` with `argv` (the parser's vector when omitted) and exit the process.
    """
    if not isinstance(app, App):
        raise TypeError(f"invoke() argument must be an App, got {type(app).__name__!r}")
    sys.exit(app.main(argv))


__all__ = (
    "State",
    "App",
    "invoke",
)
