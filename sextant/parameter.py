"""
Sextant parameter parsing: raw argv → script name, command name, options, arguments.

What this module provides
- Parameter: owns one raw argument vector and its parsed view, holds the
  descriptors registered by the command about to run, validates the parse
  against them and resolves values by name.

Tokenization (single left-to-right pass)
1. The first token is the script name (None for an empty vector).
2. The next token is the command-name candidate when it is non-empty and does
   not start with `--`. With command-name recognition enabled it becomes the
   command name; otherwise it is the first positional argument.
3. `--name=value` records name → "value" (split once, on the first '=');
   `--name` records name → Present. A later occurrence overwrites an earlier one.
4. Every other token is appended to the positional arguments, in order.

Mode toggle
- enable_command_name()/disable_command_name() may be called after parsing;
  they move the candidate between the command name and the front of the
  positional arguments instead of re-tokenizing.

Validation
- check_command_options()/check_command_arguments() verify every registered
  descriptor before binding any of them, and check_command_parameters() does
  both checks before either binding, so a failing invocation never leaves
  part of the descriptors bound to it.

Example
    >>> parameter = Parameter(["prog", "build", "--env=prod", "--force", "app"])
    >>> parameter.get_command_name(), parameter.get_raw_options(), parameter.get_raw_arguments()
    ('build', {'env': 'prod', 'force': Present}, ['app'])
"""
import logging
import sys
from collections.abc import Iterable, Mapping

from .arguments import Argument, Option
from .faults import *
from .utils import *

logger = logging.getLogger(__name__)

OPTION_PREFIX = "--"


def _descriptors(kind, descriptors, /):
    """
    Internal: normalize a registration payload into a list of descriptors.

    Accepts a mapping (its values are used, in order) or any iterable.

    Raises
    - ConfigurationError: when the payload is not iterable or an element is not
      an instance of `kind`.
    """
    if isinstance(descriptors, Mapping):
        descriptors = descriptors.values()
    elif isinstance(descriptors, str) or not isinstance(descriptors, Iterable):
        raise ConfigurationError(f"expected a collection of {kind.__typename__} descriptors")

    descriptors = list(descriptors)
    names = set()
    for descriptor in descriptors:
        if not isinstance(descriptor, kind):
            raise ConfigurationError(
                f"expected {kind.__typename__} descriptors, got {type(descriptor).__name__!r}"
            )
        if descriptor.get_name() in names:
            raise ConfigurationError(
                f"{kind.__typename__} {descriptor.get_name()!r} is registered twice",
                code=FaultCode.DUPLICATED_DESCRIPTOR,
            )
        names.add(descriptor.get_name())
    return descriptors


class Parameter:
    """
    Parsed view of one raw argument vector plus the descriptors it is checked against.

    Lifecycle
    - set_parameters() replaces the raw vector and re-parses from a clean state.
    - set_command_options()/set_command_arguments() register the descriptors of
      the command about to run (argument order index = position).
    - check_command_options()/check_command_arguments() validate and bind.
    - check_command_parameters() validates both sets before binding either.
    - get_option()/get_argument() resolve values with defaulting applied.
    """

    def __init__(self, parameters=Unset, /):
        self._parameters = ()
        self._script_name = None
        self._command_name = None
        self._command_name_enabled = True
        self._options = {}
        self._arguments = []
        self._command_options = {}
        self._command_arguments = {}
        self.set_parameters(coalesce(parameters, sys.argv))

    def __repr__(self):
        return "parameter(script_name=%r, command_name=%r, options=%r, arguments=%r)" % (
            self._script_name,
            self.get_command_name(),
            self._options,
            self._arguments,
        )

    def set_parameters(self, parameters, /):
        """
        Replace the raw argument vector and parse it.
        """
        if isinstance(parameters, str) or not isinstance(parameters, Iterable):
            raise TypeError("set_parameters() argument must be an iterable of strings")
        parameters = tuple(parameters)
        if not all(isinstance(parameter, str) for parameter in parameters):
            raise TypeError("set_parameters() argument must be an iterable of strings")
        self._parameters = parameters
        self.parse_parameters()
        return self

    def get_parameters(self):
        return list(self._parameters)

    def parse_parameters(self):
        """
        Split the raw vector into script name, command name, options and arguments.
        """
        self._reset()

        tokens = list(self._parameters)
        if tokens:
            self._script_name = tokens.pop(0)

        if tokens and tokens[0] and not tokens[0].startswith(OPTION_PREFIX):
            # kept even when recognition is disabled, so enabling it can take the token back
            self._command_name = tokens.pop(0)
            if not self._command_name_enabled:
                self._arguments.append(self._command_name)

        for token in tokens:
            if token.startswith(OPTION_PREFIX):
                name, separator, value = token[len(OPTION_PREFIX):].partition("=")
                self._options[name] = value if separator else Present
            else:
                self._arguments.append(token)

        logger.debug(
            "parsed %d token(s): script=%r command=%r options=%r arguments=%r",
            len(self._parameters),
            self._script_name,
            self.get_command_name(),
            self._options,
            self._arguments,
        )
        return self

    def get_script_name(self):
        return self._script_name

    def get_command_name(self):
        """
        Return the command name, or None when there is none or recognition is disabled.
        """
        if not self._command_name_enabled:
            return None
        return self._command_name

    def get_raw_options(self):
        """
        Return the parsed option map (values are strings or Present).
        """
        return dict(self._options)

    def get_raw_arguments(self):
        """
        Return the positional arguments, command name excluded.
        """
        return list(self._arguments)

    def is_command_name_enabled(self):
        return self._command_name_enabled

    def enable_command_name(self):
        """
        Treat the command-name candidate as the command name again.

        Removes one occurrence of it (by value) from the positional arguments.
        """
        if self._command_name_enabled:
            return self
        if self._command_name is not None and self._command_name in self._arguments:
            self._arguments.remove(self._command_name)
        self._command_name_enabled = True
        logger.debug("command name recognition enabled (command=%r)", self._command_name)
        return self

    def disable_command_name(self):
        """
        Treat the command-name candidate as the first positional argument.
        """
        if not self._command_name_enabled:
            return self
        if self._command_name is not None:
            self._arguments.insert(0, self._command_name)
        self._command_name_enabled = False
        logger.debug("command name recognition disabled (arguments=%r)", self._arguments)
        return self

    def set_command_options(self, options, /):
        """
        Register the options of the command about to run.
        """
        self._command_options = {option.get_name(): option for option in _descriptors(Option, options)}
        return self

    def set_command_arguments(self, arguments, /):
        """
        Register the arguments of the command about to run.

        Each argument is assigned its order index: its position in `arguments`.
        """
        arguments = _descriptors(Argument, arguments)
        for index, argument in enumerate(arguments):
            argument.set_order(index)
        self._command_arguments = {argument.get_name(): argument for argument in arguments}
        return self

    def get_command_options(self):
        return dict(self._command_options)

    def get_command_arguments(self):
        return dict(self._command_arguments)

    def get_command_option(self, name, /):
        return self._command_options.get(name)

    def get_command_argument(self, name, /):
        return self._command_arguments.get(name)

    def _validate_options(self):
        for option in self._command_options.values():
            name = option.get_name()
            if option.is_required() and name not in self._options:
                raise RequiredOptionError(f"Required option '--{name}' not provided.")
            if option.is_value_required() and self._options.get(name) is Present:
                raise OptionValueRequiredError(f"Option '--{name}' requires a value, which is not provided.")
            if option.is_flag() and name in self._options and self._options[name] is not Present:
                raise FlagValueError(f"Option '--{name}' is a flag and does not take a value.")

    def _bind_options(self):
        for option in self._command_options.values():
            option.add_parameters(self._options)

    def _ordered_arguments(self):
        return sorted(self._command_arguments.values(), key=lambda x: x.get_order())

    def _validate_arguments(self):
        for argument in self._ordered_arguments():
            if argument.is_required() and argument.get_order() >= len(self._arguments):
                position = argument.get_order() + 1
                raise RequiredArgumentError(
                    f"Required argument '{position}:{argument.get_name()}' not provided.",
                    hint=f"pass {argument.get_name()!r} as the {ordinal(position)} positional argument",
                )

    def _bind_arguments(self):
        for argument in self._ordered_arguments():
            argument.add_parameters(self._arguments)

    def check_command_options(self):
        """
        Check the registered options against the parsed options, then bind them.

        Raises
        - RequiredOptionError: a required option was not passed.
        - OptionValueRequiredError: an option whose value is required was passed
          as a bare `--name`.
        - FlagValueError: a flag was passed as `--name=value`.
        """
        self._validate_options()
        self._bind_options()
        return self

    def check_command_arguments(self):
        """
        Check the registered arguments against the positional arguments, then bind them.

        Raises
        - RequiredArgumentError: no positional argument sits at a required
          argument's order index.
        """
        self._validate_arguments()
        self._bind_arguments()
        return self

    def check_command_parameters(self):
        """
        Check options, then arguments; bind both only once every check has passed.

        Raises the faults of check_command_options()/check_command_arguments().
        """
        self._validate_options()
        self._validate_arguments()
        self._bind_options()
        self._bind_arguments()
        return self

    def get_option(self, name, /):
        """
        Resolve an option value by name.

        Order of precedence
        1. the value passed as `--name=value`;
        2. True when passed as a bare `--name` and the option is a flag or has no default;
        3. the option's default value;
        4. None when no option of that name is registered.
        """
        option = self._command_options.get(name)
        if option is None:
            return None
        if option.get_provided_value() is not None:
            return option.get_provided_value()
        if option.has_been_provided and (option.is_flag() or option.get_default_value() is None):
            return True
        return option.get_default_value()

    def get_options(self):
        return {name: self.get_option(name) for name in self._command_options}

    def get_argument(self, name, /):
        """
        Resolve an argument value by name: passed value, else default, else None.
        """
        argument = self._command_arguments.get(name)
        if argument is None:
            return None
        return argument.get_value()

    def get_arguments(self):
        return {name: self.get_argument(name) for name in self._command_arguments}

    def _reset(self):
        self._script_name = None
        self._command_name = None
        self._options = {}
        self._arguments = []
        return self


__all__ = (
    "OPTION_PREFIX",
    "Parameter",
)
