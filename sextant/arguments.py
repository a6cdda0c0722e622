r"""
Sextant option and argument descriptors.

Overview
- Policies
  • Requirement: REQUIRED | OPTIONAL, whether the descriptor must be given.
  • OptionType: FLAG | VALUE_OPTIONAL | VALUE_REQUIRED, what an option accepts
    after its name.

- Descriptors
  • Option: named, `--`-prefixed input (`--name` or `--name=value`).
  • Argument: positional input, bound by its order index.

- Introspection & representation
  • DescriptorType metaclass provides stable __repr__/__rich_repr__ and exposes
    the fields listed in __introspectable__ as read-only properties (see mirror()).

Lifecycle
- A descriptor is declared once (usually through Command.add_option/add_argument)
  and then matched against every parse with add_parameters(). Matching always
  starts from a clean slate: provided_value is None and has_been_provided is False
  until the parsed input says otherwise.
- The order index of an Argument is assigned by the parser when the argument
  set is registered; it is immutable afterwards.

Validation highlights
- Names are non-empty strings, without the `--` prefix, whitespace or `=`.
- Requirement/OptionType values outside the enumerations raise ConfigurationError.

Quick example:
    >>> from sextant.arguments import Option, Argument, OptionType, Requirement
    >>> Option("env", Requirement.OPTIONAL, OptionType.VALUE_REQUIRED, "dev")
    option(name='env', requirement=<Requirement.OPTIONAL: 2>, option_type=<OptionType.VALUE_REQUIRED: 3>, default='dev')
"""
import functools
import operator
import re
from enum import IntEnum

from .faults import ConfigurationError, FaultCode
from .utils import *


class Requirement(IntEnum):
    """Whether a descriptor must be present in the invocation."""
    REQUIRED = 1
    OPTIONAL = 2


class OptionType(IntEnum):
    """What an option accepts after its name."""
    FLAG = 1
    VALUE_OPTIONAL = 2
    VALUE_REQUIRED = 3


PARAMETER_REQUIRED = Requirement.REQUIRED
PARAMETER_OPTIONAL = Requirement.OPTIONAL
OPTION_FLAG = OptionType.FLAG
OPTION_VALUE_OPTIONAL = OptionType.VALUE_OPTIONAL
OPTION_VALUE_REQUIRED = OptionType.VALUE_REQUIRED


class DescriptorType(type):
    """
    Metaclass that turns descriptor classes into introspectable value objects.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens).
    - Expose every name in __introspectable__ as a read-only property mirroring
      the "_{name}" backing field.
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__displayable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, /):
    """
    Internal: validate a descriptor name and return it.

    Raises
    - ConfigurationError: when the name is not a string, is empty, carries the
      `--` prefix, or contains whitespace or '='.
    """
    if not isinstance(name, str):
        raise ConfigurationError(f"{cls.__typename__} name must be a string")
    elif not name:
        raise ConfigurationError(f"{cls.__typename__} name cannot be empty")
    elif name.startswith("--"):
        raise ConfigurationError(f"{cls.__typename__} name {name!r} must be given without the '--' prefix")
    elif re.search(r"[\s=]", name):
        raise ConfigurationError(f"{cls.__typename__} name {name!r} cannot contain whitespace or '='")
    return name


def _sanitize_requirement(cls, requirement, /):
    """
    Internal: coerce a requirement into the Requirement enumeration.

    Booleans are accepted as a shorthand (True → REQUIRED, False → OPTIONAL).
    """
    if isinstance(requirement, bool):
        return Requirement.REQUIRED if requirement else Requirement.OPTIONAL
    try:
        return Requirement(requirement)
    except ValueError:
        raise ConfigurationError(
            f"{cls.__typename__} requirement must be one of the Requirement values, got {requirement!r}",
            code=FaultCode.INVALID_REQUIREMENT,
        ) from None


def _sanitize_option_type(cls, option_type, /):
    """
    Internal: coerce an option type into the OptionType enumeration.
    """
    if isinstance(option_type, bool):
        raise ConfigurationError(
            f"{cls.__typename__} option type must be one of the OptionType values, got {option_type!r}",
            code=FaultCode.INVALID_OPTION_TYPE,
        )
    try:
        return OptionType(option_type)
    except ValueError:
        raise ConfigurationError(
            f"{cls.__typename__} option type must be one of the OptionType values, got {option_type!r}",
            code=FaultCode.INVALID_OPTION_TYPE,
        ) from None


class Descriptor(metaclass=DescriptorType):
    """
    Shared shape of Option and Argument.

    Fields
    - name: unique key within a command's descriptor set.
    - requirement: Requirement.REQUIRED or Requirement.OPTIONAL.
    - default: value used when nothing was provided (None when omitted).
    - provided_value: value bound by the last add_parameters() call, or None.
    - has_been_provided: whether the last add_parameters() call found the descriptor.
    """
    __introspectable__ = (
        "name",
        "requirement",
        "default",
        "provided_value",
        "has_been_provided",
    )
    __displayable__ = (
        "name",
        "requirement",
        "default",
    )

    def __init__(self, name, requirement=Requirement.OPTIONAL, default=None):
        self._name = _sanitize_name(type(self), name)
        self._requirement = _sanitize_requirement(type(self), requirement)
        self._default = default
        self._provided_value = None
        self._has_been_provided = False

    def get_name(self):
        return self._name

    def is_required(self):
        return self._requirement is Requirement.REQUIRED

    def get_default_value(self):
        return self._default

    def get_provided_value(self):
        return self._provided_value

    def get_value(self):
        """
        Return the provided value when there is one, else the default value.
        """
        if self._provided_value is not None:
            return self._provided_value
        return self._default

    def _reset(self):
        self._provided_value = None
        self._has_been_provided = False

    def add_parameters(self, parameters, /):
        raise NotImplementedError


class Option(Descriptor):
    """
    Named `--`-prefixed input.

    The option type decides what may follow the name:
    - FLAG: presence only; `--name` resolves to True.
    - VALUE_OPTIONAL: `--name` or `--name=value`.
    - VALUE_REQUIRED: `--name=value`; a bare `--name` fails validation.
    """
    __introspectable__ = (
        "option_type",
    )
    __displayable__ = (
        "name",
        "requirement",
        "option_type",
        "default",
    )

    def __init__(
            self,
            name,
            requirement=Requirement.OPTIONAL,
            option_type=OptionType.VALUE_OPTIONAL,
            default=None,
    ):
        super().__init__(name, requirement, default)
        self._option_type = _sanitize_option_type(type(self), option_type)

    def is_flag(self):
        return self._option_type is OptionType.FLAG

    def is_value_required(self):
        return self._option_type is OptionType.VALUE_REQUIRED

    def add_parameters(self, parameters, /):
        """
        Match this option against a parsed option map.

        The provided state is reset first; then, if the name is a key of the
        map, the option counts as provided and, unless the parsed value is the
        bare-flag marker (Present), that value becomes the provided value.
        """
        self._reset()

        if self._name not in parameters:
            return self

        self._has_been_provided = True

        if parameters[self._name] is not Present:
            self._provided_value = parameters[self._name]

        return self


class Argument(Descriptor):
    """
    Positional input bound by order index.

    The order index is None until the parser registers the argument; positional
    token i binds to the argument with order index i.
    """
    __introspectable__ = (
        "order",
    )
    __displayable__ = (
        "name",
        "requirement",
        "default",
        "order",
    )

    def __init__(self, name, requirement=Requirement.OPTIONAL, default=None):
        super().__init__(name, requirement, default)
        self._order = None

    def get_order(self):
        return self._order

    def set_order(self, order, /):
        """
        Assign the order index (done by the parser at registration time).

        Re-registering with the same index is accepted; a different index raises
        ConfigurationError since positional binding depends on it.
        """
        if not isinstance(order, int) or isinstance(order, bool) or order < 0:
            raise ConfigurationError(f"{type(self).__typename__} order must be a non-negative integer")
        if self._order is not None and self._order != order:
            raise ConfigurationError(
                f"argument {self._name!r} already holds order index {self._order}, cannot move it to {order}",
                code=FaultCode.REASSIGNED_ORDER,
            )
        self._order = order
        return self

    def add_parameters(self, parameters, /):
        """
        Match this argument against the positional arguments of a parse.
        """
        self._reset()

        if self._order is None or self._order >= len(parameters):
            return self

        self._has_been_provided = True
        self._provided_value = parameters[self._order]

        return self


__all__ = (
    "Requirement",
    "OptionType",
    "PARAMETER_REQUIRED",
    "PARAMETER_OPTIONAL",
    "OPTION_FLAG",
    "OPTION_VALUE_OPTIONAL",
    "OPTION_VALUE_REQUIRED",
    "Descriptor",
    "Option",
    "Argument",
)
