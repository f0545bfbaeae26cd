"""
Error taxonomy shared by the grammar compiler, the interpreter and the resolver.

Provides leaf exception types (one per failure cause) and four containing kinds that
wrap exactly one leaf each:

- TryFromParsed: building a value from a Parsed accumulator failed.
- Format: rendering a value failed (missing type information, unformattable
  component, or an OSError raised by the output stream).
- Parse: parsing text failed (literal/component mismatch, trailing input, resolution
  failure, or an invalid format description).
- Error: universal kind holding any error this package raises.

Rules shared by every containing kind
- ``str(container) == str(container.inner)``.
- ``container.__cause__`` is the wrapped error, except for leaf variants with nothing
  beneath them (e.g. UnexpectedTrailingCharacters), where it stays ``None``.
  Raise containers without ``from`` so the constructor keeps that choice.
- ``Kind.try_from(err)`` narrows along the stored chain to a leaf or intermediate kind
  and raises DifferentVariant when the stored variant does not match.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Leaf display strings are part of the public contract; tests pin them verbatim.

Examples:
    Wrap a range violation and narrow it back.

    >>> from tempus.core.errors import ComponentRange, Error, TryFromParsed
    >>> leaf = ComponentRange("ordinal", 1, 366, 367, conditional_range=True)
    >>> err = Error(TryFromParsed(leaf))
    >>> ComponentRange.try_from(err) is leaf
    True
    >>> str(err) == str(leaf)
    True
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

__all__ = [
    "TempusError",
    # leaves
    "ComponentRange",
    "ConversionRange",
    "IndeterminateOffset",
    "DifferentVariant",
    "InvalidFormatDescription",
    "UnclosedOpeningBracket",
    "InvalidComponentName",
    "InvalidModifier",
    "MissingComponentName",
    "InsufficientTypeInformation",
    "InvalidFormatComponent",
    "ParseFromDescription",
    "InvalidLiteral",
    "InvalidComponent",
    "UnexpectedTrailingCharacters",
    "InsufficientInformation",
    "InconsistentInformation",
    # containing kinds
    "TryFromParsed",
    "Format",
    "Parse",
    "Error",
]

_E = TypeVar("_E", bound=BaseException)


class TempusError(Exception):
    """Base class for every error raised by tempus."""

    @classmethod
    def try_from(cls: type[_E], err: BaseException) -> _E:
        """
        Narrow ``err`` to this kind.

        Walks the chain of containing kinds stored in ``err``. Returns the first error
        that is an instance of this kind. A containing kind that was flattened away (Parse
        inside Error) is rebuilt around the error stored in its place.

        Raises:
            DifferentVariant: If no stored error matches this kind.
        """
        found = _narrow(cls, err)
        if found is None:
            raise DifferentVariant()
        return found


# ============================================================================
# Leaf kinds
# ============================================================================


class ComponentRange(TempusError, ValueError):
    """
    A calendar component was outside its legal range.

    Attributes:
        name (str): Symbolic name of the component (e.g. "ordinal", "hour").
        minimum (int): Smallest legal value.
        maximum (int): Largest legal value.
        value (int): The rejected value.
        conditional_range (bool): True when the bounds depend on other values
            (e.g. the number of days in a month depends on the year and month).
    """

    def __init__(
        self,
        name: str,
        minimum: int,
        maximum: int,
        value: int,
        conditional_range: bool = False,
    ) -> None:
        super().__init__(name, minimum, maximum, value, conditional_range)
        self.name = name
        self.minimum = minimum
        self.maximum = maximum
        self.value = value
        self.conditional_range = conditional_range

    def __str__(self) -> str:
        text = f"{self.name} must be in the range {self.minimum}..={self.maximum}"
        if self.conditional_range:
            text += ", given values of other parameters"
        return text


class ConversionRange(TempusError, ValueError):
    """A value overflowed the target representation during a conversion."""

    def __str__(self) -> str:
        return "Source value is out of range for the target type"


class IndeterminateOffset(TempusError, ValueError):
    """An operation needed a UTC offset that was never supplied and cannot be assumed."""

    def __str__(self) -> str:
        return "The system's UTC offset could not be determined"


class DifferentVariant(TempusError, TypeError):
    """Narrowing was attempted into a kind that does not match the stored variant."""

    def __str__(self) -> str:
        return "value was of a different variant than required"


class InvalidFormatDescription(TempusError, ValueError):
    """
    Base class for grammar errors raised while compiling a format description.

    Attributes:
        index (int): 0-based byte offset into the description.
    """

    def __init__(self, index: int) -> None:
        super().__init__(index)
        self.index = index


class UnclosedOpeningBracket(InvalidFormatDescription):
    """A ``[`` has no matching ``]``."""

    def __str__(self) -> str:
        return f"unclosed opening bracket at byte index {self.index}"


class InvalidComponentName(InvalidFormatDescription):
    """The bracketed name is not a known component."""

    def __init__(self, name: str, index: int) -> None:
        super().__init__(index)
        self.name = name
        self.args = (name, index)

    def __str__(self) -> str:
        return f"invalid component name `{self.name}` at byte index {self.index}"


class InvalidModifier(InvalidFormatDescription):
    """A modifier token is not a recognized ``key:value`` for the active component."""

    def __init__(self, value: str, index: int) -> None:
        super().__init__(index)
        self.value = value
        self.args = (value, index)

    def __str__(self) -> str:
        return f"invalid modifier `{self.value}` at byte index {self.index}"


class MissingComponentName(InvalidFormatDescription):
    """The brackets are empty or contain only whitespace."""

    def __str__(self) -> str:
        return f"missing component name at byte index {self.index}"


class InsufficientTypeInformation(TempusError, ValueError):
    """The value type does not supply every component the description needs."""

    def __str__(self) -> str:
        return (
            "The type being formatted does not contain sufficient information to "
            "format a component."
        )


class InvalidFormatComponent(TempusError, ValueError):
    """A component value cannot be expressed in the requested (well-known) format."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"The {self.name} component cannot be formatted into the requested format."


class ParseFromDescription(TempusError, ValueError):
    """Base class for input that does not match one item of a format description."""


class InvalidLiteral(ParseFromDescription):
    """The input did not match a literal byte-for-byte."""

    def __str__(self) -> str:
        return "a character literal was not valid"


class InvalidComponent(ParseFromDescription):
    """
    A named component could not be decoded from the input.

    Attributes:
        name (str): Human name of the component (e.g. "week number").
    """

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"the '{self.name}' component could not be parsed"


class UnexpectedTrailingCharacters(TempusError, ValueError):
    """Input remained after every item of the description was matched."""

    def __str__(self) -> str:
        return "unexpected trailing characters; the end of input was expected"


class InsufficientInformation(TempusError, ValueError):
    """The parsed fields do not determine a unique value."""

    def __str__(self) -> str:
        return "the `Parsed` struct did not include enough information to construct the type"


class InconsistentInformation(TempusError, ValueError):
    """
    A parsed field contradicts the value determined by the other fields.

    Attributes:
        name (str): Name of the contradicting field (e.g. "weekday").
    """

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"the `{self.name}` component is inconsistent with the other parsed components"


# ============================================================================
# Containing kinds
# ============================================================================


class _Container(TempusError):
    """Holds exactly one wrapped error in ``inner``; display and cause delegate to it."""

    # Errors this kind stores as-is.
    _variants: ClassVar[tuple[type[BaseException], ...]] = ()
    # Leaf variants that expose no further cause.
    _causeless: ClassVar[tuple[type[BaseException], ...]] = ()
    # Containing kinds whose inner error is stored instead of the container itself.
    _flattened: ClassVar[tuple[type[_Container], ...]] = ()
    # (leaf, intermediate) pairs: the leaf is stored wrapped in the intermediate kind.
    _promotions: ClassVar[tuple[tuple[type[BaseException], type[_Container]], ...]] = ()

    inner: BaseException

    def __init__(self, inner: BaseException) -> None:
        inner = self._coerce(inner)
        super().__init__(inner)
        self.inner = inner
        self.__cause__ = None if isinstance(inner, self._causeless) else inner

    @classmethod
    def _coerce(cls, inner: Any) -> BaseException:
        while isinstance(inner, cls._flattened):
            inner = inner.inner
        if isinstance(inner, cls._variants):
            return inner
        for leaf, intermediate in cls._promotions:
            if isinstance(inner, leaf):
                return intermediate(inner)
        raise TypeError(f"{cls.__name__} cannot hold {type(inner).__name__}")

    def __str__(self) -> str:
        return str(self.inner)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inner!r})"


class TryFromParsed(_Container, ValueError):
    """Building a value from a Parsed accumulator failed."""

    _variants = (ComponentRange, InsufficientInformation, InconsistentInformation)
    _causeless = (InsufficientInformation, InconsistentInformation)


class Format(_Container, ValueError):
    """Formatting a value failed; an OSError from the output stream is kept as cause."""

    _variants = (InsufficientTypeInformation, InvalidFormatComponent, OSError)
    _causeless = (InsufficientTypeInformation, InvalidFormatComponent)

    def into_io_error(self) -> OSError:
        """
        Return the wrapped OSError.

        Raises:
            DifferentVariant: If this error does not carry an OSError.
        """
        if isinstance(self.inner, OSError):
            return self.inner
        raise DifferentVariant()


class Parse(_Container, ValueError):
    """Parsing text into a value failed."""

    _variants = (
        TryFromParsed,
        ParseFromDescription,
        UnexpectedTrailingCharacters,
        InvalidFormatDescription,
    )
    _causeless = (UnexpectedTrailingCharacters,)
    _promotions = (
        (ComponentRange, TryFromParsed),
        (InsufficientInformation, TryFromParsed),
        (InconsistentInformation, TryFromParsed),
    )


Parse._flattened = (Parse,)


class Error(_Container):
    """Universal error kind holding any error raised by tempus."""

    _variants = (
        ConversionRange,
        ComponentRange,
        IndeterminateOffset,
        Format,
        ParseFromDescription,
        UnexpectedTrailingCharacters,
        TryFromParsed,
        InvalidFormatDescription,
        DifferentVariant,
    )
    _causeless = (UnexpectedTrailingCharacters,)
    _flattened = (Parse,)
    _promotions = (
        (InsufficientInformation, TryFromParsed),
        (InconsistentInformation, TryFromParsed),
        (InsufficientTypeInformation, Format),
        (InvalidFormatComponent, Format),
        (OSError, Format),
    )


Error._flattened = (Parse, Error)


def _narrow(cls: type[_E], err: BaseException) -> _E | None:
    current = err
    while True:
        if isinstance(current, cls):
            return current
        if not isinstance(current, _Container):
            return None
        inner = current.inner
        # Only a container that flattened ``cls`` on the way in may be rebuilt.
        if (
            issubclass(cls, _Container)
            and cls in type(current)._flattened
            and isinstance(inner, cls._variants)
        ):
            return cls(inner)  # type: ignore[return-value]
        current = inner
