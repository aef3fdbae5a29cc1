"""
Optics utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the declaration modules (arguments, options, commands,
  subcommands) so they read, print and validate the same way.

Overview
- UnsetType / Unset
  • Singleton sentinel for "no value yet". Readers of repeated options receive it
    as their accumulator on the first occurrence, so None stays a legitimate value.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, keep every other value (None, 0, "" ...).

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables.

- mirror("attr")
  • Read-only property over a private backing field (self._attr). Containers are
    handed out as fresh copies so callers cannot mutate a spec through its API.

- SpecType
  • Metaclass for every spec class: derives __typename__, publishes the fields in
    __introspectable__ through mirror(), and provides __repr__/__rich_repr__.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import builtins
import functools
import operator
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a per-process singleton.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns the given object unless it is Unset, in which case the default is
    returned. Falsey values such as None, 0, "" or [] are preserved as-is.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy container values.

    - Sequence (non-string): new list, elements processed.
    - Mapping: new dict, same keys, values processed.
    - Set: new set, elements processed.
    - Anything else: returned as-is, with Unset materialized as None.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return coalesce(object)


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Container values are returned as copies (see _immortalize), so mutating what
    the property returns never changes the spec itself.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


class SpecType(type):
    """
    Metaclass that turns plain classes into read-only, introspectable specs.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in construction errors ("required-argument 'name' must be a string").
    - Publish every name listed in __introspectable__ as a mirror() property.
    - Provide a stable __repr__ and a __rich_repr__ for rich's pretty printer.

    Conventions
    - __displayable__ (if set) narrows the fields shown by the representations;
      otherwise __introspectable__ is used.
    - Subclasses inherit the properties of their bases; re-listing a field is
      harmless.
    """
    __introspectable__ = ()
    __displayable__ = None

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
            **options,
        )

        if "__repr__" not in namespace:
            @rename("__repr__")
            def __repr__(self):
                return "%s(%s)" % (
                    type(self).__typename__,
                    ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
                )
            self.__repr__ = __repr__

        if "__rich_repr__" not in namespace:
            @rename("__rich_repr__")
            def __rich_repr__(self):
                """
                Yield (name, value) pairs for pretty printers (e.g., rich).
                """
                for field in type(self).__displayable__ or type(self).__introspectable__:
                    yield field, getattr(self, field)
            self.__rich_repr__ = __rich_repr__

        return self


Unset = UnsetType()
"""
Sentinel for "not provided".

Notes
- Singleton: there is only one Unset instance.
- Distinct from None: equality and identity checks must not treat it as None.
- Falsey: bool(Unset) is False.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",
    "SpecType",

    # Constants
    "Unset",
)
