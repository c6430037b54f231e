"""Runtime support imported by generated bindings modules."""

from typing import Any, ClassVar, NewType, Optional

ID = NewType("ID", str)


class BindingWrapper:
    """Base class of the generated wrappers.

    A wrapper owns one implementation object and delegates every schema field
    to the method of the same name on it.
    """

    graphql_name: ClassVar[str] = ""
    # Name of the context type the resolvers take, None when they take none
    context_type: ClassVar[Optional[str]] = None

    def __init__(self, impl_: Any):
        self.impl_ = impl_

    def __repr__(self):
        return f"{type(self).__name__}({self.impl_!r})"


class _EmptyRoot:
    """No-op root operation type: it exposes no fields."""

    __slots__ = ()

    def __bool__(self):
        return False

    def __eq__(self, other):
        return type(other) is type(self)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f"{type(self).__name__}()"


class EmptyMutation(_EmptyRoot):
    """Mutation capability of a schema that declares no mutations."""


class EmptySubscription(_EmptyRoot):
    """Subscription capability of a schema that declares no subscriptions."""
