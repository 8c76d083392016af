from __future__ import annotations

import functools
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from .common import ANY, MISSING, Policy, is_array, resolve_path
from .exceptions import ThoseValidationException
from .matching import MatchSpec, find_index, has_all, has_any, has_only
from .ordering import KeyOrFn, compare, greater, lower

_logger = logging.getLogger(__name__)

T = TypeVar('T')

IN_PLACE_ATTR = '__those_in_place__'


def in_place(method):
    """Tag an operation that mutates the sequence and returns the same instance."""
    setattr(method, IN_PLACE_ATTR, True)
    return method


class Those(Generic[T]):
    """
    A queryable copy of a list, or of the values of a mapping.

    Operations come in two families. In-place operations (see
    IN_PLACE_OPERATIONS) mutate this instance and return it for chaining; every
    other operation leaves it untouched and returns a bool, an element, an index,
    a plain list or a new Those.
    """
    IN_PLACE_OPERATIONS: frozenset[str] = frozenset()

    _items: list[T]
    policy: Policy

    def __init__(self, source: Sequence[T] | Mapping[Any, T] | Those[T], policy: Optional[Policy] = None):
        if isinstance(source, Those):
            items = list(source._items)
            policy = policy or source.policy
            origin = 'Those'
        elif isinstance(source, Mapping):
            items = list(source.values())
            origin = 'mapping'
        elif is_array(source):
            items = list(source)
            origin = type(source).__name__
        else:
            raise ThoseValidationException(
                message=f'those() expects a list, a tuple or a mapping, got {type(source).__name__}')
        self._items = items
        self.policy = policy or Policy.from_environ()
        _logger.debug(f'Built sequence of {len(items)} elements from {origin}')

    @classmethod
    def _wrap(cls, items: list[T], policy: Policy) -> Those[T]:
        # Adopt an already private list, no copy
        obj = cls.__new__(cls)
        obj._items = items
        obj.policy = policy
        return obj

    # Container protocol
    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._items)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return self._wrap(self._items[item], self.policy)
        return self._items[item]

    def __eq__(self, other):
        if isinstance(other, Those):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f'those({self._items!r})'

    def to_list(self) -> list[T]:
        return list(self._items)

    def copy(self) -> Those[T]:
        return self._wrap(list(self._items), self.policy)

    def with_policy(self, policy: Policy) -> Those[T]:
        return self._wrap(list(self._items), policy)

    # Match array predicates
    def has_all(self, specs: Iterable[Any]) -> bool:
        """True when every spec matches at least one element."""
        return has_all(self._items, specs, self.policy, self)

    def has_any(self, specs: Iterable[Any]) -> bool:
        """True when at least one spec matches at least one element."""
        return has_any(self._items, specs, self.policy, self)

    def has_only(self, specs: Iterable[Any]) -> bool:
        """
        True when there are as many specs as elements and every spec matches at
        least one element. Several specs may match the same element.
        """
        return has_only(self._items, specs, self.policy, self)

    # Match argument predicates
    def has(self, spec: Any) -> bool:
        return find_index(self._items, spec, self.policy, self) != -1

    def first(self, spec: Any = ANY) -> Optional[T]:
        """
        Return the first element that matches, or None if no match is found.

        :param spec: A predicate(element, index, sequence), a partial pattern whose
                     properties must all exist in the element, or a literal compared
                     by kind and value. Left out, the first element is returned.
        """
        i = find_index(self._items, spec, self.policy, self)
        return self._items[i] if i != -1 else None

    def index(self, spec: Any = ANY) -> int:
        return find_index(self._items, spec, self.policy, self)

    def for_first(self, spec: Any, on_found: Callable[[T], Any],
                  on_not_found: Optional[Callable[[Any], Any]] = None) -> None:
        """
        Call on_found(element) with the first match, or on_not_found(spec) when
        nothing matches and a callback was given.
        """
        i = find_index(self._items, spec, self.policy, self)
        if i != -1:
            on_found(self._items[i])
        elif on_not_found is not None:
            on_not_found(spec)

    # Match argument filtering
    @in_place
    def flick(self, spec: Any = ANY, on_flick: Optional[Callable[[list[T]], Any]] = None) -> Those[T]:
        """
        Remove the first element that matches, or the first element if no spec is
        given. on_flick receives the removed element wrapped in a one item list.
        """
        i = find_index(self._items, spec, self.policy, self)
        if i != -1:
            flicked = self._items[i:i + 1]
            del self._items[i]
            _logger.debug(f'Flicked element at {i}')
            if on_flick is not None:
                on_flick(flicked)
        return self

    def like(self, spec: Any) -> Those[T]:
        compiled = MatchSpec.compile(spec, self.policy)
        items = self._items
        return self._wrap([item for i, item in enumerate(items) if compiled.match(item, i, self)], self.policy)

    def not_like(self, spec: Any) -> Those[T]:
        compiled = MatchSpec.compile(spec, self.policy)
        items = self._items
        return self._wrap([item for i, item in enumerate(items) if not compiled.match(item, i, self)], self.policy)

    @in_place
    def toggle(self, item: Any) -> Those[T]:
        """
        Remove the first element alike item if there is one, otherwise append item.
        """
        i = find_index(self._items, item, self.policy, self)
        if i != -1:
            del self._items[i]
            _logger.debug(f'Toggled off element at {i}')
        else:
            self._items.append(item)
            _logger.debug(f'Toggled on element at {len(self._items) - 1}')
        return self

    # Misc manipulation
    @in_place
    def flip(self) -> Those[T]:
        self._items.reverse()
        return self

    def top(self, num: Optional[int]) -> Those[T]:
        """
        The first num elements, or all of them if num is greater than the length.
        """
        return self._wrap(self._items[:num], self.policy)

    def last(self, num: Optional[int]) -> Those[T]:
        """
        The last num elements, or all of them if num is greater than the length.
        """
        if num is None:
            return self._wrap(list(self._items), self.policy)
        return self._wrap(self._items[-num:], self.policy)

    @in_place
    def order(self, key: KeyOrFn = None) -> Those[T]:
        """
        Sort in place by a property name, a dotted path or a projection callable.
        Strings sort case insensitively with numbers compared by value. The sort
        is stable.
        """
        _logger.debug(f'Ordering {len(self._items)} elements by {key!r}')
        self._items.sort(key=functools.cmp_to_key(lambda a, b: compare(a, b, key)))
        return self

    @in_place
    def order_desc(self, key: KeyOrFn = None) -> Those[T]:
        _logger.debug(f'Ordering {len(self._items)} elements by {key!r} descending')
        self._items.sort(key=functools.cmp_to_key(lambda a, b: compare(a, b, key, descending=True)))
        return self

    # Calculate and extrude
    def pluck(self, key: str) -> list[Any]:
        """
        Return a plain list with the value of a property for every element, None
        where the element does not have it.
        """
        plucked = []
        for item in self._items:
            value = resolve_path(item, key)
            plucked.append(None if value is MISSING else value)
        return plucked

    def _present_values(self, key: str) -> Iterator[Any]:
        for item in self._items:
            value = resolve_path(item, key)
            if value is not None and value is not MISSING:
                yield value

    def max(self, key: str) -> Any:
        result = None
        for value in self._present_values(key):
            if result is None or greater(value, result):
                result = value
        return result

    def min(self, key: str) -> Any:
        result = None
        for value in self._present_values(key):
            if result is None or lower(value, result):
                result = value
        return result


Those.IN_PLACE_OPERATIONS = frozenset(
    name for name, member in vars(Those).items() if getattr(member, IN_PLACE_ATTR, False))

Sequence.register(Those)


def those(source: Sequence[T] | Mapping[Any, T] | Those[T], policy: Optional[Policy] = None) -> Those[T]:
    """
    Entry point: wrap a copy of a list, or the values of a mapping, into a queryable Those.

    Without a policy, the environment (THOSE_MATCHING, THOSE_ON_PREDICATE_ERROR)
    is read on every call. An invalid value there makes the call raise
    ThoseValidationException naming the variable.
    """
    return Those(source, policy)
