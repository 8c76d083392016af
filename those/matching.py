"""
The matcher: decides whether a candidate value is "alike" a match specification.

A match specification is compiled once into one of the MatchSpec variants and
then evaluated against each element. The variants are:

- AnySpec: no constraint at all, matches every element.
- AbsentSpec: None (or a missing property), matches only absent values.
- LiteralSpec: strings, numbers, dates and booleans, plus opaque values, matched
  by kind and equality.
- PredicateSpec: a callable invoked as predicate(element, index, sequence).
- PatternSpec: a partial object (mapping, object attributes or positions), every
  property it names must match, others are ignored.
"""
from __future__ import annotations

import dataclasses
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Sequence

from .common import ANY, MISSING, ABSENT_KINDS, LITERAL_KINDS, Kind, Policy, kind_of, get_property, \
    own_properties
from .exceptions import ThosePredicateException

_logger = logging.getLogger(__name__)

DEFAULT_POLICY = Policy()


def _is_absent(value) -> bool:
    return value is None or value is MISSING


class MatchSpec(ABC):
    """
    Abstract base class of every compiled match specification.
    """

    @staticmethod
    def compile(spec, policy: Policy | None = None) -> MatchSpec:
        """
        Compile a raw match argument into its MatchSpec variant.

        :param spec: A literal, a predicate, a partial pattern, None or ANY.
        :param policy: Selects alike/exact matching and predicate error handling.
        :return: The compiled specification.
        """
        policy = policy or DEFAULT_POLICY
        if isinstance(spec, MatchSpec):
            return spec
        if spec is ANY:
            return AnySpec()

        kind = kind_of(spec)
        if kind in ABSENT_KINDS:
            return AbsentSpec()
        elif kind in LITERAL_KINDS:
            return LiteralSpec(spec)
        elif kind == Kind.FUNCTION:
            return PredicateSpec(spec, on_error=policy.on_predicate_error)
        else:
            properties = own_properties(spec)
            if properties is None:
                return LiteralSpec(spec)
            return PatternSpec(spec, properties, policy)

    @abstractmethod
    def match(self, source, index: int | None = None, sequence: Sequence | None = None) -> bool:
        """
        Evaluate the specification against one candidate.

        :param source: The candidate element (or nested property value).
        :param index: Position of the element in the sequence being searched.
        :param sequence: The sequence being searched, handed to predicates.
        :return: True when the candidate is alike the specification.
        """


class AnySpec(MatchSpec):
    def match(self, source, index=None, sequence=None):
        return True


class AbsentSpec(MatchSpec):
    def match(self, source, index=None, sequence=None):
        return _is_absent(source)


class LiteralSpec(MatchSpec):
    value: object
    kind: Kind

    def __init__(self, value):
        self.value = value
        self.kind = kind_of(value)

    def match(self, source, index=None, sequence=None):
        if _is_absent(source):
            return False
        # No coercion: True is not 1 and '1' is not 1
        return kind_of(source) == self.kind and source == self.value


def _positional_arity(fn: Callable) -> int:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return 1
    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind == inspect.Parameter.VAR_POSITIONAL:
            return 3
        if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return min(count, 3)


class PredicateSpec(MatchSpec):
    """
    Delegates to a caller supplied callable. The callable receives as many of
    (element, index, sequence) as it accepts positionally.
    """
    predicate: Callable[..., Any]
    on_error: str

    def __init__(self, predicate: Callable[..., Any], on_error: str = 'raise'):
        self.predicate = predicate
        self.on_error = on_error
        self._arity = _positional_arity(predicate)

    def match(self, source, index=None, sequence=None):
        if _is_absent(source):
            return False
        arguments = (source, index, sequence)[:self._arity]
        try:
            return bool(self.predicate(*arguments))
        except Exception as e:
            if self.on_error == 'ignore':
                _logger.warning(f'Predicate {self.predicate!r} failed on element at {index}: {e!r}')
                return False
            if self.on_error == 'wrap':
                raise ThosePredicateException(
                    message=f'Predicate {self.predicate!r} failed on element at {index}: {e}') from e
            raise


class PatternSpec(MatchSpec):
    """
    Partial object match. Every property named by the pattern must exist in the
    candidate with the same kind and must itself match; nested arrays must hold
    the same elements in any order. In exact mode the candidate may not carry
    properties the pattern does not name.
    """
    value: object
    properties: list[tuple[object, object]]
    policy: Policy

    def __init__(self, value, properties: list[tuple[object, object]], policy: Policy):
        self.value = value
        self.properties = properties
        self.policy = policy
        self.exact = policy.matching == 'exact'
        self._compiled: dict[int, MatchSpec] = {}

    def _nested(self, position: int, expected) -> MatchSpec:
        compiled = self._compiled.get(position)
        if compiled is None:
            compiled = MatchSpec.compile(expected, self.policy)
            self._compiled[position] = compiled
        return compiled

    def match(self, source, index=None, sequence=None):
        if _is_absent(source):
            return False
        if self.exact and kind_of(source) != kind_of(self.value):
            return False

        for position, (name, expected) in enumerate(self.properties):
            actual = get_property(source, name)
            expected_kind = kind_of(expected)
            if expected_kind != kind_of(actual):
                return False
            if expected_kind == Kind.ARRAY:
                # Nested arrays must contain exactly the same items
                if not has_only(expected, actual, self.policy):
                    return False
            elif not self._nested(position, expected).match(actual, index, sequence):
                return False

        if self.exact:
            names = {name for name, _ in self.properties}
            for name, _ in own_properties(source) or ():
                if name not in names:
                    return False
        return True


def are_alike(source, spec, index: int | None = None, sequence: Sequence | None = None,
              policy: Policy | None = None) -> bool:
    """Subset match: every property the specification names must match in source."""
    return MatchSpec.compile(spec, policy).match(source, index, sequence)


def are_exact(source, spec, index: int | None = None, sequence: Sequence | None = None,
              policy: Policy | None = None) -> bool:
    """Full bidirectional structural match of source and specification."""
    policy = dataclasses.replace(policy or DEFAULT_POLICY, matching='exact')
    return MatchSpec.compile(spec, policy).match(source, index, sequence)


def find_index(items: Sequence, spec, policy: Policy | None = None, sequence: Sequence | None = None) -> int:
    """
    Position of the first item alike spec, or -1.

    :param sequence: What predicates receive as their third argument, items itself by default.
    """
    compiled = MatchSpec.compile(spec, policy)
    sequence = items if sequence is None else sequence
    for i, item in enumerate(items):
        if compiled.match(item, i, sequence):
            return i
    return -1


def has_all(items: Sequence, specs: Iterable, policy: Policy | None = None,
            sequence: Sequence | None = None) -> bool:
    for spec in specs:
        if find_index(items, spec, policy, sequence) == -1:
            return False
    return True


def has_any(items: Sequence, specs: Iterable, policy: Policy | None = None,
            sequence: Sequence | None = None) -> bool:
    for spec in specs:
        if find_index(items, spec, policy, sequence) != -1:
            return True
    return False


def has_only(items: Sequence, specs: Iterable, policy: Policy | None = None,
             sequence: Sequence | None = None) -> bool:
    """
    Same length and every spec matches at least one item. This is not a one to
    one pairing: [a, a] passes against [a, b].
    """
    specs = list(specs)
    if len(items) != len(specs):
        return False
    return has_all(items, specs, policy, sequence)
