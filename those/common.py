"""
Basic definitions shared by the matcher, the comparator and the sequence wrapper
"""
from __future__ import annotations

import configparser
import datetime
import enum
import numbers
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .exceptions import ThoseValidationException


class _Sentinel(object):
    __slots__ = ('_name',)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self):
        return self._name

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


# A property that does not exist on the inspected value
MISSING = _Sentinel('MISSING')

# No match specification at all: "the first element" / "no constraint"
ANY = _Sentinel('ANY')


class Kind(str, enum.Enum):
    """
    Normalized kind of a value, used by the matcher to decide whether two values
    can be compared at all.
    """
    UNDEFINED = 'undefined'
    NULL = 'null'
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    STRING = 'string'
    DATE = 'date'
    FUNCTION = 'function'
    ARRAY = 'array'
    OBJECT = 'object'


LITERAL_KINDS = frozenset((Kind.STRING, Kind.NUMBER, Kind.DATE, Kind.BOOLEAN))
ABSENT_KINDS = frozenset((Kind.UNDEFINED, Kind.NULL))


def is_array(value) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def kind_of(value) -> Kind:
    """
    Get the normalized kind of a value.

    bool is checked before numbers, as bool is an int subclass. Classes are
    callable but they are reported as objects, never as predicates.
    """
    if value is MISSING:
        return Kind.UNDEFINED
    if value is None:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, numbers.Number):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, (datetime.date, datetime.time)):
        return Kind.DATE
    if isinstance(value, type):
        return Kind.OBJECT
    if callable(value):
        return Kind.FUNCTION
    if is_array(value):
        return Kind.ARRAY
    return Kind.OBJECT


def get_property(source, key):
    """
    Read a single property of a value. Mappings are read by key, arrays by
    integer position and anything else by attribute name. Arrays and strings
    have no named properties, their methods are not exposed.

    :return: the property value or MISSING, never raises for an absent property.
    """
    if source is None or source is MISSING:
        return MISSING
    if isinstance(source, Mapping):
        return source.get(key, MISSING)
    if is_array(source):
        if isinstance(key, int) and not isinstance(key, bool) and -len(source) <= key < len(source):
            return source[key]
        return MISSING
    if isinstance(source, (str, bytes, bytearray)):
        return MISSING
    if isinstance(key, str):
        return getattr(source, key, MISSING)
    return MISSING


def resolve_path(source, key):
    """
    Like get_property, but a dotted key ('subwidget.id') descends into nested
    values when the literal key is not present.
    """
    value = get_property(source, key)
    if value is not MISSING or not isinstance(key, str) or '.' not in key:
        return value
    cur = source
    for part in key.split('.'):
        cur = get_property(cur, part)
        if cur is MISSING:
            return MISSING
    return cur


def own_properties(value) -> list[tuple[object, object]] | None:
    """
    Enumerate the (name, value) pairs a value exposes for pattern matching.

    :return: the properties, or None when the value is opaque (no mapping items,
             no positions and no instance attributes). Classes are opaque.
    """
    if isinstance(value, type):
        return None
    if isinstance(value, Mapping):
        return list(value.items())
    if is_array(value):
        return list(enumerate(value))

    props = []
    has_dict = hasattr(value, '__dict__')
    if has_dict:
        props.extend(vars(value).items())
    seen = {name for name, _ in props}
    for cls in type(value).__mro__:
        slots = cls.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ('__dict__', '__weakref__') or name in seen:
                continue
            seen.add(name)
            if hasattr(value, name):
                props.append((name, getattr(value, name)))

    if not props and not has_dict and not seen:
        return None
    return props


MATCHING_MODES = ('alike', 'exact')
PREDICATE_ERROR_MODES = ('raise', 'wrap', 'ignore')


@dataclass
class Policy:
    """Behaviour switches for a Those sequence.

    matching: 'alike' | 'exact'
    on_predicate_error: 'raise' | 'wrap' | 'ignore'
    """
    matching: str = "alike"
    on_predicate_error: str = "raise"

    def __post_init__(self):
        if self.matching not in MATCHING_MODES:
            raise ThoseValidationException(
                message=f'Unknown matching mode: {self.matching!r}, expected one of {MATCHING_MODES}')
        if self.on_predicate_error not in PREDICATE_ERROR_MODES:
            raise ThoseValidationException(
                message=f'Unknown predicate error mode: {self.on_predicate_error!r}, '
                        f'expected one of {PREDICATE_ERROR_MODES}')

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> Policy:
        """
        Build a Policy from THOSE_MATCHING and THOSE_ON_PREDICATE_ERROR.

        :raise ThoseValidationException: naming the offending variable.
        """
        env = os.environ if environ is None else environ
        matching = env.get('THOSE_MATCHING', 'alike').strip().lower()
        on_predicate_error = env.get('THOSE_ON_PREDICATE_ERROR', 'raise').strip().lower()
        try:
            return cls(matching=matching, on_predicate_error=on_predicate_error)
        except ThoseValidationException as e:
            raise ThoseValidationException(
                message=f'Invalid THOSE_MATCHING={matching!r} or THOSE_ON_PREDICATE_ERROR='
                        f'{on_predicate_error!r} in the environment: {e.message}') from e


def load_policy(path: str, section: str = 'those') -> Policy:
    """
    Read a Policy from an INI file. Keys left out of the file keep their
    defaults, a missing section yields the default policy.

    :param path: The INI file to read.
    :param section: The section holding the keys 'matching' and 'on_predicate_error'.
    """
    config_data = configparser.ConfigParser()
    if not config_data.read(path):
        raise ThoseValidationException(message=f'Policy file not found: {path}')
    if not config_data.has_section(section):
        return Policy()
    values = config_data[section]
    return Policy(
        matching=values.get('matching', 'alike').strip().lower(),
        on_predicate_error=values.get('on_predicate_error', 'raise').strip().lower(),
    )
