# Fluent querying over copies of lists and mapping values.
# those(items).like({...}).order('name').first() and friends, without patching any builtin type.

from .exceptions import ThoseBaseException, ThoseValidationException, ThosePredicateException
from .common import ANY, MISSING, Kind, kind_of, Policy, load_policy
from .matching import MatchSpec, AnySpec, AbsentSpec, LiteralSpec, PredicateSpec, PatternSpec, \
    are_alike, are_exact
from .ordering import compare, natural_key
from .sequence import Those, those, in_place

__version__ = '1.0.0'
