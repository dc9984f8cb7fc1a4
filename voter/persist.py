'''Serialization of tally setups and results to JSON-ready structures.

Results are handed over to renderers outside the ranking engine, which
usually want plain dictionaries, lists, strings and numbers. The functions
here turn the objects used by Voter into such structures. There is no way
back; Voter does not store ballots or results.
'''

import inspect
from fractions import Fraction
from typing import Any, Callable, Dict, List


ZERO_PARAMS: List[str] = ['args', 'kwargs']


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The resulting method will serialize all object attributes corresponding
    to the class's constructor parameter names. Therefore, this decorator
    is only useful when the class stores all its original parameters
    unchanged.

    :param class_: The class to add the method to.
    '''
    if hasattr(class_, 'serialize_params'):
        param_names = class_.serialize_params
    else:
        param_names = list(inspect.signature(
            class_.__init__
        ).parameters.keys())
        if 'self' in param_names:
            param_names.remove('self')
        if param_names == ZERO_PARAMS and class_.__init__ == object.__init__:
            param_names = []

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {'class': scoped_class_name(self)}
        for attr in param_names:
            out_dict[attr] = serialize_value(getattr(self, attr))
        return out_dict

    class_.to_dict = to_dict
    return class_


def serialize_value(value: Any) -> Any:
    '''Convert a value to a JSON-ready structure.

    Dictionaries keyed by candidate pairs (such as pairwise preference
    counts) are nested as ``{upper: {lower: count}}``. Sets are listed in
    sorted order.

    :raises ValueError: If the value cannot be serialized.
    '''
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif type(value) in CONVERTIBLE_TYPES:
        return CONVERTIBLE_TYPES[type(value)](value)
    elif hasattr(value, 'items') and hasattr(value, 'keys'):
        if value and all(_is_pair(key) for key in value.keys()):
            nested = {}
            for (upper, lower), val in value.items():
                nested.setdefault(upper, {})[lower] = serialize_value(val)
            return nested
        else:
            return {
                str(key): serialize_value(val) for key, val in value.items()
            }
    elif isinstance(value, (set, frozenset)):
        return [serialize_value(val) for val in sorted(value)]
    elif hasattr(value, '__iter__'):
        return [serialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def _is_pair(key: Any) -> bool:
    return (
        isinstance(key, tuple) and len(key) == 2
        and all(isinstance(item, str) for item in key)
    )


def scoped_class_name(value: Any) -> str:
    cls = value.__class__
    return '.'.join((cls.__module__, cls.__name__))


def fraction_to_json(f: Fraction) -> Dict[str, Any]:
    return {'type': 'Fraction', 'arguments': list(f.as_integer_ratio())}


ATOMIC_TYPES: List[type] = [
    str, int, float, bool, type(None),
]

CONVERTIBLE_TYPES: Dict[type, Callable] = {
    Fraction: fraction_to_json,
}
