from collections import namedtuple


class ArrayStrategy:
    "How sequences are reconciled, see diffit.diffing.arrays."
    REPLACE = "replace"
    SMART = "smart"
    APPEND = "append"
    MERGE = "merge"

    ALL = (REPLACE, SMART, APPEND, MERGE)


class ZeroValueHandling:
    "What to emit when a scalar changes to its type's zero value."
    AS_UNSET = "unset"
    AS_SET = "set"
    IGNORE = "ignore"

    ALL = (AS_UNSET, AS_SET, IGNORE)


FieldDiff = namedtuple("FieldDiff", ["operation", "value", "path"])


class FieldComparer(object):
    """Base class for custom field comparers.

    Comparers are registered per field path on the DiffConfig. They are
    kept as an extension point and are not consulted by the built-in
    comparators.
    """

    def compare(self, old_value, new_value):
        "Return a FieldDiff describing the change from old_value to new_value."
        raise NotImplementedError


class DiffConfig:
    """Set of options to pass around during one diff"""

    def __init__(self, *, ignore_fields=None, array_strategy=ArrayStrategy.REPLACE,
                 zero_value_handling=ZeroValueHandling.AS_SET,
                 detect_pointer_sharing=False, custom_comparers=None):
        if array_strategy not in ArrayStrategy.ALL:
            raise ValueError('Invalid array strategy %r, expected one of %r' % (
                array_strategy, ArrayStrategy.ALL))
        if zero_value_handling not in ZeroValueHandling.ALL:
            raise ValueError('Invalid zero value handling %r, expected one of %r' % (
                zero_value_handling, ZeroValueHandling.ALL))
        if isinstance(ignore_fields, str):
            ignore_fields = [ignore_fields]

        self.ignore_fields = frozenset(ignore_fields or ())
        self.array_strategy = array_strategy
        self.zero_value_handling = zero_value_handling
        self.detect_pointer_sharing = bool(detect_pointer_sharing)
        self.custom_comparers = {}
        for path, comparer in (custom_comparers or {}).items():
            self.with_custom_comparer(path, comparer)

    def with_custom_comparer(self, path, comparer):
        """Register a custom comparer for a field path.

        Returns the config to allow chaining.
        """
        if not isinstance(comparer, FieldComparer):
            raise TypeError('Custom comparer for %r must be a FieldComparer, got %r' % (
                path, comparer))
        self.custom_comparers[path] = comparer
        return self

    def is_ignored(self, *names):
        "Return True if any of the given names (short, external or full path) is ignored."
        return any(name in self.ignore_fields for name in names)

    def __copy__(self):
        return DiffConfig(
            ignore_fields=self.ignore_fields,
            array_strategy=self.array_strategy,
            zero_value_handling=self.zero_value_handling,
            detect_pointer_sharing=self.detect_pointer_sharing,
            custom_comparers=self.custom_comparers.copy(),
        )

    def __repr__(self):
        return ('DiffConfig(ignore_fields=%r, array_strategy=%r, zero_value_handling=%r, '
                'detect_pointer_sharing=%r)' % (
                    sorted(self.ignore_fields), self.array_strategy,
                    self.zero_value_handling, self.detect_pointer_sharing))
