def quote(val):
    return "'" + str(val) + "'" if val is not None else "None"


class StringerMixin:

    def __str__(self):
        """
        the class name followed by the instance attributes in key order,
        e.g. LinearCodec:{'high': '1.0', 'low': '-1.0'}
        """
        return type(self).__name__ + ':' + self._sorted_items_string()

    def _sorted_items_string(self):
        return "{" + ", ".join("'%s': %s" % (key, quote(val)) for key, val in sorted(vars(self).items())) + "}"


class CommonEqualityMixin:
    """ equality for value objects: same class, equal attributes. Instances are not hashable. """

    def __eq__(self, other):
        return type(other) is type(self) and vars(self) == vars(other)

    def __ne__(self, other):
        return not self.__eq__(other)
