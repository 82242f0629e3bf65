"""
Attribute implementation for the document tree.
"""

from typing import Optional


class Attr:
    """
    An attribute of an element.

    Attributes are compared by identity: two attributes with the same key
    and value on different elements are different attributes.
    """

    __slots__ = ('key', 'value', 'namespace', 'owner_element')

    def __init__(self, key: str, value: str, namespace: Optional[str] = None,
                 owner_element: Optional['Element'] = None):
        """
        Initialize a new attribute.

        Args:
            key: The attribute name, without namespace prefix
            value: The attribute value
            namespace: The namespace prefix for foreign attributes such as
                ``xlink:href``, otherwise None
            owner_element: The element that owns this attribute
        """
        self.key = key
        self.value = value
        self.namespace = namespace
        self.owner_element = owner_element

    @property
    def name(self) -> str:
        """Qualified name as written in markup."""
        if self.namespace:
            return f"{self.namespace}:{self.key}"
        return self.key

    def __repr__(self):
        return f"Attr({self.name!r}, {self.value!r})"
