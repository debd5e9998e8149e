from enum import Enum


class ReferenceKind(str, Enum):
    """Defines how a raw dependency token names its target.

    Attributes:
        IDENTIFIER: One specific component, by its unique id.
        COLLECTION: Every component of a type, as an ordered group.
        TYPE: The single component of a type.
    """

    IDENTIFIER = "identifier"
    COLLECTION = "collection"
    TYPE = "type"

    def __str__(self) -> str:
        return self.value
