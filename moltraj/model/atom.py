from __future__ import annotations

from dataclasses import dataclass, field

from moltraj.model.property import HasProperties, PropertyMap


@dataclass(frozen=True)
class Atom(HasProperties):
    """Single atom identity: display name and element symbol.

    Either may be empty when the file does not provide it. Properties are
    mutable metadata and do not take part in equality.
    """

    name: str = ""
    element: str = ""
    properties: PropertyMap = field(default_factory=PropertyMap, compare=False, repr=False)

    @property
    def is_blank(self) -> bool:
        return not self.name and not self.element

    def copy(self) -> "Atom":
        return Atom(self.name, self.element, self.properties.copy())
