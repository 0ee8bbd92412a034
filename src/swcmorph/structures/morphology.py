import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..errors import SectionNotFoundError
from .section import Section
from .soma import Soma

logger = logging.getLogger(__name__)

ORPHANS = "orphans"


class Morphology:
    """
    The anatomy of a neuron: an optional soma and a set of sections.

    A morphology is built once, from a parse or from its flat ("raw") description,
    and is not modified afterwards. The only state that changes is the cache of
    special sections (see `find_special_sections`), which is filled on demand and
    dropped only when asked to.

    Args:
        sections (Iterable[Section]): The sections, with their parent/children ids set.
        soma (Optional[Soma]): The soma, None if the trace has none.
        morphology_id: Free label of the morphology, e.g. the name of the source file.
    """

    def __init__(
        self,
        sections: Iterable[Section] = (),
        soma: Optional[Soma] = None,
        morphology_id: Optional[Any] = None,
    ):
        self.id = morphology_id
        self._soma = soma
        self._sections: Dict[int, Section] = {s.id: s for s in sections}
        self._special_sections: Dict[str, List[Section]] = {}

    def __repr__(self) -> str:
        return f"Morphology(id={self.id!r}, soma={self._soma!r}, sections={len(self._sections)})"

    @property
    def soma(self) -> Optional[Soma]:
        return self._soma

    @property
    def sections(self) -> List[Section]:
        """All the sections, as a list."""
        return list(self._sections.values())

    @property
    def number_of_sections(self) -> int:
        return len(self._sections)

    def is_empty(self) -> bool:
        return self._soma is None and not self._sections

    def get_section(self, section_id: int) -> Section:
        """
        Raises:
            SectionNotFoundError: If no section has this id.
        """
        try:
            return self._sections[section_id]
        except KeyError:
            raise SectionNotFoundError(section_id) from None

    def get_parent(self, section: Section) -> Optional[Section]:
        if section.parent_id is None:
            return None
        return self.get_section(section.parent_id)

    def get_children(self, section: Section) -> List[Section]:
        return [self.get_section(child_id) for child_id in section.children_ids]

    def get_orphan_sections(self, force: bool = False) -> List[Section]:
        """
        Sections with no parent section, i.e. attached directly to the soma.

        Args:
            force (bool): Recompute the list instead of returning the cached one.
        """
        return self.find_special_sections(ORPHANS, lambda s: s.parent_id is None, force=force)

    def find_special_sections(
        self, name: str, selector: Callable[[Section], bool], force: bool = False
    ) -> List[Section]:
        """
        Selects a subset of the sections and caches it under `name`.

        The selection is only run the first time a name is requested, or when
        `force` is True. Later calls return the cached subset even if they pass
        another selector.

        Args:
            name (str): Name of the subset, used as cache key.
            selector (Callable[[Section], bool]): Returns True for the sections to keep.
            force (bool): Run the selection again and replace the cached subset.

        Returns:
            List[Section]: The selected sections.
        """
        if force or name not in self._special_sections:
            self._special_sections[name] = [s for s in self._sections.values() if selector(s)]
            logger.debug(f"Special sections '{name}': {len(self._special_sections[name])} selected.")
        return list(self._special_sections[name])

    def clear_special_sections(self, name: Optional[str] = None) -> None:
        """Drops the cached subset `name`, or all of them if no name is given."""
        if name is None:
            self._special_sections.clear()
        else:
            self._special_sections.pop(name, None)

    def to_raw(self) -> Dict[str, Any]:
        """
        Flat, JSON compatible description of the morphology: the soma and all the
        sections at the same level, parents and children given as section ids.
        """
        return {
            "soma": self._soma.to_raw() if self._soma is not None else None,
            "sections": [s.to_raw() for s in self._sections.values()],
        }

    @classmethod
    def from_raw(cls, raw_morphology: Dict[str, Any], morphology_id: Optional[Any] = None) -> "Morphology":
        """
        Builds a morphology from the flat description made by `to_raw`.

        The sections are created first, then linked. A section given as its own
        parent or child is not linked.
        """
        raw_soma = raw_morphology.get("soma")
        soma = Soma.from_raw(raw_soma) if raw_soma else None

        raw_sections = raw_morphology.get("sections") or []
        sections = {}
        for raw_section in raw_sections:
            section = Section.from_raw(raw_section)
            sections[section.id] = section

        for raw_section in raw_sections:
            section = sections[raw_section["id"]]

            # 0 is a valid parent id, only None means "no parent"
            parent_id = raw_section.get("parent")
            if parent_id is not None:
                if parent_id == section.id:
                    logger.warning(f"Section {section.id} cannot be the parent of itself.")
                elif parent_id not in sections:
                    raise SectionNotFoundError(parent_id)
                else:
                    section.parent_id = parent_id

            for child_id in raw_section.get("children", []):
                if child_id not in sections:
                    raise SectionNotFoundError(child_id)
                section.add_child(child_id)

        return cls(sections=sections.values(), soma=soma, morphology_id=morphology_id)
