"""Practice cells and pages produced by the pagination engine."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

# Full-width ideographic space is a blank practice unit just like ' '.
BLANK_CHARACTERS = frozenset({' ', '　'})


@dataclass(frozen=True)
class PracticeCell:
    """One slot in which a single instance of a character is written.

    Attributes:
        character: A single grapheme cluster, or a space for blank cells.
        group_index: Index of the source character this cell repeats.
        is_first_in_group: True for the first cell of the repeat run.
    """
    character: str
    group_index: int
    is_first_in_group: bool

    @property
    def is_blank(self) -> bool:
        return self.character in BLANK_CHARACTERS or not self.character.strip()

    def to_dict(self) -> dict:
        return {
            'character': self.character,
            'group_index': self.group_index,
            'is_first_in_group': self.is_first_in_group,
        }


@dataclass(frozen=True)
class Page:
    """An ordered sequence of practice cells filling one sheet of paper."""
    cells: Tuple[PracticeCell, ...] = field(default_factory=tuple)
    index: int = 0

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[PracticeCell]:
        return iter(self.cells)

    def __getitem__(self, idx):
        return self.cells[idx]

    @property
    def is_empty(self) -> bool:
        return not self.cells

    def group_indices(self) -> List[int]:
        """Distinct group indices on this page, in order of appearance."""
        seen = []
        for cell in self.cells:
            if not seen or seen[-1] != cell.group_index:
                seen.append(cell.group_index)
        return seen

    def to_list(self) -> List[dict]:
        return [c.to_dict() for c in self.cells]
