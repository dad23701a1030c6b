# catalog/classes.py
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

"""
Static class table and file lists.

The class table is a text file with one class name per line, formatted as
`<superclass>_<subclass>` (e.g. `protist_noctiluca`). The superclass of a
class is its first underscore-separated token.
"""


def load_lines(path: Union[str, Path]) -> List[str]:
    """Non-empty, stripped lines of a text file, in file order."""
    with open(path, "r") as f:
        return [line.strip() for line in f if line.strip()]


def superclass_from_name(class_name: str) -> str:
    return class_name.split("_")[0]


@dataclass(frozen=True)
class ClassTable:
    names: Tuple[str, ...]
    superclass: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ClassTable":
        ordered = []
        for name in names:
            if name in ordered:
                raise ValueError(f"Duplicate class in table: {name}")
            ordered.append(name)
        return cls(names=tuple(ordered),
                   superclass={n: superclass_from_name(n) for n in ordered})

    def __len__(self):
        return len(self.names)


def load_class_table(path: Union[str, Path]) -> ClassTable:
    return ClassTable.from_names(load_lines(path))


def files_for_class(class_name: str, files: Iterable[str]) -> List[str]:
    """
    Files stored under a directory named exactly `class_name`.

    Matching is on a `/<class_name>/` path segment, so `fish/` does not pick
    up `shellfish/`.
    """
    needle = f"/{class_name}/"
    return [f for f in files if needle in "/" + str(f).replace("\\", "/")]
