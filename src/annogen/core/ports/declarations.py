from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

from annogen.core.declarations import DeclarationEvent


class DeclarationSource(Protocol):
    def __call__(self, path: Path) -> Iterator[DeclarationEvent]: ...
