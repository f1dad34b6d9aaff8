"""Tree builder mixins.

The ComponentParser is assembled from three concerns:

- SeedingMixin: what each opening tag pushes onto the stack
- TableAssemblyMixin: the table stage machine
- LeafEventsMixin: text coalescing and leaf components
"""

from blogmark.parsing.leaves import LeafEventsMixin
from blogmark.parsing.seeds import SeedingMixin
from blogmark.parsing.table import TableAssemblyMixin, TableStage

__all__ = [
    "LeafEventsMixin",
    "SeedingMixin",
    "TableAssemblyMixin",
    "TableStage",
]
