"""Exception types raised by the CPT engine."""


class PhyloFunError(Exception):
    """Base class for all errors raised by phylofun."""


class LookupFailure(PhyloFunError, LookupError):
    """No row or distance bucket satisfies a >= lookup."""


class EmptyAnnotationError(PhyloFunError, ValueError):
    """A composite annotation has no atomic members."""


class MissingEntryError(PhyloFunError, KeyError):
    """An atomic annotation has no entry in the selected mutation matrix."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class IndexMismatchError(PhyloFunError, ValueError):
    """Labels and composite annotations are not aligned."""


class BoundsError(PhyloFunError, IndexError):
    """A column index lies outside a table's column range."""
