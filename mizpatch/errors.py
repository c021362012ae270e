class MizPatchError(Exception):
    """Base class for mizpatch-specific errors."""


class PathCollisionError(MizPatchError):
    pass


# Archive I/O
class ArchiveOpenError(MizPatchError):
    pass


class OutputCreateError(MizPatchError):
    pass


class EntryError(MizPatchError):
    """Failure tied to a single archive entry."""

    def __init__(self, entry_name: str, reason: str):
        super().__init__(f"{entry_name}: {reason}")
        self.entry_name = entry_name


class EntryReadError(EntryError):
    pass


class EntryWriteError(EntryError):
    pass
