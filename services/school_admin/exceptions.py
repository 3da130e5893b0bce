# services/school_admin/exceptions.py
from typing import Optional, Sequence, Tuple


class MutationError(Exception):
    """Failure a mutation handler reports as an error result.

    ``message`` is only set when the caller should see it.
    """

    message: Optional[str] = None


class MissingIdentifier(MutationError):
    pass


class AuthorizationDenied(MutationError):
    pass


class PreconditionFailed(MutationError):
    pass


class EntityNotFound(MutationError):
    pass


class DependentsExist(MutationError):
    def __init__(self, entity: str, counts: Sequence[Tuple[str, int]]):
        self.entity = entity
        self.counts = tuple(counts)
        listed = ", ".join(f"{count} {label}(s)" for label, count in self.counts)
        self.message = f"Cannot delete {entity}: it still has {listed}. Remove or reassign them first."
        super().__init__(self.message)
