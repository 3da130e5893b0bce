# services/school_admin/schemas/results.py
from typing import Optional

from pydantic import BaseModel


class ActionResult(BaseModel):
    """Outcome of a mutation handler.

    ``message`` is only filled in when the caller should see something more
    specific than the generic per-entity failure text.
    """

    success: bool = False
    error: bool = False
    message: Optional[str] = None

    @classmethod
    def ok(cls, message: Optional[str] = None) -> "ActionResult":
        return cls(success=True, error=False, message=message)

    @classmethod
    def failed(cls, message: Optional[str] = None) -> "ActionResult":
        return cls(success=False, error=True, message=message)


INITIAL_STATE = ActionResult()
