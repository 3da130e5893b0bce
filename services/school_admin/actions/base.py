# services/school_admin/actions/base.py
import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.auth import Caller
from shared.cache import ViewCache
from services.school_admin.exceptions import (
    AuthorizationDenied,
    DependentsExist,
    EntityNotFound,
    MissingIdentifier,
    MutationError,
)
from services.school_admin.identity import AccountDeletion, IdentityProvider
from services.school_admin.schemas.results import ActionResult

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Another record already uses one of these values, or a linked record is missing."


@dataclass
class ActionContext:
    db: AsyncSession
    caller: Caller
    views: ViewCache
    identity: IdentityProvider


def mutation_handler(func: Callable) -> Callable:
    """Turn every failure of a handler into an error ``ActionResult``.

    Anything written before the failure is rolled back. Only integrity-guard
    refusals and constraint conflicts carry a message for the caller.
    """

    @functools.wraps(func)
    async def handler(current_state: ActionResult, data: Any, ctx: ActionContext) -> ActionResult:
        try:
            return await func(current_state, data, ctx)
        except DependentsExist as exc:
            await ctx.db.rollback()
            return ActionResult.failed(exc.message)
        except AuthorizationDenied:
            await ctx.db.rollback()
            logger.warning("%s refused for caller %s", func.__name__, ctx.caller.id)
            return ActionResult.failed()
        except MutationError as exc:
            await ctx.db.rollback()
            logger.info("%s failed: %s", func.__name__, exc or type(exc).__name__)
            return ActionResult.failed(exc.message)
        except IntegrityError:
            await ctx.db.rollback()
            logger.exception("%s hit a constraint violation", func.__name__)
            return ActionResult.failed(CONFLICT_MESSAGE)
        except Exception:
            await ctx.db.rollback()
            logger.exception("%s failed unexpectedly", func.__name__)
            return ActionResult.failed()

    return handler


def require_id(value):
    if value is None or value == "":
        raise MissingIdentifier("No id supplied")
    return value


def form_id(form: Mapping[str, Any], cast: Callable = int):
    """Read the ``id`` field of a submitted delete form."""
    raw = require_id(form.get("id"))
    # bool is an int subclass; floats would truncate silently
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        raise MissingIdentifier(f"Malformed id {raw!r}")
    try:
        return cast(raw)
    except (TypeError, ValueError):
        raise MissingIdentifier(f"Malformed id {raw!r}")


def revalidate(ctx: ActionContext, *paths: str) -> None:
    for path in paths:
        ctx.views.revalidate(path)


def revalidate_related(ctx: ActionContext, *listings: str) -> None:
    """Drop whole listings, detail views included, of records a mutation touched indirectly."""
    for listing in listings:
        ctx.views.revalidate_tree(listing)


async def fetch_one(db: AsyncSession, model, entity_id, *options):
    result = await db.execute(select(model).options(*options).where(model.id == entity_id))
    entity = result.scalars().first()
    if entity is None:
        raise EntityNotFound(f"No {model.__tablename__} row {entity_id}")
    return entity


async def fetch_all(db: AsyncSession, model, ids) -> List:
    """Load every row in ``ids``, failing if any of them is missing."""
    wanted = set(ids)
    if not wanted:
        return []
    result = await db.execute(select(model).where(model.id.in_(wanted)))
    rows = list(result.scalars().all())
    if len(rows) != len(wanted):
        missing = wanted - {row.id for row in rows}
        raise EntityNotFound(f"No {model.__tablename__} rows {sorted(missing)}")
    return rows


async def release_account(ctx: ActionContext, account_id: str) -> Optional[str]:
    """Best-effort removal of a login account before its entity row goes.

    Returns a note for the caller when the account could not be removed.
    """
    outcome = await ctx.identity.delete_account(account_id)
    if outcome is AccountDeletion.DELETED:
        return None
    elif outcome is AccountDeletion.NOT_FOUND:
        logger.info("Account %s was already gone", account_id)
        return "The login account was already removed."
    logger.warning("Account %s could not be removed, deleting the record anyway", account_id)
    return "The record was deleted but its login account could not be removed."
