# services/school_admin/controllers/dependencies.py
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.auth import Caller, get_current_user
from shared.cache import ViewCache, get_view_cache
from shared.db import get_db
from services.school_admin.actions.base import ActionContext
from services.school_admin.identity import IdentityProvider


async def get_action_context(
    db: AsyncSession = Depends(get_db),
    current_user: Caller = Depends(get_current_user),
    views: ViewCache = Depends(get_view_cache),
) -> ActionContext:
    return ActionContext(db=db, caller=current_user, views=views, identity=IdentityProvider(db))
