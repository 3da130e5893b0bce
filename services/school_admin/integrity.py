# services/school_admin/integrity.py
import logging
from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from services.school_admin.exceptions import DependentsExist
from services.school_admin.models import Exam, SchoolClass, Subject, Teacher

logger = logging.getLogger(__name__)

# model -> (label, ((dependent label, relationship), ...))
BLOCKING_DEPENDENTS = {
    Subject: ("subject", (
        ("teacher", Subject.teachers),
        ("lesson", Subject.lessons),
    )),
    SchoolClass: ("class", (
        ("student", SchoolClass.students),
        ("lesson", SchoolClass.lessons),
        ("event", SchoolClass.events),
        ("announcement", SchoolClass.announcements),
    )),
    Teacher: ("teacher", (
        ("subject", Teacher.subjects),
        ("lesson", Teacher.lessons),
        ("class", Teacher.classes),
    )),
    Exam: ("exam", (
        ("result", Exam.results),
    )),
}


async def count_dependents(db: AsyncSession, model, entity_id) -> List[Tuple[str, int]]:
    """Non-zero dependent counts for one record, in declaration order."""
    _, categories = BLOCKING_DEPENDENTS[model]
    counts = []
    for label, relation in categories:
        count = await db.scalar(
            select(func.count()).select_from(model).join(relation).where(model.id == entity_id)
        )
        if count:
            counts.append((label, count))
    return counts


async def ensure_deletable(db: AsyncSession, model, entity_id) -> None:
    entity, _ = BLOCKING_DEPENDENTS[model]
    counts = await count_dependents(db, model, entity_id)
    if counts:
        logger.info("Refusing to delete %s %s: dependents %s", entity, entity_id, counts)
        raise DependentsExist(entity, counts)
