# services/school_admin/enrolment.py
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from services.school_admin.exceptions import PreconditionFailed
from services.school_admin.models import SchoolClass, Student


async def count_enrolled(db: AsyncSession, class_id: int) -> int:
    return await db.scalar(select(func.count(Student.id)).where(Student.class_id == class_id))


async def ensure_class_has_room(db: AsyncSession, class_id: int) -> SchoolClass:
    """Lock the class row and check it can take one more student.

    The lock is held until the enrolling transaction ends, so concurrent
    enrolments into the same class are counted one after the other.
    """
    result = await db.execute(
        select(SchoolClass).where(SchoolClass.id == class_id).with_for_update()
    )
    school_class = result.scalars().first()
    if school_class is None:
        raise PreconditionFailed(f"No class {class_id}")

    enrolled = await count_enrolled(db, class_id)
    if enrolled >= school_class.capacity:
        raise PreconditionFailed(
            f"Class {school_class.name} is full ({enrolled}/{school_class.capacity})"
        )
    return school_class
