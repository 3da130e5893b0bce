import os
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from shared.auth import Caller, Role  # noqa: E402
from shared.cache import ViewCache  # noqa: E402
from shared.db import Base, build_engine, build_sessionmaker  # noqa: E402
from services.school_admin.actions.base import ActionContext  # noqa: E402
from services.school_admin.identity import AccountDeletion, IdentityProvider  # noqa: E402
from services.school_admin.models import (  # noqa: E402
    Announcement,
    Assignment,
    Day,
    Event,
    Exam,
    Grade,
    Lesson,
    Result,
    SchoolClass,
    Sex,
    Student,
    Subject,
    Teacher,
    UserAccount,
)

MONDAY_9AM = datetime(2024, 9, 2, 9, 0)


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'school.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def session(engine):
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest.fixture
def views() -> ViewCache:
    return ViewCache()


@pytest.fixture
def admin() -> Caller:
    return Caller(id="admin-1", role=Role.ADMIN)


@pytest.fixture
def make_ctx(session, views):
    def factory(caller: Caller, identity: Optional[IdentityProvider] = None) -> ActionContext:
        return ActionContext(
            db=session,
            caller=caller,
            views=views,
            identity=identity or IdentityProvider(session),
        )

    return factory


class RecordingIdentity(IdentityProvider):
    """Identity provider that records every call it receives."""

    def __init__(self, db, deletion: Optional[AccountDeletion] = None):
        super().__init__(db)
        self.calls = []
        self.deletion = deletion

    async def create_account(self, **kwargs):
        self.calls.append(("create", kwargs["username"]))
        return await super().create_account(**kwargs)

    async def update_account(self, account_id, **kwargs):
        self.calls.append(("update", account_id))
        return await super().update_account(account_id, **kwargs)

    async def delete_account(self, account_id):
        self.calls.append(("delete", account_id))
        if self.deletion is not None:
            return self.deletion
        return await super().delete_account(account_id)


class Seeder:
    """Writes fixture rows directly, bypassing the mutation handlers."""

    def __init__(self, session):
        self.session = session
        self._grades = 0

    async def _save(self, *rows):
        self.session.add_all(rows)
        await self.session.commit()
        return rows[-1].id

    async def grade(self, level: int = 1) -> int:
        return await self._save(Grade(level=level))

    def _account(self, username: str, role: Role) -> UserAccount:
        return UserAccount(
            id=f"{role.value}-{username}",
            username=username,
            hashed_password="not-a-real-hash",
            first_name=username.title(),
            last_name="Example",
            role=role,
        )

    async def teacher(self, username: str, subject_ids: Iterable[int] = ()) -> str:
        account = self._account(username, Role.TEACHER)
        subjects = [await self.session.get(Subject, subject_id) for subject_id in subject_ids]
        teacher = Teacher(
            id=account.id,
            username=username,
            name=account.first_name,
            surname=account.last_name,
            address="1 School Road",
            blood_type="A+",
            sex=Sex.FEMALE,
            birthday=date(1985, 4, 12),
            subjects=subjects,
        )
        return await self._save(account, teacher)

    async def subject(self, name: str, teacher_ids: Iterable[str] = ()) -> int:
        teachers = [await self.session.get(Teacher, teacher_id) for teacher_id in teacher_ids]
        return await self._save(Subject(name=name, teachers=teachers))

    async def school_class(
        self, name: str, capacity: int = 30, grade_id: Optional[int] = None,
        supervisor_id: Optional[str] = None,
    ) -> int:
        if grade_id is None:
            self._grades += 1
            grade_id = await self.grade(level=100 + self._grades)
        return await self._save(SchoolClass(
            name=name, capacity=capacity, grade_id=grade_id, supervisor_id=supervisor_id,
        ))

    async def student(self, username: str, class_id: int) -> str:
        school_class = await self.session.get(SchoolClass, class_id)
        account = self._account(username, Role.STUDENT)
        student = Student(
            id=account.id,
            username=username,
            name=account.first_name,
            surname=account.last_name,
            address="2 School Road",
            blood_type="O-",
            sex=Sex.MALE,
            birthday=date(2012, 1, 30),
            grade_id=school_class.grade_id,
            class_id=class_id,
        )
        return await self._save(account, student)

    async def lesson(self, subject_id: int, class_id: int, teacher_id: str, name: str = "Lesson") -> int:
        return await self._save(Lesson(
            name=name,
            day=Day.MONDAY,
            start_time=MONDAY_9AM,
            end_time=MONDAY_9AM + timedelta(hours=1),
            subject_id=subject_id,
            class_id=class_id,
            teacher_id=teacher_id,
        ))

    async def exam(self, lesson_id: int, title: str = "Midterm") -> int:
        return await self._save(Exam(
            title=title,
            start_time=MONDAY_9AM,
            end_time=MONDAY_9AM + timedelta(hours=2),
            lesson_id=lesson_id,
        ))

    async def assignment(self, lesson_id: int, title: str = "Homework") -> int:
        return await self._save(Assignment(
            title=title,
            start_date=MONDAY_9AM,
            due_date=MONDAY_9AM + timedelta(days=7),
            lesson_id=lesson_id,
        ))

    async def result(self, student_id: str, exam_id=None, assignment_id=None, score: int = 80) -> int:
        return await self._save(Result(
            score=score, student_id=student_id, exam_id=exam_id, assignment_id=assignment_id,
        ))

    async def event(self, class_id: int) -> int:
        return await self._save(Event(
            title="Sports day",
            description="Outdoor games",
            start_time=MONDAY_9AM,
            end_time=MONDAY_9AM + timedelta(hours=6),
            class_id=class_id,
        ))

    async def announcement(self, class_id: int) -> int:
        return await self._save(Announcement(
            title="Trip", description="Museum visit", date=date(2024, 9, 20), class_id=class_id,
        ))


@pytest.fixture
def seed(session) -> Seeder:
    return Seeder(session)


@pytest.fixture
def person_fields():
    def factory(username: str, **overrides) -> dict:
        fields = {
            "username": username,
            "password": "s3cret-pass",
            "name": username.title(),
            "surname": "Tester",
            "email": f"{username}@school.org",
            "phone": "",
            "address": "3 School Road",
            "blood_type": "B+",
            "birthday": date(1990, 5, 17),
            "sex": Sex.MALE,
        }
        fields.update(overrides)
        return fields

    return factory


@pytest.fixture
def recording_identity(session):
    def factory(deletion: Optional[AccountDeletion] = None) -> RecordingIdentity:
        return RecordingIdentity(session, deletion)

    return factory
