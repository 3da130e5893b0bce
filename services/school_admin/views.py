# services/school_admin/views.py
# Cached read views, invalidated by the mutations that make them stale
SUBJECTS = "/list/subjects"
CLASSES = "/list/classes"
TEACHERS = "/list/teachers"
STUDENTS = "/list/students"
LESSONS = "/list/lessons"
EXAMS = "/list/exams"
ASSIGNMENTS = "/list/assignments"


def detail_path(listing: str, entity_id) -> str:
    return f"{listing}/{entity_id}"
