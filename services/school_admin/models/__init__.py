from .accounts import UserAccount
from .subjects import Subject, teacher_subjects
from .classes import Grade, SchoolClass
from .users import Sex, Student, Teacher
from .lessons import Day, Lesson
from .assessments import Assignment, Exam, Result
from .notices import Announcement, Event
