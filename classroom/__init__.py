"""
Google Classroom integration components
"""
from .coursework import ClassroomCourseWorkSource, get_all_courses, get_all_coursework
from .submissions import ClassroomSubmissionSource

__all__ = [
    'ClassroomCourseWorkSource',
    'ClassroomSubmissionSource',
    'get_all_courses',
    'get_all_coursework',
]
