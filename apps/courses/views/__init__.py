"""
Views Package - حزمة العروض
CourseStream - Video Course Platform
"""

from .courses import (
    CourseListView,
    CourseDetailView,
    CourseEnrollView,
    EnrolledCoursesView,
)
from .videos import (
    VideoStreamView,
    CourseVideoListView,
    VideoDetailView,
)
from .files import (
    FileDownloadView,
    CourseFileListView,
    VideoFileListView,
    FileDetailView,
)

__all__ = [
    'CourseListView',
    'CourseDetailView',
    'CourseEnrollView',
    'EnrolledCoursesView',
    'VideoStreamView',
    'CourseVideoListView',
    'VideoDetailView',
    'FileDownloadView',
    'CourseFileListView',
    'VideoFileListView',
    'FileDetailView',
]
