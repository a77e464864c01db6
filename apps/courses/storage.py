"""
Storage Resolver - ربط المعرفات بالملفات على القرص
CourseStream - Video Course Platform

يحوّل الفيديو/الملف (بعد التحقق من الصلاحية) إلى StoredMedia (المسار، الحجم المُعلن، نوع المحتوى)
ويوفر زيادة ذرية للعدادات عبر F() بدون قراءة ثم كتابة.
"""

import logging

from django.conf import settings
from django.db.models import F

from apps.core.exceptions import MediaNotFound
from apps.core.streaming import StoredMedia

from .models import Video, CourseFile

logger = logging.getLogger('courses')


class VideoStorage:
    """Resolve videos and count their views."""

    @staticmethod
    def describe(video: Video) -> StoredMedia:
        if not video.video_file:
            raise MediaNotFound(f"Video {video.pk} has no stored file")
        return StoredMedia(
            pk=video.pk,
            path=video.video_file.path,
            declared_length=video.file_size,
            content_type=video.mime_type or settings.DEFAULT_VIDEO_CONTENT_TYPE,
            filename=video.original_name or None,
            is_video=True,
        )

    @staticmethod
    def increment_views(pk) -> None:
        updated = Video.objects.filter(pk=pk).update(views=F('views') + 1)
        if not updated:
            logger.warning(f"View counter not updated: video {pk} no longer exists")


class CourseFileStorage:
    """Resolve course attachments and count their downloads."""

    @staticmethod
    def describe(course_file: CourseFile) -> StoredMedia:
        if not course_file.local_file:
            raise MediaNotFound(f"File {course_file.pk} has no stored file")
        return StoredMedia(
            pk=course_file.pk,
            path=course_file.local_file.path,
            declared_length=course_file.file_size,
            content_type=course_file.mime_type or 'application/octet-stream',
            filename=course_file.original_name or None,
            is_video=False,
        )

    @staticmethod
    def increment_downloads(pk) -> None:
        updated = CourseFile.objects.filter(pk=pk).update(downloads=F('downloads') + 1)
        if not updated:
            logger.warning(f"Download counter not updated: file {pk} no longer exists")
