"""
File Views - عروض ملفات المقرر
CourseStream - Video Course Platform

تحميل الملفات يمر عبر نفس محرك البث (Range مدعوم) مع
Content-Disposition: attachment، ويزيد عداد التحميلات فقط.
"""

import logging

from django.views import View

from apps.core.responses import json_success, read_json_body
from apps.core.streaming import RangeStreamView

from ..mixins import CourseEnrollmentMixin, SecureMediaMixin
from ..storage import CourseFileStorage
from .common import int_param, tags_param

logger = logging.getLogger('courses')


class FileDownloadView(SecureMediaMixin, RangeStreamView):
    """GET /api/files/download/<pk>/"""

    as_attachment = True
    not_found_message = 'الملف غير موجود على الخادم'

    def get_media(self, pk):
        course_file = self.get_secure_file(pk)
        return CourseFileStorage.describe(course_file)

    def on_stream_started(self, stored):
        CourseFileStorage.increment_downloads(stored.pk)


class CourseFileListView(CourseEnrollmentMixin, View):
    """GET /api/files/course/<course_id>/"""

    def get(self, request, course_id):
        course = self.get_course(course_id)
        self.check_course_access(request.user, course)

        files = (course.files.filter(is_active=True)
                 .select_related('video')
                 .order_by('order', 'created_at'))
        return json_success(files=[f.as_dict() for f in files])


class VideoFileListView(SecureMediaMixin, View):
    """GET /api/files/video/<video_id>/"""

    def get(self, request, video_id):
        video = self.get_secure_video(video_id)
        files = (video.files.filter(is_active=True)
                 .select_related('video')
                 .order_by('order', 'created_at'))
        return json_success(files=[f.as_dict() for f in files])


class FileDetailView(SecureMediaMixin, View):
    """GET / PUT / DELETE /api/files/<pk>/"""

    def get(self, request, pk):
        course_file = self.get_secure_file(pk)
        data = course_file.as_dict()
        data['course'] = {'id': course_file.course_id, 'title': course_file.course.title}
        data['updated_at'] = course_file.updated_at.isoformat()
        return json_success(file=data)

    def put(self, request, pk):
        self.require_admin()
        course_file = self.get_secure_file(pk, require_active=False)
        data = read_json_body(request)

        if data.get('title'):
            course_file.title = data['title']
        if 'description' in data:
            course_file.description = data['description'] or ''
        if 'order' in data:
            course_file.order = int_param(data['order'], course_file.order)
        if 'tags' in data:
            course_file.tags = tags_param(data['tags'])
        course_file.save()

        logger.info(f"File {course_file.pk} updated by user {request.user.pk}")
        return json_success(message='تم تحديث الملف بنجاح', file=course_file.as_dict())

    def delete(self, request, pk):
        self.require_admin()
        course_file = self.get_secure_file(pk, require_active=False)
        course_file.delete()
        logger.info(f"File {pk} deleted by user {request.user.pk}")
        return json_success(message='تم حذف الملف بنجاح')
