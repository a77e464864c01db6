"""
Video Views - عروض الفيديو
CourseStream - Video Course Platform

- VideoStreamView: بث الفيديو مع Range + عداد المشاهدات في الخلفية
- CourseVideoListView: فيديوهات مقرر
- VideoDetailView: عرض / تعديل / حذف فيديو
"""

import logging

from django.views import View

from apps.core.responses import json_success, read_json_body
from apps.core.streaming import RangeStreamView

from ..mixins import CourseEnrollmentMixin, SecureMediaMixin
from ..storage import VideoStorage
from .common import int_param

logger = logging.getLogger('courses')


class VideoStreamView(SecureMediaMixin, RangeStreamView):
    """
    GET /api/videos/stream/<pk>/

    كل بدء بث ناجح (200 أو 206) يزيد المشاهدات بواحد، بما فيها
    طلبات Range المتكررة أثناء التقديم في نفس التشغيل.
    """

    not_found_message = 'ملف الفيديو غير موجود'

    def get_media(self, pk):
        video = self.get_secure_video(pk)
        return VideoStorage.describe(video)

    def on_stream_started(self, stored):
        VideoStorage.increment_views(stored.pk)


class CourseVideoListView(CourseEnrollmentMixin, View):
    """GET /api/videos/course/<course_id>/"""

    def get(self, request, course_id):
        course = self.get_course(course_id)
        self.check_course_access(request.user, course)

        videos = course.videos.filter(is_active=True).order_by('order', 'created_at')
        return json_success(videos=[video.as_dict() for video in videos])


class VideoDetailView(SecureMediaMixin, View):
    """GET / PUT / DELETE /api/videos/<pk>/"""

    def get(self, request, pk):
        video = self.get_secure_video(pk)
        data = video.as_dict()
        data['course'] = {'id': video.course_id, 'title': video.course.title}
        data['updated_at'] = video.updated_at.isoformat()
        return json_success(video=data)

    def put(self, request, pk):
        self.require_admin()
        video = self.get_secure_video(pk, require_active=False)
        data = read_json_body(request)

        if data.get('title'):
            video.title = data['title']
        if 'description' in data:
            video.description = data['description'] or ''
        if 'order' in data:
            video.order = int_param(data['order'], video.order)
        if 'thumbnail' in data:
            video.thumbnail = data['thumbnail'] or ''
        video.save()

        logger.info(f"Video {video.pk} updated by user {request.user.pk}")
        return json_success(
            message='تم تحديث الفيديو بنجاح',
            video={
                'id': video.pk,
                'title': video.title,
                'description': video.description,
                'order': video.order,
                'thumbnail': video.thumbnail,
                'updated_at': video.updated_at.isoformat(),
            },
        )

    def delete(self, request, pk):
        self.require_admin()
        video = self.get_secure_video(pk, require_active=False)
        # backing file is removed by the post_delete signal
        video.delete()
        logger.info(f"Video {pk} deleted by user {request.user.pk}")
        return json_success(message='تم حذف الفيديو بنجاح')

