"""
Mixins التحقق من الوصول للمقررات (حماية IDOR)
CourseStream - Video Course Platform

- CourseEnrollmentMixin: التحقق من تسجيل المستخدم في المقرر
- SecureMediaMixin: جلب الفيديو/الملف بعد التحقق من الصلاحية
"""

import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404

from apps.accounts.views import LoginRequiredMixin

from .models import Course, Video, CourseFile

logger = logging.getLogger('courses')


class CourseEnrollmentMixin(LoginRequiredMixin):
    """يتطلب تسجيل الدخول + التسجيل في المقرر (أو دور الأدمن)."""

    def check_course_access(self, user, course):
        if not course.can_access(user):
            logger.warning(f"Access denied: user {user.pk} is not enrolled in course {course.pk}")
            raise PermissionDenied('ليس لديك صلاحية الوصول لهذا المقرر')

    def get_course(self, course_id):
        try:
            return Course.objects.get(pk=course_id)
        except Course.DoesNotExist:
            raise Http404('المقرر غير موجود')


class SecureMediaMixin(CourseEnrollmentMixin):
    """جلب الفيديو أو الملف بشكل آمن (محمي ضد IDOR)."""

    def get_secure_video(self, pk, require_active=True):
        queryset = Video.objects.select_related('course')
        if require_active:
            queryset = queryset.filter(is_active=True)
        try:
            video = queryset.get(pk=pk)
        except Video.DoesNotExist:
            raise Http404('الفيديو غير موجود')
        self.check_course_access(self.request.user, video.course)
        return video

    def get_secure_file(self, pk, require_active=True):
        queryset = CourseFile.objects.select_related('course', 'video')
        if require_active:
            queryset = queryset.filter(is_active=True)
        try:
            course_file = queryset.get(pk=pk)
        except CourseFile.DoesNotExist:
            raise Http404('الملف غير موجود')
        self.check_course_access(self.request.user, course_file.course)
        return course_file
