"""
Course Views - عروض المقررات
CourseStream - Video Course Platform

- CourseListView / CourseDetailView: كتالوج عام، والإنشاء والتعديل والحذف للأدمن
- CourseEnrollView: التسجيل وإلغاء التسجيل
- EnrolledCoursesView: مقررات المستخدم الحالي
"""

import logging

from django.core.exceptions import ValidationError
from django.core.paginator import Paginator
from django.db.models import Q
from django.http import Http404
from django.views import View

from apps.accounts.views import JsonAccessMixin, LoginRequiredMixin
from apps.core.responses import json_error, json_success, read_json_body

from ..models import Course
from .common import decimal_param, int_param, tags_param

logger = logging.getLogger('courses')

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50
REQUIRED_COURSE_FIELDS = ('title', 'description', 'category')


def get_active_course(pk):
    try:
        return Course.objects.select_related('instructor').get(pk=pk, is_active=True)
    except Course.DoesNotExist:
        raise Http404('المقرر غير موجود')


def get_course_for_update(pk):
    try:
        return Course.objects.select_related('instructor').get(pk=pk)
    except Course.DoesNotExist:
        raise Http404('المقرر غير موجود')


def apply_course_data(course, data):
    """نسخ الحقول المرسلة فقط، والحقول النصية الفارغة تُتجاهل."""
    for field in ('title', 'description', 'category', 'level'):
        value = str(data.get(field) or '').strip()
        if value:
            setattr(course, field, value)
    if 'thumbnail' in data:
        course.thumbnail = data['thumbnail'] or ''
    if 'price' in data:
        course.price = decimal_param(data['price'])
    if 'duration' in data:
        course.duration = int_param(data['duration'], course.duration, minimum=0)
    if 'tags' in data:
        course.tags = tags_param(data['tags'])


def save_course(course):
    try:
        course.full_clean()
    except ValidationError as e:
        return json_error('بيانات المقرر غير صالحة', status=400, errors=e.message_dict)
    course.save()
    return None


class CourseListView(JsonAccessMixin, View):
    """
    GET /api/courses/?category=&level=&search=&page=&limit=
    POST /api/courses/ (admin)
    """

    def get(self, request):
        queryset = Course.objects.filter(is_active=True).select_related('instructor')

        category = request.GET.get('category')
        if category:
            queryset = queryset.filter(category=category)

        level = request.GET.get('level')
        if level:
            queryset = queryset.filter(level=level)

        search = request.GET.get('search', '').strip()
        if search:
            queryset = queryset.filter(Q(title__icontains=search) | Q(description__icontains=search))

        limit = int_param(request.GET.get('limit'), DEFAULT_PAGE_SIZE, minimum=1, maximum=MAX_PAGE_SIZE)
        paginator = Paginator(queryset.order_by('-created_at'), limit)
        page = paginator.get_page(request.GET.get('page'))

        return json_success(
            courses=[course.as_dict() for course in page.object_list],
            pagination={
                'current': page.number,
                'pages': paginator.num_pages,
                'total': paginator.count,
            },
        )

    def post(self, request):
        """POST /api/courses/ (admin)"""
        self.require_admin()
        data = read_json_body(request)

        missing = [f for f in REQUIRED_COURSE_FIELDS if not str(data.get(f) or '').strip()]
        if missing:
            return json_error('العنوان والوصف والتصنيف مطلوبة', status=400, missing=missing)

        course = Course(instructor=request.user)
        apply_course_data(course, data)
        error = save_course(course)
        if error:
            return error

        logger.info(f"Course {course.pk} created by user {request.user.pk}")
        return json_success(status=201, message='تم إنشاء المقرر بنجاح', course=course.as_dict())


class CourseDetailView(JsonAccessMixin, View):
    """GET / PUT / DELETE /api/courses/<pk>/"""

    def get(self, request, pk):
        course = get_active_course(pk)
        data = course.as_dict()
        data.update({
            'level_display': course.get_level_display(),
            'is_enrolled': course.is_enrolled(request.user),
            'videos': [
                {
                    'id': video.pk,
                    'title': video.title,
                    'description': video.description,
                    'duration': video.duration,
                    'formatted_duration': video.formatted_duration,
                    'order': video.order,
                    'thumbnail': video.thumbnail,
                    'views': video.views,
                }
                for video in course.videos.filter(is_active=True).order_by('order', 'created_at')
            ],
        })
        return json_success(course=data)

    def put(self, request, pk):
        """PUT /api/courses/<pk>/ (admin)"""
        self.require_admin()
        course = get_course_for_update(pk)
        apply_course_data(course, read_json_body(request))
        error = save_course(course)
        if error:
            return error

        logger.info(f"Course {course.pk} updated by user {request.user.pk}")
        data = course.as_dict()
        data['updated_at'] = course.updated_at.isoformat()
        return json_success(message='تم تحديث المقرر بنجاح', course=data)

    def delete(self, request, pk):
        """DELETE /api/courses/<pk>/ (admin): يُخفى المقرر ولا تُحذف فيديوهاته."""
        self.require_admin()
        course = get_course_for_update(pk)
        course.is_active = False
        course.save(update_fields=['is_active', 'updated_at'])
        logger.info(f"Course {course.pk} deactivated by user {request.user.pk}")
        return json_success(message='تم حذف المقرر بنجاح')


class CourseEnrollView(LoginRequiredMixin, View):
    """POST / DELETE /api/courses/<pk>/enroll/"""

    def post(self, request, pk):
        course = get_active_course(pk)
        if course.is_enrolled(request.user):
            return json_error('أنت مسجل في هذا المقرر بالفعل', status=400)

        course.enrolled_students.add(request.user)
        logger.info(f"User {request.user.pk} enrolled in course {course.pk}")
        return json_success(message='تم التسجيل في المقرر بنجاح')

    def delete(self, request, pk):
        course = get_active_course(pk)
        if not course.is_enrolled(request.user):
            return json_error('أنت غير مسجل في هذا المقرر', status=400)

        course.enrolled_students.remove(request.user)
        logger.info(f"User {request.user.pk} left course {course.pk}")
        return json_success(message='تم إلغاء التسجيل بنجاح')


class EnrolledCoursesView(LoginRequiredMixin, View):
    """GET /api/courses/user/enrolled/"""

    def get(self, request):
        courses = (request.user.enrolled_courses
                   .filter(is_active=True)
                   .select_related('instructor')
                   .order_by('-created_at'))
        return json_success(courses=[course.as_dict() for course in courses])
