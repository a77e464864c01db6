"""
Shared test helpers for CourseStream.
"""

import shutil
import tempfile

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings

User = get_user_model()

SAMPLE_BYTES = bytes(range(256)) * 40  # 10240 bytes, every offset distinguishable


class MediaRootMixin:
    """Each test class gets its own MEDIA_ROOT and runs background tasks inline."""

    @classmethod
    def setUpClass(cls):
        cls._media_root = tempfile.mkdtemp(prefix='coursestream-test-')
        cls._media_override = override_settings(
            MEDIA_ROOT=cls._media_root,
            BACKGROUND_TASKS_ASYNC=False,
            STREAM_CHUNK_SIZE=1024,
        )
        cls._media_override.enable()
        super().setUpClass()

    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        cls._media_override.disable()
        shutil.rmtree(cls._media_root, ignore_errors=True)


class BaseTestMixin:
    """Base mixin with user / course / media creation helpers."""

    @classmethod
    def create_user(cls, username='student1', password='TestPass123!', role='student', **kwargs):
        return User.objects.create_user(
            username=username,
            password=password,
            full_name=kwargs.pop('full_name', f'مستخدم {username}'),
            role=role,
            **kwargs
        )

    @classmethod
    def create_admin_user(cls, username='admin1', **kwargs):
        return cls.create_user(username=username, role='admin', **kwargs)

    @classmethod
    def create_course(cls, instructor, title='برمجة بايثون', **kwargs):
        from apps.courses.models import Course
        return Course.objects.create(
            title=title,
            description=kwargs.pop('description', 'مقرر تجريبي'),
            instructor=instructor,
            category=kwargs.pop('category', 'programming'),
            **kwargs
        )

    @classmethod
    def create_video(cls, course, content=SAMPLE_BYTES, name='lecture.mp4', **kwargs):
        from apps.courses.models import Video
        return Video.objects.create(
            title=kwargs.pop('title', 'المحاضرة الأولى'),
            course=course,
            video_file=SimpleUploadedFile(name, content, content_type='video/mp4'),
            **kwargs
        )

    @classmethod
    def create_course_file(cls, course, content=b'%PDF-1.4 sample', name='notes.pdf', **kwargs):
        from apps.courses.models import CourseFile
        return CourseFile.objects.create(
            title=kwargs.pop('title', 'ملخص المحاضرة'),
            course=course,
            local_file=SimpleUploadedFile(name, content, content_type='application/pdf'),
            **kwargs
        )


def read_body(response):
    """Collect the body of a normal or streaming response."""
    if response.streaming:
        return b''.join(response.streaming_content)
    return response.content
