"""
Tests for course model helpers and the storage resolver.
"""

from django.test import SimpleTestCase, TestCase

from apps.core.exceptions import MediaNotFound
from apps.courses.models import CourseFile, Video, detect_file_type, format_file_size
from apps.courses.storage import CourseFileStorage, VideoStorage

from .base import BaseTestMixin, MediaRootMixin, SAMPLE_BYTES


class HelpersTest(SimpleTestCase):

    def test_format_file_size(self):
        self.assertEqual(format_file_size(0), '0 Bytes')
        self.assertEqual(format_file_size(None), '0 Bytes')
        self.assertEqual(format_file_size(512), '512 Bytes')
        self.assertEqual(format_file_size(1536), '1.5 KB')
        self.assertEqual(format_file_size(5 * 1024 * 1024), '5 MB')

    def test_formatted_duration(self):
        self.assertEqual(Video(duration=0).formatted_duration, '0:00')
        self.assertEqual(Video(duration=125).formatted_duration, '2:05')
        self.assertEqual(Video(duration=3725).formatted_duration, '1:02:05')

    def test_detect_file_type(self):
        cases = [
            ('notes.pdf', 'application/pdf', 'pdf'),
            ('report.docx', '', 'doc'),
            ('slides.ppt', 'application/vnd.ms-powerpoint', 'ppt'),
            ('grades.xlsx', '', 'xls'),
            ('code.zip', 'application/zip', 'zip'),
            ('diagram.png', 'image/png', 'image'),
            ('readme.txt', 'text/plain', 'txt'),
            ('data.bin', 'application/octet-stream', 'other'),
            ('', '', 'other'),
        ]
        for filename, mime_type, expected in cases:
            with self.subTest(filename=filename):
                self.assertEqual(detect_file_type(filename, mime_type), expected)


class StorageResolverTest(MediaRootMixin, BaseTestMixin, TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = cls.create_admin_user()
        cls.course = cls.create_course(cls.admin)

    def test_video_upload_fills_file_info(self):
        video = self.create_video(self.course, name='intro.mp4')
        self.assertEqual(video.original_name, 'intro.mp4')
        self.assertEqual(video.file_size, len(SAMPLE_BYTES))
        self.assertEqual(video.mime_type, 'video/mp4')

    def test_describe_video(self):
        video = self.create_video(self.course, name='intro.mp4')
        stored = VideoStorage.describe(video)
        self.assertEqual(stored.pk, video.pk)
        self.assertEqual(stored.path, video.video_file.path)
        self.assertEqual(stored.declared_length, len(SAMPLE_BYTES))
        self.assertEqual(stored.content_type, 'video/mp4')
        self.assertTrue(stored.is_video)

    def test_record_without_stored_file(self):
        with self.assertRaises(MediaNotFound):
            VideoStorage.describe(Video(pk=1, course=self.course))
        with self.assertRaises(MediaNotFound):
            CourseFileStorage.describe(CourseFile(pk=1, course=self.course))

    def test_video_without_type_falls_back_to_default(self):
        video = self.create_video(self.course)
        Video.objects.filter(pk=video.pk).update(mime_type='')
        video.refresh_from_db()
        self.assertEqual(VideoStorage.describe(video).content_type, 'video/mp4')

    def test_describe_course_file(self):
        course_file = self.create_course_file(self.course)
        stored = CourseFileStorage.describe(course_file)
        self.assertEqual(stored.filename, 'notes.pdf')
        self.assertEqual(stored.content_type, 'application/pdf')
        self.assertFalse(stored.is_video)

    def test_increment_missing_record_is_logged(self):
        with self.assertLogs('courses', level='WARNING'):
            VideoStorage.increment_views(99999)
        with self.assertLogs('courses', level='WARNING'):
            CourseFileStorage.increment_downloads(99999)
