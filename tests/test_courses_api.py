"""
Tests for the course catalog API: courses, enrolment, video and file metadata,
file downloads.
"""

import json
import os

from django.test import TestCase
from django.urls import reverse

from apps.courses.models import Course, CourseFile, Video

from .base import BaseTestMixin, MediaRootMixin, SAMPLE_BYTES, read_body


class ApiTestBase(MediaRootMixin, BaseTestMixin, TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = cls.create_admin_user()
        cls.student = cls.create_user('student1')
        cls.other_student = cls.create_user('student2')
        cls.course = cls.create_course(cls.admin, title='برمجة بايثون', category='programming',
                                       level='beginner', tags='python, web')
        cls.course.enrolled_students.add(cls.student)


# ============================================================================
# 1. Courses
# ============================================================================

class CourseListTest(ApiTestBase):

    def test_public_listing(self):
        self.create_course(self.admin, title='تصميم', category='design', level='advanced')
        self.create_course(self.admin, title='مخفي', is_active=False)
        response = self.client.get(reverse('courses:course_list'))
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['pagination']['total'], 2)
        titles = {c['title'] for c in data['courses']}
        self.assertNotIn('مخفي', titles)

    def test_filters(self):
        self.create_course(self.admin, title='تصميم الواجهات', category='design', level='advanced')
        url = reverse('courses:course_list')
        self.assertEqual(self.client.get(url, {'category': 'design'}).json()['pagination']['total'], 1)
        self.assertEqual(self.client.get(url, {'level': 'beginner'}).json()['pagination']['total'], 1)
        result = self.client.get(url, {'search': 'الواجهات'}).json()
        self.assertEqual([c['title'] for c in result['courses']], ['تصميم الواجهات'])

    def test_pagination(self):
        for i in range(5):
            self.create_course(self.admin, title=f'مقرر {i}')
        data = self.client.get(reverse('courses:course_list'), {'limit': 2, 'page': 3}).json()
        self.assertEqual(data['pagination'], {'current': 3, 'pages': 3, 'total': 6})
        self.assertEqual(len(data['courses']), 2)

    def test_bad_pagination_params_fall_back(self):
        data = self.client.get(reverse('courses:course_list'), {'limit': 'x', 'page': 'y'}).json()
        self.assertEqual(data['pagination']['current'], 1)

    def test_course_dict(self):
        course = self.client.get(reverse('courses:course_list')).json()['courses'][0]
        self.assertEqual(course['tags'], ['python', 'web'])
        self.assertEqual(course['enrolled_count'], 1)


class CourseDetailTest(ApiTestBase):

    def test_detail_lists_active_videos_in_order(self):
        self.create_video(self.course, title='ثانياً', order=2)
        self.create_video(self.course, title='أولاً', order=1)
        self.create_video(self.course, title='مخفي', order=0, is_active=False)
        data = self.client.get(reverse('courses:course_detail', kwargs={'pk': self.course.pk})).json()
        self.assertEqual([v['title'] for v in data['course']['videos']], ['أولاً', 'ثانياً'])
        self.assertFalse(data['course']['is_enrolled'])

    def test_is_enrolled_for_student(self):
        self.client.force_login(self.student)
        data = self.client.get(reverse('courses:course_detail', kwargs={'pk': self.course.pk})).json()
        self.assertTrue(data['course']['is_enrolled'])

    def test_missing_course(self):
        response = self.client.get(reverse('courses:course_detail', kwargs={'pk': 9999}))
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()['success'])


class EnrollmentTest(ApiTestBase):

    def url(self, course):
        return reverse('courses:course_enroll', kwargs={'pk': course.pk})

    def test_enroll_requires_login(self):
        self.assertEqual(self.client.post(self.url(self.course)).status_code, 401)

    def test_enroll_and_leave(self):
        self.client.force_login(self.other_student)
        self.assertEqual(self.client.post(self.url(self.course)).status_code, 200)
        self.assertTrue(self.course.is_enrolled(self.other_student))

        self.assertEqual(self.client.post(self.url(self.course)).status_code, 400)

        self.assertEqual(self.client.delete(self.url(self.course)).status_code, 200)
        self.assertFalse(self.course.is_enrolled(self.other_student))

        self.assertEqual(self.client.delete(self.url(self.course)).status_code, 400)

    def test_enroll_in_inactive_course(self):
        course = self.create_course(self.admin, title='مغلق', is_active=False)
        self.client.force_login(self.other_student)
        self.assertEqual(self.client.post(self.url(course)).status_code, 404)

    def test_enrolled_courses(self):
        self.create_course(self.admin, title='غير مسجل')
        self.client.force_login(self.student)
        data = self.client.get(reverse('courses:enrolled_courses')).json()
        self.assertEqual([c['id'] for c in data['courses']], [self.course.pk])


# ============================================================================
# 2. Videos
# ============================================================================

class VideoMetadataTest(ApiTestBase):

    def setUp(self):
        self.video = self.create_video(self.course, title='مقدمة', duration=125)

    def test_course_videos_for_enrolled_student(self):
        self.client.force_login(self.student)
        response = self.client.get(reverse('videos:course_videos', kwargs={'course_id': self.course.pk}))
        self.assertEqual(response.status_code, 200)
        video = response.json()['videos'][0]
        self.assertEqual(video['formatted_duration'], '2:05')
        self.assertEqual(video['video_url'], reverse('videos:stream_video', kwargs={'pk': self.video.pk}))

    def test_course_videos_forbidden_for_outsider(self):
        self.client.force_login(self.other_student)
        response = self.client.get(reverse('videos:course_videos', kwargs={'course_id': self.course.pk}))
        self.assertEqual(response.status_code, 403)

    def test_course_videos_unknown_course(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('videos:course_videos', kwargs={'course_id': 9999}))
        self.assertEqual(response.status_code, 404)

    def test_video_detail(self):
        self.client.force_login(self.student)
        data = self.client.get(reverse('videos:video_detail', kwargs={'pk': self.video.pk})).json()
        self.assertEqual(data['video']['course'], {'id': self.course.pk, 'title': self.course.title})
        self.assertEqual(data['video']['file_size'], len(SAMPLE_BYTES))
        self.assertEqual(data['video']['formatted_size'], '10 KB')

    def test_update_requires_admin(self):
        self.client.force_login(self.student)
        response = self.client.put(
            reverse('videos:video_detail', kwargs={'pk': self.video.pk}),
            data=json.dumps({'title': 'جديد'}), content_type='application/json',
        )
        self.assertEqual(response.status_code, 403)

    def test_update_by_admin(self):
        self.client.force_login(self.admin)
        response = self.client.put(
            reverse('videos:video_detail', kwargs={'pk': self.video.pk}),
            data=json.dumps({'title': 'عنوان جديد', 'order': '4', 'description': None}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.video.refresh_from_db()
        self.assertEqual(self.video.title, 'عنوان جديد')
        self.assertEqual(self.video.order, 4)
        self.assertEqual(self.video.description, '')

    def test_update_with_invalid_json(self):
        self.client.force_login(self.admin)
        response = self.client.put(
            reverse('videos:video_detail', kwargs={'pk': self.video.pk}),
            data='{not json', content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)

    def test_delete_removes_record_and_file(self):
        path = self.video.video_file.path
        self.assertTrue(os.path.exists(path))
        self.client.force_login(self.admin)
        response = self.client.delete(reverse('videos:video_detail', kwargs={'pk': self.video.pk}))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Video.objects.filter(pk=self.video.pk).exists())
        self.assertFalse(os.path.exists(path))

    def test_delete_with_missing_file_still_succeeds(self):
        os.remove(self.video.video_file.path)
        self.client.force_login(self.admin)
        response = self.client.delete(reverse('videos:video_detail', kwargs={'pk': self.video.pk}))
        self.assertEqual(response.status_code, 200)


# ============================================================================
# 3. Files
# ============================================================================

class CourseFileApiTest(ApiTestBase):

    def setUp(self):
        self.video = self.create_video(self.course)
        self.general_file = self.create_course_file(self.course, title='عام', order=1)
        self.video_file = self.create_course_file(self.course, title='خاص بالفيديو', order=2,
                                                  video=self.video, name='slides.ppt')

    def test_file_type_detection(self):
        self.assertEqual(self.general_file.file_type, 'pdf')
        self.assertEqual(self.video_file.file_type, 'ppt')

    def test_course_files(self):
        self.client.force_login(self.student)
        data = self.client.get(reverse('files:course_files', kwargs={'course_id': self.course.pk})).json()
        self.assertEqual([f['title'] for f in data['files']], ['عام', 'خاص بالفيديو'])
        self.assertEqual(data['files'][1]['video'], {'id': self.video.pk, 'title': self.video.title})

    def test_video_files(self):
        self.client.force_login(self.student)
        data = self.client.get(reverse('files:video_files', kwargs={'video_id': self.video.pk})).json()
        self.assertEqual([f['id'] for f in data['files']], [self.video_file.pk])

    def test_video_files_forbidden_for_outsider(self):
        self.client.force_login(self.other_student)
        response = self.client.get(reverse('files:video_files', kwargs={'video_id': self.video.pk}))
        self.assertEqual(response.status_code, 403)

    def test_file_detail(self):
        self.client.force_login(self.student)
        data = self.client.get(reverse('files:file_detail', kwargs={'pk': self.general_file.pk})).json()
        self.assertEqual(data['file']['download_url'],
                         reverse('files:file_download', kwargs={'pk': self.general_file.pk}))

    def test_update_tags_by_admin(self):
        self.client.force_login(self.admin)
        response = self.client.put(
            reverse('files:file_detail', kwargs={'pk': self.general_file.pk}),
            data=json.dumps({'tags': ['pdf', ' notes ', '']}), content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['file']['tags'], ['pdf', 'notes'])

    def test_delete_by_admin(self):
        path = self.general_file.local_file.path
        self.client.force_login(self.admin)
        response = self.client.delete(reverse('files:file_detail', kwargs={'pk': self.general_file.pk}))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(CourseFile.objects.filter(pk=self.general_file.pk).exists())
        self.assertFalse(os.path.exists(path))

    def test_delete_forbidden_for_student(self):
        self.client.force_login(self.student)
        response = self.client.delete(reverse('files:file_detail', kwargs={'pk': self.general_file.pk}))
        self.assertEqual(response.status_code, 403)


class FileDownloadTest(ApiTestBase):

    def setUp(self):
        self.course_file = self.create_course_file(self.course, content=SAMPLE_BYTES[:500], name='notes.pdf')
        self.url = reverse('files:file_download', kwargs={'pk': self.course_file.pk})

    def downloads(self):
        return CourseFile.objects.values_list('downloads', flat=True).get(pk=self.course_file.pk)

    def test_download_as_attachment(self):
        self.client.force_login(self.student)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertEqual(response['Content-Length'], '500')
        self.assertIn('attachment', response['Content-Disposition'])
        self.assertIn('notes.pdf', response['Content-Disposition'])
        self.assertEqual(read_body(response), SAMPLE_BYTES[:500])
        self.assertEqual(self.downloads(), 1)

    def test_download_with_range(self):
        self.client.force_login(self.student)
        response = self.client.get(self.url, HTTP_RANGE='bytes=100-')
        self.assertEqual(response.status_code, 206)
        self.assertEqual(response['Content-Range'], 'bytes 100-499/500')
        self.assertEqual(read_body(response), SAMPLE_BYTES[100:500])

    def test_download_does_not_count_video_views(self):
        video = self.create_video(self.course)
        self.client.force_login(self.student)
        read_body(self.client.get(self.url))
        self.assertEqual(Video.objects.get(pk=video.pk).views, 0)

    def test_download_forbidden_for_outsider(self):
        self.client.force_login(self.other_student)
        self.assertEqual(self.client.get(self.url).status_code, 403)
        self.assertEqual(self.downloads(), 0)

    def test_download_missing_file(self):
        os.remove(self.course_file.local_file.path)
        self.client.force_login(self.student)
        self.assertEqual(self.client.get(self.url).status_code, 404)
        self.assertEqual(self.downloads(), 0)

    def test_download_unsatisfiable_range(self):
        self.client.force_login(self.student)
        response = self.client.get(self.url, HTTP_RANGE='bytes=500-')
        self.assertEqual(response.status_code, 416)
        self.assertEqual(response['Content-Range'], 'bytes */500')
        self.assertEqual(self.downloads(), 0)


class CourseModelTest(ApiTestBase):

    def test_can_access(self):
        self.assertTrue(self.course.can_access(self.student))
        self.assertTrue(self.course.can_access(self.admin))
        self.assertFalse(self.course.can_access(self.other_student))

    def test_str(self):
        self.assertEqual(str(Course.objects.get(pk=self.course.pk)), 'برمجة بايثون')


class CourseWriteTest(ApiTestBase):

    def send(self, method, url, payload):
        return getattr(self.client, method)(url, data=json.dumps(payload), content_type='application/json')

    def test_create_course(self):
        self.client.force_login(self.admin)
        response = self.send('post', reverse('courses:course_list'), {
            'title': 'تحليل البيانات', 'description': 'pandas و numpy', 'category': 'data',
            'level': 'intermediate', 'price': '49.5', 'tags': ['data', ' python '],
        })
        self.assertEqual(response.status_code, 201)
        data = response.json()['course']
        self.assertEqual(data['title'], 'تحليل البيانات')
        self.assertEqual(data['instructor']['id'], self.admin.pk)
        self.assertEqual(data['price'], 49.5)
        self.assertEqual(data['tags'], ['data', 'python'])
        self.assertTrue(Course.objects.filter(pk=data['id'], is_active=True).exists())

    def test_create_requires_title_description_category(self):
        self.client.force_login(self.admin)
        response = self.send('post', reverse('courses:course_list'), {'title': 'ناقص', 'description': '  '})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['missing'], ['description', 'category'])

    def test_create_rejects_unknown_level(self):
        self.client.force_login(self.admin)
        response = self.send('post', reverse('courses:course_list'), {
            'title': 'x', 'description': 'y', 'category': 'z', 'level': 'expert',
        })
        self.assertEqual(response.status_code, 400)
        self.assertIn('level', response.json()['errors'])

    def test_invalid_price_falls_back_to_zero(self):
        self.client.force_login(self.admin)
        for price in ('abc', -5, '1e400', 'NaN'):
            with self.subTest(price=price):
                response = self.send('post', reverse('courses:course_list'), {
                    'title': 'x', 'description': 'y', 'category': 'z', 'price': price,
                })
                self.assertEqual(response.status_code, 201)
                self.assertEqual(response.json()['course']['price'], 0.0)

    def test_create_permissions(self):
        payload = {'title': 'x', 'description': 'y', 'category': 'z'}
        self.assertEqual(self.send('post', reverse('courses:course_list'), payload).status_code, 401)
        self.client.force_login(self.student)
        self.assertEqual(self.send('post', reverse('courses:course_list'), payload).status_code, 403)
        self.assertEqual(Course.objects.count(), 1)

    def test_update_course(self):
        self.client.force_login(self.admin)
        url = reverse('courses:course_detail', kwargs={'pk': self.course.pk})
        response = self.send('put', url, {'title': 'عنوان محدث', 'description': '', 'tags': 'a, b', 'duration': 90})
        self.assertEqual(response.status_code, 200)
        self.course.refresh_from_db()
        self.assertEqual(self.course.title, 'عنوان محدث')
        self.assertEqual(self.course.description, 'مقرر تجريبي')
        self.assertEqual(self.course.tag_list, ['a', 'b'])
        self.assertEqual(self.course.duration, 90)

    def test_update_by_student_is_forbidden(self):
        self.client.force_login(self.student)
        url = reverse('courses:course_detail', kwargs={'pk': self.course.pk})
        self.assertEqual(self.send('put', url, {'title': 'x'}).status_code, 403)

    def test_update_unknown_course(self):
        self.client.force_login(self.admin)
        url = reverse('courses:course_detail', kwargs={'pk': 9999})
        self.assertEqual(self.send('put', url, {'title': 'x'}).status_code, 404)

    def test_delete_hides_course_and_keeps_videos(self):
        video = self.create_video(self.course)
        self.client.force_login(self.admin)
        url = reverse('courses:course_detail', kwargs={'pk': self.course.pk})
        self.assertEqual(self.client.delete(url).status_code, 200)

        self.course.refresh_from_db()
        self.assertFalse(self.course.is_active)
        self.assertTrue(Video.objects.filter(pk=video.pk).exists())
        self.assertTrue(os.path.exists(video.video_file.path))
        self.assertEqual(self.client.get(url).status_code, 404)

    def test_delete_anonymous(self):
        url = reverse('courses:course_detail', kwargs={'pk': self.course.pk})
        self.assertEqual(self.client.delete(url).status_code, 401)
