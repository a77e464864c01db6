"""
نماذج المقررات والفيديوهات والملفات
CourseStream - Video Course Platform

=== Architecture ===
- Course: المقرر مع الطلاب المسجلين
- Video: فيديو المقرر (يُبث عبر محرك البث مع عداد مشاهدات)
- CourseFile: مرفقات المقرر (PDF، مستندات...) مع عداد تحميلات
"""

import math
import mimetypes
import os

from django.conf import settings
from django.db import models
from django.urls import reverse


def format_file_size(size):
    """1536 -> '1.5 KB'"""
    if not size:
        return '0 Bytes'
    units = ['Bytes', 'KB', 'MB', 'GB']
    i = min(int(math.floor(math.log(size, 1024))), len(units) - 1)
    value = round(size / math.pow(1024, i), 2)
    if value == int(value):
        value = int(value)
    return f'{value} {units[i]}'


class Course(models.Model):
    """المقرر الدراسي."""

    LEVEL_CHOICES = [
        ('beginner', 'مبتدئ'),
        ('intermediate', 'متوسط'),
        ('advanced', 'متقدم'),
    ]

    title = models.CharField(max_length=200, verbose_name='عنوان المقرر')
    description = models.TextField(verbose_name='الوصف')
    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='taught_courses',
        verbose_name='المدرس'
    )
    category = models.CharField(max_length=100, verbose_name='التصنيف')
    level = models.CharField(max_length=20, choices=LEVEL_CHOICES, default='beginner', verbose_name='المستوى')
    thumbnail = models.CharField(max_length=500, blank=True, default='', verbose_name='الصورة المصغرة')
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0, verbose_name='السعر')
    duration = models.PositiveIntegerField(default=0, verbose_name='المدة (دقائق)')
    tags = models.CharField(max_length=500, blank=True, default='', verbose_name='الوسوم',
                            help_text='مفصولة بفواصل')
    enrolled_students = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='enrolled_courses',
        verbose_name='الطلاب المسجلون'
    )
    is_active = models.BooleanField(default=True, verbose_name='نشط')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='تاريخ الإنشاء')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='تاريخ التحديث')

    class Meta:
        db_table = 'courses'
        verbose_name = 'مقرر'
        verbose_name_plural = 'المقررات'
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def tag_list(self):
        return [t.strip() for t in self.tags.split(',') if t.strip()]

    @property
    def enrolled_count(self):
        return self.enrolled_students.count()

    @property
    def video_count(self):
        return self.videos.filter(is_active=True).count()

    def is_enrolled(self, user):
        if not user.is_authenticated:
            return False
        return self.enrolled_students.filter(pk=user.pk).exists()

    def can_access(self, user):
        """الأدمن يصل لكل المقررات، الطالب لما سجّل فيه فقط."""
        if not user.is_authenticated:
            return False
        return user.is_admin() or self.is_enrolled(user)

    def as_dict(self):
        return {
            'id': self.pk,
            'title': self.title,
            'description': self.description,
            'instructor': {
                'id': self.instructor_id,
                'name': str(self.instructor),
            },
            'category': self.category,
            'level': self.level,
            'thumbnail': self.thumbnail,
            'price': float(self.price),
            'duration': self.duration,
            'tags': self.tag_list,
            'enrolled_count': self.enrolled_count,
            'video_count': self.video_count,
            'created_at': self.created_at.isoformat(),
        }


class Video(models.Model):
    """فيديو ضمن مقرر، يُبث عبر /api/videos/stream/<id>/."""

    title = models.CharField(max_length=200, verbose_name='العنوان')
    description = models.TextField(blank=True, default='', verbose_name='الوصف')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='videos', verbose_name='المقرر')
    video_file = models.FileField(upload_to='videos/', verbose_name='ملف الفيديو')
    original_name = models.CharField(max_length=255, blank=True, default='', verbose_name='الاسم الأصلي')
    file_size = models.PositiveBigIntegerField(default=0, verbose_name='الحجم (بايت)')
    mime_type = models.CharField(max_length=100, blank=True, default='', verbose_name='نوع المحتوى')
    order = models.IntegerField(default=0, verbose_name='الترتيب')
    duration = models.PositiveIntegerField(default=0, verbose_name='المدة (ثواني)')
    thumbnail = models.CharField(max_length=500, blank=True, default='', verbose_name='الصورة المصغرة')
    views = models.PositiveIntegerField(default=0, verbose_name='المشاهدات')
    is_active = models.BooleanField(default=True, verbose_name='نشط')
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='uploaded_videos',
        verbose_name='رفع بواسطة'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='تاريخ الرفع')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='تاريخ التحديث')

    class Meta:
        db_table = 'videos'
        verbose_name = 'فيديو'
        verbose_name_plural = 'الفيديوهات'
        ordering = ['order', 'created_at']
        indexes = [
            models.Index(fields=['course', 'order'], name='videos_course_order_idx'),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        fill_file_info(self, self.video_file, default_type=settings.DEFAULT_VIDEO_CONTENT_TYPE)
        super().save(*args, **kwargs)

    @property
    def formatted_size(self):
        return format_file_size(self.file_size)

    @property
    def formatted_duration(self):
        """125 -> '2:05', 3725 -> '1:02:05'"""
        hours, rest = divmod(self.duration or 0, 3600)
        minutes, seconds = divmod(rest, 60)
        if hours:
            return f'{hours}:{minutes:02d}:{seconds:02d}'
        return f'{minutes}:{seconds:02d}'

    @property
    def video_url(self):
        return reverse('videos:stream_video', kwargs={'pk': self.pk})

    def as_dict(self):
        return {
            'id': self.pk,
            'title': self.title,
            'description': self.description,
            'order': self.order,
            'duration': self.duration,
            'formatted_duration': self.formatted_duration,
            'file_size': self.file_size,
            'formatted_size': self.formatted_size,
            'mime_type': self.mime_type,
            'thumbnail': self.thumbnail,
            'video_url': self.video_url,
            'views': self.views,
            'created_at': self.created_at.isoformat(),
        }


class CourseFile(models.Model):
    """مرفق مقرر (مادة عامة أو مرتبطة بفيديو محدد)."""

    FILE_TYPE_CHOICES = [
        ('pdf', 'PDF'),
        ('doc', 'Word'),
        ('txt', 'نص'),
        ('ppt', 'عرض تقديمي'),
        ('xls', 'جدول بيانات'),
        ('zip', 'ملف مضغوط'),
        ('image', 'صورة'),
        ('other', 'أخرى'),
    ]

    title = models.CharField(max_length=200, verbose_name='العنوان')
    description = models.TextField(blank=True, default='', verbose_name='الوصف')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='files', verbose_name='المقرر')
    video = models.ForeignKey(
        Video,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='files',
        verbose_name='الفيديو المرتبط'
    )
    local_file = models.FileField(upload_to='files/', verbose_name='الملف')
    original_name = models.CharField(max_length=255, blank=True, default='', verbose_name='الاسم الأصلي')
    file_size = models.PositiveBigIntegerField(default=0, verbose_name='الحجم (بايت)')
    mime_type = models.CharField(max_length=100, blank=True, default='', verbose_name='نوع المحتوى')
    file_type = models.CharField(max_length=10, choices=FILE_TYPE_CHOICES, default='other', verbose_name='نوع الملف')
    order = models.IntegerField(default=0, verbose_name='الترتيب')
    downloads = models.PositiveIntegerField(default=0, verbose_name='التحميلات')
    tags = models.CharField(max_length=500, blank=True, default='', verbose_name='الوسوم')
    is_active = models.BooleanField(default=True, verbose_name='نشط')
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='uploaded_files',
        verbose_name='رفع بواسطة'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='تاريخ الرفع')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='تاريخ التحديث')

    class Meta:
        db_table = 'course_files'
        verbose_name = 'ملف مقرر'
        verbose_name_plural = 'ملفات المقررات'
        ordering = ['order', 'created_at']
        indexes = [
            models.Index(fields=['course', 'order'], name='course_files_course_order_idx'),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        fill_file_info(self, self.local_file)
        self.file_type = detect_file_type(self.original_name, self.mime_type)
        super().save(*args, **kwargs)

    @property
    def formatted_size(self):
        return format_file_size(self.file_size)

    @property
    def download_url(self):
        return reverse('files:file_download', kwargs={'pk': self.pk})

    @property
    def tag_list(self):
        return [t.strip() for t in self.tags.split(',') if t.strip()]

    def as_dict(self):
        return {
            'id': self.pk,
            'title': self.title,
            'description': self.description,
            'original_name': self.original_name,
            'file_size': self.file_size,
            'formatted_size': self.formatted_size,
            'file_type': self.file_type,
            'mime_type': self.mime_type,
            'order': self.order,
            'downloads': self.downloads,
            'download_url': self.download_url,
            'video': {'id': self.video_id, 'title': self.video.title} if self.video_id else None,
            'tags': self.tag_list,
            'created_at': self.created_at.isoformat(),
        }


def fill_file_info(instance, field_file, default_type='application/octet-stream'):
    """ملء الاسم الأصلي والحجم ونوع المحتوى من الملف المرفوع."""
    if not field_file:
        return
    # new upload (not yet written to storage) replaces all derived info
    fresh = not field_file._committed
    name = os.path.basename(field_file.name)
    if fresh or not instance.original_name:
        instance.original_name = name
    if fresh or not instance.file_size:
        try:
            instance.file_size = field_file.size
        except OSError:
            # streaming re-reads the size from disk anyway
            instance.file_size = 0
    if fresh or not instance.mime_type:
        guessed, _ = mimetypes.guess_type(name)
        uploaded_type = getattr(field_file.file, 'content_type', None) if fresh else None
        instance.mime_type = guessed or uploaded_type or default_type


def detect_file_type(filename, mime_type):
    """تحديد نوع الملف من الامتداد ونوع المحتوى."""
    extension = os.path.splitext(filename or '')[1].lower().lstrip('.')
    mime_type = (mime_type or '').lower()

    if 'pdf' in mime_type or extension == 'pdf':
        return 'pdf'
    if 'word' in mime_type or extension in ('doc', 'docx'):
        return 'doc'
    if 'presentation' in mime_type or extension in ('ppt', 'pptx'):
        return 'ppt'
    if 'spreadsheet' in mime_type or extension in ('xls', 'xlsx'):
        return 'xls'
    if 'zip' in mime_type or extension in ('zip', 'rar', '7z'):
        return 'zip'
    if mime_type.startswith('image') or extension in ('jpg', 'jpeg', 'png', 'gif', 'webp'):
        return 'image'
    if mime_type.startswith('text') or extension == 'txt':
        return 'txt'
    return 'other'
