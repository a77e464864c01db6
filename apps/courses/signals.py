"""
Django Signals لتنظيف الملفات
CourseStream - Video Course Platform

حذف Video أو CourseFile (من الـ API أو لوحة التحكم) يحذف الملف من القرص.
فشل حذف الملف يُسجل فقط ولا يمنع حذف السجل.
"""

import logging
from django.db.models.signals import post_delete
from django.dispatch import receiver

logger = logging.getLogger('courses')


def _delete_stored_file(field_file, label):
    if not field_file:
        return
    try:
        field_file.delete(save=False)
    except OSError as e:
        logger.warning(f"Could not delete stored file for {label}: {e}")


@receiver(post_delete, sender='courses.Video')
def handle_video_deleted(sender, instance, **kwargs):
    _delete_stored_file(instance.video_file, f'video {instance.pk}')


@receiver(post_delete, sender='courses.CourseFile')
def handle_course_file_deleted(sender, instance, **kwargs):
    _delete_stored_file(instance.local_file, f'file {instance.pk}')
