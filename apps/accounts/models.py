"""
نماذج الحسابات
CourseStream - Video Course Platform

User: مستخدم Django مع دور (admin / student)
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    المستخدم مع الدور.
    الأدمن يدير المقررات ويصل لكل الفيديوهات، الطالب يصل لما سجّل فيه فقط.
    """

    ROLE_STUDENT = 'student'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_STUDENT, 'طالب'),
        (ROLE_ADMIN, 'مدير'),
    ]

    full_name = models.CharField(max_length=150, blank=True, verbose_name='الاسم الكامل')
    role = models.CharField(
        max_length=10,
        choices=ROLE_CHOICES,
        default=ROLE_STUDENT,
        verbose_name='الدور'
    )

    class Meta:
        db_table = 'users'
        verbose_name = 'مستخدم'
        verbose_name_plural = 'المستخدمون'

    def __str__(self):
        return self.full_name or self.username

    def is_admin(self):
        return self.role == self.ROLE_ADMIN or self.is_superuser

    def as_dict(self):
        return {
            'id': self.pk,
            'username': self.username,
            'full_name': self.full_name,
            'email': self.email,
            'role': self.role,
        }
