"""
Views Package - حزمة العروض
CourseStream - Video Course Platform

- mixins.py: أدوات التحقق من الصلاحيات (JSON)
- auth.py: تسجيل الدخول والخروج
"""

# Mixins - أدوات التحقق من الصلاحيات
from .mixins import (
    JsonAccessMixin,
    LoginRequiredMixin,
)

# Authentication - المصادقة
from .auth import (
    LoginView,
    LogoutView,
    CurrentUserView,
)

__all__ = [
    'JsonAccessMixin',
    'LoginRequiredMixin',
    'LoginView',
    'LogoutView',
    'CurrentUserView',
]
