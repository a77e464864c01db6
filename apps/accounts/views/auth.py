"""
Authentication Views - عروض المصادقة
CourseStream - Video Course Platform

جلسات Django عبر JSON لعميل الواجهة الأمامية:
- GET  /api/auth/login/   رمز CSRF (الكوكي HttpOnly فلا يقرأه JavaScript)
- POST /api/auth/login/   تسجيل الدخول
- POST /api/auth/logout/  تسجيل الخروج
- GET  /api/auth/me/      المستخدم الحالي
"""

import logging

from django.contrib.auth import authenticate, login, logout
from django.middleware.csrf import get_token
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import ensure_csrf_cookie

from apps.core.responses import json_error, json_success, read_json_body

from .mixins import JsonAccessMixin, LoginRequiredMixin

logger = logging.getLogger('accounts')


@method_decorator(ensure_csrf_cookie, name='dispatch')
class LoginView(JsonAccessMixin, View):
    """
    تسجيل الدخول باسم المستخدم وكلمة المرور.

    الحسابات غير النشطة يرفضها ModelBackend مثل كلمة المرور الخاطئة.
    """

    def get(self, request):
        return json_success(
            csrf_token=get_token(request),
            user=request.user.as_dict() if request.user.is_authenticated else None,
        )

    def post(self, request):
        data = read_json_body(request)
        username = str(data.get('username') or '').strip()
        password = data.get('password') or ''
        if not username or not password:
            return json_error('اسم المستخدم وكلمة المرور مطلوبان', status=400)

        user = authenticate(request, username=username, password=str(password))
        if user is None:
            logger.warning(f"Failed login for username {username!r}")
            return json_error('بيانات الدخول غير صحيحة', status=401)

        login(request, user)
        logger.info(f"User {user.pk} logged in")
        # login() rotates the CSRF token
        return json_success(message=f'مرحباً {user}', user=user.as_dict(), csrf_token=get_token(request))


class LogoutView(LoginRequiredMixin, View):

    def post(self, request):
        user_pk = request.user.pk
        logout(request)
        logger.info(f"User {user_pk} logged out")
        return json_success(message='تم تسجيل الخروج بنجاح')


class CurrentUserView(LoginRequiredMixin, View):

    def get(self, request):
        return json_success(user=request.user.as_dict())
