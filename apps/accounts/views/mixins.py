"""
Access Control Mixins - أدوات التحقق من الصلاحيات
CourseStream - Video Course Platform

هذا الملف يحتوي على Mixins للتحقق من صلاحيات المستخدمين في الـ API.
الرفض يرجع JSON (401 لغير المسجلين، 403 لغير المصرح لهم) بدل التحويل لصفحة الدخول.
"""

from django.contrib.auth.mixins import AccessMixin
from django.core.exceptions import BadRequest, PermissionDenied
from django.http import Http404

from apps.core.responses import json_error


class JsonAccessMixin(AccessMixin):
    """
    يحوّل رفض الوصول و Http404 إلى استجابات JSON.

    أي View يرث هذا الـ Mixin يمكنه رفع PermissionDenied أو Http404
    من داخل get/post وستتحول إلى {"success": false, "message": ...}.
    """

    not_found_message = 'العنصر غير موجود'

    def handle_no_permission(self):
        if not self.request.user.is_authenticated:
            return json_error('يجب تسجيل الدخول أولاً', status=401)
        return json_error(self.get_permission_denied_message() or 'ليس لديك صلاحية الوصول', status=403)

    def require_admin(self):
        """عمليات الكتابة (إنشاء / تعديل / حذف) للأدمن فقط."""
        if not self.request.user.is_authenticated or not self.request.user.is_admin():
            raise PermissionDenied('هذه العملية متاحة للمدير فقط')

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except PermissionDenied as e:
            if not request.user.is_authenticated:
                return self.handle_no_permission()
            return json_error(str(e) or 'ليس لديك صلاحية الوصول', status=403)
        except Http404 as e:
            return json_error(str(e) or self.not_found_message, status=404)
        except BadRequest as e:
            return json_error(str(e) or 'طلب غير صالح', status=400)


class LoginRequiredMixin(JsonAccessMixin):
    """التحقق من أن المستخدم مسجل دخول."""

    def dispatch(self, request, *args, **kwargs):
        if not request.user.is_authenticated:
            return self.handle_no_permission()
        return super().dispatch(request, *args, **kwargs)
