"""
استجابات JSON الموحدة وقراءة جسم الطلب
CourseStream - Video Course Platform

كل الـ API يرجع {"success": bool, ...} مع message عند الخطأ.
"""

import json

from django.core.exceptions import BadRequest
from django.http import JsonResponse


def json_success(status=200, **payload):
    return JsonResponse({'success': True, **payload}, status=status,
                        json_dumps_params={'ensure_ascii': False})


def json_error(message, status=400, **payload):
    return JsonResponse({'success': False, 'message': message, **payload}, status=status,
                        json_dumps_params={'ensure_ascii': False})


def read_json_body(request):
    """قراءة جسم الطلب كـ JSON (dict)، وإلا BadRequest."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise BadRequest('جسم الطلب ليس JSON صالحاً')
    if not isinstance(data, dict):
        raise BadRequest('جسم الطلب يجب أن يكون كائن JSON')
    return data
