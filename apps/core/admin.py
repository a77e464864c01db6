"""
أدوات مشتركة للوحة تحكم Django
CourseStream - Video Course Platform
"""

from decimal import Decimal

from django.contrib import admin
from django.db.models.fields.files import FieldFile
from django.http import HttpResponse
import openpyxl

# الحقول المستبعدة من التصدير (حساسة أو طويلة)
EXCLUDED_EXPORT_FIELDS = ['password', 'description']


def _cell_value(value):
    """العدادات والأحجام تبقى أرقاماً، والملفات تُصدّر بمسارها داخل MEDIA_ROOT."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'نعم' if value else 'لا'
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, FieldFile):
        return value.name or ''
    # datetimes with tzinfo are not accepted by openpyxl
    return str(value)


@admin.action(description="تصدير السجلات المحددة إلى ملف Excel")
def export_to_excel(modeladmin, request, queryset):
    opts = queryset.model._meta
    response = HttpResponse(
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    )
    response['Content-Disposition'] = f'attachment; filename="{opts.model_name}.xlsx"'

    workbook = openpyxl.Workbook()
    worksheet = workbook.active
    worksheet.title = 'البيانات المصدّرة'

    fields = [field for field in opts.fields if field.name not in EXCLUDED_EXPORT_FIELDS]

    # verbose_name قد يكون Proxy مترجم
    worksheet.append([str(field.verbose_name) for field in fields])

    for obj in queryset:
        # attname: foreign keys export their id without an extra query per row
        worksheet.append([_cell_value(getattr(obj, field.attname)) for field in fields])

    workbook.save(response)
    return response
