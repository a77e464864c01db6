"""
تسجيل نماذج accounts في لوحة تحكم Django
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import User
# استيراد دالة التصدير من تطبيق core
from apps.core.admin import export_to_excel


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['username', 'full_name', 'email', 'role_badge', 'enrolled_count', 'is_active']
    list_filter = ['role', 'is_active', 'is_staff']
    search_fields = ['username', 'full_name', 'email']
    ordering = ['username']

    actions = [export_to_excel]

    fieldsets = BaseUserAdmin.fieldsets + (
        ('الدور', {
            'fields': ('full_name', 'role')
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('الدور', {
            'classes': ('wide',),
            'fields': ('full_name', 'role'),
        }),
    )

    def role_badge(self, obj):
        color = 'red' if obj.is_admin() else 'green'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; border-radius: 3px;">{}</span>',
            color, obj.get_role_display()
        )
    role_badge.short_description = 'الدور'

    def enrolled_count(self, obj):
        return obj.enrolled_courses.count()
    enrolled_count.short_description = 'المقررات المسجلة'
