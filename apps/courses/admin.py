"""
تسجيل نماذج courses في لوحة تحكم Django
"""

from django.contrib import admin

from .models import Course, Video, CourseFile
from apps.core.admin import export_to_excel


class VideoInline(admin.TabularInline):
    model = Video
    fields = ['title', 'order', 'video_file', 'views', 'is_active']
    readonly_fields = ['views']
    extra = 0


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'level', 'instructor', 'students_count', 'videos_count', 'is_active', 'created_at']
    list_filter = ['level', 'category', 'is_active']
    search_fields = ['title', 'description', 'tags']
    filter_horizontal = ['enrolled_students']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [VideoInline]
    actions = [export_to_excel]

    def students_count(self, obj):
        return obj.enrolled_count
    students_count.short_description = 'عدد الطلاب'

    def videos_count(self, obj):
        return obj.video_count
    videos_count.short_description = 'عدد الفيديوهات'


@admin.register(Video)
class VideoAdmin(admin.ModelAdmin):
    list_display = ['title', 'course', 'order', 'formatted_size', 'views', 'is_active', 'created_at']
    list_filter = ['is_active', 'course']
    search_fields = ['title', 'description', 'course__title']
    # العدادات تُحدّث فقط عبر محرك البث
    readonly_fields = ['views', 'file_size', 'original_name', 'created_at', 'updated_at']
    actions = [export_to_excel]

    def formatted_size(self, obj):
        return obj.formatted_size
    formatted_size.short_description = 'الحجم'

    def save_model(self, request, obj, form, change):
        if not obj.uploaded_by_id:
            obj.uploaded_by = request.user
        super().save_model(request, obj, form, change)


@admin.register(CourseFile)
class CourseFileAdmin(admin.ModelAdmin):
    list_display = ['title', 'course', 'video', 'file_type', 'downloads', 'is_active', 'created_at']
    list_filter = ['file_type', 'is_active', 'course']
    search_fields = ['title', 'original_name', 'course__title']
    readonly_fields = ['downloads', 'file_size', 'file_type', 'original_name', 'created_at', 'updated_at']
    actions = [export_to_excel]

    def save_model(self, request, obj, form, change):
        if not obj.uploaded_by_id:
            obj.uploaded_by = request.user
        super().save_model(request, obj, form, change)
