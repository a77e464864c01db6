"""
URL configuration for CourseStream project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    # Django Admin (course / video / file management)
    path('admin/', admin.site.urls),

    # Accounts App (session login / logout for the SPA)
    path('api/auth/', include('apps.accounts.urls')),

    # Courses App (catalog, enrolment, file metadata)
    path('api/courses/', include('apps.courses.urls')),

    # Videos (Streaming Engine + metadata)
    path('api/videos/', include('apps.courses.video_urls')),
    path('api/files/', include('apps.courses.file_urls')),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# Admin site customization
admin.site.site_header = "إدارة CourseStream"
admin.site.site_title = "لوحة تحكم CourseStream"
admin.site.index_title = "إدارة المقررات والفيديوهات والملفات"
