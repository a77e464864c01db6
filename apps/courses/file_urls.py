"""Course File URLs"""
from django.urls import path
from .views import FileDownloadView, CourseFileListView, VideoFileListView, FileDetailView

app_name = 'files'

urlpatterns = [
    path('download/<int:pk>/', FileDownloadView.as_view(), name='file_download'),
    path('course/<int:course_id>/', CourseFileListView.as_view(), name='course_files'),
    path('video/<int:video_id>/', VideoFileListView.as_view(), name='video_files'),
    path('<int:pk>/', FileDetailView.as_view(), name='file_detail'),
]
