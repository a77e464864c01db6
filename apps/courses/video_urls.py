"""Video URLs (Streaming Engine + metadata)"""
from django.urls import path
from .views import VideoStreamView, CourseVideoListView, VideoDetailView

app_name = 'videos'

urlpatterns = [
    path('stream/<int:pk>/', VideoStreamView.as_view(), name='stream_video'),
    path('course/<int:course_id>/', CourseVideoListView.as_view(), name='course_videos'),
    path('<int:pk>/', VideoDetailView.as_view(), name='video_detail'),
]
