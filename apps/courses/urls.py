"""
URL Configuration for Courses App
CourseStream - Video Course Platform
"""

from django.urls import path
from .views import CourseListView, CourseDetailView, CourseEnrollView, EnrolledCoursesView

app_name = 'courses'

urlpatterns = [
    path('', CourseListView.as_view(), name='course_list'),
    path('user/enrolled/', EnrolledCoursesView.as_view(), name='enrolled_courses'),
    path('<int:pk>/', CourseDetailView.as_view(), name='course_detail'),
    path('<int:pk>/enroll/', CourseEnrollView.as_view(), name='course_enroll'),
]
