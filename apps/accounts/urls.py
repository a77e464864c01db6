"""
URL Configuration for Accounts App
CourseStream - Video Course Platform
"""

from django.urls import path
from .views import LoginView, LogoutView, CurrentUserView

app_name = 'accounts'

urlpatterns = [
    path('login/', LoginView.as_view(), name='login'),
    path('logout/', LogoutView.as_view(), name='logout'),
    path('me/', CurrentUserView.as_view(), name='me'),
]
