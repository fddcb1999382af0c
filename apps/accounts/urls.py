from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),

    # Current member
    path('user/', views.get_current_user, name='current-user'),
]
