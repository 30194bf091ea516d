from django.urls import path
from .views import appointment_list_create, appointment_detail, send_reminders, appointment_form_options

urlpatterns = [
    path('', appointment_list_create, name='appointment-list-create'),
    path('options/', appointment_form_options, name='appointment-form-options'),
    path('send-reminders/', send_reminders, name='appointment-send-reminders'),
    path('<int:pk>/', appointment_detail, name='appointment-detail'),
]
