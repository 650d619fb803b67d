from django.apps import AppConfig
import os

class BookingsConfig(AppConfig):
    name = 'apps.bookings'
    path = os.path.dirname(os.path.abspath(__file__))
    app_label = 'bookings'
