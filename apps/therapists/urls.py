from django.urls import re_path
from .views import build_therapist_views


def build_urlpatterns(auth, file_intake, store):
    """Therapist routes wired to the given collaborators.

    Mount with ``path("api/therapist", include(...))`` (no trailing slash):
    every route then answers both with and without one, the bare root included.
    """
    views = build_therapist_views(auth, file_intake, store)
    return [
        re_path(r"^/?$", views.register, name="register_therapist"),
        re_path(r"^/profile/?$", views.profile, name="therapist_profile"),  # Combined view for GET/PUT
        re_path(r"^/bookings/?$", views.bookings, name="therapist_bookings"),
        re_path(r"^/clients/?$", views.clients, name="therapist_clients"),
    ]
