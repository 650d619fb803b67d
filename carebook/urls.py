from django.conf import settings
from django.urls import path, include

from apps.therapists.urls import build_urlpatterns
from apps.utils.auth import JWTAuthenticator
from apps.utils.document_store import MongoDocumentStore
from apps.utils.storage import get_credential_storage

therapist_routes = build_urlpatterns(
    auth=JWTAuthenticator(settings.JWT_SECRET, algorithms=settings.JWT_ALGORITHMS),
    file_intake=get_credential_storage(),
    store=MongoDocumentStore(
        settings.MONGO_URI,
        settings.MONGO_DB,
        serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
    ),
)

urlpatterns = [
    # API endpoints
    path('api/therapist', include(therapist_routes)),
]
