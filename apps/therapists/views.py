import json
import logging
from dataclasses import dataclass
from typing import Callable

from django.http import JsonResponse, QueryDict
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.therapists.forms import TherapistRegistrationForm, ProfileUpdateForm
from apps.therapists.models import Therapist, PROFILE_FIELDS
from apps.bookings.models import Booking
from apps.utils.db_helper import convert_object_ids
from apps.utils.errors import (
    TherapistAPIError, Unauthenticated, NotFound, ValidationFailure,
    error_response, form_errors_message,
)

logger = logging.getLogger(__name__)


@dataclass
class TherapistViews:
    register: Callable
    profile: Callable
    bookings: Callable
    clients: Callable


def parse_body(request):
    """Request body as a dict-like: JSON object or urlencoded form"""
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except ValueError:
            raise ValidationFailure("Request body is not valid JSON")
        if not isinstance(data, dict):
            raise ValidationFailure("Request body must be a JSON object")
        return data
    if request.content_type == "multipart/form-data":
        raise ValidationFailure("Send profile changes as JSON or a urlencoded form")
    return QueryDict(request.body, encoding=request.encoding)


def build_therapist_views(auth, file_intake, store):
    """Bind the therapist endpoints to their collaborators.

    auth.authenticate(request) -> caller id or None
    file_intake.save(uploaded_file or None) -> stored path ("" for None)
    file_intake.delete(path) removes a stored file
    store -> MongoDocumentStore or anything with the same methods
    """

    def require_caller(request):
        therapist_id = auth.authenticate(request)
        if not therapist_id:
            raise Unauthenticated()
        return therapist_id

    @csrf_exempt
    @require_http_methods(["POST"])
    def register_therapist(request):
        """ Register a therapist from a multipart form """
        credentials_url = ""
        try:
            form = TherapistRegistrationForm(request.POST, request.FILES)
            if not form.is_valid():
                raise ValidationFailure(form_errors_message(form))
            data = form.cleaned_data

            if store.find_therapist_by_email(data["email"]):
                raise ValidationFailure("Email already exists")

            credentials_url = file_intake.save(data.get("credentials"))

            therapist = Therapist(
                name=data["name"],
                email=data["email"],
                password=data["password"],
                license=data.get("license"),
                expertise=form.expertise(),
                years=data.get("years"),
                institution=data.get("institution"),
                credentials_url=credentials_url,
            )
            document = store.create_therapist(therapist.to_document())
            logger.info(f"Registered therapist {document['_id']}")

            return JsonResponse({
                "message": "Therapist registered",
                "therapist": convert_object_ids(Therapist.public_document(document)),
            }, status=201)

        except Exception as e:
            logger.warning(f"Therapist registration failed: {str(e)}")
            if credentials_url:
                discard_upload(credentials_url)
            return error_response(str(e), status=400)

    def discard_upload(credentials_url):
        try:
            file_intake.delete(credentials_url)
        except Exception as e:
            logger.error(f"Could not remove credentials file {credentials_url}: {str(e)}")

    def get_profile(request):
        therapist_id = require_caller(request)
        therapist = store.find_therapist_by_id(therapist_id, fields=PROFILE_FIELDS)
        if not therapist:
            raise NotFound("Therapist not found")
        return JsonResponse(Therapist.profile(therapist))

    def update_profile(request):
        therapist_id = require_caller(request)
        form = ProfileUpdateForm(parse_body(request))
        if not form.is_valid():
            raise ValidationFailure(form_errors_message(form))

        changes = form.changes()
        if changes:
            store.update_therapist(therapist_id, changes)
        return JsonResponse({"success": True})

    @csrf_exempt
    @require_http_methods(["GET", "PUT"])
    def therapist_profile(request):
        """ GET returns the caller's profile, PUT updates name/role/status """
        try:
            if request.method == "PUT":
                return update_profile(request)
            return get_profile(request)
        except TherapistAPIError as e:
            return e.to_response()
        except Exception as e:
            logger.exception("Therapist profile request failed")
            return error_response(str(e), status=500)

    @require_http_methods(["GET"])
    def therapist_bookings(request):
        """ Bookings assigned to the caller """
        try:
            therapist_id = require_caller(request)
            bookings = store.find_bookings_for_doctor(therapist_id, expand_client=True)
            return JsonResponse([Booking.summary(b) for b in bookings], safe=False)
        except TherapistAPIError as e:
            return e.to_response()
        except Exception as e:
            logger.exception("Listing therapist bookings failed")
            return error_response(str(e), status=500)

    @require_http_methods(["GET"])
    def therapist_clients(request):
        """ Unique client names across the caller's bookings """
        try:
            therapist_id = require_caller(request)
            bookings = store.find_bookings_for_doctor(therapist_id, expand_client=True)
            return JsonResponse(Booking.unique_client_names(bookings), safe=False)
        except TherapistAPIError as e:
            return e.to_response()
        except Exception as e:
            logger.exception("Listing therapist clients failed")
            return error_response(str(e), status=500)

    return TherapistViews(
        register=register_therapist,
        profile=therapist_profile,
        bookings=therapist_bookings,
        clients=therapist_clients,
    )
