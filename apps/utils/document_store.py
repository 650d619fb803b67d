"""MongoDB access for therapists, bookings and clients.

``MongoDocumentStore`` is the store handed to the therapist routes. It
connects on first use, so building it never touches the network. Every
pymongo error is re-raised as ``StoreFailure`` with the driver's message.
"""

import logging
from datetime import datetime, timezone
from functools import wraps

from pymongo.errors import PyMongoError

from database import get_db_client, get_database
from apps.therapists.models import THERAPISTS_COLLECTION
from apps.bookings.models import BOOKINGS_COLLECTION, CLIENTS_COLLECTION
from apps.utils.db_helper import to_object_id, id_variants
from apps.utils.errors import StoreFailure

logger = logging.getLogger(__name__)


def store_operation(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"MongoDB error in {func.__name__}: {str(e)}")
            raise StoreFailure(str(e)) from e
    return wrapper


class MongoDocumentStore:
    def __init__(self, mongo_uri=None, db_name=None, db=None, **client_options):
        self.mongo_uri = mongo_uri
        self.db_name = db_name
        self.client_options = client_options
        self._db = db

    @property
    def db(self):
        if self._db is None:
            client = get_db_client(self.mongo_uri, ping=False, **self.client_options)
            self._db = get_database(client, self.db_name)
        return self._db

    @property
    def therapists(self):
        return self.db[THERAPISTS_COLLECTION]

    @property
    def bookings(self):
        return self.db[BOOKINGS_COLLECTION]

    @property
    def clients(self):
        return self.db[CLIENTS_COLLECTION]

    # Therapists

    @store_operation
    def create_therapist(self, document):
        """ Insert a therapist document, return it with its _id """
        document = dict(document)
        result = self.therapists.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    @store_operation
    def find_therapist_by_email(self, email):
        return self.therapists.find_one({"email": email})

    @store_operation
    def find_therapist_by_id(self, therapist_id, fields=None):
        """ Find therapist by ID, optionally projecting to ``fields`` """
        projection = {field: 1 for field in fields} if fields else None
        return self.therapists.find_one({"_id": to_object_id(therapist_id)}, projection)

    @store_operation
    def update_therapist(self, therapist_id, fields):
        """ $set only the given fields; a missing therapist is not an error """
        update_data = dict(fields)
        update_data["updated_at"] = datetime.now(timezone.utc)
        result = self.therapists.update_one(
            {"_id": to_object_id(therapist_id)},
            {"$set": update_data}
        )
        return result.matched_count > 0

    # Bookings

    @store_operation
    def find_bookings_for_doctor(self, doctor_id, expand_client=True):
        """ Bookings assigned to a therapist in store order """
        bookings = list(self.bookings.find({"doctor": {"$in": id_variants(doctor_id)}}))
        if expand_client:
            self._expand_clients(bookings)
        return bookings

    def _expand_clients(self, bookings):
        refs = []
        for booking in bookings:
            ref = booking.get("client")
            if ref is not None and not isinstance(ref, dict):
                refs.append(to_object_id(ref))

        clients = {}
        if refs:
            for client in self.clients.find({"_id": {"$in": refs}}):
                clients[client["_id"]] = client

        for booking in bookings:
            ref = booking.get("client")
            if isinstance(ref, dict):
                continue
            booking["client"] = clients.get(to_object_id(ref)) if ref is not None else None
