from datetime import datetime, timezone
from werkzeug.security import generate_password_hash

THERAPISTS_COLLECTION = "therapists"

DEFAULT_ROLE = "Licensed Therapist"
DEFAULT_STATUS = "Available"

PROFILE_FIELDS = ("name", "email", "role", "status")
EDITABLE_FIELDS = ("name", "role", "status")


class Therapist:
    def __init__(self, name, email, password, license=None, expertise=None,
                years=None, institution=None, credentials_url="",
                role=DEFAULT_ROLE, status=DEFAULT_STATUS):
        self.name = name
        self.email = email
        self.password = generate_password_hash(password)  # Never stored as given
        self.license = license
        self.expertise = Therapist.normalize_expertise(expertise)
        self.years = years
        self.institution = institution
        self.credentials_url = credentials_url or ""
        self.role = role
        self.status = status
        self.created_at = datetime.now(timezone.utc)
        self.updated_at = self.created_at

    def to_document(self):
        """ Document to insert into the therapists collection """
        return dict(self.__dict__)

    @staticmethod
    def normalize_expertise(expertise):
        """ A lone tag becomes a one-element list; order is kept """
        if expertise is None:
            return []
        if isinstance(expertise, str):
            expertise = [expertise]
        return [tag.strip() for tag in expertise if tag and tag.strip()]

    @staticmethod
    def public_document(document):
        """ Stored document without the password hash """
        return {key: value for key, value in document.items() if key != "password"}

    @staticmethod
    def profile(document):
        """ Profile view with display defaults for unset role/status """
        return {
            "name": document.get("name"),
            "email": document.get("email"),
            "role": document.get("role") or DEFAULT_ROLE,
            "status": document.get("status") or DEFAULT_STATUS,
        }

    def __repr__(self):
        return f"<Therapist {self.name} ({self.email})>"
