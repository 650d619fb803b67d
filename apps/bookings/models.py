from datetime import datetime

# Collections
BOOKINGS_COLLECTION = "bookings"
CLIENTS_COLLECTION = "clients"

UNKNOWN_CLIENT = "Unknown"


class Booking:
    """Read-only view over booking documents.

    Bookings are written by the scheduling side of the application; here a
    booking is only ever listed. ``client`` is expected to have been
    expanded by the store: the full client document, or ``None`` when the
    reference did not resolve.
    """

    @staticmethod
    def summary(booking):
        """ {time, client, status} as returned to the therapist """
        client = booking.get("client")
        time = booking.get("time")
        if isinstance(time, datetime):
            time = time.isoformat()
        return {
            "time": time,
            "client": client.get("name") if isinstance(client, dict) else UNKNOWN_CLIENT,
            "status": booking.get("status"),
        }

    @staticmethod
    def unique_client_names(bookings):
        """ Client names in first-seen order, exact duplicates dropped """
        names = []
        seen = set()
        for booking in bookings:
            client = booking.get("client")
            if not isinstance(client, dict):
                continue
            name = client.get("name")
            if not name or name in seen:
                continue
            seen.add(name)
            names.append(name)
        return names
