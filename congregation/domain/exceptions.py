"""
Domain exceptions raised by repositories.

Repositories translate storage-specific failures (e.g. unique constraint
violations) into these so the application layer never imports SQLAlchemy.
"""


class DomainError(Exception):
    pass


class DuplicateChurchCodeError(DomainError):
    """Raised when a church is inserted with a code that is already taken"""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Church code '{code}' already exists")


class DuplicateEmailError(DomainError):
    """Raised when a user is inserted with an email that is already registered"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email '{email}' already registered")


class DuplicateChurchMemberError(DomainError):
    """Raised when a user already has a membership row for the church"""

    def __init__(self, church_id, user_id):
        self.church_id = church_id
        self.user_id = user_id
        super().__init__(f"User {user_id} already has a membership in church {church_id}")


class DuplicateEventRegistrationError(DomainError):
    """Raised when a user is registered twice for the same event"""

    def __init__(self, event_id, user_id):
        self.event_id = event_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is already registered for event {event_id}")


class DuplicatePrayerSupporterError(DomainError):
    """Raised when a supporter row already exists for the prayer and user"""

    def __init__(self, prayer_id, user_id):
        self.prayer_id = prayer_id
        self.user_id = user_id
        super().__init__(f"User {user_id} already supports prayer {prayer_id}")
