class ConflictError(Exception):
    """A write would violate a uniqueness constraint."""


class EmailAlreadyRegisteredError(ConflictError):
    def __init__(self, email: str) -> None:
        super().__init__(f'Email {email} is already registered.')
        self.email = email
