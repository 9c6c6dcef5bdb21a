class MaktabError(Exception):
    """Base class for errors raised by the service layer."""


class StorageError(MaktabError):
    """The backing store could not be read or written."""


class DuplicateStudentError(MaktabError):
    """A student with this contact number already exists."""

    def __init__(self, contact: str):
        super().__init__(f"Student with contact '{contact}' already exists.")
        self.contact = contact
