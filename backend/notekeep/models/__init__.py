# Models package init
# Both models must be registered before either mapper is configured,
# since User.notes and Note.user refer to each other by name.
from notekeep.models.note import Note
from notekeep.models.user import User

__all__ = ["Note", "User"]
