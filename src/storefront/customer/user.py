"""User aggregate: the person an order is placed for."""

from datetime import datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, String, ValueObject

from storefront.domain import storefront
from storefront.shared.email import EmailAddress
from storefront.shared.errors import UserNotFound

_UNSET = object()


@storefront.aggregate
class User:
    """A registered storefront user.

    Orders keep only the user's id plus a snapshot of the contact details given
    at checkout, so later edits to a user never rewrite order history.
    """

    name: String(required=True, max_length=100)
    email: ValueObject(EmailAddress, required=True)
    registered_at: DateTime(default=datetime.now)

    @classmethod
    def register(cls, name, email):
        now = datetime.now()
        user = cls(name=name.strip(), email=EmailAddress(address=email.strip()), registered_at=now)
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=user.name,
                email=user.email.address,
                registered_at=now,
            )
        )
        return user

    def update_profile(self, name=_UNSET, email=_UNSET):
        """Change the user's name or email. Orders already placed keep their snapshot."""
        if name is not _UNSET:
            self.name = name.strip() if name else name
        if email is not _UNSET:
            self.email = EmailAddress(address=email.strip() if email else email)

        self.raise_(
            UserProfileUpdated(
                user_id=self.id,
                name=self.name,
                email=self.email.address,
                updated_at=datetime.now(),
            )
        )


@storefront.event(part_of=User)
class UserRegistered:
    """A new user account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of=User)
class UserProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    updated_at: DateTime(required=True)


@storefront.repository(part_of=User)
class UserRepository:
    def resolve(self, user_id) -> User:
        """Load a user by id, raising `UserNotFound` when there is none."""
        if not user_id:
            raise UserNotFound(user_id)
        try:
            return self.get(str(user_id))
        except ObjectNotFoundError as exc:
            raise UserNotFound(user_id) from exc

    def find_by_email(self, email):
        wanted = email.strip().lower()
        return next((user for user in self.list_all() if user.email.normalized == wanted), None)

    def remove(self, user: User) -> None:
        self._dao.delete(user)

    def list_all(self):
        return sorted(self._dao.query.limit(None).all().items, key=lambda user: user.registered_at)
