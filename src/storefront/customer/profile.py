"""User profile maintenance and removal commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.customer.user import User
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of=User)
class UpdateUserProfile:
    """Change a user's name or email. Omitted fields are left as they are."""

    user_id: Identifier(required=True)
    name: String(max_length=100)
    email: String(max_length=254)


@storefront.command(part_of=User)
class RemoveUser:
    """Delete a user. Their orders stay, keyed by the old user id."""

    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageUserHandler:
    @handle(UpdateUserProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.resolve(command.user_id)

        changes = {}
        if command.name is not None:
            changes["name"] = command.name
        if command.email is not None:
            owner = repo.find_by_email(command.email)
            if owner is not None and owner.id != user.id:
                raise ValidationError({"email": [f"Email already registered: {command.email}"]})
            changes["email"] = command.email

        user.update_profile(**changes)
        repo.add(user)

        logger.info("user_profile_updated", user_id=str(user.id), fields=sorted(changes))

    @handle(RemoveUser)
    def remove_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.resolve(command.user_id)
        repo.remove(user)

        logger.info("user_removed", user_id=str(user.id))
