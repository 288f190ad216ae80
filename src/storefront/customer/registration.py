"""User registration command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.customer.user import User
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of=User)
class RegisterUser:
    """Create a new user account."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        # Email uniqueness spans aggregates, so it is checked against the repository
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": [f"Email already registered: {command.email}"]})

        user = User.register(name=command.name, email=command.email)
        repo.add(user)

        logger.info("user_registered", user_id=str(user.id))
        return str(user.id)
