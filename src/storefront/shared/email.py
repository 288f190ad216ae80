"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_FORBIDDEN_CHARACTERS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def _reject(email):
    raise ValidationError({"email": [f"Invalid email address: {email!r}"]})


@storefront.value_object
class EmailAddress:
    """A structurally valid email address.

    Exactly one @, non-empty local and domain parts, a dotted domain, no
    whitespace, no consecutive dots and none of the characters that need quoting.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            _reject(email)

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            _reject(email)

        if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            _reject(email)

        if "." not in domain_part or ".." in email:
            _reject(email)

        # Domain labels cannot start or end with a hyphen
        if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
            _reject(email)

        if any(ch in email for ch in _FORBIDDEN_CHARACTERS):
            _reject(email)

    @property
    def normalized(self):
        return self.address.strip().lower()
