"""Customer and delivery details captured at checkout."""

from protean.fields import String, Text

from storefront.domain import storefront

REQUIRED_FIELDS = ("name", "email", "phone", "address")


@storefront.value_object
class CustomerInfo:
    name = String(max_length=255)
    email = String(max_length=254)
    phone = String(max_length=50)
    address = Text()
    notes = Text()

    @classmethod
    def prefilled_from(cls, user, **details):
        """Seed name and email from the signed-in user; ``details`` override or add fields."""
        seeded = {"name": user.full_name or "", "email": user.email or ""}
        seeded.update({key: value for key, value in details.items() if value is not None})
        return cls(**seeded)

    def missing_fields(self) -> list[str]:
        return [field for field in REQUIRED_FIELDS if not (getattr(self, field) or "").strip()]
