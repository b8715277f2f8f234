"""Customer and address records as read from the host store."""

from dataclasses import dataclass, field


@dataclass
class Address:
    """Customer address.

    ``street_lines`` follows the host platform's multi-line street field:
    line 1 is the street name, line 2 the number and line 3 the complement
    or neighborhood (bairro). Brazilian addresses need all three.
    """

    address_id: int
    customer_id: int  # parent_id
    country_code: str
    street_lines: list[str] = field(default_factory=list)
    vat_id: str | None = None  # formatted CPF/CNPJ
    phone: str | None = None
    fax: str | None = None
    city: str = ""
    region: str = ""
    postcode: str = ""


@dataclass
class Customer:
    """E-commerce customer profile."""

    customer_id: int
    email: str
    firstname: str = ""
    lastname: str = ""
    tax_id: str | None = None  # raw taxvat, digits or already formatted
    default_billing_address_id: int | None = None
    default_shipping_address_id: int | None = None

    @property
    def has_default_billing(self) -> bool:
        return bool(self.default_billing_address_id)

    @property
    def has_tax_id(self) -> bool:
        return bool(self.tax_id)

    def set_default_address(self, address_id: int) -> None:
        """Point both default billing and default shipping at one address."""
        self.default_billing_address_id = address_id
        self.default_shipping_address_id = address_id
