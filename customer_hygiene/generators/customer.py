"""Synthetic customers with realistic data-quality defects.

Produces Brazilian customers and addresses the way they tend to arrive from
legacy storefront imports: unformatted or invalid CPF/CNPJ, two-line
streets, mobile numbers typed into the fax field, symbols in names and
mixed-case e-mails. Used for sample stores and tests.
"""

from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass, field

from faker import Faker

from customer_hygiene.models.base import Address, Customer
from customer_hygiene.store.memory import InMemoryCustomerStore
from customer_hygiene.validators.tax_id import _cnpj_check_digit, _cpf_check_digit


@dataclass(frozen=True)
class DefectRates:
    """Probability of each defect per generated record (0.0 - 1.0)."""

    invalid_tax_id: float = 0.10
    missing_tax_id: float = 0.05
    cnpj: float = 0.15  # company instead of individual
    short_street: float = 0.10
    phone_in_fax: float = 0.10
    missing_default: float = 0.20
    noisy_name: float = 0.15
    messy_email: float = 0.20
    foreign_address: float = 0.05
    extra_address: float = 0.25

    @classmethod
    def clean(cls) -> "DefectRates":
        """No defects at all: every record passes reconciliation."""
        return cls(**{name: 0.0 for name in cls.__dataclass_fields__})


def _generate_cpf(rng: random.Random) -> str:
    """Random 11-digit CPF with valid check digits."""
    cpf = "".join(str(rng.randint(0, 9)) for _ in range(9))
    for _ in range(2):
        cpf += str(_cpf_check_digit(cpf))
    return cpf


def _generate_cnpj(rng: random.Random) -> str:
    """Random 14-digit CNPJ for headquarters (branch 0001) with valid check digits."""
    cnpj = "".join(str(rng.randint(0, 9)) for _ in range(8)) + "0001"
    for _ in range(2):
        cnpj += str(_cnpj_check_digit(cnpj))
    return cnpj


def _corrupt(digits: str) -> str:
    """Flip the last check digit so the document no longer validates."""
    last = (int(digits[-1]) + 1) % 10
    return digits[:-1] + str(last)


class DirtyCustomerGenerator:
    """Generate customers and their addresses with controlled defects.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    defects : DefectRates | None
        Defect probabilities. Defaults to ``DefectRates()``.
    locale : str
        Faker locale (default ``pt_BR``).
    """

    def __init__(
        self,
        seed: int | None = None,
        defects: DefectRates | None = None,
        locale: str = "pt_BR",
    ) -> None:
        self.fake = Faker(locale)
        self.rng = random.Random(seed)
        if seed is not None:
            self.fake.seed_instance(seed)
        self.defects = defects or DefectRates()
        self._next_address_id = 1

    def generate(self, customer_id: int) -> tuple[Customer, list[Address]]:
        """Generate one customer with one or two addresses."""
        addresses = [self._generate_address(customer_id)]
        if self._roll(self.defects.extra_address):
            addresses.append(self._generate_address(customer_id))

        firstname = self.fake.first_name()
        lastname = self.fake.last_name()
        if self._roll(self.defects.noisy_name):
            firstname = f"{firstname}!"
            lastname = f"#{lastname} (cliente)"

        email = self.fake.email()
        if self._roll(self.defects.messy_email):
            email = f"  {email.upper()} "

        default_id = None if self._roll(self.defects.missing_default) else addresses[0].address_id

        return (
            Customer(
                customer_id=customer_id,
                email=email,
                firstname=firstname,
                lastname=lastname,
                tax_id=self._generate_tax_id(),
                default_billing_address_id=default_id,
                default_shipping_address_id=default_id,
            ),
            addresses,
        )

    def generate_batch(self, count: int, first_id: int = 1) -> Iterator[tuple[Customer, list[Address]]]:
        """Generate ``count`` customers with consecutive ids.

        Yields
        ------
        tuple[Customer, list[Address]]
            A customer and its addresses.
        """
        for customer_id in range(first_id, first_id + count):
            yield self.generate(customer_id)

    def populate(self, store: InMemoryCustomerStore, count: int) -> InMemoryCustomerStore:
        """Fill a store with ``count`` generated customers."""
        for customer, addresses in self.generate_batch(count):
            store.add_customer(customer)
            for address in addresses:
                store.add_address(address)
        return store

    def _roll(self, rate: float) -> bool:
        return self.rng.random() < rate

    def _generate_tax_id(self) -> str | None:
        if self._roll(self.defects.missing_tax_id):
            return None
        digits = _generate_cnpj(self.rng) if self._roll(self.defects.cnpj) else _generate_cpf(self.rng)
        if self._roll(self.defects.invalid_tax_id):
            digits = _corrupt(digits)
        if self.rng.random() < 0.5:
            # half of the records keep whatever mask the storefront applied
            if len(digits) == 11:
                return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
            return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"
        return digits

    def _generate_address(self, customer_id: int) -> Address:
        address_id = self._next_address_id
        self._next_address_id += 1

        mobile = f"{self.rng.randint(11, 99)}9{self.rng.randint(0, 99999999):08d}"
        phone: str | None = f"({mobile[:2]}) {mobile[2:7]} {mobile[7:]}"
        fax: str | None = None
        if self._roll(self.defects.phone_in_fax):
            phone, fax = mobile[2:6], mobile

        street = [
            self.fake.street_name(),
            str(self.rng.randint(1, 9999)),
            self.fake.bairro(),
        ]
        if self._roll(self.defects.short_street):
            street = street[:2]

        country = "BR"
        if self._roll(self.defects.foreign_address):
            country = "PT"

        return Address(
            address_id=address_id,
            customer_id=customer_id,
            country_code=country,
            street_lines=street,
            phone=phone,
            fax=fax,
            city=self.fake.city(),
            region=self.fake.estado_sigla(),
            postcode=self.fake.postcode(),
        )
