"""Pydantic models for Cuéntica API resources.

Every field is optional and loosely typed, and unknown fields are kept, so a
payload returned by the API survives ``model_validate`` /
``model_dump(exclude_unset=True)`` unchanged whatever shape it takes.
``InvoiceLine`` and ``ExpenseLine`` are for building request bodies; lines
decoded from a response stay plain dicts.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

PaymentMethod = Literal["cash", "wire_transfer", "promissory_note"]


class CuenticaModel(BaseModel):
    """Base model for API resources."""

    model_config = ConfigDict(extra="allow")


class Attachment(CuenticaModel):
    """File embedded inline in a document body."""

    filename: str | None = None
    data: str | None = None  # base64
    mimetype: str | None = None


class Company(CuenticaModel):
    id: Any = None
    name: Any = None
    business_name: Any = None
    tradename: Any = None
    cif: Any = None
    address: Any = None
    town: Any = None
    postal_code: Any = None
    region: Any = None
    country_code: Any = None
    email: Any = None
    phone: Any = None
    web: Any = None


class Customer(CuenticaModel):
    id: Any = None
    name: Any = None
    surname_1: Any = None
    surname_2: Any = None
    business_name: Any = None
    business_type: Any = None
    tradename: Any = None
    cif: Any = None
    address: Any = None
    town: Any = None
    postal_code: Any = None
    region: Any = None
    country_code: Any = None
    email: Any = None
    phone: Any = None
    web: Any = None
    personal_comment: Any = None


class Provider(CuenticaModel):
    id: Any = None
    name: Any = None
    surname_1: Any = None
    surname_2: Any = None
    business_name: Any = None
    business_type: Any = None
    tradename: Any = None
    cif: Any = None
    address: Any = None
    town: Any = None
    postal_code: Any = None
    region: Any = None
    country_code: Any = None
    email: Any = None
    phone: Any = None
    web: Any = None
    personal_comment: Any = None


class InvoiceLine(CuenticaModel):
    concept: Any = None
    quantity: Any = None
    amount: Any = None
    discount: Any = None
    tax: Any = None
    surcharge: Any = None
    retention: Any = None
    sell_type: Any = None


class Invoice(CuenticaModel):
    id: Any = None
    customer: Any = None
    date: Any = None
    serie: Any = None
    number: Any = None
    issued: Any = None
    description: Any = None
    annotations: Any = None
    invoice_lines: Any = None
    tags: Any = None

    def totals(self) -> tuple[float, float]:
        """Return (net, tax) summed over the invoice lines.

        Lines may be plain dicts, as decoded from the API, or ``InvoiceLine``
        models built by the caller.
        """
        net = 0.0
        tax = 0.0
        for line in self.invoice_lines or []:
            if isinstance(line, BaseModel):
                line = line.model_dump()
            line_total = float(line.get("amount") or 0) * float(
                line.get("quantity") or 0
            )
            net += line_total
            tax += line_total * float(line.get("tax") or 0) / 100
        return net, tax


class ExpenseLine(CuenticaModel):
    description: Any = None
    base: Any = None
    tax: Any = None
    retention: Any = None
    surcharge: Any = None
    expense_type: Any = None
    investment: Any = None
    imputation: Any = None


class Expense(CuenticaModel):
    id: Any = None
    provider: Any = None
    date: Any = None
    document_number: Any = None
    document_type: Any = None
    draft: Any = None
    annotations: Any = None
    expense_lines: Any = None
    tags: Any = None


class Document(CuenticaModel):
    id: Any = None
    date: Any = None
    expense_id: Any = None
    filename: Any = None
    extension: Any = None
    hash: Any = None
    assigned: Any = None


class Transfer(CuenticaModel):
    id: Any = None
    amount: Any = None
    date: Any = None
    concept: Any = None
    origin_account: Any = None
    destination_account: Any = None
    payment_method: Any = None


class Tag(CuenticaModel):
    id: Any = None
    name: Any = None
