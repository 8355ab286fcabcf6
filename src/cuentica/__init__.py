"""cuentica - Python client for the Cuéntica accounting API."""

import logging

from cuentica._version import __version__
from cuentica.client_async import AsyncCuenticaClient
from cuentica.client_base import prepare_attachment
from cuentica.client_sync import CuenticaClient
from cuentica.exceptions import (
    CuenticaAPIError,
    CuenticaConfigError,
    CuenticaRateLimitError,
)
from cuentica.models import (
    Attachment,
    Company,
    Customer,
    Document,
    Expense,
    ExpenseLine,
    Invoice,
    InvoiceLine,
    Provider,
    Tag,
    Transfer,
)

logging.getLogger("cuentica").addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "CuenticaClient",
    "AsyncCuenticaClient",
    "prepare_attachment",
    "CuenticaAPIError",
    "CuenticaConfigError",
    "CuenticaRateLimitError",
    "Attachment",
    "Company",
    "Customer",
    "Document",
    "Expense",
    "ExpenseLine",
    "Invoice",
    "InvoiceLine",
    "Provider",
    "Tag",
    "Transfer",
]
