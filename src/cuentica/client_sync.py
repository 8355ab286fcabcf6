"""Synchronous Cuéntica API client."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

import httpx

from cuentica.auth import TokenAuth
from cuentica.client_base import (
    ClientConfig,
    RequestDescriptor,
    api_log,
    build_request,
    document_body,
    join_tags,
    parse_binary_response,
    parse_model,
    parse_model_list,
    parse_response,
)
from cuentica.models import (
    Attachment,
    Company,
    Customer,
    Document,
    Expense,
    Invoice,
    PaymentMethod,
    Provider,
    Tag,
    Transfer,
)


class CuenticaClient:
    """Synchronous client for the Cuéntica API.

    Example:
        with CuenticaClient() as client:  # token from CUENTICA_TOKEN
            company = client.get_company()
            invoices = client.get_invoices(
                initial_date="2024-01-01", end_date="2024-12-31"
            )
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = ClientConfig.BASE_URL,
        timeout: float = ClientConfig.DEFAULT_TIMEOUT,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize Cuéntica client.

        Args:
            token: API token. If None, CUENTICA_TOKEN is read from ``environ``
            base_url: Base URL for API (default: https://api.cuentica.com)
            timeout: Request timeout in seconds, applied by the transport
            environ: Environment mapping used for the token fallback
                (default: os.environ)

        Raises:
            CuenticaConfigError: If no token is provided by either source
        """
        self.auth = TokenAuth.resolve(token, environ)
        self._base_url = base_url
        self.timeout = timeout

        api_log.info("Initializing Cuéntica API client")
        self.client = httpx.Client(base_url=self._base_url, timeout=self.timeout)

    @property
    def token(self) -> str:
        """API token used for every request."""
        return self.auth.api_token

    @property
    def base_url(self) -> str:
        """Base URL requests are resolved against."""
        return self._base_url

    def __enter__(self) -> CuenticaClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the HTTP client."""
        api_log.debug("Closing Cuéntica API client")
        self.client.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        """Make a JSON request to the API.

        Args:
            method: HTTP method
            path: API endpoint path
            body: JSON body, sent only when not None
            query: Query parameters; None values are omitted

        Returns:
            Decoded JSON payload, or None for 204 responses

        Raises:
            CuenticaRateLimitError: On 429
            CuenticaAPIError: On other API errors
        """
        descriptor = RequestDescriptor(method, path, body, query)
        request = build_request(self.client, descriptor, self.auth.get_headers())
        response = self.client.send(request)
        return parse_response(response)

    # Company endpoints

    def get_company(self) -> Company | None:
        """Get company information.

        Returns:
            Company details
        """
        return parse_model(Company, self._request("GET", "/company"))

    # Customer endpoints

    def get_customers(
        self,
        page: int = 1,
        page_size: int = 100,
        q: str | None = None,
    ) -> list[Customer] | None:
        """List customers.

        Args:
            page: Page number (default: 1)
            page_size: Number of items per page (default: 100)
            q: Free text search

        Returns:
            Customers on the requested page
        """
        data = self._request(
            "GET",
            "/customer",
            query={"page": page, "page_size": page_size, "q": q},
        )
        return parse_model_list(Customer, data)

    def get_customer(self, customer_id: int) -> Customer | None:
        """Get a specific customer.

        Args:
            customer_id: Customer ID

        Returns:
            Customer details
        """
        return parse_model(Customer, self._request("GET", f"/customer/{customer_id}"))

    def create_customer(self, data: Customer | dict[str, Any]) -> Customer | None:
        """Create a new customer.

        Args:
            data: Customer data, without id

        Returns:
            Created customer
        """
        return parse_model(Customer, self._request("POST", "/customer", body=data))

    def update_customer(
        self, customer_id: int, data: Customer | dict[str, Any]
    ) -> Customer | None:
        """Update an existing customer.

        Args:
            customer_id: Customer ID
            data: Fields to update

        Returns:
            Updated customer
        """
        response = self._request("PUT", f"/customer/{customer_id}", body=data)
        return parse_model(Customer, response)

    def delete_customer(self, customer_id: int) -> None:
        """Delete a customer.

        Args:
            customer_id: Customer ID
        """
        self._request("DELETE", f"/customer/{customer_id}")

    # Provider endpoints

    def get_providers(
        self,
        page: int = 1,
        page_size: int = 100,
        q: str | None = None,
    ) -> list[Provider] | None:
        """List providers.

        Args:
            page: Page number (default: 1)
            page_size: Number of items per page (default: 100)
            q: Free text search

        Returns:
            Providers on the requested page
        """
        data = self._request(
            "GET",
            "/provider",
            query={"page": page, "page_size": page_size, "q": q},
        )
        return parse_model_list(Provider, data)

    def get_provider(self, provider_id: int) -> Provider | None:
        """Get a specific provider."""
        return parse_model(Provider, self._request("GET", f"/provider/{provider_id}"))

    def create_provider(self, data: Provider | dict[str, Any]) -> Provider | None:
        """Create a new provider."""
        return parse_model(Provider, self._request("POST", "/provider", body=data))

    def update_provider(
        self, provider_id: int, data: Provider | dict[str, Any]
    ) -> Provider | None:
        """Update an existing provider."""
        response = self._request("PUT", f"/provider/{provider_id}", body=data)
        return parse_model(Provider, response)

    def delete_provider(self, provider_id: int) -> None:
        """Delete a provider."""
        self._request("DELETE", f"/provider/{provider_id}")

    # Invoice endpoints

    def get_invoices(
        self,
        *,
        page: int | None = None,
        page_size: int | None = None,
        customer: int | None = None,
        min_total_limit: float | None = None,
        max_total_limit: float | None = None,
        initial_date: date | str | None = None,
        end_date: date | str | None = None,
        serie: str | None = None,
        description: str | None = None,
        issued: bool | None = None,
        sort: str | None = None,
        tags: list[str] | None = None,
    ) -> list[Invoice] | None:
        """List invoices.

        Args:
            page: Page number
            page_size: Items per page
            customer: Filter by customer ID
            min_total_limit: Minimum invoice total
            max_total_limit: Maximum invoice total
            initial_date: Start of the date range
            end_date: End of the date range
            serie: Invoice series
            description: Filter by description
            issued: Filter by issued state
            sort: Sort order
            tags: Only invoices carrying these tags; an empty list sends an
                empty filter

        Returns:
            Invoices on the requested page
        """
        params: dict[str, Any] = {
            "page": page,
            "page_size": page_size,
            "customer": customer,
            "min_total_limit": min_total_limit,
            "max_total_limit": max_total_limit,
            "initial_date": initial_date,
            "end_date": end_date,
            "serie": serie,
            "description": description,
            "issued": issued,
            "sort": sort,
            "tags": join_tags(tags),
        }
        data = self._request("GET", "/invoice", query=params)
        return parse_model_list(Invoice, data)

    def get_invoice(self, invoice_id: int) -> Invoice | None:
        """Get a specific invoice.

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice details
        """
        return parse_model(Invoice, self._request("GET", f"/invoice/{invoice_id}"))

    def create_invoice(self, data: Invoice | dict[str, Any]) -> Invoice | None:
        """Create a new invoice.

        Args:
            data: Invoice data, without id

        Returns:
            Created invoice
        """
        return parse_model(Invoice, self._request("POST", "/invoice", body=data))

    def update_invoice(
        self, invoice_id: int, data: Invoice | dict[str, Any]
    ) -> Invoice | None:
        """Update an existing invoice.

        Args:
            invoice_id: Invoice ID
            data: Fields to update

        Returns:
            Updated invoice
        """
        response = self._request("PUT", f"/invoice/{invoice_id}", body=data)
        return parse_model(Invoice, response)

    def delete_invoice(self, invoice_id: int) -> None:
        """Delete an invoice."""
        self._request("DELETE", f"/invoice/{invoice_id}")

    def get_invoice_pdf(self, invoice_id: int) -> bytes:
        """Download the PDF rendering of an invoice.

        Args:
            invoice_id: Invoice ID

        Returns:
            PDF file contents
        """
        descriptor = RequestDescriptor("GET", f"/invoice/{invoice_id}/pdf")
        request = build_request(self.client, descriptor, self.auth.get_headers())
        response = self.client.send(request)
        return parse_binary_response(response)

    # Expense endpoints

    def get_expenses(
        self,
        *,
        page: int | None = None,
        page_size: int | None = None,
        provider: int | None = None,
        min_total_limit: float | None = None,
        max_total_limit: float | None = None,
        initial_date: date | str | None = None,
        end_date: date | str | None = None,
        expense_type: str | None = None,
        investment_type: str | None = None,
        draft: bool | None = None,
        sort: str | None = None,
        tags: list[str] | None = None,
    ) -> list[Expense] | None:
        """List expenses.

        Args:
            page: Page number
            page_size: Items per page
            provider: Filter by provider ID
            min_total_limit: Minimum expense total
            max_total_limit: Maximum expense total
            initial_date: Start of the date range
            end_date: End of the date range
            expense_type: Expense type code
            investment_type: Investment type code
            draft: Filter by draft state
            sort: Sort order
            tags: Only expenses carrying these tags

        Returns:
            Expenses on the requested page
        """
        params: dict[str, Any] = {
            "page": page,
            "page_size": page_size,
            "provider": provider,
            "min_total_limit": min_total_limit,
            "max_total_limit": max_total_limit,
            "initial_date": initial_date,
            "end_date": end_date,
            "expense_type": expense_type,
            "investment_type": investment_type,
            "draft": draft,
            "sort": sort,
            "tags": join_tags(tags),
        }
        data = self._request("GET", "/expense", query=params)
        return parse_model_list(Expense, data)

    def get_expense(self, expense_id: int) -> Expense | None:
        """Get a specific expense."""
        return parse_model(Expense, self._request("GET", f"/expense/{expense_id}"))

    def create_expense(self, data: Expense | dict[str, Any]) -> Expense | None:
        """Create a new expense."""
        return parse_model(Expense, self._request("POST", "/expense", body=data))

    def update_expense(
        self, expense_id: int, data: Expense | dict[str, Any]
    ) -> Expense | None:
        """Update an existing expense."""
        response = self._request("PUT", f"/expense/{expense_id}", body=data)
        return parse_model(Expense, response)

    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        self._request("DELETE", f"/expense/{expense_id}")

    # Document endpoints

    def get_documents(
        self,
        *,
        page: int | None = None,
        page_size: int | None = None,
        sort: str | None = None,
        initial_date: date | str | None = None,
        end_date: date | str | None = None,
        keyword: str | None = None,
        assigned: bool | None = None,
        extension: str | None = None,
        hash: str | None = None,
    ) -> list[Document] | None:
        """List documents.

        Args:
            page: Page number
            page_size: Items per page
            sort: Sort order
            initial_date: Start of the date range
            end_date: End of the date range
            keyword: Free text search
            assigned: Filter by whether the document is linked to an expense
            extension: File extension
            hash: File hash

        Returns:
            Documents on the requested page
        """
        params: dict[str, Any] = {
            "page": page,
            "page_size": page_size,
            "sort": sort,
            "initial_date": initial_date,
            "end_date": end_date,
            "keyword": keyword,
            "assigned": assigned,
            "extension": extension,
            "hash": hash,
        }
        data = self._request("GET", "/document", query=params)
        return parse_model_list(Document, data)

    def get_document(self, document_id: int) -> Document | None:
        """Get a specific document."""
        return parse_model(Document, self._request("GET", f"/document/{document_id}"))

    def create_document(
        self,
        attachment: Attachment | dict[str, Any] | None = None,
        date: date | str | None = None,
        expense_id: int | None = None,
    ) -> Document | None:
        """Create a new document.

        Args:
            attachment: Inline file, see ``prepare_attachment``
            date: Document date
            expense_id: Expense to link the document to

        Returns:
            Created document
        """
        body = document_body(attachment, date, expense_id)
        return parse_model(Document, self._request("POST", "/document", body=body))

    def update_document(
        self,
        document_id: int,
        attachment: Attachment | dict[str, Any] | None = None,
        date: date | str | None = None,
        expense_id: int | None = None,
    ) -> Document | None:
        """Update an existing document.

        Args:
            document_id: Document ID
            attachment: Replacement inline file
            date: Document date
            expense_id: Expense to link the document to

        Returns:
            Updated document
        """
        body = document_body(attachment, date, expense_id)
        response = self._request("PUT", f"/document/{document_id}", body=body)
        return parse_model(Document, response)

    def delete_document(self, document_id: int) -> None:
        """Delete a document."""
        self._request("DELETE", f"/document/{document_id}")

    # Transfer endpoints

    def get_transfers(
        self,
        *,
        page: int | None = None,
        page_size: int | None = None,
        origin_account: int | None = None,
        destination_account: int | None = None,
        payment_method: PaymentMethod | None = None,
        sort: str | None = None,
        min_total_limit: float | None = None,
        max_total_limit: float | None = None,
        initial_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[Transfer] | None:
        """List transfers between accounts.

        Args:
            page: Page number
            page_size: Items per page
            origin_account: Filter by origin account ID
            destination_account: Filter by destination account ID
            payment_method: cash, wire_transfer or promissory_note
            sort: asc or desc
            min_total_limit: Minimum amount
            max_total_limit: Maximum amount
            initial_date: Start of the date range
            end_date: End of the date range

        Returns:
            Transfers on the requested page
        """
        params: dict[str, Any] = {
            "page": page,
            "page_size": page_size,
            "origin_account": origin_account,
            "destination_account": destination_account,
            "payment_method": payment_method,
            "sort": sort,
            "min_total_limit": min_total_limit,
            "max_total_limit": max_total_limit,
            "initial_date": initial_date,
            "end_date": end_date,
        }
        data = self._request("GET", "/transfer", query=params)
        return parse_model_list(Transfer, data)

    def get_transfer(self, transfer_id: int) -> Transfer | None:
        """Get a specific transfer."""
        return parse_model(Transfer, self._request("GET", f"/transfer/{transfer_id}"))

    def create_transfer(self, data: Transfer | dict[str, Any]) -> Transfer | None:
        """Create a new transfer between accounts.

        Args:
            data: Transfer data (amount, date, origin_account,
                destination_account, payment_method)

        Returns:
            Created transfer
        """
        return parse_model(Transfer, self._request("POST", "/transfer", body=data))

    def update_transfer(
        self, transfer_id: int, data: Transfer | dict[str, Any]
    ) -> Transfer | None:
        """Update an existing transfer."""
        response = self._request("PUT", f"/transfer/{transfer_id}", body=data)
        return parse_model(Transfer, response)

    def delete_transfer(self, transfer_id: int) -> None:
        """Delete a transfer."""
        self._request("DELETE", f"/transfer/{transfer_id}")

    # Tag endpoints

    def get_tags(self) -> list[Tag] | None:
        """Get all tags available to categorize invoices and expenses."""
        return parse_model_list(Tag, self._request("GET", "/tag"))
