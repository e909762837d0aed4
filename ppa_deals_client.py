"""PPA Deals API client.

A thin wrapper around the deals REST API using the ``requests``
library.  The client exposes one method per operation:

* :meth:`list_deals` – return deals, optionally filtered by field.
* :meth:`get_deal` – fetch a single deal by its identifier.
* :meth:`create_deal` – create a deal from a full payload.
* :meth:`update_deal` – replace every field of an existing deal.
* :meth:`delete_deal` – delete a deal and return the remaining ones.

Every method returns a ``(data, error)`` tuple.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with keys ``status_code`` and ``message``.  The message is
taken from the ``error`` field the API puts in its JSON responses.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class DealsAPI:
    """Client for the PPA deals API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "/api/deals",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
            prefix: Path of the deals collection on the server.
            timeout: Timeout in seconds applied to every request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.prefix = "/" + prefix.strip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request and unwrap the ``data`` envelope.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url`.
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = self._error_message(exc.response) or str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}
        try:
            body = response.json()
        except ValueError:
            logger.error("API returned a non JSON body for %s %s", method, url)
            return None, {"status_code": response.status_code, "message": "Invalid JSON response"}
        if isinstance(body, dict) and "data" in body:
            return body["data"], None
        return body, None

    @staticmethod
    def _error_message(response: Optional[requests.Response]) -> str:
        if response is None:
            return ""
        try:
            err_json = response.json()
        except ValueError:
            return response.text
        if isinstance(err_json, dict):
            return err_json.get("error") or err_json.get("detail") or str(err_json)
        return str(err_json)

    def _item_path(self, deal_id: Any) -> str:
        return f"{self.prefix}/{deal_id}"

    # ------------------------------------------------------------------
    # Deal operations
    # ------------------------------------------------------------------
    def list_deals(self, **filters: Any) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve deals, keeping those whose fields equal ``filters``.

        Example: ``client.list_deals(technology="Solar")``.
        """
        data, error = self._request("GET", self.prefix, params=filters or None)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_deal(self, deal_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve a single deal by ID.

        The API answers with a one‑element list; the deal itself is
        returned here.
        """
        data, error = self._request("GET", self._item_path(deal_id))
        if error:
            return None, error
        if isinstance(data, list):
            return (data[0] if data else None), None
        return data, None

    def create_deal(self, payload: Mapping[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a deal and return it with the id assigned by the server."""
        return self._request("POST", self.prefix, json_body=dict(payload))

    def update_deal(
        self, deal_id: Any, payload: Mapping[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Replace every field of deal ``deal_id`` with ``payload``."""
        return self._request("PATCH", self._item_path(deal_id), json_body=dict(payload))

    def delete_deal(self, deal_id: Any) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Delete a deal.

        Returns:
            A tuple ``(remaining, error)`` where ``remaining`` lists the
            deals left on the server.
        """
        data, error = self._request("DELETE", self._item_path(deal_id))
        if error:
            return [], error
        return data if isinstance(data, list) else [], None
