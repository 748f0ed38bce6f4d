"""
XML adapter for web_service_client.
"""
from typing import Callable, Optional, TypeVar
from xml.etree.ElementTree import Element, ParseError

import defusedxml.ElementTree as DefusedET
import httpx

from ..core.base_service import WebService
from ..exceptions import WebServiceError

XML_CONTENT_TYPE = "application/xml"

T = TypeVar("T")


class XmlService(WebService):
    """Web service returning XML documents.

    Callers pass an explicit ``parse`` factory that turns the root element
    into their model:

        status = await svc.get_xml("status", Status.from_element, label="get_status")
    """

    def initialize_client(self, client: httpx.AsyncClient) -> None:
        client.headers["Accept"] = XML_CONTENT_TYPE

    async def get_xml(
        self,
        uri: str,
        parse: Callable[[Element], T],
        *,
        label: Optional[str] = None,
    ) -> Optional[T]:
        """GET ``uri`` and build a value from the root element of the response."""
        response = await self._send("GET", uri, label=label)
        if not response.content.strip():
            return None
        try:
            root = DefusedET.fromstring(response.content)
        except (ParseError, ValueError) as e:
            raise WebServiceError(
                f"Invalid XML response: {e}",
                str(response.request.url),
                response.status_code,
                response.reason_phrase,
                label or "GET",
            ) from e
        return parse(root)
