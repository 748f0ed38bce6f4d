"""
Format adapters for web_service_client.
"""
from .json_service import JsonService
from .xml_service import XmlService

__all__ = ["JsonService", "XmlService"]
