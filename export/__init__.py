"""Export module for JSON and XML reviews."""
from export.json_exporter import build_payload, export_json
from export.xml_exporter import build_xml, export_xml

__all__ = ["build_payload", "build_xml", "export_json", "export_xml"]
