"""EU Financial Sanctions (FSF) list source implementation."""

from __future__ import annotations

import re
import unicodedata
from typing import List, Optional

from lxml import etree

from app.core.config import settings
from app.core.errors import DecodeError, ParseError
from app.core.logging import get_logger
from app.schemas.normalized import UNNAMED_ENTITY, SanctionRecord
from .base import BaseSource, clean_text, or_na, strip_namespaces

log = get_logger("ingestion.eu")

SOURCE_ENCODING = "cp1257"
ROOT_TAG = "export"

# lxml refuses str input that still carries an encoding declaration.
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


class EUSanctionsSource(BaseSource):
    """Fetches the EU consolidated financial sanctions list (XML, Windows-1257)."""

    name = "eu"
    default_url = settings.EU_SANCTIONS_URL

    async def fetch(self) -> List[SanctionRecord]:
        body = await self.download()
        records = self.parse(self.decode(body))
        log.info(f"Fetched {len(records)} records from EU sanctions list")
        return records

    @staticmethod
    def decode(body: bytes) -> str:
        try:
            return body.decode(SOURCE_ENCODING)
        except UnicodeDecodeError as exc:
            raise DecodeError(
                f"eu: invalid {SOURCE_ENCODING} byte 0x{body[exc.start]:02x} at offset {exc.start}"
            ) from exc

    @classmethod
    def parse(cls, text: str) -> List[SanctionRecord]:
        parser = etree.XMLParser(recover=True, resolve_entities=False, no_network=True, huge_tree=True)
        try:
            root = etree.fromstring(_XML_DECLARATION.sub("", text, count=1), parser)
        except etree.XMLSyntaxError as exc:
            raise ParseError(f"eu: malformed XML: {exc}") from exc
        if root is None:
            raise ParseError("eu: document has no root element")

        root = strip_namespaces(root)
        if root.tag != ROOT_TAG:
            raise ParseError(f"eu: expected <{ROOT_TAG}> root, got <{root.tag}>")

        return [cls._normalize(entity) for entity in root.iter("sanctionEntity")]

    @staticmethod
    def _normalize(entity: etree._Element) -> SanctionRecord:
        # Only the first alias and the first regulation are kept.
        alias = entity.find("nameAlias")
        regulation = entity.find("regulation")
        subject_type = entity.find("subjectType")

        first_name = _attr(alias, "firstName")
        last_name = _attr(alias, "lastName")
        whole_name = _attr(alias, "wholeName")

        return SanctionRecord(
            id=clean_text(entity.get("logicalId")),
            name=display_name(whole_name, first_name, last_name),
            record_type=or_na(_attr(subject_type, "code")),
            attributes={
                "referenceNumber": or_na(entity.get("euReferenceNumber")),
                "firstName": or_na(first_name),
                "lastName": or_na(last_name),
                "wholeName": or_na(whole_name),
                "gender": or_na(_attr(alias, "gender")),
                "strong": or_na(_attr(alias, "strong")),
                "remark": or_na(entity.findtext("remark")),
                "regulation": or_na(_attr(regulation, "numberTitle")),
                "regulationType": or_na(_attr(regulation, "regulationType")),
                "publicationDate": or_na(_attr(regulation, "publicationDate")),
                "programme": or_na(_attr(regulation, "programme")),
                "publicationUrl": or_na(
                    regulation.findtext("publicationUrl") if regulation is not None else None
                ),
            },
        )


def display_name(whole_name: Optional[str], first_name: Optional[str], last_name: Optional[str]) -> str:
    """Whole name if present, else "first last", else the unnamed placeholder."""
    whole = _nfkc(whole_name)
    if whole:
        return whole
    composed = f"{_nfkc(first_name)} {_nfkc(last_name)}".strip()
    return composed or UNNAMED_ENTITY


def _nfkc(value: Optional[str]) -> str:
    return unicodedata.normalize("NFKC", clean_text(value))


def _attr(element: Optional[etree._Element], key: str) -> Optional[str]:
    if element is None:
        return None
    return element.get(key)
