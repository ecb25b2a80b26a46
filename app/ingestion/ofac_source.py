"""OFAC SDN list source implementation."""

from __future__ import annotations

from typing import List

from lxml import etree

from app.core.config import settings
from app.core.errors import ParseError
from app.core.logging import get_logger
from app.schemas.normalized import NOT_AVAILABLE, UNNAMED_ENTITY, SanctionRecord
from .base import BaseSource, clean_text, join_or_na, or_na, strip_namespaces

log = get_logger("ingestion.ofac")

ROOT_TAG = "sdnList"


class OFACSource(BaseSource):
    """Fetches the OFAC Specially Designated Nationals list (sdn.xml)."""

    name = "ofac"
    default_url = settings.OFAC_URL

    async def fetch(self) -> List[SanctionRecord]:
        body = await self.download()
        records = self.parse(body)
        log.info(f"Fetched {len(records)} records from OFAC")
        return records

    @classmethod
    def parse(cls, body: bytes) -> List[SanctionRecord]:
        parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
        try:
            root = etree.fromstring(body, parser)
        except etree.XMLSyntaxError as exc:
            raise ParseError(f"ofac: malformed XML: {exc}") from exc

        root = strip_namespaces(root)
        if root.tag != ROOT_TAG:
            raise ParseError(f"ofac: expected <{ROOT_TAG}> root, got <{root.tag}>")

        return [cls._normalize(entry) for entry in root.iterfind("sdnEntry")]

    @staticmethod
    def _normalize(entry: etree._Element) -> SanctionRecord:
        sdn_type = clean_text(entry.findtext("sdnType"))
        full_name = f"{clean_text(entry.findtext('firstName'))} {clean_text(entry.findtext('lastName'))}".strip()

        addresses = [
            " ".join(
                part
                for part in (
                    clean_text(address.findtext("address1")),
                    clean_text(address.findtext("city")),
                    clean_text(address.findtext("country")),
                )
                if part
            )
            for address in entry.iterfind("addressList/address")
        ]

        return SanctionRecord(
            id=clean_text(entry.findtext("uid")),
            name=full_name or sdn_type or UNNAMED_ENTITY,
            record_type=sdn_type or NOT_AVAILABLE,
            attributes={
                "programs": join_or_na(p.text for p in entry.iterfind("programList/program")),
                "countries": join_or_na(
                    _item_text(c, "country") for c in entry.iterfind("citizenshipList/citizenship")
                ),
                "addresses": join_or_na(addresses, sep="; "),
                "remarks": or_na(entry.findtext("remarks")),
                "dateOfBirth": join_or_na(d.text for d in entry.iterfind("dateOfBirthList//dateOfBirth")),
            },
        )


def _item_text(element: etree._Element, child: str) -> str:
    """Text of a list item, which is either plain text or a structured element."""
    if len(element):
        return clean_text(element.findtext(child))
    return clean_text(element.text)
