"""Shared fixtures: sample documents and an in-memory source."""

import asyncio
from typing import List, Optional

import pytest

from app.ingestion.base import BaseSource
from app.schemas.normalized import SanctionRecord

OFAC_XML = b"""<?xml version="1.0" standalone="yes"?>
<sdnList xmlns="https://sanctionslistservice.ofac.treas.gov/api/PublicationPreview/exports/XML">
  <publshInformation><Publish_Date>01/02/2024</Publish_Date></publshInformation>
  <sdnEntry>
    <uid>36</uid>
    <lastName>AEROCARIBBEAN AIRLINES</lastName>
    <sdnType>Entity</sdnType>
    <programList><program>CUBA</program></programList>
    <addressList>
      <address><uid>25</uid><city>Havana</city><country>Cuba</country></address>
    </addressList>
  </sdnEntry>
  <sdnEntry>
    <uid>173</uid>
    <firstName>John</firstName>
    <lastName>SMITH</lastName>
    <sdnType>Individual</sdnType>
    <programList><program>SDGT</program><program>IRAN</program><program>CUBA</program></programList>
    <citizenshipList>
      <citizenship><uid>1</uid><country>Iran</country><mainEntry>true</mainEntry></citizenship>
      <citizenship><uid>2</uid><country>Iraq</country><mainEntry>false</mainEntry></citizenship>
    </citizenshipList>
    <addressList>
      <address><uid>3</uid><address1>1 Main St</address1><city>Tehran</city><country>Iran</country></address>
      <address><uid>4</uid><city>Baghdad</city><country>Iraq</country></address>
    </addressList>
    <dateOfBirthList>
      <dateOfBirthItem><uid>5</uid><dateOfBirth>1960</dateOfBirth><mainEntry>true</mainEntry></dateOfBirthItem>
      <dateOfBirthItem><uid>6</uid><dateOfBirth>1962</dateOfBirth><mainEntry>false</mainEntry></dateOfBirthItem>
    </dateOfBirthList>
    <remarks>  Linked to SMITH TRADING.  </remarks>
  </sdnEntry>
  <sdnEntry>
    <uid>200</uid>
    <sdnType>Vessel</sdnType>
  </sdnEntry>
</sdnList>
"""

EU_XML_TEXT = """<?xml version="1.0" encoding="windows-1257"?>
<export xmlns="http://eu.europa.ec/fpi/fsd/export" generationDate="2024-01-02T10:00:00">
  <sanctionEntity designationDate="2022-03-15" logicalId="13" euReferenceNumber="EU.27.28">
    <remark>  Former head of state.  </remark>
    <regulation regulationType="regulation" publicationDate="2022-03-15" numberTitle="2022/427 (OJ L87)" programme="UKR">
      <publicationUrl>https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:32022R0427</publicationUrl>
    </regulation>
    <regulation regulationType="amendment" publicationDate="2023-01-01" numberTitle="2023/1" programme="RUS"/>
    <subjectType code="person" classificationCode="P"/>
    <nameAlias firstName="Jonas" lastName="Žemaitis" wholeName="Jonas Žemaitis" gender="M" strong="true"/>
    <nameAlias firstName="J." lastName="Zemaitis" wholeName="J. Zemaitis" gender="M" strong="false"/>
  </sanctionEntity>
  <sanctionEntity logicalId="14" euReferenceNumber="EU.1.2">
    <subjectType code="person"/>
    <nameAlias firstName="Ona" lastName="Kazlauskienė" gender="F"/>
  </sanctionEntity>
  <sanctionEntity logicalId="15">
    <subjectType code="enterprise"/>
  </sanctionEntity>
</export>
"""

EU_XML = EU_XML_TEXT.encode("cp1257")


def make_record(record_id: str, name: str, **attributes: str) -> SanctionRecord:
    return SanctionRecord(id=record_id, name=name, record_type="Individual", attributes=attributes)


class StubSource(BaseSource):
    """Source returning canned records, or raising, optionally held on a gate."""

    default_url = "https://example.invalid/list.xml"

    def __init__(
        self,
        name: str = "ofac",
        records: Optional[List[SanctionRecord]] = None,
        error: Optional[Exception] = None,
    ):
        super().__init__()
        self.name = name
        self.records = records or []
        self.error = error
        self.calls = 0
        self.gate: Optional[asyncio.Event] = None

    async def fetch(self) -> List[SanctionRecord]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.records)


@pytest.fixture
def ofac_records() -> List[SanctionRecord]:
    return [
        make_record("1", "John Smith", countries="Iran", programs="SDGT"),
        make_record("2", "Johnny Walker", countries="Iraq", programs="IRAN"),
        make_record("3", "Maria Johns", countries="Cuba", programs="CUBA"),
        make_record("4", "Ali Hassan", countries="Syria", programs="SYRIA"),
    ]
