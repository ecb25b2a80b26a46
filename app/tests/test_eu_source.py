"""EU sanctions source tests"""

import unicodedata

import httpx
import pytest

from app.core.errors import DecodeError, FetchError, ParseError
from app.ingestion.eu_source import EUSanctionsSource, display_name
from conftest import EU_XML, EU_XML_TEXT


class TestEUDecode:
    """Test Windows-1257 decoding"""

    def test_decodes_baltic_characters(self):
        text = EUSanctionsSource.decode(EU_XML)
        assert "Žemaitis" in text
        assert "Kazlauskienė" in text

    def test_utf8_reading_would_corrupt_names(self):
        assert "Žemaitis" not in EU_XML.decode("utf-8", errors="replace")

    def test_undefined_byte_raises_decode_error(self):
        # 0x81 has no mapping in Windows-1257
        with pytest.raises(DecodeError):
            EUSanctionsSource.decode(b"<export>\x81</export>")


class TestEUParse:
    """Test normalization of sanctionEntity elements"""

    @pytest.fixture
    def records(self):
        return EUSanctionsSource.parse(EU_XML_TEXT)

    def test_ids_and_order(self, records):
        assert [r.id for r in records] == ["13", "14", "15"]
        assert records[0].attributes["referenceNumber"] == "EU.27.28"

    def test_first_alias_only(self, records):
        attrs = records[0].attributes
        assert records[0].name == "Jonas Žemaitis"
        assert attrs["firstName"] == "Jonas"
        assert attrs["gender"] == "M"
        assert attrs["strong"] == "true"

    def test_first_regulation_only(self, records):
        attrs = records[0].attributes
        assert attrs["regulation"] == "2022/427 (OJ L87)"
        assert attrs["regulationType"] == "regulation"
        assert attrs["publicationDate"] == "2022-03-15"
        assert attrs["programme"] == "UKR"
        assert attrs["publicationUrl"].startswith("https://eur-lex.europa.eu/")

    def test_type_and_remark(self, records):
        assert records[0].record_type == "person"
        assert records[2].record_type == "enterprise"
        assert records[0].attributes["remark"] == "Former head of state."

    def test_name_composed_from_parts(self, records):
        assert records[1].name == "Ona Kazlauskienė"
        assert records[1].attributes["wholeName"] == "N/A"

    def test_unnamed_entity(self, records):
        assert records[2].name == "Unnamed Entity"

    def test_absent_fields_render_na(self, records):
        attrs = records[2].attributes
        assert attrs["referenceNumber"] == "N/A"
        for key in ("firstName", "lastName", "gender", "strong", "remark", "regulation", "programme", "publicationUrl"):
            assert attrs[key] == "N/A"

    def test_entities_are_not_decoded(self):
        text = '<export><sanctionEntity logicalId="1"><remark>A &amp;nbsp; B</remark></sanctionEntity></export>'
        (record,) = EUSanctionsSource.parse(text)
        assert record.attributes["remark"] == "A &nbsp; B"

    def test_unexpected_root(self):
        with pytest.raises(ParseError):
            EUSanctionsSource.parse("<html><body/></html>")

    def test_empty_document(self):
        with pytest.raises(ParseError):
            EUSanctionsSource.parse("")


class TestDisplayName:
    """Test name derivation"""

    def test_whole_name_wins(self):
        assert display_name("Full Name", "First", "Last") == "Full Name"

    def test_first_and_last(self):
        assert display_name(None, " First ", "Last") == "First Last"

    def test_single_part(self):
        assert display_name(None, None, "Last") == "Last"

    def test_placeholder(self):
        assert display_name(None, None, None) == "Unnamed Entity"
        assert display_name("  ", "", None) == "Unnamed Entity"

    def test_combining_characters_compose(self):
        decomposed = unicodedata.normalize("NFD", "Žemaitis")
        assert decomposed != "Žemaitis"
        assert display_name(decomposed, None, None) == "Žemaitis"
        assert display_name(None, "Jonas", decomposed) == "Jonas Žemaitis"


class TestEUFetch:
    """Test network behaviour of the EU source"""

    @pytest.mark.asyncio
    async def test_fetch_decodes_raw_bytes(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, content=EU_XML, headers={"content-type": "text/xml"})
        )
        records = await EUSanctionsSource(url="https://eu.test/list", transport=transport).fetch()
        assert records[0].name == "Jonas Žemaitis"

    @pytest.mark.asyncio
    async def test_non_2xx_raises_fetch_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(404))
        with pytest.raises(FetchError):
            await EUSanctionsSource(url="https://eu.test/list", transport=transport).fetch()
